class ApprovedQueueError(Exception):
    """Raised when the approved-files queue cannot be read or written."""
