from docgate.quality.fingerprint import validation_hash


class TestValidationHash:
    def test_empty_string(self) -> None:
        assert validation_hash("") == "0"

    def test_known_values(self) -> None:
        assert validation_hash("a") == "61"
        assert validation_hash("ab") == "c21"
        assert validation_hash("hello") == "5e918d2"

    def test_negative_hash_uses_absolute_value(self) -> None:
        assert validation_hash("polygenelubricants") == "80000000"

    def test_astral_characters_hash_as_surrogate_pairs(self) -> None:
        assert validation_hash("\U0001f600") == "1b0d63"

    def test_deterministic(self) -> None:
        text = "Quarterly report.\n\nSecond paragraph."
        assert validation_hash(text) == validation_hash(text)

    def test_single_character_change_changes_hash(self) -> None:
        assert validation_hash("Quarterly report.") != validation_hash("Quarterly report!")

    def test_collisions_are_possible(self) -> None:
        assert validation_hash("Aa") == validation_hash("BB")
