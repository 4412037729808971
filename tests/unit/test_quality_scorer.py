import pytest

from docgate.quality.models import (
    BINARY_CONTENT,
    INSUFFICIENT_PARAGRAPHS,
    TEXT_TOO_SHORT,
    XML_ARTIFACTS,
    QualityMetrics,
)
from docgate.quality.scorer import build_warnings, decide, failed_gate_checks


def _metrics(**overrides: object) -> QualityMetrics:
    values: dict[str, object] = {
        "character_count": 1500,
        "word_count": 250,
        "alphabetic_ratio": 0.85,
        "paragraph_count": 4,
        "semantic_paragraph_count": 4,
        "effective_paragraph_count": 4,
        "has_sentence_markers": True,
        "quality_score": 100,
    }
    values.update(overrides)
    return QualityMetrics(**values)  # type: ignore[arg-type]


class TestFailedGateChecks:
    def test_passing_metrics_have_no_failures(self) -> None:
        assert failed_gate_checks(_metrics()) == ()

    def test_boundaries_are_inclusive(self) -> None:
        metrics = _metrics(
            character_count=800, alphabetic_ratio=0.7, effective_paragraph_count=2
        )
        assert failed_gate_checks(metrics) == ()

    def test_binary_ratio_at_threshold_fails(self) -> None:
        assert failed_gate_checks(_metrics(binary_ratio=0.3)) == (BINARY_CONTENT,)

    def test_binary_signature_is_not_a_gate_condition(self) -> None:
        assert failed_gate_checks(_metrics(has_binary_signature=True)) == ()

    def test_xml_artifacts_fail(self) -> None:
        assert failed_gate_checks(_metrics(xml_artifacts=True)) == (XML_ARTIFACTS,)

    def test_more_characters_never_adds_a_failure(self) -> None:
        assert failed_gate_checks(_metrics(character_count=799)) == (TEXT_TOO_SHORT,)
        assert failed_gate_checks(_metrics(character_count=800)) == ()


class TestDecide:
    def test_pass(self) -> None:
        decision = decide(_metrics())
        assert decision.passes_validation
        assert not decision.format_only_violation
        assert decision.error is None
        assert decision.warnings == ()

    def test_paragraph_failure_alone_is_format_only(self) -> None:
        metrics = _metrics(
            paragraph_count=1,
            semantic_paragraph_count=1,
            effective_paragraph_count=1,
            detected_issues=(INSUFFICIENT_PARAGRAPHS,),
        )
        decision = decide(metrics)
        assert not decision.passes_validation
        assert decision.format_only_violation
        assert decision.error == INSUFFICIENT_PARAGRAPHS

    def test_paragraph_failure_with_content_failure_is_not_format_only(self) -> None:
        metrics = _metrics(
            character_count=300,
            effective_paragraph_count=1,
            detected_issues=(TEXT_TOO_SHORT, INSUFFICIENT_PARAGRAPHS),
        )
        decision = decide(metrics)
        assert not decision.passes_validation
        assert not decision.format_only_violation
        assert decision.error == "text_too_short, insufficient_paragraphs"

    @pytest.mark.parametrize(
        "content_failure",
        [
            {"xml_artifacts": True},
            {"binary_ratio": 0.3},
            {"alphabetic_ratio": 0.69},
            {"has_sentence_markers": False},
        ],
    )
    def test_paragraph_failure_with_any_content_failure_is_not_format_only(
        self, content_failure: dict[str, object]
    ) -> None:
        decision = decide(_metrics(effective_paragraph_count=1, **content_failure))
        assert not decision.passes_validation
        assert not decision.format_only_violation

    def test_error_lists_failed_checks_not_informational_tags(self) -> None:
        metrics = _metrics(
            effective_paragraph_count=1,
            has_binary_signature=True,
            detected_issues=(INSUFFICIENT_PARAGRAPHS, BINARY_CONTENT),
        )
        decision = decide(metrics)
        assert decision.format_only_violation
        assert decision.error == INSUFFICIENT_PARAGRAPHS

    def test_empty_text_reports_only_text_too_short(self) -> None:
        decision = decide(_metrics(character_count=0, effective_paragraph_count=0))
        assert decision.error == TEXT_TOO_SHORT

    def test_error_names_the_failed_check(self) -> None:
        decision = decide(_metrics(xml_artifacts=True))
        assert decision.error == XML_ARTIFACTS

    def test_format_only_never_set_on_pass(self) -> None:
        assert not decide(_metrics(effective_paragraph_count=2)).format_only_violation


class TestBuildWarnings:
    def test_short_document_warning(self) -> None:
        warnings = build_warnings(_metrics(character_count=900))
        assert len(warnings) == 1
        assert "900 characters" in warnings[0]

    def test_weak_structure_warning_needs_both_counts_low(self) -> None:
        assert build_warnings(_metrics(paragraph_count=1, semantic_paragraph_count=3)) == ()
        warnings = build_warnings(_metrics(paragraph_count=2, semantic_paragraph_count=1))
        assert len(warnings) == 1
        assert "paragraph structure" in warnings[0]

    def test_low_alpha_and_missing_markers(self) -> None:
        warnings = build_warnings(_metrics(alphabetic_ratio=0.5, has_sentence_markers=False))
        assert len(warnings) == 2
