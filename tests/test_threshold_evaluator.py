"""Tests for threshold_evaluator."""

from __future__ import annotations

from models import Configuration, Severity
from threshold_evaluator import ThresholdEvaluator, Verdict


def test_below_error_threshold_is_error_only() -> None:
    evaluator = ThresholdEvaluator(Configuration(warn=100, error=10))

    verdict = evaluator.evaluate(9)

    assert verdict == Verdict(Severity.ERROR, 10, 9)


def test_equal_to_error_threshold_is_warn() -> None:
    evaluator = ThresholdEvaluator(Configuration(warn=100, error=10))

    verdict = evaluator.evaluate(10)

    assert verdict is not None
    assert verdict.severity is Severity.WARN
    assert verdict.threshold == 100


def test_equal_to_warn_threshold_passes() -> None:
    evaluator = ThresholdEvaluator(Configuration(warn=100, error=10))

    assert evaluator.evaluate(100) is None
    assert evaluator.evaluate(5000) is None


def test_error_checked_first_when_thresholds_inverted() -> None:
    evaluator = ThresholdEvaluator(Configuration(warn=10, error=100))

    assert evaluator.evaluate(5).severity is Severity.ERROR
    assert evaluator.evaluate(50).severity is Severity.ERROR
    assert evaluator.evaluate(100) is None


def test_zero_thresholds_never_trigger() -> None:
    evaluator = ThresholdEvaluator(Configuration())

    assert evaluator.evaluate(0) is None


def test_describe_names_import_and_threshold() -> None:
    reason = Verdict(Severity.ERROR, 10, 5).describe("github.com/lowstars/pkg")

    assert reason == "github.com/lowstars/pkg has 5 stars, below the error threshold of 10"
    assert "warn threshold of 100" in Verdict(Severity.WARN, 100, 50).describe("x")
