"""Evaluation of a trained classifier against labeled test posts.

Runs ``predict()`` over every test post, records each outcome and
summarizes prediction quality as accuracy, per-tag precision/recall/F1
and a confusion matrix.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from .classifier import NaiveBayesClassifier
from .models import Post, PredictionRecord
from .reporting import format_number


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------

@dataclass
class ClassificationMetrics:
    """Per-tag prediction quality over a test set.

    Attributes:
        accuracy: Fraction of posts whose predicted tag was correct.
        per_class: Tag -> {"precision", "recall", "f1"}.
        macro_f1: Unweighted mean F1 across tags.
        confusion_matrix: Correct tag -> predicted tag -> count.
        support: Correct tag -> number of test posts.
    """

    accuracy: float = 0.0
    per_class: dict[str, dict[str, float]] = field(default_factory=dict)
    macro_f1: float = 0.0
    confusion_matrix: dict[str, dict[str, int]] = field(default_factory=dict)
    support: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "accuracy": round(self.accuracy, 4),
            "macro_f1": round(self.macro_f1, 4),
            "per_class": {
                tag: {name: round(value, 4) for name, value in scores.items()}
                for tag, scores in self.per_class.items()
            },
            "confusion_matrix": self.confusion_matrix,
            "support": self.support,
        }

    def summary(self) -> str:
        """Accuracy, macro F1 and a per-tag table as plain text."""
        lines = [
            f"Accuracy: {self.accuracy:.2%}",
            f"Macro F1: {self.macro_f1:.4f}",
            "",
            f"{'Tag':<20} {'Precision':>10} {'Recall':>10} {'F1':>10} {'Support':>10}",
        ]
        for tag, scores in sorted(self.per_class.items()):
            lines.append(
                f"{tag:<20} {scores['precision']:>10.4f} {scores['recall']:>10.4f} "
                f"{scores['f1']:>10.4f} {self.support.get(tag, 0):>10}"
            )
        return "\n".join(lines)


def _ratio(numerator: int | float, denominator: int | float) -> float:
    return numerator / denominator if denominator else 0.0


def compute_metrics(y_true: list[str], y_pred: list[str]) -> ClassificationMetrics:
    """Score predicted tags against the correct ones.

    Raises:
        ValueError: If the two lists differ in length.
    """
    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")

    pairs = Counter(zip(y_true, y_pred))
    tags = sorted(set(y_true) | set(y_pred))
    support = Counter(y_true)
    predicted = Counter(y_pred)

    per_class: dict[str, dict[str, float]] = {}
    for tag in tags:
        hits = pairs[(tag, tag)]
        precision = _ratio(hits, predicted[tag])
        recall = _ratio(hits, support[tag])
        per_class[tag] = {
            "precision": precision,
            "recall": recall,
            "f1": _ratio(2 * precision * recall, precision + recall),
        }

    return ClassificationMetrics(
        accuracy=_ratio(sum(pairs[(tag, tag)] for tag in tags), len(y_true)),
        per_class=per_class,
        macro_f1=_ratio(sum(s["f1"] for s in per_class.values()), len(tags)),
        confusion_matrix={
            true: {pred: pairs[(true, pred)] for pred in tags} for true in tags
        },
        support=dict(support),
    )


# ---------------------------------------------------------------------------
# Test-set evaluation
# ---------------------------------------------------------------------------

@dataclass
class EvaluationResult:
    """Per-post predictions on a test set plus summary metrics."""

    trained_on: int
    records: list[PredictionRecord] = field(default_factory=list)
    metrics: ClassificationMetrics = field(default_factory=ClassificationMetrics)

    @property
    def num_correct(self) -> int:
        return sum(1 for r in self.records if r.is_correct)

    @property
    def num_predicted(self) -> int:
        return len(self.records)

    @property
    def accuracy(self) -> float:
        return self.num_correct / self.num_predicted if self.records else 0.0

    def to_dict(self) -> dict:
        return {
            "trained_on": self.trained_on,
            "predictions": [r.to_dict() for r in self.records],
            "correct": self.num_correct,
            "total": self.num_predicted,
            "metrics": self.metrics.to_dict(),
        }

    def to_text(self, precision: int = 3) -> str:
        """Render the test report in the plain-text layout."""
        lines = [f"trained on {self.trained_on} examples", "", "test data:"]
        for r in self.records:
            lines.append(
                f"  correct = {r.correct}, predicted = {r.predicted}, "
                f"log-probability score = {format_number(r.log_score, precision)}"
            )
            lines.append(f"  content = {r.content}")
            lines.append("")
        lines.append(
            f"performance: {self.num_correct} / {self.num_predicted} "
            "posts predicted correctly"
        )
        return "\n".join(lines) + "\n"


def evaluate(model: NaiveBayesClassifier, posts: Iterable[Post]) -> EvaluationResult:
    """Predict every post in ``posts`` and score the predictions.

    Args:
        model: A trained classifier. It is only read, never modified.
        posts: Labeled test posts.

    Returns:
        EvaluationResult with one record per post, in input order.

    Raises:
        EmptyModelError: If ``model`` has no trained tags and ``posts``
            is not empty.
    """
    records: list[PredictionRecord] = []
    for post in posts:
        prediction = model.predict(post.content)
        records.append(PredictionRecord(
            correct=post.tag,
            predicted=prediction.tag,
            log_score=prediction.log_score,
            content=post.content,
        ))

    metrics = compute_metrics(
        [r.correct for r in records],
        [r.predicted for r in records],
    )
    return EvaluationResult(
        trained_on=model.total_posts,
        records=records,
        metrics=metrics,
    )
