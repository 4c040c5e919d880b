"""Training diagnostics built from a trained classifier.

Reports read the model through its accessors and never modify it.
Floats are kept exact in the report objects and only rounded when
rendered as text.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .classifier import NaiveBayesClassifier
from .models import Post


def format_number(value: float, precision: int = 3) -> str:
    """Format ``value`` with ``precision`` significant digits (``%g`` style)."""
    return f"{value:.{precision}g}"


@dataclass(frozen=True)
class ClassSummary:
    """Training statistics for one tag."""

    tag: str
    examples: int
    log_prior: float

    def to_dict(self) -> dict:
        return {"tag": self.tag, "examples": self.examples, "log_prior": self.log_prior}


@dataclass(frozen=True)
class WordParameter:
    """Learned likelihood of one word under one tag."""

    tag: str
    word: str
    count: int
    log_likelihood: float

    def to_dict(self) -> dict:
        return {
            "tag": self.tag,
            "word": self.word,
            "count": self.count,
            "log_likelihood": self.log_likelihood,
        }


@dataclass
class TrainingReport:
    """Everything learned from a training corpus, ready for display."""

    trained_on: int
    vocabulary_size: int
    posts: list[Post] = field(default_factory=list)
    classes: list[ClassSummary] = field(default_factory=list)
    parameters: list[WordParameter] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "trained_on": self.trained_on,
            "vocabulary_size": self.vocabulary_size,
            "posts": [p.to_dict() for p in self.posts],
            "classes": [c.to_dict() for c in self.classes],
            "parameters": [p.to_dict() for p in self.parameters],
        }

    def to_text(self, precision: int = 3) -> str:
        """Render the training report in the plain-text layout."""
        lines = ["training data:"]
        lines.extend(f"  label = {p.tag}, content = {p.content}" for p in self.posts)
        lines.append(f"trained on {self.trained_on} examples")
        lines.append(f"vocabulary size = {self.vocabulary_size}")
        lines.append("")
        lines.append("classes:")
        lines.extend(
            f"  {c.tag}, {c.examples} examples, "
            f"log-prior = {format_number(c.log_prior, precision)}"
            for c in self.classes
        )
        lines.append("classifier parameters:")
        lines.extend(
            f"  {p.tag}:{p.word}, count = {p.count}, "
            f"log-likelihood = {format_number(p.log_likelihood, precision)}"
            for p in self.parameters
        )
        lines.append("")
        return "\n".join(lines) + "\n"


def training_report(
    model: NaiveBayesClassifier,
    posts: Iterable[Post] = (),
) -> TrainingReport:
    """Summarize a trained model.

    Args:
        model: The trained classifier.
        posts: The training posts to list in the report (optional).

    Returns:
        TrainingReport with tags and (tag, word) parameters in sorted order.
    """
    tag_counts = model.tag_counts
    log_priors = model.log_priors
    classes = [
        ClassSummary(tag=tag, examples=tag_counts[tag], log_prior=log_priors[tag])
        for tag in model.tags
    ]

    word_counts = model.word_counts
    parameters = [
        WordParameter(
            tag=tag,
            word=word,
            count=count,
            log_likelihood=model.word_log_prob(word, tag),
        )
        for tag in model.tags
        for word, count in sorted(word_counts[tag].items())
    ]

    return TrainingReport(
        trained_on=model.total_posts,
        vocabulary_size=model.vocabulary_size,
        posts=list(posts),
        classes=classes,
        parameters=parameters,
    )
