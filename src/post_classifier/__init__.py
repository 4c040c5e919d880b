"""Post Classifier -- Naive Bayes tagging of short text posts."""

__version__ = "0.1.0"

from .classifier import NaiveBayesClassifier, unique_words
from .corpus import CorpusReader, read_posts
from .evaluation import (
    ClassificationMetrics,
    EvaluationResult,
    compute_metrics,
    evaluate,
)
from .exceptions import (
    CorpusOpenError,
    EmptyModelError,
    MalformedCorpusError,
    PostClassifierError,
    UnknownTagError,
)
from .models import Post, Prediction, PredictionRecord
from .reporting import (
    ClassSummary,
    TrainingReport,
    WordParameter,
    format_number,
    training_report,
)

__all__ = [
    # Core
    "NaiveBayesClassifier",
    "Prediction",
    "unique_words",
    # Corpus
    "CorpusReader",
    "Post",
    "read_posts",
    # Reporting
    "ClassSummary",
    "TrainingReport",
    "WordParameter",
    "format_number",
    "training_report",
    # Evaluation
    "ClassificationMetrics",
    "EvaluationResult",
    "PredictionRecord",
    "compute_metrics",
    "evaluate",
    # Errors
    "CorpusOpenError",
    "EmptyModelError",
    "MalformedCorpusError",
    "PostClassifierError",
    "UnknownTagError",
]
