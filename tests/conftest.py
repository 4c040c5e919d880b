"""Shared test fixtures for post-classifier tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from post_classifier.models import Post


@pytest.fixture
def two_posts() -> list[Post]:
    """The smallest corpus that still has two competing tags."""
    return [
        Post("sports", "the game was great"),
        Post("politics", "the election results"),
    ]


@pytest.fixture
def write_corpus(tmp_path: Path):
    """Factory writing a corpus file under ``tmp_path`` and returning its path."""

    def _write(name: str, text: str) -> Path:
        file = tmp_path / name
        file.write_text(text, encoding="utf-8")
        return file

    return _write


@pytest.fixture
def train_csv(write_corpus) -> Path:
    """Training corpus matching the ``two_posts`` fixture."""
    return write_corpus(
        "train.csv",
        "tag,content\n"
        "sports,the game was great\n"
        "politics,the election results\n",
    )


@pytest.fixture
def test_csv(write_corpus) -> Path:
    """Test corpus with two correct predictions and one miss."""
    return write_corpus(
        "test.csv",
        "tag,content\n"
        "sports,the game\n"
        "politics,election results\n"
        "politics,great game\n",
    )


@pytest.fixture
def two_post_report_text() -> str:
    """Plain-text training report for the ``two_posts`` corpus."""
    return (
        "training data:\n"
        "  label = sports, content = the game was great\n"
        "  label = politics, content = the election results\n"
        "trained on 2 examples\n"
        "vocabulary size = 6\n"
        "\n"
        "classes:\n"
        "  politics, 1 examples, log-prior = -0.693\n"
        "  sports, 1 examples, log-prior = -0.693\n"
        "classifier parameters:\n"
        "  politics:election, count = 1, log-likelihood = 0\n"
        "  politics:results, count = 1, log-likelihood = 0\n"
        "  politics:the, count = 1, log-likelihood = 0\n"
        "  sports:game, count = 1, log-likelihood = 0\n"
        "  sports:great, count = 1, log-likelihood = 0\n"
        "  sports:the, count = 1, log-likelihood = 0\n"
        "  sports:was, count = 1, log-likelihood = 0\n"
        "\n"
    )
