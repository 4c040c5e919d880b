"""Multinomial Naive Bayes over bag-of-words posts.

Words are case-sensitive, whitespace-delimited tokens, and a post counts
each of its distinct words once (document frequency). Likelihoods use a
three-way fallback instead of additive smoothing:

- word never seen in training:          ``ln(1 / N)``
- word seen, but never with this tag:   ``ln(df(word) / N)``
- word seen with this tag:              ``ln(df(tag, word) / count(tag))``

where ``N`` is the number of training posts. All trained state is written
once by ``train()``; ``predict()`` and the accessors only read it, so a
trained model can be shared freely with reporting code.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .exceptions import EmptyModelError, UnknownTagError
from .models import Post, Prediction

logger = logging.getLogger(__name__)


def unique_words(text: str) -> set[str]:
    """Split ``text`` on whitespace and return its distinct tokens."""
    return set(text.split())


class NaiveBayesClassifier:
    """Naive Bayes tag classifier trained from labeled posts.

    Example::

        model = NaiveBayesClassifier()
        model.train(read_posts("train.csv"))

        tag, score = model.predict("the game was great")

    Ties between equally scored tags go to the tag that sorts first.
    """

    def __init__(self) -> None:
        self._total_posts = 0
        self._vocabulary: dict[str, int] = {}
        self._tag_counts: dict[str, int] = {}
        self._word_counts: dict[str, dict[str, int]] = {}
        self._log_priors: dict[str, float] = {}

    def reset(self) -> None:
        """Discard all trained state."""
        self._total_posts = 0
        self._vocabulary = {}
        self._tag_counts = {}
        self._word_counts = {}
        self._log_priors = {}

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self, posts: Iterable[Post]) -> "NaiveBayesClassifier":
        """Train on a stream of posts in a single pass.

        Any state from a previous call is discarded first. Errors raised
        while iterating ``posts`` (e.g. an unreadable corpus) propagate
        and leave the model empty.

        Args:
            posts: Iterable of objects with ``tag`` and ``content``.

        Returns:
            Self (for method chaining).
        """
        self.reset()

        total = 0
        vocabulary: dict[str, int] = defaultdict(int)
        tag_counts: dict[str, int] = defaultdict(int)
        word_counts: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))

        for post in posts:
            total += 1
            tag_counts[post.tag] += 1
            tag_words = word_counts[post.tag]
            for word in unique_words(post.content):
                vocabulary[word] += 1
                tag_words[word] += 1

        self._total_posts = total
        self._vocabulary = dict(vocabulary)
        self._tag_counts = dict(tag_counts)
        self._word_counts = {tag: dict(words) for tag, words in word_counts.items()}
        self._log_priors = {
            tag: math.log(count / total) for tag, count in self._tag_counts.items()
        }

        logger.debug(
            "Trained on %d posts: %d tags, vocabulary size %d",
            total,
            len(self._tag_counts),
            len(self._vocabulary),
        )
        return self

    # ------------------------------------------------------------------
    # Inference
    # ------------------------------------------------------------------

    def word_log_prob(self, word: str, tag: str) -> float:
        """Smoothed log-probability of ``word`` appearing in a ``tag`` post.

        Raises:
            UnknownTagError: If ``tag`` was not seen during training.
        """
        tag_words = self._word_counts.get(tag)
        if tag_words is None:
            raise UnknownTagError(tag)

        if word not in self._vocabulary:
            return math.log(1 / self._total_posts)
        if word not in tag_words:
            return math.log(self._vocabulary[word] / self._total_posts)
        return math.log(tag_words[word] / self._tag_counts[tag])

    def score(self, content: str, tag: str) -> float:
        """Log-posterior score of ``content`` under ``tag``.

        Raises:
            UnknownTagError: If ``tag`` was not seen during training.
        """
        if tag not in self._log_priors:
            raise UnknownTagError(tag)
        return self._score_words(unique_words(content), tag)

    def scores(self, content: str) -> dict[str, float]:
        """Log-posterior score of ``content`` for every trained tag."""
        words = unique_words(content)
        return {tag: self._score_words(words, tag) for tag in self.tags}

    def predict(self, content: str) -> Prediction:
        """Return the highest scoring tag for ``content``.

        Raises:
            EmptyModelError: If the model has no trained tags.
        """
        if not self._log_priors:
            raise EmptyModelError()

        best: Prediction | None = None
        for tag, tag_score in self.scores(content).items():
            if best is None or tag_score > best.log_score:
                best = Prediction(tag=tag, log_score=tag_score)
        return best

    def _score_words(self, words: set[str], tag: str) -> float:
        # Sorted so equal scores sum identically under any hash seed
        total = self._log_priors[tag]
        for word in sorted(words):
            total += self.word_log_prob(word, tag)
        return total

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def is_trained(self) -> bool:
        """Whether at least one tag has been learned."""
        return bool(self._tag_counts)

    @property
    def total_posts(self) -> int:
        """Number of posts seen during training."""
        return self._total_posts

    @property
    def vocabulary_size(self) -> int:
        """Number of distinct words seen during training."""
        return len(self._vocabulary)

    @property
    def tags(self) -> list[str]:
        """Trained tags in ascending order."""
        return sorted(self._tag_counts)

    @property
    def vocabulary(self) -> Mapping[str, int]:
        """Word -> number of training posts containing it."""
        return MappingProxyType(self._vocabulary)

    @property
    def tag_counts(self) -> Mapping[str, int]:
        """Tag -> number of training posts with that tag."""
        return MappingProxyType(self._tag_counts)

    @property
    def log_priors(self) -> Mapping[str, float]:
        """Tag -> ``ln(count(tag) / N)``."""
        return MappingProxyType(self._log_priors)

    @property
    def word_counts(self) -> Mapping[str, Mapping[str, int]]:
        """Tag -> word -> number of that tag's posts containing the word."""
        return MappingProxyType({
            tag: MappingProxyType(words) for tag, words in self._word_counts.items()
        })

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(total_posts={self._total_posts}, "
            f"tags={len(self._tag_counts)}, vocabulary_size={len(self._vocabulary)})"
        )
