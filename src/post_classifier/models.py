"""Data models shared by the classifier, corpus reader and reports."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Post:
    """A single labeled text post."""

    tag: str
    content: str

    def to_dict(self) -> dict:
        return {"tag": self.tag, "content": self.content}


@dataclass(frozen=True)
class Prediction:
    """The arg-max tag for some content and its log-posterior score."""

    tag: str
    log_score: float

    def __iter__(self):
        # Allows ``tag, score = model.predict(text)``
        yield self.tag
        yield self.log_score

    def to_dict(self) -> dict:
        return {"tag": self.tag, "log_score": self.log_score}


@dataclass(frozen=True)
class PredictionRecord:
    """Outcome of predicting one labeled test post."""

    correct: str
    predicted: str
    log_score: float
    content: str

    @property
    def is_correct(self) -> bool:
        return self.correct == self.predicted

    def to_dict(self) -> dict:
        return {
            "correct": self.correct,
            "predicted": self.predicted,
            "log_score": self.log_score,
            "content": self.content,
            "is_correct": self.is_correct,
        }
