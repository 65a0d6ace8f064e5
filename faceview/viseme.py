"""A weighted viseme entry in a mixture of mouth shapes."""

from __future__ import annotations

from dataclasses import dataclass

VISEME_LENGTH = 3


@dataclass
class VisemeMixture:
    """A viseme label of at most three characters and its weight."""

    viseme: str = ""
    weight: float = 0.0

    def __post_init__(self) -> None:
        self.viseme = self.viseme[:VISEME_LENGTH]
        self.weight = float(self.weight)