"""Domain model entities for Tally."""

from tally.domain.model.vote import Vote

__all__ = [
    "Vote",
]
