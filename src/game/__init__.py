"""Play layer for worfdall."""

from .models import Level, AttemptOutcome, SwapAttempt
from .session import GameSession, DEFAULT_HINTS

__all__ = [
    "Level",
    "AttemptOutcome",
    "SwapAttempt",
    "GameSession",
    "DEFAULT_HINTS",
]
