"""Randomized 5x5 bingo cards built from a TV show's phrase pool."""

from .cards import BingoCard, Cell, InsufficientPhrasesError, generate_card
from .regenerate import PlaySession, RegenerateDecision
from .version import __version__
from .win import WINNING_LINES, WinningLine, evaluate

__all__ = [
    "BingoCard",
    "Cell",
    "InsufficientPhrasesError",
    "PlaySession",
    "RegenerateDecision",
    "WINNING_LINES",
    "WinningLine",
    "evaluate",
    "generate_card",
    "__version__",
]
