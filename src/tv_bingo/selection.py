"""Mark state for the cells of a card.

Only these functions flip ``Cell.marked``; callers re-run win evaluation after
every change.
"""

from __future__ import annotations

from .cards import CELL_COUNT, CENTER_INDEX, BingoCard


def initialize(card: BingoCard) -> None:
    for cell in card.cells:
        cell.marked = False
    card.cells[CENTER_INDEX].marked = True


def toggle(card: BingoCard, index: int) -> bool:
    """Flip the mark at ``index`` (center included) and return the new state."""
    if not 0 <= index < CELL_COUNT:
        raise IndexError(f"Cell index must be in 0..{CELL_COUNT - 1}, got {index}")
    cell = card.cells[index]
    cell.marked = not cell.marked
    return cell.marked


def reset(card: BingoCard) -> None:
    # same end state as a fresh card: only the center auto-mark survives
    initialize(card)


def has_non_center_marks(card: BingoCard) -> bool:
    return any(cell.marked for idx, cell in enumerate(card.cells) if idx != CENTER_INDEX)
