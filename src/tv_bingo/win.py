"""Win detection over the 12 fixed lines of a 5x5 card."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Set, Tuple

from .cards import GRID_SIZE, BingoCard


@dataclass(frozen=True)
class WinningLine:
    name: str
    kind: str
    indices: Tuple[int, ...]


def _build_lines() -> Tuple[WinningLine, ...]:
    n = GRID_SIZE
    lines = []
    for r in range(n):
        lines.append(WinningLine(f"row-{r}", "row", tuple(r * n + c for c in range(n))))
    for c in range(n):
        lines.append(WinningLine(f"col-{c}", "column", tuple(r * n + c for r in range(n))))
    # top-left to bottom-right, then top-right to bottom-left
    lines.append(WinningLine("diag-main", "diagonal", tuple(i * n + i for i in range(n))))
    lines.append(WinningLine("diag-anti", "diagonal", tuple(i * n + (n - 1 - i) for i in range(n))))
    return tuple(lines)


WINNING_LINES: Tuple[WinningLine, ...] = _build_lines()
LINES_BY_NAME = {line.name: line for line in WINNING_LINES}


def evaluate(card: BingoCard) -> FrozenSet[WinningLine]:
    """Return every line whose cells are all marked.

    Always recomputed from the current marks; nothing is cached between calls.
    """
    return frozenset(
        line for line in WINNING_LINES if all(card.cells[idx].marked for idx in line.indices)
    )


def has_won(card: BingoCard) -> bool:
    return len(evaluate(card)) > 0


def winning_indices(card: BingoCard) -> Set[int]:
    cells: Set[int] = set()
    for line in evaluate(card):
        cells.update(line.indices)
    return cells
