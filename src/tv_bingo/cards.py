"""Bingo card model and generation from a show's phrase pool."""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .rng import PyRandomSource, RandomSource

logger = logging.getLogger(__name__)

GRID_SIZE = 5
CELL_COUNT = GRID_SIZE * GRID_SIZE
CENTER_INDEX = CELL_COUNT // 2
REQUIRED_PHRASES = CELL_COUNT - 1
DEFAULT_CENTER_LABEL = "FREE SPACE"


class InsufficientPhrasesError(ValueError):
    """Raised when a phrase pool is too small to fill a card."""

    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(
            f"This show needs at least {required} phrases to create a bingo card "
            f"(it has {actual})"
        )


@dataclass
class Cell:
    content: str
    is_center: bool = False
    marked: bool = False


@dataclass
class BingoCard:
    """25 cells laid out row-major; index 12 is the center square."""

    cells: Tuple[Cell, ...]

    def __post_init__(self) -> None:
        self.cells = tuple(self.cells)
        if len(self.cells) != CELL_COUNT:
            raise ValueError(f"A card needs exactly {CELL_COUNT} cells, got {len(self.cells)}")
        if not self.cells[CENTER_INDEX].is_center:
            raise ValueError("Cell at the center index must be the center square")

    def __len__(self) -> int:
        return CELL_COUNT

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    @property
    def center(self) -> Cell:
        return self.cells[CENTER_INDEX]

    def contents(self) -> List[str]:
        return [cell.content for cell in self.cells]

    def rows(self) -> List[List[str]]:
        contents = self.contents()
        return [contents[r * GRID_SIZE:(r + 1) * GRID_SIZE] for r in range(GRID_SIZE)]

    def marked_indices(self) -> List[int]:
        return [idx for idx, cell in enumerate(self.cells) if cell.marked]


def resolve_center_label(center_label: Optional[str]) -> str:
    if center_label is None or not center_label.strip():
        return DEFAULT_CENTER_LABEL
    return center_label


def fisher_yates(items: Sequence[str], rng: RandomSource) -> List[str]:
    """Return a shuffled copy of ``items``; the input is left untouched."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def generate_card(
    phrase_pool: Sequence[str],
    center_label: Optional[str] = None,
    rng: Optional[RandomSource] = None,
) -> BingoCard:
    """Sample 24 phrases from the pool and arrange them around the center square.

    Raises InsufficientPhrasesError when the pool has fewer than 24 entries;
    no partial card is ever produced. The returned card has no marks; pair it
    with ``selection.initialize`` before play.
    """
    if len(phrase_pool) < REQUIRED_PHRASES:
        raise InsufficientPhrasesError(required=REQUIRED_PHRASES, actual=len(phrase_pool))
    if rng is None:
        rng = PyRandomSource()

    chosen = fisher_yates(phrase_pool, rng)[:REQUIRED_PHRASES]
    picks = iter(chosen)
    cells: List[Cell] = []
    for idx in range(CELL_COUNT):
        if idx == CENTER_INDEX:
            cells.append(Cell(content=resolve_center_label(center_label), is_center=True))
        else:
            cells.append(Cell(content=next(picks)))

    logger.debug("Generated card from pool of %d phrases (engine=%s)", len(phrase_pool), rng.engine)
    return BingoCard(cells=tuple(cells))


def card_hash(card: BingoCard) -> str:
    payload = json.dumps(card.contents(), ensure_ascii=True, separators=(",", ":"))
    return "sha256:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()
