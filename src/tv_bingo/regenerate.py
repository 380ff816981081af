"""Regeneration policy and the single-player play session built on it."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Sequence

from . import selection
from .cards import BingoCard, InsufficientPhrasesError, generate_card
from .rng import RandomSource, create_rng, derive_session_seed
from .win import WinningLine, evaluate, winning_indices

logger = logging.getLogger(__name__)


class RegenerateDecision(enum.Enum):
    PROCEED = "proceed"
    CONFIRMATION_REQUIRED = "confirmation_required"


class SessionState(enum.Enum):
    NO_CARD = "no_card"
    CARD_READY = "card_ready"
    INSUFFICIENT_PHRASES = "insufficient_phrases"


class SessionStateError(RuntimeError):
    """Raised when a session action is not valid in the current state."""


@dataclass(frozen=True)
class CellView:
    index: int
    content: str
    is_center: bool
    marked: bool
    is_winning: bool


def request_regenerate(card: BingoCard) -> RegenerateDecision:
    """Gate regeneration behind confirmation when in-progress marks would be lost."""
    if selection.has_non_center_marks(card):
        return RegenerateDecision.CONFIRMATION_REQUIRED
    return RegenerateDecision.PROCEED


def confirm_regenerate(
    phrase_pool: Sequence[str],
    center_label: Optional[str] = None,
    rng: Optional[RandomSource] = None,
) -> BingoCard:
    card = generate_card(phrase_pool, center_label, rng)
    selection.initialize(card)
    return card


def reset_marks_only(card: BingoCard) -> None:
    selection.reset(card)


def render(card: BingoCard) -> List[CellView]:
    winning = winning_indices(card)
    return [
        CellView(
            index=idx,
            content=cell.content,
            is_center=cell.is_center,
            marked=cell.marked,
            is_winning=idx in winning,
        )
        for idx, cell in enumerate(card.cells)
    ]


class PlaySession:
    """One player's card plus its marks.

    The phrase pool is snapshotted at construction: later edits to the show
    are only seen by a new session.
    """

    def __init__(
        self,
        phrase_pool: Sequence[str],
        center_label: Optional[str] = None,
        *,
        rng: Optional[RandomSource] = None,
        engine: str = "py_random",
        seed: Optional[int] = None,
    ):
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        self.phrase_pool = tuple(phrase_pool)
        self.center_label = center_label
        self.engine = engine
        self.seed = seed
        self._rng = rng
        self.state = SessionState.NO_CARD
        self.card: Optional[BingoCard] = None
        self.error: Optional[InsufficientPhrasesError] = None
        self.pending_confirmation = False
        self.cards_dealt = 0

    def _next_rng(self) -> RandomSource:
        if self.seed is None:
            if self._rng is None:
                self._rng = create_rng(self.engine, None)
            return self._rng
        return create_rng(self.engine, derive_session_seed(self.seed, self.cards_dealt, "card"))

    def _deal(self) -> BingoCard:
        card = confirm_regenerate(self.phrase_pool, self.center_label, self._next_rng())
        self.cards_dealt += 1
        self.card = card
        self.pending_confirmation = False
        return card

    def _require_card(self) -> BingoCard:
        if self.state is not SessionState.CARD_READY or self.card is None:
            raise SessionStateError(f"No card in play (state={self.state.value})")
        return self.card

    def start(self) -> BingoCard:
        if self.state is not SessionState.NO_CARD:
            raise SessionStateError(f"Session already started (state={self.state.value})")
        try:
            card = self._deal()
        except InsufficientPhrasesError as exc:
            self.state = SessionState.INSUFFICIENT_PHRASES
            self.error = exc
            logger.warning("Cannot start session: %s", exc)
            raise
        self.state = SessionState.CARD_READY
        logger.info("Session started with %d phrases in pool", len(self.phrase_pool))
        return card

    def toggle(self, index: int) -> FrozenSet[WinningLine]:
        card = self._require_card()
        selection.toggle(card, index)
        return evaluate(card)

    def winning_lines(self) -> FrozenSet[WinningLine]:
        return evaluate(self._require_card())

    def has_won(self) -> bool:
        return len(self.winning_lines()) > 0

    def request_regenerate(self) -> RegenerateDecision:
        """Regenerate now, or hold until ``confirm_regenerate``/``cancel_regenerate``."""
        card = self._require_card()
        decision = request_regenerate(card)
        if decision is RegenerateDecision.PROCEED:
            self._deal()
            logger.info("Regenerated card without confirmation")
        else:
            self.pending_confirmation = True
            logger.info("Regeneration needs confirmation: %d cells marked", len(card.marked_indices()))
        return decision

    def confirm_regenerate(self) -> BingoCard:
        self._require_card()
        if not self.pending_confirmation:
            raise SessionStateError("No regeneration is awaiting confirmation")
        card = self._deal()
        logger.info("Regeneration confirmed; previous marks discarded")
        return card

    def cancel_regenerate(self) -> None:
        self._require_card()
        if not self.pending_confirmation:
            raise SessionStateError("No regeneration is awaiting confirmation")
        self.pending_confirmation = False
        logger.info("Regeneration cancelled")

    def reset_marks_only(self) -> None:
        card = self._require_card()
        reset_marks_only(card)
        self.pending_confirmation = False

    def render(self) -> List[CellView]:
        return render(self._require_card())


def line_names(lines: Iterable[WinningLine]) -> List[str]:
    return sorted(line.name for line in lines)
