from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .cards import REQUIRED_PHRASES

logger = logging.getLogger(__name__)

MAX_SHOW_TITLE = 100
MAX_GAME_TITLE = 100
MAX_CENTER_SQUARE = 50
MAX_PHRASE = 100


class ShowNotFoundError(LookupError):
    def __init__(self, show_id: int):
        self.show_id = show_id
        super().__init__(f"Show not found: {show_id}")


class ShowValidationError(ValueError):
    def __init__(self, show_id: Any, errors: List[str]):
        self.show_id = show_id
        self.errors = errors
        super().__init__(f"Invalid show {show_id}: " + "; ".join(errors))


@dataclass
class Show:
    id: int
    show_title: str
    game_title: Optional[str] = None
    center_square: Optional[str] = None
    phrases: List[str] = field(default_factory=list)

    @property
    def can_play(self) -> bool:
        return len(self.phrases) >= REQUIRED_PHRASES

    @property
    def display_title(self) -> str:
        return self.game_title or self.show_title

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Show":
        # accept both the REST payload's camelCase and snake_case keys
        def pick(*keys: str) -> Any:
            for key in keys:
                if key in data:
                    return data[key]
            return None

        raw_id = pick("id")
        if raw_id is None:
            raise ValueError("Show entry is missing an id")
        return cls(
            id=int(raw_id),
            show_title=str(pick("showTitle", "show_title") or ""),
            game_title=pick("gameTitle", "game_title"),
            center_square=pick("centerSquare", "center_square"),
            phrases=[str(p) for p in (pick("phrases") or [])],
        )


def validate_show(show: Show) -> List[str]:
    """Return human-readable problems with a show; an empty list means valid."""
    errors: List[str] = []
    if not show.show_title.strip():
        errors.append("Show title is required")
    elif len(show.show_title) > MAX_SHOW_TITLE:
        errors.append(f"Show title must be {MAX_SHOW_TITLE} characters or less")
    if show.game_title and len(show.game_title) > MAX_GAME_TITLE:
        errors.append(f"Game title must be {MAX_GAME_TITLE} characters or less")
    if show.center_square and len(show.center_square) > MAX_CENTER_SQUARE:
        errors.append(f"Center square must be {MAX_CENTER_SQUARE} characters or less")

    seen = set()
    for idx, phrase in enumerate(show.phrases):
        if phrase in seen:
            errors.append(f"Duplicate phrase found at index {idx}: '{phrase}'")
            break
        seen.add(phrase)
    for idx, phrase in enumerate(show.phrases):
        if len(phrase) > MAX_PHRASE:
            errors.append(
                f"Phrase at index {idx} must not exceed {MAX_PHRASE} characters (got {len(phrase)})"
            )
            break
    return errors


def _read_shows_file(path: Path) -> List[Any]:
    if not path.exists():
        raise FileNotFoundError(f"Shows file not found: {path}")
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or []
    elif suffix == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported shows file extension: {suffix}")
    if isinstance(data, dict):
        data = data.get("shows", [])
    if not isinstance(data, list):
        raise ValueError("Shows file must hold a list of shows or a 'shows' list")
    return data


class ShowCatalog:
    """Read-only lookup of shows by id."""

    def __init__(self, shows: List[Show]):
        self._shows: Dict[int, Show] = {}
        titles: Dict[str, int] = {}
        for show in shows:
            if show.id in self._shows:
                raise ValueError(f"Duplicate show id: {show.id}")
            title_key = show.show_title
            if title_key in titles:
                raise ShowValidationError(
                    show.id, [f"Show title '{show.show_title}' already used by show {titles[title_key]}"]
                )
            titles[title_key] = show.id
            errors = validate_show(show)
            if errors:
                raise ShowValidationError(show.id, errors)
            self._shows[show.id] = show

    @classmethod
    def from_file(cls, path: Path) -> "ShowCatalog":
        entries = _read_shows_file(path)
        catalog = cls([Show.from_mapping(entry) for entry in entries])
        logger.info("Loaded %d shows from %s", len(catalog), path)
        return catalog

    def __len__(self) -> int:
        return len(self._shows)

    def get(self, show_id: int) -> Show:
        try:
            return self._shows[show_id]
        except KeyError:
            raise ShowNotFoundError(show_id) from None

    def list(self) -> List[Show]:
        return sorted(self._shows.values(), key=lambda s: s.show_title.lower())

    def search(self, query: str) -> List[Show]:
        needle = query.lower()
        return [
            show
            for show in self.list()
            if needle in show.show_title.lower() or needle in (show.game_title or "").lower()
        ]
