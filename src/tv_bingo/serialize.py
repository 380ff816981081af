from __future__ import annotations

import json
import platform
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from .cards import BingoCard, card_hash
from .shows import Show
from .win import evaluate


def ensure_parent(path: Path, *, mkdirs: bool) -> None:
    parent = path.parent
    if not parent.exists() and mkdirs:
        parent.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, data: object, *, mkdirs: bool, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(
            f"Refusing to overwrite existing file without --force: {path}"
        )
    ensure_parent(path, mkdirs=mkdirs)
    text = json.dumps(data, ensure_ascii=False, sort_keys=True, indent=2)
    path.write_text(text + "\n", encoding="utf-8")


def build_run_meta(
    *,
    app_version: str,
    params_hash: str,
    seed: Optional[int],
    rng_engine: str,
) -> Dict[str, object]:
    return {
        "app_version": app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "python_version": sys.version.split()[0],
        "platform": platform.system().lower(),
        "params_hash": params_hash,
        "seed": seed,
        "rng_engine": rng_engine,
        "hash_algorithm": "sha256",
    }


def card_to_dict(card: BingoCard, show: Optional[Show] = None) -> Dict[str, object]:
    data: Dict[str, object] = {
        "grid": card.rows(),
        "cells": [
            {"index": idx, "content": cell.content, "is_center": cell.is_center, "marked": cell.marked}
            for idx, cell in enumerate(card.cells)
        ],
        "winning_lines": sorted(line.name for line in evaluate(card)),
        "card_hash": card_hash(card),
    }
    if show is not None:
        data["show"] = {"id": show.id, "show_title": show.show_title, "game_title": show.game_title}
    return data


def emit_card_json(
    path: Path,
    *,
    card: BingoCard,
    run_meta: Dict[str, object],
    show: Optional[Show] = None,
    mkdirs: bool,
    overwrite: bool,
) -> None:
    data = {"run_meta": run_meta, "card": card_to_dict(card, show)}
    write_json(path, data, mkdirs=mkdirs, overwrite=overwrite)
