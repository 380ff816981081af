from __future__ import annotations

import os
from pathlib import Path

import pytest

from tv_bingo.config import resolve_parameters


def test_defaults_without_config():
    resolved, params_hash, cfg = resolve_parameters(config_path_str=None, cli_overrides={}, env={})
    assert cfg is None
    assert resolved["seed"] == {"engine": "py_random", "value": None}
    assert resolved["log_level"] == "WARNING"
    assert Path(resolved["shows_file"]).name == "shows.yaml"
    assert params_hash.startswith("sha256:")


def test_env_precedence_over_config(tmp_path: Path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("seed:\n  value: 10\n  engine: numpy_pcg64\n", encoding="utf-8")
    monkeypatch.setenv("TV_BINGO_SEED_VALUE", "75")

    resolved, _hash, _ = resolve_parameters(
        config_path_str=str(cfg), cli_overrides={}, env=os.environ
    )
    assert resolved["seed"]["value"] == 75
    assert resolved["seed"]["engine"] == "numpy_pcg64"


def test_cli_precedence_over_env(tmp_path: Path, monkeypatch):
    cfg = tmp_path / "config.json"
    cfg.write_text('{"log_level": "INFO"}', encoding="utf-8")
    monkeypatch.setenv("TV_BINGO_LOG_LEVEL", "ERROR")

    resolved, _hash, _ = resolve_parameters(
        config_path_str=str(cfg), cli_overrides={"log_level": "DEBUG"}, env=os.environ
    )
    assert resolved["log_level"] == "DEBUG"


def test_path_normalization_cli_vs_config(tmp_path: Path, monkeypatch):
    cfg_dir = tmp_path / "cfg"
    cfg_dir.mkdir()
    cfg = cfg_dir / "conf.yaml"
    cfg.write_text("shows_file: shows.yaml\n", encoding="utf-8")

    monkeypatch.chdir(tmp_path)
    resolved, _hash, _ = resolve_parameters(
        config_path_str=str(cfg),
        cli_overrides={"out_card": "card.json"},
        env={},
    )
    assert Path(resolved["shows_file"]).parent == cfg_dir.resolve()
    assert Path(resolved["out_card"]).parent == tmp_path.resolve()


def test_params_hash_tracks_seed_only():
    _, h1, _ = resolve_parameters(config_path_str=None, cli_overrides={"seed.value": 1}, env={})
    _, h2, _ = resolve_parameters(
        config_path_str=None, cli_overrides={"seed.value": 1, "log_level": "DEBUG"}, env={}
    )
    _, h3, _ = resolve_parameters(config_path_str=None, cli_overrides={"seed.value": 2}, env={})
    assert h1 == h2
    assert h1 != h3


def test_config_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        resolve_parameters(config_path_str=str(tmp_path / "nope.yaml"), cli_overrides={}, env={})
    bad = tmp_path / "conf.yaml"
    bad.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        resolve_parameters(config_path_str=str(bad), cli_overrides={}, env={})
