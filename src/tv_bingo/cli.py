from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .cards import CELL_COUNT, GRID_SIZE, InsufficientPhrasesError
from .config import resolve_parameters
from .logging_setup import setup_logging
from .regenerate import CellView, PlaySession, RegenerateDecision, line_names
from .serialize import build_run_meta, emit_card_json
from .shows import Show, ShowCatalog, ShowNotFoundError
from .version import __version__

app = typer.Typer(help="TV show bingo: build a card from a show's phrases and play along")

EXIT_NOT_FOUND = 1
EXIT_INSUFFICIENT = 2

PLAY_HELP = "Enter a cell number (1-25) to toggle it, r = new card, c = clear marks, q = quit"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(0)


@app.callback()
def common_options(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show application version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """TV show bingo."""


def _bootstrap(config: Optional[str], cli_overrides: Dict[str, Any]) -> tuple[Dict[str, Any], str, Console]:
    resolved, params_hash, _cfg_path_unused = resolve_parameters(
        config_path_str=config, cli_overrides=cli_overrides
    )
    colors = str(resolved.get("colors", "auto"))
    setup_logging(
        level=str(resolved.get("log_level", "WARNING")),
        log_file=resolved.get("log_file"),
        colors=colors,
    )
    console = Console(no_color=(colors == "never"), force_terminal=(colors == "always") or None)
    return resolved, params_hash, console


def _overrides(
    *,
    shows_file: Optional[str] = None,
    seed: Optional[int] = None,
    engine: Optional[str] = None,
    log_level: Optional[str] = None,
    colors: Optional[str] = None,
) -> Dict[str, Any]:
    cli_overrides: Dict[str, Any] = {}
    if shows_file:
        cli_overrides["shows_file"] = shows_file
    if seed is not None:
        cli_overrides["seed.value"] = seed
    if engine:
        cli_overrides["seed.engine"] = engine
    if log_level:
        cli_overrides["log_level"] = log_level
    if colors:
        cli_overrides["colors"] = colors
    return cli_overrides


def _load_show(resolved: Dict[str, Any], show_id: int) -> Show:
    catalog = ShowCatalog.from_file(Path(str(resolved["shows_file"])))
    try:
        return catalog.get(show_id)
    except ShowNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_NOT_FOUND) from exc


def _seed_of(resolved: Dict[str, Any]) -> Optional[int]:
    value = (resolved.get("seed") or {}).get("value")
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise typer.BadParameter(f"seed must be an integer, got {value!r}", param_hint="seed") from exc


def render_grid(cells: List[CellView], title: str) -> Table:
    table = Table(title=escape(title), show_header=False, show_lines=True)
    for _ in range(GRID_SIZE):
        table.add_column(justify="center", ratio=1, overflow="fold")
    for r in range(GRID_SIZE):
        row = []
        for view in cells[r * GRID_SIZE:(r + 1) * GRID_SIZE]:
            label = f"[dim]{view.index + 1}[/dim]\n{escape(view.content)}"
            if view.is_winning:
                label = f"[bold black on green]{label}[/]"
            elif view.marked:
                label = f"[bold reverse]{label}[/]"
            elif view.is_center:
                label = f"[italic]{label}[/italic]"
            row.append(label)
        table.add_row(*row)
    return table


def _insufficient(show: Show, exc: InsufficientPhrasesError) -> typer.Exit:
    typer.echo(str(exc), err=True)
    typer.echo(f"Edit show {show.id} ('{show.show_title}') to add more phrases.", err=True)
    return typer.Exit(code=EXIT_INSUFFICIENT)


@app.command()
def shows(
    config: str = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    shows_file: str = typer.Option(None, "--shows-file", help="Shows file (YAML/JSON)"),
    search: str = typer.Option(None, "--search", help="Filter by show title"),
    colors: str = typer.Option(None, "--colors", help="auto|always|never"),
    log_level: str = typer.Option(None, "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
) -> None:
    """List shows and whether they have enough phrases to play."""
    resolved, _hash, console = _bootstrap(
        config, _overrides(shows_file=shows_file, colors=colors, log_level=log_level)
    )
    catalog = ShowCatalog.from_file(Path(str(resolved["shows_file"])))
    found = catalog.search(search) if search else catalog.list()

    table = Table(title="Shows")
    table.add_column("ID", justify="right")
    table.add_column("Show")
    table.add_column("Game")
    table.add_column("Phrases", justify="right")
    table.add_column("Playable")
    for show in found:
        table.add_row(
            str(show.id),
            escape(show.show_title),
            escape(show.game_title or ""),
            str(len(show.phrases)),
            "yes" if show.can_play else "no",
        )
    console.print(table)


@app.command()
def card(
    show_id: int = typer.Option(..., "--show", help="Show id"),
    config: str = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    shows_file: str = typer.Option(None, "--shows-file", help="Shows file (YAML/JSON)"),
    seed: int = typer.Option(None, "--seed", help="Seed for a reproducible card"),
    engine: str = typer.Option(None, "--engine", help="py_random|numpy_pcg64"),
    out: str = typer.Option(None, "--out", help="Write the card as JSON"),
    force: bool = typer.Option(False, "--force", help="Overwrite output if it exists"),
    no_mkdirs: bool = typer.Option(False, "--no-mkdirs", help="Do not create parent directories"),
    colors: str = typer.Option(None, "--colors", help="auto|always|never"),
    log_level: str = typer.Option(None, "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
) -> None:
    """Generate one card for a show and print it."""
    cli_overrides = _overrides(
        shows_file=shows_file, seed=seed, engine=engine, colors=colors, log_level=log_level
    )
    if out:
        cli_overrides["out_card"] = out
    resolved, params_hash, console = _bootstrap(config, cli_overrides)
    show = _load_show(resolved, show_id)

    rng_engine = str(resolved["seed"]["engine"])
    seed_value = _seed_of(resolved)
    session = PlaySession(show.phrases, show.center_square, engine=rng_engine, seed=seed_value)
    try:
        bingo_card = session.start()
    except InsufficientPhrasesError as exc:
        raise _insufficient(show, exc) from exc

    console.print(render_grid(session.render(), show.display_title))

    out_card = resolved.get("out_card")
    if out_card:
        run_meta = build_run_meta(
            app_version=__version__,
            params_hash=params_hash,
            seed=seed_value,
            rng_engine=rng_engine,
        )
        try:
            emit_card_json(
                Path(out_card),
                card=bingo_card,
                run_meta=run_meta,
                show=show,
                mkdirs=(not no_mkdirs),
                overwrite=force,
            )
        except (FileExistsError, FileNotFoundError) as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc
        typer.echo(f"Card written to {out_card}")


def _handle_regenerate(session: PlaySession) -> None:
    decision = session.request_regenerate()
    if decision is RegenerateDecision.CONFIRMATION_REQUIRED:
        if typer.confirm("You have marked cells. Discard them and deal a new card?", default=False):
            session.confirm_regenerate()
        else:
            session.cancel_regenerate()
            typer.echo("Keeping the current card.")


@app.command()
def play(
    show_id: int = typer.Option(..., "--show", help="Show id"),
    config: str = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    shows_file: str = typer.Option(None, "--shows-file", help="Shows file (YAML/JSON)"),
    seed: int = typer.Option(None, "--seed", help="Seed for reproducible cards"),
    engine: str = typer.Option(None, "--engine", help="py_random|numpy_pcg64"),
    colors: str = typer.Option(None, "--colors", help="auto|always|never"),
    log_level: str = typer.Option(None, "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
) -> None:
    """Play a card interactively while watching."""
    resolved, _hash, console = _bootstrap(
        config, _overrides(
        shows_file=shows_file, seed=seed, engine=engine, colors=colors, log_level=log_level
    )
    )
    show = _load_show(resolved, show_id)
    session = PlaySession(
        show.phrases,
        show.center_square,
        engine=str(resolved["seed"]["engine"]),
        seed=_seed_of(resolved),
    )
    try:
        session.start()
    except InsufficientPhrasesError as exc:
        raise _insufficient(show, exc) from exc

    typer.echo(PLAY_HELP)
    while True:
        console.print(render_grid(session.render(), show.display_title))
        lines = session.winning_lines()
        if lines:
            console.print(f"[bold green]BINGO![/] {', '.join(line_names(lines))}")

        choice = typer.prompt("Move", default="q").strip().lower()
        if choice == "q":
            break
        if choice == "r":
            _handle_regenerate(session)
        elif choice == "c":
            session.reset_marks_only()
        elif choice.isdigit() and 1 <= int(choice) <= CELL_COUNT:
            session.toggle(int(choice) - 1)
        else:
            typer.echo(PLAY_HELP)


def main(_argv: list[str] | None = None) -> int:
    try:
        app(standalone_mode=True)
        return 0
    except SystemExit as e:
        return int(e.code) if e.code is not None else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
