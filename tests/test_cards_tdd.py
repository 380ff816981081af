from __future__ import annotations

import pytest
from hypothesis import given, settings, strategies as st

from tests.helpers import ScriptedRandomSource, make_pool
from tv_bingo.cards import (
    CELL_COUNT,
    CENTER_INDEX,
    DEFAULT_CENTER_LABEL,
    BingoCard,
    Cell,
    InsufficientPhrasesError,
    card_hash,
    fisher_yates,
    generate_card,
)
from tv_bingo.rng import create_rng


def test_exact_pool_with_identity_draws_keeps_order_around_center():
    pool = make_pool(24)
    # j == i at every step means no swaps
    rng = ScriptedRandomSource(range(23, 0, -1))
    card = generate_card(pool, "FREE", rng)
    contents = card.contents()
    assert contents[CENTER_INDEX] == "FREE"
    assert contents[:CENTER_INDEX] == pool[:12]
    assert contents[CENTER_INDEX + 1:] == pool[12:]


def test_fisher_yates_walks_down_and_draws_inclusive_range():
    pool = make_pool(25)
    rng = ScriptedRandomSource([0] * 24)
    card = generate_card(pool, None, rng)
    assert rng.calls == [(0, i) for i in range(24, 0, -1)]
    # always swapping with slot 0 rotates the pool left by one
    assert card.contents()[:CENTER_INDEX] == pool[1:13]
    assert card.contents()[CENTER_INDEX + 1:] == pool[13:25]
    assert pool[0] not in card.contents()


def test_scenario_24_phrases_free_center():
    pool = make_pool(24)
    card = generate_card(pool, "FREE", create_rng("py_random", 3))
    assert len(card) == CELL_COUNT
    assert card[CENTER_INDEX].content == "FREE"
    assert card[CENTER_INDEX].is_center
    assert sorted(c.content for i, c in enumerate(card.cells) if i != CENTER_INDEX) == pool


@pytest.mark.parametrize("label", [None, "", "   "])
def test_missing_center_label_uses_sentinel(label):
    card = generate_card(make_pool(30), label, create_rng("py_random", 1))
    assert card.center.content == DEFAULT_CENTER_LABEL


@pytest.mark.parametrize("size", [0, 3, 23])
def test_small_pool_refused(size):
    with pytest.raises(InsufficientPhrasesError) as excinfo:
        generate_card(make_pool(size), "FREE")
    assert excinfo.value.required == 24
    assert excinfo.value.actual == size
    assert "at least 24 phrases" in str(excinfo.value)


def test_generate_does_not_mutate_pool_and_starts_unmarked():
    pool = make_pool(40)
    snapshot = list(pool)
    card = generate_card(pool, "FREE", create_rng("py_random", 99))
    assert pool == snapshot
    assert card.marked_indices() == []


def test_fisher_yates_returns_copy():
    items = ["a", "b", "c"]
    out = fisher_yates(items, create_rng("py_random", 5))
    assert items == ["a", "b", "c"]
    assert sorted(out) == items


def test_repeated_generation_is_not_order_preserving():
    pool = make_pool(27)
    rng = create_rng("py_random", 2024)
    grids = {tuple(generate_card(pool, "FREE", rng).contents()) for _ in range(10)}
    assert len(grids) > 1


def test_card_shape_is_enforced():
    cells = [Cell(content=str(i)) for i in range(CELL_COUNT)]
    with pytest.raises(ValueError):
        BingoCard(cells=tuple(cells))
    with pytest.raises(ValueError):
        BingoCard(cells=tuple(cells[:10]))


def test_rows_view_and_hash():
    card = generate_card(make_pool(24), "FREE", ScriptedRandomSource(range(23, 0, -1)))
    rows = card.rows()
    assert len(rows) == 5 and all(len(r) == 5 for r in rows)
    assert rows[2][2] == "FREE"
    assert card_hash(card).startswith("sha256:")
    same = generate_card(make_pool(24), "FREE", ScriptedRandomSource(range(23, 0, -1)))
    assert card_hash(card) == card_hash(same)


@settings(max_examples=50)
@given(
    size=st.integers(min_value=24, max_value=400),
    seed=st.integers(min_value=0, max_value=2**32),
    engine=st.sampled_from(["py_random", "numpy_pcg64"]),
)
def test_card_invariants_hold_for_any_valid_pool(size, seed, engine):
    pool = make_pool(size)
    card = generate_card(pool, "Center", create_rng(engine, seed))
    contents = card.contents()
    assert len(contents) == CELL_COUNT
    assert contents[CENTER_INDEX] == "Center"
    others = [c for i, c in enumerate(contents) if i != CENTER_INDEX]
    assert len(set(others)) == 24
    assert set(others) <= set(pool)
    assert [i for i, c in enumerate(card.cells) if c.is_center] == [CENTER_INDEX]
