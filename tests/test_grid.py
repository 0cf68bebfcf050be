import pytest

from paint_grid.grid import (
    OUT_OF_PALETTE_COLOR,
    GridCore,
    GridEngine,
    PaletteResolver,
    SparseStorage,
    Viewport,
    make_grid_id,
)
from paint_grid.grid.events import CELL_PAINTED, VIEWPORT_MOVED


class _Clock:
    def __init__(self, start: int = 1_700_000_000_000, step: int = 5) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


def _engine(viewport_size: int = 8, palette=None) -> GridEngine:
    return GridEngine.create(palette or ["yellow", "blue", "red"], viewport_size, clock=_Clock())


def test_unset_and_out_of_bounds_lookups_are_distinct():
    storage = SparseStorage()
    storage.set(2, 3, 0)

    assert storage.value_at(0, 0).is_unset
    assert storage.value_at(50, 50).is_unset
    assert storage.value_at(-1, 0).is_out_of_bounds
    assert storage.value_at(0, -4).is_out_of_bounds
    painted = storage.value_at(2, 3)
    assert painted.is_painted and painted.value == 0
    assert storage.value_at(-1, 0) != storage.value_at(0, 0)


def test_storage_size_counts_rows_and_widest_row():
    storage = SparseStorage()
    assert storage.size() == (0, 0)

    storage.set(3, 0, 1)
    storage.set(1, 4, 2)
    assert storage.size() == (4, 5)

    storage.ensure_row(9)
    storage.ensure_row(9)
    assert storage.size() == (4, 10)
    assert len(storage) == 2


def test_palette_falls_back_for_unknown_indices():
    storage = SparseStorage()
    storage.set(0, 0, 1)
    storage.set(1, 0, 7)
    resolver = PaletteResolver(["yellow", "blue", "red"])

    assert resolver.color_at(storage, 0, 0) == "blue"
    assert resolver.color_at(storage, 1, 0) == OUT_OF_PALETTE_COLOR
    assert resolver.color_at(storage, 2, 0) is None
    assert resolver.color_at(storage, -1, 0) is None


def test_fresh_grid_starts_at_minimum_corner():
    engine = _engine()

    assert engine.viewport_corner == (-1, -1)
    assert engine.created_at == engine.updated_at
    assert engine.size() == (0, 0)
    assert engine.id == make_grid_id(engine.created_at)


def test_first_write_wins_scenario():
    engine = _engine(viewport_size=8)

    assert engine.set_value(0, 0, 1) is False
    assert engine.value_at(-1, -1).is_out_of_bounds

    assert engine.set_value(1, 1, 1) is True
    assert engine.color_at(0, 0) == "blue"

    assert engine.set_value(1, 1, 2) is False
    assert engine.color_at(0, 0) == "blue"


def test_writes_outside_viewport_are_ignored():
    engine = _engine(viewport_size=4)
    assert engine.move_viewport(1, 1)

    assert engine.set_value(4, 0, 1) is False
    assert engine.set_value(0, 4, 1) is False
    assert engine.set_value(-1, 0, 1) is False
    assert len(engine.core.storage) == 0

    assert engine.set_value(3, 3, 2) is True
    assert engine.color_at(3, 3) == "red"


def test_negative_color_index_is_refused():
    engine = _engine()
    with pytest.raises(ValueError):
        engine.set_value(1, 1, -1)


def test_updated_at_advances_only_on_accepted_mutations():
    engine = _engine()
    start = engine.updated_at

    engine.set_value(0, 0, 1)
    assert engine.updated_at == start

    engine.set_value(2, 2, 1)
    painted_at = engine.updated_at
    assert painted_at > start

    engine.move_viewport(-1, 0)
    assert engine.updated_at == painted_at


def test_updated_at_never_decreases():
    clock = _Clock(step=-10)
    engine = GridEngine.create(["red"], 4, clock=clock)
    created = engine.updated_at

    engine.set_value(1, 1, 0)
    assert engine.updated_at == created


def test_corner_floor_rejects_moves_entirely():
    engine = _engine()

    assert engine.move_viewport(-1, 0) is False
    assert engine.move_viewport(5, -1) is False
    assert engine.viewport_corner == (-1, -1)

    assert engine.move_viewport(3, 2) is True
    assert engine.viewport_corner == (2, 1)
    assert engine.move_viewport(-3, -3) is False
    assert engine.viewport_corner == (2, 1)
    assert engine.move_viewport(-3, -2) is True
    assert engine.viewport_corner == (-1, -1)


def test_move_by_page_overlaps_one_cell():
    engine = _engine(viewport_size=9)

    assert engine.page_size == 8
    assert engine.move_viewport_by_page(1, 0)
    assert engine.viewport_corner == (7, -1)
    assert engine.move_viewport_by_page(-1, 0)
    assert engine.viewport_corner == (-1, -1)
    assert engine.move_viewport_by_page(0, -1) is False


def test_visible_grid_is_always_full_size():
    engine = _engine(viewport_size=5)
    grid = engine.visible_grid()

    assert len(grid) == 5
    assert all(len(row) == 5 for row in grid)
    assert all(color is None for row in grid for color in row)

    engine.set_value(2, 1, 2)
    grid = engine.visible_grid()
    assert grid[1][2] == "red"
    assert sum(color is not None for row in grid for color in row) == 1


def test_listeners_receive_accepted_changes_only():
    engine = _engine()
    changes = []
    unsubscribe = engine.subscribe(changes.append)

    engine.set_value(0, 0, 1)
    engine.move_viewport(-2, 0)
    assert changes == []

    engine.set_value(1, 2, 0)
    engine.move_viewport(1, 0)
    assert [change.kind for change in changes] == [CELL_PAINTED, VIEWPORT_MOVED]
    assert changes[0].cell == (0, 1)
    assert changes[0].value == 0
    assert changes[0].persisted is False
    assert changes[1].viewport_corner == (0, -1)

    unsubscribe()
    engine.set_value(3, 3, 1)
    assert len(changes) == 2


def test_info_reports_extent_and_corner():
    engine = _engine()
    engine.set_value(3, 2, 1)

    assert engine.info().to_dict() == {"size": [3, 2], "viewportCorner": {"x": -1, "y": -1}}


def test_new_like_keeps_palette_and_viewport_size():
    engine = _engine(viewport_size=6, palette=["black", "white"])
    engine.set_value(1, 1, 1)
    fresh = engine.new_like()

    assert fresh.palette == ["black", "white"]
    assert fresh.viewport_size == 6
    assert fresh.viewport_corner == (-1, -1)
    assert len(fresh.storage) == 0
    assert fresh.created_at > engine.created_at


def test_viewport_rejects_invalid_geometry():
    with pytest.raises(ValueError):
        Viewport(size=0)
    with pytest.raises(ValueError):
        Viewport(size=4, x=-2)


def test_grid_ids_sort_with_creation_time():
    assert make_grid_id(0) == "19700101T000000000Z"
    assert make_grid_id(1234) == "19700101T000001234Z"
    assert make_grid_id(1_700_000_000_000) < make_grid_id(1_700_000_000_001)

    core = GridCore.fresh(["red"], 4, 1234)
    assert core.id == "19700101T000001234Z"
