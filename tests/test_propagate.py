from sudoku_graph import ConstraintGraph
from sudoku_propagate import promote, propagate

from puzzles import (CONTRADICTORY_4, EASY_9, EASY_9_SOLUTION, EMPTY_4, HARD_9,
                     SINGLES_4, SINGLES_4_SOLUTION)


def test_promote_retires_the_cell():
    g = ConstraintGraph.from_grid(EMPTY_4, 2)
    before = g.live_count
    assert promote(g, 5, 3)
    assert g.live_count == before - 1
    assert 5 not in g.live
    assert g.cells[5] is None
    assert g.grid[1][1] == 3
    for zone_id in (g.row_zone(1), g.column_zone(1), g.box_zone(1, 1)):
        assert g.zones[zone_id].found[3]
        assert 5 not in g.zones[zone_id].live
    assert g.promotions == 1


def test_promote_rejects_duplicate_in_zone():
    g = ConstraintGraph.from_grid(EMPTY_4, 2)
    assert promote(g, 0, 1)
    # r0c1 shares row 0 with r0c0
    assert not promote(g, 1, 1)


def test_promote_rejects_retired_cell():
    g = ConstraintGraph.from_grid(EMPTY_4, 2)
    assert promote(g, 0, 1)
    assert not promote(g, 0, 2)


def test_promote_rejects_excluded_value():
    g = ConstraintGraph.from_grid(EMPTY_4, 2)
    g.cells[3].exclude(2)
    assert not promote(g, 3, 2)


def test_live_count_drops_by_one_per_promotion():
    g = ConstraintGraph.from_grid(EMPTY_4, 2)
    assignments = [(0, 1), (1, 2), (4, 3), (5, 4), (10, 1), (15, 2)]
    for cell_id, value in assignments:
        before = g.live_count
        assert promote(g, cell_id, value)
        assert g.live_count == before - 1


def test_small_puzzle_solved_by_propagation():
    g = ConstraintGraph.from_grid(SINGLES_4, 2)
    assert propagate(g)
    assert g.is_solved()
    assert g.grid == SINGLES_4_SOLUTION


def test_easy_puzzle_solved_by_propagation():
    g = ConstraintGraph.from_grid(EASY_9, 3)
    assert propagate(g)
    assert g.live_count == 0
    assert g.grid == EASY_9_SOLUTION


def test_propagate_is_idempotent():
    g = ConstraintGraph.from_grid(HARD_9, 3)
    assert propagate(g)
    promotions, grid, live = g.promotions, [r[:] for r in g.grid], list(g.live)
    remaining = {cell_id: g.cells[cell_id].remaining for cell_id in g.live}

    assert propagate(g)
    assert g.promotions == promotions
    assert g.grid == grid
    assert list(g.live) == live
    assert {cell_id: g.cells[cell_id].remaining for cell_id in g.live} == remaining


def test_propagate_on_empty_grid_changes_nothing():
    g = ConstraintGraph.from_grid(EMPTY_4, 2)
    assert propagate(g)
    assert g.live_count == 16
    assert g.promotions == 0


def test_possibility_counts_never_grow():
    g = ConstraintGraph.from_grid(HARD_9, 3)
    before = {cell_id: g.cells[cell_id].remaining for cell_id in g.live}
    assert propagate(g)
    for cell_id in g.live:
        assert g.cells[cell_id].remaining <= before[cell_id]
        assert g.cells[cell_id].remaining == sum(g.cells[cell_id].possibilities)


def test_contradiction_is_detected():
    g = ConstraintGraph.from_grid(CONTRADICTORY_4, 2)
    assert not propagate(g)


def test_cell_without_possibilities_is_a_contradiction():
    g = ConstraintGraph.from_grid(EMPTY_4, 2)
    for v in (1, 2, 3, 4):
        g.cells[0].exclude(v)
    assert not propagate(g)


def test_conflicting_singles_are_a_contradiction():
    g = ConstraintGraph.from_grid(EMPTY_4, 2)
    # r0c0 is the only place for 2 in row 0 and for 3 in column 0
    for cell_id in (1, 2, 3):
        g.cells[cell_id].exclude(2)
    for cell_id in (4, 8, 12):
        g.cells[cell_id].exclude(3)
    assert not propagate(g)


def test_two_cells_forced_to_same_value():
    g = ConstraintGraph.from_grid(EMPTY_4, 2)
    for cell_id in (0, 1):
        for v in (2, 3, 4):
            g.cells[cell_id].exclude(v)
    assert not propagate(g)
