"""
Best-first backtracking over independent search states.

Instead of recursing, partially solved states are kept in a heap and the
one with the fewest live cells is always expanded next. Expanding a state
picks its live cell with the fewest possibilities and tries each value on
its own copy of the state, followed by propagation.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import List, Tuple

from sudoku_graph import ConstraintGraph, Grid
from sudoku_propagate import promote, propagate

log = logging.getLogger(__name__)


class SearchState:
    """One branch of the search: a graph and the grid it owns."""

    __slots__ = ("graph",)

    def __init__(self, graph: ConstraintGraph):
        self.graph = graph

    @property
    def grid(self) -> Grid:
        return self.graph.grid

    @property
    def live_count(self) -> int:
        return self.graph.live_count

    def clone(self) -> "SearchState":
        return SearchState(self.graph.clone())

    def most_constrained_cell(self) -> int:
        # min() keeps the first of equal keys, i.e. the earliest live id
        cells = self.graph.cells
        return min(self.graph.live, key=lambda cell_id: cells[cell_id].remaining)


@dataclass
class SolveResult:
    solved: bool
    grid: Grid
    states_expanded: int = 0
    branches: int = 0
    pruned: int = 0
    clones: int = 0
    max_frontier: int = 0


def solve(grid: Grid, size: int, *, always_clone: bool = False) -> SolveResult:
    """
    Complete an N×N grid (0 = unknown, N = size^2).

    Returns the first solution found. If none exists the result has
    solved=False and a copy of the input grid.
    always_clone: copy the state for every branch, including the last value
    tried for a cell (same results, more allocations).
    """
    root = SearchState(ConstraintGraph.from_grid(grid, size))

    def unsolvable(stats: dict) -> SolveResult:
        log.info("no solution (%d states expanded)", stats["states_expanded"])
        return SolveResult(False, [list(row) for row in grid], **stats)

    stats = dict(states_expanded=0, branches=0, pruned=0, clones=0, max_frontier=0)

    if not propagate(root.graph):
        return unsolvable(stats)
    if root.live_count == 0:
        log.info("solved by propagation alone")
        return SolveResult(True, root.grid, **stats)

    # (live cells, insertion order, state): ties go to the older state
    seq = itertools.count()
    heap: List[Tuple[int, int, SearchState]] = [(root.live_count, next(seq), root)]
    stats["max_frontier"] = 1

    while heap:
        _, _, state = heapq.heappop(heap)
        stats["states_expanded"] += 1

        cell_id = state.most_constrained_cell()
        cell = state.graph.cells[cell_id]
        values = list(cell.values())
        log.debug("expanding state with %d live cells: r%dc%d in %s",
                  state.live_count, cell.row + 1, cell.col + 1, values)

        for i, value in enumerate(values):
            if i == len(values) - 1 and not always_clone:
                branch = state
            else:
                branch = state.clone()
                stats["clones"] += 1
            stats["branches"] += 1

            if not (promote(branch.graph, cell_id, value) and propagate(branch.graph)):
                stats["pruned"] += 1
                log.debug("pruned r%dc%d=%d", cell.row + 1, cell.col + 1, value)
                continue

            if branch.live_count == 0:
                log.info("solved after expanding %d states", stats["states_expanded"])
                return SolveResult(True, branch.grid, **stats)

            heapq.heappush(heap, (branch.live_count, next(seq), branch))
            stats["max_frontier"] = max(stats["max_frontier"], len(heap))

    return unsolvable(stats)
