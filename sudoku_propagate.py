"""
Deduction without guessing over a ConstraintGraph.

Each round runs two rules:

  a) elimination: drop from every live cell the values already found in its
     zones; a cell left with one value must take it (naked single)
  b) singles: a value a zone still needs that only one live cell admits must
     go in that cell (hidden single)

Promotions are only collected during a round and applied together at its
end, so a round always reads the graph as it was when the round started.
Both functions return False on a contradiction and leave the graph in a
state that must be discarded.
"""

import logging
from typing import Dict

from sudoku_graph import ConstraintGraph

log = logging.getLogger(__name__)


def promote(graph: ConstraintGraph, cell_id: int, value: int) -> bool:
    """Fix cell `cell_id` to `value`, retire it and write it into the grid."""
    cell = graph.cells[cell_id]
    if cell is None or not (1 <= value <= graph.n) or not cell.possibilities[value]:
        log.debug("cannot promote cell %s to %d", cell_id, value)
        return False

    for zone_id in cell.zones:
        zone = graph.zones[zone_id]
        if zone.found[value]:
            log.debug("%d already found in %s %d", value, zone.kind, zone.index)
            return False
        del zone.live[cell_id]
        zone.found[value] = True

    graph.grid[cell.row][cell.col] = value
    del graph.live[cell_id]
    graph.cells[cell_id] = None
    graph.promotions += 1
    return True


def _record(pending: Dict[int, int], cell_id: int, value: int) -> bool:
    earlier = pending.get(cell_id)
    if earlier is not None and earlier != value:
        log.debug("cell %d forced to both %d and %d", cell_id, earlier, value)
        return False
    pending[cell_id] = value
    return True


def propagate(graph: ConstraintGraph) -> bool:
    """
    Run deduction rounds until one promotes nothing.
    Returns True when exhausted without contradiction (solved or not).
    """
    N = graph.n
    cells = graph.cells
    zones = graph.zones

    while True:
        graph.rounds += 1
        pending: Dict[int, int] = {}

        # a) elimination
        for cell_id in graph.live:
            cell = cells[cell_id]
            for zone_id in cell.zones:
                found = zones[zone_id].found
                for v in range(1, N + 1):
                    if found[v]:
                        cell.exclude(v)
            if cell.remaining == 0:
                log.debug("no value left for r%dc%d", cell.row + 1, cell.col + 1)
                return False
            if cell.remaining == 1 and not _record(pending, cell_id, cell.sole_value()):
                return False

        # b) singles
        for zone in zones:
            count = [0] * (N + 1)
            last = [0] * (N + 1)
            for cell_id in zone.live:
                possible = cells[cell_id].possibilities
                for v in range(1, N + 1):
                    if possible[v]:
                        count[v] += 1
                        last[v] = cell_id
            for v in range(1, N + 1):
                if zone.found[v]:
                    continue
                if count[v] == 0:
                    log.debug("no place left for %d in %s %d", v, zone.kind, zone.index)
                    return False
                if count[v] == 1 and not _record(pending, last[v], v):
                    return False

        if not pending:
            return True

        for cell_id, value in pending.items():
            if not promote(graph, cell_id, value):
                return False
