"""
Cells and zones of a generalized Sudoku (N = SIZE^2) as an index-addressed graph.

A Cell is a grid position whose value is still unknown. A Zone is a row,
column or box. Cells and zones refer to each other by integer id, and both
live in dense lists, so copying a whole graph is a flat copy of its records.
"""

from typing import Dict, Iterator, List, Optional

Grid = List[List[int]]

ROW, COLUMN, BOX = "row", "column", "box"


class Cell:
    __slots__ = ("id", "row", "col", "zones", "possibilities", "remaining")

    def __init__(self, cell_id: int, row: int, col: int, n: int):
        self.id = cell_id
        self.row = row
        self.col = col
        self.zones: List[int] = []
        # index 0 unused, values are 1..n
        self.possibilities: List[bool] = [False] + [True] * n
        self.remaining = n

    def copy(self) -> "Cell":
        other = Cell.__new__(Cell)
        other.id = self.id
        other.row = self.row
        other.col = self.col
        other.zones = self.zones[:]
        other.possibilities = self.possibilities[:]
        other.remaining = self.remaining
        return other

    def exclude(self, value: int) -> None:
        if self.possibilities[value]:
            self.possibilities[value] = False
            self.remaining -= 1

    def values(self) -> Iterator[int]:
        """Remaining possible values, ascending."""
        return (v for v in range(1, len(self.possibilities)) if self.possibilities[v])

    def sole_value(self) -> int:
        return next(self.values())

    def __repr__(self):
        return f"Cell(id={self.id}, r{self.row + 1}c{self.col + 1}, {list(self.values())})"


class Zone:
    __slots__ = ("id", "kind", "index", "found", "live")

    def __init__(self, zone_id: int, kind: str, index: int, n: int):
        self.id = zone_id
        self.kind = kind
        self.index = index
        self.found: List[bool] = [False] * (n + 1)
        # dict used as an insertion-ordered set of cell ids
        self.live: Dict[int, None] = {}

    def copy(self) -> "Zone":
        other = Zone.__new__(Zone)
        other.id = self.id
        other.kind = self.kind
        other.index = self.index
        other.found = self.found[:]
        other.live = dict(self.live)
        return other

    def add_cell(self, cell: Cell) -> None:
        self.live[cell.id] = None
        cell.zones.append(self.id)

    def __repr__(self):
        found = [v for v in range(1, len(self.found)) if self.found[v]]
        return f"Zone({self.kind} {self.index}, found={found}, live={list(self.live)})"


class ConstraintGraph:
    """
    Bipartite structure of unknown cells and the zones constraining them.

    `cells[i]` is the Cell with id i, or None once it has been promoted.
    `live` holds the ids of cells that are not promoted yet, in creation order.
    The graph owns `grid`; promotions are written into it.
    """

    def __init__(self, size: int):
        self.size = size
        self.n = size * size
        self.grid: Grid = []
        self.cells: List[Optional[Cell]] = []
        self.zones: List[Zone] = []
        self.live: Dict[int, None] = {}
        self.promotions = 0
        self.rounds = 0

    # ---------- construction ----------
    @classmethod
    def from_grid(cls, grid: Grid, size: int) -> "ConstraintGraph":
        """
        Build the graph for an N×N grid (0 = unknown), N = size^2.
        The grid is copied; the caller's grid is left untouched.
        """
        g = cls(size)
        N = g.n
        g.grid = [list(row) for row in grid]

        for kind in (ROW, COLUMN, BOX):
            for i in range(N):
                g.zones.append(Zone(len(g.zones), kind, i, N))

        for r in range(N):
            for c in range(N):
                owners = (g.zones[g.row_zone(r)],
                          g.zones[g.column_zone(c)],
                          g.zones[g.box_zone(r, c)])
                value = g.grid[r][c]
                if value == 0:
                    cell = Cell(len(g.cells), r, c, N)
                    g.cells.append(cell)
                    for zone in owners:
                        zone.add_cell(cell)
                else:
                    for zone in owners:
                        zone.found[value] = True

        g.live = dict.fromkeys(range(len(g.cells)))
        return g

    def row_zone(self, r: int) -> int:
        return r

    def column_zone(self, c: int) -> int:
        return self.n + c

    def box_zone(self, r: int, c: int) -> int:
        return 2 * self.n + (r // self.size) * self.size + c // self.size

    # ---------- cloning ----------
    def clone(self) -> "ConstraintGraph":
        """Independent deep copy: no list, vector or set is shared with self."""
        g = ConstraintGraph.__new__(ConstraintGraph)
        g.size = self.size
        g.n = self.n
        g.grid = [row[:] for row in self.grid]
        g.cells = [cell.copy() if cell is not None else None for cell in self.cells]
        g.zones = [zone.copy() for zone in self.zones]
        g.live = dict(self.live)
        g.promotions = self.promotions
        g.rounds = self.rounds
        return g

    # ---------- queries ----------
    @property
    def live_count(self) -> int:
        return len(self.live)

    def is_solved(self) -> bool:
        return not self.live

    def cell_at(self, row: int, col: int) -> Optional[int]:
        """Id of the live cell at (row, col), or None if that position is fixed."""
        for cell_id in self.zones[self.row_zone(row)].live:
            if self.cells[cell_id].col == col:
                return cell_id
        return None

    def candidates(self, row: int, col: int) -> List[int]:
        value = self.grid[row][col]
        if value:
            return [value]
        return list(self.cells[self.cell_at(row, col)].values())

    def __repr__(self):
        return f"ConstraintGraph(N={self.n}, live={self.live_count}, zones={len(self.zones)})"
