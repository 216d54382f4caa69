"""
Independent checks of a solved grid.

Besides plain validity checks, a puzzle can be handed to an off-the-shelf
solver to confirm it is satisfiable and to count (up to a limit) how many
completions it has:

  - "sat": CNF encoding solved with PySAT
  - "smt": integer model with Distinct constraints solved with Z3
"""

from typing import List

from pysat.card import CardEnc, EncType
from pysat.formula import CNF
from pysat.solvers import Solver
from z3 import And, Distinct, Int, ModelRef, Or, sat
from z3 import Solver as Z3Solver

from sudoku_graph import Grid

CHECK_BACKENDS = ("sat", "smt")

# ---------- encoding helpers ----------
_ENC_MAP = {
    "pairwise": EncType.pairwise,     # O(k^2) AMO, no aux vars
    "seq": EncType.seqcounter,        # sequential/ladder AMO, linear + aux vars
    "cardnet": EncType.cardnetwrk,    # sorting/cardinality networks, strong + aux vars
}


def _zones(size: int) -> List[List[tuple]]:
    """Every row, column and box as a list of (r, c) positions, 0-based."""
    N = size * size
    zones = [[(r, c) for c in range(N)] for r in range(N)]
    zones += [[(r, c) for r in range(N)] for c in range(N)]
    for br in range(size):
        for bc in range(size):
            zones.append([(r, c)
                          for r in range(br * size, br * size + size)
                          for c in range(bc * size, bc * size + size)])
    return zones


# ---------- plain checks ----------
def is_valid_solution(grid: Grid, size: int) -> bool:
    """Every row, column and box holds each of 1..N exactly once."""
    N = size * size
    if len(grid) != N or any(len(row) != N for row in grid):
        return False
    expected = set(range(1, N + 1))
    return all({grid[r][c] for r, c in zone} == expected for zone in _zones(size))


def keeps_givens(puzzle: Grid, solution: Grid) -> bool:
    return all(v == 0 or v == solution[r][c]
               for r, row in enumerate(puzzle)
               for c, v in enumerate(row))


# ---------- SAT (PySAT) ----------
def vid(r: int, c: int, d: int, N: int) -> int:
    """
    0-based r, c and 1-based d in [1..N]
    Maps (r,c,d) -> {1..N^3}
    """
    return r * (N * N) + c * N + d


def _exactly_one(cnf: CNF, lits: List[int], enc: int) -> None:
    """ sum(lits) == 1  (ALO + AMO via chosen encoding) """
    cnf.append(lits[:])  # ALO
    if enc == EncType.pairwise:
        for i in range(len(lits)):
            for j in range(i + 1, len(lits)):
                cnf.append([-lits[i], -lits[j]])
    else:
        # aux variables must not collide with the ones already in use
        amo = CardEnc.atmost(lits=lits, bound=1, top_id=cnf.nv, encoding=enc)
        cnf.extend(amo.clauses)


def sudoku_cnf(grid: Grid, size: int, encoding: str = "pairwise") -> CNF:
    if encoding not in _ENC_MAP:
        raise ValueError(f"Unknown encoding {encoding!r}; expected one of {sorted(_ENC_MAP)}")
    enc = _ENC_MAP[encoding]
    N = size * size

    cnf = CNF()
    # reserve the primary variables before any auxiliary ones are created
    cnf.nv = N * N * N

    # one digit per cell
    for r in range(N):
        for c in range(N):
            _exactly_one(cnf, [vid(r, c, d, N) for d in range(1, N + 1)], enc)

    # each digit once per row, column and box
    for zone in _zones(size):
        for d in range(1, N + 1):
            _exactly_one(cnf, [vid(r, c, d, N) for r, c in zone], enc)

    # clues
    for r in range(N):
        for c in range(N):
            if grid[r][c]:
                cnf.append([vid(r, c, grid[r][c], N)])
    return cnf


def sat_solutions(
    grid: Grid,
    size: int,
    *,
    max_solutions: int = 2,
    encoding: str = "pairwise",
) -> List[Grid]:
    """Enumerate up to max_solutions completions with PySAT."""
    N = size * size
    n_primary = N * N * N
    cnf = sudoku_cnf(grid, size, encoding)

    def decode_model(model_pos) -> Grid:
        out = [[0] * N for _ in range(N)]
        for lit in model_pos:
            v = lit - 1
            out[v // (N * N)][(v // N) % N] = v % N + 1
        return out

    solutions: List[Grid] = []
    with Solver(name="g3", bootstrap_with=cnf.clauses) as s:
        while len(solutions) < max_solutions and s.solve():
            model_pos = {l for l in s.get_model() if 0 < l <= n_primary}
            solutions.append(decode_model(model_pos))
            # block only the primary true literals
            s.add_clause([-l for l in model_pos])
    return solutions


# ---------- SMT (Z3) ----------
def smt_solutions(grid: Grid, size: int, *, max_solutions: int = 2) -> List[Grid]:
    """Enumerate up to max_solutions completions with Z3."""
    N = size * size
    X = [[Int(f"x_{r}_{c}") for c in range(N)] for r in range(N)]
    s = Z3Solver()

    for r in range(N):
        for c in range(N):
            s.add(And(1 <= X[r][c], X[r][c] <= N))
            if grid[r][c] != 0:
                s.add(X[r][c] == grid[r][c])
    for zone in _zones(size):
        s.add(Distinct([X[r][c] for r, c in zone]))

    def model_to_grid(m: ModelRef) -> Grid:
        return [[m.eval(X[r][c], model_completion=True).as_long() for c in range(N)]
                for r in range(N)]

    solutions: List[Grid] = []
    while len(solutions) < max_solutions and s.check() == sat:
        found = model_to_grid(s.model())
        solutions.append(found)
        s.add(Or([X[r][c] != found[r][c] for r in range(N) for c in range(N)]))
    return solutions


def count_solutions(grid: Grid, size: int, *, backend: str = "sat", limit: int = 2) -> int:
    """Number of completions, counting no further than `limit`."""
    if backend == "sat":
        return len(sat_solutions(grid, size, max_solutions=limit))
    if backend == "smt":
        return len(smt_solutions(grid, size, max_solutions=limit))
    raise ValueError(f"Unknown backend {backend!r}; expected one of {CHECK_BACKENDS}")
