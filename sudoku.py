#!/usr/bin/env python3
"""
Solve a generalized Sudoku read from a file (or standard input).

Input: the size parameter SIZE (1..100) followed by the N*N cells of the
grid (N = SIZE^2), row by row. Unknown cells are written as 0, 'x' or '.';
any other word that is not a number is ignored.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from sudoku_io import PuzzleFormatError, SizeOutOfRangeError, format_grid, read_puzzle
from sudoku_search import SolveResult, solve
from sudoku_verify import CHECK_BACKENDS, count_solutions, is_valid_solution, keeps_givens

log = logging.getLogger(__name__)


def cross_check(puzzle: List[List[int]], size: int, result: SolveResult, backend: str) -> bool:
    """Compare the result against an independent solver; True if they agree."""
    found = count_solutions(puzzle, size, backend=backend, limit=2)
    if result.solved:
        ok = (found > 0
              and is_valid_solution(result.grid, size)
              and keeps_givens(puzzle, result.grid))
    else:
        ok = found == 0
    if not ok:
        log.warning("%s check disagrees: solved=%s, %s solutions found by %s",
                    backend, result.solved, found, backend)
    elif found > 1:
        log.info("%s check: puzzle has more than one solution", backend)
    else:
        log.info("%s check: agrees (%d solution%s)", backend, found, "" if found == 1 else "s")
    return ok


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("filename", nargs="?", help="puzzle file (default: standard input)")
    parser.add_argument("--check", choices=CHECK_BACKENDS,
                        help="cross-check the answer with an independent solver")
    parser.add_argument("--always-clone", action="store_true",
                        help="copy the search state for every branch")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    try:
        if args.filename:
            log.info("Reading %s", args.filename)
            # stray bytes in layout words must not stop the read
            with open(args.filename, errors="replace") as f:
                size, puzzle = read_puzzle(f)
        else:
            if hasattr(sys.stdin, "reconfigure"):
                sys.stdin.reconfigure(errors="replace")
            size, puzzle = read_puzzle(sys.stdin)
    except SizeOutOfRangeError:
        print("Error: The Sudoku puzzle size must be between 1 and 100.")
        return 1
    except (PuzzleFormatError, OSError) as e:
        print(f"Error: {e}")
        return 1

    start = time.perf_counter()
    result = solve(puzzle, size, always_clone=args.always_clone)
    elapsed_ms = int((time.perf_counter() - start) * 1000)

    if not result.solved:
        log.warning("No solution exists for this puzzle")
    log.info("states expanded: %d, branches: %d, pruned: %d, clones: %d",
             result.states_expanded, result.branches, result.pruned, result.clones)

    print(format_grid(result.grid, size))
    print(f"Time spent solving: {elapsed_ms} milliseconds.")

    if args.check:
        cross_check(puzzle, size, result, args.check)
    return 0


if __name__ == "__main__":
    sys.exit(main())
