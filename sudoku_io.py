import re
from typing import IO, Iterable, Iterator, List, Tuple, Union

from sudoku_graph import Grid

MIN_SIZE, MAX_SIZE = 1, 100

# plain ASCII integers only; other words are layout
INTEGER = re.compile(r"[+-]?[0-9]+")

# tokens read as an unknown cell
PLACEHOLDERS = ("x", ".")


class PuzzleFormatError(ValueError):
    pass


class SizeOutOfRangeError(PuzzleFormatError):
    def __init__(self, size: int):
        super().__init__(
            f"The Sudoku puzzle size must be between {MIN_SIZE} and {MAX_SIZE} (got {size})."
        )
        self.size = size


# ---------- reading ----------
def _words(source: Union[str, IO[str], Iterable[str]]) -> Iterator[str]:
    if isinstance(source, str):
        source = source.splitlines()
    for line in source:
        yield from line.split()


def _integers(words: Iterator[str]) -> Iterator[int]:
    """Integer tokens and placeholders (as 0); anything else is skipped."""
    for word in words:
        if INTEGER.fullmatch(word):
            yield int(word)
        elif word in PLACEHOLDERS:
            yield 0


def read_puzzle(source: Union[str, IO[str], Iterable[str]]) -> Tuple[int, Grid]:
    """
    Read SIZE followed by N*N cells (N = SIZE^2) in row-major order.

    Accepts a string, an open text file or any iterable of lines. Words that
    are neither integers nor placeholders may be used freely for layout.
    """
    numbers = _integers(_words(source))
    try:
        size = next(numbers)
    except StopIteration:
        raise PuzzleFormatError("Empty input: expected the puzzle size.") from None
    if not (MIN_SIZE <= size <= MAX_SIZE):
        raise SizeOutOfRangeError(size)

    N = size * size
    cells = [v for _, v in zip(range(N * N), numbers)]
    if len(cells) < N * N:
        raise PuzzleFormatError(f"Expected {N * N} cells for size {size}, got {len(cells)}.")

    grid = [cells[r * N:(r + 1) * N] for r in range(N)]
    validate_grid(grid, size)
    return size, grid


def validate_grid(grid: Grid, size: int) -> None:
    """Check shape, value range and that no given value repeats in a zone."""
    N = size * size
    if len(grid) != N or any(len(row) != N for row in grid):
        raise PuzzleFormatError(f"Grid must be {N}x{N} for size {size}.")

    seen = set()
    for r in range(N):
        for c in range(N):
            v = grid[r][c]
            if not (0 <= v <= N):
                raise PuzzleFormatError(f"Cell ({r},{c}) value {v} out of range 0..{N}")
            if v == 0:
                continue
            b = (r // size) * size + c // size
            for key in (("row", r, v), ("column", c, v), ("box", b, v)):
                if key in seen:
                    raise PuzzleFormatError(f"Value {v} repeated in {key[0]} {key[1] + 1}")
                seen.add(key)


# ---------- printing ----------
def format_grid(grid: Grid, size: int) -> str:
    """
    Fixed-width rendering with '|' between boxes and a dashed line between
    bands of boxes.
    """
    N = size * size
    digits = len(str(N))
    hsep = "-" * ((digits + 1) * N + 2 * size - 3)

    lines: List[str] = []
    for r in range(N):
        parts = []
        for c in range(N):
            parts.append(str(grid[r][c]).rjust(digits))
            if c < N - 1 and (c + 1) % size == 0:
                parts.append("|")
        lines.append(" ".join(parts))
        if r < N - 1 and (r + 1) % size == 0:
            lines.append(hsep)
    return "\n".join(lines)
