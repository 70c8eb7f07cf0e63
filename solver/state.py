from dataclasses import dataclass

from rules.rules import EMPTY, GRID_SIZE

from .types import Cage, Grid, Position
from .utils import box_index


@dataclass
class SearchState:
    grid: Grid
    row_used: list[set[int]]
    col_used: list[set[int]]
    box_used: list[set[int]]
    # cell -> (cage index, times the cell is listed in that cage)
    cage_of: dict[Position, list[tuple[int, int]]]
    cage_targets: list[int]
    cage_sizes: list[int]
    cage_sums: list[int]
    cage_filled: list[int]
    cage_seen: list[set[int]]


def build_initial_state(grid: Grid, cages: list[Cage]) -> SearchState:
    row_used: list[set[int]] = [set() for _ in range(GRID_SIZE)]
    col_used: list[set[int]] = [set() for _ in range(GRID_SIZE)]
    box_used: list[set[int]] = [set() for _ in range(GRID_SIZE)]

    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            value = grid[r][c]
            if value == EMPTY:
                continue
            row_used[r].add(value)
            col_used[c].add(value)
            box_used[box_index(r, c)].add(value)

    cage_of: dict[Position, list[tuple[int, int]]] = {}
    cage_sums = [0] * len(cages)
    cage_filled = [0] * len(cages)
    cage_seen: list[set[int]] = [set() for _ in cages]

    for index, cage in enumerate(cages):
        multiplicity: dict[Position, int] = {}
        for cell in cage.cells:
            multiplicity[cell] = multiplicity.get(cell, 0) + 1
        for cell, count in multiplicity.items():
            cage_of.setdefault(cell, []).append((index, count))
            value = grid[cell[0]][cell[1]]
            if value != EMPTY:
                cage_sums[index] += value * count
                cage_filled[index] += count
                cage_seen[index].add(value)

    return SearchState(
        grid=grid,
        row_used=row_used,
        col_used=col_used,
        box_used=box_used,
        cage_of=cage_of,
        cage_targets=[cage.sum for cage in cages],
        cage_sizes=[len(cage.cells) for cage in cages],
        cage_sums=cage_sums,
        cage_filled=cage_filled,
        cage_seen=cage_seen,
    )


def apply_value(state: SearchState, value: int, r: int, c: int) -> None:
    state.grid[r][c] = value
    state.row_used[r].add(value)
    state.col_used[c].add(value)
    state.box_used[box_index(r, c)].add(value)
    for cage_index, count in state.cage_of.get((r, c), ()):
        state.cage_sums[cage_index] += value * count
        state.cage_filled[cage_index] += count
        state.cage_seen[cage_index].add(value)


def revert_value(state: SearchState, value: int, r: int, c: int) -> None:
    state.grid[r][c] = EMPTY
    state.row_used[r].remove(value)
    state.col_used[c].remove(value)
    state.box_used[box_index(r, c)].remove(value)
    for cage_index, count in state.cage_of.get((r, c), ()):
        state.cage_sums[cage_index] -= value * count
        state.cage_filled[cage_index] -= count
        state.cage_seen[cage_index].remove(value)
