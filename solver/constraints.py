from typing import Callable, Optional

from rules.rules import BOX_SIZE, DIGITS, EMPTY, GRID_SIZE

from .state import SearchState
from .types import Cage, CellOrder, Grid, Position
from .utils import box_index, box_origin, min_max_sum_from_values


CellChoice = tuple[int, int, list[int]]


def find_empty(grid: Grid) -> Optional[Position]:
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            if grid[r][c] == EMPTY:
                return r, c
    return None


def is_valid(grid: Grid, value: int, r: int, c: int) -> bool:
    for i in range(GRID_SIZE):
        if i != c and grid[r][i] == value:
            return False
        if i != r and grid[i][c] == value:
            return False

    box_r, box_c = box_origin(r, c)
    for rr in range(box_r, box_r + BOX_SIZE):
        for cc in range(box_c, box_c + BOX_SIZE):
            if (rr, cc) != (r, c) and grid[rr][cc] == value:
                return False
    return True


def check_cages(grid: Grid, cages: list[Cage]) -> bool:
    for cage in cages:
        current_sum = 0
        is_full = True
        seen: set[int] = set()

        for r, c in cage.cells:
            value = grid[r][c]
            if value == EMPTY:
                is_full = False
                continue
            if value in seen:
                return False
            seen.add(value)
            current_sum += value

        if is_full:
            if current_sum != cage.sum:
                return False
        elif current_sum >= cage.sum:
            return False

    return True


def can_place_value(state: SearchState, value: int, r: int, c: int) -> bool:
    if value in state.row_used[r] or value in state.col_used[c] or value in state.box_used[box_index(r, c)]:
        return False

    for cage_index, count in state.cage_of.get((r, c), ()):
        seen = state.cage_seen[cage_index]
        if count > 1 or value in seen:
            return False

        target = state.cage_targets[cage_index]
        total = state.cage_sums[cage_index] + value * count
        remaining_cells = state.cage_sizes[cage_index] - state.cage_filled[cage_index] - count

        if remaining_cells == 0:
            if total != target:
                return False
            continue
        if total >= target:
            return False

        # the rest of the cage must still be fillable with unused distinct digits
        remaining_digits = [digit for digit in DIGITS if digit != value and digit not in seen]
        min_sum, max_sum = min_max_sum_from_values(remaining_digits, remaining_cells)
        if not min_sum <= target - total <= max_sum:
            return False

    return True


def valid_candidates_for_cell(state: SearchState, r: int, c: int) -> list[int]:
    return [value for value in DIGITS if can_place_value(state, value, r, c)]


def rescan_candidates_for_cell(grid: Grid, cages: list[Cage], r: int, c: int) -> list[int]:
    candidates: list[int] = []
    for value in DIGITS:
        grid[r][c] = value
        if is_valid(grid, value, r, c) and check_cages(grid, cages):
            candidates.append(value)
    grid[r][c] = EMPTY
    return candidates


def select_next_cell(
    grid: Grid,
    cell_order: CellOrder,
    candidates_for: Callable[[int, int], list[int]],
) -> Optional[CellChoice]:
    if cell_order == "scan":
        position = find_empty(grid)
        if position is None:
            return None
        r, c = position
        return r, c, candidates_for(r, c)

    best_choice: Optional[CellChoice] = None
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            if grid[r][c] != EMPTY:
                continue
            candidates = candidates_for(r, c)
            if not candidates:
                return r, c, []
            if best_choice is None or len(candidates) < len(best_choice[2]):
                best_choice = (r, c, candidates)

    return best_choice
