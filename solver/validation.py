from typing import Any, Optional

from rules.rules import EMPTY, GRID_SIZE, MAX_DIGIT, MIN_DIGIT, cage_sum_bounds

from .types import Cage, CellOrder, Grid, Position, Pruning
from .utils import box_index, new_grid


CELL_ORDERS = ("scan", "fewest_candidates")
PRUNING_MODES = ("incremental", "rescan")


def normalize_cages(cages: Any) -> list[Cage]:
    if not isinstance(cages, (list, tuple)):
        raise ValueError("cages must be a list")

    normalized: list[Cage] = []
    for index, cage in enumerate(cages):
        if isinstance(cage, Cage):
            target, cells = cage.sum, cage.cells
        elif isinstance(cage, dict):
            if "sum" not in cage:
                raise ValueError(f"cage {index} must include 'sum'")
            if "cells" not in cage:
                raise ValueError(f"cage {index} must include 'cells'")
            target, cells = cage["sum"], cage["cells"]
        else:
            raise ValueError(f"cage {index} must be an object with 'sum' and 'cells'")

        if isinstance(target, bool) or not isinstance(target, int):
            raise ValueError(f"cage {index} sum must be an integer")
        if not isinstance(cells, (list, tuple)):
            raise ValueError(f"cage {index} cells must be a list")

        normalized.append(Cage(sum=target, cells=tuple(_normalize_position(cell, index) for cell in cells)))

    return normalized


def _normalize_position(cell: Any, cage_index: int) -> Position:
    if isinstance(cell, dict):
        if "row" not in cell or "col" not in cell:
            raise ValueError(f"cage {cage_index} cells must include 'row' and 'col'")
        r, c = cell["row"], cell["col"]
    elif isinstance(cell, (list, tuple)) and len(cell) == 2:
        r, c = cell
    else:
        raise ValueError(f"cage {cage_index} cells must be {{row, col}} objects or [row, col] pairs")

    for value in (r, c):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"cage {cage_index} cell coordinates must be integers")
        if value < 0 or value >= GRID_SIZE:
            raise ValueError(f"cage {cage_index} cell coordinates must be between 0 and {GRID_SIZE - 1}")
    return r, c


def normalize_known_grid(known_grid: Optional[Any]) -> Grid:
    if known_grid is None:
        return new_grid()

    if not isinstance(known_grid, list) or len(known_grid) != GRID_SIZE:
        raise ValueError(f"known_grid must be a {GRID_SIZE}x{GRID_SIZE} list")

    grid: Grid = []
    for row in known_grid:
        if not isinstance(row, list) or len(row) != GRID_SIZE:
            raise ValueError(f"known_grid must be a {GRID_SIZE}x{GRID_SIZE} list")

        normalized_row = []
        for value in row:
            if value is None:
                normalized_row.append(EMPTY)
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError("known_grid entries must be integers or None")
            if value != EMPTY and (value < MIN_DIGIT or value > MAX_DIGIT):
                raise ValueError(f"known_grid integers must be {EMPTY} (empty) or between {MIN_DIGIT} and {MAX_DIGIT}")
            normalized_row.append(value)

        grid.append(normalized_row)

    _validate_known_digits(grid)
    return grid


def _validate_known_digits(grid: Grid) -> None:
    seen: set[tuple[str, int, int]] = set()
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            value = grid[r][c]
            if value == EMPTY:
                continue
            for key in (("row", r, value), ("column", c, value), ("box", box_index(r, c), value)):
                if key in seen:
                    raise ValueError(f"known_grid repeats {value} in {key[0]} {key[1]} at ({r}, {c})")
                seen.add(key)


def cage_issues(cages: list[Cage]) -> list[str]:
    issues: list[str] = []
    owners: dict[Position, int] = {}

    for index, cage in enumerate(cages):
        if not cage.cells:
            issues.append(f"cage {index} has no cells")
            continue

        unique_cells = set(cage.cells)
        if len(unique_cells) != len(cage.cells):
            issues.append(f"cage {index} lists the same cell more than once")

        min_sum, max_sum = cage_sum_bounds(len(unique_cells))
        if cage.sum < min_sum or cage.sum > max_sum:
            if min_sum > max_sum:
                issues.append(f"cage {index} has {len(unique_cells)} cells, more than there are distinct digits")
            else:
                issues.append(
                    f"cage {index} sum {cage.sum} is impossible for {len(unique_cells)} cells; "
                    f"it must be between {min_sum} and {max_sum}"
                )

        for cell in sorted(unique_cells):
            owner = owners.get(cell)
            if owner is not None:
                issues.append(f"cell ({cell[0]}, {cell[1]}) belongs to both cage {owner} and cage {index}")
            else:
                owners[cell] = index

    return issues


def validate_cages(cages: list[Cage]) -> None:
    issues = cage_issues(cages)
    if issues:
        raise ValueError("; ".join(issues))


def validate_solve_options(
    cell_order: CellOrder,
    pruning: Pruning,
    max_seconds: Optional[float],
    trace_max_steps: int,
) -> None:
    if cell_order not in CELL_ORDERS:
        raise ValueError("cell_order must be one of: scan, fewest_candidates")
    if pruning not in PRUNING_MODES:
        raise ValueError("pruning must be one of: incremental, rescan")
    if max_seconds is not None and max_seconds < 0:
        raise ValueError("max_seconds must be >= 0")
    if trace_max_steps < 1:
        raise ValueError("trace_max_steps must be >= 1")
