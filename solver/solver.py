import time
from typing import Any, Callable, Optional

from rules.rules import DIGITS, GRID_SIZE

from .constraints import check_cages
from .search import SolveInterrupted, search_first_solution
from .state import build_initial_state
from .types import CellOrder, KnownGrid, Pruning, SearchStats, SolvedGrid, TraceLog, TraceStep
from .utils import box_index, trace as _trace
from .validation import normalize_cages, normalize_known_grid, validate_solve_options


__all__ = ["SolveInterrupted", "solve_killer", "verify_solution"]


def solve_killer(
    cages: Any,
    known_grid: Optional[KnownGrid] = None,
    cell_order: CellOrder = "scan",
    pruning: Pruning = "incremental",
    trace: bool = False,
    trace_log: Optional[TraceLog] = None,
    trace_steps: Optional[list[TraceStep]] = None,
    trace_meta: Optional[dict[str, bool]] = None,
    trace_max_steps: int = 1000,
    stats: Optional[SearchStats] = None,
    max_seconds: Optional[float] = None,
    stop_requested: Optional[Callable[[], bool]] = None,
) -> Optional[SolvedGrid]:
    validate_solve_options(cell_order, pruning, max_seconds, trace_max_steps)
    normalized_cages = normalize_cages(cages)
    grid = normalize_known_grid(known_grid)

    if stats is None:
        stats = {}
    stats["nodes_visited"] = 0
    stats["backtracks"] = 0

    known_count = sum(1 for row in grid for value in row if value)
    _trace(
        trace,
        trace_log,
        f"Initialized search: cages={len(normalized_cages)}, known_cells={known_count}, "
        f"cell_order={cell_order}, pruning={pruning}",
    )

    if not check_cages(grid, normalized_cages):
        _trace(trace, trace_log, "Known cells already break a cage; no solution")
        return None

    state = build_initial_state(grid, normalized_cages)
    deadline = None if max_seconds is None else time.monotonic() + max_seconds

    solved = search_first_solution(
        state=state,
        cages=normalized_cages,
        cell_order=cell_order,
        pruning=pruning,
        trace_enabled=trace,
        trace_log=trace_log,
        trace_steps=trace_steps,
        trace_meta=trace_meta,
        trace_max_steps=trace_max_steps,
        stats=stats,
        deadline=deadline,
        stop_requested=stop_requested,
    )
    if not solved:
        _trace(trace, trace_log, "Search exhausted; no solution")
        return None

    return [row[:] for row in state.grid]


def verify_solution(grid: SolvedGrid, cages: Any) -> bool:
    if len(grid) != GRID_SIZE or any(len(row) != GRID_SIZE for row in grid):
        return False

    expected = set(DIGITS)
    boxes: list[set[int]] = [set() for _ in range(GRID_SIZE)]
    for r, row in enumerate(grid):
        if set(row) != expected:
            return False
        for c, value in enumerate(row):
            boxes[box_index(r, c)].add(value)
    for c in range(GRID_SIZE):
        if {grid[r][c] for r in range(GRID_SIZE)} != expected:
            return False
    if any(box != expected for box in boxes):
        return False

    return check_cages(grid, normalize_cages(cages))
