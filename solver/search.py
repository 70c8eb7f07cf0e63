import time
from typing import Callable, Optional

from .constraints import check_cages, rescan_candidates_for_cell, select_next_cell, valid_candidates_for_cell
from .state import SearchState, apply_value, revert_value
from .types import Cage, CellOrder, Pruning, SearchStats, TraceLog, TraceStep
from .utils import indent, trace


class SolveInterrupted(Exception):
    pass


def search_first_solution(
    state: SearchState,
    cages: list[Cage],
    cell_order: CellOrder,
    pruning: Pruning,
    trace_enabled: bool,
    trace_log: Optional[TraceLog],
    trace_steps: Optional[list[TraceStep]],
    trace_meta: Optional[dict[str, bool]],
    trace_max_steps: int,
    stats: SearchStats,
    deadline: Optional[float],
    stop_requested: Optional[Callable[[], bool]],
) -> bool:
    grid = state.grid

    if pruning == "rescan":
        def candidates_for(r: int, c: int) -> list[int]:
            return rescan_candidates_for_cell(grid, cages, r, c)
    else:
        def candidates_for(r: int, c: int) -> list[int]:
            return valid_candidates_for_cell(state, r, c)

    def record_step(
        event: str,
        message: str,
        depth: int,
        row: Optional[int] = None,
        col: Optional[int] = None,
        value: Optional[int] = None,
        candidates: Optional[list[int]] = None,
    ) -> None:
        trace(trace_enabled, trace_log, message)
        if trace_steps is None:
            return
        if len(trace_steps) >= trace_max_steps:
            if trace_meta is not None:
                trace_meta["truncated"] = True
            return
        trace_steps.append(
            {
                "event": event,
                "message": message,
                "depth": depth,
                "row": row,
                "col": col,
                "value": value,
                "candidates": candidates,
                "grid": [grid_row[:] for grid_row in grid],
            }
        )

    def check_interrupt() -> None:
        if stop_requested is not None and stop_requested():
            raise SolveInterrupted("Solve stopped on request")
        if deadline is not None and time.monotonic() >= deadline:
            raise SolveInterrupted("Solve exceeded its time budget")

    def descend(depth: int) -> bool:
        stats["nodes_visited"] += 1
        choice = select_next_cell(grid, cell_order, candidates_for)
        if choice is None:
            record_step("validate_complete", f"{indent(depth)}All cells assigned; validating cages", depth)
            return check_cages(grid, cages)

        r, c, candidates = choice
        record_step(
            "select_cell",
            f"{indent(depth)}Select cell ({r}, {c}) with {len(candidates)} candidates",
            depth,
            row=r,
            col=c,
            candidates=candidates,
        )

        for value in candidates:
            check_interrupt()
            record_step("try_value", f"{indent(depth)}Try value {value} at ({r}, {c})", depth, row=r, col=c, value=value)
            apply_value(state, value, r, c)

            if descend(depth + 1):
                record_step(
                    "accept_value",
                    f"{indent(depth)}Accept value {value} at ({r}, {c})",
                    depth,
                    row=r,
                    col=c,
                    value=value,
                )
                return True

            stats["backtracks"] += 1
            record_step(
                "backtrack",
                f"{indent(depth)}Backtrack on ({r}, {c}) value {value}",
                depth,
                row=r,
                col=c,
                value=value,
            )
            revert_value(state, value, r, c)

        record_step("prune_branch", f"{indent(depth)}No valid values remain for ({r}, {c})", depth, row=r, col=c)
        return False

    return descend(0)
