from typing import Optional

from rules.rules import BOX_SIZE, EMPTY, GRID_SIZE

from .types import Grid, SolvedGrid, TraceLog


def new_grid() -> Grid:
    return [[EMPTY for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]


def box_index(r: int, c: int) -> int:
    return (r // BOX_SIZE) * BOX_SIZE + c // BOX_SIZE


def box_origin(r: int, c: int) -> tuple[int, int]:
    return (r // BOX_SIZE) * BOX_SIZE, (c // BOX_SIZE) * BOX_SIZE


def trace(enabled: bool, trace_log: Optional[TraceLog], message: str) -> None:
    if not enabled:
        return
    if trace_log is not None:
        trace_log.append(message)
    else:
        print(message)


def indent(depth: int) -> str:
    return "  " * depth


def min_max_sum_from_values(values: list[int], count: int) -> tuple[int, int]:
    if count == 0:
        return 0, 0
    if len(values) < count:
        return 1, 0
    sorted_values = sorted(values)
    min_sum = sum(sorted_values[:count])
    max_sum = sum(sorted_values[-count:])
    return min_sum, max_sum


def format_grid_rows(solution: SolvedGrid) -> list[str]:
    return [" ".join(str(value) for value in row) for row in solution]
