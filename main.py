import argparse
import json
from pathlib import Path
from typing import Any, Optional

from solver.solver import SolveInterrupted, solve_killer
from solver.types import CellOrder, KnownGrid, SolvedGrid
from solver.utils import format_grid_rows
from solver.validation import normalize_cages, validate_cages


def run(
    cages: Any,
    known_grid: Optional[KnownGrid] = None,
    cell_order: CellOrder = "scan",
    max_seconds: Optional[float] = None,
) -> Optional[SolvedGrid]:
    # boundary validation
    normalized_cages = normalize_cages(cages)
    validate_cages(normalized_cages)

    return solve_killer(normalized_cages, known_grid=known_grid, cell_order=cell_order, max_seconds=max_seconds)


def run_with_trace(
    cages: Any,
    known_grid: Optional[KnownGrid] = None,
    cell_order: CellOrder = "scan",
    max_seconds: Optional[float] = None,
) -> tuple[Optional[SolvedGrid], list[str]]:
    normalized_cages = normalize_cages(cages)
    validate_cages(normalized_cages)

    trace_log: list[str] = []
    result = solve_killer(
        normalized_cages,
        known_grid=known_grid,
        cell_order=cell_order,
        max_seconds=max_seconds,
        trace=True,
        trace_log=trace_log,
    )
    return result, trace_log


def load_puzzle_from_file(input_path: str) -> tuple[list[Any], Optional[KnownGrid], CellOrder]:
    path = Path(input_path)
    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValueError(f"input file not found: {input_path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"input file is not valid JSON: {input_path}") from exc

    if not isinstance(payload, dict):
        raise ValueError("JSON root must be an object")

    cages = payload.get("cages")
    if cages is None:
        raise ValueError("JSON must include 'cages'")
    if not isinstance(cages, list):
        raise ValueError("'cages' must be a list")

    known_grid = payload.get("known_grid")
    cell_order = payload.get("cell_order", "scan")
    return cages, known_grid, cell_order


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve a Killer Sudoku from a JSON input file")
    parser.add_argument("--input", required=True, help="Path to a JSON file with cages and an optional known_grid")
    parser.add_argument("--trace", action="store_true", help="Include solver trace output")
    parser.add_argument("--max-seconds", type=float, default=None, help="Give up after this many seconds")
    return parser


if __name__ == "__main__":
    args = _build_parser().parse_args()

    try:
        cages, known_grid, cell_order = load_puzzle_from_file(args.input)
        if args.trace:
            solution, trace_log = run_with_trace(
                cages, known_grid=known_grid, cell_order=cell_order, max_seconds=args.max_seconds
            )
            output: dict[str, Any] = {"solution": solution, "trace": trace_log}
        else:
            solution = run(cages, known_grid=known_grid, cell_order=cell_order, max_seconds=args.max_seconds)
            output = {"solution": solution}
        if solution is not None:
            output["grid_rows"] = format_grid_rows(solution)
        print(json.dumps(output, indent=2))
    except (SolveInterrupted, ValueError) as exc:
        raise SystemExit(f"Error: {exc}")
