from typing import Optional

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from rules.rules import GRID_SIZE
from solver.solver import SolveInterrupted, solve_killer
from solver.utils import format_grid_rows
from solver.validation import cage_issues, normalize_cages


class CellModel(BaseModel):
    row: int = Field(..., ge=0, le=GRID_SIZE - 1)
    col: int = Field(..., ge=0, le=GRID_SIZE - 1)


class CageModel(BaseModel):
    sum: int = Field(..., description="Required total of the digits placed in the cage")
    cells: list[CellModel] = Field(..., description="Cells belonging to the cage")


class SolveRequest(BaseModel):
    cages: list[CageModel] = Field(..., description="Cage partition of the grid; an empty list solves a plain Sudoku")
    known_grid: Optional[list[list[Optional[int]]]] = Field(
        default=None,
        description="9x9 grid with digits for known values and 0 or null for empty cells",
    )
    cell_order: str = Field(default="scan", description="Cell selection order: scan or fewest_candidates.")
    pruning: str = Field(default="incremental", description="Constraint checking: incremental or rescan.")
    validate_cages: bool = Field(
        default=True,
        alias="validate",
        description="Reject overlapping cages, repeated cells, and infeasible sums before solving.",
    )
    max_seconds: Optional[float] = Field(default=None, ge=0.0, description="Time budget for the search. Null runs to completion.")
    trace: bool = Field(default=False, description="Include solver trace output in the response")
    trace_steps: bool = Field(default=False, description="Include structured trace steps for walkthrough/debugging.")
    trace_max_steps: int = Field(default=1000, ge=1, le=20000, description="Maximum number of trace steps to return.")

    model_config = {"populate_by_name": True}


class TraceStepResponse(BaseModel):
    event: str
    message: str
    depth: int
    row: Optional[int] = None
    col: Optional[int] = None
    value: Optional[int] = None
    candidates: Optional[list[int]] = None
    grid: list[list[int]]


class SolveResponse(BaseModel):
    solved: bool
    solution: Optional[list[list[int]]] = None
    grid_rows: Optional[list[str]] = None
    grid_text: Optional[str] = None
    message: str
    nodes_visited: int
    trace: Optional[list[str]] = None
    trace_steps: Optional[list[TraceStepResponse]] = None
    trace_truncated: bool = False


class ValidateRequest(BaseModel):
    cages: list[CageModel]


class ValidateResponse(BaseModel):
    valid: bool
    issues: list[str]


app = FastAPI(
    title="Killer Sudoku Solver API",
    description="Solve 9x9 Killer Sudoku puzzles: standard Sudoku rules plus cages whose distinct digits sum to a target.",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://127.0.0.1:5173", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/cages/validate", response_model=ValidateResponse)
def validate(request: ValidateRequest) -> ValidateResponse:
    cages = normalize_cages([cage.model_dump() for cage in request.cages])
    issues = cage_issues(cages)
    return ValidateResponse(valid=not issues, issues=issues)


@app.post("/solve", response_model=SolveResponse)
def solve(request: SolveRequest) -> SolveResponse:
    trace_enabled = request.trace or request.trace_steps
    trace_log: list[str] = []
    trace_steps: list[dict[str, object]] = []
    trace_meta = {"truncated": False}
    stats: dict[str, int] = {}

    try:
        cages = normalize_cages([cage.model_dump() for cage in request.cages])
        if request.validate_cages:
            issues = cage_issues(cages)
            if issues:
                raise ValueError("; ".join(issues))

        solution = solve_killer(
            cages,
            known_grid=request.known_grid,
            cell_order=request.cell_order,
            pruning=request.pruning,
            trace=trace_enabled,
            trace_log=trace_log if trace_enabled else None,
            trace_steps=trace_steps if request.trace_steps else None,
            trace_meta=trace_meta,
            trace_max_steps=request.trace_max_steps,
            stats=stats,
            max_seconds=request.max_seconds,
        )
    except SolveInterrupted as exc:
        raise HTTPException(status_code=status.HTTP_408_REQUEST_TIMEOUT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    response = SolveResponse(
        solved=solution is not None,
        message="Solved." if solution is not None else "No solution exists for these cages.",
        nodes_visited=stats["nodes_visited"],
        trace=trace_log if request.trace else None,
        trace_steps=trace_steps if request.trace_steps else None,
        trace_truncated=trace_meta["truncated"],
    )
    if solution is not None:
        grid_rows = format_grid_rows(solution)
        response.solution = solution
        response.grid_rows = grid_rows
        response.grid_text = "\n".join(grid_rows)
    return response
