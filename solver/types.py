from dataclasses import dataclass
from typing import Optional


Grid = list[list[int]]
SolvedGrid = list[list[int]]
KnownGrid = list[list[Optional[int]]]
Position = tuple[int, int]
TraceLog = list[str]
TraceStep = dict[str, object]
SearchStats = dict[str, int]
CellOrder = str
Pruning = str


@dataclass(frozen=True)
class Cage:
    sum: int
    cells: tuple[Position, ...]
