# First grid in row-major order among all valid Sudoku grids; an empty-cage
# scan-order solve produces it.
FIRST_GRID = [
    [1, 2, 3, 4, 5, 6, 7, 8, 9],
    [4, 5, 6, 7, 8, 9, 1, 2, 3],
    [7, 8, 9, 1, 2, 3, 4, 5, 6],
    [2, 1, 4, 3, 6, 5, 8, 9, 7],
    [3, 6, 5, 8, 9, 7, 2, 1, 4],
    [8, 9, 7, 2, 1, 4, 3, 6, 5],
    [5, 3, 1, 6, 4, 2, 9, 7, 8],
    [6, 4, 2, 9, 7, 8, 5, 3, 1],
    [9, 7, 8, 5, 3, 1, 6, 4, 2],
]

# A solved grid far from the start of scan order; cages built from it force
# the search to backtrack through cage conflicts.
SECOND_GRID = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]

# Horizontal cage lengths per row, each cage 2-5 cells long.
ROW_SEGMENTS = [
    [2, 3, 4],
    [3, 3, 3],
    [4, 5],
    [2, 2, 5],
    [5, 4],
    [3, 4, 2],
    [2, 5, 2],
    [4, 3, 2],
    [3, 2, 4],
]


def cages_from_grid(grid: list[list[int]], row_segments: list[list[int]] = ROW_SEGMENTS) -> list[dict]:
    cages: list[dict] = []
    for r, lengths in enumerate(row_segments):
        start = 0
        for length in lengths:
            cells = [{"row": r, "col": c} for c in range(start, start + length)]
            cages.append({"sum": sum(grid[r][c] for c in range(start, start + length)), "cells": cells})
            start += length
    return cages


def assert_valid_sudoku(test_case, grid: list[list[int]]) -> None:
    digits = set(range(1, 10))
    test_case.assertEqual(len(grid), 9)
    for row in grid:
        test_case.assertEqual(set(row), digits)
    for column in zip(*grid):
        test_case.assertEqual(set(column), digits)
    for box_r in range(0, 9, 3):
        for box_c in range(0, 9, 3):
            box = {grid[r][c] for r in range(box_r, box_r + 3) for c in range(box_c, box_c + 3)}
            test_case.assertEqual(box, digits)


def assert_cages_hold(test_case, grid: list[list[int]], cages: list[dict]) -> None:
    for cage in cages:
        values = [grid[cell["row"]][cell["col"]] for cell in cage["cells"]]
        test_case.assertEqual(sum(values), cage["sum"])
        test_case.assertEqual(len(values), len(set(values)))


def domino_cages_from_grid(grid: list[list[int]]) -> list[dict]:
    # vertical pairs over rows 0-7, then the last row split 4 + 5
    cages: list[dict] = []
    for top in range(0, 8, 2):
        for c in range(9):
            cells = [{"row": top, "col": c}, {"row": top + 1, "col": c}]
            cages.append({"sum": grid[top][c] + grid[top + 1][c], "cells": cells})
    for start, length in ((0, 4), (4, 5)):
        cells = [{"row": 8, "col": c} for c in range(start, start + length)]
        cages.append({"sum": sum(grid[8][c] for c in range(start, start + length)), "cells": cells})
    return cages
