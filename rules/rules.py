GRID_SIZE = 9
BOX_SIZE = 3
EMPTY = 0
MIN_DIGIT = 1
MAX_DIGIT = 9
DIGITS = tuple(range(MIN_DIGIT, MAX_DIGIT + 1))


def cage_sum_bounds(cell_count: int) -> tuple[int, int]:
    if cell_count < 1 or cell_count > len(DIGITS):
        return 1, 0
    min_sum = cell_count * (cell_count + 1) // 2
    max_sum = MAX_DIGIT * cell_count - cell_count * (cell_count - 1) // 2
    return min_sum, max_sum
