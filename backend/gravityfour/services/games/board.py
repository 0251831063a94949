"""Board primitives.

A board is a list of rows, row 0 at the top. Each cell holds ``None`` or a
player colour string. Pieces settle at the highest free row index of their
column. Everything here is deterministic; only
``collapse_column_after_removal`` writes to the board it is given.
"""

from typing import Dict, List, Optional

Board = List[List[Optional[str]]]

DEFAULT_ROWS = 6
DEFAULT_COLS = 7
CONNECT = 4


def empty_board(rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> Board:
    return [[None for _ in range(cols)] for _ in range(rows)]


def in_bounds(board: Board, row: int, col: int) -> bool:
    return 0 <= row < len(board) and 0 <= col < len(board[0])


def lowest_empty_row(board: Board, col: int) -> Optional[int]:
    """Return the bottom-most empty row in ``col``, or None when it is full."""
    for r in range(len(board) - 1, -1, -1):
        if board[r][col] is None:
            return r
    return None


def collapse_column_after_removal(board: Board, col: int, removed_row: int) -> None:
    """Let every piece above ``removed_row`` fall into the gap, keeping order."""
    target = removed_row
    for r in range(removed_row - 1, -1, -1):
        if board[r][col] is not None:
            if board[target][col] is None:
                board[target][col] = board[r][col]
                board[r][col] = None
            target -= 1


def check_win(board: Board, color: str) -> Optional[List[Dict[str, int]]]:
    """Find a line of four ``color`` pieces.

    Scan order is horizontal (row-major), vertical, ``/`` diagonal and
    finally ``\\`` diagonal; the first hit wins. Coordinates are returned in
    the order they lie along the line.
    """
    rows = len(board)
    cols = len(board[0])
    # (row step, col step, row range, col range)
    directions = (
        (0, 1, range(rows), range(cols - CONNECT + 1)),
        (1, 0, range(rows - CONNECT + 1), range(cols)),
        (-1, 1, range(CONNECT - 1, rows), range(cols - CONNECT + 1)),
        (1, 1, range(rows - CONNECT + 1), range(cols - CONNECT + 1)),
    )
    for dr, dc, row_range, col_range in directions:
        for r in row_range:
            for c in col_range:
                line = [(r + i * dr, c + i * dc) for i in range(CONNECT)]
                if all(board[lr][lc] == color for lr, lc in line):
                    return [{'row': lr, 'col': lc} for lr, lc in line]
    return None


def is_full(board: Board) -> bool:
    return all(cell is not None for row in board for cell in row)


def render_board(board: Board) -> str:
    symbols = {None: '.', 'red': 'R', 'yellow': 'Y'}
    lines = [' '.join(symbols.get(cell, '?') for cell in row) for row in board]
    lines.append(' '.join(str(c) for c in range(len(board[0]))))
    return '\n'.join(lines)
