"""
Position keys for the transposition cache - optimized for int8 arrays.
"""

import numpy as np


def position_key(board: np.ndarray, side_to_move: int) -> bytes:
    """
    Cache key for (board, side to move).

    The cell bytes come first in fixed order, the mover is appended as a
    trailing byte, so identical cells with a different mover never collide.
    """
    return board.astype(np.int8, copy=False).tobytes() + bytes((side_to_move,))
