"""
Adjacency resolution for a bounded Minesweeper grid.

Tiles are addressed by a flat row-major index. All boundary handling
(corners and edges) lives here so callers never re-derive it.
"""
from functools import lru_cache
from typing import FrozenSet, Tuple


# ============================================================================
# Constants
# ============================================================================

NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if not (delta_row == 0 and delta_col == 0)
)


# ============================================================================
# Index Conversion
# ============================================================================

def index_to_position(index: int, width: int) -> Tuple[int, int]:
    """Convert flat tile index to (row, col) position."""
    return index // width, index % width


def position_to_index(row: int, col: int, width: int) -> int:
    """Convert (row, col) position to flat tile index."""
    return row * width + col


# ============================================================================
# Neighbor Resolution
# ============================================================================

@lru_cache(maxsize=None)
def neighbors(index: int, width: int, height: int) -> FrozenSet[int]:
    """
    Get the in-bounds 8-neighborhood of a tile.

    Args:
        index: Flat index of the center tile.
        width: Number of columns.
        height: Number of rows.

    Returns:
        Frozen set of neighbor indices. A corner has 3 neighbors, a
        non-corner edge tile 5 and an interior tile 8. There is no
        wraparound across rows or columns.
    """
    row, col = index_to_position(index, width)
    result = []
    for delta_row, delta_col in NEIGHBOR_OFFSETS:
        new_row = row + delta_row
        new_col = col + delta_col
        if 0 <= new_row < height and 0 <= new_col < width:
            result.append(position_to_index(new_row, new_col, width))
    return frozenset(result)
