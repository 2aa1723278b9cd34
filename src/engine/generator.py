"""
Board generation: lazy mine placement on the first reveal.

Mines are kept out of the first-clicked tile and its whole neighborhood,
so the first click always lands on a zero and opens a region.
"""
import logging
from typing import Iterable, List

import numpy as np

from .adjacency import neighbors
from .board import Board
from .errors import GenerationInfeasible
from .tile import MINE, Tile

logger = logging.getLogger(__name__)


def excluded_region(index: int, width: int, height: int) -> List[int]:
    """Get the first-click tile and its neighbors, sorted."""
    return sorted(neighbors(index, width, height) | {index})


def generate(
    board: Board,
    excluded_index: int,
    rng: np.random.Generator,
) -> Board:
    """
    Place mines on a blank board, keeping a first-click region clear.

    Args:
        board: Blank board to generate from.
        excluded_index: Tile the player clicked first.
        rng: Random source; every candidate tile has equal probability
            of receiving a mine.

    Returns:
        New board with mines laid and counts computed.

    Raises:
        GenerationInfeasible: If the mines do not fit outside the
            excluded region.
    """
    excluded = set(excluded_region(excluded_index, board.width, board.height))
    candidates = [i for i in range(board.tile_count) if i not in excluded]

    if board.mine_total > len(candidates):
        raise GenerationInfeasible(
            f"Cannot place {board.mine_total} mines in {len(candidates)} "
            f"tiles outside the first-click region"
        )

    chosen = rng.choice(len(candidates), size=board.mine_total, replace=False)
    mines = [candidates[i] for i in chosen]
    logger.debug(
        "Generated %dx%d board, first click %d, mines at %s",
        board.width, board.height, excluded_index, sorted(mines),
    )
    return lay_mines(board, mines)


def lay_mines(board: Board, mine_indices: Iterable[int]) -> Board:
    """
    Lay mines at fixed positions and compute every tile's count.

    Tile states are carried over unchanged.

    Args:
        board: Board without mines.
        mine_indices: Tiles to mine; must hold exactly mine_total
            distinct indices.

    Returns:
        New board with mines laid.
    """
    if board.mines_laid:
        raise ValueError("Mines have already been laid on this board")

    mines = set(int(i) for i in mine_indices)
    if len(mines) != board.mine_total:
        raise ValueError(
            f"Expected {board.mine_total} distinct mines, got {len(mines)}"
        )
    if any(not board.is_valid_index(i) for i in mines):
        raise ValueError("Mine index out of range")

    tiles = []
    for index, tile in enumerate(board.tiles):
        if index in mines:
            count = MINE
        else:
            count = len(mines & neighbors(index, board.width, board.height))
        tiles.append(Tile(count, tile.state))

    return Board(
        board.config,
        tuple(tiles),
        mines_laid=True,
        open_count=board.open_count,
    )
