"""Core domain layer: board, pieces, moves and geometry, no variant rules.

Quick start::

    from chessvariants.core import Board, E2

    board = Board.initial()
    pawn = board[E2]
    for move in pawn.pseudo_legal_moves(board):
        print(move)
"""

from chessvariants.core.board import Board
from chessvariants.core.enums import (
    CHATURAJI_COLORS,
    PLAYER_COLORS,
    Color,
    MoveFlag,
    PieceType,
)
from chessvariants.core.move import Move
from chessvariants.core.move_generator import (
    is_promotion_square,
    pawn_attack_squares,
    pawn_direction,
    pseudo_legal_moves,
)
from chessvariants.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    parse_fen,
)
from chessvariants.core.piece import Piece
from chessvariants.core.types import (
    E2,
    Square,
    col_of,
    make_square,
    parse_square,
    row_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CHATURAJI_COLORS",
    "PLAYER_COLORS",
    "Color",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "E2",
    "Square",
    "col_of",
    "make_square",
    "parse_square",
    "row_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "Piece",
    # Geometry
    "is_promotion_square",
    "pawn_attack_squares",
    "pawn_direction",
    "pseudo_legal_moves",
    # Set-up notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "parse_fen",
]
