"""Rule helpers shared by the variant engines.

These are free functions rather than base-class methods: each variant picks
the pieces it needs (attack scan, castling, en passant, king-safety check)
without inheriting the rest of another variant's behaviour.
"""

from __future__ import annotations

from collections.abc import Iterable

from chessvariants.core.board import Board
from chessvariants.core.enums import Color, MoveFlag, PieceType
from chessvariants.core.move import Move
from chessvariants.core.move_generator import (
    pawn_attack_squares,
    pawn_direction,
    pseudo_legal_moves,
)
from chessvariants.core.piece import Piece
from chessvariants.core.types import Square, col_of, make_square, row_of

# King destination column -> (rook column, squares that must be empty, transit column)
_CASTLING_SIDES: tuple[tuple[int, int, tuple[int, ...], int], ...] = (
    (6, 7, (5, 6), 5),
    (2, 0, (1, 2, 3), 3),
)

_KING_HOME_COL = 4


# -- Attack detection -------------------------------------------------------


def attacked_by(board: Board, sq: Square, attackers: Iterable[Color]) -> bool:
    """Whether any piece of the *attackers* colors attacks *sq*.

    Full scan of the board, regenerating pseudo-legal moves for every
    attacking piece.  Pawns attack their two diagonal squares whether or not
    they could capture there right now.
    """
    colors = frozenset(attackers)
    for piece in board.pieces():
        if piece.color not in colors:
            continue
        if piece.piece_type == PieceType.PAWN:
            if sq in pawn_attack_squares(piece):
                return True
            continue
        for move in pseudo_legal_moves(board, piece):
            if move.to_sq == sq:
                return True
    return False


def is_square_attacked(board: Board, sq: Square, defender: Color) -> bool:
    """Whether an active enemy of *defender* attacks *sq*."""
    enemies = [
        c
        for c in Color
        if c.is_player and c != defender and not board.is_player_dead(c)
    ]
    return attacked_by(board, sq, enemies)


def is_king_attacked(board: Board, color: Color) -> bool:
    """Whether *color*'s king stands attacked; False once it is gone."""
    king = board.find_king(color)
    if king is None or king.square is None:
        return False
    return is_square_attacked(board, king.square, color)


def is_move_safe(board: Board, move: Move, color: Color) -> bool:
    """Whether *move* leaves *color*'s king unattacked."""
    with board.simulate(move):
        return not is_king_attacked(board, color)


# -- Special moves ----------------------------------------------------------


def castling_moves(board: Board, king: Piece, in_check: bool) -> list[Move]:
    """Castling moves available to *king*.

    *in_check* is the variant's own verdict: engines without check pass
    False so castling out of an attack stays possible.  The square the king
    passes through must never be attacked.
    """
    if king.has_moved or king.square is None or in_check:
        return []
    if col_of(king.square) != _KING_HOME_COL:
        return []
    row = row_of(king.square)
    moves: list[Move] = []
    for king_to, rook_col, between, transit in _CASTLING_SIDES:
        rook = board[make_square(row, rook_col)]
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != king.color
            or rook.has_moved
        ):
            continue
        if any(not board.is_empty(make_square(row, c)) for c in between):
            continue
        if is_square_attacked(board, make_square(row, transit), king.color):
            continue
        moves.append(Move.create(king, make_square(row, king_to), MoveFlag.CASTLING))
    return moves


def en_passant_moves(board: Board, pawn: Piece) -> list[Move]:
    """The en passant capture of *pawn*, if the last piece move allows one."""
    last = board.last_piece_move
    if last is None or last.piece is None or pawn.square is None:
        return []
    enemy = last.piece
    if (
        enemy.piece_type != PieceType.PAWN
        or enemy.color == pawn.color
        or last.from_sq is None
        or last.to_sq is None
        or abs(row_of(last.from_sq) - row_of(last.to_sq)) != 2
    ):
        return []
    if row_of(last.to_sq) != pawn.row or abs(col_of(last.to_sq) - pawn.col) != 1:
        return []
    direction = pawn_direction(pawn.color)
    if direction is None:
        return []
    target = make_square(pawn.row + direction[0], col_of(last.to_sq))
    if not board.is_empty(target):
        return []
    return [Move.create(pawn, target, MoveFlag.EN_PASSANT, enemy)]


def candidate_moves(board: Board, piece: Piece, check_aware: bool) -> list[Move]:
    """Pseudo-legal moves plus castling and en passant.

    With *check_aware* castling is refused while the king is attacked.
    """
    moves = pseudo_legal_moves(board, piece)
    if piece.piece_type == PieceType.KING:
        in_check = check_aware and is_king_attacked(board, piece.color)
        moves.extend(castling_moves(board, piece, in_check))
    elif piece.piece_type == PieceType.PAWN:
        moves.extend(en_passant_moves(board, piece))
    return moves
