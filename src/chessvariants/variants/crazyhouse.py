"""Crazyhouse: captured pieces change sides and can be dropped back in."""

from __future__ import annotations

from chessvariants.core.board import Board
from chessvariants.core.enums import Color, MoveFlag, PieceType
from chessvariants.core.move import Move
from chessvariants.core.piece import Piece
from chessvariants.core.types import row_of
from chessvariants.variants.base import GameVariant, VariantKind
from chessvariants.variants.classical import ClassicalVariant
from chessvariants.variants.common import is_move_safe

_PAWN_FORBIDDEN_ROWS = (0, 7)


class CrazyhouseVariant(GameVariant):
    """Classical rules plus drops from the reserve.

    On-board pieces follow :class:`ClassicalVariant` unchanged.  A piece off
    the board whose type is in its color's reserve is a hand piece: it may
    be dropped on any empty square (pawns not on the first or last rank) as
    long as the drop leaves its own king safe.
    """

    kind = VariantKind.CRAZYHOUSE

    def __init__(self) -> None:
        self._classical = ClassicalVariant()

    def legal_moves(self, board: Board, piece: Piece) -> list[Move]:
        if piece.on_board:
            return self._classical.legal_moves(board, piece)
        if board.reserve_count(piece.color, piece.piece_type) == 0:
            return []
        return self.drop_moves(board, piece)

    def drop_moves(self, board: Board, piece: Piece) -> list[Move]:
        """Every safe drop of the off-board *piece*."""
        drops: list[Move] = []
        for sq in range(64):
            if not board.is_empty(sq):
                continue
            if piece.piece_type == PieceType.PAWN and row_of(sq) in _PAWN_FORBIDDEN_ROWS:
                continue
            drop = Move.drop(piece, sq)
            if is_move_safe(board, drop, piece.color):
                drops.append(drop)
        return drops

    def is_check(self, board: Board, color: Color) -> bool:
        return self._classical.is_check(board, color)

    def is_checkmate(self, board: Board, color: Color) -> bool:
        if not self.is_check(board, color):
            return False
        return not self.has_legal_move(board, color)

    def is_stalemate(self, board: Board, color: Color) -> bool:
        if self.is_check(board, color):
            return False
        return not self.has_legal_move(board, color)

    def has_legal_move(self, board: Board, color: Color) -> bool:
        if self._classical.has_legal_move(board, color):
            return True
        return any(self.drop_moves(board, p) for p in self.reserve_pieces(board, color))

    def reserve_pieces(self, board: Board, color: Color) -> list[Piece]:
        """One off-board representative piece per type in *color*'s hand."""
        return [Piece(pt, color) for pt in sorted(board.reserve(color))]

    def handle_post_move(self, board: Board, move: Move) -> None:
        """Credit captures to the capturer's hand and debit drops."""
        if move.flag.is_terminal:
            return
        assert move.piece is not None
        if move.flag == MoveFlag.DROP:
            board.remove_from_reserve(move.piece.color, move.piece.piece_type)
        captured = move.captured
        if captured is not None:
            # Promoted pieces go to the hand as their promoted type.
            board.add_to_reserve(move.piece.color, captured.piece_type)

    def initial_board(self) -> Board:
        board = Board.initial()
        board.crazyhouse_mode = True
        return board
