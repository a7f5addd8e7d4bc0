"""Standard chess rules."""

from __future__ import annotations

from chessvariants.core.board import Board
from chessvariants.core.enums import Color
from chessvariants.core.move import Move
from chessvariants.core.piece import Piece
from chessvariants.variants.base import GameVariant, VariantKind
from chessvariants.variants.common import (
    candidate_moves,
    is_king_attacked,
    is_move_safe,
)


class ClassicalVariant(GameVariant):
    """Orthodox chess: a move may never leave the mover's king attacked."""

    kind = VariantKind.CLASSICAL

    def legal_moves(self, board: Board, piece: Piece) -> list[Move]:
        if not piece.on_board:
            return []
        return [
            move
            for move in candidate_moves(board, piece, check_aware=True)
            if is_move_safe(board, move, piece.color)
        ]

    def is_check(self, board: Board, color: Color) -> bool:
        return is_king_attacked(board, color)

    def is_checkmate(self, board: Board, color: Color) -> bool:
        if not self.is_check(board, color):
            return False
        return not self.has_legal_move(board, color)

    def is_stalemate(self, board: Board, color: Color) -> bool:
        if self.is_check(board, color):
            return False
        return not self.has_legal_move(board, color)
