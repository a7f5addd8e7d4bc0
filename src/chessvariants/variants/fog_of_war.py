"""Fog of War: no check, the game is won by capturing the king.

Which squares a player can see is a presentation concern; the rules only
drop the king-safety filter.
"""

from __future__ import annotations

from chessvariants.core.board import Board
from chessvariants.core.enums import Color
from chessvariants.core.move import Move
from chessvariants.core.piece import Piece
from chessvariants.variants.base import GameVariant, VariantKind
from chessvariants.variants.common import candidate_moves


class FogOfWarVariant(GameVariant):
    kind = VariantKind.FOG_OF_WAR

    def legal_moves(self, board: Board, piece: Piece) -> list[Move]:
        if not piece.on_board:
            return []
        # Kings may move into or stay in an attack.
        return candidate_moves(board, piece, check_aware=False)

    def is_check(self, board: Board, color: Color) -> bool:
        return False

    def is_checkmate(self, board: Board, color: Color) -> bool:
        return False

    def is_stalemate(self, board: Board, color: Color) -> bool:
        return not self.has_legal_move(board, color)
