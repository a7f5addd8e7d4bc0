"""Duck Chess.

Every turn has two phases: a normal piece move, then the duck is moved to
another empty square.  The duck blocks but can never be captured, there is
no check, and the game is won by capturing the king.  A player left without
a move that keeps their king unattacked is stalemated, which in this
variant wins the game for the stalemated side; the engine only reports the
condition.
"""

from __future__ import annotations

from chessvariants.core.board import Board
from chessvariants.core.enums import Color, MoveFlag, PieceType
from chessvariants.core.move import Move
from chessvariants.core.piece import Piece
from chessvariants.variants.base import GameVariant, VariantKind
from chessvariants.variants.common import candidate_moves, is_king_attacked


class DuckChessVariant(GameVariant):
    kind = VariantKind.DUCK_CHESS

    def legal_moves(self, board: Board, piece: Piece) -> list[Move]:
        is_duck = piece.piece_type == PieceType.DUCK
        if board.waiting_for_duck:
            return piece.pseudo_legal_moves(board) if is_duck else []
        if is_duck or not piece.on_board:
            return []
        return self._piece_moves(board, piece)

    def is_check(self, board: Board, color: Color) -> bool:
        return False

    def is_checkmate(self, board: Board, color: Color) -> bool:
        return False

    def is_stalemate(self, board: Board, color: Color) -> bool:
        """True when no piece move of *color* keeps its own king unattacked."""
        for piece in board.pieces(color):
            for move in self._piece_moves(board, piece):
                with board.simulate(move):
                    safe = not is_king_attacked(board, color)
                if safe:
                    return False
        return True

    def has_legal_move(self, board: Board, color: Color) -> bool:
        if board.waiting_for_duck:
            return bool(self.legal_moves(board, self.duck(board)))
        return super().has_legal_move(board, color)

    def handle_post_move(self, board: Board, move: Move) -> None:
        """Switch between the piece phase and the duck phase."""
        if move.flag.is_terminal:
            return
        board.waiting_for_duck = move.flag != MoveFlag.DUCK

    def duck(self, board: Board) -> Piece:
        """The duck on the board, or a fresh one before its first placement."""
        for piece in board.pieces(Color.SPECIAL):
            if piece.piece_type == PieceType.DUCK:
                return piece
        return Piece(PieceType.DUCK, Color.SPECIAL)

    # -- Internal -----------------------------------------------------------

    @staticmethod
    def _piece_moves(board: Board, piece: Piece) -> list[Move]:
        return [
            move
            for move in candidate_moves(board, piece, check_aware=False)
            if move.captured is None or move.captured.piece_type != PieceType.DUCK
        ]
