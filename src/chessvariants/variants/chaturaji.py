"""Chaturaji: four players, points for captures and multiple checks.

RED, BLUE, YELLOW and GREEN play clockwise from the four corners.  There
is no check filter: kings are captured outright, which eliminates their
player and turns the remaining army GREY (inert, but still capturable).
Pawns promote to boats, which move like rooks but never castle.
"""

from __future__ import annotations

import logging

from chessvariants.core.board import Board
from chessvariants.core.enums import CHATURAJI_COLORS, Color, PieceType
from chessvariants.core.move import Move
from chessvariants.core.piece import Piece
from chessvariants.core.types import Square, make_square
from chessvariants.variants.base import GameVariant, VariantKind
from chessvariants.variants.common import attacked_by

_LOGGER = logging.getLogger(__name__)

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KING: 3,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 5,
    PieceType.BOAT: 5,
    PieceType.ROOK: 5,
}

# Simultaneous checks on living kings -> bonus points
CHECK_BONUS: dict[int, int] = {2: 1, 3: 5}

_ARMY: tuple[PieceType, ...] = (
    PieceType.BOAT,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.KING,
)


def _corner_squares(color: Color) -> tuple[list[Square], list[Square]]:
    """(back-rank squares in army order, pawn squares) of *color*'s corner."""
    if color == Color.RED:
        back = [make_square(7, c) for c in range(4)]
        pawns = [make_square(6, c) for c in range(4)]
    elif color == Color.BLUE:
        back = [make_square(r, 0) for r in range(4)]
        pawns = [make_square(r, 1) for r in range(4)]
    elif color == Color.YELLOW:
        back = [make_square(0, c) for c in range(7, 3, -1)]
        pawns = [make_square(1, c) for c in range(7, 3, -1)]
    else:
        back = [make_square(r, 7) for r in range(7, 3, -1)]
        pawns = [make_square(r, 6) for r in range(7, 3, -1)]
    return back, pawns


def piece_value(piece: Piece) -> int:
    """Points for capturing *piece*; GREY pieces are worth 0, GREY kings 3."""
    if piece.color == Color.GREY and piece.piece_type != PieceType.KING:
        return 0
    return PIECE_VALUES.get(piece.piece_type, 0)


class ChaturajiVariant(GameVariant):
    kind = VariantKind.CHATURAJI
    players = CHATURAJI_COLORS

    def legal_moves(self, board: Board, piece: Piece) -> list[Move]:
        if piece.color == Color.GREY or not piece.on_board:
            return []
        return piece.pseudo_legal_moves(board)

    def is_check(self, board: Board, color: Color) -> bool:
        """Whether any other living player attacks *color*'s king."""
        king = board.find_king(color)
        if king is None or king.square is None:
            return False
        return attacked_by(board, king.square, self._living_enemies(board, color))

    def is_checkmate(self, board: Board, color: Color) -> bool:
        return False

    def is_stalemate(self, board: Board, color: Color) -> bool:
        return False

    def handle_post_move(self, board: Board, move: Move) -> None:
        """Score the capture, eliminate a captured player, award check bonuses."""
        if move.flag.is_terminal or move.piece is None:
            return
        player = move.piece.color
        captured = move.captured
        if captured is not None:
            board.add_score(player, piece_value(captured))
            if captured.piece_type == PieceType.KING and captured.color != Color.GREY:
                _LOGGER.info("%s eliminated by %s", captured.color.name, player.name)
                board.kill_player(captured.color)

        checks = self.count_checks(board, player)
        bonus = CHECK_BONUS.get(checks, 0)
        if bonus:
            board.add_score(player, bonus)

    def count_checks(self, board: Board, attacker: Color) -> int:
        """Number of living enemy kings *attacker* attacks right now."""
        count = 0
        for color in CHATURAJI_COLORS:
            if color == attacker or board.is_player_dead(color):
                continue
            king = board.find_king(color)
            if king is not None and king.square is not None:
                if attacked_by(board, king.square, (attacker,)):
                    count += 1
        return count

    def is_impossible_to_catch_up(self, board: Board) -> bool:
        """Whether no trailing living player can still reach the leader.

        Each trailing player's optimistic total is its score plus the value
        of every opposing piece still on the board.
        """
        scores = {c: board.score(c) for c in CHATURAJI_COLORS}
        leader = max(CHATURAJI_COLORS, key=lambda c: scores[c])
        best = scores[leader]
        for color in CHATURAJI_COLORS:
            if color == leader or board.is_player_dead(color):
                continue
            potential = sum(piece_value(p) for p in board.pieces() if p.color != color)
            if scores[color] + potential >= best:
                return False
        return True

    def initial_board(self) -> Board:
        board = Board()
        for color in CHATURAJI_COLORS:
            back, pawns = _corner_squares(color)
            for ptype, sq in zip(_ARMY, back):
                board.place_piece(Piece(ptype, color), sq)
            for sq in pawns:
                board.place_piece(Piece(PieceType.PAWN, color), sq)
        return board

    @staticmethod
    def _living_enemies(board: Board, color: Color) -> list[Color]:
        return [
            c for c in CHATURAJI_COLORS if c != color and not board.is_player_dead(c)
        ]
