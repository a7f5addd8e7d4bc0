"""Variant contract shared by every rule engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum

from chessvariants.core.board import Board
from chessvariants.core.enums import Color
from chessvariants.core.move import Move
from chessvariants.core.piece import Piece

# 50 full moves without a capture or pawn move
FIFTY_MOVE_HALFMOVES = 100


class VariantKind(IntEnum):
    """The closed set of supported variants."""

    CLASSICAL = 0
    FOG_OF_WAR = 1
    DUCK_CHESS = 2
    CRAZYHOUSE = 3
    CHATURAJI = 4

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_name(cls, name: str) -> VariantKind:
        """Resolve a display name ("Fog of War") or enum name ("FOG_OF_WAR")."""
        key = name.strip()
        for kind in cls:
            if key.lower() in (kind.display_name.lower(), kind.name.lower()):
                return kind
        raise ValueError(f"Unknown variant: {name!r}")


_DISPLAY_NAMES: dict[VariantKind, str] = {
    VariantKind.CLASSICAL: "Classical",
    VariantKind.FOG_OF_WAR: "Fog of War",
    VariantKind.DUCK_CHESS: "Duck Chess",
    VariantKind.CRAZYHOUSE: "Crazyhouse",
    VariantKind.CHATURAJI: "Chaturaji",
}


class GameVariant(ABC):
    """Rules of one variant, applied to a :class:`Board` it does not own.

    Query methods must leave the board exactly as they found it; the only
    method that changes per-game state is :meth:`handle_post_move`, which
    the game layer calls once for every committed move.
    """

    kind: VariantKind
    players: tuple[Color, ...] = (Color.WHITE, Color.BLACK)

    @abstractmethod
    def legal_moves(self, board: Board, piece: Piece) -> list[Move]:
        """Moves *piece* may make under this variant's rules."""

    @abstractmethod
    def is_check(self, board: Board, color: Color) -> bool: ...

    @abstractmethod
    def is_checkmate(self, board: Board, color: Color) -> bool: ...

    @abstractmethod
    def is_stalemate(self, board: Board, color: Color) -> bool: ...

    # -- Shared behaviour ---------------------------------------------------

    def is_draw_by_fifty_move_rule(self, board: Board) -> bool:
        return board.halfmove_clock >= FIFTY_MOVE_HALFMOVES

    def has_legal_move(self, board: Board, color: Color) -> bool:
        """Whether any on-board piece of *color* has a legal move."""
        return any(self.legal_moves(board, p) for p in board.pieces(color))

    def handle_post_move(self, board: Board, move: Move) -> None:
        """Apply side effects of a committed move (reserves, scores, phases)."""

    def initial_board(self) -> Board:
        return Board.initial()

    def next_player(self, board: Board, color: Color) -> Color:
        """The color to move after *color* (skipping eliminated players)."""
        order = self.players
        idx = order.index(color)
        for step in range(1, len(order) + 1):
            candidate = order[(idx + step) % len(order)]
            if not board.is_player_dead(candidate):
                return candidate
        return color

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
