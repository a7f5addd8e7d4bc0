"""Core enumerations and flags for the chess-variants domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Piece / player color.

    WHITE and BLACK play the two-player variants, RED, BLUE, YELLOW and
    GREEN play Chaturaji.  GREY marks the pieces of an eliminated Chaturaji
    player, SPECIAL is the Duck Chess duck.
    """

    WHITE = 0
    BLACK = 1
    RED = 2
    BLUE = 3
    YELLOW = 4
    GREEN = 5
    GREY = 6
    SPECIAL = 7
    NONE = 8

    @property
    def is_player(self) -> bool:
        """Whether pieces of this color belong to an active player."""
        return self <= Color.GREEN

    @property
    def opposite(self) -> Color:
        if self == Color.WHITE:
            return Color.BLACK
        if self == Color.BLACK:
            return Color.WHITE
        raise ValueError(f"{self.name} has no single opponent")

    def __str__(self) -> str:
        return self.name.lower()


PLAYER_COLORS: tuple[Color, ...] = (
    Color.WHITE,
    Color.BLACK,
    Color.RED,
    Color.BLUE,
    Color.YELLOW,
    Color.GREEN,
)

# Clockwise turn order.
CHATURAJI_COLORS: tuple[Color, ...] = (
    Color.RED,
    Color.BLUE,
    Color.YELLOW,
    Color.GREEN,
)


class PieceType(IntEnum):
    """Piece types.  BOAT is the Chaturaji rook, DUCK the Duck Chess blocker."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6
    BOAT = 7
    DUCK = 8


class MoveFlag(IntEnum):
    """Move classification."""

    NORMAL = 0
    CASTLING = 1
    EN_PASSANT = 2
    PROMOTION = 3
    DUCK = 4
    DROP = 5
    TIMEOUT = 6
    RESIGN = 7
    DRAW = 8

    @property
    def is_terminal(self) -> bool:
        """Game-ending bookkeeping moves that never touch the grid."""
        return self >= MoveFlag.TIMEOUT
