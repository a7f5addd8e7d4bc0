"""Piece identity object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessvariants.core.enums import Color, PieceType
from chessvariants.core.move_generator import pseudo_legal_moves
from chessvariants.core.types import Square, col_of, row_of

if TYPE_CHECKING:
    from chessvariants.core.board import Board
    from chessvariants.core.move import Move

_TYPE_CHARS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
    PieceType.BOAT: "s",
    PieceType.DUCK: "*",
}

_CHAR_TYPES: dict[str, PieceType] = {v: k for k, v in _TYPE_CHARS.items()}


@dataclass(eq=False, slots=True)
class Piece:
    """A piece owned by a :class:`Board`.

    Unlike a plain value object a piece has identity: moves and the undo log
    hold references to it, and its location and ``has_moved`` flag change as
    the game goes on.  ``square`` is ``None`` while the piece is off the
    board (captured, in a Crazyhouse hand, or a duck not yet placed).

    ``color`` only changes when a Chaturaji player is eliminated and the
    piece turns GREY.
    """

    piece_type: PieceType
    color: Color
    square: Square | None = None
    has_moved: bool = False

    # ── Location ─────────────────────────────────────────────────────────

    @property
    def on_board(self) -> bool:
        return self.square is not None

    @property
    def row(self) -> int:
        return row_of(self._placed_square())

    @property
    def col(self) -> int:
        return col_of(self._placed_square())

    def move_to(self, sq: Square) -> None:
        """Relocate the piece and mark it as moved."""
        self.square = sq
        self.has_moved = True

    def _placed_square(self) -> Square:
        if self.square is None:
            raise ValueError(f"{self!r} is not on the board")
        return self.square

    # ── Geometry ─────────────────────────────────────────────────────────

    def pseudo_legal_moves(self, board: Board) -> list[Move]:
        """Geometric moves, ignoring king safety and variant restrictions."""
        return pseudo_legal_moves(board, self)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN-style character (uppercase = white, lowercase = black)."""
        char = _TYPE_CHARS[self.piece_type]
        return char if self.color == Color.BLACK else char.upper()

    def __repr__(self) -> str:
        where = "off-board" if self.square is None else f"sq={self.square}"
        return f"Piece({self.color.name} {self.piece_type.name}, {where})"

    @classmethod
    def from_char(cls, char: str, square: Square | None = None) -> Piece:
        """Create a two-player piece (or the duck) from a FEN character."""
        if char == "*":
            return cls(PieceType.DUCK, Color.SPECIAL, square)
        ptype = _CHAR_TYPES.get(char.lower())
        if ptype is None or ptype in (PieceType.BOAT, PieceType.DUCK):
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(ptype, color, square)
