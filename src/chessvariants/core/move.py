"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from chessvariants.core.enums import MoveFlag, PieceType
from chessvariants.core.types import Square, square_name

if TYPE_CHECKING:
    from chessvariants.core.piece import Piece

_PROMOTION_TARGETS: frozenset[PieceType] = frozenset(
    {
        PieceType.QUEEN,
        PieceType.ROOK,
        PieceType.BISHOP,
        PieceType.KNIGHT,
        PieceType.BOAT,
    }
)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable description of one transition.

    ``captured`` and ``first_move`` make the move self-sufficient for undo.
    ``promotion`` is left out of equality so that a move picked from the
    legal list and then given a promotion choice still matches it.
    """

    piece: Piece | None
    from_sq: Square | None
    to_sq: Square | None
    flag: MoveFlag = MoveFlag.NORMAL
    captured: Piece | None = None
    first_move: bool = False
    promotion: PieceType | None = field(default=None, compare=False)
    drop_type: PieceType | None = None

    def __post_init__(self) -> None:
        if self.flag.is_terminal:
            if self.piece is not None or self.from_sq is not None or self.to_sq is not None:
                raise ValueError(f"{self.flag.name} move cannot carry a piece")
            return

        piece = self.piece
        if piece is None or self.to_sq is None:
            raise ValueError(f"{self.flag.name} move needs a piece and a destination")

        if self.captured is not None:
            if self.captured is piece or self.captured.color == piece.color:
                raise ValueError("A move cannot capture a piece of its own color")
        elif self.flag == MoveFlag.EN_PASSANT:
            raise ValueError("En passant must capture a pawn")

        if self.flag == MoveFlag.DROP:
            if self.from_sq is not None or self.captured is not None:
                raise ValueError("A drop starts off the board and captures nothing")
            if self.drop_type != piece.piece_type:
                raise ValueError("Drop type must match the dropped piece")
        elif self.drop_type is not None:
            raise ValueError("Only drops carry a drop type")
        elif self.from_sq is None and self.flag != MoveFlag.DUCK:
            raise ValueError(f"{self.flag.name} move needs an origin square")

        if self.promotion is not None:
            if self.flag != MoveFlag.PROMOTION:
                raise ValueError("Only promotion moves carry a promotion type")
            if self.promotion not in _PROMOTION_TARGETS:
                raise ValueError(f"Cannot promote to {self.promotion.name}")

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def create(
        cls,
        piece: Piece,
        to_sq: Square,
        flag: MoveFlag = MoveFlag.NORMAL,
        captured: Piece | None = None,
    ) -> Move:
        """Move *piece* from its current square, recording its first-move state."""
        return cls(
            piece,
            piece.square,
            to_sq,
            flag,
            captured,
            first_move=not piece.has_moved,
        )

    @classmethod
    def drop(cls, piece: Piece, to_sq: Square) -> Move:
        """Drop an off-board (reserve) piece onto *to_sq*."""
        return cls(
            piece,
            None,
            to_sq,
            MoveFlag.DROP,
            first_move=not piece.has_moved,
            drop_type=piece.piece_type,
        )

    @classmethod
    def terminal(cls, flag: MoveFlag) -> Move:
        """A TIMEOUT / RESIGN / DRAW bookkeeping move."""
        return cls(None, None, None, flag)

    def with_promotion(self, piece_type: PieceType) -> Move:
        """Copy of this promotion move with the chosen target type."""
        return replace(self, promotion=piece_type)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        if self.flag.is_terminal:
            return self.flag.name.lower()
        origin = "@" if self.from_sq is None else square_name(self.from_sq)
        assert self.to_sq is not None
        return f"{origin}{square_name(self.to_sq)}"
