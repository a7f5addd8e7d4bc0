"""Board - piece placement on an 8x8 grid with reversible move execution."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from chessvariants.core.enums import Color, MoveFlag, PieceType
from chessvariants.core.move import Move
from chessvariants.core.move_generator import pawn_direction
from chessvariants.core.piece import Piece
from chessvariants.core.types import Square, col_of, is_on_board, make_square, row_of

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# King destination column -> (rook origin column, rook destination column)
_CASTLING_ROOK_COLS: dict[int, tuple[int, int]] = {6: (7, 5), 2: (0, 3)}

_TWO_PLAYER_COLORS = (Color.WHITE, Color.BLACK)


class Board:
    """Mutable 8x8 grid plus the per-game state the variants share.

    Besides piece placement the board keeps the undo log, the half-move
    clock, Crazyhouse reserves, Chaturaji scores and eliminations and the
    Duck Chess phase flag.  :meth:`execute_move` / :meth:`undo_move` only
    ever touch the grid, the pieces, the history and the half-move clock;
    reserves, scores and eliminations change through the explicit accessors
    so that speculative execute/undo can never disturb them.
    """

    __slots__ = (
        "_squares",
        "_history",
        "_clock_history",
        "_halfmove_clock",
        "_reserves",
        "_scores",
        "_dead",
        "crazyhouse_mode",
        "waiting_for_duck",
    )

    def __init__(self) -> None:
        self.reset_board()

    def reset_board(self) -> None:
        """Empty the grid and forget all per-game state."""
        self._squares: list[Piece | None] = [None] * 64
        self._history: list[Move] = []
        # Half-move clock before each history entry.
        self._clock_history: list[int] = []
        self._halfmove_clock = 0
        self._reserves: dict[Color, dict[PieceType, int]] = {}
        self._scores: dict[Color, int] = {}
        self._dead: set[Color] = set()
        self.crazyhouse_mode = False
        self.waiting_for_duck = False

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def get_piece(self, row: int, col: int) -> Piece | None:
        """Piece at (row, col); None for empty or off-board coordinates."""
        if not is_on_board(row, col):
            return None
        return self._squares[make_square(row, col)]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    def place_piece(self, piece: Piece, sq: Square) -> None:
        """Put *piece* on *sq* (set-up only; replaces any occupant)."""
        old = self._squares[sq]
        if old is not None and old is not piece:
            old.square = None
        if piece.square is not None and self._squares[piece.square] is piece:
            self._squares[piece.square] = None
        self._squares[sq] = piece
        piece.square = sq

    def remove_piece(self, sq: Square) -> Piece | None:
        """Take the piece on *sq* off the board (set-up only)."""
        piece = self._squares[sq]
        if piece is not None:
            piece.square = None
            self._squares[sq] = None
        return piece

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> list[Piece]:
        """Pieces on the board in square order, optionally of one color."""
        return [
            p
            for p in self._squares
            if p is not None and (color is None or p.color == color)
        ]

    def find_king(self, color: Color) -> Piece | None:
        """The king of *color*, or None once it has been captured."""
        for piece in self._squares:
            if (
                piece is not None
                and piece.piece_type == PieceType.KING
                and piece.color == color
            ):
                return piece
        return None

    @property
    def last_move(self) -> Move | None:
        return self._history[-1] if self._history else None

    @property
    def last_piece_move(self) -> Move | None:
        """Most recent move that was not a duck placement."""
        for move in reversed(self._history):
            if move.flag != MoveFlag.DUCK:
                return move
        return None

    @property
    def history(self) -> tuple[Move, ...]:
        return tuple(self._history)

    @property
    def halfmove_clock(self) -> int:
        """Half-moves since the last capture or pawn move."""
        return self._halfmove_clock

    @halfmove_clock.setter
    def halfmove_clock(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"Half-move clock cannot be negative: {value}")
        self._halfmove_clock = value

    # -- Move execution -----------------------------------------------------

    def execute_move(self, move: Move) -> None:
        """Apply *move* and push it onto the history stack.

        The move must come from a variant's legal-move list; inconsistent
        moves raise ``ValueError`` before the board is modified.
        """
        if move.flag.is_terminal:
            self._clock_history.append(self._halfmove_clock)
            self._history.append(move)
            return

        piece = move.piece
        to_sq = move.to_sq
        assert piece is not None and to_sq is not None
        capture_sq = self._capture_square(move)
        self._validate(move, piece, to_sq, capture_sq)

        self._clock_history.append(self._halfmove_clock)

        if move.from_sq is not None:
            self._squares[move.from_sq] = None

        captured = move.captured
        if captured is not None:
            assert capture_sq is not None
            self._squares[capture_sq] = None
            captured.square = None

        self._squares[to_sq] = piece
        if move.flag == MoveFlag.DROP:
            piece.square = to_sq
            # A dropped pawn may still double-step from its home row.
            if piece.piece_type != PieceType.PAWN:
                piece.has_moved = True
        else:
            piece.move_to(to_sq)

        if move.flag == MoveFlag.CASTLING:
            row = row_of(to_sq)
            rook_from, rook_to = _CASTLING_ROOK_COLS[col_of(to_sq)]
            rook = self._squares[make_square(row, rook_from)]
            assert rook is not None
            self._squares[make_square(row, rook_from)] = None
            self._squares[make_square(row, rook_to)] = rook
            rook.move_to(make_square(row, rook_to))
        elif move.flag == MoveFlag.PROMOTION:
            promoted = Piece(
                move.promotion or self._default_promotion(piece.color),
                piece.color,
                to_sq,
                has_moved=True,
            )
            self._squares[to_sq] = promoted
            piece.square = None

        if move.flag != MoveFlag.DUCK:
            if captured is not None or piece.piece_type == PieceType.PAWN:
                self._halfmove_clock = 0
            else:
                self._halfmove_clock += 1

        self._history.append(move)

    def undo_move(self) -> Move | None:
        """Revert the most recent move; None (and no-op) on empty history."""
        if not self._history:
            return None
        move = self._history.pop()
        self._halfmove_clock = self._clock_history.pop()
        if move.flag.is_terminal:
            return move

        piece = move.piece
        to_sq = move.to_sq
        assert piece is not None and to_sq is not None

        if move.flag == MoveFlag.CASTLING:
            row = row_of(to_sq)
            rook_from, rook_to = _CASTLING_ROOK_COLS[col_of(to_sq)]
            rook = self._squares[make_square(row, rook_to)]
            assert rook is not None
            self._squares[make_square(row, rook_to)] = None
            self._squares[make_square(row, rook_from)] = rook
            rook.square = make_square(row, rook_from)
            # Castling is only offered with an unmoved rook.
            rook.has_moved = False

        occupant = self._squares[to_sq]
        if occupant is not None and occupant is not piece:
            occupant.square = None  # discarded promotion piece
        self._squares[to_sq] = None

        piece.square = move.from_sq
        if move.from_sq is not None:
            self._squares[move.from_sq] = piece
        if move.first_move:
            piece.has_moved = False

        captured = move.captured
        if captured is not None:
            capture_sq = self._capture_square(move)
            assert capture_sq is not None
            self._squares[capture_sq] = captured
            captured.square = capture_sq

        return move

    @contextmanager
    def simulate(self, move: Move) -> Iterator[None]:
        """Execute *move* for the duration of the block, then undo it.

        This is the legality check used by the variants; calls must not be
        nested and the board must not be mutated inside the block.
        """
        self.execute_move(move)
        try:
            yield
        finally:
            self.undo_move()

    # -- Crazyhouse reserves -------------------------------------------------

    def add_to_reserve(self, color: Color, piece_type: PieceType) -> None:
        """Credit *piece_type* to *color*'s hand (Crazyhouse mode only)."""
        if not self.crazyhouse_mode:
            return
        hand = self._reserves.setdefault(color, {})
        hand[piece_type] = hand.get(piece_type, 0) + 1

    def remove_from_reserve(self, color: Color, piece_type: PieceType) -> None:
        hand = self._reserves.get(color, {})
        count = hand.get(piece_type, 0)
        if count <= 0:
            raise ValueError(f"No {piece_type.name} in {color.name}'s reserve")
        if count == 1:
            del hand[piece_type]
        else:
            hand[piece_type] = count - 1

    def reserve(self, color: Color) -> dict[PieceType, int]:
        """Copy of *color*'s reserve counts (types with count > 0)."""
        return dict(self._reserves.get(color, {}))

    def reserve_count(self, color: Color, piece_type: PieceType) -> int:
        return self._reserves.get(color, {}).get(piece_type, 0)

    # -- Chaturaji scores / eliminations ---------------------------------------

    def add_score(self, color: Color, points: int) -> None:
        self._scores[color] = self._scores.get(color, 0) + points

    def score(self, color: Color) -> int:
        return self._scores.get(color, 0)

    def scores(self) -> dict[Color, int]:
        return dict(self._scores)

    def kill_player(self, color: Color) -> None:
        """Eliminate *color*: its pieces stay on the board as GREY pieces."""
        self._dead.add(color)
        for piece in self._squares:
            if piece is not None and piece.color == color:
                piece.color = Color.GREY

    def is_player_dead(self, color: Color) -> bool:
        return color in self._dead

    @property
    def dead_players(self) -> frozenset[Color]:
        return frozenset(self._dead)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard two-player starting position."""
        b = cls()
        for col in range(8):
            b.place_piece(Piece(PieceType.PAWN, Color.BLACK), make_square(1, col))
            b.place_piece(Piece(PieceType.PAWN, Color.WHITE), make_square(6, col))
        for col, pt in enumerate(_BACK_RANK):
            b.place_piece(Piece(pt, Color.BLACK), make_square(0, col))
            b.place_piece(Piece(pt, Color.WHITE), make_square(7, col))
        return b

    # -- Internal -----------------------------------------------------------

    @staticmethod
    def _default_promotion(color: Color) -> PieceType:
        return PieceType.QUEEN if color in _TWO_PLAYER_COLORS else PieceType.BOAT

    @staticmethod
    def _capture_square(move: Move) -> Square | None:
        """Where the captured piece stands (behind the target for en passant)."""
        if move.captured is None:
            return None
        assert move.to_sq is not None and move.piece is not None
        if move.flag != MoveFlag.EN_PASSANT:
            return move.to_sq
        direction = pawn_direction(move.piece.color)
        assert direction is not None
        dr, dc = direction
        return make_square(row_of(move.to_sq) - dr, col_of(move.to_sq) - dc)

    def _validate(
        self,
        move: Move,
        piece: Piece,
        to_sq: Square,
        capture_sq: Square | None,
    ) -> None:
        if move.from_sq is not None and self._squares[move.from_sq] is not piece:
            raise ValueError(f"{piece!r} is not on the origin of {move}")
        if move.from_sq is None and piece.square is not None:
            raise ValueError(f"{piece!r} is already on the board")
        if capture_sq is not None and self._squares[capture_sq] is not move.captured:
            raise ValueError(f"Captured piece is not on the board for {move}")
        occupant = self._squares[to_sq]
        if occupant is not None and capture_sq != to_sq:
            raise ValueError(f"Destination of {move} is occupied")

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self._squares[make_square(row, col)]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
