"""Geometric (pseudo-legal) move generation.

Everything here ignores king safety and variant rules: it only knows how
each piece type moves, how it is blocked and what it may capture.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessvariants.core.enums import Color, MoveFlag, PieceType
from chessvariants.core.move import Move
from chessvariants.core.types import Square, col_of, is_on_board, make_square, row_of

if TYPE_CHECKING:
    from chessvariants.core.board import Board
    from chessvariants.core.piece import Piece


# (d_row, d_col) vectors
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Forward direction per color.  The column-based directions only exist in
# Chaturaji, where neighbouring players move perpendicular to each other.
PAWN_DIRECTIONS: dict[Color, tuple[int, int]] = {
    Color.WHITE: (-1, 0),
    Color.RED: (-1, 0),
    Color.BLACK: (1, 0),
    Color.YELLOW: (1, 0),
    Color.BLUE: (0, 1),
    Color.GREEN: (0, -1),
}

# Only two-player pawns may advance two squares, from these rows.
_DOUBLE_STEP_ROWS: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        row, col = row_of(sq), col_of(sq)
        targets.append(
            tuple(
                make_square(row + dr, col + dc)
                for dr, dc in offsets
                if is_on_board(row + dr, col + dc)
            )
        )
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            r, c = row_of(sq) + dr, col_of(sq) + dc
            ray: list[Square] = []
            while is_on_board(r, c):
                ray.append(make_square(r, c))
                r += dr
                c += dc
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDING_RAYS = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.BOAT: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}
_STEP_TARGETS = {
    PieceType.KNIGHT: _KNIGHT_TARGETS,
    PieceType.KING: _KING_TARGETS,
}


# -- Public API -------------------------------------------------------------


def pseudo_legal_moves(board: Board, piece: Piece) -> list[Move]:
    """Geometric moves of *piece* on *board*."""
    moves: list[Move] = []
    ptype = piece.piece_type

    if ptype == PieceType.DUCK:
        _gen_duck(board, piece, moves)
        return moves

    sq = piece.square
    if sq is None:
        return moves

    if ptype == PieceType.PAWN:
        _gen_pawn(board, piece, sq, moves)
    elif ptype in _SLIDING_RAYS:
        _gen_sliding(board, piece, _SLIDING_RAYS[ptype][sq], moves)
    else:
        _gen_step(board, piece, _STEP_TARGETS[ptype][sq], moves)
    return moves


def pawn_direction(color: Color) -> tuple[int, int] | None:
    """(d_row, d_col) a pawn of *color* advances by, None for non-players."""
    return PAWN_DIRECTIONS.get(color)


def pawn_attack_squares(piece: Piece) -> tuple[Square, ...]:
    """Squares a pawn attacks, whether or not anything stands there."""
    direction = pawn_direction(piece.color)
    if piece.square is None or direction is None:
        return ()
    return tuple(_diagonal_targets(piece.square, direction))


def is_promotion_square(color: Color, sq: Square) -> bool:
    """Whether a pawn of *color* reaching *sq* is on its far edge."""
    direction = pawn_direction(color)
    if direction is None:
        return False
    dr, dc = direction
    if dr:
        return row_of(sq) == (0 if dr < 0 else 7)
    return col_of(sq) == (7 if dc > 0 else 0)


# -- Piece-specific generators (private) -----------------------------------


def _diagonal_targets(sq: Square, direction: tuple[int, int]) -> list[Square]:
    dr, dc = direction
    row, col = row_of(sq), col_of(sq)
    # Sideways offsets are perpendicular to the direction of travel.
    sideways = ((0, -1), (0, 1)) if dr else ((-1, 0), (1, 0))
    return [
        make_square(row + dr + sr, col + dc + sc)
        for sr, sc in sideways
        if is_on_board(row + dr + sr, col + dc + sc)
    ]


def _gen_pawn(board: Board, piece: Piece, sq: Square, moves: list[Move]) -> None:
    direction = pawn_direction(piece.color)
    if direction is None:
        return
    dr, dc = direction
    row, col = row_of(sq), col_of(sq)
    color = piece.color

    def flag_for(to_sq: Square) -> MoveFlag:
        return MoveFlag.PROMOTION if is_promotion_square(color, to_sq) else MoveFlag.NORMAL

    fwd_row, fwd_col = row + dr, col + dc
    if is_on_board(fwd_row, fwd_col):
        one_step = make_square(fwd_row, fwd_col)
        if board.is_empty(one_step):
            moves.append(Move.create(piece, one_step, flag_for(one_step)))

            if not piece.has_moved and _DOUBLE_STEP_ROWS.get(color) == row:
                two_row, two_col = row + 2 * dr, col + 2 * dc
                if is_on_board(two_row, two_col):
                    two_step = make_square(two_row, two_col)
                    if board.is_empty(two_step):
                        moves.append(Move.create(piece, two_step))

    for cap_sq in _diagonal_targets(sq, direction):
        target = board[cap_sq]
        if target is not None and target.color not in (color, Color.SPECIAL):
            moves.append(Move.create(piece, cap_sq, flag_for(cap_sq), target))


def _gen_step(
    board: Board,
    piece: Piece,
    targets: tuple[Square, ...],
    moves: list[Move],
) -> None:
    for to_sq in targets:
        target = board[to_sq]
        if target is None:
            moves.append(Move.create(piece, to_sq))
        elif target.color != piece.color:
            moves.append(Move.create(piece, to_sq, captured=target))


def _gen_sliding(
    board: Board,
    piece: Piece,
    rays: tuple[tuple[Square, ...], ...],
    moves: list[Move],
) -> None:
    for ray in rays:
        for to_sq in ray:
            target = board[to_sq]
            if target is None:
                moves.append(Move.create(piece, to_sq))
                continue
            if target.color != piece.color:
                moves.append(Move.create(piece, to_sq, captured=target))
            break


def _gen_duck(board: Board, piece: Piece, moves: list[Move]) -> None:
    for to_sq in range(64):
        if to_sq != piece.square and board.is_empty(to_sq):
            moves.append(Move.create(piece, to_sq, MoveFlag.DUCK))
