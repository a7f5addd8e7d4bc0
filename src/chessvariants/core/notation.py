"""FEN board set-up for the two-player variants.

Only the fields that describe the board are meaningful here: piece
placement (``*`` marks the duck), side to move, castling availability and
the half-move clock.  En passant availability is derived from the last move
on the board, so a FEN with an en-passant target cannot be represented;
play the double step instead.
"""

from __future__ import annotations

from chessvariants.core.board import Board
from chessvariants.core.enums import Color, PieceType
from chessvariants.core.piece import Piece
from chessvariants.core.types import make_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Castling letter -> (color, home row, rook column)
_CASTLING_ROOKS: dict[str, tuple[Color, int, int]] = {
    "K": (Color.WHITE, 7, 7),
    "Q": (Color.WHITE, 7, 0),
    "k": (Color.BLACK, 0, 7),
    "q": (Color.BLACK, 0, 0),
}

_PAWN_HOME_ROWS: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


def parse_fen(fen: str) -> tuple[Board, Color]:
    """Parse a FEN string into a board and the side to move."""
    parts = fen.split()
    if not (1 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 1-6 fields): {fen!r}")

    board = _parse_placement(parts[0], fen)

    # Side to move
    side = Color.WHITE
    if len(parts) > 1:
        if parts[1] == "w":
            side = Color.WHITE
        elif parts[1] == "b":
            side = Color.BLACK
        else:
            raise ValueError(f"Invalid FEN side-to-move field: {parts[1]!r}")

    # Castling: every king and rook starts as moved unless a right says otherwise
    castling_part = parts[2] if len(parts) > 2 else "-"
    _apply_castling(board, castling_part)

    if len(parts) > 3 and parts[3] != "-":
        raise ValueError(f"FEN en-passant targets are not supported: {parts[3]!r}")

    if len(parts) > 4:
        try:
            halfmove = int(parts[4])
        except ValueError:
            raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}") from None
        if halfmove < 0:
            raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")
        board.halfmove_clock = halfmove

    return board, side


def board_from_fen(fen: str) -> Board:
    """Board part of :func:`parse_fen`."""
    return parse_fen(fen)[0]


def board_to_fen(board: Board, side_to_move: Color = Color.WHITE) -> str:
    """Serialise a two-player *board* to FEN (en passant is always ``-``)."""
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = board[make_square(row, col)]
            if piece is None:
                empty += 1
                continue
            if piece.color not in (Color.WHITE, Color.BLACK, Color.SPECIAL):
                raise ValueError(f"FEN cannot describe {piece!r}")
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)

    castling = ""
    for letter, (color, row, rook_col) in _CASTLING_ROOKS.items():
        king = board[make_square(row, 4)]
        rook = board[make_square(row, rook_col)]
        if (
            king is not None
            and king.piece_type == PieceType.KING
            and king.color == color
            and not king.has_moved
            and rook is not None
            and rook.piece_type == PieceType.ROOK
            and rook.color == color
            and not rook.has_moved
        ):
            castling += letter

    side = "w" if side_to_move == Color.WHITE else "b"
    fullmove = len(board.history) // 2 + 1
    return f"{'/'.join(rows)} {side} {castling or '-'} - {board.halfmove_clock} {fullmove}"


# -- Internal ---------------------------------------------------------------


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                piece = Piece.from_char(ch)
                home_row = _PAWN_HOME_ROWS.get(piece.color)
                if piece.piece_type == PieceType.PAWN and row != home_row:
                    piece.has_moved = True
                board.place_piece(piece, make_square(row, col))
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
    return board


def _apply_castling(board: Board, castling_part: str) -> None:
    allowed: set[str] = set()
    if castling_part != "-":
        for ch in castling_part:
            if ch not in _CASTLING_ROOKS or ch in allowed:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            allowed.add(ch)

    for piece in board.pieces():
        if piece.piece_type in (PieceType.KING, PieceType.ROOK):
            piece.has_moved = True

    for letter in allowed:
        color, row, rook_col = _CASTLING_ROOKS[letter]
        king = board[make_square(row, 4)]
        rook = board[make_square(row, rook_col)]
        if king is None or king.piece_type != PieceType.KING or king.color != color:
            raise ValueError(f"Castling right {letter!r} without a king on its square")
        if rook is None or rook.piece_type != PieceType.ROOK or rook.color != color:
            raise ValueError(f"Castling right {letter!r} without a rook on its square")
        king.has_moved = False
        rook.has_moved = False
