"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessvariants.core.board import Board
from chessvariants.core.enums import Color, PieceType
from chessvariants.core.piece import Piece
from chessvariants.core.types import Square


@pytest.fixture
def board() -> Board:
    """An empty board."""
    return Board()


@pytest.fixture
def place(board: Board):
    """Factory placing a new piece on the ``board`` fixture."""

    def _place(piece_type: PieceType, color: Color, sq: Square) -> Piece:
        piece = Piece(piece_type, color)
        board.place_piece(piece, sq)
        return piece

    return _place
