"""Tests for geometric (pseudo-legal) move generation."""

import pytest

from chessvariants.core.board import Board
from chessvariants.core.enums import Color, MoveFlag, PieceType
from chessvariants.core.move_generator import (
    is_promotion_square,
    pawn_attack_squares,
    pawn_direction,
    pseudo_legal_moves,
)
from chessvariants.core.piece import Piece
from chessvariants.core.types import (
    A1, A2, A7, A8, B8, D4, D5, E2, E3, E4, F5, H8,
    make_square,
)


def targets(board: Board, piece: Piece) -> set[int]:
    return {m.to_sq for m in pseudo_legal_moves(board, piece)}


class TestSteppers:
    def test_knight_in_corner(self, board, place) -> None:
        knight = place(PieceType.KNIGHT, Color.WHITE, A1)
        assert len(pseudo_legal_moves(board, knight)) == 2

    def test_king_in_centre(self, board, place) -> None:
        king = place(PieceType.KING, Color.BLACK, D4)
        assert len(pseudo_legal_moves(board, king)) == 8

    def test_no_move_onto_own_piece(self, board, place) -> None:
        king = place(PieceType.KING, Color.WHITE, A1)
        place(PieceType.PAWN, Color.WHITE, A2)
        assert A2 not in targets(board, king)


class TestSliders:
    @pytest.mark.parametrize(
        ("piece_type", "expected"),
        [
            (PieceType.ROOK, 14),
            (PieceType.BOAT, 14),
            (PieceType.BISHOP, 13),
            (PieceType.QUEEN, 27),
        ],
    )
    def test_empty_board_counts(self, board, place, piece_type, expected) -> None:
        piece = place(piece_type, Color.WHITE, D4)
        assert len(pseudo_legal_moves(board, piece)) == expected

    def test_stops_at_blockers(self, board, place) -> None:
        rook = place(PieceType.ROOK, Color.WHITE, A1)
        place(PieceType.PAWN, Color.WHITE, A2)
        enemy = place(PieceType.KNIGHT, Color.BLACK, make_square(7, 3))
        moves = pseudo_legal_moves(board, rook)
        assert {m.to_sq for m in moves} == {make_square(7, 1), make_square(7, 2), enemy.square}
        captures = [m for m in moves if m.is_capture]
        assert len(captures) == 1
        assert captures[0].captured is enemy

    def test_sliders_see_the_duck_as_capturable(self, board, place) -> None:
        rook = place(PieceType.ROOK, Color.WHITE, A1)
        duck = place(PieceType.DUCK, Color.SPECIAL, A2)
        moves = [m for m in pseudo_legal_moves(board, rook) if m.to_sq == A2]
        assert moves[0].captured is duck


class TestPawns:
    def test_single_and_double_step(self, board, place) -> None:
        pawn = place(PieceType.PAWN, Color.WHITE, E2)
        assert targets(board, pawn) == {E3, E4}

    def test_blocked(self, board, place) -> None:
        pawn = place(PieceType.PAWN, Color.WHITE, E2)
        place(PieceType.KNIGHT, Color.BLACK, E3)
        assert pseudo_legal_moves(board, pawn) == []

    def test_double_step_only_from_home_row(self, board, place) -> None:
        pawn = place(PieceType.PAWN, Color.WHITE, E3)
        assert targets(board, pawn) == {E4}

    def test_moved_pawn_single_step(self, board, place) -> None:
        pawn = place(PieceType.PAWN, Color.BLACK, make_square(1, 4))
        pawn.has_moved = True
        assert targets(board, pawn) == {make_square(2, 4)}

    def test_captures_but_never_the_duck(self, board, place) -> None:
        pawn = place(PieceType.PAWN, Color.WHITE, E4)
        place(PieceType.DUCK, Color.SPECIAL, D5)
        victim = place(PieceType.PAWN, Color.BLACK, F5)
        captures = [m for m in pseudo_legal_moves(board, pawn) if m.is_capture]
        assert [m.captured for m in captures] == [victim]

    def test_promotion_flag(self, board, place) -> None:
        pawn = place(PieceType.PAWN, Color.WHITE, A7)
        place(PieceType.ROOK, Color.BLACK, B8)
        moves = pseudo_legal_moves(board, pawn)
        assert {m.to_sq for m in moves} == {A8, B8}
        assert all(m.flag == MoveFlag.PROMOTION for m in moves)

    @pytest.mark.parametrize(
        ("color", "start", "forward"),
        [
            (Color.RED, (6, 3), (5, 3)),
            (Color.YELLOW, (1, 4), (2, 4)),
            (Color.BLUE, (3, 1), (3, 2)),
            (Color.GREEN, (4, 6), (4, 5)),
        ],
    )
    def test_chaturaji_directions(self, board, place, color, start, forward) -> None:
        pawn = place(PieceType.PAWN, color, make_square(*start))
        # No double step outside the two-player variants.
        assert targets(board, pawn) == {make_square(*forward)}

    def test_horizontal_pawn_captures(self, board, place) -> None:
        pawn = place(PieceType.PAWN, Color.BLUE, make_square(3, 3))
        up = place(PieceType.KNIGHT, Color.RED, make_square(2, 4))
        down = place(PieceType.KNIGHT, Color.GREEN, make_square(4, 4))
        captured = {m.captured for m in pseudo_legal_moves(board, pawn) if m.is_capture}
        assert captured == {up, down}

    def test_horizontal_promotion(self, board, place) -> None:
        pawn = place(PieceType.PAWN, Color.BLUE, make_square(3, 6))
        (move,) = pseudo_legal_moves(board, pawn)
        assert move.to_sq == make_square(3, 7)
        assert move.flag == MoveFlag.PROMOTION

    def test_attack_squares_on_edge(self, board, place) -> None:
        pawn = place(PieceType.PAWN, Color.WHITE, make_square(4, 0))
        assert pawn_attack_squares(pawn) == (make_square(3, 1),)

    def test_direction_of_non_players(self) -> None:
        assert pawn_direction(Color.GREY) is None
        assert pawn_direction(Color.SPECIAL) is None

    def test_promotion_squares(self) -> None:
        assert is_promotion_square(Color.WHITE, A8)
        assert is_promotion_square(Color.BLACK, A1)
        assert is_promotion_square(Color.GREEN, make_square(4, 0))
        assert not is_promotion_square(Color.WHITE, A1)
        assert not is_promotion_square(Color.GREY, A8)


class TestDuck:
    def test_placed_duck_moves_anywhere_empty(self, board, place) -> None:
        duck = place(PieceType.DUCK, Color.SPECIAL, D4)
        place(PieceType.KING, Color.WHITE, A1)
        place(PieceType.KING, Color.BLACK, H8)
        moves = pseudo_legal_moves(board, duck)
        assert len(moves) == 61
        assert D4 not in {m.to_sq for m in moves}
        assert all(m.flag == MoveFlag.DUCK for m in moves)

    def test_unplaced_duck(self, board) -> None:
        duck = Piece(PieceType.DUCK, Color.SPECIAL)
        moves = pseudo_legal_moves(board, duck)
        assert len(moves) == 64
        assert all(m.from_sq is None for m in moves)


class TestGeneral:
    def test_off_board_piece_has_no_moves(self, board) -> None:
        assert pseudo_legal_moves(board, Piece(PieceType.QUEEN, Color.WHITE)) == []

    def test_never_lands_on_own_piece_or_off_board(self) -> None:
        board = Board.initial()
        for piece in board.pieces():
            for move in piece.pseudo_legal_moves(board):
                assert 0 <= move.to_sq < 64
                target = board[move.to_sq]
                assert target is None or target.color != piece.color

    def test_initial_position_counts(self) -> None:
        board = Board.initial()
        white_moves = [m for p in board.pieces(Color.WHITE) for m in p.pseudo_legal_moves(board)]
        assert len(white_moves) == 20
