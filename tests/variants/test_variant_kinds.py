"""Tests for VariantKind, the variant factory and shared GameVariant behaviour."""

import pytest

from chessvariants.core.board import Board
from chessvariants.core.enums import Color
from chessvariants.variants import (
    FIFTY_MOVE_HALFMOVES,
    ChaturajiVariant,
    ClassicalVariant,
    CrazyhouseVariant,
    DuckChessVariant,
    FogOfWarVariant,
    VariantKind,
    create_variant,
)


class TestVariantKind:
    @pytest.mark.parametrize(
        ("name", "kind"),
        [
            ("Classical", VariantKind.CLASSICAL),
            ("fog of war", VariantKind.FOG_OF_WAR),
            ("FOG_OF_WAR", VariantKind.FOG_OF_WAR),
            ("  Duck Chess ", VariantKind.DUCK_CHESS),
            ("crazyhouse", VariantKind.CRAZYHOUSE),
            ("CHATURAJI", VariantKind.CHATURAJI),
        ],
    )
    def test_from_name(self, name, kind) -> None:
        assert VariantKind.from_name(name) is kind

    @pytest.mark.parametrize("name", ["", "atomic", "fog"])
    def test_unknown_name(self, name) -> None:
        with pytest.raises(ValueError, match="Unknown variant"):
            VariantKind.from_name(name)

    def test_display_names(self) -> None:
        assert [k.display_name for k in VariantKind] == [
            "Classical",
            "Fog of War",
            "Duck Chess",
            "Crazyhouse",
            "Chaturaji",
        ]


class TestCreateVariant:
    @pytest.mark.parametrize(
        ("kind", "cls"),
        [
            (VariantKind.CLASSICAL, ClassicalVariant),
            (VariantKind.FOG_OF_WAR, FogOfWarVariant),
            (VariantKind.DUCK_CHESS, DuckChessVariant),
            (VariantKind.CRAZYHOUSE, CrazyhouseVariant),
            (VariantKind.CHATURAJI, ChaturajiVariant),
        ],
    )
    def test_types(self, kind, cls) -> None:
        variant = create_variant(kind)
        assert isinstance(variant, cls)
        assert variant.kind is kind

    def test_repr(self) -> None:
        assert repr(create_variant(VariantKind.DUCK_CHESS)) == "DuckChessVariant()"


class TestSharedBehaviour:
    def test_fifty_move_threshold(self) -> None:
        variant = ClassicalVariant()
        board = Board()
        board.halfmove_clock = FIFTY_MOVE_HALFMOVES - 1
        assert not variant.is_draw_by_fifty_move_rule(board)
        board.halfmove_clock = FIFTY_MOVE_HALFMOVES
        assert variant.is_draw_by_fifty_move_rule(board)

    @pytest.mark.parametrize("kind", [k for k in VariantKind if k != VariantKind.CHATURAJI])
    def test_two_player_turn_order(self, kind) -> None:
        variant = create_variant(kind)
        board = variant.initial_board()
        assert variant.players == (Color.WHITE, Color.BLACK)
        assert variant.next_player(board, Color.WHITE) == Color.BLACK
        assert variant.next_player(board, Color.BLACK) == Color.WHITE

    @pytest.mark.parametrize("kind", list(VariantKind))
    def test_initial_board_has_moves(self, kind) -> None:
        variant = create_variant(kind)
        board = variant.initial_board()
        first = variant.players[0]
        assert variant.has_legal_move(board, first)
        assert not variant.is_checkmate(board, first)
        assert not variant.is_stalemate(board, first)
