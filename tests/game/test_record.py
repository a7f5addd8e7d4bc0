"""Tests for saved-game records and replay."""

import logging
from datetime import datetime

import pytest

from chessvariants.core.enums import Color, MoveFlag, PieceType
from chessvariants.core.notation import board_to_fen
from chessvariants.core.types import C4, E2, E3, E4, parse_square
from chessvariants.game.interfaces import GameEndReason, GamePhase
from chessvariants.game.record import GameRecord, SavedMove, replay
from chessvariants.game.state import GameState
from chessvariants.variants import VariantKind


def play_all(gs: GameState, *ucis: str) -> None:
    for uci in ucis:
        to_sq = parse_square(uci[-2:])
        if uci[0] == "@":
            move = gs.find_move(None, to_sq)
        elif uci[1] == "@":
            move = gs.find_move(None, to_sq, PieceType.PAWN)
        else:
            move = gs.find_move(parse_square(uci[:2]), to_sq)
        assert move is not None, f"{uci} is not legal"
        assert gs.submit_move(move)


class TestSavedMove:
    def test_to_dict(self) -> None:
        saved = SavedMove(E2, E4, MoveFlag.NORMAL)
        assert saved.to_dict() == {"from": "e2", "to": "e4", "flag": "NORMAL"}
        assert str(saved) == "e2e4"

    def test_drop_to_dict(self) -> None:
        saved = SavedMove(None, E3, MoveFlag.DROP, drop_type=PieceType.PAWN)
        assert saved.to_dict() == {"from": None, "to": "e3", "flag": "DROP", "drop": "PAWN"}
        assert str(saved) == "@e3"

    def test_terminal(self) -> None:
        saved = SavedMove.from_dict({"flag": "RESIGN"})
        assert saved == SavedMove(None, None, MoveFlag.RESIGN)
        assert str(saved) == "resign"

    def test_promotion_from_dict(self) -> None:
        saved = SavedMove.from_dict(
            {"from": "a7", "to": "a8", "flag": "PROMOTION", "promotion": "KNIGHT"}
        )
        assert saved.promotion == PieceType.KNIGHT

    @pytest.mark.parametrize(
        "data",
        [
            {"from": "e2", "to": "e4"},
            {"from": "e2", "to": "e4", "flag": "JUMP"},
            {"from": "e2", "to": "e9", "flag": "NORMAL"},
            {"from": 52, "to": "e4", "flag": "NORMAL"},
            {"from": "e2", "flag": "NORMAL"},
            {"from": "e2", "to": "e4", "flag": "RESIGN"},
            {"to": "e3", "flag": "DROP"},
            {"from": "e2", "to": "e4", "flag": "NORMAL", "drop": "PAWN"},
            {"from": "e7", "to": "e8", "flag": "NORMAL", "promotion": "QUEEN"},
            {"from": "e7", "to": "e8", "flag": "PROMOTION", "promotion": "EMPEROR"},
        ],
    )
    def test_from_dict_invalid(self, data) -> None:
        with pytest.raises(ValueError):
            SavedMove.from_dict(data)


class TestGameRecord:
    def test_from_state(self) -> None:
        gs = GameState()
        gs.setup()
        play_all(gs, "e2e4", "e7e5")
        gs.resign(Color.WHITE)
        record = GameRecord.from_state(gs)
        assert record.variant == VariantKind.CLASSICAL
        assert record.result == "Black wins by resignation"
        assert [str(m) for m in record.moves] == ["e2e4", "e7e5", "resign"]

    def test_json_round_trip(self) -> None:
        record = GameRecord(
            VariantKind.DUCK_CHESS,
            "In progress",
            [SavedMove(E2, E4, MoveFlag.NORMAL), SavedMove(None, C4, MoveFlag.DUCK)],
            datetime(2024, 5, 1, 12, 30),
        )
        loaded = GameRecord.from_json(record.to_json())
        assert loaded == record

    def test_skips_malformed_moves(self, caplog) -> None:
        data = {
            "variant": "Classical",
            "result": "In progress",
            "moves": [
                {"from": "e2", "to": "e4", "flag": "NORMAL"},
                "e7e5",
                {"from": "e7", "to": "e5", "flag": "BOGUS"},
                {"from": "g1", "to": "f3", "flag": "NORMAL"},
            ],
        }
        with caplog.at_level(logging.WARNING):
            record = GameRecord.from_dict(data)
        assert [str(m) for m in record.moves] == ["e2e4", "g1f3"]
        assert caplog.text.count("Skipping malformed move") == 2

    @pytest.mark.parametrize(
        "data",
        [
            {"result": "", "moves": []},
            {"variant": "Atomic"},
            {"variant": "Classical", "result": 1},
            {"variant": "Classical", "date": "yesterday"},
            {"variant": "Classical", "moves": {"from": "e2"}},
        ],
    )
    def test_invalid_header(self, data) -> None:
        with pytest.raises(ValueError):
            GameRecord.from_dict(data)

    @pytest.mark.parametrize("text", ["not json", "[1, 2]"])
    def test_invalid_json(self, text) -> None:
        with pytest.raises(ValueError):
            GameRecord.from_json(text)


class TestReplay:
    def test_reproduces_position_and_outcome(self) -> None:
        gs = GameState()
        gs.setup()
        play_all(gs, "f2f3", "e7e5", "g2g4", "d8h4")
        loaded = GameRecord.from_json(GameRecord.from_state(gs).to_json())

        replayed = replay(loaded)
        assert replayed.outcome == gs.outcome
        assert replayed.outcome.reason == GameEndReason.CHECKMATE
        assert board_to_fen(replayed.board, replayed.side_to_move) == board_to_fen(
            gs.board, gs.side_to_move
        )

    def test_unresolvable_move(self) -> None:
        saved = SavedMove(E2, parse_square("e5"), MoveFlag.NORMAL)
        record = GameRecord(VariantKind.CLASSICAL, "", [saved])
        with pytest.raises(ValueError, match="not legal"):
            replay(record)

    def test_flag_mismatch(self) -> None:
        record = GameRecord(VariantKind.CLASSICAL, "", [SavedMove(E2, E4, MoveFlag.CASTLING)])
        with pytest.raises(ValueError, match="not legal"):
            replay(record)

    def test_duck_game(self) -> None:
        gs = GameState(VariantKind.DUCK_CHESS)
        gs.setup()
        play_all(gs, "e2e4", "@c4", "e7e5")
        replayed = replay(GameRecord.from_state(gs))
        assert replayed.phase == GamePhase.AWAITING_DUCK
        assert replayed.side_to_move == Color.BLACK
        assert replayed.board[C4].piece_type == PieceType.DUCK

    def test_crazyhouse_drop(self) -> None:
        gs = GameState(VariantKind.CRAZYHOUSE)
        gs.setup()
        play_all(gs, "e2e4", "d7d5", "e4d5", "g8f6", "P@e3")
        record = GameRecord.from_state(gs)
        assert record.moves[-1].drop_type == PieceType.PAWN

        replayed = replay(GameRecord.from_json(record.to_json()))
        assert replayed.board[E3].piece_type == PieceType.PAWN
        assert replayed.board.reserve(Color.WHITE) == {}
        assert replayed.side_to_move == Color.BLACK

    def test_resignation_goes_to_side_to_move(self) -> None:
        record = GameRecord(
            VariantKind.CLASSICAL,
            "",
            [SavedMove(E2, E4, MoveFlag.NORMAL), SavedMove(None, None, MoveFlag.RESIGN)],
        )
        replayed = replay(record)
        assert replayed.outcome.reason == GameEndReason.RESIGNATION
        assert replayed.outcome.winner == Color.WHITE

    def test_chaturaji_timeout_eliminates(self) -> None:
        saved = SavedMove(None, None, MoveFlag.TIMEOUT)
        record = GameRecord(VariantKind.CHATURAJI, "", [saved])
        replayed = replay(record)
        assert replayed.board.is_player_dead(Color.RED)
        assert replayed.side_to_move == Color.BLUE

    def test_agreed_draw(self) -> None:
        saved = SavedMove(None, None, MoveFlag.DRAW)
        record = GameRecord(VariantKind.FOG_OF_WAR, "", [saved])
        assert replay(record).outcome.reason == GameEndReason.DRAW_AGREED
