"""Saved-game records: plain data that is enough to replay a game.

Storing records (files, databases) is left to the caller; this module only
converts between :class:`GameState` histories, dictionaries and JSON text.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from chessvariants.core.enums import MoveFlag, PieceType
from chessvariants.core.move import Move
from chessvariants.core.types import parse_square, square_name
from chessvariants.game.state import GameState
from chessvariants.variants.base import VariantKind

_LOGGER = logging.getLogger(__name__)


def _enum_member(enum_cls: Any, name: Any, what: str) -> Any:
    if not isinstance(name, str) or name not in enum_cls.__members__:
        raise ValueError(f"Invalid {what}: {name!r}")
    return enum_cls[name]


def _optional_square(value: Any) -> int | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Invalid square: {value!r}")
    return parse_square(value)


@dataclass(frozen=True, slots=True)
class SavedMove:
    """One persisted move: squares, kind and the optional type choices."""

    from_sq: int | None
    to_sq: int | None
    flag: MoveFlag
    promotion: PieceType | None = None
    drop_type: PieceType | None = None

    @classmethod
    def from_move(cls, move: Move) -> SavedMove:
        return cls(move.from_sq, move.to_sq, move.flag, move.promotion, move.drop_type)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "from": None if self.from_sq is None else square_name(self.from_sq),
            "to": None if self.to_sq is None else square_name(self.to_sq),
            "flag": self.flag.name,
        }
        if self.promotion is not None:
            data["promotion"] = self.promotion.name
        if self.drop_type is not None:
            data["drop"] = self.drop_type.name
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SavedMove:
        """Parse one move entry; ``ValueError`` when it is malformed."""
        flag = _enum_member(MoveFlag, data.get("flag"), "move flag")
        from_sq = _optional_square(data.get("from"))
        to_sq = _optional_square(data.get("to"))
        promotion = None
        if data.get("promotion") is not None:
            promotion = _enum_member(PieceType, data["promotion"], "promotion type")
        drop_type = None
        if data.get("drop") is not None:
            drop_type = _enum_member(PieceType, data["drop"], "drop type")

        if flag.is_terminal:
            if from_sq is not None or to_sq is not None:
                raise ValueError(f"{flag.name} entry cannot carry squares")
        elif to_sq is None:
            raise ValueError(f"{flag.name} entry needs a destination")
        if (flag == MoveFlag.DROP) != (drop_type is not None):
            raise ValueError("Only DROP entries carry a drop type")
        if promotion is not None and flag != MoveFlag.PROMOTION:
            raise ValueError("Only PROMOTION entries carry a promotion type")
        return cls(from_sq, to_sq, flag, promotion, drop_type)

    def __str__(self) -> str:
        if self.flag.is_terminal:
            return self.flag.name.lower()
        origin = "@" if self.from_sq is None else square_name(self.from_sq)
        assert self.to_sq is not None
        return f"{origin}{square_name(self.to_sq)}"


@dataclass
class GameRecord:
    """Variant, result and move list of one game."""

    variant: VariantKind
    result: str
    moves: list[SavedMove] = field(default_factory=list)
    date: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_state(cls, state: GameState) -> GameRecord:
        return cls(
            variant=state.kind,
            result=state.result_text,
            moves=[SavedMove.from_move(m) for m in state.board.history],
        )

    # ── Serialisation ────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "variant": self.variant.display_name,
            "date": self.date.isoformat(timespec="seconds"),
            "result": self.result,
            "moves": [m.to_dict() for m in self.moves],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GameRecord:
        """Parse a record; malformed move entries are logged and skipped."""
        variant_name = data.get("variant")
        if not isinstance(variant_name, str):
            raise ValueError(f"Invalid variant: {variant_name!r}")
        variant = VariantKind.from_name(variant_name)

        result = data.get("result", "")
        if not isinstance(result, str):
            raise ValueError(f"Invalid result: {result!r}")

        raw_date = data.get("date")
        try:
            date = datetime.fromisoformat(raw_date) if raw_date else datetime.now()
        except (TypeError, ValueError):
            raise ValueError(f"Invalid date: {raw_date!r}") from None

        raw_moves = data.get("moves", [])
        if not isinstance(raw_moves, list):
            raise ValueError("Moves must be a list")
        moves: list[SavedMove] = []
        for index, entry in enumerate(raw_moves):
            if not isinstance(entry, Mapping):
                _LOGGER.warning("Skipping malformed move #%d: %r", index, entry)
                continue
            try:
                moves.append(SavedMove.from_dict(entry))
            except ValueError as exc:
                _LOGGER.warning("Skipping malformed move #%d: %s", index, exc)
        return cls(variant, result, moves, date)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, text: str) -> GameRecord:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid game record JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("Game record must be a JSON object")
        return cls.from_dict(data)


def replay(record: GameRecord) -> GameState:
    """Rebuild a game by playing *record*'s moves from the initial position.

    Resignations and time-outs are attributed to the side to move at that
    point of the game.
    """
    state = GameState(record.variant)
    state.setup()
    for index, saved in enumerate(record.moves):
        if saved.flag == MoveFlag.RESIGN:
            state.resign(state.side_to_move)
            continue
        if saved.flag == MoveFlag.TIMEOUT:
            state.flag_fall(state.side_to_move)
            continue
        if saved.flag == MoveFlag.DRAW:
            state.agree_draw()
            continue

        assert saved.to_sq is not None
        move = state.find_move(saved.from_sq, saved.to_sq, saved.drop_type)
        if move is None or move.flag != saved.flag:
            raise ValueError(f"Move #{index} ({saved}) is not legal when replayed")
        if saved.promotion is not None:
            move = move.with_promotion(saved.promotion)
        state.apply_move(move)
    return state
