"""Game-layer enums, configuration objects and the clock interface.

The clock itself lives outside this package; :class:`GameState` only reads
it through :class:`IClock`.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import Any

from chessvariants.core.enums import Color
from chessvariants.variants.base import VariantKind

# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_DUCK = auto()  # Duck Chess: the duck still has to be moved
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a finished game ended."""

    CHECKMATE = auto()
    STALEMATE = auto()
    KING_CAPTURED = auto()
    DUCK_STALEMATE = auto()  # the stalemated side wins
    FIFTY_MOVE_RULE = auto()
    LAST_PLAYER_STANDING = auto()
    CANNOT_CATCH_UP = auto()
    RESIGNATION = auto()
    TIMEOUT = auto()
    DRAW_AGREED = auto()

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", " ")


# ── Time control presets ─────────────────────────────────────────────────────


class TimeControl:
    """Immutable time-control definition.

    Args:
        initial_seconds: Starting time per player.
        increment_seconds: Per-move increment (Fischer).
    """

    __slots__ = ("initial_seconds", "increment_seconds")

    def __init__(self, initial_seconds: float, increment_seconds: float = 0.0) -> None:
        if initial_seconds <= 0 or increment_seconds < 0:
            raise ValueError(
                f"Invalid time control: {initial_seconds}s + {increment_seconds}s"
            )
        self.initial_seconds = initial_seconds
        self.increment_seconds = increment_seconds

    @classmethod
    def from_minutes(cls, minutes: float, increment_seconds: float = 0.0) -> TimeControl:
        return cls(minutes * 60, increment_seconds)

    # Common presets
    @classmethod
    def bullet_1m(cls) -> TimeControl:
        return cls(60, 0)

    @classmethod
    def blitz_3m2s(cls) -> TimeControl:
        return cls(180, 2)

    @classmethod
    def blitz_5m(cls) -> TimeControl:
        return cls(300, 0)

    @classmethod
    def rapid_10m(cls) -> TimeControl:
        return cls(600, 0)

    @classmethod
    def rapid_15m10s(cls) -> TimeControl:
        return cls(900, 10)

    @classmethod
    def unlimited(cls) -> TimeControl:
        """No time limit."""
        return cls(float("inf"), 0)

    @property
    def is_unlimited(self) -> bool:
        return math.isinf(self.initial_seconds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeControl):
            return NotImplemented
        return (self.initial_seconds, self.increment_seconds) == (
            other.initial_seconds,
            other.increment_seconds,
        )

    def __hash__(self) -> int:
        return hash((self.initial_seconds, self.increment_seconds))

    def __str__(self) -> str:
        if self.is_unlimited:
            return "unlimited"
        mins = self.initial_seconds / 60
        if self.increment_seconds:
            return f"{mins:g} | {self.increment_seconds:g}"
        return f"{mins:g}"

    def __repr__(self) -> str:
        mins = self.initial_seconds / 60
        if self.increment_seconds:
            return f"TimeControl({mins:.0f}m+{self.increment_seconds:.0f}s)"
        return f"TimeControl({mins:.0f}m)"


# ── Settings ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GameSettings:
    """What a new game is played with."""

    variant: VariantKind = VariantKind.CLASSICAL
    time_control: TimeControl = field(default_factory=TimeControl.unlimited)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GameSettings:
        """Build settings from plain data, e.g. a parsed config file.

        Recognised keys: ``variant`` (display or enum name), and either
        ``initial_minutes`` with optional ``increment_seconds`` or neither
        (unlimited).
        """
        variant_name = data.get("variant", VariantKind.CLASSICAL.display_name)
        if not isinstance(variant_name, str):
            raise ValueError(f"Variant must be a name, got {variant_name!r}")
        variant = VariantKind.from_name(variant_name)

        minutes = data.get("initial_minutes")
        increment = data.get("increment_seconds", 0)
        if minutes is None:
            if increment:
                raise ValueError("increment_seconds requires initial_minutes")
            return cls(variant)
        if isinstance(minutes, bool) or not isinstance(minutes, (int, float)):
            raise ValueError(f"initial_minutes must be a number, got {minutes!r}")
        if isinstance(increment, bool) or not isinstance(increment, (int, float)):
            raise ValueError(f"increment_seconds must be a number, got {increment!r}")
        return cls(variant, TimeControl.from_minutes(minutes, increment))

    def to_mapping(self) -> dict[str, Any]:
        data: dict[str, Any] = {"variant": self.variant.display_name}
        if not self.time_control.is_unlimited:
            data["initial_minutes"] = self.time_control.initial_seconds / 60
            data["increment_seconds"] = self.time_control.increment_seconds
        return data


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IClock(ABC):
    """Interface for a per-player game clock."""

    @abstractmethod
    def start(self, color: Color) -> None:
        """Run *color*'s time (pausing whoever was running)."""

    @abstractmethod
    def stop(self) -> None:
        """Pause the running clock."""

    @abstractmethod
    def remaining(self, color: Color) -> float:
        """Seconds remaining for *color*."""

    @abstractmethod
    def is_flag_fallen(self, color: Color) -> bool:
        """Has *color* run out of time?"""

    @abstractmethod
    def add_increment(self, color: Color) -> None:
        """Add Fischer increment after a move."""
