"""Game management layer: committed moves, outcomes, settings and records.

Quick start::

    from chessvariants.game import GameState, GameRecord, replay
    from chessvariants.variants import VariantKind

    state = GameState(VariantKind.DUCK_CHESS)
    state.setup()
    state.submit_move(state.all_legal_moves()[0])
    saved = GameRecord.from_state(state).to_json()
"""

from chessvariants.game.interfaces import (
    GameEndReason,
    GamePhase,
    GameSettings,
    IClock,
    TimeControl,
)
from chessvariants.game.record import GameRecord, SavedMove, replay
from chessvariants.game.state import GameOutcome, GameState, MoveRecord

__all__ = [
    # Interfaces / configuration
    "GameEndReason",
    "GamePhase",
    "GameSettings",
    "IClock",
    "TimeControl",
    # Concrete
    "GameOutcome",
    "GameState",
    "MoveRecord",
    # Records
    "GameRecord",
    "SavedMove",
    "replay",
]
