"""Variant rule engines.

Quick start::

    from chessvariants.variants import VariantKind, create_variant

    variant = create_variant(VariantKind.CRAZYHOUSE)
    board = variant.initial_board()
    moves = variant.legal_moves(board, board[52])
"""

from chessvariants.variants.base import FIFTY_MOVE_HALFMOVES, GameVariant, VariantKind
from chessvariants.variants.chaturaji import ChaturajiVariant, piece_value
from chessvariants.variants.classical import ClassicalVariant
from chessvariants.variants.crazyhouse import CrazyhouseVariant
from chessvariants.variants.duck import DuckChessVariant
from chessvariants.variants.fog_of_war import FogOfWarVariant

_VARIANTS: dict[VariantKind, type[GameVariant]] = {
    VariantKind.CLASSICAL: ClassicalVariant,
    VariantKind.FOG_OF_WAR: FogOfWarVariant,
    VariantKind.DUCK_CHESS: DuckChessVariant,
    VariantKind.CRAZYHOUSE: CrazyhouseVariant,
    VariantKind.CHATURAJI: ChaturajiVariant,
}


def create_variant(kind: VariantKind) -> GameVariant:
    """Instantiate the rule engine for *kind*."""
    return _VARIANTS[kind]()


__all__ = [
    "FIFTY_MOVE_HALFMOVES",
    "ChaturajiVariant",
    "ClassicalVariant",
    "CrazyhouseVariant",
    "DuckChessVariant",
    "FogOfWarVariant",
    "GameVariant",
    "VariantKind",
    "create_variant",
    "piece_value",
]
