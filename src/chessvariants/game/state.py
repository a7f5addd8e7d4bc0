"""Game state machine: applies committed moves and decides outcomes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chessvariants.core.board import Board
from chessvariants.core.enums import Color, MoveFlag, PieceType
from chessvariants.core.move import Move
from chessvariants.core.notation import parse_fen
from chessvariants.core.piece import Piece
from chessvariants.core.types import Square
from chessvariants.game.interfaces import GameEndReason, GamePhase, IClock
from chessvariants.variants import (
    ChaturajiVariant,
    CrazyhouseVariant,
    DuckChessVariant,
    GameVariant,
    VariantKind,
    create_variant,
)

_LOGGER = logging.getLogger(__name__)

# Variants that end when a king is taken rather than mated
_KING_CAPTURE_VARIANTS = (VariantKind.FOG_OF_WAR, VariantKind.DUCK_CHESS)


@dataclass(frozen=True, slots=True)
class GameOutcome:
    """How a game ended; ``winner`` is None for a draw."""

    reason: GameEndReason
    winner: Color | None = None

    @property
    def is_draw(self) -> bool:
        return self.winner is None

    def describe(self) -> str:
        if self.winner is None:
            return f"Draw by {self.reason.label}"
        return f"{self.winner.name.capitalize()} wins by {self.reason.label}"


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    color: Color
    was_capture: bool = False
    was_check: bool = False


@dataclass
class GameState:
    """Owns the board of one game and drives it through the variant's rules.

    This is a pure data/logic class: no threading, no UI, no clock of its
    own.  Moves submitted from outside are validated against the legal-move
    list; :meth:`apply_move` trusts its caller.
    """

    kind: VariantKind = VariantKind.CLASSICAL
    variant: GameVariant = field(init=False)
    board: Board = field(init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    outcome: GameOutcome | None = field(default=None, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self.variant = create_variant(self.kind)
        self.board = Board()

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game, optionally from a FEN position."""
        if fen is None:
            self.board = self.variant.initial_board()
            self.side_to_move = self.variant.players[0]
        else:
            if self.kind == VariantKind.CHATURAJI:
                raise ValueError("Chaturaji positions cannot be set up from FEN")
            self.board, self.side_to_move = parse_fen(fen)
            self.board.crazyhouse_mode = self.kind == VariantKind.CRAZYHOUSE
        self.outcome = None
        self.move_history.clear()
        self.phase = GamePhase.AWAITING_MOVE
        _LOGGER.debug("New %s game, %s to move", self.kind.display_name, self.side_to_move)

    # ── Move generation ──────────────────────────────────────────────────

    def legal_moves(self, piece: Piece) -> list[Move]:
        """Legal moves of *piece* if it may move now, else an empty list."""
        if self.phase == GamePhase.AWAITING_DUCK:
            if piece.piece_type != PieceType.DUCK:
                return []
        elif self.phase != GamePhase.AWAITING_MOVE or piece.color != self.side_to_move:
            return []
        return self.variant.legal_moves(self.board, piece)

    def all_legal_moves(self) -> list[Move]:
        """Every legal move for the side to move, drops included."""
        if self.phase == GamePhase.AWAITING_DUCK:
            assert isinstance(self.variant, DuckChessVariant)
            return self.variant.legal_moves(self.board, self.variant.duck(self.board))
        if self.phase != GamePhase.AWAITING_MOVE:
            return []
        moves: list[Move] = []
        for piece in self.board.pieces(self.side_to_move):
            moves.extend(self.variant.legal_moves(self.board, piece))
        if isinstance(self.variant, CrazyhouseVariant):
            for piece in self.variant.reserve_pieces(self.board, self.side_to_move):
                moves.extend(self.variant.drop_moves(self.board, piece))
        return moves

    def find_move(
        self,
        from_sq: Square | None,
        to_sq: Square,
        drop_type: PieceType | None = None,
    ) -> Move | None:
        """The legal move between two squares (or the drop of *drop_type*)."""
        for move in self.all_legal_moves():
            if (
                move.from_sq == from_sq
                and move.to_sq == to_sq
                and move.drop_type == drop_type
            ):
                return move
        return None

    # ── Move application ─────────────────────────────────────────────────

    def submit_move(self, move: Move) -> bool:
        """Validate and apply *move*. Returns True if it was legal.

        Matching is by squares and drop type, so a caller may submit a move
        built from its own piece objects; the promotion choice is carried
        over.
        """
        if self.phase not in (GamePhase.AWAITING_MOVE, GamePhase.AWAITING_DUCK):
            _LOGGER.warning("Move %s rejected: game is %s", move, self.phase.name)
            return False
        if move.flag.is_terminal or move.to_sq is None:
            _LOGGER.warning("Move %s rejected: not a board move", move)
            return False
        legal = self.find_move(move.from_sq, move.to_sq, move.drop_type)
        if legal is None:
            _LOGGER.warning("Illegal move %s rejected", move)
            return False
        if legal.flag == MoveFlag.PROMOTION and move.promotion is not None:
            legal = legal.with_promotion(move.promotion)
        self.apply_move(legal)
        return True

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply a validated move and return the history record.

        Caller is responsible for legality check.
        """
        mover = self.side_to_move
        board = self.board
        board.execute_move(move)
        self.variant.handle_post_move(board, move)

        if board.waiting_for_duck:
            self.phase = GamePhase.AWAITING_DUCK
        else:
            self.phase = GamePhase.AWAITING_MOVE
            self.side_to_move = self.variant.next_player(board, mover)

        record = MoveRecord(
            move=move,
            color=mover,
            was_capture=move.is_capture,
            was_check=self._gives_check(mover),
        )
        self.move_history.append(record)
        _LOGGER.debug("%s played %s", mover, move)

        self._check_game_over(move, mover)
        return record

    # ── Resignation / draw / time ────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self._end_by_player(color, MoveFlag.RESIGN, GameEndReason.RESIGNATION)

    def flag_fall(self, color: Color) -> None:
        """Time ran out for *color*."""
        self._end_by_player(color, MoveFlag.TIMEOUT, GameEndReason.TIMEOUT)

    def agree_draw(self) -> None:
        if self.is_game_over:
            return
        self.board.execute_move(Move.terminal(MoveFlag.DRAW))
        self._finish(GameOutcome(GameEndReason.DRAW_AGREED))

    def poll_clock(self, clock: IClock) -> bool:
        """Flag the side to move if its time is up. Returns True if it was."""
        if self.is_game_over or not clock.is_flag_fallen(self.side_to_move):
            return False
        self.flag_fall(self.side_to_move)
        return True

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of committed moves (duck placements included)."""
        return len(self.move_history)

    @property
    def result_text(self) -> str:
        return "In progress" if self.outcome is None else self.outcome.describe()

    # ── Internal ─────────────────────────────────────────────────────────

    def _end_by_player(self, color: Color, flag: MoveFlag, reason: GameEndReason) -> None:
        if self.is_game_over:
            return
        self.board.execute_move(Move.terminal(flag))
        if self.kind != VariantKind.CHATURAJI:
            self._finish(GameOutcome(reason, color.opposite))
            return
        # A Chaturaji player who resigns or flags is eliminated instead.
        _LOGGER.info("%s leaves the game (%s)", color.name, reason.label)
        self.board.kill_player(color)
        if color == self.side_to_move:
            self.phase = GamePhase.AWAITING_MOVE
            self.side_to_move = self.variant.next_player(self.board, color)
        self._check_chaturaji_end()

    def _gives_check(self, mover: Color) -> bool:
        return any(
            self.variant.is_check(self.board, color)
            for color in self.variant.players
            if color != mover and not self.board.is_player_dead(color)
        )

    def _check_game_over(self, move: Move, mover: Color) -> None:
        if self.kind == VariantKind.CHATURAJI:
            self._check_chaturaji_end()
            return

        captured = move.captured
        if (
            self.kind in _KING_CAPTURE_VARIANTS
            and captured is not None
            and captured.piece_type == PieceType.KING
        ):
            self._finish(GameOutcome(GameEndReason.KING_CAPTURED, mover))
            return

        # Duck Chess turns are only over once the duck has moved.
        if self.phase != GamePhase.AWAITING_MOVE:
            return

        board, variant, side = self.board, self.variant, self.side_to_move
        if self.kind == VariantKind.DUCK_CHESS:
            if variant.is_stalemate(board, side):
                self._finish(GameOutcome(GameEndReason.DUCK_STALEMATE, side))
                return
        elif variant.is_checkmate(board, side):
            self._finish(GameOutcome(GameEndReason.CHECKMATE, mover))
            return
        elif variant.is_stalemate(board, side):
            self._finish(GameOutcome(GameEndReason.STALEMATE))
            return

        if variant.is_draw_by_fifty_move_rule(board):
            self._finish(GameOutcome(GameEndReason.FIFTY_MOVE_RULE))

    def _check_chaturaji_end(self) -> None:
        variant = self.variant
        assert isinstance(variant, ChaturajiVariant)
        board = self.board
        living = [c for c in variant.players if not board.is_player_dead(c)]
        if len(living) <= 1:
            reason = GameEndReason.LAST_PLAYER_STANDING
        elif variant.is_impossible_to_catch_up(board):
            reason = GameEndReason.CANNOT_CATCH_UP
        elif variant.is_draw_by_fifty_move_rule(board):
            reason = GameEndReason.FIFTY_MOVE_RULE
        else:
            return
        scores = {c: board.score(c) for c in variant.players}
        best = max(scores.values())
        leaders = [c for c, s in scores.items() if s == best]
        winner = leaders[0] if len(leaders) == 1 else None
        self._finish(GameOutcome(reason, winner))

    def _finish(self, outcome: GameOutcome) -> None:
        self.outcome = outcome
        self.phase = GamePhase.GAME_OVER
        _LOGGER.info("Game over: %s", outcome.describe())
