"""
Game session driver: the turn, capture-chain and result bookkeeping that a
front end needs around the pure rules functions.

A Game is the only mutable object in the engine. It holds the current
Position value and replaces it on every move; positions handed out earlier
stay valid and unchanged.
"""

import logging
import random
from enum import Enum

from engine.apply import apply_move
from engine.board import IllegalMoveError, Move, Player, Position, Square, initial_board
from engine.movegen import (
    allowed_moves,
    any_capture_available,
    has_moves,
    legal_moves,
    player_moves,
)
from engine.search import Difficulty, choose_move

_log = logging.getLogger(__name__)


class GameMode(str, Enum):
    PVP = "pvp"
    AI = "ai"


class Game:
    """
    One game from the initial position to a win.

    Attributes:
        mode:        PVP (both sides human) or AI (ai_player is the engine).
        difficulty:  Strength of the engine side in AI mode.
        ai_player:   Side played by the engine in AI mode.
        position:    Current position.
        turn:        Side to move.
        forced_from: Square the side to move must keep capturing from, or
                     None outside a capture chain.
        winner:      Winning side once the game is over, else None.
        rng:         Random source handed to the move selector.
    """

    def __init__(
        self,
        mode: GameMode = GameMode.AI,
        difficulty: Difficulty = Difficulty.MEDIUM,
        ai_player: Player = Player.BLACK,
        rng: random.Random | None = None,
    ) -> None:
        self.mode = GameMode(mode)
        self.difficulty = Difficulty(difficulty)
        self.ai_player = ai_player
        self.rng = rng
        self.reset()

    def reset(self) -> None:
        """Start over from the initial position with RED to move."""
        self.position: Position = initial_board()
        self.turn: Player = Player.RED
        self.forced_from: Square | None = None
        self.winner: Player | None = None

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @property
    def is_ai_turn(self) -> bool:
        return self.mode is GameMode.AI and self.turn is self.ai_player and not self.is_over

    def legal(self) -> list[Move]:
        """Every move the side to move may play now."""
        if self.is_over:
            return []
        return player_moves(self.position, self.turn, self.forced_from)

    def selectable(self, square: tuple[int, int]) -> bool:
        """
        Whether the side to move may pick up the piece on `square`.

        During a chain only the chaining piece may be picked; while a
        capture is mandatory only pieces that can capture may be picked.
        """
        if self.is_over or self.is_ai_turn:
            return False
        piece = self.position.piece_at(square)
        if piece is None or piece.owner is not self.turn:
            return False
        if self.forced_from is not None:
            return tuple(square) == tuple(self.forced_from)
        if any_capture_available(self.position, self.turn):
            return bool(legal_moves(self.position, square))
        return True

    def moves_for(self, square: tuple[int, int]) -> list[Move]:
        """Destinations to offer for the piece on `square`."""
        if not self.selectable(square):
            return []
        return allowed_moves(self.position, square, self.forced_from)

    def play(self, move: Move) -> Square | None:
        """
        Commit a human `move` for the side to move.

        Returns:
            The square the chain continues from, or None if the turn passed
            (or the game ended).

        Raises:
            IllegalMoveError: the game is over, the engine owns the side to
                move, or the move is not one the side to move may play now.
        """
        if self.is_ai_turn:
            raise IllegalMoveError(f"{self.turn.value} is played by the engine")
        return self._commit(move)

    def _commit(self, move: Move) -> Square | None:
        if self.is_over:
            raise IllegalMoveError("Game is already over")
        if move not in self.legal():
            raise IllegalMoveError(f"Move {move} is not allowed for {self.turn.value}")

        self.position, continues = apply_move(self.position, move, strict=True)

        if continues is not None:
            self.forced_from = continues
            return continues

        self.forced_from = None
        mover = self.turn
        self.turn = mover.opponent
        if not has_moves(self.position, self.turn):
            self.winner = mover
            _log.info("%s wins: %s has no legal move", mover.value, self.turn.value)
        return None

    def play_ai(self) -> Move | None:
        """
        Let the engine move for the side to move.

        Returns:
            The move played, or None if the side had no move, in which case
            the opponent is declared the winner.
        """
        if self.is_over:
            return None
        move = choose_move(
            self.position, self.turn, self.difficulty, self.forced_from, self.rng
        )
        if move is None:
            self.winner = self.turn.opponent
            _log.info("%s wins: %s has no legal move", self.winner.value, self.turn.value)
            return None
        self._commit(move)
        return move
