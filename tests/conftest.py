"""Shared position helpers for the engine tests."""

from __future__ import annotations

import random

from engine.apply import apply_move
from engine.board import Piece, Player, Position, initial_board
from engine.movegen import player_moves

RED_MAN = Piece(Player.RED)
RED_KING = Piece(Player.RED, True)
BLACK_MAN = Piece(Player.BLACK)
BLACK_KING = Piece(Player.BLACK, True)


def make_position(pieces: dict[tuple[int, int], Piece]) -> Position:
    """Build a position holding exactly the given pieces."""
    return Position.from_pieces(pieces)


def random_playout(rng: random.Random, max_steps: int = 80):
    """
    Play random moves from the initial position.

    Yields (position, side_to_move, forced_from) before each step, so callers
    can check properties over reachable positions.
    """
    position = initial_board()
    turn = Player.RED
    forced = None
    for _ in range(max_steps):
        yield position, turn, forced
        moves = player_moves(position, turn, forced)
        if not moves:
            return
        position, forced = apply_move(position, rng.choice(moves), strict=True)
        if forced is None:
            turn = turn.opponent

