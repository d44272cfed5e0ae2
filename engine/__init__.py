"""
Checkers AI engine package.

This package implements the rules of 8x8 checkers with mandatory captures,
multi-jump chains and king promotion, plus a minimax opponent with
alpha-beta pruning at three difficulty levels.

Modules:
    constants - Board geometry, piece values, bonuses, scores and depths
    board     - Immutable position model and text notation
    movegen   - Legal moves and the mandatory-capture rule
    apply     - Move application, promotion and chain continuation
    evaluate  - Static position evaluation
    search    - Minimax search and the per-difficulty move selector
    game      - Game session driver (turns, chains, winner)
"""

from engine.apply import apply_move
from engine.board import (
    IllegalMoveError,
    Move,
    Piece,
    Player,
    Position,
    Square,
    initial_board,
)
from engine.evaluate import evaluate
from engine.movegen import (
    allowed_moves,
    any_capture_available,
    has_moves,
    legal_moves,
    player_moves,
)
from engine.search import Difficulty, SearchResult, analyse, choose_move, minimax

__all__ = [
    "Difficulty",
    "IllegalMoveError",
    "Move",
    "Piece",
    "Player",
    "Position",
    "SearchResult",
    "Square",
    "allowed_moves",
    "analyse",
    "any_capture_available",
    "apply_move",
    "choose_move",
    "evaluate",
    "has_moves",
    "initial_board",
    "legal_moves",
    "minimax",
    "player_moves",
]
