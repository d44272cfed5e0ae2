"""
Search entry point: minimax with alpha-beta pruning and the per-difficulty
move selector.

The search is a plain recursive tree walk over immutable positions. Each
child position is produced by apply_move(), which never modifies its input,
so sibling branches cannot see each other's speculative moves and no
push/pop bookkeeping is needed.

Turn handling:
    Whose move it is and whether a capture chain must continue are explicit
    arguments. When a hop leaves another hop available, the same side moves
    again from the landing square at the same depth: a chain-continuation
    jump does not cost a ply and does not hand the move to the opponent.

    Every node generates its moves before looking at the remaining depth,
    leaves included: a side with no moves has lost, and that must score as
    a loss at depth 0 too rather than as a heuristic evaluation.

Difficulty tiers:
    easy    uniformly random legal move, no search
    medium  best move by a 2-ply search
    hard    best move by a 4-ply search

Tie-breaking:
    The root moves are shuffled before a stable arg-max scan, so moves with
    equal scores are chosen uniformly at random among themselves. Pass a
    seeded random.Random to make the choice reproducible.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum

from engine.apply import apply_move
from engine.board import Move, Player, Position
from engine.constants import DIFFICULTY_DEPTHS, INFINITY, WIN_SCORE
from engine.evaluate import evaluate
from engine.movegen import player_moves

_log = logging.getLogger(__name__)

# Shared generator for callers that do not supply their own.
_rng = random.Random()


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def depth(self) -> int:
        """Search depth in plies; 0 for the non-searching tier."""
        return DIFFICULTY_DEPTHS.get(self.value, 0)


@dataclass
class SearchState:
    """
    Per-search counters.

    Attributes:
        node_count: Number of positions visited by minimax(). Used for
                    logging and by tools/bench.py to compare search cost.
    """

    node_count: int = 0


@dataclass
class SearchResult:
    """
    Outcome of a root search.

    Attributes:
        move:  Chosen move, or None if the side has no legal moves.
        score: Search score of the chosen move from the mover's perspective
               (0 for the random tier, -WIN_SCORE when there is no move).
        depth: Plies searched (0 for the random tier).
        nodes: Positions visited.
    """

    move: Move | None
    score: int
    depth: int
    nodes: int


def minimax(
    position: Position,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    root_player: Player,
    forced_from: tuple[int, int] | None = None,
    state: SearchState | None = None,
) -> int:
    """
    Minimax search with alpha-beta pruning.

    Args:
        position:    Current position. Not modified.
        depth:       Remaining plies. Chain continuations keep the same depth.
        alpha:       Best score the maximizing side can already guarantee.
        beta:        Best score the minimizing side can already guarantee.
        maximizing:  True when root_player is to move at this node.
        root_player: Side the score is computed for.
        forced_from: Square a capture chain must continue from, if any.
        state:       Optional node counter.

    Returns:
        Score from root_player's perspective. A side with no moves has lost:
        -WIN_SCORE if that side is root_player, +WIN_SCORE otherwise. This
        holds at any remaining depth, including 0.
    """
    if state is not None:
        state.node_count += 1

    side = root_player if maximizing else root_player.opponent
    moves = player_moves(position, side, forced_from)

    if not moves:
        return -WIN_SCORE if maximizing else WIN_SCORE

    if depth == 0:
        return evaluate(position, root_player)

    if maximizing:
        best = -INFINITY
        for move in moves:
            child, continues = apply_move(position, move)
            if continues is not None:
                score = minimax(child, depth, alpha, beta, True, root_player, continues, state)
            else:
                score = minimax(child, depth - 1, alpha, beta, False, root_player, None, state)
            best = max(best, score)
            alpha = max(alpha, score)
            if beta <= alpha:
                break
        return best

    best = INFINITY
    for move in moves:
        child, continues = apply_move(position, move)
        if continues is not None:
            score = minimax(child, depth, alpha, beta, False, root_player, continues, state)
        else:
            score = minimax(child, depth - 1, alpha, beta, True, root_player, None, state)
        best = min(best, score)
        beta = min(beta, score)
        if beta <= alpha:
            break
    return best


def score_move(
    position: Position,
    move: Move,
    player: Player,
    depth: int,
    state: SearchState | None = None,
) -> int:
    """
    Full-window search score of playing `move` for `player` at the root.

    The root move itself consumes one ply unless it leaves a capture chain
    open, in which case the same side keeps the move at the same depth.
    """
    child, continues = apply_move(position, move)
    if continues is not None:
        return minimax(child, depth, -INFINITY, INFINITY, True, player, continues, state)
    return minimax(child, depth - 1, -INFINITY, INFINITY, False, player, None, state)


def analyse(
    position: Position,
    player: Player,
    difficulty: Difficulty,
    forced_from: tuple[int, int] | None = None,
    rng: random.Random | None = None,
) -> SearchResult:
    """
    Select a move for `player` and report how it was chosen.

    The candidate set is exactly the one the search uses at every node:
    jumps from `forced_from` mid-chain, else jumps only if any capture is
    available, else all moves.

    Each root move is searched with a full window rather than a window
    narrowed by earlier siblings, so every root score is exact and equal
    scores really are equal when the tie is broken.

    Args:
        position:    Current position. Not modified.
        player:      Side to move.
        difficulty:  Selection strategy.
        forced_from: Square a capture chain must continue from, if any.
        rng:         Random source for the easy pick and the root shuffle.

    Returns:
        SearchResult with the chosen move (None if there is none).
    """
    rng = rng if rng is not None else _rng
    difficulty = Difficulty(difficulty)
    moves = player_moves(position, player, forced_from)

    if not moves:
        return SearchResult(None, -WIN_SCORE, 0, 0)

    if difficulty is Difficulty.EASY:
        return SearchResult(rng.choice(moves), 0, 0, 0)

    depth = difficulty.depth
    state = SearchState()
    rng.shuffle(moves)

    best_move = moves[0]
    best_score = -INFINITY
    for move in moves:
        score = score_move(position, move, player, depth, state)
        if score > best_score:
            best_score = score
            best_move = move

    _log.debug(
        "player=%s difficulty=%s move=%s score=%d depth=%d nodes=%d",
        player.value,
        difficulty.value,
        best_move,
        best_score,
        depth,
        state.node_count,
    )
    return SearchResult(best_move, best_score, depth, state.node_count)


def choose_move(
    position: Position,
    player: Player,
    difficulty: Difficulty,
    forced_from: tuple[int, int] | None = None,
    rng: random.Random | None = None,
) -> Move | None:
    """
    Return the AI's move for `player`, or None if it has no legal move.

    None means the side to move has lost; the caller declares the result.
    """
    return analyse(position, player, difficulty, forced_from, rng).move
