"""Tests for minimax search and the per-difficulty move selector."""

from __future__ import annotations

import random

import pytest

from engine.apply import apply_move
from engine.board import Move, Player, Position, Square, initial_board
from engine.constants import INFINITY, WIN_SCORE
from engine.evaluate import evaluate
from engine.movegen import player_moves
from engine.search import (
    Difficulty,
    SearchState,
    analyse,
    choose_move,
    minimax,
    score_move,
)

from .conftest import BLACK_MAN, RED_KING, RED_MAN, make_position, random_playout


def plain_minimax(
    position: Position,
    depth: int,
    maximizing: bool,
    root_player: Player,
    forced_from: Square | None = None,
) -> int:
    """Reference minimax without pruning."""
    side = root_player if maximizing else root_player.opponent
    moves = player_moves(position, side, forced_from)
    if not moves:
        return -WIN_SCORE if maximizing else WIN_SCORE
    if depth == 0:
        return evaluate(position, root_player)
    scores = []
    for move in moves:
        child, continues = apply_move(position, move)
        if continues is not None:
            scores.append(plain_minimax(child, depth, maximizing, root_player, continues))
        else:
            scores.append(plain_minimax(child, depth - 1, not maximizing, root_player))
    return max(scores) if maximizing else min(scores)


class TestTerminalSentinel:
    """A side without moves has lost, at any remaining depth."""

    @pytest.mark.parametrize("depth", [0, 1, 3])
    def test_root_side_without_moves_loses(self, depth: int) -> None:
        board = make_position({(4, 3): RED_MAN})
        score = minimax(board, depth, -INFINITY, INFINITY, True, Player.BLACK)
        assert score == -WIN_SCORE

    @pytest.mark.parametrize("depth", [0, 1, 3])
    def test_opponent_without_moves_wins(self, depth: int) -> None:
        board = make_position({(4, 3): RED_MAN})
        score = minimax(board, depth, -INFINITY, INFINITY, False, Player.RED)
        assert score == WIN_SCORE

    def test_sentinel_dominates_heuristic(self) -> None:
        board = make_position({(r, c): RED_KING for r in range(8) for c in range(8) if (r + c) % 2})
        assert abs(evaluate(board, Player.RED)) < WIN_SCORE

    def test_blocked_side_loses(self) -> None:
        board = make_position({(1, 0): RED_MAN, (0, 1): BLACK_MAN})
        score = minimax(board, 2, -INFINITY, INFINITY, True, Player.RED)
        assert score == -WIN_SCORE


class TestChainContinuation:
    """Extra hops keep the same side on move and do not cost a ply."""

    def setup_method(self) -> None:
        self.board = make_position({(7, 0): RED_MAN, (6, 1): BLACK_MAN, (4, 3): BLACK_MAN})
        self.first = Move(Square(7, 0), Square(5, 2), True, Square(6, 1))

    def test_double_jump_searched_at_one_ply(self) -> None:
        # Both hops fit in a single ply, after which BLACK has nothing left.
        assert score_move(self.board, self.first, Player.RED, depth=1) == WIN_SCORE

    def test_continuation_keeps_maximizing_side(self) -> None:
        child, continues = apply_move(self.board, self.first)
        assert continues == Square(5, 2)
        score = minimax(child, 1, -INFINITY, INFINITY, True, Player.RED, continues)
        assert score == WIN_SCORE

    def test_selector_finds_the_chain(self) -> None:
        result = analyse(self.board, Player.RED, Difficulty.MEDIUM, rng=random.Random(0))
        assert result.move == self.first
        assert result.score == WIN_SCORE


class TestAlphaBeta:
    """Pruning never changes the minimax value."""

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_matches_plain_minimax(self, depth: int) -> None:
        rng = random.Random(99)
        positions = []
        for _ in range(4):
            positions.extend(p for p, t, f in random_playout(rng, max_steps=30) if f is None)
        for position in positions[::12]:
            for maximizing in (True, False):
                expected = plain_minimax(position, depth, maximizing, Player.RED)
                got = minimax(position, depth, -INFINITY, INFINITY, maximizing, Player.RED)
                assert got == expected

    def test_counts_nodes(self) -> None:
        state = SearchState()
        minimax(initial_board(), 2, -INFINITY, INFINITY, True, Player.RED, None, state)
        assert state.node_count > 7


class TestMoveSelector:
    def test_no_moves_returns_none(self) -> None:
        board = make_position({(4, 3): RED_MAN})
        for difficulty in Difficulty:
            assert choose_move(board, Player.BLACK, difficulty) is None
        result = analyse(board, Player.BLACK, Difficulty.HARD)
        assert result.move is None
        assert result.score == -WIN_SCORE

    def test_easy_returns_a_legal_move(self) -> None:
        board = initial_board()
        legal = player_moves(board, Player.RED)
        seen = {choose_move(board, Player.RED, Difficulty.EASY, rng=random.Random(s)) for s in range(100)}
        assert seen <= set(legal)
        assert len(seen) > 1

    def test_mandatory_capture_at_root(self) -> None:
        board = make_position({(5, 2): RED_MAN, (4, 3): BLACK_MAN, (5, 6): RED_MAN, (6, 1): RED_MAN})
        for difficulty in Difficulty:
            move = choose_move(board, Player.RED, difficulty, rng=random.Random(3))
            assert move == Move(Square(5, 2), Square(3, 4), True, Square(4, 3))

    def test_forced_square_restricts_root(self) -> None:
        board = make_position(
            {(5, 4): BLACK_MAN, (6, 5): RED_MAN, (3, 2): BLACK_MAN, (4, 1): RED_MAN}
        )
        move = choose_move(board, Player.BLACK, Difficulty.HARD, forced_from=Square(5, 4))
        assert move == Move(Square(5, 4), Square(7, 6), True, Square(6, 5))

    @pytest.mark.parametrize("difficulty", [Difficulty.MEDIUM, Difficulty.HARD])
    def test_avoids_walking_into_capture(self, difficulty: Difficulty) -> None:
        # 43-32 lets BLACK hop 21x43 and take RED's only piece.
        board = make_position({(4, 3): RED_MAN, (2, 1): BLACK_MAN})
        for seed in range(10):
            move = choose_move(board, Player.RED, difficulty, rng=random.Random(seed))
            assert move == Move(Square(4, 3), Square(3, 4))

    def test_same_seed_same_move(self) -> None:
        board = initial_board()
        first = choose_move(board, Player.RED, Difficulty.MEDIUM, rng=random.Random(5))
        second = choose_move(board, Player.RED, Difficulty.MEDIUM, rng=random.Random(5))
        assert first == second


class TestTieBreaking:
    """Only maximal-score moves are returned, and every one of them can be."""

    @staticmethod
    def best_moves(position: Position, player: Player, depth: int) -> set[Move]:
        scores = {m: score_move(position, m, player, depth) for m in player_moves(position, player)}
        top = max(scores.values())
        return {m for m, s in scores.items() if s == top}

    def test_medium_returns_exactly_the_maximal_set(self) -> None:
        board = initial_board()
        expected = self.best_moves(board, Player.RED, Difficulty.MEDIUM.depth)
        seen = {
            choose_move(board, Player.RED, Difficulty.MEDIUM, rng=random.Random(seed))
            for seed in range(200)
        }
        assert seen == expected

    def test_hard_returns_a_maximal_move(self) -> None:
        board = initial_board()
        expected = self.best_moves(board, Player.RED, Difficulty.HARD.depth)
        for seed in range(3):
            result = analyse(board, Player.RED, Difficulty.HARD, rng=random.Random(seed))
            assert result.move in expected
            assert result.depth == 4
            assert result.nodes > 0

    def test_result_score_matches_root_search(self) -> None:
        board = initial_board()
        result = analyse(board, Player.BLACK, Difficulty.MEDIUM, rng=random.Random(11))
        assert result.score == score_move(board, result.move, Player.BLACK, 2)


def test_difficulty_depths() -> None:
    assert Difficulty.EASY.depth == 0
    assert Difficulty.MEDIUM.depth == 2
    assert Difficulty.HARD.depth == 4
    assert Difficulty("hard") is Difficulty.HARD
