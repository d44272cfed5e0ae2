"""
FastAPI web application for the checkers engine.

Exposes the rules engine and the AI opponent as a small REST API for a
browser front end:

    GET  /api/new       initial position
    POST /api/moves     moves the side to move may play (whole side or one square)
    POST /api/apply     apply a move, report chain continuation and winner
    POST /api/ai-move   let the engine choose and apply a move

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound calls like the search.
- Stateless per request: the client sends the board, the side to move and
  any forced capture square each time; no server-side game state exists.
- Board, square and move fields use the notation defined in engine.board.
  Malformed notation is a 400, like an illegal move.
"""

import logging
import random

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from engine.apply import apply_move
from engine.board import IllegalMoveError, Move, Player, Position, Square, initial_board
from engine.movegen import allowed_moves, any_capture_available, has_moves, player_moves
from engine.search import Difficulty, analyse

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Checkers AI", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class PositionRequest(BaseModel):
    """
    Fields shared by every request that carries a game state.

    Fields:
        board:       Board notation, 8 rows joined by "/".
        turn:        Side to move.
        forced_from: Square a capture chain must continue from, if any.
    """

    board: str
    turn: Player
    forced_from: str | None = None

    @field_validator("board")
    @classmethod
    def strip_board(cls, v: str) -> str:
        """Drop surrounding whitespace and any spaces a client put between rows."""
        return v.replace(" ", "").strip()


class MovesRequest(PositionRequest):
    """Moves for one square, or for the whole side when `square` is omitted."""

    square: str | None = None


class MovesResponse(BaseModel):
    """
    Fields:
        moves:            Playable moves in move notation.
        capture_required: True when the side to move must capture.
    """

    moves: list[str]
    capture_required: bool


class ApplyRequest(PositionRequest):
    move: str


class AiMoveRequest(PositionRequest):
    """
    Fields:
        difficulty: easy, medium or hard.
        seed:       Optional seed making the engine's tie-breaks repeatable.
    """

    difficulty: Difficulty = Difficulty.MEDIUM
    seed: int | None = None


class StateResponse(BaseModel):
    """
    Game state after a move.

    Fields:
        board:             Board notation after the move.
        turn:              Side to move next (unchanged during a chain).
        continues_capture: Square the chain continues from, or None.
        winner:            Winning side if the game just ended, else None.
    """

    board: str
    turn: Player
    continues_capture: str | None = None
    winner: Player | None = None


class AiMoveResponse(StateResponse):
    """
    Fields (in addition to StateResponse):
        move:  Move the engine played, or None if it had none (and lost).
        score: Search score from the engine's perspective.
        depth: Plies searched.
        nodes: Positions visited.
    """

    move: str | None
    score: int
    depth: int
    nodes: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_state(request: PositionRequest) -> tuple[Position, Square | None]:
    """Parse the board and forced square, turning notation errors into 400s."""
    try:
        position = Position.from_text(request.board)
        forced = Square.parse(request.forced_from) if request.forced_from else None
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid position: {exc}") from exc
    return position, forced


def _state_after(position: Position, mover: Player, continues: Square | None) -> StateResponse:
    """Work out whose turn it is and whether the mover just won."""
    if continues is not None:
        return StateResponse(
            board=position.to_text(), turn=mover, continues_capture=str(continues)
        )
    turn = mover.opponent
    winner = None if has_moves(position, turn) else mover
    return StateResponse(board=position.to_text(), turn=turn, winner=winner)


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.get("/api/new", response_model=StateResponse)
def api_new() -> StateResponse:
    """Return the starting position. RED moves first."""
    return StateResponse(board=initial_board().to_text(), turn=Player.RED)


@app.post("/api/moves", response_model=MovesResponse)
def api_moves(request: MovesRequest) -> MovesResponse:
    """
    List the moves the side to move may play.

    With `square`, only that square's moves are listed, and only if it holds
    one of the side's pieces. The mandatory-capture and chain rules are
    always applied.

    Raises:
        HTTPException 400: Malformed board or square.
    """
    position, forced = _parse_state(request)

    if request.square is not None:
        try:
            square = Square.parse(request.square)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        piece = position.piece_at(square)
        if piece is None or piece.owner is not request.turn:
            moves = []
        else:
            moves = allowed_moves(position, square, forced)
    else:
        moves = player_moves(position, request.turn, forced)

    return MovesResponse(
        moves=[str(m) for m in moves],
        capture_required=forced is not None
        or any_capture_available(position, request.turn),
    )


@app.post("/api/apply", response_model=StateResponse)
def api_apply(request: ApplyRequest) -> StateResponse:
    """
    Apply a move for the side to move.

    Raises:
        HTTPException 400: Malformed input, or a move the side may not play now.
    """
    position, forced = _parse_state(request)
    try:
        move = Move.parse(request.move)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if move not in player_moves(position, request.turn, forced):
        raise HTTPException(
            status_code=400,
            detail=f"Illegal move for {request.turn.value}: {request.move}",
        )

    try:
        next_position, continues = apply_move(position, move, strict=True)
    except IllegalMoveError as exc:
        raise HTTPException(status_code=400, detail=f"Illegal move: {exc}") from exc

    return _state_after(next_position, request.turn, continues)


@app.post("/api/ai-move", response_model=AiMoveResponse)
def api_ai_move(request: AiMoveRequest) -> AiMoveResponse:
    """
    Let the engine choose and apply one step for the side to move.

    If the side has no legal move, no move is played and the opponent is
    reported as the winner.

    Raises:
        HTTPException 400: Malformed board or forced square.
        HTTPException 500: The engine failed unexpectedly.
    """
    position, forced = _parse_state(request)
    rng = random.Random(request.seed) if request.seed is not None else None

    try:
        result = analyse(position, request.turn, request.difficulty, forced, rng)
    except Exception as exc:
        _log.exception("Engine search failed for board=%s", request.board)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if result.move is None:
        _log.info("No move for %s; %s wins", request.turn.value, request.turn.opponent.value)
        return AiMoveResponse(
            board=request.board,
            turn=request.turn,
            winner=request.turn.opponent,
            move=None,
            score=result.score,
            depth=result.depth,
            nodes=result.nodes,
        )

    next_position, continues = apply_move(position, result.move)
    state = _state_after(next_position, request.turn, continues)

    _log.info(
        "Move=%s difficulty=%s score=%d depth=%d nodes=%d",
        result.move,
        request.difficulty.value,
        result.score,
        result.depth,
        result.nodes,
    )

    return AiMoveResponse(
        **state.model_dump(),
        move=str(result.move),
        score=result.score,
        depth=result.depth,
        nodes=result.nodes,
    )
