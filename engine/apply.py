"""
Move application: produce the successor position for one atomic step.

The input position is never modified. The second element of the result
tells the caller whether the same side must keep capturing with the piece
that just landed; the caller threads that square back in as `forced_from`.
"""

from engine.board import IllegalMoveError, Move, Position, Square, on_board
from engine.movegen import legal_moves


def apply_move(
    position: Position,
    move: Move,
    strict: bool = False,
) -> tuple[Position, Square | None]:
    """
    Apply `move` to `position`.

    A man landing on its crown row becomes a king. Crowning is evaluated on
    the landing position, so a piece crowned mid-chain keeps king movement
    for the remaining hops of that chain.

    Args:
        position: Position the move was generated from. Not modified.
        move:     One slide or one capture hop.
        strict:   Also require the move to appear in legal_moves() for its
                  origin square.

    Returns:
        (next_position, continues_capture). continues_capture is the landing
        square when another hop is available from it, else None.

    Raises:
        IllegalMoveError: a square is off the board, the origin is empty,
            the jump metadata is inconsistent, or (strict) the move is not
            legal here.
    """
    squares = [move.from_square, move.to_square]
    if move.jumped is not None:
        squares.append(move.jumped)
    for row, col in squares:
        if not on_board(row, col):
            raise IllegalMoveError(f"Move {move} leaves the board at ({row}, {col})")

    piece = position.piece_at(move.from_square)
    if piece is None:
        raise IllegalMoveError(f"No piece on {move.from_square} for move {move}")
    if position.piece_at(move.to_square) is not None:
        raise IllegalMoveError(f"Target square of {move} is occupied")

    if move.is_jump:
        if move.jumped is None:
            raise IllegalMoveError(f"Jump {move} has no jumped square")
        (from_row, from_col), (to_row, to_col) = move.from_square, move.to_square
        mid_row, mid_col = move.jumped
        if (from_row + to_row, from_col + to_col) != (2 * mid_row, 2 * mid_col):
            raise IllegalMoveError(f"Jump {move} does not pass over {move.jumped}")
        victim = position.piece_at(move.jumped)
        if victim is None or victim.owner is piece.owner:
            raise IllegalMoveError(f"Jump {move} does not capture an opposing piece")
    elif move.jumped is not None:
        raise IllegalMoveError(f"Slide {move} carries a jumped square")

    if strict and move not in legal_moves(position, move.from_square):
        raise IllegalMoveError(f"Move {move} is not legal in this position")

    landing = Square(*move.to_square)
    moved = piece
    if not piece.is_king and landing.row == piece.owner.crown_row:
        moved = piece.crowned()

    changes = {Square(*move.from_square): None, landing: moved}
    if move.is_jump:
        changes[Square(*move.jumped)] = None
    next_position = position.replace(changes)

    if move.is_jump and legal_moves(next_position, landing, chain_capture_only=True):
        return next_position, landing
    return next_position, None
