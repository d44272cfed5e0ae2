"""
Static evaluation: material plus simple positional bonuses.

Each piece contributes

    base value   MAN_VALUE or KING_VALUE
    advancement  rows travelled toward its crown row (0..7)
    back row     BACK_ROW_BONUS while it still guards its own home row
    center       CENTER_BONUS inside the central 4x4 block

Contributions of the perspective side are added and the opponent's are
subtracted, so evaluate(p, RED) == -evaluate(p, BLACK) for every position.

No caching: a full scan is 64 squares and the search depth is at most four
plies, so the evaluation is recomputed from scratch on every call.
"""

from engine.board import Piece, Player, Position
from engine.constants import (
    BACK_ROW_BONUS,
    BOARD_SIZE,
    CENTER_BONUS,
    CENTER_MAX,
    CENTER_MIN,
    KING_VALUE,
    MAN_VALUE,
)


def piece_score(piece: Piece, row: int, col: int) -> int:
    """Unsigned contribution of one piece standing on (row, col)."""
    value = KING_VALUE if piece.is_king else MAN_VALUE

    # Rows travelled from the home edge toward the crown row.
    if piece.owner is Player.RED:
        value += BOARD_SIZE - 1 - row
    else:
        value += row

    if row == piece.owner.home_row:
        value += BACK_ROW_BONUS

    if CENTER_MIN <= row <= CENTER_MAX and CENTER_MIN <= col <= CENTER_MAX:
        value += CENTER_BONUS

    return value


def evaluate(position: Position, perspective: Player) -> int:
    """
    Score `position` from `perspective`'s point of view.

    Args:
        position:    The position to score. Not modified.
        perspective: Side whose pieces count positively.

    Returns:
        Integer score; positive means `perspective` is ahead.

    Example:
        >>> from engine.board import initial_board
        >>> evaluate(initial_board(), Player.RED)
        0
    """
    score = 0
    for (row, col), piece in position.pieces():
        value = piece_score(piece, row, col)
        if piece.owner is perspective:
            score += value
        else:
            score -= value
    return score
