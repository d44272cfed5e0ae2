"""
Move generation and the mandatory-capture rule.

The rule lives in one place. Every public query below applies it, so the
game driver, the web API and the search cannot disagree about which moves a
side may play. The precedence is:

    1. mid-chain: only jumps from the forced square;
    2. any capture available to the piece's side: only jumps;
    3. otherwise: every move, jumps first and then slides.

_piece_moves() is the raw per-piece generator underneath; it knows nothing
about the other pieces of the same side.
"""

from engine.board import Move, Piece, Player, Position, Square, on_board
from engine.constants import DIAGONALS


def _directions(piece: Piece) -> tuple[tuple[int, int], ...]:
    if piece.is_king:
        return DIAGONALS
    return tuple(d for d in DIAGONALS if d[0] == piece.owner.forward)


def _piece_moves(
    position: Position,
    origin: Square,
    piece: Piece,
    jumps_only: bool,
) -> list[Move]:
    """Jumps (then slides unless jumps_only) for one piece, ignoring the rule."""
    row, col = origin
    directions = _directions(piece)

    moves: list[Move] = []
    for d_row, d_col in directions:
        land_row, land_col = row + 2 * d_row, col + 2 * d_col
        if not on_board(land_row, land_col):
            continue
        victim = position.grid[row + d_row][col + d_col]
        if (
            victim is not None
            and victim.owner is not piece.owner
            and position.grid[land_row][land_col] is None
        ):
            moves.append(
                Move(
                    origin,
                    Square(land_row, land_col),
                    True,
                    Square(row + d_row, col + d_col),
                )
            )

    if jumps_only:
        return moves

    for d_row, d_col in directions:
        to_row, to_col = row + d_row, col + d_col
        if on_board(to_row, to_col) and position.grid[to_row][to_col] is None:
            moves.append(Move(origin, Square(to_row, to_col)))

    return moves


def any_capture_available(position: Position, player: Player) -> bool:
    """True iff at least one of `player`'s pieces has a capturing move."""
    return any(
        _piece_moves(position, square, piece, jumps_only=True)
        for square, piece in position.pieces(player)
    )


def legal_moves(
    position: Position,
    square: tuple[int, int],
    chain_capture_only: bool = False,
) -> list[Move]:
    """
    Enumerate the moves the piece on `square` may play.

    Men move along the two forward diagonals, kings along all four. A jump
    hops an adjacent opposing piece onto the empty square behind it.
    Off-board targets are skipped and an empty square yields no moves.

    Only jumps are returned when chain_capture_only is set (a continuing
    chain) or when any piece of the same side can capture; otherwise jumps
    come first, followed by the slides.

    Args:
        position:           Position to generate from. Not modified.
        square:             (row, col) of the moving piece; must be on board.
        chain_capture_only: Return jumps only.

    Returns:
        List of Moves.
    """
    row, col = square
    assert on_board(row, col), f"square off board: {square}"
    if not on_board(row, col):
        return []

    piece = position.grid[row][col]
    if piece is None:
        return []

    jumps_only = chain_capture_only or any_capture_available(position, piece.owner)
    return _piece_moves(position, Square(row, col), piece, jumps_only)


def allowed_moves(
    position: Position,
    square: tuple[int, int],
    forced_from: tuple[int, int] | None = None,
) -> list[Move]:
    """
    legal_moves() plus the chain restriction: while a chain is active only
    the chaining piece may move, and only by jumping.
    """
    if forced_from is None:
        return legal_moves(position, square)
    if tuple(square) != tuple(forced_from):
        return []
    return legal_moves(position, square, chain_capture_only=True)


def player_moves(
    position: Position,
    player: Player,
    forced_from: tuple[int, int] | None = None,
) -> list[Move]:
    """
    Every move `player` may play, scanning pieces in row-major order.

    This is the move set used by the search at each node and by the move
    selector at the root.
    """
    if forced_from is not None:
        piece = position.piece_at(forced_from)
        if piece is None or piece.owner is not player:
            return []
        return legal_moves(position, forced_from, chain_capture_only=True)

    pieces = list(position.pieces(player))
    jumps = [
        move
        for square, piece in pieces
        for move in _piece_moves(position, square, piece, jumps_only=True)
    ]
    if jumps:
        return jumps
    return [
        move
        for square, piece in pieces
        for move in _piece_moves(position, square, piece, jumps_only=False)
    ]


def has_moves(position: Position, player: Player) -> bool:
    """A side with no pieces or no playable move has lost."""
    return bool(player_moves(position, player))
