"""
Position model: players, pieces, squares, moves and the immutable board.

A Position is a value. It holds the 8x8 grid and nothing else; whose turn it
is and whether a capture chain must continue are tracked by the caller and
passed explicitly to the move generator and the search. Every transition
produces a new Position, so a search branch can never observe the
speculative moves of a sibling branch.

Coordinates are (row, col) with row 0 at the top. BLACK starts on rows 0-2
and moves down the board; RED starts on rows 5-7 and moves up.

Text notation (used by the console and web interfaces):
    square  "21"             row 2, column 1
    move    "21-30"          simple slide
            "52x34"          capture hop; the jumped square is the midpoint
    board   ".b.b.b.b/b.b.b.b/..."  8 rows joined by "/", row 0 first
            "."  empty     "b"/"B"  black man/king     "r"/"R"  red man/king
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple

from engine.constants import BOARD_SIZE, START_ROWS


class IllegalMoveError(ValueError):
    """Raised when a move cannot be applied to the given position."""


class Player(str, Enum):
    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> "Player":
        return Player.BLACK if self is Player.RED else Player.RED

    @property
    def forward(self) -> int:
        """Row step toward the promotion edge."""
        return -1 if self is Player.RED else 1

    @property
    def crown_row(self) -> int:
        """Row on which a man of this side is promoted."""
        return 0 if self is Player.RED else BOARD_SIZE - 1

    @property
    def home_row(self) -> int:
        """This side's own back row."""
        return BOARD_SIZE - 1 if self is Player.RED else 0


class Square(NamedTuple):
    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.row}{self.col}"

    @classmethod
    def parse(cls, text: str) -> "Square":
        """Parse two-digit square notation such as "21"."""
        text = text.strip()
        if len(text) != 2 or not text.isdigit():
            raise ValueError(f"Invalid square: {text!r}")
        square = cls(int(text[0]), int(text[1]))
        if not on_board(square.row, square.col):
            raise ValueError(f"Square off board: {text!r}")
        return square


def on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_playable(row: int, col: int) -> bool:
    """Only dark squares ((row + col) odd) ever hold a piece."""
    return (row + col) % 2 == 1


@dataclass(frozen=True)
class Piece:
    owner: Player
    is_king: bool = False

    def crowned(self) -> "Piece":
        return Piece(self.owner, True)

    def symbol(self) -> str:
        char = "r" if self.owner is Player.RED else "b"
        return char.upper() if self.is_king else char

    @classmethod
    def from_symbol(cls, char: str) -> "Piece":
        if char not in "rRbB":
            raise ValueError(f"Invalid piece symbol: {char!r}")
        owner = Player.RED if char.lower() == "r" else Player.BLACK
        return cls(owner, char.isupper())


@dataclass(frozen=True)
class Move:
    """
    One atomic step: a single slide or a single capture hop.

    A multi-jump chain is a sequence of Moves applied one at a time; the
    applicator reports after each hop whether another hop is required.
    """

    from_square: Square
    to_square: Square
    is_jump: bool = False
    jumped: Square | None = None

    def __str__(self) -> str:
        sep = "x" if self.is_jump else "-"
        return f"{self.from_square}{sep}{self.to_square}"

    @classmethod
    def parse(cls, text: str) -> "Move":
        """
        Parse "21-30" or "52x34" into a Move.

        The capture flag is taken from the geometry: a two-square diagonal
        step is a jump over the midpoint, a one-square step is a slide. The
        separator is informational and either one is accepted.
        """
        text = text.strip()
        for sep in ("-", "x"):
            if sep in text:
                head, _, tail = text.partition(sep)
                break
        else:
            raise ValueError(f"Invalid move: {text!r}")

        start, end = Square.parse(head), Square.parse(tail)
        d_row, d_col = end.row - start.row, end.col - start.col
        if abs(d_row) != abs(d_col) or abs(d_row) not in (1, 2):
            raise ValueError(f"Move is not a diagonal step or hop: {text!r}")
        if abs(d_row) == 1:
            return cls(start, end)
        mid = Square(start.row + d_row // 2, start.col + d_col // 2)
        return cls(start, end, True, mid)


Grid = tuple[tuple[Piece | None, ...], ...]


@dataclass(frozen=True)
class Position:
    """
    Immutable 8x8 board. Build new ones with replace() or the constructors.

    Play keeps every piece on a dark square because all steps are diagonal.
    from_text() rejects light-square pieces in external input; positions
    built directly from pieces are not checked, which lets tests set up
    small diagonal scenarios anywhere on the board.
    """

    grid: Grid

    def __post_init__(self) -> None:
        if len(self.grid) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in self.grid):
            raise ValueError("Position grid must be 8x8")

    # -----------------------------------------------------------------------
    # Constructors
    # -----------------------------------------------------------------------

    @classmethod
    def empty(cls) -> "Position":
        return cls(tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE)))

    @classmethod
    def from_pieces(cls, pieces: dict[tuple[int, int], Piece]) -> "Position":
        """Build a position from a {(row, col): Piece} mapping."""
        return cls.empty().replace(
            {Square(*square): piece for square, piece in pieces.items()}
        )

    @classmethod
    def from_text(cls, text: str) -> "Position":
        """Parse board notation: 8 rows of 8 characters joined by "/"."""
        rows = text.strip().split("/")
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError(f"Board must be 8 rows of 8 characters: {text!r}")
        grid = tuple(
            tuple(None if ch == "." else Piece.from_symbol(ch) for ch in row)
            for row in rows
        )
        for row, cells in enumerate(grid):
            for col, piece in enumerate(cells):
                if piece is not None and not is_playable(row, col):
                    raise ValueError(f"Piece on non-playable square {row}{col}")
        return cls(grid)

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def piece_at(self, square: tuple[int, int]) -> Piece | None:
        row, col = square
        if not on_board(row, col):
            raise IndexError(f"Square off board: {square}")
        return self.grid[row][col]

    def pieces(self, player: Player | None = None) -> Iterator[tuple[Square, Piece]]:
        """Yield (square, piece) in row-major order, optionally for one side."""
        for row, cells in enumerate(self.grid):
            for col, piece in enumerate(cells):
                if piece is not None and (player is None or piece.owner is player):
                    yield Square(row, col), piece

    def count(self, player: Player) -> int:
        return sum(1 for _ in self.pieces(player))

    # -----------------------------------------------------------------------
    # Transitions
    # -----------------------------------------------------------------------

    def replace(self, changes: dict[Square, Piece | None]) -> "Position":
        """Return a new Position with the given squares overwritten."""
        rows = [list(cells) for cells in self.grid]
        for (row, col), piece in changes.items():
            rows[row][col] = piece
        return Position(tuple(tuple(cells) for cells in rows))

    # -----------------------------------------------------------------------
    # Rendering
    # -----------------------------------------------------------------------

    def to_text(self) -> str:
        return "/".join(
            "".join("." if p is None else p.symbol() for p in cells)
            for cells in self.grid
        )

    def __str__(self) -> str:
        lines = ["  " + "".join(str(c) for c in range(BOARD_SIZE))]
        for row, cells in enumerate(self.grid):
            lines.append(
                f"{row} " + "".join("." if p is None else p.symbol() for p in cells)
            )
        return "\n".join(lines)


def initial_board() -> Position:
    """Starting layout: 12 BLACK men on rows 0-2, 12 RED men on rows 5-7."""
    pieces: dict[tuple[int, int], Piece] = {}
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if not is_playable(row, col):
                continue
            if row < START_ROWS:
                pieces[(row, col)] = Piece(Player.BLACK)
            elif row >= BOARD_SIZE - START_ROWS:
                pieces[(row, col)] = Piece(Player.RED)
    return Position.from_pieces(pieces)
