"""
Engine constants: board geometry, piece values, heuristic bonuses, scores
and search depths.

All numeric constants used throughout the engine are defined here so that
the rules, evaluation and search modules never introduce their own magic
numbers. The evaluation weights are deliberately small integers; the win
score must stay well above any sum of them.
"""

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------
# Standard 8x8 draughts board. Only dark squares ((row + col) odd) are ever
# occupied; each side starts with three rows of men.

BOARD_SIZE: int = 8
START_ROWS: int = 3

# Diagonal steps as (d_row, d_col). Men use the two steps pointing at the
# opponent's edge; kings use all four.
DIAGONALS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))

# ---------------------------------------------------------------------------
# Piece values
# ---------------------------------------------------------------------------

MAN_VALUE: int = 10
KING_VALUE: int = 30

# ---------------------------------------------------------------------------
# Positional bonuses
# ---------------------------------------------------------------------------
# A man on its own back row blocks the opponent's promotion square.
BACK_ROW_BONUS: int = 2

# Central 4x4 block (rows and columns 2..5 inclusive).
CENTER_BONUS: int = 2
CENTER_MIN: int = 2
CENTER_MAX: int = 5

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# A side with no moves has lost. WIN_SCORE must outweigh any heuristic sum:
# 12 kings at most 30 + 7 + 2 + 2 each is 492, far below 10,000.

WIN_SCORE: int = 10_000

# Search window bound. Any integer strictly above WIN_SCORE works; integers
# keep alpha-beta comparisons exact.
INFINITY: int = 1_000_000

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------
# Plies searched per difficulty tier. Chain-continuation jumps do not
# consume a ply. "easy" does not search at all.

DIFFICULTY_DEPTHS: dict[str, int] = {
    "medium": 2,
    "hard": 4,
}
