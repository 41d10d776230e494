"""Settings-screen focus model.

The settings popup is a fixed 2x4 grid of input fields. Focus is stored as a
``(row, col)`` coordinate; the field under focus is looked up in the static
:data:`SETTINGS_LAYOUT` table. Directional moves are clamped at the grid edges
(no wrap-around).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["InputField", "Direction", "SETTINGS_LAYOUT", "GRID_ROWS", "GRID_COLS", "FocusGrid"]


class InputField(Enum):
    """The eight settings slots. ``RECALCULATE_AREA`` is a trigger, not a text field."""

    FUNCTION = "Function"
    LOWER_BOUND = "Lower Limit of Integration"
    UPPER_BOUND = "Upper Limit of Integration"
    RECALCULATE_AREA = "Recalculate Area"
    MIN_X = "Minimum X"
    MAX_X = "Maximum X"
    MIN_Y = "Minimum Y"
    MAX_Y = "Maximum Y"

    @property
    def title(self) -> str:
        return self.value

    @property
    def is_text(self) -> bool:
        return self is not InputField.RECALCULATE_AREA


class Direction(Enum):
    LEFT = (0, -1)
    RIGHT = (0, 1)
    UP = (-1, 0)
    DOWN = (1, 0)


SETTINGS_LAYOUT: tuple[tuple[InputField, ...], ...] = (
    (
        InputField.FUNCTION,
        InputField.LOWER_BOUND,
        InputField.UPPER_BOUND,
        InputField.RECALCULATE_AREA,
    ),
    (
        InputField.MIN_X,
        InputField.MAX_X,
        InputField.MIN_Y,
        InputField.MAX_Y,
    ),
)

GRID_ROWS = len(SETTINGS_LAYOUT)
GRID_COLS = len(SETTINGS_LAYOUT[0])


@dataclass
class FocusGrid:
    """Current focus coordinate inside :data:`SETTINGS_LAYOUT`.

    Parameters
    ----------
    row : int
        Row index, ``0 <= row < GRID_ROWS``.
    col : int
        Column index, ``0 <= col < GRID_COLS``.
    """

    row: int = 0
    col: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.row < GRID_ROWS and 0 <= self.col < GRID_COLS):
            raise ValueError(f"Focus position ({self.row}, {self.col}) is outside the settings grid")

    @property
    def field(self) -> InputField:
        return SETTINGS_LAYOUT[self.row][self.col]

    @property
    def position(self) -> tuple[int, int]:
        return (self.row, self.col)

    def move(self, direction: Direction) -> bool:
        """Step one cell in ``direction``; return ``False`` when clamped at an edge."""
        d_row, d_col = direction.value
        row, col = self.row + d_row, self.col + d_col
        if not (0 <= row < GRID_ROWS and 0 <= col < GRID_COLS):
            return False
        self.row, self.col = row, col
        return True

    def reset(self) -> None:
        self.row, self.col = 0, 0
