# src/roborex/grid.py
# Pixel <-> grid mapping. Cells are TILE_WIDTH x TILE_HEIGHT art drawn at SCALING_FACTOR.

from __future__ import annotations

from typing import Tuple

from .config import (
    GRID_HEIGHT,
    GRID_WIDTH,
    GRID_X_OFFSET,
    GRID_Y_OFFSET,
    SCALING_FACTOR,
    TILE_HEIGHT,
    TILE_WIDTH,
    WALKING_DURATION_MS,
)
from .primitives import Direction, Position, Rect

XY = Tuple[float, float]


def to_rectangle(position: Position) -> Rect:
    """Unscaled tile rectangle of a cell; scaling about its centre fills the cell."""
    return Rect(
        position.x * GRID_WIDTH + GRID_X_OFFSET,
        position.y * GRID_HEIGHT + GRID_Y_OFFSET,
        TILE_WIDTH,
        TILE_HEIGHT,
    )


def cell_rect(position: Position) -> Rect:
    """On-screen rectangle covered by a cell after scaling."""
    return to_rectangle(position).scaled_about_center(SCALING_FACTOR)


def cell_center(position: Position) -> XY:
    return to_rectangle(position).center


def from_coordinate(px: float, py: float) -> Position:
    """Cell whose drawn rectangle (cell_rect) contains the pixel."""
    # Pixels left/above the first cell clamp to column/row 0.
    x = int(px // GRID_WIDTH)
    y = int(py // GRID_HEIGHT)
    return Position(max(0, x), max(0, y))


def walk_progress(step_timer_ms: float, duration_ms: float = WALKING_DURATION_MS) -> float:
    if duration_ms <= 0:
        return 1.0
    progress = (duration_ms - step_timer_ms) / duration_ms
    return min(1.0, max(0.0, progress))


def interpolated_center(position: Position, direction: Direction, progress: float) -> XY:
    """Centre of a sprite `progress` of the way from `position` to its neighbour."""
    cx, cy = cell_center(position)
    dx, dy = direction.delta
    return (cx + dx * progress * GRID_WIDTH, cy + dy * progress * GRID_HEIGHT)
