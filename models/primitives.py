"""
Shared primitive data types for the game engine.

This module provides basic geometric types used throughout the codebase,
including input events and round configuration.
"""

from pydantic import BaseModel, ConfigDict


class Point2D(BaseModel):
    """Immutable 2D point/vector for positions and coordinates.

    This is the unified type used throughout the system for any 2D coordinate,
    whether it's a pointer position, a spawn point, or an offset.

    Attributes:
        x: X coordinate (horizontal)
        y: Y coordinate (vertical)

    Examples:
        >>> pos = Point2D(x=100.0, y=200.0)
        >>> offset = Point2D(x=-8.0, y=40.0)
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)  # Immutable

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


# Alias used by input code
Vector2D = Point2D
