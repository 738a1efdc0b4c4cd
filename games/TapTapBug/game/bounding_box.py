"""
Axis-aligned bounding box used for bug/food collision and click hit-testing.
"""
from dataclasses import dataclass


@dataclass
class BoundingBox:
    """Mutable rectangle owned by the entity it measures.

    Position is the top-left corner (pygame convention).

    Examples:
        >>> food = BoundingBox(x=10, y=10, width=56, height=56)
        >>> bug = BoundingBox(x=15, y=12, width=45, height=50)
        >>> food.overlaps(bug)
        True
        >>> bug.overlaps(food)
        False
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def overlaps(self, other: 'BoundingBox') -> bool:
        """Check if this box fully contains another box (edges inclusive).

        This is containment, not intersection, and is not symmetric.
        """
        return (
            self.x <= other.x and
            self.y <= other.y and
            self.right >= other.right and
            self.bottom >= other.bottom
        )

    def contains_point(self, x: float, y: float) -> bool:
        """Check if a point lies strictly inside the box."""
        return self.x < x < self.right and self.y < y < self.bottom

    def move_to(self, x: float, y: float) -> None:
        """Reposition the box without resizing it."""
        self.x = x
        self.y = y
