"""Core geometric types for ring representation.

This module defines the lattice geometry produced by contour tracing:
- Point: An integer pixel coordinate
- Ring: A closed sequence of points bounding an ink region
- RingNode: A ring placed in the solid/hole containment forest
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point on the pixel lattice.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: Column index (grows rightward)
        y: Row index (grows downward)
    """

    x: int
    y: int

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=data["x"], y=data["y"])

    def is_adjacent(self, other: "Point") -> bool:
        """Check whether other is one of this point's 8 neighbours."""
        dx = abs(self.x - other.x)
        dy = abs(self.y - other.y)
        return max(dx, dy) == 1


@dataclass
class Ring:
    """A closed polyline of lattice points.

    The closing edge from the last point back to the first is implicit.
    A raw ring comes straight from the tracer; a simplified ring is the
    reduced form produced by the polyline simplifier.

    Attributes:
        points: Points in walk order
    """

    points: list[Point]

    def __len__(self) -> int:
        return len(self.points)

    def is_closed(self) -> bool:
        """Check that the last point steps back to the first in one 8-connected move.

        A single-point ring is trivially closed.
        """
        if len(self.points) <= 1:
            return True
        return self.points[-1].is_adjacent(self.points[0])

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the ring
        """
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ring":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a ring

        Returns:
            Ring instance
        """
        return cls(points=[Point.from_dict(p) for p in data["points"]])


@dataclass
class RingNode:
    """A ring in the solid/hole containment forest.

    Roots are solid islands, their children are holes. A hole's own
    children are kept in the tree but are not triangulated.

    Attributes:
        ring: The (simplified) ring
        signed_area: Shoelace area of the ring
        is_hole: True when the ring is subtracted from its parent
        children: Rings whose first vertex lies inside this ring
    """

    ring: Ring
    signed_area: float
    is_hole: bool = False
    children: list["RingNode"] = field(default_factory=list)

    @property
    def points(self) -> list[Point]:
        """Points of the underlying ring."""
        return self.ring.points

    @property
    def abs_area(self) -> float:
        return abs(self.signed_area)

    def iter_depth_first(self):
        """Yield this node and all descendants, parents before children."""
        yield self
        for child in self.children:
            yield from child.iter_depth_first()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary, including the subtree."""
        return {
            "ring": self.ring.to_dict(),
            "signed_area": self.signed_area,
            "is_hole": self.is_hole,
            "children": [c.to_dict() for c in self.children],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RingNode":
        """Deserialize from dictionary, including the subtree."""
        return cls(
            ring=Ring.from_dict(data["ring"]),
            signed_area=data["signed_area"],
            is_hole=data["is_hole"],
            children=[cls.from_dict(c) for c in data["children"]],
        )
