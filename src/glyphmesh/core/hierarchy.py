"""Solid/hole classification of traced rings.

Rings are ordered by absolute area and each ring is attached to the first
larger ring that contains its first vertex. The resulting forest has solid
islands as roots and holes as their children. A ring inside a hole is
recorded as that hole's child but is never triangulated as a solid of its
own.
"""

from dataclasses import dataclass, field

from glyphmesh.core.geometry import point_in_polygon, signed_area
from glyphmesh.domain import Ring, RingNode


@dataclass
class RingHierarchy:
    """Containment forest built from a set of rings.

    Attributes:
        roots: Solid islands in descending area order
        nodes: Every node in descending area order (roots and descendants)
    """

    roots: list[RingNode] = field(default_factory=list)
    nodes: list[RingNode] = field(default_factory=list)

    @property
    def hole_count(self) -> int:
        return sum(1 for node in self.nodes if node.is_hole)

    def total_area(self) -> float:
        """Sum of absolute ring areas."""
        return sum(node.abs_area for node in self.nodes)


class RingClassifier:
    """Builds the solid/hole forest for a glyph's rings.

    Parent selection takes the first containing ring in descending area
    order. That is the largest enclosing ring, not necessarily the
    tightest one, so deeper nesting collapses to one level.

    The classifier is stateless and safe to share between threads.
    """

    def classify(self, rings: list[Ring]) -> RingHierarchy:
        """Classify rings into islands and holes.

        Args:
            rings: Simplified rings in any order

        Returns:
            RingHierarchy with roots and all nodes
        """
        nodes = [RingNode(ring=ring, signed_area=signed_area(ring.points)) for ring in rings]
        # sorted() is stable, so equal areas keep their input order
        nodes = sorted(nodes, key=lambda node: node.abs_area, reverse=True)

        roots: list[RingNode] = []
        for i, node in enumerate(nodes):
            parent = self._find_parent(node, nodes[:i])
            if parent is None:
                node.is_hole = False
                roots.append(node)
            else:
                node.is_hole = not parent.is_hole
                parent.children.append(node)

        return RingHierarchy(roots=roots, nodes=nodes)

    def _find_parent(self, node: RingNode, candidates: list[RingNode]) -> RingNode | None:
        """Return the first candidate containing the node's first vertex.

        Args:
            node: Ring being placed
            candidates: Already placed (larger or equal) rings, in sort order

        Returns:
            Containing node, or None for a new root
        """
        if not node.points:
            return None

        test_point = node.points[0]
        for candidate in candidates:
            if point_in_polygon(test_point, candidate.points):
                return candidate

        return None


def classify_rings(rings: list[Ring]) -> list[RingNode]:
    """Convenience wrapper returning only the root islands."""
    return RingClassifier().classify(rings).roots
