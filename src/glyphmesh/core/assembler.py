"""Assembly of triangulated meshes and extrusion outlines."""

from dataclasses import dataclass, field

import structlog

from glyphmesh.core.triangulate import build_polygon_input, triangulate
from glyphmesh.domain import MeshRecord, OutlineRing, RingNode

logger = structlog.get_logger(__name__)

MIN_RING_VERTICES = 3


@dataclass
class AssembledGeometry:
    """Meshes and outlines for every island of a glyph.

    Attributes:
        meshes: One record per non-degenerate root island
        outlines: Every ring consumed, island first then its holes
        skipped_rings: Rings dropped for having fewer than 3 vertices
    """

    meshes: list[MeshRecord] = field(default_factory=list)
    outlines: list[OutlineRing] = field(default_factory=list)
    skipped_rings: int = 0


class MeshAssembler:
    """Triangulates each root island together with its holes.

    Degenerate rings are skipped where they are found: a degenerate hole is
    left out of its island, a degenerate island is left out entirely. Other
    islands are unaffected.
    """

    def assemble(self, roots: list[RingNode]) -> AssembledGeometry:
        """Produce mesh records and outline rings.

        Args:
            roots: Root islands from the ring classifier

        Returns:
            AssembledGeometry in root traversal order
        """
        result = AssembledGeometry()

        for root in roots:
            if len(root.points) < MIN_RING_VERTICES:
                result.skipped_rings += 1 + len(root.children)
                logger.debug("Degenerate island skipped", points=len(root.points))
                continue

            holes = [c for c in root.children if len(c.points) >= MIN_RING_VERTICES]
            result.skipped_rings += len(root.children) - len(holes)

            result.outlines.append(OutlineRing(points=list(root.points), is_hole=False))
            for hole in holes:
                result.outlines.append(OutlineRing(points=list(hole.points), is_hole=True))

            outer = [p.to_tuple() for p in root.points]
            hole_rings = [[p.to_tuple() for p in hole.points] for hole in holes]
            flat, hole_starts = build_polygon_input(outer, hole_rings)
            indices = triangulate(flat, hole_starts)

            vertices = [(float(x), float(y)) for x, y in outer]
            for ring in hole_rings:
                vertices.extend((float(x), float(y)) for x, y in ring)

            result.meshes.append(MeshRecord(vertices=vertices, indices=indices))

        return result


def assemble(roots: list[RingNode]) -> tuple[list[MeshRecord], list[OutlineRing]]:
    """Convenience wrapper returning (meshes, outlines)."""
    geometry = MeshAssembler().assemble(roots)
    return geometry.meshes, geometry.outlines
