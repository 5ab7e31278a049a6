"""Reconstruction output types.

This module defines what the pipeline hands back to its callers:
- Run: An axis-aligned block of ink cells (bars and greedy rectangles)
- MeshRecord: Triangulated front face of one solid island
- OutlineRing: A ring for side-wall extrusion
- ReconstructionResult: Everything one request produced
"""

from dataclasses import dataclass, field
from typing import Any

from glyphmesh.domain.contour import Point


@dataclass(frozen=True, slots=True)
class Run:
    """An axis-aligned rectangle of ink cells.

    Attributes:
        x: Left column
        y: Top row
        width: Number of columns covered
        height: Number of rows covered (always 1 for scanline runs)
    """

    x: int
    y: int
    width: int
    height: int = 1

    @property
    def area(self) -> int:
        return self.width * self.height

    def cells(self) -> list[tuple[int, int]]:
        """All (x, y) cells covered by the rectangle."""
        return [
            (cx, cy)
            for cy in range(self.y, self.y + self.height)
            for cx in range(self.x, self.x + self.width)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Run":
        return cls(x=data["x"], y=data["y"], width=data["width"], height=data["height"])


@dataclass
class MeshRecord:
    """Triangulated face of one solid island and its holes.

    Attributes:
        vertices: (x, y) pairs; the root ring first, then each hole ring
        indices: Triangles as index triples into vertices. Winding is
            whatever the triangulator produced and is not normalised.
    """

    vertices: list[tuple[float, float]]
    indices: list[tuple[int, int, int]]

    @property
    def triangle_count(self) -> int:
        return len(self.indices)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire format: flat coordinate and index arrays."""
        flat_vertices: list[float] = []
        for x, y in self.vertices:
            flat_vertices.extend((x, y))
        flat_indices: list[int] = []
        for tri in self.indices:
            flat_indices.extend(tri)
        return {"vertices": flat_vertices, "indices": flat_indices}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MeshRecord":
        flat_vertices = data["vertices"]
        flat_indices = data["indices"]
        vertices = [
            (flat_vertices[i], flat_vertices[i + 1]) for i in range(0, len(flat_vertices), 2)
        ]
        indices = [
            (flat_indices[i], flat_indices[i + 1], flat_indices[i + 2])
            for i in range(0, len(flat_indices), 3)
        ]
        return cls(vertices=vertices, indices=indices)


@dataclass
class OutlineRing:
    """A ring handed to the caller for wall extrusion.

    Attributes:
        points: Ring points in walk order
        is_hole: True for rings subtracted from their island
    """

    points: list[Point]
    is_hole: bool

    def to_dict(self) -> dict[str, Any]:
        return {"points": [p.to_dict() for p in self.points], "isHole": self.is_hole}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OutlineRing":
        return cls(
            points=[Point.from_dict(p) for p in data["points"]],
            is_hole=data["isHole"],
        )


@dataclass
class PipelineStats:
    """Counters collected while reconstructing one glyph."""

    ink_pixels: int = 0
    raw_rings: int = 0
    raw_points: int = 0
    simplified_points: int = 0
    islands: int = 0
    holes: int = 0
    skipped_rings: int = 0
    duration_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "inkPixels": self.ink_pixels,
            "rawRings": self.raw_rings,
            "rawPoints": self.raw_points,
            "simplifiedPoints": self.simplified_points,
            "islands": self.islands,
            "holes": self.holes,
            "skippedRings": self.skipped_rings,
            "durationMs": round(self.duration_ms, 2),
        }


@dataclass
class ReconstructionResult:
    """Output of one reconstruction request.

    Only the fields belonging to the chosen strategy are populated: runs for
    the runs/greedy strategies, meshes and outlines for the contour strategy.
    """

    strategy: str
    canvas_size: int
    character: str = ""
    runs: list[Run] = field(default_factory=list)
    meshes: list[MeshRecord] = field(default_factory=list)
    outlines: list[OutlineRing] = field(default_factory=list)
    stats: PipelineStats = field(default_factory=PipelineStats)

    def is_empty(self) -> bool:
        """True when nothing was reconstructed (e.g. a blank canvas)."""
        return not (self.runs or self.meshes or self.outlines)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the response payload used by the API and the CLI."""
        payload: dict[str, Any] = {
            "char": self.character,
            "canvasSize": self.canvas_size,
            "strategy": self.strategy,
        }
        if self.strategy == "contour":
            payload["meshes"] = [m.to_dict() for m in self.meshes]
            payload["outlines"] = [o.to_dict() for o in self.outlines]
        else:
            payload["runs"] = [r.to_dict() for r in self.runs]
        payload["stats"] = self.stats.to_dict()
        return payload
