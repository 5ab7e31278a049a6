"""Exception hierarchy for Glyphmesh."""


class GlyphMeshError(Exception):
    """Base exception for all Glyphmesh errors."""

    pass


class ConfigurationError(GlyphMeshError):
    """Invalid or inconsistent settings."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid configuration: {reason}")


class FontError(GlyphMeshError):
    """Errors related to font discovery or loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class RasterizationError(GlyphMeshError):
    """Error rendering a character into a pixel buffer."""

    def __init__(self, character: str, reason: str) -> None:
        self.character = character
        self.reason = reason
        super().__init__(f"Failed to render {character!r}: {reason}")


class GeometryError(GlyphMeshError):
    """Errors in geometric calculations."""

    pass


class TriangulationError(GeometryError):
    """The triangulation backend returned unusable output."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ReconstructionError(GlyphMeshError):
    """Errors raised while running a reconstruction strategy."""

    pass


class UnknownStrategyError(ReconstructionError):
    """Requested reconstruction strategy does not exist."""

    def __init__(self, strategy: str) -> None:
        self.strategy = strategy
        super().__init__(f"Unknown reconstruction strategy '{strategy}'")
