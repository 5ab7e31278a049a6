"""Unit tests for settings and request parameter clamping."""

import os

import pytest
from pydantic import ValidationError

from glyphmesh.config import (
    GlyphMeshSettings,
    ReconstructionConfig,
    Strategy,
    get_default_settings,
)
from glyphmesh.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch, tmp_path):
    """Run without GLYPHMESH_* variables or a stray .env file."""
    for name in list(os.environ):
        if name.startswith("GLYPHMESH_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    """Tests for default settings values."""

    def test_reconstruction_defaults(self):
        config = ReconstructionConfig()
        assert config.default_resolution == 128
        assert config.min_resolution == 32
        assert config.max_resolution == 1024
        assert config.default_threshold == 120
        assert config.simplify_epsilon == 1.5
        assert config.min_ring_points == 6
        assert config.default_strategy is Strategy.CONTOUR

    def test_application_defaults(self):
        settings = get_default_settings()
        assert settings.server.port == 3000
        assert settings.server.cors_origins == ["*"]
        assert settings.raster.default_character == "あ"
        assert settings.raster.font_size_fraction == 0.8
        assert settings.raster.use_system_fonts is True
        assert settings.raster.prefer_bold is True
        assert settings.server.stats_history == 1000
        assert settings.processing.max_workers is None


class TestClampResolution:
    """Tests for ReconstructionConfig.clamp_resolution."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, 128),
            (256, 256),
            (1, 32),
            (32, 32),
            (1024, 1024),
            (99999, 1024),
            (-5, 32),
            (0, 32),
            ("512", 512),
            (" 64 ", 64),
            ("100.9", 100),
            ("abc", 128),
            ("", 128),
            (True, 128),
        ],
    )
    def test_values(self, value, expected):
        assert ReconstructionConfig().clamp_resolution(value) == expected

    def test_custom_bounds(self):
        config = ReconstructionConfig(min_resolution=16, max_resolution=64, default_resolution=200)
        assert config.clamp_resolution(8) == 16
        assert config.clamp_resolution(None) == 64


class TestClampThreshold:
    """Tests for ReconstructionConfig.clamp_threshold."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, 120),
            (0, 0),
            ("0", 0),
            (255, 255),
            (300, 255),
            (-1, 0),
            ("200", 200),
            ("dark", 120),
        ],
    )
    def test_values(self, value, expected):
        assert ReconstructionConfig().clamp_threshold(value) == expected


class TestValidation:
    """Tests for rejected settings."""

    def test_min_above_max_rejected(self):
        with pytest.raises(ValidationError, match="min_resolution"):
            ReconstructionConfig(min_resolution=512, max_resolution=256)

    def test_negative_epsilon_rejected(self):
        with pytest.raises(ValidationError):
            ReconstructionConfig(simplify_epsilon=-1.0)

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValidationError):
            ReconstructionConfig(default_strategy="voxel")


class TestEnvironment:
    """Tests for GLYPHMESH_* environment overrides."""

    def test_nested_override(self, monkeypatch):
        monkeypatch.setenv("GLYPHMESH_SERVER__PORT", "8080")
        monkeypatch.setenv("GLYPHMESH_RECONSTRUCTION__MAX_RESOLUTION", "512")
        monkeypatch.setenv("GLYPHMESH_RECONSTRUCTION__DEFAULT_STRATEGY", "greedy")

        settings = GlyphMeshSettings()

        assert settings.server.port == 8080
        assert settings.reconstruction.max_resolution == 512
        assert settings.reconstruction.default_strategy is Strategy.GREEDY
        assert settings.reconstruction.clamp_resolution(4096) == 512

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("GLYPHMESH_SERVER__HOST=127.0.0.1\n")
        assert GlyphMeshSettings().server.host == "127.0.0.1"

    def test_invalid_override_raises_configuration_error(self, monkeypatch):
        monkeypatch.setenv("GLYPHMESH_SERVER__PORT", "not-a-port")

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            get_default_settings()
