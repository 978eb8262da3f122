"""Tests for configuration loading."""

import pytest

from signsheet.config import (
    MAX_UPLOAD_SIZE,
    NAME_KEYWORDS,
    SIGN_KEYWORDS,
    AnalyzerSettings,
    HeaderKeywords,
    RenderSettings,
    Settings,
)

_ENV_VARS = [
    "SIGNSHEET_BAND_HEIGHT",
    "SIGNSHEET_HEADER_Y_TOLERANCE",
    "SIGNSHEET_DEFAULT_OFFSET_X",
    "SIGNSHEET_RENDER_SCALE",
    "SIGNSHEET_NUDGE_X",
    "SIGNSHEET_NUDGE_Y",
    "SIGNSHEET_EXTRA_NAME_KEYWORDS",
    "SIGNSHEET_EXTRA_SIGN_KEYWORDS",
    "SIGNSHEET_MAX_UPLOAD_MB",
    "SIGNSHEET_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without SIGNSHEET_* variables."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Tests for built-in defaults."""

    def test_analyzer_defaults(self):
        """Test the empirically chosen analysis constants."""
        analyzer = AnalyzerSettings()
        assert analyzer.band_height == 12
        assert analyzer.header_y_tolerance == 30
        assert analyzer.default_offset_x == 140
        assert analyzer.header_fallback_width == 40

    def test_render_defaults(self):
        """Test the canvas defaults."""
        render = RenderSettings()
        assert render.scale == 1.2
        assert (render.stamp_width, render.stamp_height) == (140, 50)
        assert (render.nudge_x, render.nudge_y) == (0, -35)

    def test_required_keywords(self):
        """Test that the common header variants are present."""
        for keyword in ["성명", "교사명", "참석자명", "Name", "Teacher Name", "Signer Name", "Participant Name"]:
            assert keyword in NAME_KEYWORDS
        for keyword in ["서명", "(인)", "비고", "Signature", "Remarks"]:
            assert keyword in SIGN_KEYWORDS

    def test_keyword_defaults_are_copies(self):
        """Test that editing one settings object does not leak into others."""
        first = HeaderKeywords()
        first.name.append("위원명")
        assert "위원명" not in HeaderKeywords().name
        assert "위원명" not in NAME_KEYWORDS


class TestHeaderKeywords:
    """Tests for keyword extension."""

    def test_with_extra_appends(self):
        """Test that extra keywords are added after the defaults."""
        keywords = HeaderKeywords().with_extra(name=["위원명"], sign=["날인"])
        assert keywords.name[-1] == "위원명"
        assert keywords.sign[-1] == "날인"
        assert keywords.name[: len(NAME_KEYWORDS)] == NAME_KEYWORDS

    def test_with_extra_skips_duplicates(self):
        """Test that an existing keyword is not repeated."""
        keywords = HeaderKeywords().with_extra(name=["성명"])
        assert keywords.name.count("성명") == 1


class TestFromEnv:
    """Tests for Settings.from_env."""

    def test_no_env(self):
        """Test that an empty environment gives the defaults."""
        assert Settings.from_env() == Settings()

    def test_numeric_overrides(self, monkeypatch):
        """Test that numeric variables override defaults."""
        monkeypatch.setenv("SIGNSHEET_BAND_HEIGHT", "10")
        monkeypatch.setenv("SIGNSHEET_HEADER_Y_TOLERANCE", "20.5")
        monkeypatch.setenv("SIGNSHEET_DEFAULT_OFFSET_X", "120")
        monkeypatch.setenv("SIGNSHEET_RENDER_SCALE", "1.5")
        monkeypatch.setenv("SIGNSHEET_NUDGE_Y", "-20")
        settings = Settings.from_env()
        assert settings.analyzer.band_height == 10
        assert settings.analyzer.header_y_tolerance == 20.5
        assert settings.analyzer.default_offset_x == 120
        assert settings.render.scale == 1.5
        assert settings.render.nudge_y == -20

    def test_extra_keywords(self, monkeypatch):
        """Test comma-separated keyword extensions."""
        monkeypatch.setenv("SIGNSHEET_EXTRA_NAME_KEYWORDS", "위원명, 학생명 ,")
        monkeypatch.setenv("SIGNSHEET_EXTRA_SIGN_KEYWORDS", "날인")
        keywords = Settings.from_env().analyzer.keywords
        assert keywords.name[-2:] == ["위원명", "학생명"]
        assert keywords.sign[-1] == "날인"

    def test_upload_size_and_log_level(self, monkeypatch):
        """Test the server-level variables."""
        monkeypatch.setenv("SIGNSHEET_MAX_UPLOAD_MB", "5")
        monkeypatch.setenv("SIGNSHEET_LOG_LEVEL", "debug")
        settings = Settings.from_env()
        assert settings.max_upload_size == 5 * 1024 * 1024
        assert settings.log_level == "DEBUG"

    def test_default_upload_size(self):
        """Test the 50MB default."""
        assert Settings.from_env().max_upload_size == MAX_UPLOAD_SIZE == 50 * 1024 * 1024

    def test_invalid_number(self, monkeypatch):
        """Test that a non-numeric value fails at startup."""
        monkeypatch.setenv("SIGNSHEET_BAND_HEIGHT", "twelve")
        with pytest.raises(ValueError, match="SIGNSHEET_BAND_HEIGHT"):
            Settings.from_env()

    def test_out_of_range_value(self, monkeypatch):
        """Test that constraints apply to env values too."""
        monkeypatch.setenv("SIGNSHEET_RENDER_SCALE", "0")
        with pytest.raises(ValueError):
            Settings.from_env()
