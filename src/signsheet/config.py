"""Runtime configuration for analysis, rendering and the HTTP server."""

import os

from pydantic import BaseModel, Field

# Column header keywords seen on attendance sheets
NAME_KEYWORDS = [
    "교사명",
    "성명",
    "이름",
    "교사",
    "성함",
    "성 명",
    "참석자명",
    "참석자",
    "이 름",
    "Name",
    "Teacher Name",
    "Signer Name",
    "Participant Name",
    "Participant",
]

# "비고" (remarks) is kept on purpose: many sheets collect stamps in the notes column
SIGN_KEYWORDS = [
    "서명",
    "서명본",
    "(인)",
    "인장",
    "서명란",
    "서 명",
    "비고",
    "사인",
    "확인",
    "Signature",
    "Sign",
    "Seal",
    "Remarks",
    "Note",
]

# Maximum file size for uploads (50MB)
MAX_UPLOAD_SIZE = 50 * 1024 * 1024


class HeaderKeywords(BaseModel):
    """Keyword lists used to recognize name and signature column headers."""

    name: list[str] = Field(default_factory=lambda: list(NAME_KEYWORDS))
    sign: list[str] = Field(default_factory=lambda: list(SIGN_KEYWORDS))

    def with_extra(
        self, name: list[str] | None = None, sign: list[str] | None = None
    ) -> "HeaderKeywords":
        """Return a copy extended with additional keywords (duplicates dropped)."""
        return HeaderKeywords(
            name=_merge(self.name, name or []),
            sign=_merge(self.sign, sign or []),
        )


class AnalyzerSettings(BaseModel):
    """Tunable constants of the layout analysis engine."""

    band_height: float = Field(default=12.0, gt=0)
    header_y_tolerance: float = Field(default=30.0, ge=0)
    default_offset_x: float = 140.0
    header_fallback_width: float = Field(default=40.0, ge=0)
    keywords: HeaderKeywords = Field(default_factory=HeaderKeywords)


class RenderSettings(BaseModel):
    """Canvas rendering parameters shared by the preview and the stamper."""

    scale: float = Field(default=1.2, gt=0)
    nudge_x: float = 0.0
    nudge_y: float = -35.0  # box top sits above the text baseline
    stamp_width: float = Field(default=140.0, gt=0)
    stamp_height: float = Field(default=50.0, gt=0)
    fallback_columns: int = Field(default=4, ge=1)


class Settings(BaseModel):
    analyzer: AnalyzerSettings = Field(default_factory=AnalyzerSettings)
    render: RenderSettings = Field(default_factory=RenderSettings)
    max_upload_size: int = Field(default=MAX_UPLOAD_SIZE, gt=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from SIGNSHEET_* environment variables.

        Unset variables keep their defaults. Keyword variables are comma
        separated and extend the built-in lists rather than replacing them.
        """
        analyzer = AnalyzerSettings()
        render = RenderSettings()
        overrides: dict = {}

        analyzer_fields = {
            "band_height": _env_float("SIGNSHEET_BAND_HEIGHT"),
            "header_y_tolerance": _env_float("SIGNSHEET_HEADER_Y_TOLERANCE"),
            "default_offset_x": _env_float("SIGNSHEET_DEFAULT_OFFSET_X"),
        }
        analyzer_fields = {k: v for k, v in analyzer_fields.items() if v is not None}
        analyzer = analyzer.model_copy(update=analyzer_fields)

        extra_name = _env_list("SIGNSHEET_EXTRA_NAME_KEYWORDS")
        extra_sign = _env_list("SIGNSHEET_EXTRA_SIGN_KEYWORDS")
        if extra_name or extra_sign:
            analyzer = analyzer.model_copy(
                update={"keywords": analyzer.keywords.with_extra(extra_name, extra_sign)}
            )

        render_fields = {
            "scale": _env_float("SIGNSHEET_RENDER_SCALE"),
            "nudge_x": _env_float("SIGNSHEET_NUDGE_X"),
            "nudge_y": _env_float("SIGNSHEET_NUDGE_Y"),
        }
        render_fields = {k: v for k, v in render_fields.items() if v is not None}
        render = render.model_copy(update=render_fields)

        max_mb = _env_float("SIGNSHEET_MAX_UPLOAD_MB")
        if max_mb is not None:
            overrides["max_upload_size"] = int(max_mb * 1024 * 1024)

        log_level = os.getenv("SIGNSHEET_LOG_LEVEL")
        if log_level:
            overrides["log_level"] = log_level.upper()

        # Re-validate so env values go through the same constraints as code values
        return cls.model_validate(
            {
                "analyzer": analyzer.model_dump(),
                "render": render.model_dump(),
                **overrides,
            }
        )


def _merge(base: list[str], extra: list[str]) -> list[str]:
    merged = list(base)
    for keyword in extra:
        if keyword not in merged:
            merged.append(keyword)
    return merged


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_list(name: str) -> list[str]:
    raw = os.getenv(name, "")
    return [part.strip() for part in raw.split(",") if part.strip()]
