"""
Application configuration using pydantic-settings.
All settings read from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from typing import Optional

from app.models.enums import DEFAULT_TARGET_CODES


class Settings(BaseSettings):
    """Central configuration for the DARF extraction service."""

    # ── Application ──────────────────────────────────────────
    APP_NAME: str = "darf-extractor"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ── Uploads ──────────────────────────────────────────────
    MAX_UPLOAD_SIZE_MB: int = 50
    ALLOWED_MIME_TYPES: str = "application/pdf"

    # ── Extraction ───────────────────────────────────────────
    # Comma separated, tested in this order on every line
    TARGET_CODES: str = ",".join(DEFAULT_TARGET_CODES)

    # Page coordinate units. Tuned for DARF layouts, retune for other forms.
    LINE_Y_TOLERANCE: float = 4.0
    WORD_GAP_THRESHOLD: float = 4.0
    # Glyphs closer than this are read as one fragment by pdfplumber
    FRAGMENT_X_TOLERANCE: float = 1.5

    # ── Batching ─────────────────────────────────────────────
    BATCH_SIZE: int = 10

    # ── Export ───────────────────────────────────────────────
    EXPORT_SHEET_NAME: str = "DARF Analysis"
    EXPORT_FILE_PREFIX: str = "Relatorio_DARFs"

    # ── Observability ────────────────────────────────────────
    PROMETHEUS_ENABLED: bool = True

    # ── Security ─────────────────────────────────────────────
    API_KEY: Optional[str] = None
    CORS_ORIGINS: str = "*"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    @property
    def target_codes(self) -> list[str]:
        return [c.strip() for c in self.TARGET_CODES.split(",") if c.strip()]

    @property
    def allowed_mime_types(self) -> list[str]:
        return [m.strip() for m in self.ALLOWED_MIME_TYPES.split(",") if m.strip()]


# Singleton instance
settings = Settings()
