"""Configuration and settings management."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator
from pathlib import Path
import shutil

class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # Recognition backend
    TESSERACT_PATH: Optional[str] = None
    OCR_TIMEOUT_SECONDS: float = 30.0
    OCR_LANG_LATIN: str = "eng"
    OCR_LANG_MIXED: str = "jpn+eng"
    OCR_PAGE_SEG_MODE: int = 6

    # Externalized layout / alias tables
    LAYOUT_PATH: Optional[str] = None
    STAT_ALIASES_PATH: Optional[str] = None

    @field_validator('TESSERACT_PATH', 'LAYOUT_PATH', 'STAT_ALIASES_PATH', mode='before')
    @classmethod
    def validate_optional_path(cls, v):
        """Convert empty/whitespace strings to None."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        """Convert empty/whitespace strings to default."""
        if isinstance(v, str) and not v.strip():
            return "INFO"
        return v

    @field_validator('OCR_TIMEOUT_SECONDS')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("OCR_TIMEOUT_SECONDS must be positive")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }

# Global settings instance
settings = Settings()

def resolve_tesseract_path(explicit_path: Optional[str] = None) -> str:
    """Get Tesseract path, with fallback to common locations."""
    for candidate in (explicit_path, settings.TESSERACT_PATH):
        if candidate and Path(candidate).exists():
            return candidate

    tesseract_path = shutil.which("tesseract")
    if tesseract_path:
        return tesseract_path

    common_paths = [
        "/opt/homebrew/bin/tesseract",  # Apple Silicon Homebrew
        "/usr/local/bin/tesseract",     # Intel Homebrew
        "/usr/bin/tesseract",           # System package
    ]

    for path in common_paths:
        if Path(path).exists():
            return path

    raise FileNotFoundError(
        "Tesseract not found. Install tesseract-ocr with the jpn language pack "
        "or set TESSERACT_PATH"
    )
