from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVEL_CHOICES = {"DEBUG", "INFO", "WARN", "ERROR"}
_LOG_LEVEL_ALIASES = {"WARNING": "WARN"}


def normalize_log_level(value: object) -> str:
    """Normalize log-level inputs to the canonical choices used by the CLI."""

    if value is None:
        return "INFO"

    text = str(value).strip()
    if not text:
        return "INFO"

    upper = text.upper()
    return _LOG_LEVEL_ALIASES.get(upper, upper)


class DocUnlockSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DOCUNLOCK_", env_file=".env", extra="ignore")

    # Candidate passwords tried after the empty one, in order
    passwords: list[str] = Field(default_factory=list)
    password_list_file: str | None = Field(default=None, description="File with one password per line")
    kind: Literal["auto", "pdf", "office"] = Field(default="auto")
    glob: str = Field(default="*.pdf,*.xlsx,*.xlsm,*.docx,*.pptx,*.xls,*.doc", description="Default glob patterns")
    recursive: bool = Field(default=False)
    log_format: Literal["json", "text"] = Field(default="json")
    log_level: str = Field(default="INFO")
    temp_dir: str | None = Field(default=None, description="Custom temp dir")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> str:
        return normalize_log_level(value)


settings = DocUnlockSettings()
