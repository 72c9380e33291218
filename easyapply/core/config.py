"""Application configuration using pydantic-settings."""
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


class BrowserConfig(BaseModel):
    """Browser connection configuration."""

    cdp_port: int = 9333
    connect_retries: int = 5
    retry_delay: float = 2.0
    timeout: int = 30000


class ClaudeConfig(BaseModel):
    """Claude API configuration."""

    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 4096
    max_retries: int = 2


class EasyApplierConfig(BaseModel):
    """Per-job policy for the Easy Apply flow."""

    max_pages: int = 15
    max_retries: int = 3
    resume_path: Optional[str] = None
    cover_letter_path: Optional[str] = None
    skip_on_error: bool = True
    dry_run: bool = False
    use_constant_resume: bool = False
    job_languages: list[str] = Field(default_factory=list)


class TailoringConfig(BaseModel):
    """Background resume tailoring settings."""

    base_resume_yaml: Optional[str] = None
    output_dir: str = "data/tailored_resumes"
    keep_latest: int = 50
    join_timeout: float = 180.0
    min_ratio: float = 0.3


class PathsConfig(BaseModel):
    """Filesystem locations for debug and persistence artifacts."""

    save_debug_html: bool = True
    debug_html_dir: str = "data/debug_html"
    debug_html_max_age_days: int = 7
    answers_path: str = "data/answers.jsonl"
    failures_path: str = "data/failures.jsonl"


class Settings(BaseSettings):
    """Application settings loaded from YAML or environment."""

    model_config = SettingsConfigDict(
        env_prefix="EASYAPPLY_",
        env_nested_delimiter="__",
    )

    browser: BrowserConfig = BrowserConfig()
    claude: ClaudeConfig = ClaudeConfig()
    easy_apply: EasyApplierConfig = EasyApplierConfig()
    tailoring: TailoringConfig = TailoringConfig()
    paths: PathsConfig = PathsConfig()
    log_level: str = "INFO"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment over YAML
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML file.

        A missing file yields defaults so the CLI works without any config.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            Settings instance with loaded configuration.
        """
        if not path.exists():
            return cls()
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)
