"""Run configuration for the migrator."""

import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

from domain.parsers.record_transformer import DEFAULT_DIFFICULTY, SectionTitles

YAML_FILENAME = "problems_version_1.0.yaml"
ASSETS_FOLDER = "assets"
ENV_PREFIX = "LOJ_"


class MigrationSettings(BaseModel):
    """Everything a run needs. Built once at startup and passed down explicitly."""

    api_base_url: str = "https://api.loj.ac/api"
    asset_base_url: str = "https://loj.ac/"
    token: str = ""
    start_id: int = Field(default=1, ge=1)
    end_id: int = Field(default=1, ge=1)
    output_dir: Path = Path("output")
    locale: str = "zh_CN"
    difficulty: int = DEFAULT_DIFFICULTY
    section_titles: SectionTitles = Field(default_factory=SectionTitles)
    problem_timeout: float = 20.0
    download_timeout: float = 30.0
    concurrency: int = Field(default=1, ge=1)
    archive: bool = False
    log_level: str = "INFO"

    @field_validator("token")
    @classmethod
    def _strip_bearer(cls, value: str) -> str:
        value = value.strip()
        if value.lower().startswith("bearer "):
            value = value[len("bearer ") :].strip()
        return value

    @field_validator("section_titles", mode="before")
    @classmethod
    def _parse_section_titles(cls, value: Any) -> Any:
        # LOJ_SECTION_TITLES holds a JSON object, e.g. {"hint": ["提示"]}
        if isinstance(value, str):
            return json.loads(value)
        return value

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _check_range(self) -> "MigrationSettings":
        if self.end_id < self.start_id:
            raise ValueError(f"end_id ({self.end_id}) is before start_id ({self.start_id})")
        return self

    @property
    def authorization(self) -> str:
        return f"Bearer {self.token}"

    @property
    def yaml_path(self) -> Path:
        return self.output_dir / YAML_FILENAME

    @property
    def assets_dir(self) -> Path:
        return self.output_dir / ASSETS_FOLDER

    @property
    def archive_path(self) -> Path:
        return self.output_dir.with_name(self.output_dir.name + ".zip")

    @property
    def display_ids(self) -> range:
        return range(self.start_id, self.end_id + 1)

    @classmethod
    def from_env(cls, env_file: str | os.PathLike | None = None, **overrides: Any) -> "MigrationSettings":
        """
        Load settings from `LOJ_*` environment variables (and a `.env` file).

        Keyword overrides win over the environment; `None` overrides are ignored.
        """
        load_dotenv(env_file)

        values: dict[str, Any] = {}
        for name in cls.model_fields:
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
