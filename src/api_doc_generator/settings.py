"""Generator settings, loadable from a YAML file."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_GROUP = "general"


class GeneratorSettings(BaseModel):
    """Options that shape how routes are documented."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    default_group: str = DEFAULT_GROUP  # used when neither class nor method declares @group
    response_calls: bool = True  # call handlers to capture a sample response
    collection_size: int = Field(default=2, ge=1)
    excluded_methods: list[str] = ["HEAD"]

    @field_validator("excluded_methods")
    @classmethod
    def _upper(cls, value: list[str]) -> list[str]:
        return [m.upper() for m in value]


def load_settings(file_path: Path | None) -> GeneratorSettings:
    """Load settings from a YAML file. No path gives the defaults."""
    if file_path is None:
        return GeneratorSettings()

    data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {file_path} must contain a mapping")
    return GeneratorSettings.model_validate(data)
