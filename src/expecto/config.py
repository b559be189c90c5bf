from __future__ import annotations

from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "expecto.yaml"


class DiscoverySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    include: list[str] = ["*.test.py", "*.spec.py"]
    exclude: list[str] = ["__pycache__", ".*", "node_modules", "venv"]
    entry_point: str = "tests"

    @field_validator("include")
    @classmethod
    def include_must_not_be_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("include must not be empty")
        return v

    @field_validator("entry_point")
    @classmethod
    def entry_point_must_be_identifier(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"entry_point '{v}' is not a valid Python identifier")
        return v


class ReportSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")
    output_dir: str = "test-results"
    html: bool = True

    @field_validator("output_dir")
    @classmethod
    def expand_env(cls, v: str) -> str:
        """Expand ${VAR} and ${VAR:-default}; unset variables without a default are errors."""
        try:
            return expandvars(v, nounset=True)
        except Exception as e:
            raise ValueError(f"output_dir '{v}': {e}") from e


class ExpectoConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    test: DiscoverySettings = Field(default_factory=DiscoverySettings)
    report: ReportSettings = Field(default_factory=ReportSettings)


def load_config(path: Path) -> ExpectoConfig:
    """Load and validate a config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    config = ExpectoConfig(**raw)

    # Relative output paths are relative to the config file
    output_dir = Path(config.report.output_dir)
    if not output_dir.is_absolute():
        config.report.output_dir = str((config_dir / output_dir).resolve())

    return config


def load_or_default(directory: Path | None = None) -> ExpectoConfig:
    """Load ``expecto.yaml`` from ``directory`` (default: cwd) or fall back to defaults."""
    directory = Path.cwd() if directory is None else directory
    candidate = directory / CONFIG_FILENAME
    if candidate.is_file():
        return load_config(candidate)
    return ExpectoConfig()
