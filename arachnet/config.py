"""Arachnet configuration.

Typed settings for descriptor metadata, generated-project defaults and the
project store.  Pydantic v2 validates values at construction time, and the
same model round-trips through JSON files or environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


class GeneratorConfig(BaseModel):
    """Global Arachnet configuration.

    Created once by the CLI (or by whoever embeds the generator) and passed to
    ``ProjectGenerator`` and the target emitters.
    """

    project_name: str = Field(
        default="arachnet-project",
        min_length=1,
        description="Default archive/project name when the caller gives none",
    )

    # Interface descriptor metadata
    openapi_version: str = Field(default="3.0.0")
    api_title: str = Field(default="Arachnet Generated API")
    api_version: str = Field(default="1.0.0")
    api_description: str = Field(default="API documentation generated by Arachnet")

    # Generated-project defaults
    docs_path: str = Field(
        default="/api-docs", description="Path the generated app serves its docs under"
    )
    port: int = Field(default=3000, ge=1, le=65535, description="Port of the generated app")

    # Persistence collaborator
    store_dir: Path = Field(default=Path(".arachnet/projects"))

    @field_validator("docs_path")
    @classmethod
    def _docs_path_is_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("docs_path must start with '/'")
        return value

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path the file was written to.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            ARACHNET_PROJECT_NAME, ARACHNET_API_TITLE, ARACHNET_API_VERSION,
            ARACHNET_DOCS_PATH, ARACHNET_PORT, ARACHNET_STORE_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("ARACHNET_PROJECT_NAME"):
            kwargs["project_name"] = os.environ["ARACHNET_PROJECT_NAME"]
        if os.environ.get("ARACHNET_API_TITLE"):
            kwargs["api_title"] = os.environ["ARACHNET_API_TITLE"]
        if os.environ.get("ARACHNET_API_VERSION"):
            kwargs["api_version"] = os.environ["ARACHNET_API_VERSION"]
        if os.environ.get("ARACHNET_DOCS_PATH"):
            kwargs["docs_path"] = os.environ["ARACHNET_DOCS_PATH"]
        if os.environ.get("ARACHNET_PORT"):
            kwargs["port"] = int(os.environ["ARACHNET_PORT"])
        if os.environ.get("ARACHNET_STORE_DIR"):
            kwargs["store_dir"] = Path(os.environ["ARACHNET_STORE_DIR"])
        return cls(**kwargs)
