"""Saved-project storage.

A minimal key-value store for graphs keyed by project id, one pretty-printed
JSON file per project.  Generation never depends on it; the CLI uses it for
``save``, ``load``, ``list`` and ``generate --project``.
"""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from .graph.models import Graph
from .utils import sanitize_name, save_json

logger = logging.getLogger(__name__)

# Hex digits of the id hash kept in each file name.
_DIGEST_LENGTH = 12


class StoredProject(BaseModel):
    """A saved graph together with its metadata."""

    id: str = Field(..., description="Project id as given by the caller")
    name: str = Field(default="", description="Display name")
    graph: Graph = Field(default_factory=Graph)
    saved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ProjectStore:
    """File-backed project store rooted at *root_dir*."""

    def __init__(self, root_dir: str | Path) -> None:
        self.root_dir = Path(root_dir)

    def path_for(self, project_id: str) -> Path:
        """File that holds *project_id*.

        The file name is the sanitized id (for readability) followed by a
        hash of the exact id, so ids that sanitize alike (``"My Shop"`` and
        ``"my-shop"``) never share a file.

        Raises:
            ValueError: If the id is blank.
        """
        if not project_id.strip():
            raise ValueError(f"Invalid project id: {project_id!r}")
        digest = hashlib.sha256(project_id.encode("utf-8")).hexdigest()[:_DIGEST_LENGTH]
        stem = sanitize_name(project_id) or "project"
        return self.root_dir / f"{stem}-{digest}.json"

    def exists(self, project_id: str) -> bool:
        return self.path_for(project_id).is_file()

    def save(
        self,
        project_id: str,
        graph: Graph | dict[str, Any],
        name: str = "",
    ) -> StoredProject:
        """Save (or overwrite) *graph* under *project_id*."""
        project = StoredProject(id=project_id, name=name, graph=Graph.coerce(graph))
        path = save_json(project.model_dump(mode="json"), self.path_for(project_id))
        logger.debug("Saved project %r to %s", project_id, path)
        return project

    def load(self, project_id: str) -> Optional[StoredProject]:
        """Return the project saved under *project_id*, or ``None``."""
        path = self.path_for(project_id)
        if not path.is_file():
            logger.debug("No saved project %r at %s", project_id, path)
            return None
        project = StoredProject.model_validate(json.loads(path.read_text(encoding="utf-8")))
        if project.id != project_id:
            logger.warning("Project file %s holds id %r, not %r", path, project.id, project_id)
            return None
        return project

    def list_projects(self) -> list[StoredProject]:
        """Every saved project, sorted by id."""
        if not self.root_dir.is_dir():
            return []
        projects = [
            StoredProject.model_validate(json.loads(path.read_text(encoding="utf-8")))
            for path in self.root_dir.glob("*.json")
        ]
        return sorted(projects, key=lambda project: project.id)
