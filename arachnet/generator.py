"""Generation orchestrator.

Ties the pieces together for the three request shapes a caller has:

- **generate**: graph + target -> ZIP archive named after the project.
- **preview**: graph + target -> ``{path: content}`` map, no archive.
- **openapi**: graph -> interface descriptor only.

Every request builds a fresh ``FileTree``, so concurrent requests share no
mutable state.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field

from .assembler import flatten, serialize
from .config import GeneratorConfig
from .descriptor import build_descriptor
from .graph.models import Graph
from .scaffolder.registry import Target, get_emitter, resolve_target
from .scaffolder.templates import TemplateRenderer
from .scaffolder.tree import FileTree
from .utils import sanitize_name

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class GeneratedArchive(BaseModel):
    """A generated project packed for download."""

    filename: str = Field(..., description="Suggested file name, e.g. 'shop.zip'")
    target: Target
    file_count: int = Field(default=0, description="Number of files in the archive")
    content: bytes = Field(..., description="ZIP archive bytes")


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main generation orchestrator.

    Given a ``GeneratorConfig``, turns architecture graphs into project trees
    for any registered target.  The template renderer is shared across
    requests; trees never are.
    """

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self.config = config or GeneratorConfig()
        self.renderer = TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def build(
        self,
        graph: Graph | dict[str, Any],
        target: Target | str,
        project_name: Optional[str] = None,
    ) -> FileTree:
        """Emit the project for *graph* into a new ``FileTree``.

        Raises:
            UnsupportedTargetError: If *target* is not a supported stack.
            pydantic.ValidationError: If *graph* is a malformed payload.
        """
        resolved = resolve_target(target)
        graph = Graph.coerce(graph)
        emitter = get_emitter(resolved, self._config_for(project_name), self.renderer)

        tree = FileTree()
        emitter.emit(tree, graph)
        logger.info(
            "Generated %d file(s) for target %s from %d node(s)",
            len(tree),
            resolved.value,
            len(graph.nodes),
        )
        return tree

    def generate(
        self,
        graph: Graph | dict[str, Any],
        target: Target | str,
        project_name: Optional[str] = None,
    ) -> GeneratedArchive:
        """Build the project and pack it into a ZIP archive.

        Every entry is nested under a folder named after the sanitized project
        name (``config.project_name`` unless *project_name* is given), and
        the archive file name uses the same folder name.
        """
        name = project_name or self.config.project_name
        tree = self.build(graph, target, name)
        folder = sanitize_name(name) or "arachnet-project"
        content = serialize(tree, root_dir=folder)
        return GeneratedArchive(
            filename=f"{folder}.zip",
            target=resolve_target(target),
            file_count=len(tree),
            content=content,
        )

    def preview(
        self,
        graph: Graph | dict[str, Any],
        target: Target | str,
        project_name: Optional[str] = None,
    ) -> dict[str, str]:
        """Return ``{relative_path: content}`` for the generated project."""
        return flatten(self.build(graph, target, project_name))

    def openapi(self, graph: Graph | dict[str, Any]) -> dict[str, Any]:
        """Return the interface descriptor document for *graph*."""
        return build_descriptor(graph, self.config).as_document()

    # -- Internal helpers --------------------------------------------------

    def _config_for(self, project_name: Optional[str]) -> GeneratorConfig:
        if not project_name or project_name == self.config.project_name:
            return self.config
        return self.config.model_copy(update={"project_name": project_name})
