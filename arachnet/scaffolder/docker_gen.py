"""Containerization files for generated projects.

Renders a ``Dockerfile`` and ``.dockerignore`` from the per-target Jinja2
templates (``<target>/Dockerfile.j2``, ``<target>/dockerignore.j2``).  The
output does not depend on graph content beyond the shared template context.
"""

from __future__ import annotations

from typing import Any

from .templates import TemplateRenderer
from .tree import Directory, File


class DockerGenerator:
    """Generates container build files for one target."""

    # Template name (inside ``<target>/``) -> output file name
    _DOCKER_FILES: dict[str, str] = {
        "Dockerfile.j2": "Dockerfile",
        "dockerignore.j2": ".dockerignore",
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def generate(
        self,
        tree: Directory,
        target: str,
        context: dict[str, Any],
    ) -> list[File]:
        """Add the Docker files for *target* to the root of *tree*.

        Args:
            tree: Project root.
            target: Registry key of the target stack, e.g. ``"go"``.
            context: Template rendering context (port, project_slug, ...).

        Returns:
            The file entries that were written.
        """
        written: list[File] = []
        for template_name, output_name in self._DOCKER_FILES.items():
            entry = self.renderer.render_into(
                tree, f"{target}/{template_name}", output_name, context
            )
            written.append(entry)
        return written
