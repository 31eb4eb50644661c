"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``arachnet/scaffolder/templates/`` directory and renders them with
project-specific context.  Rendered output goes into a virtual ``FileTree``
rather than onto disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from . import naming
from .tree import Directory, File


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Templates live under ``<template_dir>/<target>/`` for target-specific
    files, with shared templates (e.g. ``README.md.j2``) at the root.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        # Filters used by the templates
        self.env.filters["lower_first"] = naming.lower_first

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"node/index.js.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    # -- Tree rendering ----------------------------------------------------

    def render_into(
        self,
        tree: Directory,
        template_path: str,
        output_path: str,
        context: dict[str, Any],
    ) -> File:
        """Render a template and add the result to *tree* at *output_path*."""
        content = self.render(template_path, context)
        return tree.add_file(output_path, content)

    def render_many(
        self,
        tree: Directory,
        templates: dict[str, str],
        context: dict[str, Any],
    ) -> list[File]:
        """Render every ``template -> output path`` pair into *tree*."""
        return [
            self.render_into(tree, template_path, output_path, context)
            for template_path, output_path in templates.items()
        ]
