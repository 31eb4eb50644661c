"""Unit tests for Jinja2 template rendering (arachnet.scaffolder.templates)."""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from arachnet.scaffolder.registry import EMITTERS
from arachnet.scaffolder.templates import TemplateRenderer
from arachnet.scaffolder.tree import FileTree


pytestmark = pytest.mark.unit


class TestTemplateRenderer:
    def test_default_template_dir(self, renderer: TemplateRenderer):
        assert renderer.template_dir.name == "templates"
        assert (renderer.template_dir / "README.md.j2").is_file()

    def test_lower_first_filter(self, tmp_path: Path):
        (tmp_path / "router.j2").write_text("{{ name | lower_first }}Router", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.render("router.j2", {"name": "AuthRoutes"}) == "authRoutesRouter"

    def test_strict_undefined(self, tmp_path: Path):
        (tmp_path / "broken.j2").write_text("{{ missing }}", encoding="utf-8")
        with pytest.raises(UndefinedError):
            TemplateRenderer(tmp_path).render("broken.j2", {})

    def test_render_into_tree(self, renderer: TemplateRenderer):
        tree = FileTree()
        renderer.render_into(tree, "node/env.j2", ".env", {"port": 8080, "project_slug": "my-api"})
        content = tree.read(".env")
        assert "PORT=8080" in content
        assert "mongodb://localhost:27017/myapi" in content

    def test_render_many(self, renderer: TemplateRenderer):
        tree = FileTree()
        files = renderer.render_many(
            tree,
            {"node/env.j2": ".env", "node/dockerignore.j2": ".dockerignore"},
            {"port": 3000, "project_slug": "api"},
        )
        assert [f.name for f in files] == [".env", ".dockerignore"]
        assert ".dockerignore" in tree

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "hello.j2").write_text("Hello {{ who }}!", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.render("hello.j2", {"who": "graph"}) == "Hello graph!"

    def test_every_declared_template_exists(self, renderer: TemplateRenderer):
        for target, emitter_cls in EMITTERS.items():
            for template in [
                *emitter_cls.project_templates,
                f"{target.value}/Dockerfile.j2",
                f"{target.value}/dockerignore.j2",
            ]:
                assert (renderer.template_dir / template).is_file(), f"{target.value}: {template}"
