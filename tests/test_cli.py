"""Tests for the command-line interface (arachnet.cli).

Covers:
- Every subcommand's happy path
- Warnings for empty graphs and overwritten saved projects
- Exit status 1 for unknown targets, missing files, invalid graphs or config and
  unknown saved projects
"""

from __future__ import annotations

import io
import json
import logging
import zipfile
from pathlib import Path
from typing import Any

import pytest

from arachnet.cli import build_parser, main


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run every command inside ``tmp_path`` with a private project store."""
    monkeypatch.chdir(tmp_path)
    for key in ("ARACHNET_PROJECT_NAME", "ARACHNET_API_TITLE", "ARACHNET_API_VERSION",
                "ARACHNET_DOCS_PATH", "ARACHNET_PORT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ARACHNET_STORE_DIR", str(tmp_path / "store"))

    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def graph_file(tmp_path: Path) -> Path:
    path = tmp_path / "auth.json"
    main(["example", "auth", "--output", str(path)])
    return path


def _exit_code(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class TestParser:
    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_output_and_extract_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["generate", "g.json", "-t", "go", "-o", "a.zip", "-x", "dir"])


# ---------------------------------------------------------------------------
# Happy paths
# ---------------------------------------------------------------------------


class TestCommands:
    def test_example_written(self, graph_file: Path):
        data = json.loads(graph_file.read_text(encoding="utf-8"))
        assert [n["data"]["label"] for n in data["nodes"]][0] == "User"

    def test_generate_default_archive(self, graph_file: Path, tmp_path: Path):
        main(["generate", str(graph_file), "--target", "node"])
        archive = tmp_path / "arachnet-project.zip"
        assert archive.is_file()
        with zipfile.ZipFile(io.BytesIO(archive.read_bytes())) as zf:
            assert "arachnet-project/index.js" in zf.namelist()

    def test_generate_named_output(self, graph_file: Path, tmp_path: Path):
        out = tmp_path / "dist" / "auth-go.zip"
        main(["generate", str(graph_file), "-t", "go", "--name", "auth-api", "-o", str(out)])
        with zipfile.ZipFile(out) as zf:
            assert "auth-api/go.mod" in zf.namelist()

    def test_generate_extract(self, graph_file: Path, tmp_path: Path):
        out_dir = tmp_path / "auth-python"
        main(["generate", str(graph_file), "-t", "python", "--extract", str(out_dir)])
        assert (out_dir / "main.py").is_file()
        assert (out_dir / "models" / "user.py").is_file()

    def test_preview_file(self, graph_file: Path, capsys):
        main(["preview", str(graph_file), "-t", "python", "--file", "routes/authroutes_routes.py"])
        out = capsys.readouterr().out
        assert '@router.post("/register")' in out

    def test_preview_listing(self, graph_file: Path, capsys):
        main(["preview", str(graph_file), "-t", "csharp"])
        assert "Program.cs" in capsys.readouterr().out

    def test_openapi_to_file(self, graph_file: Path, tmp_path: Path):
        out = tmp_path / "openapi.json"
        main(["openapi", str(graph_file), "--output", str(out)])
        document = json.loads(out.read_text(encoding="utf-8"))
        assert set(document["paths"]) == {"/register", "/login"}

    def test_targets(self, capsys):
        main(["targets"])
        out = capsys.readouterr().out
        for target in ("node", "python", "go", "java", "csharp"):
            assert target in out

    def test_save_load_and_generate_from_project(self, graph_file: Path, tmp_path: Path):
        main(["save", str(graph_file), "--id", "auth-demo", "--name", "Auth demo"])
        assert len(list((tmp_path / "store").glob("auth-demo-*.json"))) == 1

        loaded = tmp_path / "loaded.json"
        main(["load", "auth-demo", "--output", str(loaded)])
        assert len(json.loads(loaded.read_text(encoding="utf-8"))["nodes"]) == 4

        out = tmp_path / "from-store.zip"
        main(["generate", "--project", "auth-demo", "-t", "java", "-o", str(out)])
        assert out.is_file()

    def test_verbose_flag(self, graph_file: Path):
        main(["--verbose", "openapi", str(graph_file), "-o", "doc.json"])
        assert logging.getLogger().level == logging.DEBUG

    def test_list_saved_projects(self, graph_file: Path, capsys):
        main(["save", str(graph_file), "--id", "auth-demo", "--name", "Auth demo"])
        main(["save", str(graph_file), "--id", "billing"])
        capsys.readouterr()

        main(["list"])
        out = capsys.readouterr().out
        assert "auth-demo" in out
        assert "billing" in out
        assert out.index("auth-demo") < out.index("billing")

    def test_list_empty_store(self, capsys):
        main(["list"])
        assert "No saved projects" in capsys.readouterr().out

    def test_config_printed(self, capsys, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ARACHNET_PORT", "8080")
        main(["config"])
        assert '"port": 8080' in capsys.readouterr().out

    def test_config_file_used_by_generate(self, graph_file: Path, tmp_path: Path):
        config_path = tmp_path / "arachnet.json"
        main(["config", "--output", str(config_path)])
        settings = json.loads(config_path.read_text(encoding="utf-8"))
        settings["project_name"] = "shop-api"
        config_path.write_text(json.dumps(settings), encoding="utf-8")

        main(["--config", str(config_path), "generate", str(graph_file), "-t", "node"])
        archive = tmp_path / "shop-api.zip"
        assert archive.is_file()
        with zipfile.ZipFile(archive) as zf:
            assert "shop-api/index.js" in zf.namelist()


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------


class TestWarnings:
    def test_empty_graph_warned(self, tmp_path: Path, capsys):
        empty = tmp_path / "empty.json"
        empty.write_text(json.dumps({"nodes": [], "edges": []}), encoding="utf-8")
        main(["generate", str(empty), "-t", "node"])
        assert "no component nodes" in capsys.readouterr().out
        assert (tmp_path / "arachnet-project.zip").is_file()

    def test_graph_with_components_not_warned(self, graph_file: Path, capsys):
        main(["generate", str(graph_file), "-t", "node"])
        assert "no component nodes" not in capsys.readouterr().out

    def test_save_overwrite_warned(self, graph_file: Path, capsys):
        main(["save", str(graph_file), "--id", "auth-demo"])
        assert "Overwriting" not in capsys.readouterr().out
        main(["save", str(graph_file), "--id", "auth-demo"])
        assert "Overwriting saved project" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    def test_unknown_target(self, graph_file: Path, capsys):
        assert _exit_code(["generate", str(graph_file), "-t", "rust"]) == 1
        assert "Unsupported target" in capsys.readouterr().out

    def test_missing_graph_file(self):
        assert _exit_code(["openapi", "missing.json"]) == 1

    def test_generate_without_graph_or_project(self):
        assert _exit_code(["generate", "-t", "node"]) == 1

    def test_invalid_json(self, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text("{oops", encoding="utf-8")
        assert _exit_code(["openapi", str(bad)]) == 1

    def test_invalid_graph(self, tmp_path: Path):
        bad = tmp_path / "bad-graph.json"
        bad.write_text(json.dumps({"nodes": [{"id": "1", "type": "queue"}]}), encoding="utf-8")
        assert _exit_code(["generate", str(bad), "-t", "node"]) == 1

    @pytest.mark.parametrize("payload", [[1, 2, 3], {"foo": 1}, "nodes", None])
    def test_graph_file_not_a_graph_object(self, tmp_path: Path, capsys, payload: Any):
        bad = tmp_path / "not-a-graph.json"
        bad.write_text(json.dumps(payload), encoding="utf-8")
        assert _exit_code(["generate", str(bad), "-t", "node"]) == 1
        assert "must hold an object" in capsys.readouterr().out
        assert not (tmp_path / "arachnet-project.zip").exists()

    def test_missing_config_file(self, graph_file: Path):
        assert _exit_code(["--config", "missing.json", "openapi", str(graph_file)]) == 1

    def test_invalid_config_file(self, graph_file: Path, tmp_path: Path):
        config_path = tmp_path / "arachnet.json"
        config_path.write_text(json.dumps({"port": 0}), encoding="utf-8")
        assert _exit_code(["--config", str(config_path), "openapi", str(graph_file)]) == 1

    def test_unknown_example(self):
        assert _exit_code(["example", "blog"]) == 1

    def test_unknown_project(self):
        assert _exit_code(["load", "ghost"]) == 1

    def test_preview_unknown_file(self, graph_file: Path):
        assert _exit_code(["preview", str(graph_file), "-t", "go", "--file", "nope.go"]) == 1
