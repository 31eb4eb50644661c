"""Shared pytest fixtures for the Arachnet test suite.

Provides reusable fixtures for:
- Raw graph payloads (the two examples, an empty graph, a sparse graph)
- Validated ``Graph`` objects
- Generator configuration and a real template renderer
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from arachnet.config import GeneratorConfig
from arachnet.graph.models import Graph
from arachnet.samples import sample_payload
from arachnet.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Raw payloads
# ---------------------------------------------------------------------------

@pytest.fixture
def auth_payload() -> dict[str, Any]:
    """User -> AuthService -> AuthController -> AuthRoutes."""
    return sample_payload("auth")


@pytest.fixture
def ecommerce_payload() -> dict[str, Any]:
    """Product + Order -> StoreService -> StoreController -> StoreRoutes."""
    return sample_payload("ecommerce")


@pytest.fixture
def users_payload() -> dict[str, Any]:
    """One model, one service, one controller, one route with ``GET users``.

    The endpoint path deliberately lacks its leading slash.
    """
    return {
        "nodes": [
            {
                "id": "m1",
                "type": "model",
                "data": {
                    "label": "User",
                    "fields": [
                        {"name": "email", "type": "String", "required": True},
                        {"name": "age", "type": "Number"},
                        {"name": "active", "type": "Boolean"},
                        {"name": "joined", "type": "Date"},
                    ],
                },
            },
            {
                "id": "s1",
                "type": "service",
                "data": {
                    "label": "User Service",
                    "rules": [{"name": "Send Welcome Mail", "description": "Email new users"}],
                },
            },
            {"id": "c1", "type": "controller", "data": {"label": "UserController"}},
            {
                "id": "r1",
                "type": "route",
                "data": {
                    "label": "UserRoutes",
                    "endpoints": [{"name": "listUsers", "method": "GET", "path": "users"}],
                },
            },
        ],
        "edges": [
            {"id": "e1", "source": "m1", "target": "s1"},
            {"id": "e2", "source": "c1", "target": "s1"},
            {"id": "e3", "source": "c1", "target": "r1"},
        ],
    }


@pytest.fixture
def sparse_payload() -> dict[str, Any]:
    """Nodes with every optional collection missing, plus annotation-only kinds."""
    return {
        "nodes": [
            {"id": "1", "type": "model", "data": {"label": "Blob"}},
            {"id": "2", "type": "service", "data": {"label": "EmptyService"}},
            {"id": "3", "type": "controller", "data": {"label": "EmptyController"}},
            {"id": "4", "type": "route", "data": {"label": "EmptyRoutes"}},
            {"id": "5", "type": "database", "data": {"label": "MainDB"}},
            {"id": "6", "type": "auth", "data": {"label": "JWT"}},
            {"id": "7", "type": "middleware", "data": {"label": "Logger"}},
        ],
        "edges": [
            {"id": "e-dangling", "source": "2", "target": "ghost"},
        ],
    }


# ---------------------------------------------------------------------------
# Validated graphs
# ---------------------------------------------------------------------------

@pytest.fixture
def auth_graph(auth_payload: dict[str, Any]) -> Graph:
    return Graph.from_payload(auth_payload)


@pytest.fixture
def ecommerce_graph(ecommerce_payload: dict[str, Any]) -> Graph:
    return Graph.from_payload(ecommerce_payload)


@pytest.fixture
def users_graph(users_payload: dict[str, Any]) -> Graph:
    return Graph.from_payload(users_payload)


@pytest.fixture
def sparse_graph(sparse_payload: dict[str, Any]) -> Graph:
    return Graph.from_payload(sparse_payload)


@pytest.fixture
def empty_graph() -> Graph:
    return Graph()


# ---------------------------------------------------------------------------
# Configuration & rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def config(tmp_path: Path) -> GeneratorConfig:
    """Default configuration with the project store inside ``tmp_path``."""
    return GeneratorConfig(store_dir=tmp_path / "store")


@pytest.fixture
def renderer() -> TemplateRenderer:
    """A renderer over the packaged templates."""
    return TemplateRenderer()
