"""Example graphs offered as starting points.

``auth`` is a minimal registration/login backend; ``ecommerce`` has two
models behind one store service.
"""

from __future__ import annotations

import copy
from typing import Any

from .graph.models import Graph

SAMPLES: dict[str, dict[str, Any]] = {
    "auth": {
        "nodes": [
            {
                "id": "1",
                "type": "model",
                "position": {"x": 100, "y": 100},
                "data": {
                    "label": "User",
                    "fields": [
                        {"name": "email", "type": "String", "required": True},
                        {"name": "password", "type": "String", "required": True},
                    ],
                },
            },
            {
                "id": "2",
                "type": "service",
                "position": {"x": 400, "y": 100},
                "data": {
                    "label": "AuthService",
                    "rules": [
                        {"name": "Register", "description": "Create new user"},
                        {"name": "Login", "description": "Authenticate user"},
                    ],
                },
            },
            {
                "id": "3",
                "type": "controller",
                "position": {"x": 700, "y": 100},
                "data": {
                    "label": "AuthController",
                    "rules": [
                        {"name": "handleRegister", "description": "Call AuthService.Register"},
                    ],
                },
            },
            {
                "id": "4",
                "type": "route",
                "position": {"x": 1000, "y": 100},
                "data": {
                    "label": "AuthRoutes",
                    "endpoints": [
                        {"method": "POST", "path": "/register", "name": "Register"},
                        {"method": "POST", "path": "/login", "name": "Login"},
                    ],
                },
            },
        ],
        "edges": [
            {"id": "e1-2", "source": "1", "target": "2"},
            {"id": "e2-3", "source": "2", "target": "3"},
            {"id": "e3-4", "source": "3", "target": "4"},
        ],
    },
    "ecommerce": {
        "nodes": [
            {
                "id": "1",
                "type": "model",
                "position": {"x": 100, "y": 100},
                "data": {
                    "label": "Product",
                    "fields": [
                        {"name": "name", "type": "String", "required": True},
                        {"name": "price", "type": "Number", "required": True},
                    ],
                },
            },
            {
                "id": "2",
                "type": "model",
                "position": {"x": 100, "y": 300},
                "data": {
                    "label": "Order",
                    "fields": [{"name": "total", "type": "Number", "required": True}],
                },
            },
            {
                "id": "3",
                "type": "service",
                "position": {"x": 400, "y": 200},
                "data": {
                    "label": "StoreService",
                    "rules": [{"name": "CreateOrder", "description": "Process checkout"}],
                },
            },
            {
                "id": "4",
                "type": "controller",
                "position": {"x": 700, "y": 200},
                "data": {"label": "StoreController"},
            },
            {
                "id": "5",
                "type": "route",
                "position": {"x": 1000, "y": 200},
                "data": {
                    "label": "StoreRoutes",
                    "endpoints": [
                        {"method": "GET", "path": "/products", "name": "ListProducts"},
                        {"method": "POST", "path": "/checkout", "name": "Checkout"},
                    ],
                },
            },
        ],
        "edges": [
            {"id": "e1-3", "source": "1", "target": "3"},
            {"id": "e2-3", "source": "2", "target": "3"},
            {"id": "e3-4", "source": "3", "target": "4"},
            {"id": "e4-5", "source": "4", "target": "5"},
        ],
    },
}


def sample_names() -> list[str]:
    return sorted(SAMPLES)


def sample_payload(name: str) -> dict[str, Any]:
    """Return a deep copy of the raw payload for sample *name*.

    Raises:
        KeyError: If no sample is registered under *name*.
    """
    if name not in SAMPLES:
        raise KeyError(f"Unknown example {name!r} (available: {', '.join(sample_names())})")
    return copy.deepcopy(SAMPLES[name])


def load_sample(name: str) -> Graph:
    """Return sample *name* as a freshly validated ``Graph``."""
    return Graph.from_payload(sample_payload(name))
