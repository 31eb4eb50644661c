"""Unit tests for the example graphs (arachnet.samples)."""

from __future__ import annotations

import pytest

from arachnet.graph.models import NodeKind
from arachnet.samples import SAMPLES, load_sample, sample_names, sample_payload


pytestmark = pytest.mark.unit


class TestSamples:
    def test_names(self):
        assert sample_names() == ["auth", "ecommerce"]

    def test_auth(self):
        graph = load_sample("auth")
        assert [n.label for n in graph.nodes] == ["User", "AuthService", "AuthController", "AuthRoutes"]
        route = graph.nodes_of(NodeKind.ROUTE)[0]
        assert [(e.method.value, e.path) for e in route.data.endpoints] == [
            ("POST", "/register"),
            ("POST", "/login"),
        ]

    def test_ecommerce(self):
        graph = load_sample("ecommerce")
        service = graph.nodes_of(NodeKind.SERVICE)[0]
        assert [m.label for m in graph.neighbors(service, NodeKind.MODEL)] == ["Product", "Order"]
        controller = graph.nodes_of(NodeKind.CONTROLLER)[0]
        assert controller.data.rules == []

    def test_payload_is_a_copy(self):
        payload = sample_payload("auth")
        payload["nodes"].clear()
        assert len(SAMPLES["auth"]["nodes"]) == 4

    def test_unknown(self):
        with pytest.raises(KeyError):
            load_sample("blog")
