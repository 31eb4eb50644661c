"""Node.js target: Express + Mongoose."""

from __future__ import annotations

import json
from typing import Any

from ...descriptor import Descriptor
from ...graph.models import ControllerNode, Graph, ModelNode, NodeKind, RouteNode, ServiceNode
from .. import naming
from ..base import TargetEmitter, join_lines
from ..tree import Directory


class NodeEmitter(TargetEmitter):
    target = "node"
    display_name = "Node.js (Express + Mongoose)"
    type_map = {
        "String": "String",
        "Number": "Number",
        "Boolean": "Boolean",
        "Date": "Date",
        "ObjectId": "mongoose.Schema.Types.ObjectId",
    }
    any_type = "mongoose.Schema.Types.Mixed"
    file_patterns = {
        NodeKind.MODEL: "models/{stem}.model.js",
        NodeKind.SERVICE: "services/{stem}.service.js",
        NodeKind.CONTROLLER: "controllers/{stem}.controller.js",
        NodeKind.ROUTE: "routes/{stem}.routes.js",
    }
    project_templates = {
        "node/index.js.j2": "index.js",
        "node/env.j2": ".env",
    }
    run_command = "npm install && npm start"

    _DEPENDENCIES: dict[str, str] = {
        "express": "^4.18.2",
        "dotenv": "^16.0.3",
        "mongoose": "^7.0.0",
        "cors": "^2.8.5",
        "swagger-ui-express": "^5.0.0",
    }

    def emit_project_files(
        self,
        tree: Directory,
        graph: Graph,
        context: dict[str, Any],
        descriptor: Descriptor,
    ) -> None:
        manifest = {
            "name": context["project_slug"],
            "version": self.config.api_version,
            "main": "index.js",
            "scripts": {"start": "node index.js", "dev": "nodemon index.js"},
            "dependencies": dict(self._DEPENDENCIES),
            "devDependencies": {"nodemon": "^3.0.0"},
        }
        tree.add_file("package.json", json.dumps(manifest, indent=2) + "\n")
        super().emit_project_files(tree, graph, context, descriptor)

    # -- Source files ------------------------------------------------------

    def render_model(self, node: ModelNode, graph: Graph) -> str:
        name = node.name
        lines = ["const mongoose = require('mongoose');", "", f"const {name}Schema = new mongoose.Schema({{"]
        for field in node.data.fields:
            required = "true" if field.required else "false"
            lines.append(
                f"  {field.name}: {{ type: {self.map_type(field.type)}, required: {required} }},"
            )
        lines.append("}, { timestamps: true });")
        lines.append("")
        lines.append(f"module.exports = mongoose.model('{name}', {name}Schema);")
        return join_lines(lines)

    def render_service(self, node: ServiceNode, graph: Graph) -> str:
        name = node.name
        models = self.connected_models(node, graph)
        lines = [f"// Service for {naming.comment_text(node.label) or name}"]
        for model in models:
            stem = naming.file_stem(model.name)
            lines.append(f"const {model.name} = require('../models/{stem}.model');")
        lines.append("")
        lines.append(f"class {name}Service {{")
        for model in models:
            lines.append(f"  async getAll{model.name}s() {{")
            lines.append(f"    return await {model.name}.find();")
            lines.append("  }")
        for index, rule in enumerate(node.data.rules):
            lines.append(f"  // Rule: {naming.comment_text(rule.name)}")
            lines.append(f"  async {naming.rule_identifier(rule.name, index)}() {{")
            lines.append(f"    // {naming.comment_text(rule.description)}")
            lines.append("  }")
        lines.append("}")
        lines.append("")
        lines.append(f"module.exports = new {name}Service();")
        return join_lines(lines)

    def render_controller(self, node: ControllerNode, graph: Graph) -> str:
        name = node.name
        bindings = self.controller_bindings(node, graph)
        lines = [f"// Controller for {naming.comment_text(node.label) or name}"]
        for service, _ in bindings:
            stem = naming.file_stem(service.name)
            lines.append(
                f"const {service.name}Service = require('../services/{stem}.service');"
            )
        lines.append("")
        lines.append(f"const {name}Controller = {{")
        for service, models in bindings:
            for model in models:
                lines.append(f"  async get{model.name}s(req, res) {{")
                lines.append(
                    f"    const data = await {service.name}Service.getAll{model.name}s();"
                )
                lines.append("    res.json(data);")
                lines.append("  },")
        for index, rule in enumerate(node.data.rules):
            lines.append(f"  // Rule: {naming.comment_text(rule.name)}")
            lines.append(f"  async {naming.rule_identifier(rule.name, index)}(req, res) {{")
            lines.append(f"    // {naming.comment_text(rule.description)}")
            lines.append(
                f'    res.json({{ message: "Rule {naming.quote_text(rule.name)} executed" }});'
            )
            lines.append("  },")
        lines.append("};")
        lines.append("")
        lines.append(f"module.exports = {name}Controller;")
        return join_lines(lines)

    def render_route(self, node: RouteNode, graph: Graph) -> str:
        lines = ["const express = require('express');", "const router = express.Router();"]
        for controller in self.connected_controllers(node, graph):
            stem = naming.file_stem(controller.name)
            lines.append(
                f"const {controller.name}Controller = "
                f"require('../controllers/{stem}.controller');"
            )
        lines.append("")
        for endpoint in node.data.endpoints:
            method = endpoint.method.value.lower()
            path = naming.quote_text(self.endpoint_path(endpoint.path), quote="'")
            lines.append(f"router.{method}('{path}', (req, res) => {{")
            lines.append(f"  // Endpoint: {naming.comment_text(endpoint.name)}")
            lines.append(
                f'  res.json({{ message: "{naming.quote_text(endpoint.name)} endpoint" }});'
            )
            lines.append("});")
        lines.append("")
        lines.append("module.exports = router;")
        return join_lines(lines)
