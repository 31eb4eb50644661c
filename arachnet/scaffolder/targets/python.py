"""Python target: FastAPI + SQLAlchemy + pydantic.

Each model node yields a SQLAlchemy table class under ``models/`` and a
matching set of pydantic schemas under ``schemas/``.
"""

from __future__ import annotations

from typing import Any

from ...descriptor import Descriptor
from ...graph.models import ControllerNode, Graph, ModelNode, NodeKind, RouteNode, ServiceNode
from .. import naming
from ..base import TargetEmitter, join_lines
from ..tree import Directory


# FieldType value -> SQLAlchemy column type
_COLUMN_TYPES: dict[str, str] = {
    "String": "String",
    "Number": "Float",
    "Boolean": "Boolean",
    "Date": "DateTime",
    "ObjectId": "String",
}


class PythonEmitter(TargetEmitter):
    target = "python"
    display_name = "Python (FastAPI + SQLAlchemy)"
    type_map = {
        "String": "str",
        "Number": "float",
        "Boolean": "bool",
        "Date": "datetime",
        "ObjectId": "str",
    }
    any_type = "Any"
    file_patterns = {
        NodeKind.MODEL: "models/{stem}.py",
        NodeKind.SERVICE: "services/{stem}_service.py",
        NodeKind.CONTROLLER: "controllers/{stem}_controller.py",
        NodeKind.ROUTE: "routes/{stem}_routes.py",
    }
    project_templates = {
        "python/requirements.txt.j2": "requirements.txt",
        "python/main.py.j2": "main.py",
        "python/database.py.j2": "database.py",
        "python/env.j2": ".env",
    }
    run_command = "pip install -r requirements.txt && uvicorn main:app --reload"

    def emit_project_files(
        self,
        tree: Directory,
        graph: Graph,
        context: dict[str, Any],
        descriptor: Descriptor,
    ) -> None:
        super().emit_project_files(tree, graph, context, descriptor)
        for node in graph.nodes_of(NodeKind.MODEL):
            tree.add_file(
                f"schemas/{naming.file_stem(node.name)}.py", self.render_schema(node)
            )

    def build_context(self, graph: Graph) -> dict[str, Any]:
        context = super().build_context(graph)
        for route in context["routes"]:
            route["module"] = f"{route['stem']}_routes"
        return context

    # -- Source files ------------------------------------------------------

    def render_model(self, node: ModelNode, graph: Graph) -> str:
        name = node.name
        lines = [
            "from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String",
            "",
            "from database import Base",
            "",
            "",
            f"class {name}DB(Base):",
            f'    __tablename__ = "{naming.file_stem(name)}s"',
            "",
            "    id = Column(Integer, primary_key=True, index=True)",
        ]
        for field in node.data.fields:
            column = _COLUMN_TYPES.get(field.type, "JSON")
            nullable = "False" if field.required else "True"
            lines.append(f"    {field.name} = Column({column}, nullable={nullable})")
        return join_lines(lines)

    def render_schema(self, node: ModelNode) -> str:
        """pydantic request/response schemas for a model node."""
        name = node.name
        lines = [
            "from datetime import datetime",
            "from typing import Any, Optional",
            "",
            "from pydantic import BaseModel, ConfigDict",
            "",
            "",
            f"class {name}Base(BaseModel):",
        ]
        if not node.data.fields:
            lines.append("    pass")
        for field in node.data.fields:
            py_type = self.map_type(field.type)
            if field.required:
                lines.append(f"    {field.name}: {py_type}")
            else:
                lines.append(f"    {field.name}: Optional[{py_type}] = None")
        lines.extend([
            "",
            "",
            f"class {name}Create({name}Base):",
            "    pass",
            "",
            "",
            f"class {name}({name}Base):",
            "    model_config = ConfigDict(from_attributes=True)",
            "",
            "    id: int",
        ])
        return join_lines(lines)

    def render_service(self, node: ServiceNode, graph: Graph) -> str:
        class_name = f"{node.name}Service"
        models = self.connected_models(node, graph)
        lines = [f'"""Service for {naming.quote_text(node.label) or node.name}."""', ""]
        if models:
            lines.append("from sqlalchemy.orm import Session")
            lines.append("")
            for model in models:
                lines.append(
                    f"from models.{naming.file_stem(model.name)} import {model.name}DB"
                )
            lines.append("")
        lines.append("")
        lines.append(f"class {class_name}:")
        methods: list[list[str]] = []
        for model in models:
            methods.append([
                f"    def get_all_{naming.snake_case(model.name)}s(self, db: Session):",
                f"        return db.query({model.name}DB).all()",
            ])
        for index, rule in enumerate(node.data.rules):
            methods.append([
                f"    # Rule: {naming.comment_text(rule.name)}",
                f"    def {naming.snake_case(naming.rule_identifier(rule.name, index))}(self):",
                f"        # {naming.comment_text(rule.description)}",
                "        pass",
            ])
        if not methods:
            lines.append("    pass")
        for index, method in enumerate(methods):
            if index:
                lines.append("")
            lines.extend(method)
        lines.append("")
        lines.append("")
        lines.append(f"{naming.snake_case(class_name)} = {class_name}()")
        return join_lines(lines)

    def render_controller(self, node: ControllerNode, graph: Graph) -> str:
        bindings = self.controller_bindings(node, graph)
        imports: list[str] = []
        if any(models for _, models in bindings):
            imports.append("from database import SessionLocal")
        for service, _ in bindings:
            instance = naming.snake_case(f"{service.name}Service")
            imports.append(
                f"from services.{naming.file_stem(service.name)}_service import {instance}"
            )
        lines = [f'"""Controller for {naming.quote_text(node.label) or node.name}."""']
        if imports:
            lines.append("")
            lines.extend(imports)
        for service, models in bindings:
            instance = naming.snake_case(f"{service.name}Service")
            for model in models:
                plural = f"{naming.snake_case(model.name)}s"
                lines.extend([
                    "",
                    "",
                    f"async def get_{plural}():",
                    "    db = SessionLocal()",
                    "    try:",
                    f"        return {instance}.get_all_{plural}(db)",
                    "    finally:",
                    "        db.close()",
                ])
        for index, rule in enumerate(node.data.rules):
            lines.extend([
                "",
                "",
                f"# Rule: {naming.comment_text(rule.name)}",
                f"async def {naming.snake_case(naming.rule_identifier(rule.name, index))}():",
                f"    # {naming.comment_text(rule.description)}",
                f'    return {{"message": "Rule {naming.quote_text(rule.name)} executed"}}',
            ])
        return join_lines(lines)

    def render_route(self, node: RouteNode, graph: Graph) -> str:
        lines = ["from fastapi import APIRouter"]
        controllers = self.connected_controllers(node, graph)
        if controllers:
            lines.append("")
        for controller in controllers:
            lines.append(
                f"from controllers import {naming.file_stem(controller.name)}_controller"
                "  # noqa: F401"
            )
        lines.append("")
        lines.append("router = APIRouter()")
        for index, endpoint in enumerate(node.data.endpoints):
            method = endpoint.method.value
            handler = naming.snake_case(
                naming.endpoint_identifier(endpoint.name, method, index)
            )
            path = naming.quote_text(self.endpoint_path(endpoint.path))
            lines.extend([
                "",
                "",
                f'@router.{method.lower()}("{path}")',
                f"async def {handler}():",
                f"    # Endpoint: {naming.comment_text(endpoint.name)}",
                f'    return {{"message": "{naming.quote_text(endpoint.name)} endpoint"}}',
            ])
        return join_lines(lines)
