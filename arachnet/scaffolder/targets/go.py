"""Go target: Gin + GORM.

Go only exports capitalized identifiers, so struct fields and methods are
upper-first while JSON tags keep the original field names.
"""

from __future__ import annotations

from ...graph.models import ControllerNode, Graph, ModelNode, NodeKind, RouteNode, ServiceNode
from .. import naming
from ..base import TargetEmitter, join_lines


class GoEmitter(TargetEmitter):
    target = "go"
    display_name = "Go (Gin + GORM)"
    type_map = {
        "String": "string",
        "Number": "float64",
        "Boolean": "bool",
        "Date": "time.Time",
        "ObjectId": "string",
    }
    any_type = "interface{}"
    file_patterns = {
        NodeKind.MODEL: "models/{stem}.go",
        NodeKind.SERVICE: "services/{stem}_service.go",
        NodeKind.CONTROLLER: "controllers/{stem}_controller.go",
        NodeKind.ROUTE: "routes/{stem}_routes.go",
    }
    project_templates = {
        "go/go.mod.j2": "go.mod",
        "go/main.go.j2": "main.go",
    }
    run_command = "go mod tidy && go run ."

    @property
    def module_path(self) -> str:
        return naming.slugify(self.config.project_name) or "arachnet-project"

    # -- Source files ------------------------------------------------------

    def render_model(self, node: ModelNode, graph: Graph) -> str:
        lines = ["package models", ""]
        if any(f.type == "Date" for f in node.data.fields):
            lines.extend(['import "time"', ""])
        lines.append(f"type {node.name} struct {{")
        lines.append('\tID uint `json:"id" gorm:"primaryKey"`')
        for field in node.data.fields:
            tags = f'json:"{field.name}"'
            if field.required:
                tags += ' binding:"required"'
            lines.append(
                f"\t{naming.upper_first(field.name)} {self.map_type(field.type)} `{tags}`"
            )
        lines.append("}")
        return join_lines(lines)

    def render_service(self, node: ServiceNode, graph: Graph) -> str:
        struct = f"{node.name}Service"
        models = self.connected_models(node, graph)
        label = naming.comment_text(node.label) or node.name
        lines = ["package services", ""]
        if models:
            lines.extend([
                "import (",
                f'\t"{self.module_path}/models"',
                "",
                '\t"gorm.io/gorm"',
                ")",
            ])
        else:
            lines.append('import "gorm.io/gorm"')
        lines.extend([
            "",
            f"// {struct} handles {label} business logic.",
            f"type {struct} struct {{",
            "\tDB *gorm.DB",
            "}",
        ])
        for model in models:
            lines.extend([
                "",
                f"func (s *{struct}) GetAll{model.name}s() ([]models.{model.name}, error) {{",
                f"\tvar items []models.{model.name}",
                "\terr := s.DB.Find(&items).Error",
                "\treturn items, err",
                "}",
            ])
        for index, rule in enumerate(node.data.rules):
            method = naming.upper_first(naming.rule_identifier(rule.name, index))
            lines.extend([
                "",
                f"// Rule: {naming.comment_text(rule.name)}",
                f"func (s *{struct}) {method}() error {{",
                f"\t// {naming.comment_text(rule.description)}",
                "\treturn nil",
                "}",
            ])
        return join_lines(lines)

    def render_controller(self, node: ControllerNode, graph: Graph) -> str:
        struct = f"{node.name}Controller"
        bindings = self.controller_bindings(node, graph)
        has_handlers = bool(node.data.rules) or any(models for _, models in bindings)

        imports: list[str] = []
        if has_handlers:
            imports.append('\t"net/http"')
        if bindings:
            if imports:
                imports.append("")
            imports.append(f'\t"{self.module_path}/services"')
        if has_handlers:
            imports.extend(["", '\t"github.com/gin-gonic/gin"'])

        lines = ["package controllers", ""]
        if imports:
            lines.extend(["import (", *imports, ")", ""])
        lines.append(f"type {struct} struct {{")
        for service, _ in bindings:
            lines.append(f"\t{service.name}Service *services.{service.name}Service")
        lines.append("}")
        for service, models in bindings:
            for model in models:
                lines.extend([
                    "",
                    f"func (ctl *{struct}) Get{model.name}s(c *gin.Context) {{",
                    f"\tdata, err := ctl.{service.name}Service.GetAll{model.name}s()",
                    "\tif err != nil {",
                    '\t\tc.JSON(http.StatusInternalServerError, gin.H{"error": err.Error()})',
                    "\t\treturn",
                    "\t}",
                    "\tc.JSON(http.StatusOK, data)",
                    "}",
                ])
        for index, rule in enumerate(node.data.rules):
            method = naming.upper_first(naming.rule_identifier(rule.name, index))
            message = f"Rule {naming.quote_text(rule.name)} executed"
            lines.extend([
                "",
                f"// Rule: {naming.comment_text(rule.name)}",
                f"func (ctl *{struct}) {method}(c *gin.Context) {{",
                f"\t// {naming.comment_text(rule.description)}",
                f'\tc.JSON(http.StatusOK, gin.H{{"message": "{message}"}})',
                "}",
            ])
        return join_lines(lines)

    def render_route(self, node: RouteNode, graph: Graph) -> str:
        endpoints = node.data.endpoints
        controllers = self.connected_controllers(node, graph)
        lines = ["package routes", ""]
        if endpoints:
            lines.extend([
                "import (",
                '\t"net/http"',
                "",
                '\t"github.com/gin-gonic/gin"',
                ")",
            ])
        else:
            lines.append('import "github.com/gin-gonic/gin"')
        lines.append("")
        label = naming.comment_text(node.label) or node.name
        lines.append(f"// Register{node.name} registers the {label} endpoints.")
        if controllers:
            names = ", ".join(f"{c.name}Controller" for c in controllers)
            lines.append(f"// Controllers: {names}")
        lines.append(f"func Register{node.name}(r *gin.Engine) {{")
        for endpoint in endpoints:
            path = naming.quote_text(self.endpoint_path(endpoint.path))
            message = f"{naming.quote_text(endpoint.name)} endpoint"
            lines.extend([
                f'\tr.{endpoint.method.value}("{path}", func(c *gin.Context) {{',
                f"\t\t// Endpoint: {naming.comment_text(endpoint.name)}",
                f'\t\tc.JSON(http.StatusOK, gin.H{{"message": "{message}"}})',
                "\t})",
            ])
        lines.append("}")
        return join_lines(lines)
