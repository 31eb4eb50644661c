"""Java target: Spring Boot + JPA + Lombok.

Java requires the public class name to match the file name, so files are
named after the class (``User.java``) rather than the lowercased stem.
"""

from __future__ import annotations

from typing import Any

from ...descriptor import Descriptor
from ...graph.models import ControllerNode, Graph, ModelNode, NodeKind, RouteNode, ServiceNode
from .. import naming
from ..base import TargetEmitter, join_lines
from ..tree import Directory

BASE_PACKAGE = "com.arachnet.api"

_MAPPINGS: dict[str, str] = {
    "GET": "GetMapping",
    "POST": "PostMapping",
    "PUT": "PutMapping",
    "DELETE": "DeleteMapping",
}


class JavaEmitter(TargetEmitter):
    target = "java"
    display_name = "Java (Spring Boot + JPA)"
    source_root = "src/main/java/" + BASE_PACKAGE.replace(".", "/")
    type_map = {
        "String": "String",
        "Number": "Double",
        "Boolean": "Boolean",
        "Date": "LocalDateTime",
        "ObjectId": "String",
    }
    any_type = "Object"
    file_patterns = {
        NodeKind.MODEL: "models/{name}.java",
        NodeKind.SERVICE: "services/{name}Service.java",
        NodeKind.CONTROLLER: "controllers/{name}Controller.java",
        NodeKind.ROUTE: "routes/{name}Routes.java",
    }
    project_templates = {
        "java/pom.xml.j2": "pom.xml",
        "java/ApiApplication.java.j2": source_root + "/ApiApplication.java",
        "java/application.properties.j2": "src/main/resources/application.properties",
    }
    run_command = "mvn spring-boot:run"

    def emit_project_files(
        self,
        tree: Directory,
        graph: Graph,
        context: dict[str, Any],
        descriptor: Descriptor,
    ) -> None:
        super().emit_project_files(tree, graph, context, descriptor)
        # Spring serves src/main/resources/static at the web root.
        tree.add_file("src/main/resources/static/openapi.json", descriptor.to_json())

    def build_context(self, graph: Graph) -> dict[str, Any]:
        context = super().build_context(graph)
        context["base_package"] = BASE_PACKAGE
        return context

    # -- Source files ------------------------------------------------------

    def render_model(self, node: ModelNode, graph: Graph) -> str:
        lines = [
            f"package {BASE_PACKAGE}.models;",
            "",
            "import jakarta.persistence.*;",
            "import lombok.Data;",
        ]
        if any(f.type == "Date" for f in node.data.fields):
            lines.append("import java.time.LocalDateTime;")
        lines.extend([
            "",
            "@Entity",
            "@Data",
            f"public class {node.name} {{",
            "\t@Id",
            "\t@GeneratedValue(strategy = GenerationType.IDENTITY)",
            "\tprivate Long id;",
        ])
        for field in node.data.fields:
            if field.required:
                lines.append("\t@Column(nullable = false)")
            lines.append(f"\tprivate {self.map_type(field.type)} {field.name};")
        lines.append("}")
        return join_lines(lines)

    def render_service(self, node: ServiceNode, graph: Graph) -> str:
        models = self.connected_models(node, graph)
        lines = [f"package {BASE_PACKAGE}.services;", ""]
        for model in models:
            lines.append(f"import {BASE_PACKAGE}.models.{model.name};")
        if models:
            lines.extend([
                "import jakarta.persistence.EntityManager;",
                "import jakarta.persistence.PersistenceContext;",
                "import java.util.List;",
            ])
        lines.extend([
            "import org.springframework.stereotype.Service;",
            "",
            "@Service",
            f"public class {node.name}Service {{",
        ])
        if models:
            lines.extend(["\t@PersistenceContext", "\tprivate EntityManager entityManager;"])
        for model in models:
            lines.extend([
                "",
                f"\tpublic List<{model.name}> getAll{model.name}s() {{",
                "\t\treturn entityManager",
                f'\t\t\t.createQuery("SELECT e FROM {model.name} e", {model.name}.class)',
                "\t\t\t.getResultList();",
                "\t}",
            ])
        for index, rule in enumerate(node.data.rules):
            method = naming.lower_first(naming.rule_identifier(rule.name, index))
            lines.extend([
                "",
                f"\t// Rule: {naming.comment_text(rule.name)}",
                f"\tpublic void {method}() {{",
                f"\t\t// {naming.comment_text(rule.description)}",
                "\t}",
            ])
        lines.append("}")
        return join_lines(lines)

    def render_controller(self, node: ControllerNode, graph: Graph) -> str:
        class_name = f"{node.name}Controller"
        bindings = self.controller_bindings(node, graph)
        model_names = sorted({m.name for _, models in bindings for m in models})
        has_handlers = bool(node.data.rules) or bool(model_names)

        lines = [f"package {BASE_PACKAGE}.controllers;", ""]
        for name in model_names:
            lines.append(f"import {BASE_PACKAGE}.models.{name};")
        for service, _ in bindings:
            lines.append(f"import {BASE_PACKAGE}.services.{service.name}Service;")
        if model_names:
            lines.append("import java.util.List;")
        if node.data.rules:
            lines.append("import java.util.Map;")
        if has_handlers:
            lines.append("import org.springframework.http.ResponseEntity;")
        lines.extend([
            "import org.springframework.stereotype.Component;",
            "",
            "@Component",
            f"public class {class_name} {{",
        ])
        for service, _ in bindings:
            lines.append(
                f"\tprivate final {service.name}Service "
                f"{naming.lower_first(service.name)}Service;"
            )
        if bindings:
            params = ", ".join(
                f"{s.name}Service {naming.lower_first(s.name)}Service" for s, _ in bindings
            )
            lines.extend(["", f"\tpublic {class_name}({params}) {{"])
            for service, _ in bindings:
                field = f"{naming.lower_first(service.name)}Service"
                lines.append(f"\t\tthis.{field} = {field};")
            lines.append("\t}")
        for service, models in bindings:
            field = f"{naming.lower_first(service.name)}Service"
            for model in models:
                lines.extend([
                    "",
                    f"\tpublic ResponseEntity<List<{model.name}>> get{model.name}s() {{",
                    f"\t\treturn ResponseEntity.ok({field}.getAll{model.name}s());",
                    "\t}",
                ])
        for index, rule in enumerate(node.data.rules):
            method = naming.lower_first(naming.rule_identifier(rule.name, index))
            message = f"Rule {naming.quote_text(rule.name)} executed"
            lines.extend([
                "",
                f"\t// Rule: {naming.comment_text(rule.name)}",
                f"\tpublic ResponseEntity<Map<String, String>> {method}() {{",
                f"\t\t// {naming.comment_text(rule.description)}",
                f'\t\treturn ResponseEntity.ok(Map.of("message", "{message}"));',
                "\t}",
            ])
        lines.append("}")
        return join_lines(lines)

    def render_route(self, node: RouteNode, graph: Graph) -> str:
        endpoints = node.data.endpoints
        lines = [f"package {BASE_PACKAGE}.routes;", ""]
        for controller in self.connected_controllers(node, graph):
            lines.append(f"import {BASE_PACKAGE}.controllers.{controller.name}Controller;")
        if endpoints:
            lines.append("import java.util.Map;")
        lines.append("import org.springframework.web.bind.annotation.*;")
        lines.extend(["", "@RestController", f"public class {node.name}Routes {{"])
        for index, endpoint in enumerate(endpoints):
            method = endpoint.method.value
            handler = naming.camel_case(naming.endpoint_identifier(endpoint.name, method, index))
            path = naming.quote_text(self.endpoint_path(endpoint.path))
            if index:
                lines.append("")
            lines.extend([
                f'\t@{_MAPPINGS[method]}("{path}")',
                f"\tpublic Map<String, String> {handler}() {{",
                f"\t\t// Endpoint: {naming.comment_text(endpoint.name)}",
                f'\t\treturn Map.of("message", "{naming.quote_text(endpoint.name)} endpoint");',
                "\t}",
            ])
        lines.append("}")
        return join_lines(lines)
