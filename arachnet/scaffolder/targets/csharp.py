"""C# target: ASP.NET Core + Entity Framework Core.

Types, properties and methods are PascalCase; file names follow the class
name as the .NET tooling expects.
"""

from __future__ import annotations

from typing import Any

from ...graph.models import ControllerNode, Graph, ModelNode, NodeKind, RouteNode, ServiceNode
from .. import naming
from ..base import TargetEmitter, join_lines

ROOT_NAMESPACE = "ArachnetApi"

_HTTP_ATTRIBUTES: dict[str, str] = {
    "GET": "HttpGet",
    "POST": "HttpPost",
    "PUT": "HttpPut",
    "DELETE": "HttpDelete",
}


class CSharpEmitter(TargetEmitter):
    target = "csharp"
    display_name = "C# (ASP.NET Core + Entity Framework)"
    type_map = {
        "String": "string",
        "Number": "double",
        "Boolean": "bool",
        "Date": "DateTime",
        "ObjectId": "string",
    }
    any_type = "object"
    file_patterns = {
        NodeKind.MODEL: "models/{name}.cs",
        NodeKind.SERVICE: "services/{name}Service.cs",
        NodeKind.CONTROLLER: "controllers/{name}Controller.cs",
        NodeKind.ROUTE: "routes/{name}Routes.cs",
    }
    project_templates = {
        "csharp/project.csproj.j2": f"{ROOT_NAMESPACE}.csproj",
        "csharp/Program.cs.j2": "Program.cs",
        "csharp/AppDbContext.cs.j2": "data/AppDbContext.cs",
        "csharp/appsettings.json.j2": "appsettings.json",
    }
    run_command = "dotnet run"

    def build_context(self, graph: Graph) -> dict[str, Any]:
        context = super().build_context(graph)
        context["root_namespace"] = ROOT_NAMESPACE
        return context

    # -- Source files ------------------------------------------------------

    def render_model(self, node: ModelNode, graph: Graph) -> str:
        lines: list[str] = []
        if any(f.required for f in node.data.fields):
            lines.extend(["using System.ComponentModel.DataAnnotations;", ""])
        lines.extend([
            f"namespace {ROOT_NAMESPACE}.Models;",
            "",
            f"public class {node.name}",
            "{",
            "    public int Id { get; set; }",
        ])
        for field in node.data.fields:
            if field.required:
                lines.append("    [Required]")
            lines.append(
                f"    public {self.map_type(field.type)} {naming.upper_first(field.name)} "
                "{ get; set; } = default!;"
            )
        lines.append("}")
        return join_lines(lines)

    def render_service(self, node: ServiceNode, graph: Graph) -> str:
        class_name = f"{node.name}Service"
        models = self.connected_models(node, graph)
        lines: list[str] = []
        if models:
            lines.extend([
                f"using {ROOT_NAMESPACE}.Data;",
                f"using {ROOT_NAMESPACE}.Models;",
                "using Microsoft.EntityFrameworkCore;",
                "",
            ])
        lines.extend([
            f"namespace {ROOT_NAMESPACE}.Services;",
            "",
            f"public class {class_name}",
            "{",
        ])
        members: list[list[str]] = []
        if models:
            members.append([
                "    private readonly AppDbContext _context;",
                "",
                f"    public {class_name}(AppDbContext context)",
                "    {",
                "        _context = context;",
                "    }",
            ])
        for model in models:
            members.append([
                f"    public async Task<List<{model.name}>> GetAll{model.name}s()",
                "    {",
                f"        return await _context.{model.name}s.ToListAsync();",
                "    }",
            ])
        for index, rule in enumerate(node.data.rules):
            method = naming.upper_first(naming.rule_identifier(rule.name, index))
            members.append([
                f"    // Rule: {naming.comment_text(rule.name)}",
                f"    public Task {method}()",
                "    {",
                f"        // {naming.comment_text(rule.description)}",
                "        return Task.CompletedTask;",
                "    }",
            ])
        _append_members(lines, members)
        lines.append("}")
        return join_lines(lines)

    def render_controller(self, node: ControllerNode, graph: Graph) -> str:
        class_name = f"{node.name}Controller"
        bindings = self.controller_bindings(node, graph)
        lines = ["using Microsoft.AspNetCore.Mvc;"]
        if bindings:
            lines.append(f"using {ROOT_NAMESPACE}.Services;")
        lines.extend([
            "",
            f"namespace {ROOT_NAMESPACE}.Controllers;",
            "",
            "[ApiController]",
            '[Route("[controller]")]',
            f"public class {class_name} : ControllerBase",
            "{",
        ])
        members: list[list[str]] = []
        if bindings:
            fields = [
                f"    private readonly {s.name}Service _{naming.lower_first(s.name)}Service;"
                for s, _ in bindings
            ]
            params = ", ".join(
                f"{s.name}Service {naming.lower_first(s.name)}Service" for s, _ in bindings
            )
            ctor = [f"    public {class_name}({params})", "    {"]
            for service, _ in bindings:
                var = f"{naming.lower_first(service.name)}Service"
                ctor.append(f"        _{var} = {var};")
            ctor.append("    }")
            members.append(fields + [""] + ctor)
        for service, models in bindings:
            for model in models:
                members.append([
                    f'    [HttpGet("{naming.file_stem(model.name)}s")]',
                    f"    public async Task<IActionResult> Get{model.name}s()",
                    "    {",
                    f"        var data = await _{naming.lower_first(service.name)}Service"
                    f".GetAll{model.name}s();",
                    "        return Ok(data);",
                    "    }",
                ])
        for index, rule in enumerate(node.data.rules):
            ident = naming.rule_identifier(rule.name, index)
            members.append([
                f"    // Rule: {naming.comment_text(rule.name)}",
                f'    [HttpGet("{ident}")]',
                f"    public IActionResult {naming.upper_first(ident)}()",
                "    {",
                f"        // {naming.comment_text(rule.description)}",
                f'        return Ok(new {{ message = "Rule {naming.quote_text(rule.name)} executed" }});',
                "    }",
            ])
        _append_members(lines, members)
        lines.append("}")
        return join_lines(lines)

    def render_route(self, node: RouteNode, graph: Graph) -> str:
        controllers = self.connected_controllers(node, graph)
        lines = ["using Microsoft.AspNetCore.Mvc;", ""]
        lines.append(f"namespace {ROOT_NAMESPACE}.Routes;")
        lines.append("")
        if controllers:
            names = ", ".join(f"{c.name}Controller" for c in controllers)
            lines.append(f"// Controllers: {names}")
        lines.extend(["[ApiController]", f"public class {node.name}Routes : ControllerBase", "{"])
        members: list[list[str]] = []
        for index, endpoint in enumerate(node.data.endpoints):
            method = endpoint.method.value
            handler = naming.pascal_case(naming.endpoint_identifier(endpoint.name, method, index))
            path = naming.quote_text(self.endpoint_path(endpoint.path))
            members.append([
                f'    [{_HTTP_ATTRIBUTES[method]}("{path}")]',
                f"    public IActionResult {handler}()",
                "    {",
                f"        // Endpoint: {naming.comment_text(endpoint.name)}",
                f'        return Ok(new {{ message = "{naming.quote_text(endpoint.name)} endpoint" }});',
                "    }",
            ])
        _append_members(lines, members)
        lines.append("}")
        return join_lines(lines)


def _append_members(lines: list[str], members: list[list[str]]) -> None:
    for index, member in enumerate(members):
        if index:
            lines.append("")
        lines.extend(member)
