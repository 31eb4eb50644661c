"""Target selection.

Maps each supported target stack to its emitter class.  An unknown selector
is reported as an error instead of producing an empty project.
"""

from __future__ import annotations

from enum import Enum

from ..config import GeneratorConfig
from .base import TargetEmitter
from .targets import CSharpEmitter, GoEmitter, JavaEmitter, NodeEmitter, PythonEmitter
from .templates import TemplateRenderer


class Target(str, Enum):
    """Supported backend stacks."""
    NODE = "node"
    PYTHON = "python"
    GO = "go"
    JAVA = "java"
    CSHARP = "csharp"


class UnsupportedTargetError(ValueError):
    """Raised when a target selector names no registered emitter."""

    def __init__(self, target: object) -> None:
        self.target = target
        supported = ", ".join(t.value for t in Target)
        super().__init__(f"Unsupported target {target!r} (expected one of: {supported})")


EMITTERS: dict[Target, type[TargetEmitter]] = {
    Target.NODE: NodeEmitter,
    Target.PYTHON: PythonEmitter,
    Target.GO: GoEmitter,
    Target.JAVA: JavaEmitter,
    Target.CSHARP: CSharpEmitter,
}


def resolve_target(target: Target | str) -> Target:
    """Normalise a target selector, e.g. ``"Go"`` -> ``Target.GO``."""
    if isinstance(target, Target):
        return target
    try:
        return Target(str(target).strip().lower())
    except ValueError:
        raise UnsupportedTargetError(target) from None


def get_emitter(
    target: Target | str,
    config: GeneratorConfig | None = None,
    renderer: TemplateRenderer | None = None,
) -> TargetEmitter:
    """Instantiate the emitter registered for *target*.

    Raises:
        UnsupportedTargetError: If *target* is not a supported stack.
    """
    emitter_cls = EMITTERS.get(resolve_target(target))
    if emitter_cls is None:
        raise UnsupportedTargetError(target)
    return emitter_cls(config=config, renderer=renderer)
