"""Target emitters, one module per backend stack."""

from arachnet.scaffolder.targets.csharp import CSharpEmitter
from arachnet.scaffolder.targets.go import GoEmitter
from arachnet.scaffolder.targets.java import JavaEmitter
from arachnet.scaffolder.targets.node import NodeEmitter
from arachnet.scaffolder.targets.python import PythonEmitter

__all__ = [
    "CSharpEmitter",
    "GoEmitter",
    "JavaEmitter",
    "NodeEmitter",
    "PythonEmitter",
]
