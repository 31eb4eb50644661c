"""Arachnet -- backend project generation from architecture graphs.

A graph of typed components (models, services, controllers, routes, ...) is
turned into an OpenAPI descriptor plus a runnable project skeleton for one
of several backend stacks.
"""

__version__ = "1.0.0"

from arachnet.assembler import AssemblyError, flatten, serialize, write_tree
from arachnet.config import GeneratorConfig
from arachnet.descriptor import Descriptor, build_descriptor, normalize_path
from arachnet.generator import GeneratedArchive, ProjectGenerator
from arachnet.graph import Graph, NodeKind, neighbors
from arachnet.scaffolder import FileTree, Target, UnsupportedTargetError, get_emitter

__all__ = [
    "AssemblyError",
    "Descriptor",
    "FileTree",
    "GeneratedArchive",
    "GeneratorConfig",
    "Graph",
    "NodeKind",
    "ProjectGenerator",
    "Target",
    "UnsupportedTargetError",
    "__version__",
    "build_descriptor",
    "flatten",
    "get_emitter",
    "neighbors",
    "normalize_path",
    "serialize",
    "write_tree",
]
