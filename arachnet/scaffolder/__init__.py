"""Arachnet scaffolder -- turns an architecture graph into project files.

Each supported backend stack has a ``TargetEmitter`` that writes a complete
project (descriptor, manifest, entrypoint, one file per component, Docker
files, README) into an in-memory ``FileTree``.

Quick usage::

    from arachnet.scaffolder import FileTree, get_emitter

    tree = FileTree()
    get_emitter("go").emit(tree, graph)
    print(tree.read("main.go"))
"""

from arachnet.scaffolder.base import TargetEmitter
from arachnet.scaffolder.registry import (
    EMITTERS,
    Target,
    UnsupportedTargetError,
    get_emitter,
    resolve_target,
)
from arachnet.scaffolder.templates import TemplateRenderer
from arachnet.scaffolder.tree import Directory, File, FileTree

__all__ = [
    "EMITTERS",
    "Directory",
    "File",
    "FileTree",
    "Target",
    "TargetEmitter",
    "TemplateRenderer",
    "UnsupportedTargetError",
    "get_emitter",
    "resolve_target",
]
