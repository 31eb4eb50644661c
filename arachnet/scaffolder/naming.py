"""Identifier and file-name helpers shared by every target emitter."""

from __future__ import annotations

import re


def upper_first(value: str) -> str:
    """Capitalize the first character only (``email`` -> ``Email``)."""
    return value[:1].upper() + value[1:]


def lower_first(value: str) -> str:
    """Lowercase the first character only (``AuthService`` -> ``authService``)."""
    return value[:1].lower() + value[1:]


def slugify(value: str) -> str:
    """Convert text to a URL/filename-safe slug (hyphenated)."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


def pascal_case(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``.

    Words that are already mixed-case keep their inner capitals, so
    ``handleRegister`` becomes ``HandleRegister``.
    """
    parts = re.split(r"[-_\s]+", value)
    return "".join(upper_first(word) for word in parts if word)


def camel_case(value: str) -> str:
    """Convert ``some-thing`` or ``SomeThing`` to ``someThing``."""
    return lower_first(pascal_case(value))


def snake_case(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    s3 = re.sub(r"[-\s]+", "_", s2).lower()
    return re.sub(r"_+", "_", s3).strip("_")


def identifier(value: str) -> str:
    """Drop every character that cannot appear in an identifier.

    ``'Admin/../User'`` -> ``'AdminUser'``, ``'Create Order'`` -> ``'CreateOrder'``.
    """
    return re.sub(r"\W+", "", value)


def file_stem(name: str) -> str:
    """Lowercased identifier used for generated file names.

    Path separators and dots never survive, so a stem is always a single
    path segment.
    """
    return identifier(name).lower()


def rule_identifier(rule_name: str, index: int = 0) -> str:
    """Identifier for a rule stub method.

    Rules whose name has no usable identifier get ``rule<index>``.
    """
    ident = identifier(rule_name)
    if not ident or ident[0].isdigit():
        ident = f"rule{index}"
    return ident


def endpoint_identifier(name: str, method: str, index: int) -> str:
    """Identifier for an endpoint handler.

    Unnamed endpoints get ``<method>Endpoint<index>`` so handlers stay unique
    within one route file.
    """
    ident = identifier(name)
    if not ident or ident[0].isdigit():
        ident = f"{method.lower()}Endpoint{index}"
    return ident


# ---------------------------------------------------------------------------
# Free text inside generated source
# ---------------------------------------------------------------------------


def comment_text(value: str) -> str:
    """Collapse *value* onto one line so it can follow a line-comment marker."""
    return " ".join(value.split())


def quote_text(value: str, quote: str = '"') -> str:
    """Escape *value* for a single-line string literal delimited by *quote*.

    Backslashes and the delimiter are backslash-escaped, which every target
    language accepts.
    """
    escaped = comment_text(value).replace("\\", "\\\\")
    return escaped.replace(quote, "\\" + quote)
