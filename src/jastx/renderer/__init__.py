"""jastx Renderer module.

Exports the ``Renderer`` class, the ``render`` convenience function, the
renderer error type and the pure literal/pattern formatters.
"""
from __future__ import annotations

from jastx.renderer.errors import UnrenderableNodeError
from jastx.renderer.literals import (
    escape_template_part,
    format_bigint,
    format_boolean,
    format_doc_comment,
    format_number,
    format_property_key_text,
    format_regex,
    format_string,
    is_identifier_name,
)
from jastx.renderer.patterns import (
    format_array_literal,
    format_array_pattern,
    format_binding_default,
    format_declaration_list,
    format_declarator,
    format_object_literal,
    format_object_pattern,
    format_rest,
    join_elements,
)
from jastx.renderer.renderer import Renderer, render

__all__ = [
    "Renderer",
    "render",
    "UnrenderableNodeError",
    "escape_template_part",
    "format_bigint",
    "format_boolean",
    "format_doc_comment",
    "format_number",
    "format_property_key_text",
    "format_regex",
    "format_string",
    "is_identifier_name",
    "format_array_literal",
    "format_array_pattern",
    "format_binding_default",
    "format_declaration_list",
    "format_declarator",
    "format_object_literal",
    "format_object_pattern",
    "format_rest",
    "join_elements",
]
