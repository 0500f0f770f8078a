"""jastx taxonomy module.

Exports the closed ``Kind``/``Family`` enumerations, the family and
composite kind sets, and the membership predicates.
"""
from __future__ import annotations

from jastx.taxonomy.kinds import (
    ALL_TYPE_KINDS,
    ANY_TYPE_OR_VALUE_KINDS,
    BINARY_EXPRESSION_KINDS,
    BINDING_TARGET_KINDS,
    BLOCK_STATEMENT_KINDS,
    EXPRESSION_KINDS,
    EXPRESSION_OR_LITERAL_KINDS,
    LITERAL_KINDS,
    LITERAL_PRIMITIVE_KINDS,
    OBJECT_MEMBER_KINDS,
    PASSTHROUGH_KINDS,
    PROPERTY_KEY_KINDS,
    STANDALONE_EXPRESSION_KINDS,
    TYPE_KINDS,
    UNARY_EXPRESSION_KINDS,
    VALUE_KINDS,
    Family,
    Kind,
    is_binary_expression,
    is_expression,
    is_literal,
    is_passthrough,
    is_standalone_expression,
    is_type_kind,
    is_unary_expression,
    is_value_kind,
    kinds_in,
)

__all__ = [
    # Enumerations
    "Kind",
    "Family",
    "kinds_in",
    # Family sets
    "LITERAL_KINDS",
    "LITERAL_PRIMITIVE_KINDS",
    "OBJECT_MEMBER_KINDS",
    "STANDALONE_EXPRESSION_KINDS",
    "BINARY_EXPRESSION_KINDS",
    "UNARY_EXPRESSION_KINDS",
    "TYPE_KINDS",
    "ALL_TYPE_KINDS",
    "PASSTHROUGH_KINDS",
    # Composite sets
    "EXPRESSION_KINDS",
    "EXPRESSION_OR_LITERAL_KINDS",
    "VALUE_KINDS",
    "ANY_TYPE_OR_VALUE_KINDS",
    "BLOCK_STATEMENT_KINDS",
    "BINDING_TARGET_KINDS",
    "PROPERTY_KEY_KINDS",
    # Predicates
    "is_literal",
    "is_binary_expression",
    "is_standalone_expression",
    "is_unary_expression",
    "is_expression",
    "is_type_kind",
    "is_value_kind",
    "is_passthrough",
]
