"""Closed taxonomy of jastx node kinds.

Every node carries a ``Kind``.  Kinds are grouped into ``Family`` values so
that the validator and renderer can select a strategy by family instead of
switching on every individual kind.  The taxonomy is closed: adding a kind
means adding an enum member here, a shape in ``jastx.validator.shapes`` and a
renderer method in ``jastx.renderer.renderer``.  ``tests/unit/test_taxonomy``
checks that all three stay in step.

Kind values use the prefixed spelling of the element vocabulary::

    l:string   expr:as   t:primitive   bind:object   var:declaration-list
"""
from __future__ import annotations

from enum import Enum


class Family(Enum):
    """Kind families, used for exhaustive classification."""

    LITERAL = "literal"
    OBJECT_MEMBER = "object-member"
    STANDALONE_EXPRESSION = "standalone-expression"
    BINARY_EXPRESSION = "binary-expression"
    UNARY_EXPRESSION = "unary-expression"
    TYPE = "type"
    PASSTHROUGH = "passthrough"
    STRUCTURAL = "structural"


class Kind(Enum):
    """Every node kind the tree model can carry."""

    # Literals
    L_BOOLEAN = "l:boolean"
    L_NUMBER = "l:number"
    L_STRING = "l:string"
    L_REGEX = "l:regex"
    L_BIGINT = "l:bigint"
    L_OBJECT = "l:object"
    L_ARRAY = "l:array"

    # Object literal members
    L_OBJECT_PROP = "l:object-prop"
    L_OBJECT_GETTER = "l:object-getter"
    L_OBJECT_SETTER = "l:object-setter"

    # Standalone expressions
    EXPR_TEMPLATE = "expr:template"
    EXPR_FUNCTION = "expr:function"
    EXPR_STATEMENT = "expr:statement"
    EXPR_PARENS = "expr:parens"
    EXPR_PROP_ACCESS = "expr:prop-access"
    EXPR_ELEM_ACCESS = "expr:elem-access"
    EXPR_COND = "expr:cond"

    # Binary expressions
    EXPR_AS = "expr:as"
    EXPR_BINARY = "expr:binary"

    # Unary expressions
    EXPR_NOT = "expr:not"
    EXPR_AWAIT = "expr:await"
    EXPR_TYPEOF = "expr:typeof"
    EXPR_CALL = "expr:call"
    EXPR_NON_NULL = "expr:non-null"
    EXPR_YIELD = "expr:yield"

    # Types
    T_PRIMITIVE = "t:primitive"
    T_REF = "t:ref"
    T_COND = "t:cond"
    T_INDEXED = "t:indexed"
    T_PARAM = "t:param"
    T_PREDICATE = "t:predicate"

    # Passthrough wrappers
    P_VAR_NAME = "p:var-name"
    P_FUN_NAME = "p:fun-name"
    P_TYPE = "p:type"

    # Structural
    IDENT = "ident"
    TEXT = "text"
    BLOCK = "block"
    ARROW_FUNCTION = "arrow-function"
    FUNCTION_DECLARATION = "function-declaration"
    IF_STATEMENT = "if-statement"
    PARAM = "param"
    VAR_STATEMENT = "var:statement"
    VAR_DECLARATION = "var:declaration"
    VAR_DECLARATION_LIST = "var:declaration-list"
    VAR_DECLARATION_NAME = "var:declaration-name"
    BIND_OBJECT = "bind:object"
    BIND_OBJECT_ELEM = "bind:object-elem"
    BIND_ARRAY = "bind:array"
    BIND_ARRAY_ELEM = "bind:array-elem"
    EXACT_LITERAL = "exact-literal"

    def __str__(self) -> str:
        return self.value

    @property
    def family(self) -> Family:
        """Return the family this kind belongs to."""
        return _FAMILY_OF[self]

    @classmethod
    def parse(cls, value: "Kind | str") -> "Kind":
        """Coerce a tag string (``"l:string"``) or ``Kind`` to a ``Kind``.

        Raises
        ------
        ValueError
            If ``value`` is not a known kind tag.
        """
        if isinstance(value, Kind):
            return value
        return cls(value)


# ---------------------------------------------------------------------------
# Family sets
# ---------------------------------------------------------------------------

LITERAL_PRIMITIVE_KINDS: frozenset[Kind] = frozenset({
    Kind.L_BOOLEAN,
    Kind.L_NUMBER,
    Kind.L_STRING,
    Kind.L_BIGINT,
})

LITERAL_KINDS: frozenset[Kind] = LITERAL_PRIMITIVE_KINDS | {
    Kind.L_REGEX,
    Kind.L_OBJECT,
    Kind.L_ARRAY,
}

OBJECT_MEMBER_KINDS: frozenset[Kind] = frozenset({
    Kind.L_OBJECT_PROP,
    Kind.L_OBJECT_GETTER,
    Kind.L_OBJECT_SETTER,
})

STANDALONE_EXPRESSION_KINDS: frozenset[Kind] = frozenset({
    Kind.EXPR_TEMPLATE,
    Kind.EXPR_FUNCTION,
    Kind.EXPR_STATEMENT,
    Kind.EXPR_PARENS,
    Kind.EXPR_PROP_ACCESS,
    Kind.EXPR_ELEM_ACCESS,
    Kind.EXPR_COND,
})

BINARY_EXPRESSION_KINDS: frozenset[Kind] = frozenset({
    Kind.EXPR_AS,
    Kind.EXPR_BINARY,
})

UNARY_EXPRESSION_KINDS: frozenset[Kind] = frozenset({
    Kind.EXPR_NOT,
    Kind.EXPR_AWAIT,
    Kind.EXPR_TYPEOF,
    Kind.EXPR_CALL,
    Kind.EXPR_NON_NULL,
    Kind.EXPR_YIELD,
})

# t:param and t:predicate only appear in function signatures, so they are
# not part of the general type positions.
TYPE_KINDS: frozenset[Kind] = frozenset({
    Kind.T_PRIMITIVE,
    Kind.T_REF,
    Kind.T_COND,
    Kind.T_INDEXED,
})

ALL_TYPE_KINDS: frozenset[Kind] = TYPE_KINDS | {Kind.T_PARAM, Kind.T_PREDICATE}

PASSTHROUGH_KINDS: frozenset[Kind] = frozenset({
    Kind.P_VAR_NAME,
    Kind.P_FUN_NAME,
    Kind.P_TYPE,
})

# ---------------------------------------------------------------------------
# Composite sets
# ---------------------------------------------------------------------------

EXPRESSION_KINDS: frozenset[Kind] = (
    STANDALONE_EXPRESSION_KINDS | BINARY_EXPRESSION_KINDS | UNARY_EXPRESSION_KINDS
)

# expr:statement is classified as an expression but only appears where
# statements go, never in value positions.
EXPRESSION_OR_LITERAL_KINDS: frozenset[Kind] = (
    EXPRESSION_KINDS - {Kind.EXPR_STATEMENT}
) | LITERAL_KINDS

VALUE_KINDS: frozenset[Kind] = EXPRESSION_OR_LITERAL_KINDS | {
    Kind.IDENT,
    Kind.ARROW_FUNCTION,
    Kind.EXACT_LITERAL,
}

ANY_TYPE_OR_VALUE_KINDS: frozenset[Kind] = EXPRESSION_OR_LITERAL_KINDS | TYPE_KINDS

BLOCK_STATEMENT_KINDS: frozenset[Kind] = frozenset({
    Kind.VAR_STATEMENT,
    Kind.FUNCTION_DECLARATION,
    Kind.IF_STATEMENT,
    Kind.EXPR_STATEMENT,
    Kind.BLOCK,
    Kind.EXACT_LITERAL,
})

BINDING_TARGET_KINDS: frozenset[Kind] = frozenset({
    Kind.IDENT,
    Kind.BIND_OBJECT,
    Kind.BIND_ARRAY,
})

PROPERTY_KEY_KINDS: frozenset[Kind] = frozenset({
    Kind.IDENT,
    Kind.L_STRING,
    Kind.L_NUMBER,
})

_FAMILY_MEMBERS: dict[Family, frozenset[Kind]] = {
    Family.LITERAL: LITERAL_KINDS,
    Family.OBJECT_MEMBER: OBJECT_MEMBER_KINDS,
    Family.STANDALONE_EXPRESSION: STANDALONE_EXPRESSION_KINDS,
    Family.BINARY_EXPRESSION: BINARY_EXPRESSION_KINDS,
    Family.UNARY_EXPRESSION: UNARY_EXPRESSION_KINDS,
    Family.TYPE: ALL_TYPE_KINDS,
    Family.PASSTHROUGH: PASSTHROUGH_KINDS,
}

_FAMILY_OF: dict[Kind, Family] = {
    kind: family for family, members in _FAMILY_MEMBERS.items() for kind in members
}
for _kind in Kind:
    _FAMILY_OF.setdefault(_kind, Family.STRUCTURAL)


def kinds_in(family: Family) -> frozenset[Kind]:
    """Return every kind belonging to ``family``."""
    return frozenset(k for k in Kind if k.family is family)


# ---------------------------------------------------------------------------
# Membership predicates
# ---------------------------------------------------------------------------


def is_literal(kind: Kind) -> bool:
    return kind.family is Family.LITERAL


def is_binary_expression(kind: Kind) -> bool:
    return kind.family is Family.BINARY_EXPRESSION


def is_standalone_expression(kind: Kind) -> bool:
    return kind.family is Family.STANDALONE_EXPRESSION


def is_unary_expression(kind: Kind) -> bool:
    return kind.family is Family.UNARY_EXPRESSION


def is_expression(kind: Kind) -> bool:
    return kind in EXPRESSION_KINDS


def is_type_kind(kind: Kind) -> bool:
    """Return True for kinds admissible in general type positions."""
    return kind in TYPE_KINDS


def is_value_kind(kind: Kind) -> bool:
    """Return True for any value-producing kind."""
    return kind in VALUE_KINDS


def is_passthrough(kind: Kind) -> bool:
    return kind.family is Family.PASSTHROUGH
