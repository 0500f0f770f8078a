"""Fixed token vocabularies used by property domains.

These sets define which values the validator accepts for enumerated
properties (operators, primitive type names, declaration keywords, regex
flags) and which operators the renderer separates with spaces.
"""
from __future__ import annotations

# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

DECLARATION_KINDS: frozenset[str] = frozenset({"const", "let", "var"})

# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

PRIMITIVE_TYPE_NAMES: frozenset[str] = frozenset({
    "string",
    "number",
    "boolean",
    "any",
    "unknown",
    "never",
    "void",
    "undefined",
    "null",
    "object",
    "symbol",
    "bigint",
})

# ---------------------------------------------------------------------------
# Binary operators
# ---------------------------------------------------------------------------

ARITHMETIC_OPERATORS: frozenset[str] = frozenset({"+", "-", "*", "/", "%", "**"})
SHIFT_OPERATORS: frozenset[str] = frozenset({"<<", ">>", ">>>"})
RELATIONAL_OPERATORS: frozenset[str] = frozenset({"<", ">", "<=", ">=", "instanceof", "in"})
EQUALITY_OPERATORS: frozenset[str] = frozenset({"==", "!=", "===", "!=="})
BITWISE_OPERATORS: frozenset[str] = frozenset({"&", "^", "|"})
LOGICAL_OPERATORS: frozenset[str] = frozenset({"&&", "||", "??"})
ASSIGNMENT_OPERATORS: frozenset[str] = frozenset({
    "=",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "**=",
    "<<=",
    ">>=",
    ">>>=",
    "&=",
    "^=",
    "|=",
    "&&=",
    "||=",
    "??=",
})
COMMA_OPERATOR = ","

BINARY_OPERATORS: frozenset[str] = (
    ARITHMETIC_OPERATORS
    | SHIFT_OPERATORS
    | RELATIONAL_OPERATORS
    | EQUALITY_OPERATORS
    | BITWISE_OPERATORS
    | LOGICAL_OPERATORS
    | ASSIGNMENT_OPERATORS
    | {COMMA_OPERATOR}
)

# Word operators need whitespace on both sides to stay separate tokens.
KEYWORD_OPERATORS: frozenset[str] = frozenset({"in", "instanceof"})

# Right-associative operators
RIGHT_ASSOCIATIVE_OPERATORS: frozenset[str] = ASSIGNMENT_OPERATORS | {"**"}

# ---------------------------------------------------------------------------
# Literals and bindings
# ---------------------------------------------------------------------------

REGEX_FLAGS: frozenset[str] = frozenset("dgimsuvy")

OBJECT_ELEM_MODES: frozenset[str] = frozenset({"initializer", "property", "rest"})
