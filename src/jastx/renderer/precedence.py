"""Operator precedence and parenthesization decisions.

Precedence levels (higher binds tighter)::

    20  primary (identifiers, literals, parens, templates, functions)
    19  member access, calls, non-null assertion
    15  prefix unary (!, typeof, await) and negative numeric literals
    14  **
    13  * / %
    12  + -
    11  << >> >>>
    10  < > <= >= in instanceof, as
     9  == != === !==
     8  &
     7  ^
     6  |
     5  &&
     4  || ??
     3  conditional
     2  yield, arrow functions, assignment
     1  comma
"""
from __future__ import annotations

import math

from jastx.ast.nodes import Node
from jastx.taxonomy.kinds import BINARY_EXPRESSION_KINDS, Kind
from jastx.taxonomy.vocabulary import (
    ASSIGNMENT_OPERATORS,
    COMMA_OPERATOR,
    RIGHT_ASSOCIATIVE_OPERATORS,
)

PRIMARY = 20
MEMBER = 19
PREFIX = 15
AS = 10
CONDITIONAL = 3
ASSIGNMENT = 2
COMMA = 1

BINARY_PRECEDENCE: dict[str, int] = {
    "**": 14,
    "*": 13,
    "/": 13,
    "%": 13,
    "+": 12,
    "-": 12,
    "<<": 11,
    ">>": 11,
    ">>>": 11,
    "<": 10,
    ">": 10,
    "<=": 10,
    ">=": 10,
    "in": 10,
    "instanceof": 10,
    "==": 9,
    "!=": 9,
    "===": 9,
    "!==": 9,
    "&": 8,
    "^": 7,
    "|": 6,
    "&&": 5,
    "||": 4,
    "??": 4,
    **{op: ASSIGNMENT for op in ASSIGNMENT_OPERATORS},
    COMMA_OPERATOR: COMMA,
}

_KIND_PRECEDENCE: dict[Kind, int] = {
    Kind.EXPR_AS: AS,
    Kind.EXPR_COND: CONDITIONAL,
    Kind.EXPR_YIELD: ASSIGNMENT,
    Kind.ARROW_FUNCTION: ASSIGNMENT,
    Kind.EXPR_NOT: PREFIX,
    Kind.EXPR_TYPEOF: PREFIX,
    Kind.EXPR_AWAIT: PREFIX,
    Kind.EXPR_PROP_ACCESS: MEMBER,
    Kind.EXPR_ELEM_ACCESS: MEMBER,
    Kind.EXPR_CALL: MEMBER,
    Kind.EXPR_NON_NULL: MEMBER,
}


def _is_negative_number(node: Node) -> bool:
    if node.kind not in (Kind.L_NUMBER, Kind.L_BIGINT):
        return False
    value = node.props["value"]
    if isinstance(value, float) and not math.isnan(value):
        return math.copysign(1.0, value) < 0
    return value < 0


def precedence_of(node: Node) -> int:
    """Return the precedence level of the expression ``node`` renders as."""
    if node.kind is Kind.EXPR_BINARY:
        return BINARY_PRECEDENCE[node.props["operator"]]
    if _is_negative_number(node):
        return PREFIX
    return _KIND_PRECEDENCE.get(node.kind, PRIMARY)


def is_binary_family(node: Node) -> bool:
    return node.kind in BINARY_EXPRESSION_KINDS


def is_prefix_unary(node: Node) -> bool:
    return precedence_of(node) == PREFIX


def is_comma_expression(node: Node) -> bool:
    return node.kind is Kind.EXPR_BINARY and node.props["operator"] == COMMA_OPERATOR


def needs_parens_in_binary(child: Node, operator: str, side: str) -> bool:
    """Decide whether an operand of a binary operator needs parentheses.

    Nested binary-family operands are always parenthesized.  Other operands
    are parenthesized when they bind looser than the operator, or equally
    tight on the side the operator does not associate toward.  A
    prefix-unary left operand of ``**`` is always parenthesized.
    """
    if is_binary_family(child):
        return True
    parent = BINARY_PRECEDENCE[operator]
    child_prec = precedence_of(child)
    if operator == "**" and side == "left" and child_prec == PREFIX:
        return True
    if child_prec != parent:
        return child_prec < parent
    if operator in RIGHT_ASSOCIATIVE_OPERATORS:
        return side == "left"
    return side == "right"


def needs_parens_in_conditional(child: Node) -> bool:
    return is_binary_family(child) or precedence_of(child) <= CONDITIONAL


def needs_parens_as_operand(child: Node, minimum: int) -> bool:
    """Operands of prefix/postfix and member positions bind at ``minimum``."""
    return precedence_of(child) < minimum


def needs_parens_as_member_object(child: Node) -> bool:
    """``(1).x`` needs parentheses so the dot is not read as a decimal point."""
    if needs_parens_as_operand(child, MEMBER):
        return True
    return child.kind is Kind.L_NUMBER and _is_plain_integer(child.props["value"])


def _is_plain_integer(value: int | float) -> bool:
    if isinstance(value, int):
        return value >= 0
    return math.isfinite(value) and value >= 0 and value.is_integer() and value < 1e21
