"""Per-kind structural shapes.

Each ``Kind`` maps to exactly one ``Shape``: the properties it accepts and
an ordered table of child slots.  Slots are matched greedily from left to
right; every slot consumes up to ``max`` consecutive children whose kind is
admissible for it.  Adjacent optional slots never share an admissible kind,
which keeps the greedy match unambiguous.

Slot notation in the comments below follows ``name: kinds [min..max]``.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from jastx.taxonomy.kinds import (
    BINDING_TARGET_KINDS,
    BLOCK_STATEMENT_KINDS,
    OBJECT_MEMBER_KINDS,
    PROPERTY_KEY_KINDS,
    TYPE_KINDS,
    VALUE_KINDS,
    Kind,
)
from jastx.taxonomy.vocabulary import (
    BINARY_OPERATORS,
    DECLARATION_KINDS,
    OBJECT_ELEM_MODES,
    PRIMITIVE_TYPE_NAMES,
)


@dataclass(frozen=True, slots=True)
class PropSpec:
    """Accepted type and domain of one property.

    Parameters
    ----------
    types:
        Accepted Python types.  ``bool`` is only accepted when listed
        explicitly, even though it subclasses ``int``.
    required:
        Whether the property must be present.
    choices:
        When set, the closed set of accepted values.
    """

    types: tuple[type, ...]
    required: bool = False
    choices: frozenset[str] | None = None


@dataclass(frozen=True, slots=True)
class Slot:
    """One ordered child position (or run of positions)."""

    name: str
    kinds: frozenset[Kind]
    min: int = 1
    max: int | None = 1

    @property
    def is_optional(self) -> bool:
        return self.min == 0


@dataclass(frozen=True)
class Shape:
    """Admissible properties and children for one kind."""

    props: dict[str, PropSpec] = field(default_factory=dict)
    slots: tuple[Slot, ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.slots


def _one(name: str, kinds: frozenset[Kind] | set[Kind]) -> Slot:
    return Slot(name, frozenset(kinds), 1, 1)


def _optional(name: str, kinds: frozenset[Kind] | set[Kind]) -> Slot:
    return Slot(name, frozenset(kinds), 0, 1)


def _many(name: str, kinds: frozenset[Kind] | set[Kind], minimum: int = 0) -> Slot:
    return Slot(name, frozenset(kinds), minimum, None)


_FLAG = PropSpec((bool,))
_STR_REQUIRED = PropSpec((str,), required=True)

_RETURN_TYPE_KINDS = TYPE_KINDS | {Kind.T_PREDICATE}
_FUNCTION_NAME_KINDS = frozenset({Kind.IDENT, Kind.P_FUN_NAME})
_DECLARATION_TARGET_KINDS = BINDING_TARGET_KINDS | {Kind.VAR_DECLARATION_NAME, Kind.P_VAR_NAME}
_PATTERN_KINDS = frozenset({Kind.BIND_OBJECT, Kind.BIND_ARRAY})


SHAPES: dict[Kind, Shape] = {
    # -----------------------------------------------------------------
    # Leaves
    # -----------------------------------------------------------------
    Kind.IDENT: Shape(props={"name": _STR_REQUIRED}),
    Kind.TEXT: Shape(props={"value": _STR_REQUIRED}),
    Kind.EXACT_LITERAL: Shape(props={"value": _STR_REQUIRED}),
    # -----------------------------------------------------------------
    # Literals
    # -----------------------------------------------------------------
    Kind.L_BOOLEAN: Shape(props={"value": PropSpec((bool,), required=True)}),
    Kind.L_NUMBER: Shape(props={"value": PropSpec((int, float), required=True)}),
    Kind.L_STRING: Shape(props={"value": _STR_REQUIRED}),
    Kind.L_REGEX: Shape(props={"pattern": _STR_REQUIRED, "flags": PropSpec((str,))}),
    Kind.L_BIGINT: Shape(props={"value": PropSpec((int,), required=True)}),
    Kind.L_OBJECT: Shape(slots=(_many("members", OBJECT_MEMBER_KINDS),)),
    Kind.L_ARRAY: Shape(slots=(_many("elements", VALUE_KINDS),)),
    # key: KEY [1], value: VALUE [0..1]
    Kind.L_OBJECT_PROP: Shape(
        slots=(_one("key", PROPERTY_KEY_KINDS), _optional("value", VALUE_KINDS)),
    ),
    # key: KEY [1], return: TYPE [0..1], body: block [1]
    Kind.L_OBJECT_GETTER: Shape(
        slots=(
            _one("key", PROPERTY_KEY_KINDS),
            _optional("return", TYPE_KINDS),
            _one("body", {Kind.BLOCK}),
        ),
    ),
    # key: KEY [1], param: param [1], body: block [1]
    Kind.L_OBJECT_SETTER: Shape(
        slots=(
            _one("key", PROPERTY_KEY_KINDS),
            _one("param", {Kind.PARAM}),
            _one("body", {Kind.BLOCK}),
        ),
    ),
    # -----------------------------------------------------------------
    # Standalone expressions
    # -----------------------------------------------------------------
    Kind.EXPR_TEMPLATE: Shape(
        props={"parts": PropSpec((tuple,), required=True)},
        slots=(_many("expressions", VALUE_KINDS),),
    ),
    Kind.EXPR_FUNCTION: Shape(
        props={"is_async": _FLAG, "generator": _FLAG},
        slots=(
            _optional("name", _FUNCTION_NAME_KINDS),
            _many("type_params", {Kind.T_PARAM}),
            _many("params", {Kind.PARAM}),
            _optional("return", _RETURN_TYPE_KINDS),
            _one("body", {Kind.BLOCK}),
        ),
    ),
    Kind.EXPR_STATEMENT: Shape(slots=(_one("expression", VALUE_KINDS),)),
    Kind.EXPR_PARENS: Shape(slots=(_one("expression", VALUE_KINDS),)),
    Kind.EXPR_PROP_ACCESS: Shape(
        props={"optional": _FLAG},
        slots=(_one("object", VALUE_KINDS), _one("property", {Kind.IDENT})),
    ),
    Kind.EXPR_ELEM_ACCESS: Shape(
        props={"optional": _FLAG},
        slots=(_one("object", VALUE_KINDS), _one("index", VALUE_KINDS)),
    ),
    Kind.EXPR_COND: Shape(
        slots=(
            _one("test", VALUE_KINDS),
            _one("consequent", VALUE_KINDS),
            _one("alternate", VALUE_KINDS),
        ),
    ),
    # -----------------------------------------------------------------
    # Binary expressions
    # -----------------------------------------------------------------
    Kind.EXPR_AS: Shape(slots=(_one("expression", VALUE_KINDS), _one("type", TYPE_KINDS))),
    Kind.EXPR_BINARY: Shape(
        props={"operator": PropSpec((str,), required=True, choices=BINARY_OPERATORS)},
        slots=(_one("left", VALUE_KINDS), _one("right", VALUE_KINDS)),
    ),
    # -----------------------------------------------------------------
    # Unary expressions
    # -----------------------------------------------------------------
    Kind.EXPR_NOT: Shape(slots=(_one("operand", VALUE_KINDS),)),
    Kind.EXPR_AWAIT: Shape(slots=(_one("operand", VALUE_KINDS),)),
    Kind.EXPR_TYPEOF: Shape(slots=(_one("operand", VALUE_KINDS),)),
    Kind.EXPR_NON_NULL: Shape(slots=(_one("operand", VALUE_KINDS),)),
    # callee: VALUE [1], type_args: TYPE [0..n], arguments: VALUE [0..n]
    Kind.EXPR_CALL: Shape(
        props={"optional": _FLAG},
        slots=(
            _one("callee", VALUE_KINDS),
            _many("type_args", TYPE_KINDS),
            _many("arguments", VALUE_KINDS),
        ),
    ),
    Kind.EXPR_YIELD: Shape(
        props={"delegate": _FLAG},
        slots=(_optional("operand", VALUE_KINDS),),
    ),
    # -----------------------------------------------------------------
    # Types
    # -----------------------------------------------------------------
    Kind.T_PRIMITIVE: Shape(
        props={"name": PropSpec((str,), required=True, choices=PRIMITIVE_TYPE_NAMES)},
    ),
    Kind.T_REF: Shape(
        slots=(_many("name", {Kind.IDENT}, minimum=1), _many("type_args", TYPE_KINDS)),
    ),
    Kind.T_COND: Shape(
        slots=(
            _one("check", TYPE_KINDS),
            _one("extends", TYPE_KINDS),
            _one("true", TYPE_KINDS),
            _one("false", TYPE_KINDS),
        ),
    ),
    Kind.T_INDEXED: Shape(slots=(_one("object", TYPE_KINDS), _one("index", TYPE_KINDS))),
    # name: ident [1], constraint: TYPE [0..1], default: p:type [0..1]
    Kind.T_PARAM: Shape(
        slots=(
            _one("name", {Kind.IDENT}),
            _optional("constraint", TYPE_KINDS),
            _optional("default", {Kind.P_TYPE}),
        ),
    ),
    Kind.T_PREDICATE: Shape(
        props={"asserts": _FLAG},
        slots=(_one("parameter", {Kind.IDENT}), _optional("type", TYPE_KINDS)),
    ),
    # -----------------------------------------------------------------
    # Passthrough
    # -----------------------------------------------------------------
    Kind.P_VAR_NAME: Shape(slots=(_one("name", {Kind.IDENT}),)),
    Kind.P_FUN_NAME: Shape(slots=(_one("name", {Kind.IDENT}),)),
    Kind.P_TYPE: Shape(slots=(_one("type", TYPE_KINDS),)),
    # -----------------------------------------------------------------
    # Functions and statements
    # -----------------------------------------------------------------
    Kind.BLOCK: Shape(slots=(_many("statements", BLOCK_STATEMENT_KINDS),)),
    Kind.ARROW_FUNCTION: Shape(
        props={"is_async": _FLAG},
        slots=(
            _many("type_params", {Kind.T_PARAM}),
            _many("params", {Kind.PARAM}),
            _optional("return", _RETURN_TYPE_KINDS),
            _one("body", VALUE_KINDS | {Kind.BLOCK}),
        ),
    ),
    Kind.FUNCTION_DECLARATION: Shape(
        props={"is_async": _FLAG, "generator": _FLAG},
        slots=(
            _one("name", _FUNCTION_NAME_KINDS),
            _many("type_params", {Kind.T_PARAM}),
            _many("params", {Kind.PARAM}),
            _optional("return", _RETURN_TYPE_KINDS),
            _one("body", {Kind.BLOCK}),
        ),
    ),
    Kind.IF_STATEMENT: Shape(
        slots=(
            _one("test", VALUE_KINDS),
            _one("consequent", BLOCK_STATEMENT_KINDS),
            _optional("alternate", BLOCK_STATEMENT_KINDS),
        ),
    ),
    Kind.PARAM: Shape(
        props={"rest": _FLAG, "optional": _FLAG},
        slots=(
            _one("target", BINDING_TARGET_KINDS),
            _optional("type", TYPE_KINDS),
            _optional("default", VALUE_KINDS),
        ),
    ),
    # -----------------------------------------------------------------
    # Declarations
    # -----------------------------------------------------------------
    Kind.VAR_STATEMENT: Shape(slots=(_one("list", {Kind.VAR_DECLARATION_LIST}),)),
    # target: TARGET [1], type: TYPE [0..1], initializer: VALUE [0..1]
    Kind.VAR_DECLARATION: Shape(
        slots=(
            _one("target", _DECLARATION_TARGET_KINDS),
            _optional("type", TYPE_KINDS),
            _optional("initializer", VALUE_KINDS),
        ),
    ),
    Kind.VAR_DECLARATION_LIST: Shape(
        props={
            "declaration_kind": PropSpec((str,), required=True, choices=DECLARATION_KINDS),
        },
        slots=(_many("declarations", {Kind.VAR_DECLARATION}, minimum=1),),
    ),
    Kind.VAR_DECLARATION_NAME: Shape(slots=(_one("name", {Kind.IDENT}),)),
    # -----------------------------------------------------------------
    # Binding patterns
    # -----------------------------------------------------------------
    Kind.BIND_OBJECT: Shape(
        slots=(_many("elements", {Kind.IDENT, Kind.BIND_OBJECT_ELEM}),),
    ),
    # name: KEY [1], value: VALUE | pattern [0..1], default: VALUE [0..1]
    # The mode decides whether "value" is a binding target or a default.
    Kind.BIND_OBJECT_ELEM: Shape(
        props={"mode": PropSpec((str,), choices=OBJECT_ELEM_MODES)},
        slots=(
            _one("name", PROPERTY_KEY_KINDS),
            _optional("value", VALUE_KINDS | _PATTERN_KINDS),
            _optional("default", VALUE_KINDS),
        ),
    ),
    Kind.BIND_ARRAY: Shape(
        slots=(
            _many(
                "elements",
                {Kind.IDENT, Kind.BIND_ARRAY_ELEM, Kind.BIND_OBJECT, Kind.BIND_ARRAY},
            ),
        ),
    ),
    Kind.BIND_ARRAY_ELEM: Shape(
        props={"rest": _FLAG},
        slots=(_one("target", BINDING_TARGET_KINDS), _optional("default", VALUE_KINDS)),
    ),
}


def shape_of(kind: Kind) -> Shape:
    """Return the shape registered for ``kind``."""
    return SHAPES[kind]


def object_elem_mode(mode: object, child_kinds: list[Kind]) -> str:
    """Resolve the effective mode of a ``bind:object-elem``.

    An explicit ``mode`` property wins.  Otherwise a lone name is
    ``"plain"``, a nested pattern or a third child means ``"property"``,
    and any other second child is a default (``"initializer"``).  Renaming
    to a plain identifier (``{a:b}``) therefore needs ``mode="property"``.
    """
    if isinstance(mode, str):
        return mode
    if len(child_kinds) < 2:
        return "plain"
    if len(child_kinds) > 2 or child_kinds[1] in _PATTERN_KINDS:
        return "property"
    return "initializer"


def match_slots(shape: Shape, child_kinds: list[Kind]) -> tuple[dict[str, list[int]], int]:
    """Greedily assign child positions to the slots of ``shape``.

    Returns
    -------
    tuple[dict[str, list[int]], int]
        Mapping of slot name to the child positions it consumed, and the
        position of the first child no slot accepted (``len(child_kinds)``
        when every child was consumed).
    """
    assigned: dict[str, list[int]] = {}
    pos = 0
    for slot in shape.slots:
        taken: list[int] = []
        while pos < len(child_kinds) and child_kinds[pos] in slot.kinds:
            if slot.max is not None and len(taken) >= slot.max:
                break
            taken.append(pos)
            pos += 1
        assigned[slot.name] = taken
    return assigned, pos
