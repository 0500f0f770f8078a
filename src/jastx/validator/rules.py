"""Individual validation rules for the jastx validator.

Each rule is a callable that accepts a ``Draft`` (the inputs of a proposed
node) and returns a list of ``Diagnostic`` objects.  Rules are composed
into the ``Validator`` class which runs them all and aggregates results.

Rule codes use the ``JSX`` prefix followed by a three-digit number:

    JSX001  Unknown kind
    JSX002  Required property missing
    JSX003  Property value of wrong type or outside its domain
    JSX004  Unknown property for this kind
    JSX005  Child is not a node
    JSX006  Required child missing
    JSX007  Child kind not admissible at this position
    JSX008  Docs node is not a ``text`` node
    JSX009  Kind-specific cross-child constraint violated
    JSX101  ``const`` declarator without initializer (warning)
    JSX102  Destructuring declarator without initializer (warning)
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable

from jastx.taxonomy.kinds import BINDING_TARGET_KINDS, Kind
from jastx.taxonomy.vocabulary import REGEX_FLAGS
from jastx.validator.diagnostics import Diagnostic, DiagnosticSeverity
from jastx.validator.shapes import SHAPES, match_slots, object_elem_mode


@dataclass(frozen=True, slots=True)
class Draft:
    """The inputs of a proposed node, before it exists.

    ``children`` and ``docs`` are whatever the caller supplied; rules must
    not assume they are nodes until ``rule_child_nodes`` has passed.
    """

    kind: Kind
    props: Mapping[str, object]
    children: tuple[object, ...]
    docs: object | None = None

    @property
    def child_kinds(self) -> list[Kind] | None:
        """Kinds of all children, or ``None`` if any child is not a node."""
        kinds = [getattr(child, "kind", None) for child in self.children]
        if not all(isinstance(k, Kind) for k in kinds):
            return None
        return kinds  # type: ignore[return-value]

    def slot_children(self) -> dict[str, list[object]] | None:
        """Children grouped by slot name, or ``None`` when they don't fit."""
        kinds = self.child_kinds
        if kinds is None:
            return None
        assigned, stop = match_slots(SHAPES[self.kind], kinds)
        if stop != len(kinds):
            return None
        return {name: [self.children[i] for i in positions] for name, positions in assigned.items()}


Rule = Callable[[Draft], list[Diagnostic]]

_LINE_TERMINATORS = "\n\r\u2028\u2029"


def _make(
    code: str,
    severity: DiagnosticSeverity,
    message: str,
    draft: Draft,
    *,
    position: int | None = None,
    expected: tuple[str, ...] = (),
    found: str | None = None,
    suggestion: str | None = None,
    rule: str = "",
) -> Diagnostic:
    return Diagnostic(
        severity=severity,
        code=code,
        message=message,
        kind=draft.kind.value,
        position=position,
        expected=expected,
        found=found,
        suggestion=suggestion,
        rule=rule,
    )


def _tags(kinds: frozenset[Kind]) -> tuple[str, ...]:
    return tuple(sorted(k.value for k in kinds))


def _prop(node: object, name: str) -> object:
    props = getattr(node, "props", None)
    return props.get(name) if isinstance(props, Mapping) else None


# ---------------------------------------------------------------------------
# JSX002 / JSX003 / JSX004 — property shape
# ---------------------------------------------------------------------------

def rule_properties(draft: Draft) -> list[Diagnostic]:
    """JSX002-JSX004: properties must match the kind's declared specs."""
    diagnostics: list[Diagnostic] = []
    specs = SHAPES[draft.kind].props

    for name, spec in specs.items():
        if name not in draft.props:
            if spec.required:
                diagnostics.append(_make(
                    "JSX002",
                    DiagnosticSeverity.ERROR,
                    f"Missing required property {name!r}",
                    draft,
                    expected=(name,),
                    suggestion=f"Pass {name}=... when creating a {draft.kind.value!r} node",
                    rule="properties",
                ))
            continue

        value = draft.props[name]
        wrong_type = not isinstance(value, spec.types) or (
            isinstance(value, bool) and bool not in spec.types
        )
        if wrong_type:
            diagnostics.append(_make(
                "JSX003",
                DiagnosticSeverity.ERROR,
                f"Property {name!r} must be {' | '.join(t.__name__ for t in spec.types)}, "
                f"got {type(value).__name__}",
                draft,
                expected=tuple(t.__name__ for t in spec.types),
                found=type(value).__name__,
                rule="properties",
            ))
        elif spec.choices is not None and value not in spec.choices:
            diagnostics.append(_make(
                "JSX003",
                DiagnosticSeverity.ERROR,
                f"Property {name!r} has value {value!r} outside its domain",
                draft,
                expected=tuple(sorted(spec.choices)),
                found=repr(value),
                rule="properties",
            ))

    for name in draft.props:
        if name not in specs:
            accepted = ", ".join(sorted(specs)) or "none"
            diagnostics.append(_make(
                "JSX004",
                DiagnosticSeverity.ERROR,
                f"Unknown property {name!r} (accepted: {accepted})",
                draft,
                expected=tuple(sorted(specs)),
                found=name,
                rule="properties",
            ))
    return diagnostics


# ---------------------------------------------------------------------------
# JSX005 — children must be nodes
# ---------------------------------------------------------------------------

def rule_child_nodes(draft: Draft) -> list[Diagnostic]:
    """JSX005: every child must be a constructed node."""
    diagnostics: list[Diagnostic] = []
    for pos, child in enumerate(draft.children):
        if not isinstance(getattr(child, "kind", None), Kind):
            diagnostics.append(_make(
                "JSX005",
                DiagnosticSeverity.ERROR,
                f"Child is a {type(child).__name__}, not a node",
                draft,
                position=pos,
                found=type(child).__name__,
                rule="child_nodes",
            ))
    return diagnostics


# ---------------------------------------------------------------------------
# JSX006 / JSX007 — child arity and kinds
# ---------------------------------------------------------------------------

def rule_children(draft: Draft) -> list[Diagnostic]:
    """JSX006/JSX007: children must fill the kind's slot table in order."""
    kinds = draft.child_kinds
    if kinds is None:
        return []  # reported by rule_child_nodes

    diagnostics: list[Diagnostic] = []
    shape = SHAPES[draft.kind]
    assigned, stop = match_slots(shape, kinds)
    reported: set[int] = set()

    start = 0
    for slot in shape.slots:
        count = len(assigned[slot.name])
        if count < slot.min:
            # A child was present where this slot needed one, but of the wrong kind.
            misplaced = start + count
            if misplaced < len(kinds) and misplaced not in reported:
                reported.add(misplaced)
                diagnostics.append(_make(
                    "JSX007",
                    DiagnosticSeverity.ERROR,
                    f"Child kind {kinds[misplaced].value!r} is not admissible at position "
                    f"{misplaced}; expected a {slot.name!r} child",
                    draft,
                    position=misplaced,
                    expected=_tags(slot.kinds),
                    found=kinds[misplaced].value,
                    rule="children",
                ))
            else:
                diagnostics.append(_make(
                    "JSX006",
                    DiagnosticSeverity.ERROR,
                    f"Expected at least {slot.min} {slot.name!r} child(ren), got {count}",
                    draft,
                    expected=_tags(slot.kinds),
                    rule="children",
                ))
        start += count

    if stop < len(kinds) and stop not in reported:
        if shape.is_leaf:
            message = f"{draft.kind.value!r} nodes take no children"
            expected: tuple[str, ...] = ()
        else:
            message = f"Child kind {kinds[stop].value!r} is not admissible at position {stop}"
            admissible: set[Kind] = set()
            for slot in shape.slots:
                admissible |= slot.kinds
            expected = _tags(frozenset(admissible))
        diagnostics.append(_make(
            "JSX007",
            DiagnosticSeverity.ERROR,
            message,
            draft,
            position=stop,
            expected=expected,
            found=kinds[stop].value,
            rule="children",
        ))
    return diagnostics


# ---------------------------------------------------------------------------
# JSX008 — docs
# ---------------------------------------------------------------------------

def rule_docs(draft: Draft) -> list[Diagnostic]:
    """JSX008: leading documentation must be a single ``text`` node."""
    if draft.docs is None:
        return []
    docs_kind = getattr(draft.docs, "kind", None)
    if docs_kind is Kind.TEXT:
        return []
    found = docs_kind.value if isinstance(docs_kind, Kind) else type(draft.docs).__name__
    return [_make(
        "JSX008",
        DiagnosticSeverity.ERROR,
        "Docs must be a 'text' node",
        draft,
        expected=(Kind.TEXT.value,),
        found=found,
        rule="docs",
    )]


# ---------------------------------------------------------------------------
# JSX003 — kind-specific property domains
# ---------------------------------------------------------------------------

def rule_identifier_name(draft: Draft) -> list[Diagnostic]:
    """JSX003: identifiers need a non-empty name."""
    if draft.kind is not Kind.IDENT:
        return []
    name = draft.props.get("name")
    if isinstance(name, str) and not name.strip():
        return [_make(
            "JSX003",
            DiagnosticSeverity.ERROR,
            "Identifier name must not be empty",
            draft,
            found=repr(name),
            rule="identifier_name",
        )]
    return []


def rule_regex(draft: Draft) -> list[Diagnostic]:
    """JSX003: regex flags come from the flag set, once each; no line breaks."""
    if draft.kind is not Kind.L_REGEX:
        return []
    diagnostics: list[Diagnostic] = []
    pattern = draft.props.get("pattern")
    if isinstance(pattern, str) and any(c in pattern for c in _LINE_TERMINATORS):
        diagnostics.append(_make(
            "JSX003",
            DiagnosticSeverity.ERROR,
            "Regex pattern must not contain line terminators",
            draft,
            found=repr(pattern),
            suggestion="Use \\n inside the pattern instead of a literal newline",
            rule="regex",
        ))
    flags = draft.props.get("flags")
    if isinstance(flags, str):
        unknown = sorted(set(flags) - REGEX_FLAGS)
        if unknown or len(set(flags)) != len(flags):
            diagnostics.append(_make(
                "JSX003",
                DiagnosticSeverity.ERROR,
                f"Invalid regex flags {flags!r}",
                draft,
                expected=tuple(sorted(REGEX_FLAGS)),
                found=flags,
                suggestion="Use each flag at most once",
                rule="regex",
            ))
    return diagnostics


def rule_template_parts(draft: Draft) -> list[Diagnostic]:
    """JSX003/JSX009: a template has one more text part than expressions."""
    if draft.kind is not Kind.EXPR_TEMPLATE:
        return []
    parts = draft.props.get("parts")
    if not isinstance(parts, tuple):
        return []  # reported by rule_properties
    if not all(isinstance(p, str) for p in parts):
        return [_make(
            "JSX003",
            DiagnosticSeverity.ERROR,
            "Template parts must all be strings",
            draft,
            expected=("str",),
            rule="template_parts",
        )]
    if len(parts) != len(draft.children) + 1:
        return [_make(
            "JSX009",
            DiagnosticSeverity.ERROR,
            f"Template with {len(draft.children)} expression(s) needs "
            f"{len(draft.children) + 1} text part(s), got {len(parts)}",
            draft,
            found=str(len(parts)),
            rule="template_parts",
        )]
    return []


# ---------------------------------------------------------------------------
# JSX009 — cross-child constraints
# ---------------------------------------------------------------------------

def rule_object_shorthand(draft: Draft) -> list[Diagnostic]:
    """JSX009: a property without a value is shorthand and needs an ident key."""
    if draft.kind is not Kind.L_OBJECT_PROP:
        return []
    slots = draft.slot_children()
    if slots is None or slots["value"]:
        return []
    key_kind = getattr(slots["key"][0], "kind", None)
    if key_kind is Kind.IDENT:
        return []
    return [_make(
        "JSX009",
        DiagnosticSeverity.ERROR,
        "Shorthand property (no value) requires an 'ident' key",
        draft,
        position=0,
        expected=(Kind.IDENT.value,),
        found=key_kind.value if isinstance(key_kind, Kind) else None,
        rule="object_shorthand",
    )]


def rule_yield_delegate(draft: Draft) -> list[Diagnostic]:
    """JSX009: ``yield*`` needs an operand."""
    if draft.kind is not Kind.EXPR_YIELD or draft.props.get("delegate") is not True:
        return []
    if draft.children:
        return []
    return [_make(
        "JSX009",
        DiagnosticSeverity.ERROR,
        "Delegating yield requires an operand",
        draft,
        rule="yield_delegate",
    )]


def rule_predicate_type(draft: Draft) -> list[Diagnostic]:
    """JSX009: a type predicate names a type unless it is an assertion."""
    if draft.kind is not Kind.T_PREDICATE or draft.props.get("asserts") is True:
        return []
    slots = draft.slot_children()
    if slots is None or slots["type"]:
        return []
    return [_make(
        "JSX009",
        DiagnosticSeverity.ERROR,
        "Type predicate without 'asserts' requires a type",
        draft,
        suggestion="Add a type child or set asserts=True",
        rule="predicate_type",
    )]


def rule_rest_modifiers(draft: Draft) -> list[Diagnostic]:
    """JSX009: rest and optional parameters/elements cannot carry defaults."""
    if draft.kind not in (Kind.PARAM, Kind.BIND_ARRAY_ELEM):
        return []
    slots = draft.slot_children()
    if slots is None:
        return []
    rest = draft.props.get("rest") is True
    optional = draft.props.get("optional") is True
    has_default = bool(slots["default"])
    problems: list[str] = []
    if rest and has_default:
        problems.append("A rest element cannot have a default value")
    if rest and optional:
        problems.append("A rest parameter cannot be optional")
    if optional and has_default:
        problems.append("An optional parameter cannot have a default value")
    return [
        _make("JSX009", DiagnosticSeverity.ERROR, message, draft, rule="rest_modifiers")
        for message in problems
    ]


def rule_object_elem_mode(draft: Draft) -> list[Diagnostic]:
    """JSX009: a ``bind:object-elem``'s children must agree with its mode."""
    if draft.kind is not Kind.BIND_OBJECT_ELEM:
        return []
    slots = draft.slot_children()
    kinds = draft.child_kinds
    if slots is None or kinds is None:
        return []
    mode = draft.props.get("mode")
    effective = object_elem_mode(mode, kinds)
    name_is_ident = kinds[0] is Kind.IDENT
    value_kind = getattr(slots["value"][0], "kind", None) if slots["value"] else None
    has_default = bool(slots["default"])

    problem: str | None = None
    if effective == "initializer" and (value_kind is None or has_default):
        problem = "Initializer mode takes a name and one default value"
    elif effective == "initializer" and value_kind in (Kind.BIND_OBJECT, Kind.BIND_ARRAY):
        problem = "A binding pattern cannot be a default value"
    elif effective == "property" and value_kind not in BINDING_TARGET_KINDS:
        problem = "Property mode requires a binding target after the key"
    elif effective == "rest" and (value_kind is not None or has_default):
        problem = "Rest mode takes a single name"
    elif effective != "property" and not name_is_ident:
        problem = "Only property mode may use a string or numeric key"
    if problem is None:
        return []
    return [_make(
        "JSX009",
        DiagnosticSeverity.ERROR,
        problem,
        draft,
        found=mode if isinstance(mode, str) else None,
        rule="object_elem_mode",
    )]


def _is_rest_element(node: object) -> bool:
    kind = getattr(node, "kind", None)
    if kind is Kind.BIND_OBJECT_ELEM:
        return _prop(node, "mode") == "rest"
    if kind in (Kind.BIND_ARRAY_ELEM, Kind.PARAM):
        return _prop(node, "rest") is True
    return False


_REST_SLOTS: dict[Kind, str] = {
    Kind.BIND_OBJECT: "elements",
    Kind.BIND_ARRAY: "elements",
    Kind.ARROW_FUNCTION: "params",
    Kind.FUNCTION_DECLARATION: "params",
    Kind.EXPR_FUNCTION: "params",
}


def rule_rest_last(draft: Draft) -> list[Diagnostic]:
    """JSX009: a rest element or parameter must come last."""
    slot_name = _REST_SLOTS.get(draft.kind)
    kinds = draft.child_kinds
    if slot_name is None or kinds is None:
        return []
    assigned, _ = match_slots(SHAPES[draft.kind], kinds)
    positions = assigned[slot_name]
    for pos in positions[:-1]:
        if _is_rest_element(draft.children[pos]):
            return [_make(
                "JSX009",
                DiagnosticSeverity.ERROR,
                "A rest element must be the last element",
                draft,
                position=pos,
                suggestion="Move the rest element to the end",
                rule="rest_last",
            )]
    return []


# ---------------------------------------------------------------------------
# JSX101 / JSX102 — declarations without initializers
# ---------------------------------------------------------------------------

def _declarator_has_initializer(declaration: object) -> bool:
    kinds = [getattr(c, "kind", None) for c in getattr(declaration, "children", ())]
    assigned, _ = match_slots(SHAPES[Kind.VAR_DECLARATION], kinds)  # type: ignore[arg-type]
    return bool(assigned["initializer"])


def rule_const_initializer(draft: Draft) -> list[Diagnostic]:
    """JSX101: ``const`` declarators should be initialized."""
    if draft.kind is not Kind.VAR_DECLARATION_LIST or draft.props.get("declaration_kind") != "const":
        return []
    if draft.child_kinds is None:
        return []
    return [
        _make(
            "JSX101",
            DiagnosticSeverity.WARNING,
            "'const' declarator has no initializer",
            draft,
            position=pos,
            suggestion="Add an initializer or declare it with 'let'",
            rule="const_initializer",
        )
        for pos, declaration in enumerate(draft.children)
        if getattr(declaration, "kind", None) is Kind.VAR_DECLARATION
        and not _declarator_has_initializer(declaration)
    ]


def rule_destructuring_initializer(draft: Draft) -> list[Diagnostic]:
    """JSX102: destructuring declarators should be initialized."""
    if draft.kind is not Kind.VAR_DECLARATION:
        return []
    slots = draft.slot_children()
    if slots is None or slots["initializer"]:
        return []
    if getattr(slots["target"][0], "kind", None) not in (Kind.BIND_OBJECT, Kind.BIND_ARRAY):
        return []
    return [_make(
        "JSX102",
        DiagnosticSeverity.WARNING,
        "Destructuring declarator has no initializer",
        draft,
        position=0,
        rule="destructuring_initializer",
    )]


DEFAULT_RULES: list[Rule] = [
    rule_properties,
    rule_child_nodes,
    rule_children,
    rule_docs,
    rule_identifier_name,
    rule_regex,
    rule_template_parts,
    rule_object_shorthand,
    rule_yield_delegate,
    rule_predicate_type,
    rule_rest_modifiers,
    rule_object_elem_mode,
    rule_rest_last,
    rule_const_initializer,
    rule_destructuring_initializer,
]
