"""jastx renderer: node tree → JavaScript/TypeScript source text.

The ``Renderer`` walks a validated ``Node`` tree and produces single-line,
minimally spaced source text.  Dispatch goes through a ``Kind → method``
table built once per renderer; each ``_render_*`` method renders one kind
and asks the precedence helpers whether an operand needs parentheses.

Rendering is pure and deterministic: the same tree always produces the
same string, and there are no options.

Usage
-----
::

    from jastx.renderer import render

    text = render(tree)  # e.g. 'const x:string="Hello"'
"""
from __future__ import annotations

import logging
import re
from collections.abc import Callable

from jastx.ast.nodes import Node
from jastx.renderer import literals, patterns
from jastx.renderer.errors import UnrenderableNodeError
from jastx.renderer.precedence import (
    AS,
    MEMBER,
    PREFIX,
    is_binary_family,
    is_comma_expression,
    needs_parens_as_member_object,
    needs_parens_as_operand,
    needs_parens_in_binary,
    needs_parens_in_conditional,
    precedence_of,
)
from jastx.taxonomy.kinds import Kind
from jastx.taxonomy.vocabulary import KEYWORD_OPERATORS
from jastx.validator.shapes import match_slots, object_elem_mode, shape_of

logger = logging.getLogger(__name__)

_LEADING_DOC_RE = re.compile(r"^(?:/\*\*.*?\*/)+", re.DOTALL)
_FUNCTION_START_RE = re.compile(r"^(?:async\s+)?function\b")

# An operator ending in one of these must not touch an operand starting
# with the same character ("a- -1", "a/ /re/").
_GLUE_CHARS = frozenset("+-/")


def _wrap(text: str) -> str:
    return f"({text})"


def _leading(text: str) -> str:
    """Strip leading doc comments so statement-start checks see the code."""
    return _LEADING_DOC_RE.sub("", text, count=1)


def _is_identifier_char(char: str) -> bool:
    return char.isalnum() or char in "_$"


class Renderer:
    """Renders ``Node`` trees as JavaScript/TypeScript source text.

    The renderer holds no mutable state, so one instance may be shared
    freely (``render`` uses a module-level default).
    """

    def __init__(self) -> None:
        self._handlers: dict[Kind, Callable[[Node], str]] = {
            # Leaves
            Kind.IDENT: self._render_ident,
            Kind.TEXT: self._render_text,
            Kind.EXACT_LITERAL: self._render_exact_literal,
            # Literals
            Kind.L_BOOLEAN: self._render_boolean,
            Kind.L_NUMBER: self._render_number,
            Kind.L_STRING: self._render_string,
            Kind.L_REGEX: self._render_regex,
            Kind.L_BIGINT: self._render_bigint,
            Kind.L_OBJECT: self._render_object,
            Kind.L_ARRAY: self._render_array,
            Kind.L_OBJECT_PROP: self._render_object_prop,
            Kind.L_OBJECT_GETTER: self._render_object_getter,
            Kind.L_OBJECT_SETTER: self._render_object_setter,
            # Expressions
            Kind.EXPR_TEMPLATE: self._render_template,
            Kind.EXPR_FUNCTION: self._render_function,
            Kind.EXPR_STATEMENT: self._render_expression_statement,
            Kind.EXPR_PARENS: self._render_parens,
            Kind.EXPR_PROP_ACCESS: self._render_prop_access,
            Kind.EXPR_ELEM_ACCESS: self._render_elem_access,
            Kind.EXPR_COND: self._render_conditional,
            Kind.EXPR_AS: self._render_as,
            Kind.EXPR_BINARY: self._render_binary,
            Kind.EXPR_NOT: self._render_not,
            Kind.EXPR_AWAIT: self._render_await,
            Kind.EXPR_TYPEOF: self._render_typeof,
            Kind.EXPR_NON_NULL: self._render_non_null,
            Kind.EXPR_CALL: self._render_call,
            Kind.EXPR_YIELD: self._render_yield,
            # Types
            Kind.T_PRIMITIVE: self._render_type_primitive,
            Kind.T_REF: self._render_type_ref,
            Kind.T_COND: self._render_type_conditional,
            Kind.T_INDEXED: self._render_type_indexed,
            Kind.T_PARAM: self._render_type_param,
            Kind.T_PREDICATE: self._render_type_predicate,
            # Passthrough
            Kind.P_VAR_NAME: self._render_passthrough,
            Kind.P_FUN_NAME: self._render_passthrough,
            Kind.P_TYPE: self._render_passthrough,
            # Functions and statements
            Kind.BLOCK: self._render_block,
            Kind.ARROW_FUNCTION: self._render_arrow_function,
            Kind.FUNCTION_DECLARATION: self._render_function,
            Kind.IF_STATEMENT: self._render_if,
            Kind.PARAM: self._render_param,
            # Declarations
            Kind.VAR_STATEMENT: self._render_var_statement,
            Kind.VAR_DECLARATION: self._render_declaration,
            Kind.VAR_DECLARATION_LIST: self._render_declaration_list,
            Kind.VAR_DECLARATION_NAME: self._render_passthrough,
            # Binding patterns
            Kind.BIND_OBJECT: self._render_object_pattern,
            Kind.BIND_OBJECT_ELEM: self._render_object_pattern_element,
            Kind.BIND_ARRAY: self._render_array_pattern,
            Kind.BIND_ARRAY_ELEM: self._render_array_pattern_element,
        }

    def render(self, node: Node) -> str:
        """Render ``node`` and its descendants to source text.

        Parameters
        ----------
        node:
            The root of a constructed (and therefore validated) tree.

        Returns
        -------
        str
            Single-line source text.

        Raises
        ------
        UnrenderableNodeError
            If a node's kind has no render handler.
        """
        text = self._render(node)
        logger.debug("Rendered %s tree to %d character(s)", node.kind.value, len(text))
        return text

    def supports(self, kind: Kind) -> bool:
        """Return True if this renderer has a handler for ``kind``."""
        return kind in self._handlers

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _render(self, node: Node) -> str:
        handler = self._handlers.get(node.kind)
        if handler is None:
            raise UnrenderableNodeError(kind=node.kind.value)
        text = handler(node)
        if node.docs is not None:
            text = self._render_text(node.docs) + text
        return text

    @staticmethod
    def _slots(node: Node) -> dict[str, list[Node]]:
        assigned, _ = match_slots(shape_of(node.kind), [c.kind for c in node.children])
        return {name: [node.children[i] for i in positions] for name, positions in assigned.items()}

    def _render_all(self, nodes: list[Node]) -> list[str]:
        return [self._render(n) for n in nodes]

    def _list_item(self, node: Node) -> str:
        """Render an element of a comma-separated list."""
        text = self._render(node)
        return _wrap(text) if is_comma_expression(node) else text

    def _list_items(self, nodes: list[Node]) -> list[str]:
        return [self._list_item(n) for n in nodes]

    def _optional_list_item(self, nodes: list[Node]) -> str | None:
        return self._list_item(nodes[0]) if nodes else None

    def _operand(self, node: Node, minimum: int) -> str:
        text = self._render(node)
        return _wrap(text) if needs_parens_as_operand(node, minimum) else text

    def _type_args(self, nodes: list[Node]) -> str:
        if not nodes:
            return ""
        return "<" + patterns.join_elements(self._render_all(nodes)) + ">"

    def _return_type(self, nodes: list[Node]) -> str:
        return f":{self._render(nodes[0])}" if nodes else ""

    def _property_key(self, node: Node) -> str:
        if node.kind is Kind.IDENT:
            return node.props["name"]
        return literals.format_property_key_text(node.props["value"])

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def _render_ident(self, node: Node) -> str:
        return node.props["name"]

    def _render_text(self, node: Node) -> str:
        return literals.format_doc_comment(node.props["value"])

    def _render_exact_literal(self, node: Node) -> str:
        return node.props["value"]

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def _render_boolean(self, node: Node) -> str:
        return literals.format_boolean(node.props["value"])

    def _render_number(self, node: Node) -> str:
        return literals.format_number(node.props["value"])

    def _render_string(self, node: Node) -> str:
        return literals.format_string(node.props["value"])

    def _render_regex(self, node: Node) -> str:
        return literals.format_regex(node.props["pattern"], node.props.get("flags", ""))

    def _render_bigint(self, node: Node) -> str:
        return literals.format_bigint(node.props["value"])

    def _render_object(self, node: Node) -> str:
        return patterns.format_object_literal(self._render_all(list(node.children)))

    def _render_array(self, node: Node) -> str:
        return patterns.format_array_literal(self._list_items(list(node.children)))

    def _render_object_prop(self, node: Node) -> str:
        slots = self._slots(node)
        key = self._property_key(slots["key"][0])
        if not slots["value"]:
            return key
        return f"{key}:{self._list_item(slots['value'][0])}"

    def _render_object_getter(self, node: Node) -> str:
        slots = self._slots(node)
        key = self._property_key(slots["key"][0])
        return f"get {key}(){self._return_type(slots['return'])}{self._render(slots['body'][0])}"

    def _render_object_setter(self, node: Node) -> str:
        slots = self._slots(node)
        key = self._property_key(slots["key"][0])
        param = self._render(slots["param"][0])
        return f"set {key}({param}){self._render(slots['body'][0])}"

    # ------------------------------------------------------------------
    # Standalone expressions
    # ------------------------------------------------------------------

    def _render_template(self, node: Node) -> str:
        parts: tuple[str, ...] = node.props["parts"]
        out = ["`", literals.escape_template_part(parts[0])]
        for expression, part in zip(node.children, parts[1:]):
            out.append("${" + self._render(expression) + "}")
            out.append(literals.escape_template_part(part))
        out.append("`")
        return "".join(out)

    def _render_function(self, node: Node) -> str:
        """Render ``expr:function`` and ``function-declaration`` alike."""
        slots = self._slots(node)
        head = "async function" if node.flag("is_async") else "function"
        if node.flag("generator"):
            head += "*"
        if slots["name"]:
            head += f" {self._render(slots['name'][0])}"
        params = patterns.join_elements(self._render_all(slots["params"]))
        return (
            f"{head}{self._type_args(slots['type_params'])}({params})"
            f"{self._return_type(slots['return'])}{self._render(slots['body'][0])}"
        )

    def _render_expression_statement(self, node: Node) -> str:
        text = self._render(node.children[0])
        code = _leading(text)
        if code.startswith("{") or _FUNCTION_START_RE.match(code):
            text = _wrap(text)
        return f"{text};"

    def _render_parens(self, node: Node) -> str:
        return _wrap(self._render(node.children[0]))

    def _render_prop_access(self, node: Node) -> str:
        obj, prop = node.children
        obj_text = self._render(obj)
        if needs_parens_as_member_object(obj):
            obj_text = _wrap(obj_text)
        dot = "?." if node.flag("optional") else "."
        return f"{obj_text}{dot}{self._render(prop)}"

    def _render_elem_access(self, node: Node) -> str:
        obj, index = node.children
        access = "?.[" if node.flag("optional") else "["
        return f"{self._operand(obj, MEMBER)}{access}{self._list_item(index)}]"

    def _render_conditional(self, node: Node) -> str:
        test, consequent, alternate = (
            _wrap(self._render(child)) if needs_parens_in_conditional(child) else self._render(child)
            for child in node.children
        )
        return f"{test}?{consequent}:{alternate}"

    # ------------------------------------------------------------------
    # Binary expressions
    # ------------------------------------------------------------------

    def _render_as(self, node: Node) -> str:
        expression, type_node = node.children
        text = self._render(expression)
        if is_binary_family(expression) or precedence_of(expression) < AS:
            text = _wrap(text)
        return f"{text} as {self._render(type_node)}"

    def _render_binary(self, node: Node) -> str:
        operator: str = node.props["operator"]
        left, right = node.children
        left_text = self._render(left)
        if needs_parens_in_binary(left, operator, "left"):
            left_text = _wrap(left_text)
        right_text = self._render(right)
        if needs_parens_in_binary(right, operator, "right"):
            right_text = _wrap(right_text)

        if operator in KEYWORD_OPERATORS:
            return f"{left_text} {operator} {right_text}"
        # "a! ==b" must not read as "a !== b", nor "a! =b" as "a != b".
        left_gap = " " if left_text.endswith("!") and operator.startswith("=") else ""
        right_gap = " " if operator[-1] in _GLUE_CHARS and right_text.startswith(operator[-1]) else ""
        return f"{left_text}{left_gap}{operator}{right_gap}{right_text}"

    # ------------------------------------------------------------------
    # Unary expressions
    # ------------------------------------------------------------------

    def _render_not(self, node: Node) -> str:
        return f"!{self._operand(node.children[0], PREFIX)}"

    def _render_await(self, node: Node) -> str:
        return f"await {self._operand(node.children[0], PREFIX)}"

    def _render_typeof(self, node: Node) -> str:
        return f"typeof {self._operand(node.children[0], PREFIX)}"

    def _render_non_null(self, node: Node) -> str:
        return f"{self._operand(node.children[0], MEMBER)}!"

    def _render_call(self, node: Node) -> str:
        slots = self._slots(node)
        callee = self._operand(slots["callee"][0], MEMBER)
        chain = "?." if node.flag("optional") else ""
        arguments = patterns.join_elements(self._list_items(slots["arguments"]))
        return f"{callee}{chain}{self._type_args(slots['type_args'])}({arguments})"

    def _render_yield(self, node: Node) -> str:
        keyword = "yield*" if node.flag("delegate") else "yield"
        if not node.children:
            return keyword
        return f"{keyword} {self._list_item(node.children[0])}"

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def _render_type_primitive(self, node: Node) -> str:
        return node.props["name"]

    def _render_type_ref(self, node: Node) -> str:
        slots = self._slots(node)
        name = ".".join(self._render_all(slots["name"]))
        return name + self._type_args(slots["type_args"])

    def _conditional_type_operand(self, node: Node) -> str:
        text = self._render(node)
        return _wrap(text) if node.kind is Kind.T_COND else text

    def _render_type_conditional(self, node: Node) -> str:
        check, extends, when_true, when_false = node.children
        return (
            f"{self._conditional_type_operand(check)} extends "
            f"{self._conditional_type_operand(extends)}"
            f"?{self._render(when_true)}:{self._render(when_false)}"
        )

    def _render_type_indexed(self, node: Node) -> str:
        obj, index = node.children
        return f"{self._conditional_type_operand(obj)}[{self._render(index)}]"

    def _render_type_param(self, node: Node) -> str:
        slots = self._slots(node)
        text = self._render(slots["name"][0])
        if slots["constraint"]:
            text += f" extends {self._render(slots['constraint'][0])}"
        if slots["default"]:
            text += f"={self._render(slots['default'][0])}"
        return text

    def _render_type_predicate(self, node: Node) -> str:
        slots = self._slots(node)
        text = self._render(slots["parameter"][0])
        if node.flag("asserts"):
            text = f"asserts {text}"
        if slots["type"]:
            text += f" is {self._render(slots['type'][0])}"
        return text

    def _render_passthrough(self, node: Node) -> str:
        return self._render(node.children[0])

    # ------------------------------------------------------------------
    # Functions and statements
    # ------------------------------------------------------------------

    def _render_block(self, node: Node) -> str:
        return "{" + "".join(self._render_all(list(node.children))) + "}"

    def _render_arrow_function(self, node: Node) -> str:
        slots = self._slots(node)
        body_node = slots["body"][0]
        body = self._list_item(body_node)
        if body_node.kind is not Kind.BLOCK and _leading(body).startswith("{"):
            body = _wrap(body)
        params = patterns.join_elements(self._render_all(slots["params"]))
        head = "async " if node.flag("is_async") else ""
        return (
            f"{head}{self._type_args(slots['type_params'])}({params})"
            f"{self._return_type(slots['return'])}=>{body}"
        )

    def _render_if(self, node: Node) -> str:
        slots = self._slots(node)
        test = self._render(slots["test"][0])
        consequent_node = slots["consequent"][0]
        consequent = self._render(consequent_node)
        if not slots["alternate"]:
            return f"if({test}){consequent}"
        # A nested if would otherwise capture this else branch.
        if consequent_node.kind is Kind.IF_STATEMENT:
            consequent = "{" + consequent + "}"
        alternate = self._render(slots["alternate"][0])
        separator = " " if alternate and _is_identifier_char(alternate[0]) else ""
        return f"if({test}){consequent}else{separator}{alternate}"

    def _render_param(self, node: Node) -> str:
        slots = self._slots(node)
        text = self._render(slots["target"][0])
        if node.flag("rest"):
            text = patterns.format_rest(text)
        if node.flag("optional"):
            text += "?"
        return patterns.format_declarator(
            text,
            self._render(slots["type"][0]) if slots["type"] else None,
            self._optional_list_item(slots["default"]),
        )

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _render_var_statement(self, node: Node) -> str:
        return f"{self._render(node.children[0])};"

    def _render_declaration_list(self, node: Node) -> str:
        return patterns.format_declaration_list(
            node.props["declaration_kind"],
            self._render_all(list(node.children)),
        )

    def _render_declaration(self, node: Node) -> str:
        slots = self._slots(node)
        return patterns.format_declarator(
            self._render(slots["target"][0]),
            self._render(slots["type"][0]) if slots["type"] else None,
            self._optional_list_item(slots["initializer"]),
        )

    # ------------------------------------------------------------------
    # Binding patterns
    # ------------------------------------------------------------------

    def _render_object_pattern(self, node: Node) -> str:
        return patterns.format_object_pattern(self._render_all(list(node.children)))

    def _render_object_pattern_element(self, node: Node) -> str:
        slots = self._slots(node)
        mode = object_elem_mode(node.prop("mode"), [c.kind for c in node.children])
        name_node = slots["name"][0]
        if mode == "rest":
            return patterns.format_rest(self._render(name_node))
        if mode == "initializer":
            return patterns.format_binding_default(
                self._render(name_node),
                self._list_item(slots["value"][0]),
            )
        if mode == "property":
            target = f"{self._property_key(name_node)}:{self._render(slots['value'][0])}"
            return patterns.format_binding_default(
                target, self._optional_list_item(slots["default"])
            )
        return self._render(name_node)

    def _render_array_pattern(self, node: Node) -> str:
        return patterns.format_array_pattern(self._render_all(list(node.children)))

    def _render_array_pattern_element(self, node: Node) -> str:
        slots = self._slots(node)
        target = self._render(slots["target"][0])
        if node.flag("rest"):
            return patterns.format_rest(target)
        return patterns.format_binding_default(target, self._optional_list_item(slots["default"]))


_DEFAULT_RENDERER = Renderer()


def render(node: Node) -> str:
    """Convenience function: render a tree with the shared default renderer.

    Parameters
    ----------
    node:
        The root of the tree to render.

    Returns
    -------
    str
        Single-line source text.
    """
    return _DEFAULT_RENDERER.render(node)
