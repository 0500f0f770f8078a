"""Unit tests for jastx.renderer.renderer — Renderer and render()."""
from __future__ import annotations

import logging

import pytest

from jastx.ast.nodes import Node
from jastx.renderer.errors import UnrenderableNodeError
from jastx.renderer.renderer import Renderer, render
from jastx.taxonomy.kinds import Kind

n = Node.create

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _ident(name: str) -> Node:
    return n("ident", name=name)


def _num(value: int | float) -> Node:
    return n("l:number", value=value)


def _str(value: str) -> Node:
    return n("l:string", value=value)


def _prim(name: str) -> Node:
    return n("t:primitive", name=name)


def _ref(name: str) -> Node:
    return n("t:ref", _ident(name))


def _bin(operator: str, left: Node, right: Node) -> Node:
    return n("expr:binary", left, right, operator=operator)


def _call(callee: str, *args: Node) -> Node:
    return n("expr:call", _ident(callee), *args)


def _stmt(expression: Node) -> Node:
    return n("expr:statement", expression)


def _block(*statements: Node) -> Node:
    return n("block", *statements)


def _decl_list(kind: str, *declarations: Node) -> Node:
    return n("var:declaration-list", *declarations, declaration_kind=kind)


# ===========================================================================
# Declarations
# ===========================================================================


class TestDeclarations:
    @pytest.mark.parametrize("declaration_kind", ["const", "let", "var"])
    def test_single_typed_declarator(self, declaration_kind: str) -> None:
        tree = _decl_list(
            declaration_kind,
            n("var:declaration", _ident("x"), _prim("string"), _str("Hello")),
        )
        assert render(tree) == f'{declaration_kind} x:string="Hello"'

    def test_declarators_joined_with_bare_commas(self) -> None:
        tree = _decl_list(
            "const",
            n("var:declaration", _ident("x"), _prim("string"), _str("Hello")),
            n(
                "var:declaration",
                _ident("y"),
                _prim("number"),
                n("expr:as", _num(10), _prim("number")),
            ),
            n("var:declaration", _ident("z"), n("l:object")),
        )
        assert render(tree) == 'const x:string="Hello",y:number=10 as number,z={}'

    def test_destructuring(self, destructuring_tree: Node) -> None:
        assert (
            render(destructuring_tree)
            == 'const {zz,qq=10}={zz:"test",qq:30},[a1,a2=10]=["test",30]'
        )

    def test_declaration_without_initializer(self) -> None:
        assert render(_decl_list("let", n("var:declaration", _ident("x")))) == "let x"

    def test_declaration_name_wrapper(self) -> None:
        declaration = n("var:declaration", n("var:declaration-name", _ident("x")), _num(1))
        assert render(declaration) == "x=1"

    def test_var_statement_adds_terminator(self) -> None:
        tree = n("var:statement", _decl_list("let", n("var:declaration", _ident("x"), _num(1))))
        assert render(tree) == "let x=1;"

    def test_comma_initializer_parenthesized(self) -> None:
        declaration = n("var:declaration", _ident("x"), _bin(",", _ident("a"), _ident("b")))
        assert render(declaration) == "x=(a,b)"


# ===========================================================================
# Literals
# ===========================================================================


class TestLiterals:
    def test_boolean(self) -> None:
        assert render(n("l:boolean", value=False)) == "false"

    def test_integral_float(self) -> None:
        assert render(_num(10.0)) == "10"

    def test_bigint(self) -> None:
        assert render(n("l:bigint", value=9007199254740993)) == "9007199254740993n"

    def test_regex(self) -> None:
        assert render(n("l:regex", pattern="a/b", flags="g")) == "/a\\/b/g"

    def test_empty_collections(self) -> None:
        assert render(n("l:object")) == "{}"
        assert render(n("l:array")) == "[]"

    def test_array(self) -> None:
        assert render(n("l:array", _num(1), _str("two"), _ident("three"))) == '[1,"two",three]'

    def test_object_keys(self) -> None:
        tree = n(
            "l:object",
            n("l:object-prop", _ident("a")),
            n("l:object-prop", _str("b-c"), _num(1)),
            n("l:object-prop", _num(1), _num(2)),
            n("l:object-prop", _str("plain"), _num(3)),
        )
        assert render(tree) == '{a,"b-c":1,1:2,plain:3}'

    def test_getter_and_setter(self) -> None:
        tree = n(
            "l:object",
            n("l:object-getter", _ident("v"), _prim("number"), _block()),
            n("l:object-setter", _ident("v"), n("param", _ident("x")), _block()),
        )
        assert render(tree) == "{get v():number{},set v(x){}}"

    def test_template(self) -> None:
        tree = n("expr:template", _ident("name"), parts=("Hello, ", "!"))
        assert render(tree) == "`Hello, ${name}!`"

    def test_template_escapes_text(self) -> None:
        assert render(n("expr:template", parts=("a`b${c",))) == "`a\\`b\\${c`"


# ===========================================================================
# Expressions and precedence
# ===========================================================================


class TestBinaryExpressions:
    def test_simple(self) -> None:
        assert render(_bin("+", _ident("a"), _ident("b"))) == "a+b"

    def test_nested_binary_left_parenthesized(self) -> None:
        tree = _bin("*", _bin("+", _ident("a"), _ident("b")), _ident("c"))
        assert render(tree) == "(a+b)*c"

    def test_nested_binary_right_parenthesized(self) -> None:
        tree = _bin("*", _ident("a"), _bin("+", _ident("b"), _ident("c")))
        assert render(tree) == "a*(b+c)"

    def test_nested_binary_always_parenthesized(self) -> None:
        tree = _bin("+", _bin("*", _ident("a"), _ident("b")), _ident("c"))
        assert render(tree) == "(a*b)+c"

    def test_keyword_operators_spaced(self) -> None:
        assert render(_bin("in", _str("k"), _ident("o"))) == '"k" in o'
        assert render(_bin("instanceof", _ident("e"), _ident("Error"))) == "e instanceof Error"

    def test_minus_negative_literal_separated(self) -> None:
        assert render(_bin("-", _ident("a"), _num(-1))) == "a- -1"

    def test_plus_negative_literal_not_separated(self) -> None:
        assert render(_bin("+", _ident("a"), _num(-1))) == "a+-1"

    @pytest.mark.parametrize(
        ("operator", "expected"),
        [("==", "a! ==b"), ("===", "a! ===b"), ("=", "a! =b"), ("!=", "a!!=b")],
    )
    def test_non_null_left_operand_kept_apart(self, operator: str, expected: str) -> None:
        tree = _bin(operator, n("expr:non-null", _ident("a")), _ident("b"))
        assert render(tree) == expected

    def test_exponent_parenthesizes_negative_base(self) -> None:
        assert render(_bin("**", _num(-2), _num(2))) == "(-2)**2"

    def test_exponent_parenthesizes_unary_base(self) -> None:
        assert render(_bin("**", n("expr:await", _ident("x")), _num(2))) == "(await x)**2"

    def test_assignment_with_arrow(self) -> None:
        arrow = n("arrow-function", _num(1))
        assert render(_bin("=", _ident("f"), arrow)) == "f=()=>1"

    def test_conditional_operand_parenthesized(self) -> None:
        cond = n("expr:cond", _ident("a"), _ident("b"), _ident("c"))
        assert render(_bin("+", cond, _ident("d"))) == "(a?b:c)+d"

    def test_as_expression(self) -> None:
        assert render(n("expr:as", _ident("x"), _prim("number"))) == "x as number"

    def test_as_parenthesizes_binary(self) -> None:
        tree = n("expr:as", _bin("+", _ident("a"), _ident("b")), _prim("number"))
        assert render(tree) == "(a+b) as number"

    def test_as_inside_binary(self) -> None:
        tree = _bin("+", n("expr:as", _ident("a"), _prim("number")), _num(1))
        assert render(tree) == "(a as number)+1"


class TestConditional:
    def test_simple(self) -> None:
        assert render(n("expr:cond", _ident("a"), _ident("b"), _ident("c"))) == "a?b:c"

    def test_binary_test_parenthesized(self) -> None:
        tree = n(
            "expr:cond", _bin(">", _ident("a"), _ident("b")), _ident("a"), _ident("b")
        )
        assert render(tree) == "(a>b)?a:b"

    def test_nested_conditional_parenthesized(self) -> None:
        inner = n("expr:cond", _ident("c"), _ident("d"), _ident("e"))
        tree = n("expr:cond", _ident("a"), _ident("b"), inner)
        assert render(tree) == "a?b:(c?d:e)"


class TestUnaryExpressions:
    def test_not(self) -> None:
        assert render(n("expr:not", _ident("a"))) == "!a"

    def test_not_parenthesizes_binary(self) -> None:
        assert render(n("expr:not", _bin("&&", _ident("a"), _ident("b")))) == "!(a&&b)"

    def test_typeof(self) -> None:
        assert render(n("expr:typeof", _ident("a"))) == "typeof a"

    def test_await(self) -> None:
        assert render(n("expr:await", _call("f"))) == "await f()"

    def test_non_null(self) -> None:
        assert render(n("expr:non-null", _ident("a"))) == "a!"

    def test_non_null_parenthesizes_binary(self) -> None:
        assert render(n("expr:non-null", _bin("??", _ident("a"), _ident("b")))) == "(a??b)!"

    def test_yield_forms(self) -> None:
        assert render(n("expr:yield")) == "yield"
        assert render(n("expr:yield", _ident("a"))) == "yield a"
        assert render(n("expr:yield", _ident("g"), delegate=True)) == "yield* g"


class TestCallsAndMembers:
    def test_call(self) -> None:
        assert render(_call("f", _ident("a"), _num(1))) == "f(a,1)"

    def test_call_with_type_arguments(self) -> None:
        assert render(_call("f", _prim("string"), _ident("a"))) == "f<string>(a)"

    def test_optional_call(self) -> None:
        assert render(n("expr:call", _ident("f"), _ident("a"), optional=True)) == "f?.(a)"

    def test_optional_call_with_type_arguments(self) -> None:
        tree = n("expr:call", _ident("f"), _prim("string"), _ident("a"), optional=True)
        assert render(tree) == "f?.<string>(a)"

    def test_comma_argument_parenthesized(self) -> None:
        assert render(_call("f", _bin(",", _ident("a"), _ident("b")))) == "f((a,b))"

    def test_arrow_callee_parenthesized(self) -> None:
        assert render(n("expr:call", n("arrow-function", _num(1)))) == "(()=>1)()"

    def test_prop_access(self) -> None:
        assert render(n("expr:prop-access", _ident("a"), _ident("b"))) == "a.b"

    def test_optional_prop_access(self) -> None:
        tree = n("expr:prop-access", _ident("a"), _ident("b"), optional=True)
        assert render(tree) == "a?.b"

    def test_integer_object_parenthesized(self) -> None:
        assert render(n("expr:prop-access", _num(1), _ident("x"))) == "(1).x"

    def test_decimal_object_not_parenthesized(self) -> None:
        assert render(n("expr:prop-access", _num(1.5), _ident("x"))) == "1.5.x"

    def test_negative_object_parenthesized(self) -> None:
        assert render(n("expr:prop-access", _num(-1), _ident("x"))) == "(-1).x"

    def test_elem_access(self) -> None:
        assert render(n("expr:elem-access", _ident("a"), _num(0))) == "a[0]"
        tree = n("expr:elem-access", _ident("a"), _num(0), optional=True)
        assert render(tree) == "a?.[0]"

    def test_parens(self) -> None:
        assert render(n("expr:parens", _ident("a"))) == "(a)"

    def test_chained_member_call(self) -> None:
        member = n("expr:prop-access", _ident("console"), _ident("log"))
        assert render(n("expr:call", member, _str("hi"))) == 'console.log("hi")'


# ===========================================================================
# Types
# ===========================================================================


class TestTypes:
    def test_primitive(self) -> None:
        assert render(_prim("unknown")) == "unknown"

    def test_qualified_reference_with_arguments(self) -> None:
        tree = n("t:ref", _ident("A"), _ident("B"), _ref("T"), _ref("U"))
        assert render(tree) == "A.B<T,U>"

    def test_conditional_type(self) -> None:
        tree = n("t:cond", _ref("T"), _prim("string"), _prim("number"), _prim("never"))
        assert render(tree) == "T extends string?number:never"

    def test_nested_conditional_check_parenthesized(self) -> None:
        inner = n("t:cond", _ref("A"), _ref("B"), _ref("C"), _ref("D"))
        tree = n("t:cond", inner, _ref("E"), _ref("F"), _ref("G"))
        assert render(tree) == "(A extends B?C:D) extends E?F:G"

    def test_indexed(self) -> None:
        assert render(n("t:indexed", _ref("T"), _ref("K"))) == "T[K]"

    def test_type_param(self) -> None:
        tree = n("t:param", _ident("T"), _prim("object"), n("p:type", _prim("any")))
        assert render(tree) == "T extends object=any"

    def test_predicates(self) -> None:
        assert render(n("t:predicate", _ident("x"), _prim("string"))) == "x is string"
        assert render(n("t:predicate", _ident("x"), asserts=True)) == "asserts x"
        tree = n("t:predicate", _ident("x"), _prim("string"), asserts=True)
        assert render(tree) == "asserts x is string"

    def test_passthroughs(self) -> None:
        assert render(n("p:var-name", _ident("x"))) == "x"
        assert render(n("p:fun-name", _ident("f"))) == "f"
        assert render(n("p:type", _prim("void"))) == "void"


# ===========================================================================
# Functions and statements
# ===========================================================================


class TestFunctions:
    def test_anonymous_function_expression(self) -> None:
        assert render(n("expr:function", _block())) == "function(){}"

    def test_async_generator_function(self) -> None:
        tree = n(
            "expr:function",
            _ident("f"),
            n("param", _ident("a"), _prim("number")),
            _prim("void"),
            _block(),
            is_async=True,
            generator=True,
        )
        assert render(tree) == "async function* f(a:number):void{}"

    def test_function_declaration(self) -> None:
        tree = n(
            "function-declaration",
            n("p:fun-name", _ident("f")),
            n("param", _ident("a"), _num(1)),
            _block(n("expr:statement", _call("g"))),
        )
        assert render(tree) == "function f(a=1){g();}"

    def test_arrow_function(self) -> None:
        tree = n("arrow-function", n("param", _ident("a")), n("param", _ident("b")), _ident("a"))
        assert render(tree) == "(a,b)=>a"

    def test_arrow_with_type_parameters(self) -> None:
        tree = n(
            "arrow-function",
            n("t:param", _ident("T")),
            n("param", _ident("x"), _ref("T")),
            _ref("T"),
            _ident("x"),
        )
        assert render(tree) == "<T>(x:T):T=>x"

    def test_async_arrow(self) -> None:
        tree = n("arrow-function", n("param", _ident("x")), _ident("x"), is_async=True)
        assert render(tree) == "async (x)=>x"

    def test_arrow_object_body_parenthesized(self) -> None:
        assert render(n("arrow-function", n("l:object"))) == "()=>({})"

    def test_arrow_documented_object_body_parenthesized(self) -> None:
        body = n("l:object", docs=n("text", value="d"))
        assert render(n("arrow-function", body)) == "()=>(/** d */{})"

    def test_arrow_block_body(self) -> None:
        assert render(n("arrow-function", _block())) == "()=>{}"

    def test_rest_and_optional_params(self) -> None:
        tree = n(
            "arrow-function",
            n("param", _ident("a"), _prim("number"), optional=True),
            n("param", _ident("args"), rest=True),
            _ident("args"),
        )
        assert render(tree) == "(a?:number,...args)=>args"

    def test_destructured_param(self) -> None:
        pattern = n("bind:object", _ident("a"))
        tree = n("arrow-function", n("param", pattern, n("l:object")), _ident("a"))
        assert render(tree) == "({a}={})=>a"


class TestStatements:
    def test_expression_statement(self) -> None:
        assert render(_stmt(_call("f"))) == "f();"

    def test_object_statement_parenthesized(self) -> None:
        assert render(_stmt(n("l:object"))) == "({});"

    def test_function_statement_parenthesized(self) -> None:
        assert render(_stmt(n("expr:function", _block()))) == "(function(){});"

    def test_async_function_statement_parenthesized(self) -> None:
        function = n("expr:function", _block(), is_async=True)
        assert render(_stmt(function)) == "(async function(){});"

    def test_identifier_starting_with_function_not_parenthesized(self) -> None:
        assert render(_stmt(_call("functional"))) == "functional();"

    def test_block(self) -> None:
        declaration = n("var:statement", _decl_list("let", n("var:declaration", _ident("x"), _num(1))))
        assert render(_block(declaration, _stmt(_call("f")))) == "{let x=1;f();}"

    def test_exact_literal(self) -> None:
        assert render(_block(n("exact-literal", value="debugger;"))) == "{debugger;}"

    def test_if(self) -> None:
        assert render(n("if-statement", _ident("a"), _stmt(_call("f")))) == "if(a)f();"

    def test_if_else_statement(self) -> None:
        tree = n("if-statement", _ident("a"), _stmt(_call("f")), _stmt(_call("g")))
        assert render(tree) == "if(a)f();else g();"

    def test_if_else_block(self) -> None:
        assert render(n("if-statement", _ident("a"), _block(), _block())) == "if(a){}else{}"

    def test_dangling_else_braced(self) -> None:
        inner = n("if-statement", _ident("b"), _stmt(_call("f")))
        tree = n("if-statement", _ident("a"), inner, _stmt(_call("g")))
        assert render(tree) == "if(a){if(b)f();}else g();"

    def test_else_if(self) -> None:
        inner = n("if-statement", _ident("b"), _block())
        tree = n("if-statement", _ident("a"), _block(), inner)
        assert render(tree) == "if(a){}else if(b){}"

    def test_empty_exact_literal_alternate(self) -> None:
        tree = n("if-statement", _ident("a"), _block(), n("exact-literal", value=""))
        assert render(tree) == "if(a){}else"


# ===========================================================================
# Binding patterns
# ===========================================================================


class TestBindingPatterns:
    def _elem(self, *children: Node, **props: str) -> Node:
        return n("bind:object-elem", *children, **props)

    def test_property_rename(self) -> None:
        tree = n("bind:object", self._elem(_ident("a"), _ident("b"), mode="property"))
        assert render(tree) == "{a:b}"

    def test_property_with_string_key(self) -> None:
        tree = n("bind:object", self._elem(_str("a-b"), _ident("c"), mode="property"))
        assert render(tree) == '{"a-b":c}'

    def test_property_with_default(self) -> None:
        tree = n("bind:object", self._elem(_ident("a"), _ident("b"), _num(1)))
        assert render(tree) == "{a:b=1}"

    def test_nested_pattern(self) -> None:
        tree = n("bind:object", self._elem(_ident("a"), n("bind:object", _ident("b"))))
        assert render(tree) == "{a:{b}}"

    def test_object_rest(self) -> None:
        tree = n("bind:object", _ident("a"), self._elem(_ident("rest"), mode="rest"))
        assert render(tree) == "{a,...rest}"

    def test_plain_element(self) -> None:
        assert render(n("bind:object", self._elem(_ident("a")))) == "{a}"

    def test_array_rest(self) -> None:
        rest = n("bind:array-elem", _ident("rest"), rest=True)
        assert render(n("bind:array", _ident("a"), rest)) == "[a,...rest]"

    def test_nested_array_patterns(self) -> None:
        tree = n("bind:array", n("bind:array", _ident("a")), n("bind:object", _ident("b")))
        assert render(tree) == "[[a],{b}]"

    def test_empty_patterns(self) -> None:
        assert render(n("bind:object")) == "{}"
        assert render(n("bind:array")) == "[]"


# ===========================================================================
# Docs, determinism, errors, logging
# ===========================================================================


class TestRenderer:
    def test_docs_precede_node(self) -> None:
        statement = n(
            "var:statement",
            _decl_list("const", n("var:declaration", _ident("x"), _num(42))),
            docs=n("text", value="The answer"),
        )
        assert render(statement) == "/** The answer */const x=42;"

    def test_text_node_renders_as_doc_comment(self) -> None:
        assert render(n("text", value="a */ b")) == "/** a *\\/ b */"

    def test_deterministic(self, destructuring_tree: Node) -> None:
        assert render(destructuring_tree) == render(destructuring_tree)

    def test_instances_agree(self, destructuring_tree: Node) -> None:
        assert Renderer().render(destructuring_tree) == render(destructuring_tree)

    def test_node_render_method(self, destructuring_tree: Node) -> None:
        assert destructuring_tree.render() == render(destructuring_tree)

    def test_missing_handler_raises(self) -> None:
        renderer = Renderer()
        del renderer._handlers[Kind.IDENT]
        assert not renderer.supports(Kind.IDENT)
        with pytest.raises(UnrenderableNodeError) as info:
            renderer.render(_ident("x"))
        assert info.value.kind == "ident"

    def test_unrenderable_is_not_a_validation_error(self) -> None:
        from jastx.validator.errors import NodeValidationError

        assert not issubclass(UnrenderableNodeError, NodeValidationError)

    def test_top_level_render_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="jastx.renderer.renderer")
        render(_ident("x"))
        assert "Rendered ident tree" in caplog.text
