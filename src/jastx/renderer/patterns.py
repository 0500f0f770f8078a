"""Joiners for collections, binding patterns and declarations.

These helpers take child texts that were already rendered and only decide
the punctuation between them.  Output is minimally spaced: commas carry no
trailing space and ``=``/``:`` carry no surrounding spaces.
"""
from __future__ import annotations

from collections.abc import Iterable


def join_elements(texts: Iterable[str]) -> str:
    return ",".join(texts)


def format_object_literal(members: Iterable[str]) -> str:
    """``{a:1,b}``; an object without members renders as ``{}``."""
    return "{" + join_elements(members) + "}"


def format_array_literal(elements: Iterable[str]) -> str:
    """``[1,2]``; an array without elements renders as ``[]``."""
    return "[" + join_elements(elements) + "]"


def format_object_pattern(elements: Iterable[str]) -> str:
    return "{" + join_elements(elements) + "}"


def format_array_pattern(elements: Iterable[str]) -> str:
    return "[" + join_elements(elements) + "]"


def format_binding_default(target: str, default: str | None = None) -> str:
    """Attach an optional default value: ``target`` or ``target=default``."""
    if default is None:
        return target
    return f"{target}={default}"


def format_rest(target: str) -> str:
    return f"...{target}"


def format_declarator(
    target: str,
    type_text: str | None = None,
    initializer: str | None = None,
) -> str:
    """Render one declarator: ``target[:type][=initializer]``.

    Parameters
    ----------
    target:
        The rendered binding name or pattern.
    type_text:
        The rendered type annotation, if any.
    initializer:
        The rendered initializer expression, if any.
    """
    text = target
    if type_text is not None:
        text += f":{type_text}"
    return format_binding_default(text, initializer)


def format_declaration_list(declaration_kind: str, declarators: Iterable[str]) -> str:
    """Render ``const a=1,b=2``.  No terminator is added."""
    return f"{declaration_kind} {join_elements(declarators)}"
