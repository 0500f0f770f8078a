"""jastx Validator: structural checks for proposed nodes.

The ``Validator`` runs a configurable set of rules against the inputs of a
node (kind, properties, children, docs) and returns a list of
``Diagnostic`` objects.  ``check`` turns error diagnostics into a
``NodeValidationError``; every ``Node`` runs it once, at construction.
In strict mode, warnings are promoted to errors.

Usage
-----
::

    from jastx.validator import Validator

    validator = Validator()
    diagnostics = validator.validate("var:declaration-list", {}, ())
    errors = [d for d in diagnostics if d.is_error]
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from jastx.taxonomy.kinds import Kind
from jastx.validator.diagnostics import Diagnostic, DiagnosticSeverity
from jastx.validator.errors import NodeValidationError
from jastx.validator.rules import DEFAULT_RULES, Draft, Rule

if TYPE_CHECKING:
    from jastx.ast.nodes import Node

logger = logging.getLogger(__name__)


class Validator:
    """Structural validator for jastx nodes.

    Parameters
    ----------
    rules:
        The list of validation rules to run.  Defaults to all built-in
        rules (``DEFAULT_RULES``).  Pass a custom list to extend or
        restrict which rules apply.
    strict:
        When ``True``, WARNING-level diagnostics are promoted to ERROR
        severity, so ``check`` rejects nodes that only have warnings.
    """

    def __init__(
        self,
        rules: list[Rule] | None = None,
        strict: bool = False,
    ) -> None:
        self._rules: list[Rule] = rules if rules is not None else list(DEFAULT_RULES)
        self._strict: bool = strict

    def validate(
        self,
        kind: Kind | str,
        props: Mapping[str, object] | None = None,
        children: Iterable[object] = (),
        docs: object | None = None,
    ) -> list[Diagnostic]:
        """Run all rules against a proposed node.

        Parameters
        ----------
        kind:
            A ``Kind`` or its tag string.
        props:
            The proposed property bag.
        children:
            The proposed children, in order.
        docs:
            The proposed leading documentation node, if any.

        Returns
        -------
        list[Diagnostic]
            All findings, ordered by child position.  Empty if the node is
            well-formed.
        """
        try:
            resolved = Kind.parse(kind)
        except ValueError:
            return [Diagnostic(
                severity=DiagnosticSeverity.ERROR,
                code="JSX001",
                message=f"Unknown node kind {kind!r}",
                kind=str(kind),
                found=str(kind),
                suggestion="Run 'jastx kinds' to list the supported kinds",
                rule="kind",
            )]

        draft = Draft(
            kind=resolved,
            props=dict(props or {}),
            children=tuple(children),
            docs=docs,
        )
        all_diagnostics: list[Diagnostic] = []
        for rule in self._rules:
            try:
                all_diagnostics.extend(rule(draft))
            except Exception as exc:  # noqa: BLE001
                # Rule implementation errors should not crash the validator;
                # record them as internal errors instead.
                all_diagnostics.append(
                    Diagnostic(
                        severity=DiagnosticSeverity.ERROR,
                        code="JSX999",
                        message=f"Internal validator error in rule {rule.__name__!r}: {exc}",
                        kind=resolved.value,
                        suggestion="Please report this as a bug",
                        rule=rule.__name__,
                    )
                )

        if self._strict:
            all_diagnostics = [
                Diagnostic(
                    severity=DiagnosticSeverity.ERROR,
                    code=d.code,
                    message=d.message,
                    kind=d.kind,
                    position=d.position,
                    expected=d.expected,
                    found=d.found,
                    suggestion=d.suggestion,
                    rule=d.rule,
                    path=d.path,
                )
                if d.severity == DiagnosticSeverity.WARNING
                else d
                for d in all_diagnostics
            ]

        # Node-level findings first, then by child position
        all_diagnostics.sort(key=lambda d: -1 if d.position is None else d.position)
        return all_diagnostics

    def check(
        self,
        kind: Kind | str,
        props: Mapping[str, object] | None = None,
        children: Iterable[object] = (),
        docs: object | None = None,
    ) -> list[Diagnostic]:
        """Validate a proposed node and raise if it has errors.

        Returns
        -------
        list[Diagnostic]
            The non-blocking findings (warnings, hints) of an accepted node.

        Raises
        ------
        NodeValidationError
            If any ERROR-level diagnostic was produced.
        """
        children = tuple(children)
        diagnostics = self.validate(kind, props, children, docs)
        if any(d.is_error for d in diagnostics):
            logger.debug(
                "Rejected %s node: %d diagnostic(s)",
                kind,
                len(diagnostics),
            )
            raise NodeValidationError(kind=str(kind), diagnostics=tuple(diagnostics))
        return diagnostics

    def validate_tree(self, root: "Node") -> list[Diagnostic]:
        """Re-run all rules over every node of a constructed tree.

        Constructed nodes have no errors under the default rules, so this is
        mainly useful for collecting warnings, or for checking a tree
        against a stricter validator.  Diagnostics carry the path of the
        node they belong to (``$.children[0].children[2]``).
        """
        diagnostics: list[Diagnostic] = []
        stack: list[tuple[str, "Node"]] = [("$", root)]
        while stack:
            path, node = stack.pop()
            found = self.validate(node.kind, node.props, node.children, node.docs)
            diagnostics.extend(d.at(path) for d in found)
            if node.docs is not None:
                stack.append((f"{path}.docs", node.docs))
            for index in range(len(node.children) - 1, -1, -1):
                stack.append((f"{path}.children[{index}]", node.children[index]))
        return diagnostics

    def add_rule(self, rule: Rule) -> None:
        """Add a custom rule to this validator instance.

        Parameters
        ----------
        rule:
            A callable ``(Draft) -> list[Diagnostic]``.
        """
        self._rules.append(rule)

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def rule_count(self) -> int:
        """Return the number of rules currently registered."""
        return len(self._rules)


_DEFAULT_VALIDATOR = Validator()


def default_validator() -> Validator:
    """Return the shared non-strict validator used at node construction."""
    return _DEFAULT_VALIDATOR


def validate(
    kind: Kind | str,
    props: Mapping[str, object] | None = None,
    children: Iterable[object] = (),
    docs: object | None = None,
    strict: bool = False,
) -> list[Diagnostic]:
    """Convenience function: validate a proposed node with default rules.

    Returns
    -------
    list[Diagnostic]
        All findings for the proposed node.
    """
    return Validator(strict=strict).validate(kind, props, children, docs)
