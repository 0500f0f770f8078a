"""jastx Validator module.

Exports the ``Validator`` class, the ``validate`` convenience function,
``Diagnostic`` types, the construction error, the per-kind shapes, and all
built-in validation rules.
"""
from __future__ import annotations

from jastx.validator.diagnostics import Diagnostic, DiagnosticSeverity
from jastx.validator.errors import NodeValidationError
from jastx.validator.rules import DEFAULT_RULES, Draft, Rule
from jastx.validator.shapes import SHAPES, PropSpec, Shape, Slot, shape_of
from jastx.validator.validator import Validator, default_validator, validate

__all__ = [
    "Validator",
    "validate",
    "default_validator",
    "Diagnostic",
    "DiagnosticSeverity",
    "NodeValidationError",
    "Draft",
    "Rule",
    "DEFAULT_RULES",
    "SHAPES",
    "Shape",
    "Slot",
    "PropSpec",
    "shape_of",
]
