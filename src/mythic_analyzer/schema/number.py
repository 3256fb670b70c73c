"""Numeric leaf schema with optional bounds and integer constraint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from mythic_analyzer.models.results import Diagnostic, ValidationResult
from mythic_analyzer.parser.nodes import Node, ScalarNode
from mythic_analyzer.schema.base import (
    Schema,
    SchemaContext,
    SchemaKind,
    ValueOrFn,
    expected_type_message,
    resolve,
)

if TYPE_CHECKING:
    from mythic_analyzer.document import MythicDoc
    from mythic_analyzer.workspace import Workspace


@dataclass(frozen=True, eq=False)
class SchemaNumber(Schema):
    """A number, optionally bounded.

    Constraints are checked in order (minimum, maximum, integer) and the first
    violation is the only one reported.
    """

    kind: ClassVar[SchemaKind] = SchemaKind.NUMBER

    min: ValueOrFn[float | None] = None
    max: ValueOrFn[float | None] = None
    min_inclusive: ValueOrFn[bool] = True
    max_inclusive: ValueOrFn[bool] = True
    integer: ValueOrFn[bool] = field(default=False, kw_only=True)

    def internal_name(self, ctx: SchemaContext) -> str:
        minimum = resolve(self.min, ctx)
        maximum = resolve(self.max, ctx)
        name = "integer" if resolve(self.integer, ctx) else "number"
        if minimum is None and maximum is None:
            return name
        lower = "" if minimum is None else _fmt(minimum)
        upper = "" if maximum is None else _fmt(maximum)
        if minimum is not None and resolve(self.min_inclusive, ctx):
            lower += "="
        if maximum is not None and resolve(self.max_inclusive, ctx):
            upper = "=" + upper
        return f"{name}({lower}..{upper})"

    def _partial_process(self, ws: Workspace, doc: MythicDoc, value: Node) -> ValidationResult:
        result = ValidationResult()
        ctx = SchemaContext(ws, doc, value)
        num = value.value if isinstance(value, ScalarNode) else None
        if isinstance(num, bool) or not isinstance(num, int | float):
            result.diagnostics.append(
                Diagnostic(
                    range=doc.node_range(value),
                    message=expected_type_message(self, ctx),
                    code="yaml-invalid-type",
                )
            )
            return result

        minimum = resolve(self.min, ctx)
        if minimum is not None:
            inclusive = resolve(self.min_inclusive, ctx)
            below = num < minimum if inclusive else num <= minimum
            bound = "at least" if inclusive else "greater than"
            if below:
                result.diagnostics.append(
                    Diagnostic(
                        range=doc.node_range(value),
                        message=f"Expected value to be {bound} {_fmt(minimum)}, but got {_fmt(num)}.",
                        code="yaml-number-out-of-range",
                    )
                )
                return result

        maximum = resolve(self.max, ctx)
        if maximum is not None:
            inclusive = resolve(self.max_inclusive, ctx)
            above = num > maximum if inclusive else num >= maximum
            bound = "at most" if inclusive else "less than"
            if above:
                result.diagnostics.append(
                    Diagnostic(
                        range=doc.node_range(value),
                        message=f"Expected value to be {bound} {_fmt(maximum)}, but got {_fmt(num)}.",
                        code="yaml-number-out-of-range",
                    )
                )
                return result

        if resolve(self.integer, ctx) and not float(num).is_integer():
            result.diagnostics.append(
                Diagnostic(
                    range=doc.node_range(value),
                    message=f"Expected value to be an integer, but got {_fmt(num)}.",
                    code="yaml-number-not-integer",
                )
            )
            return result

        self._add_highlight(doc, value, result)
        return result


def _fmt(num: float) -> str:
    if isinstance(num, float) and num.is_integer():
        return str(int(num))
    return str(num)
