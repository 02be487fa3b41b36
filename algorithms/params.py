"""
params.py — Parameter Schema & Input Adapter
=============================================
Each algorithm declares an ordered list of ParamSpec fields.  The UI
builds its form from them; parse_params() turns the raw form values
back into typed runner parameters.

Kinds:
  • "array"  – comma separated numbers  →  list of int/float
  • "number" – a single number          →  int or float
  • "range"  – a slider number          →  int or float, bounded by min/max

Runners never re-validate: anything that reaches them went through here.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

Number = Union[int, float]

KINDS = ("array", "number", "range")


class ParameterError(ValueError):
    """Raised when a raw value cannot be parsed for a field."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


@dataclass(frozen=True)
class ParamSpec:
    label:   str
    id:      str
    kind:    str
    default: Any
    min:     Optional[Number] = None
    max:     Optional[Number] = None
    step:    Optional[Number] = None

    def __post_init__(self):
        if self.kind not in KINDS:
            raise ValueError(f"Unknown parameter kind: {self.kind}")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def parse_number(field: str, value: Any) -> Number:
    if isinstance(value, bool):
        raise ParameterError(field, f"expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip()
        if not text:
            raise ParameterError(field, "a number is required")
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise ParameterError(field, f"not a number: {text!r}") from None
    if isinstance(number, float) and not math.isfinite(number):
        raise ParameterError(field, f"not a finite number: {value!r}")
    return number


def parse_array(field: str, value: Any) -> List[Number]:
    if isinstance(value, (list, tuple)):
        return [parse_number(field, v) for v in value]
    text = str(value).strip()
    if not text:
        return []
    return [parse_number(field, part) for part in text.split(",")]


def parse_params(specs: Sequence[ParamSpec], raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Parse raw form values against the schema.

    Fields absent from `raw` take the spec default.  Raises ParameterError
    on the first malformed or out-of-range field.
    """
    params: Dict[str, Any] = {}
    for spec in specs:
        value = raw.get(spec.id, spec.default)
        if spec.kind == "array":
            params[spec.id] = parse_array(spec.id, value)
            continue

        number = parse_number(spec.id, value)
        if spec.min is not None and number < spec.min:
            raise ParameterError(spec.id, f"{number} is below the minimum {spec.min}")
        if spec.max is not None and number > spec.max:
            raise ParameterError(spec.id, f"{number} is above the maximum {spec.max}")
        params[spec.id] = number
    return params


def default_params(specs: Sequence[ParamSpec]) -> Dict[str, Any]:
    return parse_params(specs, {})
