"""
Parameter lists for stored procedure calls.

A :class:`ProcedureSignature` declares the exact parameter names a
procedure accepts; :func:`build_params` fills them from a request body
(and session-derived values), coercing numbers and flags with safe
defaults. The resulting mapping always has exactly the declared names.
"""

import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from mercass.database.core.commands import Procedure

_TRUE = {"1", "true", "on", "yes"}
_FALSE = {"0", "false", "off", "no", ""}


def try_parse_int(value: Any, default: Any = 0) -> Any:
    """Parse ``value`` as an integer, falling back to ``default``.

    Leading integer parts of decimals are kept (``"12.7"`` gives 12).
    NaN and infinities are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    text = str(value).strip()
    if not text:
        return default
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return default
    return int(number) if math.isfinite(number) else default


def try_parse_float(value: Any, default: Any = 0.0) -> Any:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return default
    else:
        text = str(value).strip().replace(",", ".")
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    return number if math.isfinite(number) else default


def parse_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return default


def _as_str(value: Any, default: Any = None) -> Any:
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def _as_raw(value: Any, default: Any = None) -> Any:
    return default if value is None else value


def _as_json(value: Any, default: Any = None) -> Any:
    """Lists and objects travel to the store as JSON text."""
    if value is None:
        value = default
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


_COERCERS = {
    "str": _as_str,
    "int": try_parse_int,
    "float": try_parse_float,
    "bool": parse_bool,
    "raw": _as_raw,
    "json": _as_json,
}


@dataclass(frozen=True)
class Param:
    """One declared procedure parameter.

    Attributes
    ----------
    name : str
        Parameter name as the procedure declares it (without ``@``).
    source : str or tuple of str, optional
        Body field(s) feeding the parameter when it is named differently;
        the first field present wins.
    kind : str
        Coercion applied to the incoming value: ``str``, ``int``,
        ``float``, ``bool``, ``json`` or ``raw``.
    default : Any
        Value used when the field is missing or cannot be coerced.
    """

    name: str
    source: Optional[Union[str, Tuple[str, ...]]] = None
    kind: str = "raw"
    default: Any = None

    def __post_init__(self):
        if self.kind not in _COERCERS:
            raise ValueError(f"Unknown parameter kind: {self.kind}")

    @property
    def sources(self) -> Tuple[str, ...]:
        if self.source is None:
            return (self.name,)
        if isinstance(self.source, str):
            return (self.source,)
        return tuple(self.source)

    def value_from(self, body: Mapping[str, Any], extra: Mapping[str, Any]) -> Any:
        if self.name in extra:
            raw = extra[self.name]
        else:
            raw = None
            for key in self.sources:
                if body.get(key) is not None:
                    raw = body[key]
                    break
        return _COERCERS[self.kind](raw, self.default)


@dataclass(frozen=True)
class ProcedureSignature:
    name: str
    params: Tuple[Param, ...] = field(default_factory=tuple)

    @property
    def param_names(self) -> Tuple[str, ...]:
        return tuple(param.name for param in self.params)

    def command(self, body: Mapping[str, Any], extra: Optional[Mapping[str, Any]] = None) -> Procedure:
        return Procedure(self.name, build_params(self, body, extra))


def build_params(signature: ProcedureSignature, body: Mapping[str, Any], extra: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Fill every declared parameter of ``signature`` and nothing else."""
    extra = extra or {}
    return {param.name: param.value_from(body, extra) for param in signature.params}


def signature(name: str, *params) -> ProcedureSignature:
    """Shorthand: plain strings become pass-through (``raw``) parameters."""
    return ProcedureSignature(name, tuple(p if isinstance(p, Param) else Param(p) for p in params))


def constant(name: str, value: Any) -> Param:
    """A parameter that always carries ``value`` whatever the body holds."""
    return Param(name, source=(), default=value)
