# src/yamlbind/core/coercion.py
"""
Motor de coerção de tipos entre nós do documento e campos declarados.

Responsabilidades:
  - converter o valor bruto de um nó para o tipo declarado de um campo
    (`read`), inclusive tipos genéricos como `List[str]` ou `Dict[str, int]`
  - gravar o valor de um campo em um nó (`write`), materializando o nó
  - manter um registro de conversores indexado por descritor de tipo

Política de falha:
  - o registro de conversores falha **explicitamente** (`CoercionError`)
  - `read` converte essa falha em ausência (`None`), e o chamador deve
    tratar ausência como "manter o valor atual do campo"

Notas:
  - tipos primitivos (str, int, float, bool) usam os extratores diretos
    do nó, com fallback embutido, e não o conversor genérico
  - um escalar nunca é promovido a lista de um elemento
"""

from __future__ import annotations

import collections.abc
import types
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Union, get_args, get_origin

from .errors import CoercionError

if TYPE_CHECKING:  # pragma: no cover
    from .document.node import DocumentNode


Converter = Callable[[Any, Any, "CoercionRegistry"], Any]

TRUE_STRINGS = frozenset({"true", "yes", "on"})
FALSE_STRINGS = frozenset({"false", "no", "off"})


# -----------------------------
# Helpers — scalar coercions
# -----------------------------

def _is_blank(v: Any) -> bool:
    if v is None:
        return True
    if isinstance(v, str) and v.strip() == "":
        return True
    return False


def _is_structured(v: Any) -> bool:
    return isinstance(v, (collections.abc.Mapping, list, tuple, set, frozenset))


def coerce_string(v: Any) -> Optional[str]:
    if v is None or _is_structured(v):
        return None
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, Enum):
        return str(v.value)
    return str(v)


def coerce_int(v: Any) -> Optional[int]:
    if _is_blank(v):
        return None
    if isinstance(v, bool):
        # evita True/False virar 1/0
        return None
    if isinstance(v, int):
        return int(v)
    if isinstance(v, float):
        if v.is_integer():
            return int(v)
        return None
    if not isinstance(v, str):
        return None
    s = v.strip()
    if s.startswith(("+", "-")):
        sign = s[0]
        digits = s[1:]
    else:
        sign = ""
        digits = s
    # isdigit() aceita dígitos Unicode (ex.: "²") que int() rejeita
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(f"{sign}{digits}")


def coerce_float(v: Any) -> Optional[float]:
    if _is_blank(v):
        return None
    if isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return float(v)
    if not isinstance(v, str):
        return None
    try:
        return float(v.strip())
    except ValueError:
        return None


def coerce_bool(v: Any) -> Optional[bool]:
    if _is_blank(v):
        return None
    if isinstance(v, bool):
        return bool(v)
    if not isinstance(v, str):
        return None
    s = v.strip().lower()
    if s in TRUE_STRINGS:
        return True
    if s in FALSE_STRINGS:
        return False
    return None


def to_plain(value: Any) -> Any:
    """Copia um valor do documento para tipos Python puros (dict/list/str/...)."""
    if isinstance(value, collections.abc.Mapping):
        return {to_plain(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    if isinstance(value, str):
        return str(value)
    return value


# -----------------------------
# Converters
# -----------------------------

def _scalar(fn: Callable[[Any], Any], name: str) -> Converter:
    def convert(value: Any, hint: Any, registry: "CoercionRegistry") -> Any:
        out = fn(value)
        if out is None:
            raise CoercionError(f"Cannot convert {value!r} to {name}")
        return out

    return convert


def _require_sequence(value: Any, hint: Any) -> None:
    if not isinstance(value, (list, tuple)):
        raise CoercionError(f"Expected a sequence for {hint!r}, got {type(value).__name__}")


def _convert_list(value: Any, hint: Any, registry: "CoercionRegistry") -> Any:
    _require_sequence(value, hint)
    args = get_args(hint)
    item = args[0] if args else Any
    return [registry.convert(v, item) for v in value]


def _convert_set(value: Any, hint: Any, registry: "CoercionRegistry") -> Any:
    _require_sequence(value, hint)
    args = get_args(hint)
    item = args[0] if args else Any
    items = [registry.convert(v, item) for v in value]
    try:
        out = set(items)
    except TypeError as e:
        raise CoercionError(f"Unhashable element for {hint!r}") from e
    if get_origin(hint) is frozenset or hint is frozenset:
        return frozenset(out)
    return out


def _convert_tuple(value: Any, hint: Any, registry: "CoercionRegistry") -> Any:
    _require_sequence(value, hint)
    args = get_args(hint)
    if not args:
        return tuple(to_plain(v) for v in value)
    if len(args) == 2 and args[1] is Ellipsis:
        return tuple(registry.convert(v, args[0]) for v in value)
    if len(args) != len(value):
        raise CoercionError(f"Expected {len(args)} elements for {hint!r}, got {len(value)}")
    return tuple(registry.convert(v, a) for v, a in zip(value, args))


def _convert_mapping(value: Any, hint: Any, registry: "CoercionRegistry") -> Any:
    if not isinstance(value, collections.abc.Mapping):
        raise CoercionError(f"Expected a mapping for {hint!r}, got {type(value).__name__}")
    args = get_args(hint)
    kt, vt = args if len(args) == 2 else (Any, Any)
    return {registry.convert(k, kt): registry.convert(v, vt) for k, v in value.items()}


def _convert_union(value: Any, hint: Any, registry: "CoercionRegistry") -> Any:
    for member in get_args(hint):
        if member is type(None):
            if value is None:
                return None
            continue
        try:
            return registry.convert(value, member)
        except CoercionError:
            continue
    raise CoercionError(f"Cannot convert {value!r} to any member of {hint!r}")


def _convert_enum(value: Any, hint: Any, registry: "CoercionRegistry") -> Any:
    try:
        return hint(value)
    except ValueError:
        pass
    if isinstance(value, str) and value in hint.__members__:
        return hint[value]
    raise CoercionError(f"{value!r} is not a valid {hint.__name__}")


class CoercionRegistry:
    """Registro de conversores indexado por descritor de tipo.

    A busca considera, nesta ordem: o descritor exato, a origem do tipo
    genérico (`list` para `List[int]`) e, para subclasses de `Enum`,
    o conversor registrado em `Enum`.
    """

    def __init__(self) -> None:
        self._converters: Dict[Any, Converter] = {}

    def register(self, hint: Any, converter: Converter) -> None:
        self._converters[hint] = converter

    def copy(self) -> "CoercionRegistry":
        other = CoercionRegistry()
        other._converters = dict(self._converters)
        return other

    def _lookup(self, hint: Any) -> Optional[Converter]:
        try:
            found = self._converters.get(hint)
        except TypeError:
            found = None
        if found is not None:
            return found
        origin = get_origin(hint)
        if origin is not None:
            found = self._converters.get(origin)
            if found is not None:
                return found
        if isinstance(hint, type) and issubclass(hint, Enum):
            return self._converters.get(Enum)
        return None

    def convert(self, value: Any, hint: Any) -> Any:
        """Converte `value` para `hint`, levantando `CoercionError` em caso de falha."""
        if hint is Any or hint is object:
            return to_plain(value)
        converter = self._lookup(hint)
        if converter is None:
            if isinstance(hint, type) and isinstance(value, hint):
                return value
            raise CoercionError(f"No converter registered for {hint!r}")
        return converter(value, hint, self)


def _build_default_registry() -> CoercionRegistry:
    reg = CoercionRegistry()
    reg.register(str, _scalar(coerce_string, "str"))
    reg.register(int, _scalar(coerce_int, "int"))
    reg.register(float, _scalar(coerce_float, "float"))
    reg.register(bool, _scalar(coerce_bool, "bool"))
    for hint in (list, collections.abc.Sequence, collections.abc.MutableSequence):
        reg.register(hint, _convert_list)
    for hint in (set, frozenset, collections.abc.Set, collections.abc.MutableSet):
        reg.register(hint, _convert_set)
    reg.register(tuple, _convert_tuple)
    for hint in (dict, collections.abc.Mapping, collections.abc.MutableMapping):
        reg.register(hint, _convert_mapping)
    reg.register(Union, _convert_union)
    union_type = getattr(types, "UnionType", None)
    if union_type is not None:
        reg.register(union_type, _convert_union)
    reg.register(Enum, _convert_enum)
    return reg


default_registry = _build_default_registry()


# -----------------------------
# Engine — node <-> field
# -----------------------------

_EXTRACTORS: Dict[type, Callable[["DocumentNode"], Any]] = {
    str: lambda node: node.get_string(None),
    int: lambda node: node.get_int(None),
    float: lambda node: node.get_double(None),
    bool: lambda node: node.get_boolean(None),
}


def _extractor_for(hint: Any) -> Optional[Callable[["DocumentNode"], Any]]:
    for primitive, extractor in _EXTRACTORS.items():
        if hint is primitive:
            return extractor
    return None


def write(node: "DocumentNode", value: Any) -> None:
    """Grava `value` no nó; ausência vira um mapa vazio para materializar o nó."""
    node.set({} if value is None else value)


def convert_node(node: "DocumentNode", hint: Any, registry: Optional[CoercionRegistry] = None) -> Any:
    """Converte o conteúdo do nó para `hint`.

    Retorna `None` quando o nó é virtual ou não tem conteúdo e levanta
    `CoercionError` quando o conteúdo existe mas não converte.
    """
    if node.virtual:
        return None
    raw = node.raw
    if raw is None:
        return None
    extractor = _extractor_for(hint)
    if extractor is not None:
        value = extractor(node)
        if value is None:
            raise CoercionError(f"Cannot convert {raw!r} to {hint.__name__}")
        return value
    return (registry or default_registry).convert(raw, hint)


def read(
    node: "DocumentNode",
    hint: Any,
    registry: Optional[CoercionRegistry] = None,
    on_error: Optional[Callable[[CoercionError], None]] = None,
) -> Any:
    """Lê o nó como `hint`; qualquer falha de conversão resulta em `None`."""
    try:
        return convert_node(node, hint, registry)
    except CoercionError as e:
        if on_error is not None:
            on_error(e)
        return None
