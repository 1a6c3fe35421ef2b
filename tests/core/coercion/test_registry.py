# tests/core/coercion/test_registry.py
"""
Testes do registro de conversores de tipos.

Este módulo valida a conversão entre valores do documento e tipos
declarados, incluindo tipos genéricos parametrizados.

Os testes asseguram que:
- escalares são convertidos de forma segura
- listas, mapas, conjuntos e tuplas são convertidos elemento a elemento
- falhas de conversão são explícitas (`CoercionError`)
- conversores próprios podem ser registrados sem afetar o registro padrão

Limites explícitos:
    - Não valida leitura a partir de nós do documento (ver test_read_write)
"""

from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Set, Tuple, Union

import pytest
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from tests.fixtures.configs.sample_configs import GameMode
from yamlbind import CoercionError, default_registry


def test_scalar_conversions():
    assert default_registry.convert("3", int) == 3
    assert default_registry.convert(" -7 ", int) == -7
    assert default_registry.convert(2.0, int) == 2
    assert default_registry.convert("2.5", float) == 2.5
    assert default_registry.convert(4, float) == 4.0
    assert default_registry.convert(12, str) == "12"
    assert default_registry.convert(True, str) == "true"
    assert default_registry.convert("YES", bool) is True
    assert default_registry.convert("off", bool) is False


@pytest.mark.parametrize(
    "value,hint",
    [
        (True, int),
        (2.5, int),
        ("abc", int),
        ("1e", float),
        (False, float),
        ("maybe", bool),
        (1, bool),
        ({"a": 1}, str),
        ("", int),
        ("²", int),
        ("+١٢", int),
    ],
)
def test_scalar_conversion_failures_are_explicit(value, hint):
    with pytest.raises(CoercionError):
        default_registry.convert(value, hint)


def test_list_of_strings_is_converted_element_wise():
    assert default_registry.convert(["a", 1, 2.5], List[str]) == ["a", "1", "2.5"]
    assert default_registry.convert(CommentedSeq(["x"]), Sequence[str]) == ["x"]


def test_scalar_is_not_promoted_to_list():
    with pytest.raises(CoercionError):
        default_registry.convert("x", List[str])


def test_mapping_converts_keys_and_values():
    raw = CommentedMap()
    raw["a"] = "1"
    raw["b"] = 2
    out = default_registry.convert(raw, Dict[str, int])
    assert out == {"a": 1, "b": 2}
    assert type(out) is dict


def test_nested_generics():
    raw = [{"x": "1"}, {"y": 2}]
    assert default_registry.convert(raw, List[Dict[str, int]]) == [{"x": 1}, {"y": 2}]


def test_mapping_rejects_sequence():
    with pytest.raises(CoercionError):
        default_registry.convert([1, 2], Dict[str, int])


def test_sets_and_frozensets():
    assert default_registry.convert([1, 1, "2"], Set[int]) == {1, 2}
    out = default_registry.convert(["a"], FrozenSet[str])
    assert out == frozenset({"a"})
    assert isinstance(out, frozenset)


def test_tuples():
    assert default_registry.convert([1, "a"], Tuple[int, str]) == (1, "a")
    assert default_registry.convert(["1", "2", "3"], Tuple[int, ...]) == (1, 2, 3)
    with pytest.raises(CoercionError):
        default_registry.convert([1], Tuple[int, str])


def test_optional_and_union():
    assert default_registry.convert(None, Optional[int]) is None
    assert default_registry.convert("5", Optional[int]) == 5
    assert default_registry.convert("x", Union[int, str]) == "x"
    with pytest.raises(CoercionError):
        default_registry.convert("x", Optional[int])


def test_enum_by_value_then_by_name():
    assert default_registry.convert("creative", GameMode) is GameMode.CREATIVE
    assert default_registry.convert("SURVIVAL", GameMode) is GameMode.SURVIVAL
    with pytest.raises(CoercionError):
        default_registry.convert("adventure", GameMode)


def test_any_returns_plain_copy():
    raw = CommentedMap()
    raw["k"] = CommentedSeq([1, 2])
    out = default_registry.convert(raw, Any)
    assert out == {"k": [1, 2]}
    assert type(out) is dict
    assert type(out["k"]) is list


def test_unknown_type_without_converter_fails():
    with pytest.raises(CoercionError):
        default_registry.convert("a/b", Path)


def test_registered_converter_on_copy_does_not_leak():
    reg = default_registry.copy()
    reg.register(Path, lambda value, hint, registry: Path(value))
    assert reg.convert("a/b", Path) == Path("a/b")
    assert reg.convert(["a"], List[Path]) == [Path("a")]
    with pytest.raises(CoercionError):
        default_registry.convert("a/b", Path)
