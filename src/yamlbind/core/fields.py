# src/yamlbind/core/fields.py
"""
Modelo de descritores de campos vinculados (bound fields).

Este módulo define como uma classe de configuração declara:
    - o arquivo que a sustenta (`@configuration_settings`)
    - os campos persistidos em chaves pontuadas (`config_key`)

A partir dessas declarações, uma tabela de campos é construída **uma única
vez por classe**, no momento da criação da classe, e reutilizada em todas
as hidratações subsequentes.

Responsabilidades do módulo:
    - Validar chaves pontuadas (sem segmentos vazios)
    - Validar unicidade de chave entre campos da mesma classe
    - Preservar a ordem de declaração dos campos
    - Resolver o tipo declarado de cada campo a partir das anotações
    - Fornecer o valor default explícito de cada campo

Decisões arquiteturais:
    - Apenas campos declarados na própria classe participam (não herdados)
    - Atributos sem `config_key` são ignorados e nunca tocam o documento
    - O default é declarado junto ao campo e desacoplado do valor atual
    - `default_factory` é chamado por instância (defaults mutáveis não são
      compartilhados entre instâncias)
    - Erros de declaração são fatais e detectados antes de qualquer I/O

Invariantes:
    - Cada campo possui um caminho não vazio de segmentos não vazios
    - Dois campos da mesma classe nunca compartilham uma chave
    - A tabela reflete exatamente a ordem de declaração

Limites explícitos:
    - Não lê nem escreve o documento (ver `hydration.py`)
    - Não converte valores (ver `coercion.py`)
"""

from __future__ import annotations

import typing
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .coercion import CoercionRegistry
from .document.loader import LoaderOptions
from .errors import DeclarationError, DuplicateKeyError, MalformedKeyError
from .paths import is_well_formed, resolve

SETTINGS_ATTR = "__yamlbind_settings__"
FIELDS_ATTR = "__yamlbind_fields__"


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


# -----------------------------
# Class-level declaration
# -----------------------------

@dataclass(frozen=True)
class ConfigurationSettings:
    """Arquivo que sustenta uma classe de configuração.

    `data_dir` em branco significa o próprio diretório base.
    """

    name: str
    data_dir: str = ""
    options: LoaderOptions = field(default_factory=LoaderOptions)
    registry: Optional[CoercionRegistry] = field(default=None, compare=False)


def configuration_settings(
    name: str,
    data_dir: str = "",
    *,
    options: Optional[LoaderOptions] = None,
    registry: Optional[CoercionRegistry] = None,
) -> Callable[[type], type]:
    """Decorador de classe que declara o arquivo de configuração.

    Args:
        name (str): Nome do arquivo (ex.: `config.yml`).
        data_dir (str): Subdiretório opcional relativo ao diretório base.
        options (Optional[LoaderOptions]): Opções de renderização do YAML.
        registry (Optional[CoercionRegistry]): Conversores próprios da classe.

    Raises:
        DeclarationError: Se `name` estiver em branco.
    """
    if not isinstance(name, str) or not name.strip():
        raise DeclarationError("configuration_settings(name=...) must be a non-empty string")
    if not isinstance(data_dir, str):
        raise DeclarationError("configuration_settings(data_dir=...) must be a string")

    settings = ConfigurationSettings(
        name=name,
        data_dir=data_dir,
        options=options or LoaderOptions(),
        registry=registry,
    )

    def decorate(cls: type) -> type:
        setattr(cls, SETTINGS_ATTR, settings)
        return cls

    return decorate


def settings_of(cls: type) -> ConfigurationSettings:
    """Retorna a declaração da própria classe (não herdada)."""
    settings = cls.__dict__.get(SETTINGS_ATTR)
    if not isinstance(settings, ConfigurationSettings):
        raise DeclarationError(f"@configuration_settings is missing on {cls.__qualname__}")
    return settings


# -----------------------------
# Field-level declaration
# -----------------------------

class ConfigKey:
    """Descritor de um campo persistido em uma chave pontuada."""

    def __init__(
        self,
        key: str,
        *,
        default: Any = MISSING,
        default_factory: Any = MISSING,
        comment: Optional[str] = None,
        type_hint: Any = MISSING,
    ) -> None:
        if default is not MISSING and default_factory is not MISSING:
            raise DeclarationError(f"config_key({key!r}) cannot specify both default and default_factory")
        if default_factory is not MISSING and not callable(default_factory):
            raise DeclarationError(f"config_key({key!r}) default_factory must be callable")
        self.key = key
        self.default = default
        self.default_factory = default_factory
        self.comment = comment
        self.type_hint = type_hint
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"ConfigKey({self.key!r}, name={self.name!r})"

    def make_default(self) -> Any:
        if self.default_factory is not MISSING:
            return self.default_factory()
        if self.default is MISSING:
            return None
        return self.default

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        try:
            return instance.__dict__[self.name]
        except KeyError:
            value = self.make_default()
            instance.__dict__[self.name] = value
            return value

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__[self.name] = value


def config_key(
    key: str,
    *,
    default: Any = MISSING,
    default_factory: Any = MISSING,
    comment: Optional[str] = None,
    type_hint: Any = MISSING,
) -> Any:
    """Declara um campo vinculado à chave pontuada `key`.

    O tipo declarado vem da anotação do atributo na classe, salvo quando
    `type_hint` é informado explicitamente.
    """
    return ConfigKey(
        key,
        default=default,
        default_factory=default_factory,
        comment=comment,
        type_hint=type_hint,
    )


@dataclass(frozen=True)
class BoundField:
    """Metadado imutável de um campo vinculado.

    `default_value` é o default declarado, recalculado a cada acesso; a
    semeadura usa o valor atual do campo (`get`), que só difere do
    default quando o construtor da classe o altera.
    """

    name: str
    key: str
    path: Tuple[str, ...]
    type_hint: Any
    comment: Optional[str]
    descriptor: ConfigKey = field(repr=False, compare=False)

    @property
    def default_value(self) -> Any:
        return self.descriptor.make_default()

    def get(self, instance: Any) -> Any:
        return getattr(instance, self.name)

    def set(self, instance: Any, value: Any) -> None:
        setattr(instance, self.name, value)


@dataclass
class FieldTable:
    """Tabela ordenada de campos de uma classe, indexada por chave."""

    owner: str
    _fields: Dict[str, BoundField] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, bound: BoundField) -> None:
        if not is_well_formed(bound.path):
            raise MalformedKeyError(
                f"Invalid dotted key {bound.key!r} on {self.owner}.{bound.name} (empty path segment)"
            )
        if bound.key in self._fields:
            other = self._fields[bound.key]
            raise DuplicateKeyError(
                f"Duplicate key {bound.key!r} on {self.owner}: fields '{other.name}' and '{bound.name}'"
            )
        self._fields[bound.key] = bound
        self._order.append(bound.key)

    def get(self, key: str) -> BoundField:
        return self._fields[key]

    def list(self) -> List[BoundField]:
        return [self._fields[k] for k in self._order]

    def __iter__(self) -> Iterator[BoundField]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._order)


def _resolve_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except Exception as e:
        raise DeclarationError(f"Cannot resolve type annotations of {cls.__qualname__}: {e}") from e


def build_field_table(cls: type) -> FieldTable:
    """Constrói a tabela de campos a partir do namespace da própria classe."""
    table = FieldTable(owner=cls.__qualname__)
    own = [(name, attr) for name, attr in cls.__dict__.items() if isinstance(attr, ConfigKey)]
    if not own:
        return table

    hints = _resolve_hints(cls)
    for name, attr in own:
        if not isinstance(attr.key, str):
            raise MalformedKeyError(f"Key of {cls.__qualname__}.{name} must be a string, got {attr.key!r}")
        hint = attr.type_hint
        if hint is MISSING:
            hint = hints.get(name, MISSING)
        if hint is MISSING:
            default = attr.make_default()
            hint = type(default) if default is not None else Any
        table.add(
            BoundField(
                name=name,
                key=attr.key,
                path=resolve(attr.key),
                type_hint=hint,
                comment=attr.comment,
                descriptor=attr,
            )
        )
    return table


def describe(cls: type) -> Tuple[BoundField, ...]:
    """Campos vinculados declarados em `cls`, na ordem de declaração."""
    table = cls.__dict__.get(FIELDS_ATTR)
    if not isinstance(table, FieldTable):
        table = build_field_table(cls)
        setattr(cls, FIELDS_ATTR, table)
    return tuple(table.list())
