# src/yamlbind/__init__.py
"""
yamlbind — binding entre classes de configuração e documentos YAML comentados.

Uma classe declara seu arquivo e seus campos; `load` cria o arquivo quando
necessário, semeia defaults e comentários em chaves ausentes, puxa valores
existentes para os campos e persiste o resultado. A partir daí a instância
oferece `reload`, `save`, `exists`, getters tipados, `set` e `remove`.

Limites explícitos:
    - Não valida schema além da coerção de tipos
    - Não oferece atualização transacional de múltiplas chaves
"""

from .core.coercion import CoercionRegistry, default_registry
from .core.configuration import BoundConfiguration, load
from .core.document import DocumentNode, LoaderOptions
from .core.errors import (
    CoercionError,
    ConfigError,
    ConfigIOError,
    DeclarationError,
    DocumentFormatError,
    DuplicateKeyError,
    HydrationError,
    MalformedKeyError,
    RepresentationError,
)
from .core.fields import BoundField, config_key, configuration_settings, describe
from .core.paths import resolve

__all__ = [
    "BoundConfiguration",
    "BoundField",
    "CoercionError",
    "CoercionRegistry",
    "ConfigError",
    "ConfigIOError",
    "DeclarationError",
    "DocumentFormatError",
    "DocumentNode",
    "DuplicateKeyError",
    "HydrationError",
    "LoaderOptions",
    "MalformedKeyError",
    "RepresentationError",
    "config_key",
    "configuration_settings",
    "default_registry",
    "describe",
    "load",
    "resolve",
]
