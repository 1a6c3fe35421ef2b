# src/yamlbind/core/configuration.py
"""
Ciclo de vida de instâncias de configuração vinculadas a um arquivo YAML.

Este módulo define `BoundConfiguration`, a classe base das configurações
do host, e a função `load`, que cria uma instância ligada a um arquivo.

Uma instância é dona exclusiva de:
    - um caminho de arquivo resolvido (criado se ausente)
    - uma raiz de documento (substituída integralmente em `reload`)
    - um loader ligado ao caminho
    - um lock reentrante que serializa as operações sobre a instância
    - um log estruturado de eventos

Operações públicas:
    - `load(cls, base_dir)`  → cria, semeia defaults, persiste e retorna
    - `reload()`             → relê o arquivo e puxa valores para os campos
    - `save()`               → sobrescreve o arquivo com a raiz atual
    - `exists(key)`          → True se o nó é concreto
    - `get_string/get_int/get_long/get_boolean/get_double(key, default)`
    - `set(key, value)`      → grava e persiste imediatamente
    - `remove(key)`          → remove e persiste imediatamente

Decisões arquiteturais:
    - Sem threads internas: toda operação é síncrona e pode bloquear em I/O
    - Instâncias diferentes nunca compartilham lock
    - Leituras também passam pelo lock, garantindo que nunca observem
      uma raiz no meio de uma mutação
    - Cada mutação é persistida isoladamente (sem transação multi-chave)

Limites explícitos:
    - Não faz retry de I/O
    - Não observa o arquivo em disco (reload é sempre explícito)
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Optional, Type, TypeVar, Union

from ruamel.yaml.comments import CommentedMap

from .document.loader import YamlDocumentLoader
from .document.node import DocumentNode
from .errors import ConfigError, ConfigIOError, DeclarationError
from .events import EventLog
from .fields import FIELDS_ATTR, build_field_table, describe, settings_of
from .hydration import hydrate
from .paths import resolve

T = TypeVar("T", bound="BoundConfiguration")


class BoundConfiguration:
    """
    Classe base de configurações persistidas em YAML.

    Subclasses declaram o arquivo com `@configuration_settings` e os campos
    com `config_key`. A tabela de campos é construída uma vez, quando a
    subclasse é criada; erros de declaração surgem nesse momento.

    Exemplo:

        @configuration_settings("server.yml", data_dir="net")
        class ServerConfig(BoundConfiguration):
            port: int = config_key("server.port", default=25565, comment="Listening port")
            admins: List[str] = config_key("admins", default_factory=list)

        cfg = ServerConfig.load(base_dir)
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        setattr(cls, FIELDS_ATTR, build_field_table(cls))

    @classmethod
    def load(cls: Type[T], base_dir: Union[str, Path]) -> T:
        return load(cls, base_dir)

    # -----------------------------
    # Binding state
    # -----------------------------
    def _bind(self, file_path: Path, loader: YamlDocumentLoader, registry: Any) -> None:
        self._yb_file_path = file_path
        self._yb_loader = loader
        self._yb_registry = registry
        self._yb_lock = threading.RLock()
        self._yb_root = CommentedMap()
        self.events = EventLog(source=str(file_path))

    def _require_bound(self) -> None:
        if "_yb_lock" not in self.__dict__:
            raise ConfigError(f"{type(self).__qualname__} instance is not bound to a file; use load()")

    @property
    def file_path(self) -> Path:
        self._require_bound()
        return self._yb_file_path

    @property
    def root(self) -> DocumentNode:
        self._require_bound()
        return DocumentNode(self._yb_root, indent=self._yb_loader.options.indent)

    def _node(self, dotted_key: str) -> DocumentNode:
        return self.root.node(*resolve(dotted_key))

    def _persist(self, operation: str) -> None:
        try:
            self._yb_loader.save(self._yb_root)
        except ConfigIOError as e:
            if e.operation == operation:
                raise
            raise type(e)(
                f"Failed to persist configuration after {operation}",
                path=self._yb_file_path,
                operation=operation,
            ) from e

    # -----------------------------
    # Mutating operations
    # -----------------------------
    def reload(self) -> None:
        """Relê o arquivo em uma nova raiz e puxa os valores para os campos.

        Chaves ausentes no documento relido mantêm o valor atual do campo.
        Se a leitura falhar, a raiz anterior permanece em uso.
        """
        self._require_bound()
        with self._yb_lock:
            self._yb_root = self._yb_loader.load()
            hydrate(self, type(self), write_defaults=False, registry=self._yb_registry)
            self.events.log(level="info", message="reloaded")

    def save(self) -> None:
        self._require_bound()
        with self._yb_lock:
            self._persist("save")
            self.events.log(level="info", message="saved")

    def set(self, dotted_key: str, value: Any) -> None:
        """Grava `value` na chave e persiste o documento inteiro.

        Raises:
            RepresentationError: Se o valor não pertence ao modelo do documento
                (a árvore não é alterada).
            MalformedKeyError: Se a chave contém segmentos vazios.
            ConfigIOError: Se a persistência falhar.
        """
        self._require_bound()
        with self._yb_lock:
            self._node(dotted_key).set(value)
            self._persist("set")
            self.events.log(level="info", message="value_set", key=dotted_key)

    def remove(self, dotted_key: str) -> None:
        """Remove o valor da chave e persiste; chave ausente não é erro."""
        self._require_bound()
        with self._yb_lock:
            self._node(dotted_key).clear()
            self._persist("remove")
            self.events.log(level="info", message="value_removed", key=dotted_key)

    # -----------------------------
    # Reads
    # -----------------------------
    def exists(self, dotted_key: str) -> bool:
        self._require_bound()
        with self._yb_lock:
            return not self._node(dotted_key).virtual

    def get_string(self, dotted_key: str, default: Optional[str] = None) -> Optional[str]:
        self._require_bound()
        with self._yb_lock:
            return self._node(dotted_key).get_string(default)

    def get_int(self, dotted_key: str, default: int = 0) -> int:
        self._require_bound()
        with self._yb_lock:
            return self._node(dotted_key).get_int(default)

    def get_long(self, dotted_key: str, default: int = 0) -> int:
        self._require_bound()
        with self._yb_lock:
            return self._node(dotted_key).get_long(default)

    def get_boolean(self, dotted_key: str, default: bool = False) -> bool:
        self._require_bound()
        with self._yb_lock:
            return self._node(dotted_key).get_boolean(default)

    def get_double(self, dotted_key: str, default: float = 0.0) -> float:
        self._require_bound()
        with self._yb_lock:
            return self._node(dotted_key).get_double(default)


def load(cls: Type[T], base_dir: Union[str, Path]) -> T:
    """
    Cria uma instância de `cls` ligada ao seu arquivo YAML.

    Etapas:
        1. resolve o diretório (base ou `base_dir/data_dir`) e o arquivo
        2. cria diretório e arquivo vazio quando ausentes
        3. constrói a instância sem argumentos
        4. interpreta o documento
        5. semeia defaults e comentários em chaves ausentes e puxa os
           valores existentes para os campos
        6. persiste o documento (possivelmente recém-semeado)

    Raises:
        DeclarationError: Se a classe não declara `@configuration_settings`,
            não deriva de `BoundConfiguration` ou não é construível sem argumentos.
        ConfigIOError: Se qualquer etapa de I/O falhar.
        DocumentFormatError: Se o arquivo existente não for YAML válido.
    """
    if not isinstance(cls, type) or not issubclass(cls, BoundConfiguration):
        raise DeclarationError(f"{cls!r} must be a subclass of BoundConfiguration")
    settings = settings_of(cls)

    directory = Path(base_dir)
    if settings.data_dir.strip():
        directory = directory / settings.data_dir
    file_path = directory / settings.name

    try:
        directory.mkdir(parents=True, exist_ok=True)
        if not file_path.exists():
            file_path.touch()
    except OSError as e:
        raise ConfigIOError("Failed to create configuration file", path=file_path, operation="load") from e

    try:
        instance = cls()
    except Exception as e:
        raise DeclarationError(f"{cls.__qualname__} must be constructible without arguments") from e

    loader = YamlDocumentLoader(file_path, settings.options)
    instance._bind(file_path, loader, settings.registry)

    with instance._yb_lock:
        instance._yb_root = loader.load()
        seeded = hydrate(instance, cls, write_defaults=True, registry=settings.registry)
        instance._persist("load")

    instance.events.log(level="info", message="loaded", fields=len(describe(cls)), seeded=seeded)
    return instance
