# src/yamlbind/core/document/loader.py
"""
Carregamento e persistência do documento YAML em disco.

Responsabilidades do módulo:
    - Interpretar o texto de um arquivo em uma árvore round-trip
      (`CommentedMap`), preservando comentários escritos à mão
    - Renderizar a árvore de volta ao mesmo arquivo em estilo bloco,
      com indentação fixa

Decisões arquiteturais:
    - Formato: YAML via `ruamel.yaml` (modo round-trip)
    - Arquivo vazio é interpretado como mapa vazio
    - Raiz que não seja mapa é rejeitada como erro de formato
    - A escrita sobrescreve o arquivo no lugar

Limites explícitos:
    - Não cria diretórios nem arquivos (responsabilidade do ciclo de vida)
    - Não aplica lock (responsabilidade da instância de configuração)
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from ..errors import ConfigIOError, DocumentFormatError


@dataclass(frozen=True)
class LoaderOptions:
    """Opções de renderização do documento (estilo bloco, indentação 2)."""

    indent: int = 2
    sequence_indent: int = 4
    sequence_dash_offset: int = 2
    width: int = 4096
    encoding: str = "utf-8"


class YamlDocumentLoader:
    """Loader canônico ligado a um único arquivo."""

    def __init__(self, path: Union[str, Path], options: Optional[LoaderOptions] = None) -> None:
        self.path = Path(path)
        self.options = options or LoaderOptions()

    def _yaml(self) -> YAML:
        yaml = YAML(typ="rt")
        yaml.indent(
            mapping=self.options.indent,
            sequence=self.options.sequence_indent,
            offset=self.options.sequence_dash_offset,
        )
        yaml.default_flow_style = False
        yaml.width = self.options.width
        yaml.preserve_quotes = True
        return yaml

    def load(self) -> CommentedMap:
        """Lê e interpreta o arquivo, retornando a raiz da árvore.

        Raises:
            ConfigIOError: Se o arquivo não puder ser lido.
            DocumentFormatError: Se o conteúdo não for YAML válido com raiz mapa.
        """
        try:
            text = self.path.read_text(encoding=self.options.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigIOError("Failed to read configuration file", path=self.path, operation="load") from e

        try:
            data = self._yaml().load(text)
        except YAMLError as e:
            raise DocumentFormatError("Invalid YAML document", path=self.path, operation="load") from e

        if data is None:
            return CommentedMap()
        if not isinstance(data, CommentedMap):
            raise DocumentFormatError(
                f"Document root must be a mapping, got {type(data).__name__}",
                path=self.path,
                operation="load",
            )
        return data

    def save(self, root: CommentedMap) -> None:
        """Renderiza a árvore e sobrescreve o arquivo.

        Raises:
            DocumentFormatError: Se a árvore não puder ser renderizada.
            ConfigIOError: Se o arquivo não puder ser escrito.
        """
        buf = io.StringIO()
        try:
            self._yaml().dump(root, buf)
        except YAMLError as e:
            raise DocumentFormatError("Failed to render YAML document", path=self.path, operation="save") from e

        try:
            self.path.write_text(buf.getvalue(), encoding=self.options.encoding)
        except OSError as e:
            raise ConfigIOError("Failed to write configuration file", path=self.path, operation="save") from e
