# src/yamlbind/core/document/node.py
"""
Nó endereçável da árvore de documento.

Este módulo adapta a árvore round-trip do `ruamel.yaml` (`CommentedMap`
/ `CommentedSeq`) à interface estreita consumida pelo binding:

    - navegação por caminho de segmentos (`node(*path)`)
    - detecção de nó virtual (caminho navegável sem valor concreto)
    - leitura e escrita do valor bruto
    - leitura e escrita de comentário anexado à chave
    - remoção do valor
    - extratores primitivos com fallback embutido

Decisões arquiteturais:
    - Um `DocumentNode` é apenas um endereço (raiz + caminho); ele não
      guarda cópia de valor e reflete sempre o estado atual da árvore
    - Escrever em um nó virtual materializa o nó e todos os ancestrais
    - Um valor `null` é tratado como ausência (nó virtual)

Invariantes:
    - Segmentos vazios são rejeitados com `MalformedKeyError`
    - Valores gravados pertencem ao modelo do documento (escalares,
      mapas, sequências); o restante é rejeitado antes de mutar a árvore

Limites explícitos:
    - Não interpreta índices de lista no caminho
    - Não realiza I/O (ver `loader.py`)
    - Comentários posteriores ao último valor de um mapa que fica vazio
      após `clear()` são descartados
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, List, Optional, Tuple

from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.error import CommentMark
from ruamel.yaml.tokens import CommentToken

from ..coercion import coerce_bool, coerce_float, coerce_int, coerce_string
from ..errors import MalformedKeyError, RepresentationError
from ..paths import join

_MISSING = object()

_SCALARS = (str, bool, int, float)


def to_document_value(value: Any) -> Any:
    """Converte um valor Python para o modelo de valores do documento.

    Raises:
        RepresentationError: Se o valor (ou algum elemento aninhado)
            não puder ser representado.
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        return to_document_value(value.value)
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, Mapping):
        out = CommentedMap()
        for k, v in value.items():
            if isinstance(k, Enum):
                k = k.value
            if not isinstance(k, _SCALARS):
                raise RepresentationError(f"Unsupported mapping key type: {type(k).__name__}")
            out[k] = to_document_value(v)
        return out
    if isinstance(value, (list, tuple)):
        return CommentedSeq([to_document_value(v) for v in value])
    if isinstance(value, (set, frozenset)):
        items = [to_document_value(v) for v in value]
        try:
            items = sorted(items)
        except TypeError:
            pass
        return CommentedSeq(items)
    raise RepresentationError(f"Cannot represent value of type {type(value).__name__} in a YAML document")


# -----------------------------
# Comment slots
# -----------------------------
# O parser round-trip guarda linhas de comentário entre duas chaves como
# comentário posterior do último escalar da chave anterior (slot 2 em
# mapas, slot 0 em sequências), e linhas antes da primeira chave de um
# mapa em `ca.comment[1]`. Comentários anexados pelo binding ficam no
# slot 1 da própria chave.
def _tail_slot(container: Any, key: Any) -> Tuple[Any, Any, int]:
    """Localiza o slot que recebe as linhas escritas após o valor de `key`."""
    value = container[key]
    index = 2
    while True:
        if isinstance(value, CommentedMap) and len(value):
            container, key, index = value, list(value.keys())[-1], 2
        elif isinstance(value, CommentedSeq) and len(value):
            container, key, index = value, len(value) - 1, 0
        else:
            return container, key, index
        value = container[key]


def _slot_token(container: Any, key: Any, index: int) -> Any:
    entry = container.ca.items.get(key)
    if not entry or len(entry) <= index:
        return None
    return entry[index]


def _following_lines(token: Any) -> str:
    """Texto de um comentário posterior, sem o comentário de fim de linha."""
    if token is None or "\n" not in token.value:
        return ""
    return token.value.split("\n", 1)[1]


def _comment_block(lines: List[str]) -> List[str]:
    """Bloco contíguo de linhas de comentário no fim de `lines`, sem o `#`."""
    block: List[str] = []
    for line in reversed(lines):
        line = line.strip()
        if not line.startswith("#"):
            break
        text = line[1:]
        if text.startswith(" "):
            text = text[1:]
        block.insert(0, text.rstrip())
    return block


def _token_lines(tokens: Any) -> List[str]:
    lines: List[str] = []
    for token in tokens or []:
        lines.extend(token.value.splitlines())
    return lines


class DocumentNode:
    """Endereço de um nó na árvore (raiz + caminho de segmentos)."""

    __slots__ = ("_root", "_path", "_indent")

    def __init__(self, root: CommentedMap, path: Tuple[str, ...] = (), *, indent: int = 2) -> None:
        for segment in path:
            if not isinstance(segment, str) or not segment:
                raise MalformedKeyError(f"Invalid key path: {path!r} (segments must be non-empty strings)")
        self._root = root
        self._path = tuple(path)
        self._indent = indent

    def __repr__(self) -> str:
        return f"DocumentNode({self.key!r}, virtual={self.virtual})"

    @property
    def path(self) -> Tuple[str, ...]:
        return self._path

    @property
    def key(self) -> str:
        return join(self._path)

    def node(self, *path: str) -> "DocumentNode":
        """Navega para um descendente; o nó retornado pode ser virtual."""
        return DocumentNode(self._root, self._path + tuple(path), indent=self._indent)

    # -----------------------------
    # Navigation helpers
    # -----------------------------
    def _lookup(self) -> Any:
        current: Any = self._root
        for segment in self._path:
            if not isinstance(current, Mapping) or segment not in current:
                return _MISSING
            current = current[segment]
        return current

    def _existing_parent(self) -> Optional[CommentedMap]:
        current: Any = self._root
        for segment in self._path[:-1]:
            if not isinstance(current, Mapping) or segment not in current:
                return None
            current = current[segment]
        return current if isinstance(current, CommentedMap) else None

    def _materialize_parent(self) -> CommentedMap:
        current = self._root
        for segment in self._path[:-1]:
            child = current.get(segment)
            if not isinstance(child, CommentedMap):
                child = CommentedMap()
                current[segment] = child
            current = child
        return current

    # -----------------------------
    # Value access
    # -----------------------------
    @property
    def virtual(self) -> bool:
        value = self._lookup()
        return value is _MISSING or value is None

    @property
    def raw(self) -> Any:
        value = self._lookup()
        return None if value is _MISSING else value

    def set(self, value: Any) -> None:
        """Grava `value` no nó, materializando ancestrais virtuais.

        Gravar `None` equivale a `clear()`.
        """
        doc_value = to_document_value(value)
        if not self._path:
            if not isinstance(doc_value, CommentedMap):
                raise RepresentationError("The document root must be a mapping")
            self._root.clear()
            self._root.update(doc_value)
            return
        if doc_value is None:
            self.clear()
            return
        parent = self._materialize_parent()
        parent[self._path[-1]] = doc_value

    def clear(self) -> None:
        """Remove o valor do nó; remover um nó já ausente não tem efeito.

        Linhas de comentário que o parser guardou junto ao valor removido,
        mas que pertencem à chave seguinte, são transferidas para o slot
        equivalente da chave anterior (ou para o início do mapa).
        """
        if not self._path:
            self._root.clear()
            return
        parent = self._existing_parent()
        key = self._path[-1]
        if parent is None or key not in parent:
            return
        keys = list(parent.keys())
        position = keys.index(key)
        following = _following_lines(_slot_token(*_tail_slot(parent, key)))

        del parent[key]
        parent.ca.items.pop(key, None)

        if following.strip():
            self._reattach(parent, keys[:position], keys[position + 1 :], following)

    @staticmethod
    def _reattach(parent: CommentedMap, before: List[Any], after: List[Any], text: str) -> None:
        if not text.endswith("\n"):
            text += "\n"
        if before:
            container, key, index = _tail_slot(parent, before[-1])
            entry = container.ca.items.setdefault(key, [None, None, None, None])
            while len(entry) <= index:
                entry.append(None)
            token = entry[index]
            if token is None:
                entry[index] = CommentToken("\n" + text, CommentMark(0))
            else:
                value = token.value if token.value.endswith("\n") else token.value + "\n"
                token.value = value + text
            return
        if not after:
            # mapa vazio: não há linha onde ancorar o comentário
            return
        pre = parent.ca.comment
        token = CommentToken(text, CommentMark(0))
        if not pre:
            parent.ca.comment = [None, [token]]
            return
        while len(pre) < 2:
            pre.append(None)
        if pre[1] is None:
            pre[1] = []
        pre[1].append(token)

    # -----------------------------
    # Comments
    # -----------------------------
    def _lines_above(self, parent: CommentedMap, key: str) -> List[str]:
        """Linhas de comentário escritas entre a chave anterior e `key`."""
        keys = list(parent.keys())
        position = keys.index(key)
        if position > 0:
            token = _slot_token(*_tail_slot(parent, keys[position - 1]))
            return _following_lines(token).splitlines()
        pre = parent.ca.comment
        if pre and len(pre) > 1:
            return _token_lines(pre[1])
        return []

    def _own_tokens(self, parent: CommentedMap, key: str) -> List[Any]:
        entry = parent.ca.items.get(key)
        if not entry or len(entry) < 2 or not entry[1]:
            return []
        return entry[1]

    @property
    def comment(self) -> Optional[str]:
        """Bloco contíguo de linhas de comentário imediatamente acima da chave."""
        parent = self._existing_parent() if self._path else None
        if parent is None or self._path[-1] not in parent:
            return None
        key = self._path[-1]
        lines = self._lines_above(parent, key) + _token_lines(self._own_tokens(parent, key))
        block = _comment_block(lines)
        return "\n".join(block) if block else None

    @comment.setter
    def comment(self, text: Optional[str]) -> None:
        """Anexa `text` acima da chave.

        Um texto que já encerra o bloco acima da chave (escrito por uma
        carga anterior ou à mão) não é repetido. Linhas de outras chaves
        nunca são alteradas; apenas o comentário anexado à própria chave
        é substituído.
        """
        if not self._path:
            return
        parent = self._materialize_parent()
        key = self._path[-1]
        if text and key in parent:
            wanted = [line.strip() for line in text.strip("\n").split("\n")]
            lines = self._lines_above(parent, key) + _token_lines(self._own_tokens(parent, key))
            if _comment_block(lines)[-len(wanted):] == wanted:
                return
        entry = parent.ca.items.get(key)
        if entry is not None and len(entry) > 1:
            entry[1] = []
        if text:
            parent.yaml_set_comment_before_after_key(
                key,
                before=text,
                indent=self._indent * (len(self._path) - 1),
            )

    # -----------------------------
    # Primitive extraction (never raises)
    # -----------------------------
    def get_string(self, default: Optional[str] = None) -> Optional[str]:
        value = coerce_string(self.raw)
        return default if value is None else value

    def get_int(self, default: Optional[int] = None) -> Optional[int]:
        value = coerce_int(self.raw)
        return default if value is None else value

    def get_long(self, default: Optional[int] = None) -> Optional[int]:
        return self.get_int(default)

    def get_boolean(self, default: Optional[bool] = None) -> Optional[bool]:
        value = coerce_bool(self.raw)
        return default if value is None else value

    def get_double(self, default: Optional[float] = None) -> Optional[float]:
        value = coerce_float(self.raw)
        return default if value is None else value
