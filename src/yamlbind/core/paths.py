# src/yamlbind/core/paths.py
"""
Resolução de chaves pontuadas em caminhos de navegação.

Uma chave como `server.port` é dividida no separador `.` sem mecanismo
de escape; cada substring é usada literalmente como chave de mapa no
nível correspondente da árvore.

Limites explícitos:
    - Não rejeita segmentos vazios (a navegação do documento o faz)
    - Não interpreta índices de lista
"""

from __future__ import annotations

from typing import Tuple

SEPARATOR = "."

KeyPath = Tuple[str, ...]


def resolve(dotted_key: str) -> KeyPath:
    """Converte uma chave pontuada em uma sequência ordenada de segmentos.

    A função é pura: a mesma chave sempre produz o mesmo caminho.

    Args:
        dotted_key (str): Chave no formato `a.b.c`.

    Returns:
        Tuple[str, ...]: Segmentos na ordem de navegação.
    """
    return tuple(dotted_key.split(SEPARATOR))


def join(path: KeyPath) -> str:
    """Operação inversa de `resolve`, usada em mensagens e eventos."""
    return SEPARATOR.join(path)


def is_well_formed(path: KeyPath) -> bool:
    return len(path) > 0 and all(isinstance(s, str) and s for s in path)
