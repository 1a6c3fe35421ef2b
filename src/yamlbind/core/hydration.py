# src/yamlbind/core/hydration.py
"""
Hidratação de instâncias de configuração a partir do documento.

Modos:
  - carga inicial (`write_defaults=True`): para cada campo, nós virtuais são
    semeados com o valor atual (default) do campo; todo campo com
    comentário declarado tem esse comentário anexado acima da chave,
    exceto quando o texto já está lá; em seguida o valor do nó é lido
    de volta para o campo
  - reload (`write_defaults=False`): apenas leitura; chaves ausentes do
    documento recém-carregado deixam o campo com o valor em memória

Política de falha:
  - falha de coerção de um campo vira warning e o campo não é alterado;
    os warnings de uma chave refletem apenas a hidratação mais recente
  - erros de configuração (declaração, representação, chave) propagam
  - qualquer outra falha interrompe a hidratação como `HydrationError`;
    campos já processados permanecem visíveis na instância
"""

from __future__ import annotations

from typing import Any, Optional

from .coercion import CoercionRegistry, read, write
from .errors import CoercionError, ConfigError, HydrationError
from .fields import describe


def hydrate(
    instance: Any,
    cls: type,
    *,
    write_defaults: bool,
    registry: Optional[CoercionRegistry] = None,
) -> int:
    """Sincroniza os campos de `instance` com a raiz atual do documento.

    Os campos são processados na ordem de declaração, o que torna
    determinística a ordem de chaves e comentários semeados.

    Returns:
        int: Quantidade de chaves semeadas no documento.
    """
    root = instance.root
    events = instance.events
    seeded = 0

    for bound in describe(cls):
        try:
            node = root.node(*bound.path)

            if write_defaults and node.virtual:
                write(node, bound.get(instance))
                seeded += 1
                events.log(level="debug", message="seeded", key=bound.key)
            if write_defaults and bound.comment and bound.comment.strip():
                node.comment = bound.comment

            events.clear_warnings(bound.key)

            def _warn(err: CoercionError, key: str = bound.key) -> None:
                events.add_warning(key=key, message=f"value kept unchanged: {err}")

            value = read(node, bound.type_hint, registry, on_error=_warn)
            if value is not None:
                bound.set(instance, value)

        except ConfigError:
            raise
        except Exception as e:
            raise HydrationError(
                f"Failed to hydrate field '{bound.name}' ({bound.key}) of {cls.__qualname__}"
            ) from e

    return seeded
