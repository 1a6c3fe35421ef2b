# src/yamlbind/core/events.py
"""
Log estruturado de eventos de uma instância de configuração.

Logs não são strings livres: cada evento é um dicionário com
`file`, `level`, `message` e `timestamp` (UTC, ISO 8601), acrescido
de campos extras informados pelo chamador. Warnings não fatais
(ex.: falhas de coerção de um único campo) são agrupados por chave.

Invariantes:
    - Todo evento inclui `file` e `timestamp`
    - O log guarda no máximo `max_events` eventos; os mais antigos
      são descartados primeiro
    - Warnings são associados explicitamente a uma chave pontuada e
      substituídos a cada hidratação da chave (`clear_warnings`)

Limites explícitos:
    - Não persiste eventos
    - Não filtra por nível
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List

DEFAULT_MAX_EVENTS = 1000


@dataclass
class EventLog:
    """Agregador de eventos e warnings de uma instância."""

    source: str
    max_events: int = DEFAULT_MAX_EVENTS
    events: Deque[Dict[str, Any]] = field(init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_events < 1:
            raise ValueError("max_events must be >= 1")
        self.events = deque(maxlen=self.max_events)

    def log(self, *, level: str, message: str, **extra: Any) -> None:
        event = {
            "file": self.source,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        with self._lock:
            self.events.append(event)

    def add_warning(self, *, key: str, message: str) -> None:
        with self._lock:
            self.warnings.setdefault(key, []).append(message)
        self.log(level="warning", message=message, key=key)

    def clear_warnings(self, key: str) -> None:
        with self._lock:
            self.warnings.pop(key, None)

    def of(self, message: str) -> List[Dict[str, Any]]:
        """Eventos com a mensagem informada, na ordem de registro."""
        with self._lock:
            return [e for e in self.events if e["message"] == message]
