# src/kubecompose/core/injection/context.py
"""
Contexto de uma resolução do grafo de regras.

Este módulo define o `ResolutionContext`, a estrutura que registra de forma
explícita o que aconteceu durante uma resolução:

    - identidade da resolução (resolution_id, created_at)
    - configuração recebida e seu hash canônico
    - eventos de log estruturados (regras aplicadas, puladas, conflitos)
    - warnings agrupados por chave de regra

Princípios fundamentais:
    - Isolamento por resolução (cada resolução possui seu próprio contexto)
    - Logs são eventos estruturados, não strings livres
    - O contexto nunca influencia o resultado da resolução

Invariantes:
    - Todo evento inclui `resolution_id`, `rule`, `level`, `message` e `timestamp`
    - Warnings são agrupados por `rule`

Limites explícitos:
    - Não resolve regras
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from kubecompose.core.config.hashing import compute_config_hash


@dataclass
class ResolutionContext:
    """
    Registro estruturado de uma resolução.

    Atributos:
        resolution_id: identificador único da resolução
        created_at: timestamp UTC de criação
        config: configuração recebida pelo resolver
        config_hash: hash SHA-256 canônico da configuração
        meta: metadados livres fornecidos pelo chamador
    """

    resolution_id: str
    created_at: datetime
    config: Dict[str, Any]
    config_hash: str = ""
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, rule: Optional[str], level: str, message: str, **extra: Any) -> None:
        event = {
            "resolution_id": self.resolution_id,
            "rule": rule,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, rule: str, message: str) -> None:
        if rule not in self.warnings:
            self.warnings[rule] = []
        self.warnings[rule].append(message)

    def events_for(self, message: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["message"] == message]


def new_context(
    config: Dict[str, Any],
    *,
    resolution_id: Optional[str] = None,
    meta: Optional[Dict[str, Any]] = None,
) -> ResolutionContext:
    return ResolutionContext(
        resolution_id=resolution_id or f"res-{uuid.uuid4().hex[:12]}",
        created_at=datetime.now(timezone.utc),
        config=config,
        config_hash=compute_config_hash(config),
        meta=dict(meta or {}),
    )
