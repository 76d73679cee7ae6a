"""
KubeCompose: Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do KubeCompose.

Objetivo:
- Permitir que resolver, augmentation e colaboradores levantem exceções
  semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Não contém lógica de domínio específica de recursos.
- Exceções devem carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from kubecompose.core.errors import ErrorPayload


@dataclass(frozen=True)
class KubeComposeException(Exception):
    """Base class para exceções internas do KubeCompose.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    @classmethod
    def from_payload(cls, payload: ErrorPayload) -> "KubeComposeException":
        return cls(message=payload.message, details=dict(payload.details), hint=payload.hint)

    def to_payload(self) -> ErrorPayload:
        """Converte a exceção no payload canônico (tipo = nome da classe)."""
        return ErrorPayload(
            type=self.__class__.__name__,
            message=self.message,
            details=dict(self.details or {}),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Resolução
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConflictingRuleError(KubeComposeException):
    """Duas ou mais regras aplicáveis produzem a mesma chave."""


@dataclass(frozen=True)
class DependencyCycleError(KubeComposeException):
    """O grafo de regras contém um ciclo; nenhuma ordem válida existe."""


# ---------------------------------------------------------------------------
# Augmentation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InvalidMatcherArityError(KubeComposeException):
    """Predicado de matcher com aridade não suportada."""


# ---------------------------------------------------------------------------
# Colaboradores externos
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ApplyCommandError(KubeComposeException):
    """Comando externo de apply terminou com status diferente de zero."""
