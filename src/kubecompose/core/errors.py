"""
KubeCompose: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do KubeCompose.
Erros são considerados artefatos de domínio e fazem parte do contrato
operacional do sistema, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma recuperação implícita é permitida: o core falha cedo e reporta
uma condição específica e identificável.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do KubeCompose.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Resolução do grafo de regras
RESOLUTION_CONFLICT = "RESOLUTION_CONFLICT"
RESOLUTION_CYCLE = "RESOLUTION_CYCLE"

# Augmentation
AUGMENT_INVALID_MATCHER = "AUGMENT_INVALID_MATCHER"

# Colaboradores externos
APPLY_COMMAND_FAILED = "APPLY_COMMAND_FAILED"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def resolution_conflict(
    *,
    key: str,
    rules: Optional[List[int]] = None,
    hint: str = "Ajuste a configuração para que apenas uma das regras concorrentes tenha as dependências satisfeitas.",
) -> ErrorPayload:
    return ErrorPayload(
        type=RESOLUTION_CONFLICT,
        message=f"Conflicting prerequisites for resource {key}",
        details={
            "key": key,
            "rules": list(rules or []),
        },
        hint=hint,
    )


def resolution_cycle(
    *,
    cycle: List[str],
    hint: str = "Remova a dependência circular entre as regras indicadas.",
) -> ErrorPayload:
    return ErrorPayload(
        type=RESOLUTION_CYCLE,
        message="Cycle detected in rule dependency graph: " + " -> ".join(cycle),
        details={"cycle": list(cycle)},
        hint=hint,
    )


def invalid_matcher_arity(
    *,
    arity: Any,
    hint: str = "Use um predicado de um argumento (node) ou dois argumentos (node, context).",
) -> ErrorPayload:
    return ErrorPayload(
        type=AUGMENT_INVALID_MATCHER,
        message=f"Invalid matcher arity: {arity}",
        details={"arity": arity},
        hint=hint,
    )


def apply_command_failed(
    *,
    command: List[str],
    returncode: int,
    stderr: str,
    path: Optional[str] = None,
    hint: str = "O arquivo persistido foi removido; corrija o erro reportado e reaplique.",
) -> ErrorPayload:
    return ErrorPayload(
        # stderr é reportado sem edição
        type=APPLY_COMMAND_FAILED,
        message=stderr,
        details={
            "command": list(command),
            "returncode": returncode,
            "path": path,
        },
        hint=hint,
    )
