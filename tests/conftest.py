# tests/conftest.py
"""
Fixtures compartilhados para testes do KubeCompose.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações YAML mínimas e determinísticas (defaults + local)
- um ResolutionContext com identidade fixa
- extractors e regras simples para exercitar o resolver

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture resolve regras por conta própria
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Config Loader fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de configuração padrão (defaults) de uma resolução.

    Cada chave é uma entrada pré-resolvida do grafo de regras.
    """

    return """\
web-replicas: 3
use-redis: true
labels:
  app: shop
  tier: web
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de override local: ajusta réplicas e um label."""

    return """\
web-replicas: 5
labels:
  tier: frontend
"""


# =====================================================
# Resolution fixtures
# =====================================================

@pytest.fixture
def fixed_ctx():
    """
    ResolutionContext determinístico para testes.

    `resolution_id` e `created_at` são fixos; a configuração é vazia.
    """
    from kubecompose.core.injection.context import ResolutionContext

    return ResolutionContext(
        resolution_id="res-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config={},
        meta={"source": "pytest"},
    )


@pytest.fixture
def name_extractor():
    """Extractor que descreve qualquer objeto pelo seu `metadata.name`."""

    def extract(obj):
        if isinstance(obj, dict) and "metadata" in obj:
            return {"name": obj["metadata"].get("name")}
        return None

    return extract


@pytest.fixture
def obj():
    """Factory de objetos mínimos `{kind, metadata: {name}}`."""

    def make(name, kind="Pod", **extra):
        out = {"kind": kind, "metadata": {"name": name}}
        out.update(extra)
        return out

    return make
