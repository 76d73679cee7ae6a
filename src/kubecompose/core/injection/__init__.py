"""
Injeção de dependências do KubeCompose.

Este pacote contém a implementação responsável por **registrar**,
**planejar** e **resolver** regras que produzem recursos.

Componentes principais:
    - registry → builder de regras, extractors e walkers (+ snapshot imutável)
    - planner  → grafo regra/chave e ordenação topológica determinística
    - context  → eventos estruturados e warnings de uma resolução
    - resolver → avaliação das regras contra a configuração

Princípios fundamentais:
    - Planejamento e avaliação são responsabilidades separadas
    - A ordem de avaliação é determinística para o mesmo registry
    - Dependências não satisfeitas não são erro; conflitos e ciclos são
"""

from .context import ResolutionContext, new_context
from .planner import build_graph, plan_order, plan_rules
from .registry import FrozenRegistry, Registry, Rule, new_registry
from .resolver import ResolutionResult, Resolver, resolve, resolve_files

__all__ = [
    "FrozenRegistry",
    "Registry",
    "ResolutionContext",
    "ResolutionResult",
    "Resolver",
    "Rule",
    "build_graph",
    "new_context",
    "new_registry",
    "plan_order",
    "plan_rules",
    "resolve",
    "resolve_files",
]
