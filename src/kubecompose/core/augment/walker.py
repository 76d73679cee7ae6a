# src/kubecompose/core/augment/walker.py
"""
Reescrita recursiva de árvores via walkers (Walker Rewriter).

Uma regra compilada só enxerga o nó sobre o qual é chamada. Walkers
localizam subestruturas conhecidas (um `template` aninhado, a lista de
`containers` de um pod, ...) e reinvocam a reescrita sobre cada elemento,
com um contexto enriquecido por metadados estruturais (o `kind` do
elemento, a `metadata` do recurso pai, ...).

Algoritmo de `rewrite(node, context)`:
    1. `node ← rule(node, context)`
    2. para cada walker, em ordem: `node ← walker(node, rewrite, context)`
    3. retorna `node`

Invariantes:
    - Cada walker vê a saída do walker anterior sobre o mesmo nó
    - O contexto raiz é vazio
    - Walkers sem subestrutura relevante retornam o nó inalterado
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Sequence, Union

from .rules import CompiledRule

Rewrite = Callable[[Any, Dict[str, Any]], Any]
Walker = Callable[[Any, Rewrite, Dict[str, Any]], Any]


def _walkers_of(source: Any) -> Sequence[Walker]:
    walkers = getattr(source, "walkers", source)
    return tuple(walkers or ())


def rewrite(node: Any, ctx: Dict[str, Any], rule: CompiledRule, walkers: Sequence[Walker]) -> Any:
    """Aplica `rule` ao nó e desce recursivamente pelos walkers."""

    def recur(child: Any, child_ctx: Dict[str, Any]) -> Any:
        return rewrite(child, child_ctx, rule, walkers)

    node = rule(node, ctx)
    for walker in walkers:
        node = walker(node, recur, ctx)
    return node


def apply_rule(source: Union[Any, Sequence[Walker]], rule: CompiledRule, root: Any) -> Any:
    """
    Aplica uma regra compilada a toda a árvore `root`.

    Args:
        source: Registry, FrozenRegistry ou sequência de walkers.
        rule: Regra compilada (ver `compose` / `from_pairs`).
        root: Recurso de topo.

    Returns:
        Any: Nova árvore reescrita.
    """
    return rewrite(root, {}, rule, _walkers_of(source))
