# src/kubecompose/core/augment/rules.py
"""
Compilador de regras de augmentation em cascata.

Uma regra de augmentation é um par (matcher, updater). Regras são
compostas em uma única função `(node, context) -> node'` que se comporta
como uma cascata CSS: cada regra é aplicada em ordem sobre o nó já
atualizado, e a última declaração vence para os campos que várias regras
tocam.

Invariantes:
    - Todos os matchers de uma cascata avaliam o mesmo contexto original
    - O resultado de uma regra nunca altera o contexto visto pelas seguintes
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence, Tuple

from .matcher import compile_matcher
from .updater import compile_updater

CompiledRule = Callable[[Any, Any], Any]


def aug_rule(matcher: Any, updater: Any) -> CompiledRule:
    """Compila um par (matcher, updater) em `(node, context) -> node'`."""
    match = compile_matcher(matcher)
    update = compile_updater(updater)

    def rule(node: Any, ctx: Any) -> Any:
        if match(node, ctx):
            return update(node)
        return node

    return rule


def compose(rules: Iterable[CompiledRule]) -> CompiledRule:
    """Combina regras compiladas em cascata, na ordem dada."""
    rules = list(rules)

    def cascade(node: Any, ctx: Any) -> Any:
        for rule in rules:
            node = rule(node, ctx)
        return node

    return cascade


def from_pairs(pairs: Sequence[Tuple[Any, Any]]) -> CompiledRule:
    return compose(aug_rule(m, u) for m, u in pairs)
