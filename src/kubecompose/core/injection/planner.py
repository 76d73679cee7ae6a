# src/kubecompose/core/injection/planner.py
"""
Planejador de avaliação do grafo de regras.

Este módulo constrói o grafo de dependências de um conjunto de regras e
produz uma ordem de avaliação topológica determinística.

O grafo possui dois tipos de nó:
    - um nó por regra (identificado pelo índice de registro)
    - um nó por chave distinta (produzida ou requerida)

e dois tipos de aresta:
    - chave de dependência → regra   (a regra espera pela chave)
    - regra → chave produzida        (a regra produz a chave)

Decisões arquiteturais:
    - Utiliza ordenação topológica determinística (Kahn com fila de prioridade)
    - Empates são resolvidos pela sequência dos nós: regras na ordem de
      registro, chaves na ordem em que aparecem pela primeira vez
    - Ciclos são tratados como falha fatal, antes de qualquer `build`

Invariantes:
    - Nenhuma regra aparece antes das regras que produzem suas dependências
    - Toda regra aparece exatamente uma vez na ordem final
    - A mesma lista de regras produz sempre a mesma ordem

Limites explícitos:
    - Não decide se uma regra se aplica (isso depende da configuração)
    - Não executa regras
"""

from __future__ import annotations

import heapq
from typing import Dict, Iterable, List, Set, Tuple

from kubecompose.core.errors import resolution_cycle
from kubecompose.core.exceptions import DependencyCycleError

from .registry import Rule

Node = Tuple[str, object]


def _rule_node(index: int) -> Node:
    return ("rule", index)


def _key_node(key: str) -> Node:
    return ("key", key)


def _label(node: Node, rules: List[Rule]) -> str:
    kind, ident = node
    if kind == "rule":
        return f"rule[{ident}]:{rules[ident].key}"  # type: ignore[index]
    return str(ident)


def build_graph(rules: List[Rule]) -> Tuple[List[Node], Dict[Node, Set[Node]]]:
    """Retorna (nós em ordem de sequência, arestas de saída)."""
    nodes: List[Node] = [_rule_node(i) for i in range(len(rules))]
    seen: Set[Node] = set(nodes)
    outgoing: Dict[Node, Set[Node]] = {n: set() for n in nodes}

    def key_node(key: str) -> Node:
        node = _key_node(key)
        if node not in seen:
            seen.add(node)
            nodes.append(node)
            outgoing[node] = set()
        return node

    for index, rule in enumerate(rules):
        for dep in rule.depends_on:
            outgoing[key_node(dep)].add(_rule_node(index))
        outgoing[_rule_node(index)].add(key_node(rule.key))

    return nodes, outgoing


def _find_cycle(remaining: Set[Node], outgoing: Dict[Node, Set[Node]], order: Dict[Node, int]) -> List[Node]:
    incoming: Dict[Node, List[Node]] = {n: [] for n in remaining}
    for src in remaining:
        for dst in outgoing[src]:
            if dst in remaining:
                incoming[dst].append(src)

    # todo nó restante tem predecessor restante: subir pelos predecessores
    # sempre termina revisitando um nó
    path: List[Node] = []
    position: Dict[Node, int] = {}
    node = min(remaining, key=order.__getitem__)
    while node not in position:
        position[node] = len(path)
        path.append(node)
        node = min(incoming[node], key=order.__getitem__)

    cycle = path[position[node]:]
    cycle.reverse()
    return cycle + [cycle[0]]


def plan_order(rules: Iterable[Rule]) -> List[int]:
    """
    Produz a ordem de avaliação topológica determinística das regras.

    A ordem é expressa por índices de registro, e não pelos objetos `Rule`:
    o mesmo objeto pode estar registrado mais de uma vez.

    Args:
        rules (Iterable[Rule]): Regras em ordem de registro.

    Returns:
        List[int]: Índices de registro em ordem de avaliação.

    Raises:
        DependencyCycleError: Se houver ciclo no grafo de regras.
    """
    rule_list = list(rules)
    nodes, outgoing = build_graph(rule_list)
    order = {node: seq for seq, node in enumerate(nodes)}

    incoming_count: Dict[Node, int] = {n: 0 for n in nodes}
    for src in nodes:
        for dst in outgoing[src]:
            incoming_count[dst] += 1

    # Kahn's algorithm (deterministic)
    ready: List[int] = [order[n] for n in nodes if incoming_count[n] == 0]
    heapq.heapify(ready)
    visited: List[Node] = []

    while ready:
        node = nodes[heapq.heappop(ready)]  # smallest sequence first
        visited.append(node)
        for child in outgoing[node]:
            incoming_count[child] -= 1
            if incoming_count[child] == 0:
                heapq.heappush(ready, order[child])

    if len(visited) != len(nodes):
        remaining = set(nodes) - set(visited)
        cycle = [_label(n, rule_list) for n in _find_cycle(remaining, outgoing, order)]
        raise DependencyCycleError.from_payload(resolution_cycle(cycle=cycle))

    return [ident for kind, ident in visited if kind == "rule"]  # type: ignore[misc]


def plan_rules(rules: Iterable[Rule]) -> List[Rule]:
    """Regras em ordem de avaliação (ver `plan_order`)."""
    rule_list = list(rules)
    return [rule_list[i] for i in plan_order(rule_list)]
