# tests/core/injection/test_planner.py
"""
Testes do planejador do grafo de regras.

Os testes asseguram que:
- o grafo possui um nó por regra e um por chave distinta
- dependências são ordenadas antes de quem depende delas
- empates são resolvidos pela ordem de registro
- ciclos são detectados e reportados com o caminho completo

Limites explícitos:
    - Não executa regras (ver test_resolver.py)
"""

import pytest

try:
    from kubecompose.core.injection.planner import build_graph, plan_order, plan_rules
    from kubecompose.core.injection.registry import Rule
    from kubecompose.core.exceptions import DependencyCycleError
except Exception as e:  # noqa: BLE001
    build_graph = None
    plan_order = None
    plan_rules = None
    Rule = None
    DependencyCycleError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing planner module. Implement:\n"
            "- src/kubecompose/core/injection/planner.py (build_graph, plan_order, plan_rules)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _rule(key, *deps):
    return Rule(key=key, depends_on=tuple(deps), build=lambda *a: None)


def test_graph_nodes_and_edges():
    _require_imports()
    rules = [_rule("web", "db"), _rule("db", "db-password")]
    nodes, outgoing = build_graph(rules)

    assert nodes == [("rule", 0), ("rule", 1), ("key", "db"), ("key", "web"), ("key", "db-password")]
    assert outgoing[("key", "db")] == {("rule", 0)}
    assert outgoing[("rule", 0)] == {("key", "web")}
    assert outgoing[("key", "db-password")] == {("rule", 1)}


def test_dependencies_come_first_regardless_of_registration():
    """
    Verifica que a regra produtora precede a dependente, mesmo quando
    registrada depois.
    """
    _require_imports()
    ordered = plan_rules([_rule("web", "db"), _rule("db")])
    assert [r.key for r in ordered] == ["db", "web"]


def test_independent_rules_keep_registration_order():
    _require_imports()
    ordered = plan_rules([_rule("c"), _rule("a"), _rule("b")])
    assert [r.key for r in ordered] == ["c", "a", "b"]


def test_transitive_chain():
    _require_imports()
    ordered = plan_rules([_rule("c", "b"), _rule("b", "a"), _rule("a")])
    assert [r.key for r in ordered] == ["a", "b", "c"]


def test_planning_is_deterministic():
    _require_imports()
    rules = [_rule("x", "k"), _rule("k", "cfg"), _rule("k", "other"), _rule("y")]
    first = [id(r) for r in plan_rules(rules)]
    second = [id(r) for r in plan_rules(rules)]
    assert first == second
    assert len(first) == len(rules)


def test_cycle_raises_with_path():
    """
    Verifica que ciclos falham antes de qualquer `build`.

    Invariantes:
        - O caminho reportado começa e termina no mesmo nó
        - Os nós de regra aparecem como `rule[i]:chave`
    """
    _require_imports()
    with pytest.raises(DependencyCycleError) as excinfo:
        plan_rules([_rule("a", "b"), _rule("b", "a")])

    cycle = excinfo.value.details["cycle"]
    assert cycle[0] == cycle[-1]
    assert "rule[0]:a" in cycle
    assert "rule[1]:b" in cycle
    assert "Cycle detected" in str(excinfo.value)


def test_self_dependency_is_a_cycle():
    _require_imports()
    with pytest.raises(DependencyCycleError) as excinfo:
        plan_rules([_rule("a", "a")])
    assert excinfo.value.details["cycle"] == ["a", "rule[0]:a", "a"]


def test_empty_rule_list():
    _require_imports()
    assert plan_rules([]) == []


def test_plan_order_returns_registration_indices():
    _require_imports()
    rules = [_rule("web", "db"), _rule("db")]
    assert plan_order(rules) == [1, 0]


def test_plan_order_keeps_repeated_rule_objects_apart():
    """
    O mesmo objeto Rule registrado duas vezes aparece duas vezes no plano,
    cada ocorrência com o seu próprio índice.
    """
    _require_imports()
    db = _rule("db")
    assert plan_order([db, db]) == [0, 1]
    assert plan_rules([db, db]) == [db, db]
