# tests/core/augment/test_walker.py
"""
Testes do Walker Rewriter.

Os testes asseguram que:
- sem walkers, apenas o nó raiz é reescrito
- walkers reinvocam a reescrita sobre subestruturas com contexto enriquecido
- cada walker recebe a saída do walker anterior
- o contexto raiz é vazio
- `apply_rule` aceita Registry, FrozenRegistry ou sequência de walkers
"""

import pytest

try:
    from kubecompose.core.augment.rules import aug_rule, from_pairs
    from kubecompose.core.augment.walker import apply_rule
    from kubecompose.core.injection.registry import Registry
except Exception as e:  # noqa: BLE001
    aug_rule = None
    from_pairs = None
    apply_rule = None
    Registry = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing walker module. Implement:\n"
            "- src/kubecompose/core/augment/walker.py (apply_rule)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def items_walker(node, rewrite, ctx):
    """Walker de teste: desce em `items`, marcando o contexto com kind=Item."""
    if not isinstance(node, dict) or "items" not in node:
        return node
    child_ctx = {**ctx, "kind": "Item", "parent": node.get("name")}
    return {**node, "items": [rewrite(i, child_ctx) for i in node["items"]]}


def test_no_walkers_rewrites_root_only():
    _require_imports()
    rule = from_pairs([({"name": "root"}, {"seen": True})])
    tree = {"name": "root", "items": [{"name": "root"}]}
    out = apply_rule([], rule, tree)
    assert out == {"name": "root", "items": [{"name": "root"}], "seen": True}


def test_root_context_is_empty():
    _require_imports()
    seen = []
    rule = aug_rule(lambda n, ctx: seen.append(ctx) or False, None)
    apply_rule([], rule, {"a": 1})
    assert seen == [{}]


def test_walker_propagates_context_to_children():
    """
    O matcher casa `kind` via contexto nos filhos; a raiz não casa.

    Invariantes:
        - A raiz, sem `kind`, não é alterada pela regra
        - Cada filho recebe o contexto empurrado pelo walker
    """
    _require_imports()
    rule = from_pairs([({"kind": "Item"}, {"tagged": True})])
    tree = {"name": "root", "items": [{"name": "a"}, {"name": "b"}]}
    out = apply_rule([items_walker], rule, tree)
    assert "tagged" not in out
    assert out["items"] == [{"name": "a", "tagged": True}, {"name": "b", "tagged": True}]


def test_two_argument_matcher_sees_parent_context():
    _require_imports()
    rule = aug_rule(lambda n, ctx: ctx.get("parent") == "root", {"under_root": True})
    out = apply_rule([items_walker], rule, {"name": "root", "items": [{"name": "a"}]})
    assert out["items"] == [{"name": "a", "under_root": True}]


def test_recursion_reaches_nested_levels():
    _require_imports()
    rule = from_pairs([({"kind": "Item"}, {"tagged": True})])
    tree = {"name": "root", "items": [{"name": "a", "items": [{"name": "a1"}]}]}
    out = apply_rule([items_walker], rule, tree)
    assert out["items"][0]["items"][0] == {"name": "a1", "tagged": True}


def test_each_walker_sees_previous_walker_output():
    _require_imports()
    order = []

    def first(node, rewrite, ctx):
        order.append("first")
        return {**node, "first": True}

    def second(node, rewrite, ctx):
        order.append(("second", node.get("first")))
        return node

    apply_rule([first, second], from_pairs([]), {"a": 1})
    assert order == ["first", ("second", True)]


def test_apply_rule_accepts_registries():
    _require_imports()
    rule = from_pairs([({"kind": "Item"}, {"tagged": True})])
    tree = {"items": [{}]}
    registry = Registry().add_walker(items_walker)
    assert apply_rule(registry, rule, tree)["items"] == [{"tagged": True}]
    assert apply_rule(registry.freeze(), rule, tree)["items"] == [{"tagged": True}]


def test_apply_rule_does_not_mutate_input():
    _require_imports()
    rule = from_pairs([({"kind": "Item"}, {"tagged": True})])
    tree = {"items": [{"name": "a"}]}
    apply_rule([items_walker], rule, tree)
    assert tree == {"items": [{"name": "a"}]}
