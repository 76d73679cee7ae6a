# tests/core/config/test_merge.py
"""
Testes da política de deep-merge de configuração.

Os testes asseguram que:
- dicionários são mesclados recursivamente
- listas são sobrescritas integralmente
- conflitos de tipo são rejeitados explicitamente
- `None` nunca provoca conflito de tipo
- nenhum input é mutado
- várias camadas são aplicadas em ordem de precedência crescente
"""

import pytest

try:
    from kubecompose.core.config.merge import deep_merge, merge_layers
    from kubecompose.core.config.errors import ConfigTypeConflictError
except Exception as e:  # noqa: BLE001
    deep_merge = None
    merge_layers = None
    ConfigTypeConflictError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que os módulos de merge de config estejam disponíveis para os testes.

    Falha explicitamente com uma mensagem orientada quando `deep_merge`
    e/ou `ConfigTypeConflictError` não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config merge modules. Implement:\n"
            "- src/kubecompose/core/config/merge.py (deep_merge, merge_layers)\n"
            "- src/kubecompose/core/config/errors.py (ConfigTypeConflictError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_merge_dict_recursive():
    """
    Verifica o merge recursivo de dicionários aninhados.

    Invariantes:
        - Chaves não sobrescritas são preservadas
        - Chaves novas no override são adicionadas
    """
    _require_imports()
    base = {"labels": {"app": "shop", "tier": "web"}, "web-replicas": 3}
    override = {"labels": {"tier": "frontend", "team": "core"}}
    out = deep_merge(base, override)
    assert out == {
        "labels": {"app": "shop", "tier": "frontend", "team": "core"},
        "web-replicas": 3,
    }


def test_merge_list_override_total():
    """Listas do override substituem integralmente a lista da base."""
    _require_imports()
    base = {"redis": {"hosts": ["redis-0", "redis-1"]}}
    override = {"redis": {"hosts": ["redis-2"]}}
    assert deep_merge(base, override) == {"redis": {"hosts": ["redis-2"]}}


def test_merge_type_conflict_raises():
    _require_imports()
    base = {"labels": {"app": "shop"}}
    override = {"labels": "shop"}  # dict vs str
    with pytest.raises(ConfigTypeConflictError):
        deep_merge(base, override)


def test_merge_none_never_conflicts():
    """
    Verifica que `None` é tratado como escalar comum.

    Uma chave desligada no override (`None`) sobrescreve a base, e uma
    chave nula na base aceita qualquer valor do override.
    """
    _require_imports()
    assert deep_merge({"db-password": "x"}, {"db-password": None}) == {"db-password": None}
    assert deep_merge({"db-password": None}, {"db-password": "x"}) == {"db-password": "x"}


def test_merge_does_not_mutate_inputs():
    _require_imports()
    base = {"labels": {"app": "shop"}}
    override = {"labels": {"tier": "web"}}
    deep_merge(base, override)
    assert base == {"labels": {"app": "shop"}}
    assert override == {"labels": {"tier": "web"}}


def test_merge_layers_later_layers_win():
    _require_imports()
    layers = [
        {"web-replicas": 1, "labels": {"app": "shop"}},
        {"web-replicas": 3, "labels": {"tier": "web"}},
        {"labels": {"tier": "frontend"}},
    ]
    assert merge_layers(layers) == {"web-replicas": 3, "labels": {"app": "shop", "tier": "frontend"}}


def test_merge_layers_empty_is_empty_config():
    _require_imports()
    assert merge_layers([]) == {}


def test_type_conflict_reports_key_path():
    """O conflito identifica a chave aninhada que mudou de tipo."""
    _require_imports()
    with pytest.raises(ConfigTypeConflictError) as excinfo:
        merge_layers([{"labels": {"tier": "web"}}, {"labels": {"tier": 3}}])
    assert excinfo.value.path == ("labels", "tier")
    assert "labels.tier" in str(excinfo.value)


def test_non_mapping_layer_raises():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError):
        merge_layers([{"web-replicas": 3}, ["not", "a", "layer"]])
