# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do KubeCompose.

Objetivo único: garantir que o pacote é importável e que a superfície
pública esperada está exposta. Não validam comportamento de domínio.

Invariantes:
    - Não dependem de configuração, filesystem ou I/O
"""

import importlib

import pytest


@pytest.mark.parametrize("module", [
    "kubecompose",
    "kubecompose.core.config",
    "kubecompose.core.tree",
    "kubecompose.core.augment",
    "kubecompose.core.injection",
    "kubecompose.kube",
])
def test_modules_import(module):
    importlib.import_module(module)


def test_public_surface():
    import kubecompose

    for name in ("new_registry", "resolve", "flatten", "describe", "compile_matcher",
                 "compile_updater", "aug_rule", "compose", "from_pairs", "apply_rule"):
        assert callable(getattr(kubecompose, name)), name
    assert kubecompose.EXTENSION_KEY == "$additional"
