"""
KubeCompose: composição declarativa de recursos Kubernetes.

Este pacote raiz define o namespace público do KubeCompose, uma biblioteca
para compor documentos de recursos (objetos de API estilo Kubernetes) a
partir de definições reutilizáveis, resolvendo dependências entre recursos
e aplicando overrides em cascata antes da emissão.

Arquitetura em alto nível:
    - core.tree      → modelo de árvore, flatten de irmãos, descritores
    - core.augment   → augmentation em cascata (matcher, updater, walker)
    - core.injection → registry, planner e resolver do grafo de regras
    - core.config    → carregamento, merge e hashing de configuração
    - kube           → construtores de recursos, descritores padrão,
                       serialização YAML e apply em cluster
"""

from .core.augment import (
    Field,
    apply_rule,
    aug_rule,
    compile_matcher,
    compile_updater,
    compose,
    from_pairs,
)
from .core.injection import (
    FrozenRegistry,
    Registry,
    ResolutionContext,
    Resolver,
    Rule,
    new_registry,
    resolve,
    resolve_files,
)
from .core.tree import EXTENSION_KEY, describe, describe_single, field_conj, flatten

__version__ = "0.1.0"

__all__ = [
    "EXTENSION_KEY",
    "Field",
    "FrozenRegistry",
    "Registry",
    "ResolutionContext",
    "Resolver",
    "Rule",
    "apply_rule",
    "aug_rule",
    "compile_matcher",
    "compile_updater",
    "compose",
    "describe",
    "describe_single",
    "field_conj",
    "flatten",
    "from_pairs",
    "new_registry",
    "resolve",
    "resolve_files",
]
