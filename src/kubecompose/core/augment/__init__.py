"""
Motor de augmentation do KubeCompose.

Componentes:
    - matcher → predicados declarativos sobre (node, context)
    - updater → transformações declarativas de nós
    - rules   → compilação de pares (matcher, updater) em cascata
    - walker  → reescrita recursiva com propagação de contexto
"""

from .matcher import Field, Matcher, MatcherKind, compile_matcher, matcher_kind
from .rules import CompiledRule, aug_rule, compose, from_pairs
from .updater import Updater, compile_updater
from .walker import Rewrite, Walker, apply_rule, rewrite

__all__ = [
    "CompiledRule",
    "Field",
    "Matcher",
    "MatcherKind",
    "Rewrite",
    "Updater",
    "Walker",
    "apply_rule",
    "aug_rule",
    "compile_matcher",
    "compile_updater",
    "compose",
    "from_pairs",
    "matcher_kind",
    "rewrite",
]
