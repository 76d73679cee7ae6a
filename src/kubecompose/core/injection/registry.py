# src/kubecompose/core/injection/registry.py
"""
Registro de regras, extractors e walkers.

Este módulo define o `Registry`, o builder explícito que acumula, em ordem
de registro, tudo o que uma resolução precisa:

    - regras (`Rule`) que produzem recursos a partir de dependências nomeadas
    - extractors que resumem recursos em descritores
    - walkers que guiam a reescrita recursiva de augmentation

O registry possui duas fases:
    - construção → mutável, via chamadas encadeáveis (`add_rule`, ...)
    - resolução  → `freeze()` produz um `FrozenRegistry` imutável; o
      resolver trabalha exclusivamente sobre esse snapshot

Decisões arquiteturais:
    - A ordem de registro é preservada e usada como critério de desempate
    - Várias regras podem declarar a mesma chave (regras concorrentes);
      o conflito só é avaliado na resolução
    - Módulos são funções `Registry -> Registry` instaladas com `install`

Invariantes:
    - Toda regra possui chave textual não vazia
    - `depends_on` é sempre uma tupla de chaves
    - Um `FrozenRegistry` nunca muda após criado

Limites explícitos:
    - Não planeja nem resolve regras
    - Não valida semântica dos recursos produzidos
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Tuple

from kubecompose.core.augment.walker import Walker
from kubecompose.core.tree.describe import Extractor


@dataclass(frozen=True)
class Rule:
    """Regra nomeada: produz `key` a partir dos valores de `depends_on`."""

    key: str
    depends_on: Tuple[str, ...]
    build: Callable[..., Any]


@dataclass(frozen=True)
class FrozenRegistry:
    """Snapshot imutável de um Registry, usado durante a resolução."""

    rules: Tuple[Rule, ...] = ()
    extractors: Tuple[Extractor, ...] = ()
    walkers: Tuple[Walker, ...] = ()

    def freeze(self) -> "FrozenRegistry":
        return self


@dataclass
class Registry:
    """
    Builder canônico de regras, extractors e walkers.

    Todas as operações de registro retornam o próprio registry para
    permitir encadeamento:

        registry = (
            Registry()
            .add_rule("db", ["db-password"], make_db)
            .add_rule("web", ["db"], make_web)
        )
    """

    _rules: List[Rule] = field(default_factory=list, init=False, repr=False)
    _extractors: List[Extractor] = field(default_factory=list, init=False, repr=False)
    _walkers: List[Walker] = field(default_factory=list, init=False, repr=False)

    def add_rule(self, key: str, depends_on: Iterable[str], build: Callable[..., Any]) -> "Registry":
        if not isinstance(key, str) or not key.strip():
            raise ValueError("rule key must be a non-empty string")
        if isinstance(depends_on, str):
            raise ValueError(f"Rule '{key}': depends_on must be a sequence of keys, not a string")
        deps = tuple(depends_on or ())
        for dep in deps:
            if not isinstance(dep, str) or not dep.strip():
                raise ValueError(f"Rule '{key}': dependency keys must be non-empty strings")
        if not callable(build):
            raise TypeError(f"Rule '{key}': build must be callable")

        self._rules.append(Rule(key=key, depends_on=deps, build=build))
        return self

    def add_extractor(self, extractor: Extractor) -> "Registry":
        if not callable(extractor):
            raise TypeError("extractor must be callable")
        self._extractors.append(extractor)
        return self

    def add_walker(self, walker: Walker) -> "Registry":
        if not callable(walker):
            raise TypeError("walker must be callable")
        self._walkers.append(walker)
        return self

    def install(self, *modules: Callable[["Registry"], "Registry"]) -> "Registry":
        """Aplica módulos (`Registry -> Registry`) em ordem."""
        registry = self
        for module in modules:
            registry = module(registry)
        return registry

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    @property
    def extractors(self) -> Tuple[Extractor, ...]:
        return tuple(self._extractors)

    @property
    def walkers(self) -> Tuple[Walker, ...]:
        return tuple(self._walkers)

    def freeze(self) -> FrozenRegistry:
        return FrozenRegistry(
            rules=tuple(self._rules),
            extractors=tuple(self._extractors),
            walkers=tuple(self._walkers),
        )


def new_registry() -> Registry:
    return Registry()
