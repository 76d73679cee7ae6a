# src/kubecompose/core/injection/resolver.py
"""
Resolver do grafo de regras do KubeCompose.

O resolver transforma um registry de regras e uma configuração em uma
lista ordenada de recursos concretos:

    1. congela o registry (snapshot imutável)
    2. planeja a ordem de avaliação (`plan_order`); ciclos falham aqui
    3. percorre as regras na ordem planejada:
        - dependência ausente → regra pulada (não é erro)
        - chave já resolvida  → `ConflictingRuleError`
        - caso contrário      → `build`, descritor, flatten, saída
    4. opcionalmente aplica regras de augmentation a cada recurso de saída

A configuração funciona como estado pré-resolvido: seus valores são
passados às regras tal como estão. Valores produzidos por regras chegam
aos dependentes como descritores, nunca como o recurso bruto. Ela pode ser
passada pronta ou carregada de camadas de arquivos (`Resolver.from_files`).

Invariantes:
    - No máximo uma regra se aplica por chave em uma resolução
    - A saída de uma dependência precede a saída de quem depende dela
    - Mesma entrada → mesma saída e mesmo estado resolvido

Limites explícitos:
    - Não valida semântica dos recursos
    - Não serializa nem aplica recursos em cluster
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from kubecompose.core.augment.rules import CompiledRule, from_pairs
from kubecompose.core.augment.walker import apply_rule
from kubecompose.core.config.loader import ConfigSource, load_config_layers
from kubecompose.core.errors import resolution_conflict
from kubecompose.core.exceptions import ConflictingRuleError
from kubecompose.core.tree.describe import describe
from kubecompose.core.tree.flatten import flatten

from .context import ResolutionContext, new_context
from .planner import plan_order
from .registry import FrozenRegistry, Registry

Augmentation = Union[Sequence[Tuple[Any, Any]], CompiledRule]

CONFIG_WARNING_KEY = "config"


@dataclass(frozen=True)
class ResolutionResult:
    """Resultado de uma resolução: recursos emitidos e estado resolvido."""

    resources: List[Any] = field(default_factory=list)
    state: Dict[str, Any] = field(default_factory=dict)
    applied: List[str] = field(default_factory=list)


class Resolver:
    """Resolver canônico (planner + avaliação de regras)."""

    def __init__(
        self,
        registry: Union[Registry, FrozenRegistry],
        config: Optional[Dict[str, Any]] = None,
        *,
        ctx: Optional[ResolutionContext] = None,
    ):
        self.registry: FrozenRegistry = registry.freeze()
        self.config: Dict[str, Any] = dict(config or {})
        self.ctx: ResolutionContext = ctx if ctx is not None else new_context(self.config)

    @classmethod
    def from_files(
        cls,
        registry: Union[Registry, FrozenRegistry],
        defaults: ConfigSource,
        *overrides: ConfigSource,
        ctx: Optional[ResolutionContext] = None,
    ) -> "Resolver":
        """
        Cria um resolver cuja configuração vem de camadas (defaults + overrides).

        As fontes efetivamente usadas e a origem de cada chave de topo são
        registradas em `ctx.meta` (`config_sources`, `config_origin`).
        """
        loaded = load_config_layers(defaults, *overrides)
        if ctx is None:
            ctx = new_context(loaded.values)
        ctx.meta["config_sources"] = list(loaded.sources)
        ctx.meta["config_origin"] = dict(loaded.origin)
        return cls(registry, loaded.values, ctx=ctx)

    def _check_dependencies(self) -> None:
        rules = self.registry.rules
        producible = set(self.config) | {r.key for r in rules}
        for rule in rules:
            for dep in rule.depends_on:
                if dep not in producible:
                    self.ctx.add_warning(
                        rule=rule.key,
                        message=f"dependency '{dep}' is neither configured nor produced by any rule",
                    )

        consumed = {dep for r in rules for dep in r.depends_on}
        for key in self.config:
            if key not in consumed:
                self.ctx.add_warning(
                    rule=CONFIG_WARNING_KEY,
                    message=f"configured key '{key}' is not a dependency of any rule",
                )

    def run(self) -> ResolutionResult:
        rules = self.registry.rules
        order = plan_order(rules)
        self.ctx.log(rule=None, level="INFO", message="planned", rules=[rules[i].key for i in order])
        self._check_dependencies()

        state: Dict[str, Any] = dict(self.config)
        producers: Dict[str, Optional[int]] = {k: None for k in state}
        out: List[Any] = []
        applied: List[str] = []

        for index in order:
            rule = rules[index]
            missing = [d for d in rule.depends_on if d not in state]
            if missing:
                self.ctx.log(rule=rule.key, level="DEBUG", message="rule_skipped", index=index, missing=missing)
                continue

            if rule.key in state:
                competing = [i for i in (producers.get(rule.key), index) if i is not None]
                payload = resolution_conflict(key=rule.key, rules=competing)
                self.ctx.log(rule=rule.key, level="ERROR", message="conflict", index=index, rules=competing)
                raise ConflictingRuleError.from_payload(payload)

            resource = rule.build(*[state[d] for d in rule.depends_on])
            desc = describe(resource, self.registry.extractors)
            primary, siblings = flatten(resource)

            state[rule.key] = desc
            producers[rule.key] = index
            out.append(primary)
            out.extend(siblings)
            applied.append(rule.key)
            self.ctx.log(
                rule=rule.key,
                level="INFO",
                message="rule_applied",
                index=index,
                emitted=1 + len(siblings),
            )

        return ResolutionResult(resources=out, state=state, applied=applied)

    def augment(self, resources: List[Any], augmentation: Augmentation) -> List[Any]:
        """Aplica regras de augmentation a cada recurso de topo."""
        rule: CompiledRule = augmentation if callable(augmentation) else from_pairs(augmentation)
        return [apply_rule(self.registry.walkers, rule, r) for r in resources]

    def resolve(self, augmentation: Optional[Augmentation] = None) -> List[Any]:
        resources = self.run().resources
        if augmentation is not None:
            resources = self.augment(resources, augmentation)
        return resources


def resolve(
    registry: Union[Registry, FrozenRegistry],
    config: Optional[Dict[str, Any]] = None,
    augmentation: Optional[Augmentation] = None,
    *,
    ctx: Optional[ResolutionContext] = None,
) -> List[Any]:
    """
    Resolve o registry contra a configuração e retorna os recursos emitidos.

    Args:
        registry: Registry (congelado no início da resolução) ou FrozenRegistry.
        config: Configuração (chave → valor pré-resolvido).
        augmentation: Pares (matcher, updater) ou regra já compilada;
            quando informado, é aplicado a cada recurso emitido.
        ctx: Contexto de resolução opcional para coleta de eventos.

    Returns:
        List[Any]: Recursos em ordem de avaliação (principal seguido dos irmãos).

    Raises:
        DependencyCycleError: Se o grafo de regras tiver ciclo.
        ConflictingRuleError: Se duas regras aplicáveis produzirem a mesma chave.
    """
    return Resolver(registry, config, ctx=ctx).resolve(augmentation)


def resolve_files(
    registry: Union[Registry, FrozenRegistry],
    defaults: ConfigSource,
    *overrides: ConfigSource,
    augmentation: Optional[Augmentation] = None,
    ctx: Optional[ResolutionContext] = None,
) -> List[Any]:
    """`resolve` com a configuração carregada de camadas de arquivos."""
    return Resolver.from_files(registry, defaults, *overrides, ctx=ctx).resolve(augmentation)
