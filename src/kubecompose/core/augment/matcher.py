# src/kubecompose/core/augment/matcher.py
"""
Compilação de matchers de augmentation.

Um matcher decide se uma regra de augmentation se aplica a um nó, dado o
contexto herdado. A especificação do matcher é um valor declarativo cuja
forma em runtime determina o comportamento; a forma é classificada uma
única vez (`MatcherKind`) e convertida em uma função `(node, context) -> bool`.

Formas suportadas:
    - PREDICATE → callable de um (node) ou dois (node, context) argumentos
    - MAPPING   → dict; todas as chaves precisam casar (AND), com fallback
                  do valor do nó para o valor do contexto
    - SET       → set/frozenset; todos os elementos precisam casar (AND)
    - FIELD     → `Field(name)`; nome de campo usado estruturalmente
    - PATTERN   → `re.Pattern`; string que casa integralmente
    - LITERAL   → qualquer outro valor; igualdade

Invariantes:
    - Aridade inválida de predicado falha na compilação, não no uso
    - O contexto nunca é mutado pelo matcher
"""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

from kubecompose.core.errors import invalid_matcher_arity
from kubecompose.core.exceptions import InvalidMatcherArityError
from kubecompose.core.tree.model import is_mapping

Matcher = Callable[[Any, Any], bool]


@dataclass(frozen=True)
class Field:
    """Nome de campo usado como token estrutural em matchers.

    - nó mapeamento → casa se contém a chave
    - nó string     → casa se igual ao nome
    - outro nó      → casa se igual ao próprio token
    """

    name: str

    def __str__(self) -> str:
        return self.name


class MatcherKind(str, Enum):
    PREDICATE = "predicate"
    MAPPING = "mapping"
    SET = "set"
    FIELD = "field"
    PATTERN = "pattern"
    LITERAL = "literal"


def matcher_kind(spec: Any) -> MatcherKind:
    if isinstance(spec, Field):
        return MatcherKind.FIELD
    if isinstance(spec, re.Pattern):
        return MatcherKind.PATTERN
    if callable(spec):
        return MatcherKind.PREDICATE
    if is_mapping(spec):
        return MatcherKind.MAPPING
    if isinstance(spec, (set, frozenset)):
        return MatcherKind.SET
    return MatcherKind.LITERAL


def predicate_arity(func: Callable[..., Any]) -> Any:
    """Número de parâmetros posicionais declarados; `*args` conta como 2."""
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return "unknown"

    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return max(count, 2)
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


def _compile_predicate(func: Callable[..., Any]) -> Matcher:
    arity = predicate_arity(func)
    if arity == 2:
        return lambda node, ctx: bool(func(node, ctx))
    if arity == 1:
        return lambda node, ctx: bool(func(node))
    raise InvalidMatcherArityError.from_payload(invalid_matcher_arity(arity=arity))


def _lookup(source: Any, key: Any) -> Any:
    if is_mapping(source):
        return source.get(key)
    return None


def _compile_mapping(spec: Mapping[Any, Any]) -> Matcher:
    compiled = [(key, compile_matcher(sub)) for key, sub in spec.items()]

    def match(node: Any, ctx: Any) -> bool:
        for key, sub in compiled:
            # valor do nó tem prioridade; contexto preenche campos ausentes
            if is_mapping(node) and key in node:
                value = node[key]
            elif is_mapping(ctx) and key in ctx:
                value = ctx[key]
            else:
                return False
            if not sub(value, _lookup(ctx, key)):
                return False
        return True

    return match


def _compile_set(spec: Any) -> Matcher:
    compiled = [compile_matcher(sub) for sub in spec]
    return lambda node, ctx: all(m(node, ctx) for m in compiled)


def _compile_field(token: Field) -> Matcher:
    def match(node: Any, ctx: Any) -> bool:
        if is_mapping(node):
            return token.name in node
        if isinstance(node, str):
            return node == token.name
        return node == token

    return match


def _compile_pattern(pattern: "re.Pattern[str]") -> Matcher:
    def match(node: Any, ctx: Any) -> bool:
        if isinstance(node, str):
            return pattern.fullmatch(node) is not None
        return False

    return match


def compile_matcher(spec: Any) -> Matcher:
    """
    Compila uma especificação declarativa em `(node, context) -> bool`.

    Raises:
        InvalidMatcherArityError: Predicado com aridade diferente de 1 ou 2.
    """
    kind = matcher_kind(spec)

    if kind is MatcherKind.PREDICATE:
        return _compile_predicate(spec)
    if kind is MatcherKind.MAPPING:
        return _compile_mapping(spec)
    if kind is MatcherKind.SET:
        return _compile_set(spec)
    if kind is MatcherKind.FIELD:
        return _compile_field(spec)
    if kind is MatcherKind.PATTERN:
        return _compile_pattern(spec)
    return lambda node, ctx: node == spec
