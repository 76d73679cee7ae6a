# src/kubecompose/core/tree/model.py
"""
Modelo genérico de árvore de recursos.

Uma ResourceTree é, recursivamente:
    - um escalar (str, int, float, bool, None, ...)
    - uma sequência ordenada (`list` ou `tuple`) de ResourceTree
    - um mapeamento (`dict`) de chave textual para ResourceTree

A chave reservada `EXTENSION_KEY` pode aparecer em qualquer nível de
mapeamento. Seu valor é uma sequência de recursos irmãos que devem ser
emitidos ao lado do recurso principal, e não dentro dele.

Strings nunca são tratadas como sequências.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union

ResourceTree = Union[Dict[str, Any], List[Any], str, int, float, bool, None]

EXTENSION_KEY = "$additional"


def is_mapping(node: Any) -> bool:
    return isinstance(node, Mapping)


def is_sequence(node: Any) -> bool:
    return isinstance(node, (list, tuple))


def as_sequence(value: Any) -> List[Any]:
    """Normaliza o valor de um campo de lista: ausente → [], mapeamento → [m]."""
    if value is None:
        return []
    if is_sequence(value):
        return list(value)
    return [value]


def field_conj(mapping: Mapping[str, Any], key: str, value: Any) -> Dict[str, Any]:
    """Retorna uma cópia de `mapping` com `value` anexado à lista em `key`.

    A lista é criada quando a chave não existe.
    """
    result = dict(mapping or {})
    result[key] = as_sequence(result.get(key)) + [value]
    return result


def attach_sibling(tree: Mapping[str, Any], sibling: Any) -> Dict[str, Any]:
    return field_conj(tree, EXTENSION_KEY, sibling)
