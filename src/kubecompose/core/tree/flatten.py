# src/kubecompose/core/tree/flatten.py
"""
Extração de recursos irmãos embutidos (Tree Flattener).

Este módulo remove a chave de extensão (`EXTENSION_KEY`) de qualquer nível
de uma ResourceTree e devolve os recursos encontrados como uma lista plana
de irmãos.

Ordem de descoberta (depth-first):
    - em um mapeamento, primeiro os itens explícitos da chave de extensão,
      cada um seguido pelos seus próprios irmãos aninhados
    - depois os irmãos encontrados nos demais campos, na ordem das chaves
    - em uma sequência, os irmãos de cada elemento na ordem dos elementos

Invariantes:
    - Nem o recurso principal nem nenhum irmão contém `EXTENSION_KEY`
      após o flatten, em qualquer profundidade
    - `flatten(flatten(t)[0])[1]` é sempre vazio
    - O input nunca é mutado; o recurso principal é uma nova árvore
"""

from __future__ import annotations

from typing import Any, List, Tuple

from .model import EXTENSION_KEY, as_sequence, is_mapping, is_sequence


def flatten(tree: Any) -> Tuple[Any, List[Any]]:
    """
    Separa uma ResourceTree em recurso principal e irmãos embutidos.

    Args:
        tree: ResourceTree possivelmente contendo `EXTENSION_KEY`.

    Returns:
        Tuple[Any, List[Any]]: (principal, irmãos), com os irmãos em ordem de
        descoberta depth-first, já sem nenhuma chave de extensão.
    """
    if is_mapping(tree):
        siblings: List[Any] = []
        for item in as_sequence(tree.get(EXTENSION_KEY)):
            item_primary, item_siblings = flatten(item)
            siblings.append(item_primary)
            siblings.extend(item_siblings)

        primary = {}
        for key, value in tree.items():
            if key == EXTENSION_KEY:
                continue
            primary[key], nested = flatten(value)
            siblings.extend(nested)
        return primary, siblings

    if is_sequence(tree):
        items: List[Any] = []
        siblings = []
        for element in tree:
            element_primary, nested = flatten(element)
            items.append(element_primary)
            siblings.extend(nested)
        return type(tree)(items), siblings

    return tree, []


def flatten_all(trees: List[Any]) -> List[Any]:
    """Achata uma lista de recursos: cada principal seguido dos seus irmãos."""
    out: List[Any] = []
    for tree in trees:
        primary, siblings = flatten(tree)
        out.append(primary)
        out.extend(siblings)
    return out
