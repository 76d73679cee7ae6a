# src/kubecompose/core/tree/describe.py
"""
Agregação de descritores (Descriptor Aggregator).

Um descritor é um mapa que resume um recurso. Ele é construído executando
todos os extractors registrados sobre o recurso e mesclando os resultados.
Regras dependentes recebem descritores, nunca o recurso bruto: assim uma
regra não precisa conhecer a estrutura interna de suas dependências.

Política de merge:
    - extractors que retornam `None` não contribuem
    - em colisão de chave, o extractor registrado por último vence
    - para um recurso com irmãos embutidos, o descritor é o merge de
      principal seguido de cada irmão, na ordem de descoberta
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .flatten import flatten

Extractor = Callable[[Any], Optional[Mapping[str, Any]]]


def describe_single(resource: Any, extractors: Iterable[Extractor]) -> Dict[str, Any]:
    """Descreve um único recurso (sem considerar irmãos embutidos)."""
    desc: Dict[str, Any] = {}
    for extractor in extractors:
        part = extractor(resource)
        if part is not None:
            desc.update(part)
    return desc


def describe(resource: Any, extractors: Iterable[Extractor]) -> Dict[str, Any]:
    """
    Descreve um recurso e todos os seus irmãos como uma única unidade.

    Args:
        resource: ResourceTree, possivelmente com `EXTENSION_KEY` embutida.
        extractors: Extractors em ordem de registro.

    Returns:
        Dict[str, Any]: Descritor combinado (último vence).
    """
    extractors = list(extractors)
    primary, siblings = flatten(resource)

    desc: Dict[str, Any] = {}
    for obj in [primary, *siblings]:
        desc.update(describe_single(obj, extractors))
    return desc
