"""
Modelo de árvore de recursos do KubeCompose.

Componentes:
    - model    → tipo ResourceTree, chave de extensão e helpers de campo
    - flatten  → extração de recursos irmãos embutidos em qualquer profundidade
    - describe → agregação de descritores via extractors
"""

from .describe import Extractor, describe, describe_single
from .flatten import flatten, flatten_all
from .model import EXTENSION_KEY, ResourceTree, attach_sibling, field_conj

__all__ = [
    "EXTENSION_KEY",
    "Extractor",
    "ResourceTree",
    "attach_sibling",
    "describe",
    "describe_single",
    "field_conj",
    "flatten",
    "flatten_all",
]
