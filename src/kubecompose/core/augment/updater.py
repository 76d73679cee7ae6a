# src/kubecompose/core/augment/updater.py
"""
Compilação de updaters de augmentation.

Um updater transforma um nó quando o matcher correspondente casa.

Formas suportadas:
    - callable      → usado diretamente, `node -> node'`
    - list / tuple  → updaters aplicados da esquerda para a direita,
                      `[f, g]` equivale a `g(f(node))`
    - dict          → para cada chave, aplica o sub-updater ao valor atual
                      daquela chave; demais campos permanecem intactos
    - outro valor   → constante; ignora o nó original

Invariantes:
    - O nó original nunca é mutado; updaters de mapeamento retornam um novo dict
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

from kubecompose.core.tree.model import is_mapping, is_sequence

Updater = Callable[[Any], Any]


def _compile_chain(specs: Any) -> Updater:
    compiled = [compile_updater(s) for s in specs]

    def update(node: Any) -> Any:
        for u in compiled:
            node = u(node)
        return node

    return update


def _compile_fields(spec: Mapping[Any, Any]) -> Updater:
    compiled = [(key, compile_updater(sub)) for key, sub in spec.items()]

    def update(node: Any) -> Any:
        result: Dict[Any, Any] = dict(node) if is_mapping(node) else {}
        for key, sub in compiled:
            result[key] = sub(result.get(key))
        return result

    return update


def compile_updater(spec: Any) -> Updater:
    """Compila uma especificação declarativa em `node -> node'`."""
    if callable(spec):
        return spec
    if is_sequence(spec):
        return _compile_chain(spec)
    if is_mapping(spec):
        return _compile_fields(spec)
    return lambda node: spec
