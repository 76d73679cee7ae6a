# src/kubecompose/core/config/merge.py
"""
Merge de camadas de configuração.

A configuração de uma resolução é montada a partir de camadas ordenadas
(defaults, overrides de ambiente, overrides locais, ...). Cada chave de topo
é uma entrada pré-resolvida do grafo de regras; camadas posteriores têm
precedência sobre as anteriores.

Política de merge (v1):
    - dict + dict  → merge recursivo por chave
    - list         → a camada posterior substitui a lista inteira
    - `None`       → desliga ou liga uma chave sem conflito de tipo
    - tipos distintos → `ConfigTypeConflictError` com o caminho da chave

Invariantes:
    - Nenhuma camada é mutada; o resultado não compartilha estrutura mutável
      com as camadas de entrada
    - A ordem das chaves segue a primeira camada que as declara
"""

from copy import deepcopy
from typing import Any, Dict, Iterable, Mapping, Tuple

from .errors import ConfigTypeConflictError

_MISSING = object()


def _dotted(path: Tuple[Any, ...]) -> str:
    return ".".join(str(p) for p in path)


def _merge_value(base: Any, override: Any, path: Tuple[Any, ...]) -> Any:
    if isinstance(base, dict) and isinstance(override, dict):
        merged = {key: deepcopy(value) for key, value in base.items()}
        for key, value in override.items():
            merged[key] = _merge_value(merged.get(key, _MISSING), value, path + (key,))
        return merged

    if base is _MISSING or base is None or override is None or isinstance(override, list):
        return deepcopy(override)

    if type(base) is not type(override):
        raise ConfigTypeConflictError(
            f"Conflito de tipo na chave '{_dotted(path)}': "
            f"{type(base).__name__} vs {type(override).__name__}",
            path=path,
        )
    return deepcopy(override)


def merge_layers(layers: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Mescla camadas de configuração em ordem de precedência crescente.

    Args:
        layers: Camadas (mapeamentos), da menos para a mais prioritária.

    Returns:
        Dict[str, Any]: Configuração efetiva.

    Raises:
        ConfigTypeConflictError: Se uma camada não for mapeamento ou se uma
            chave mudar de tipo entre camadas.
    """
    result: Dict[str, Any] = {}
    for position, layer in enumerate(layers):
        if not isinstance(layer, Mapping):
            raise ConfigTypeConflictError(
                f"Camada {position} deve ser um mapeamento, recebido: {type(layer).__name__}"
            )
        result = _merge_value(result, dict(layer), ())
    return result


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge de duas camadas: `override` sobre `base`."""
    return merge_layers([base, override])
