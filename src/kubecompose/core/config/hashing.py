# src/kubecompose/core/config/hashing.py
"""
Hashing canônico de configuração do KubeCompose.

O hash gerado representa a **identidade estrutural** da configuração de uma
resolução e é registrado no contexto de resolução para rastreabilidade:
duas resoluções com o mesmo registry e o mesmo hash produzem a mesma saída.

Uma configuração mapeia chaves para valores **arbitrários** (números de
porta como chaves, tuplas, sets, objetos). O hash precisa ser total sobre
esses valores: rastreabilidade nunca pode impedir uma resolução válida.

Política de hashing (v1):
    - Os valores são primeiro canonicalizados (`_canonical`):
        - mapeamentos → dict com chaves textuais (`str` mantida, demais `repr`)
        - list / tuple → lista
        - set / frozenset → lista ordenada pela forma serializada
        - demais valores → inalterados; não serializáveis viram `str(value)`
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - Algoritmo SHA-256

Invariantes:
    - Configurações só com chaves textuais e valores JSON produzem o mesmo
      hash que o SHA-256 do seu JSON canônico
    - A ordem de inserção de chaves e de elementos de sets não altera o hash
"""


import json
import hashlib
from typing import Any, Dict, Mapping


def _dumps(value: Any) -> str:
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def _canonical(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            (k if isinstance(k, str) else repr(k)): _canonical(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_canonical(v) for v in value), key=_dumps)
    return value


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico da configuração de uma resolução.

    Args:
        config (Dict[str, Any]): Configuração efetiva.

    Returns:
        str: Hash SHA-256 hexadecimal (64 caracteres) da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = _dumps(_canonical(config))
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
