# src/kubecompose/core/config/loader.py
"""
Carregamento da configuração de uma resolução a partir de camadas.

Uma configuração é o estado pré-resolvido do grafo de regras: cada chave de
topo é uma chave de regra já disponível. Ela é montada a partir de uma
camada de defaults (obrigatória) seguida de camadas de override opcionais,
cada uma sendo um arquivo YAML/JSON ou um mapeamento já em memória.

Além dos valores efetivos, o carregamento registra de onde veio cada chave
de topo (`LoadedConfig.origin`), informação que o resolver anexa ao contexto
da resolução para rastreabilidade.

Invariantes:
    - O arquivo de defaults precisa existir; overrides ausentes são ignorados
    - Toda chave de topo é uma string não vazia (uma chave de regra)
    - Camadas posteriores têm precedência (ver `merge_layers`)
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigKeyError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import merge_layers

ConfigSource = Union[str, Path, Mapping[str, Any]]

INLINE_SOURCE = "<inline>"


@dataclass(frozen=True)
class LoadedConfig:
    """Configuração efetiva e a origem de cada chave de topo."""

    values: Dict[str, Any] = field(default_factory=dict)
    sources: Tuple[str, ...] = ()
    origin: Dict[str, str] = field(default_factory=dict)


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Lê um único arquivo de configuração (YAML `.yaml`/`.yml` ou `.json`).

    Arquivos vazios são lidos como `{}`.

    Raises:
        UnsupportedConfigFormatError: Extensão não suportada.
        InvalidConfigRootTypeError: Conteúdo raiz diferente de mapeamento.
        InvalidConfigKeyError: Chave de topo que não é string não vazia.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    elif suffix == ".json":
        data = json.loads(text) if text.strip() else None
    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    data = {} if data is None else data
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__} ({path})"
        )
    _check_keys(data, str(path))
    return data


def _check_keys(layer: Mapping[Any, Any], source: str) -> None:
    bad = [k for k in layer if not isinstance(k, str) or not k.strip()]
    if bad:
        raise InvalidConfigKeyError(
            f"Chaves de configuração devem ser chaves de regra (strings não vazias); "
            f"inválidas em {source}: {bad!r}"
        )


def load_config_layers(defaults: ConfigSource, *overrides: ConfigSource) -> LoadedConfig:
    """
    Carrega e mescla as camadas de configuração de uma resolução.

    Args:
        defaults: Arquivo (ou mapeamento) de defaults.
        *overrides: Arquivos ou mapeamentos de override, em ordem crescente
            de precedência. Arquivos inexistentes são ignorados.

    Returns:
        LoadedConfig: Valores efetivos, fontes usadas e origem por chave.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        ConfigTypeConflictError: Se uma chave mudar de tipo entre camadas.
    """
    layers = []
    sources = []
    origin: Dict[str, str] = {}

    for position, source in enumerate((defaults, *overrides)):
        if isinstance(source, Mapping):
            _check_keys(source, INLINE_SOURCE)
            label, layer = INLINE_SOURCE, dict(source)
        else:
            path = Path(source)
            if not path.exists():
                if position == 0:
                    raise DefaultsNotFoundError(f"Arquivo de defaults não encontrado: {path}")
                continue
            label, layer = str(path), read_config_file(path)

        layers.append(layer)
        sources.append(label)
        origin.update({key: label for key in layer})

    return LoadedConfig(values=merge_layers(layers), sources=tuple(sources), origin=origin)


def load_config(
    *,
    defaults_path: Union[str, Path],
    local_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """Configuração efetiva de defaults + override local opcional."""
    overrides = () if local_path is None else (local_path,)
    return load_config_layers(defaults_path, *overrides).values
