# src/kubecompose/core/config/__init__.py

"""
Camada de configuração do KubeCompose.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar e identificar a configuração de uma resolução do KubeCompose.

A configuração é o conjunto de entradas pré-resolvidas que alimentam o
grafo de regras: cada chave presente é tratada como um recurso já
disponível, e seu valor é passado tal como está às regras que dependem dela.

Responsabilidades do pacote:
    - Carregamento de camadas de configuração (defaults + overrides), com a
      origem de cada chave
    - Merge determinístico das camadas, com conflitos localizados por caminho
    - Geração de hash canônico para rastreabilidade

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - A mesma entrada sempre produz a mesma configuração final
    - Conflitos estruturais são tratados como erro

Limites explícitos:
    - Não valida semântica de domínio
    - Não resolve regras
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigKeyError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import LoadedConfig, load_config, load_config_layers, read_config_file
from .merge import deep_merge, merge_layers

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigKeyError",
    "InvalidConfigRootTypeError",
    "LoadedConfig",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "load_config_layers",
    "merge_layers",
    "read_config_file",
]
