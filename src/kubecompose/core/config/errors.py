# src/kubecompose/core/config/errors.py
"""
Exceções canônicas da camada de configuração do KubeCompose.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento e a resolução da configuração de uma resolução.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Mensagens de erro são claras e direcionadas ao usuário

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de resolução de regras

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende do resolver nem da camada de augmentation
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do KubeCompose.

    Todas as exceções levantadas durante carregamento e merge da
    configuração devem herdar desta classe.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).

    Uma configuração é um mapa chave → valor pré-resolvido; listas ou
    escalares no root não identificam nenhuma chave.
    """


class InvalidConfigKeyError(ConfigError):
    """Chave de topo da configuração que não pode ser uma chave de regra."""


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"web-replicas": 3}
        - override: {"web-replicas": {"min": 1}}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
        - `path` identifica a chave em conflito (ex.: `("labels", "tier")`)
    """

    def __init__(self, message: str, *, path: tuple = ()):
        super().__init__(message)
        self.path = tuple(path)
