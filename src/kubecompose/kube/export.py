# src/kubecompose/kube/export.py
"""
Serialização YAML e apply em cluster.

Este módulo contém os dois colaboradores de saída do KubeCompose:

    - `to_yaml` → renderiza a lista de recursos resolvidos como documentos
      YAML em estilo bloco, separados por `---`
    - `kube_apply` → persiste o YAML em disco e invoca o comando de apply
      apenas quando o conteúdo mudou

Decisões (v1):
    - Ordem das chaves preservada (sem `sort_keys`)
    - Tuplas serializadas como listas YAML
    - Falha do comando remove o arquivo persistido, forçando reaplicação
      completa na próxima tentativa

Limites explícitos:
    - Não faz retry nem timeout do comando externo
    - Não valida o YAML contra o cluster
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any, Iterable, Sequence, Union

import yaml  # PyYAML

from kubecompose.core.errors import apply_command_failed
from kubecompose.core.exceptions import ApplyCommandError

DEFAULT_APPLY_COMMAND = ("kubectl", "apply", "-f")


class _BlockDumper(yaml.SafeDumper):
    pass


_BlockDumper.add_representer(tuple, _BlockDumper.represent_list)


def to_yaml(resources: Iterable[Any]) -> str:
    docs = [
        yaml.dump(r, Dumper=_BlockDumper, default_flow_style=False, sort_keys=False, allow_unicode=True)
        for r in resources
    ]
    return "---\n".join(docs)


def kube_apply(
    content: str,
    path: Union[str, Path],
    command: Sequence[str] = DEFAULT_APPLY_COMMAND,
) -> bool:
    """
    Persiste `content` em `path` e aplica no cluster quando houve mudança.

    Args:
        content: YAML a aplicar (tipicamente saída de `to_yaml`).
        path: Arquivo de estado persistido.
        command: Comando de apply; o caminho do arquivo é anexado ao final.

    Returns:
        bool: True se o comando foi executado, False se nada mudou.

    Raises:
        ApplyCommandError: Se o comando terminar com status diferente de zero.
            A mensagem é o stderr do comando, sem edição.
        OSError: Se o comando não puder ser executado; o arquivo de estado
            também é removido nesse caso.
    """
    path = Path(path)
    if path.exists() and path.read_text(encoding="utf-8") == content:
        return False

    path.write_text(content, encoding="utf-8")
    argv = [*command, str(path)]
    try:
        proc = subprocess.run(argv, capture_output=True, text=True)
    except OSError:
        path.unlink(missing_ok=True)
        raise

    if proc.returncode != 0:
        path.unlink(missing_ok=True)
        raise ApplyCommandError.from_payload(
            apply_command_failed(
                command=argv,
                returncode=proc.returncode,
                stderr=proc.stderr,
                path=str(path),
            )
        )
    return True
