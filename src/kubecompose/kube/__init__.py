"""
Colaboradores Kubernetes do KubeCompose.

    - objects  → construtores e modificadores de objetos de API
    - standard → extractors e walkers padrão (`standard_descriptors`)
    - export   → serialização YAML (`to_yaml`) e apply em cluster (`kube_apply`)
"""

from .export import kube_apply, to_yaml
from .standard import standard_descriptors

__all__ = ["kube_apply", "standard_descriptors", "to_yaml"]
