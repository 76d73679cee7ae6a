# src/kubecompose/kube/standard.py
"""
Descritores e walkers padrão para objetos Kubernetes.

`standard_descriptors` é um módulo (`Registry -> Registry`) que registra:

Extractors:
    - annotations → as anotações de `metadata`, quando presentes
    - service     → para Services, `hostname` (nome do Service) e
                    `ports` (nome da porta → número)

Walkers (em ordem):
    - template        → reescreve `spec.template` com contexto
                        `kind="Pod"` e a `metadata` do controlador
    - containers      → em pods, reescreve cada `spec.containers[i]`
                        com contexto `kind="Container"`
    - init containers → em pods, reescreve cada `spec.initContainers[i]`
                        com contexto `kind="InitContainer"`

O `kind` de um nó é o herdado do contexto quando presente; caso contrário,
o do próprio nó (um recurso de topo é reescrito com contexto vazio).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from kubecompose.core.augment.walker import Rewrite
from kubecompose.core.injection.registry import Registry
from kubecompose.core.tree.model import is_mapping


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------

def annotations_extractor(obj: Any) -> Optional[Dict[str, Any]]:
    metadata = obj.get("metadata") if is_mapping(obj) else None
    if is_mapping(metadata) and "annotations" in metadata:
        return dict(metadata["annotations"] or {})
    return None


def service_extractor(obj: Any) -> Optional[Dict[str, Any]]:
    if not is_mapping(obj) or obj.get("kind") != "Service":
        return None
    ports = (obj.get("spec") or {}).get("ports") or []
    return {
        "hostname": obj["metadata"]["name"],
        "ports": {p.get("name"): p.get("port") for p in ports},
    }


# ---------------------------------------------------------------------------
# Walkers
# ---------------------------------------------------------------------------

def _kind(node: Any, ctx: Dict[str, Any]) -> Any:
    if "kind" in ctx:
        return ctx["kind"]
    return node.get("kind") if is_mapping(node) else None


def template_walker(node: Any, rewrite: Rewrite, ctx: Dict[str, Any]) -> Any:
    spec = node.get("spec") if is_mapping(node) else None
    if not is_mapping(spec) or "template" not in spec:
        return node
    child_ctx = {**ctx, "kind": "Pod", "metadata": node.get("metadata")}
    return {**node, "spec": {**spec, "template": rewrite(spec["template"], child_ctx)}}


def _pod_list_walker(field_name: str, kind: str):
    def walker(node: Any, rewrite: Rewrite, ctx: Dict[str, Any]) -> Any:
        if not is_mapping(node) or _kind(node, ctx) != "Pod":
            return node
        spec = node.get("spec")
        if not is_mapping(spec) or field_name not in spec:
            return node
        child_ctx = {**ctx, "kind": kind}
        items = [rewrite(c, child_ctx) for c in spec[field_name]]
        return {**node, "spec": {**spec, field_name: items}}

    walker.__name__ = f"{field_name}_walker"
    return walker


containers_walker = _pod_list_walker("containers", "Container")
init_containers_walker = _pod_list_walker("initContainers", "InitContainer")


def standard_descriptors(registry: Registry) -> Registry:
    return (
        registry
        .add_extractor(annotations_extractor)
        .add_extractor(service_extractor)
        .add_walker(template_walker)
        .add_walker(containers_walker)
        .add_walker(init_containers_walker)
    )
