# src/kubecompose/kube/objects.py
"""
Construtores de objetos de API Kubernetes.

Funções puras que produzem e modificam ResourceTrees com a forma de objetos
Kubernetes (Pod, Deployment, StatefulSet, Job, ConfigMap, Service). São os
`build` típicos das regras registradas no resolver.

Convenções:
    - modificadores recebem o objeto como primeiro argumento e retornam
      um novo objeto; nenhum input é mutado
    - recursos auxiliares (ex.: o Service de um `expose`, o ConfigMap de
      `add_files_to_container`) são anexados na chave de extensão e
      emitidos como irmãos após o flatten

Limites explícitos:
    - Não valida o schema dos objetos produzidos
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from kubecompose.core.tree.model import attach_sibling, field_conj

Obj = Dict[str, Any]
PortFunc = Callable[[Tuple[Obj, Obj, Callable[..., Obj]]], Tuple[Obj, Obj, Callable[..., Obj]]]


# ---------------------------------------------------------------------------
# Objetos básicos
# ---------------------------------------------------------------------------

def pod(name: str, labels: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None) -> Obj:
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {"name": name, "labels": dict(labels)},
        "spec": dict(options or {}),
    }


def _template_of(p: Obj) -> Obj:
    template = {k: deepcopy(v) for k, v in p.items() if k not in ("apiVersion", "kind")}
    template["metadata"] = {k: v for k, v in template.get("metadata", {}).items() if k != "name"}
    return template


def deployment(p: Obj, replicas: int) -> Obj:
    """Envolve o pod em um Deployment; o nome do pod vira o nome do Deployment."""
    labels = p["metadata"].get("labels", {})
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {"name": p["metadata"]["name"], "labels": labels},
        "spec": {
            "replicas": replicas,
            "selector": {"matchLabels": labels},
            "template": _template_of(p),
        },
    }


def job(p: Obj, restart_policy: str, attrs: Optional[Mapping[str, Any]] = None) -> Obj:
    template = _template_of(p)
    template["spec"] = {**template.get("spec", {}), "restartPolicy": restart_policy}
    return {
        "apiVersion": "batch/v1",
        "kind": "Job",
        "metadata": {"name": p["metadata"]["name"], "labels": p["metadata"].get("labels", {})},
        "spec": {"template": template, **dict(attrs or {})},
    }


def stateful_set(p: Obj, replicas: int, options: Optional[Mapping[str, Any]] = None) -> Obj:
    labels = p["metadata"].get("labels", {})
    return {
        "apiVersion": "apps/v1",
        "kind": "StatefulSet",
        "metadata": {"name": p["metadata"]["name"], "labels": labels},
        "spec": {
            **dict(options or {}),
            "replicas": replicas,
            "selector": {"matchLabels": labels},
            "template": _template_of(p),
            "volumeClaimTemplates": [],
        },
    }


def config_map(name: str, data: Mapping[str, Any]) -> Obj:
    return {
        "apiVersion": "v1",
        "kind": "ConfigMap",
        "metadata": {"name": name},
        "data": dict(data),
    }


def secret_key_ref(key: str, name: str, optional: bool = False) -> Obj:
    return {"secretKeyRef": {"key": key, "name": name, "optional": optional}}


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

def _add_to_spec(p: Obj, field_name: str, item: Obj) -> Obj:
    return {**p, "spec": field_conj(p.get("spec", {}), field_name, item)}


def add_container(p: Obj, name: str, image: str, options: Optional[Mapping[str, Any]] = None) -> Obj:
    return _add_to_spec(p, "containers", {**dict(options or {}), "name": name, "image": image})


def add_init_container(p: Obj, name: str, image: str, options: Optional[Mapping[str, Any]] = None) -> Obj:
    return _add_to_spec(p, "initContainers", {**dict(options or {}), "name": name, "image": image})


def add_env(container: Obj, envs: Mapping[str, Any]) -> Obj:
    env = list(container.get("env", [])) + [{"name": n, "value": v} for n, v in envs.items()]
    return {**container, "env": env}


def add_env_value_from(container: Obj, envs: Mapping[str, Any]) -> Obj:
    env = list(container.get("env", [])) + [{"name": n, "valueFrom": v} for n, v in envs.items()]
    return {**container, "env": env}


def update_container(p: Obj, cont_name: str, f: Callable[..., Obj], *args: Any) -> Obj:
    """Aplica `f(container, *args)` ao container (ou init container) `cont_name`."""

    def update_one(cont: Obj) -> Obj:
        if cont.get("name") == cont_name:
            return f(cont, *args)
        return cont

    spec = dict(p.get("spec", {}))
    for field_name in ("containers", "initContainers"):
        if field_name in spec:
            spec[field_name] = [update_one(c) for c in spec[field_name]]
    if not spec.get("initContainers", True):
        del spec["initContainers"]
    return {**p, "spec": spec}


# ---------------------------------------------------------------------------
# Volumes
# ---------------------------------------------------------------------------

def _mount(p: Obj, name: str, mounts: Mapping[str, str]) -> Obj:
    for cont, path in mounts.items():
        p = update_container(p, cont, field_conj, "volumeMounts", {"name": name, "mountPath": path})
    return p


def add_volume(p: Obj, name: str, spec: Mapping[str, Any], mounts: Mapping[str, str]) -> Obj:
    p = _add_to_spec(p, "volumes", {"name": name, **dict(spec)})
    return _mount(p, name, mounts)


def add_files_to_container(
    p: Obj,
    cont: str,
    unique: str,
    base_path: str,
    mounts: Mapping[str, Any],
) -> Obj:
    """Monta arquivos (caminho relativo → conteúdo) via um ConfigMap irmão."""
    data = {f"c{i}": content for i, content in enumerate(mounts.values())}
    items = [{"key": f"c{i}", "path": path} for i, path in enumerate(mounts)]
    p = attach_sibling(p, config_map(unique, data))
    return add_volume(p, unique, {"configMap": {"name": unique, "items": items}}, {cont: base_path})


def update_template(ctrl: Obj, f: Callable[..., Obj], *args: Any) -> Obj:
    spec = dict(ctrl["spec"])
    spec["template"] = f(spec["template"], *args)
    return {**ctrl, "spec": spec}


def add_volume_claim_template(sset: Obj, name: str, spec: Mapping[str, Any], mounts: Mapping[str, str]) -> Obj:
    sset = {**sset, "spec": field_conj(sset["spec"], "volumeClaimTemplates", {"metadata": {"name": name}, "spec": dict(spec)})}
    return update_template(sset, _mount, name, mounts)


def add_annotation(obj: Obj, key: str, val: Any) -> Obj:
    metadata = dict(obj.get("metadata", {}))
    metadata["annotations"] = {**metadata.get("annotations", {}), key: val}
    return {**obj, "metadata": metadata}


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

def port(cont: str, portname: str, podport: int, svcport: Optional[int] = None) -> PortFunc:
    """Expõe `podport` do container `cont` e registra o mapeamento no Service."""

    def apply(triple):
        p, svc, edit_svc = triple
        p = update_container(p, cont, field_conj, "ports", {"containerPort": podport, "name": portname})
        return p, edit_svc(svc, portname, podport, svcport), edit_svc

    return apply


def _chain(portfunc: Union[PortFunc, Iterable[PortFunc]]) -> PortFunc:
    if callable(portfunc):
        return portfunc
    funcs = list(portfunc)

    def apply(triple):
        for f in funcs:
            triple = f(triple)
        return triple

    return apply


def expose(
    depl: Obj,
    name: str,
    portfunc: Union[PortFunc, Iterable[PortFunc]],
    attrs: Mapping[str, Any],
    edit_svc: Callable[..., Obj],
) -> Obj:
    """Cria um Service para o template do controlador e o anexa como irmão."""
    template = depl["spec"]["template"]
    svc = {
        "kind": "Service",
        "apiVersion": "v1",
        "metadata": {"name": name},
        "spec": {**dict(attrs), "selector": template.get("metadata", {}).get("labels", {})},
    }
    template, svc, _ = _chain(portfunc)((template, svc, edit_svc))

    depl = attach_sibling(depl, svc)
    spec = {**depl["spec"], "template": template}
    if depl.get("kind") == "StatefulSet":
        spec["serviceName"] = name
    return {**depl, "spec": spec}


def expose_cluster_ip(depl: Obj, name: str, portfunc: Any, attrs: Optional[Mapping[str, Any]] = None) -> Obj:
    def edit(svc, portname, podport, svcport):
        entry = {"port": svcport, "name": portname, "targetPort": portname}
        return {**svc, "spec": field_conj(svc["spec"], "ports", entry)}

    return expose(depl, name, portfunc, {**dict(attrs or {}), "type": "ClusterIP"}, edit)


def expose_headless(depl: Obj, name: str, portfunc: Any, attrs: Optional[Mapping[str, Any]] = None) -> Obj:
    return expose_cluster_ip(depl, name, portfunc, {**dict(attrs or {}), "clusterIP": "None"})


def expose_node_port(depl: Obj, name: str, portfunc: Any) -> Obj:
    def edit(svc, portname, podport, svcport):
        entry = {"targetPort": portname, "name": portname, "port": podport}
        if svcport is not None:
            entry["nodePort"] = svcport
        return {**svc, "spec": field_conj(svc["spec"], "ports", entry)}

    return expose(depl, name, portfunc, {"type": "NodePort"}, edit)
