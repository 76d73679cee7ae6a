"""
Core do KubeCompose.

Este pacote contém a implementação canônica e independente de
colaboradores externos do KubeCompose.

O core é projetado para ser:
    - determinístico
    - puramente funcional (nenhum I/O, nenhuma thread)
    - testável de forma isolada

Componentes principais:
    - tree      → modelo de árvore, flatten de irmãos, descritores
    - augment   → matchers, updaters, cascata e walkers
    - injection → registry, planner e resolver do grafo de regras
    - config    → carregamento, merge e hashing de configuração

Limites explícitos:
    - Não valida semântica dos recursos (ex.: schema Kubernetes)
    - Não serializa nem aplica recursos em cluster
"""
