# src/kubemerge/core/engine/planner.py
"""
Planejador de execução do pipeline (DAG).

Valida a estrutura do pipeline e produz uma ordem topológica determinística
dos Steps declarados. O pipeline canônico do kubemerge é linear
(discover → parse → merge → validate → export), mas o planner não assume
isso: qualquer DAG válido é aceito.

Decisões arquiteturais:
    - Ordenação topológica determinística (Kahn)
    - Empates são resolvidos pela ordem de declaração dos Steps
    - Erros estruturais são tratados como falhas fatais

Invariantes:
    - Nenhum Step é executado antes de suas dependências
    - Todos os Steps aparecem exatamente uma vez
    - A mesma definição de pipeline produz sempre a mesma ordem
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from kubemerge.core.pipeline.step import Step


class UnknownDependencyError(ValueError):
    """Um Step declarou em `depends_on` um `step.id` que não foi registrado."""


class CycleDetectedError(ValueError):
    """O grafo de dependências entre Steps contém um ciclo."""


def plan_execution(steps: Iterable[Step]) -> List[Step]:
    """
    Valida e produz uma ordem de execução topológica determinística de Steps.

    Quando vários Steps estão prontos ao mesmo tempo, vence o que foi
    declarado primeiro.

    Args:
        steps (Iterable[Step]): Steps declarativos do pipeline.

    Returns:
        List[Step]: Steps em ordem de execução.

    Raises:
        ValueError: Se algum Step possuir `id` inválido ou duplicado.
        UnknownDependencyError: Se um Step declarar dependência inexistente.
        CycleDetectedError: Se houver ciclo no grafo de dependências.
    """
    step_list = list(steps)

    by_id: Dict[str, Step] = {}
    position: Dict[str, int] = {}
    for index, s in enumerate(step_list):
        sid = getattr(s, "id", None)
        if not isinstance(sid, str) or not sid.strip():
            raise ValueError("step.id must be a non-empty string")
        if sid in by_id:
            raise ValueError(f"Duplicate step id: {sid}")
        by_id[sid] = s
        position[sid] = index

    deps: Dict[str, List[str]] = {}
    for sid, s in by_id.items():
        d = list(getattr(s, "depends_on", []) or [])
        for dep in d:
            if dep not in by_id:
                raise UnknownDependencyError(f"Step '{sid}' depends on unknown step '{dep}'")
        deps[sid] = d

    incoming_count: Dict[str, int] = {sid: len(dlist) for sid, dlist in deps.items()}
    outgoing: Dict[str, List[str]] = {sid: [] for sid in by_id}
    for sid, dlist in deps.items():
        for dep in dlist:
            outgoing[dep].append(sid)

    ready: List[str] = [sid for sid in by_id if incoming_count[sid] == 0]
    order_ids: List[str] = []

    while ready:
        ready.sort(key=position.__getitem__)
        sid = ready.pop(0)
        order_ids.append(sid)
        for child in outgoing[sid]:
            incoming_count[child] -= 1
            if incoming_count[child] == 0:
                ready.append(child)

    if len(order_ids) != len(by_id):
        raise CycleDetectedError("Cycle detected in step dependency graph")

    return [by_id[sid] for sid in order_ids]
