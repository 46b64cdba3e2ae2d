# src/kubemerge/core/pipeline/registry.py
"""
Registro estrutural de Steps do pipeline.

O `StepRegistry` valida a integridade estrutural do pipeline antes de
qualquer planejamento: cada Step precisa de um `id` não vazio e único, e a
ordem de registro é preservada.

Limites explícitos:
    - Não planeja execução (ver `kubemerge.core.engine.planner`)
    - Não executa Steps
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .step import Step


class DuplicateStepIdError(ValueError):
    """Dois Steps registrados com o mesmo `step.id`; o pipeline é inválido."""


@dataclass
class StepRegistry:
    """Registro de Steps com validação de unicidade de `step.id`."""

    _steps: Dict[str, Step] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, step: Step) -> None:
        step_id = getattr(step, "id", None)
        if not isinstance(step_id, str) or not step_id.strip():
            raise ValueError("step.id must be a non-empty string")

        if step_id in self._steps:
            raise DuplicateStepIdError(f"Duplicate step id: {step_id}")

        self._steps[step_id] = step
        self._order.append(step_id)

    def get(self, step_id: str) -> Step:
        return self._steps[step_id]

    def list(self) -> List[Step]:
        return [self._steps[sid] for sid in self._order]

    def __len__(self) -> int:
        return len(self._order)
