"""
# Pipeline Core — kubemerge

Contratos e estruturas que compõem o pipeline de um run do kubemerge:

- **types**: `StepStatus`, `StepKind`, `StepResult`
- **step**: `Step` (Protocol) e helpers comuns aos Steps
- **context**: `RunContext` (artefatos, logs, warnings, impactos)
- **registry**: `StepRegistry` (unicidade de `step.id`)

Steps não conhecem o Engine; dependências são explícitas e declarativas;
a comunicação entre Steps ocorre apenas via `RunContext`.
"""

from .context import RunContext
from .registry import DuplicateStepIdError, StepRegistry
from .step import Step
from .types import StepKind, StepResult, StepStatus

__all__ = [
    "RunContext",
    "DuplicateStepIdError",
    "StepRegistry",
    "Step",
    "StepKind",
    "StepResult",
    "StepStatus",
]
