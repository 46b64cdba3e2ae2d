"""
Engine do kubemerge.

    - planner → ordenação topológica determinística e validações estruturais
    - engine  → execução coordenada de Steps (skip por config, skip por
      dependência falha, fail-fast, conversão de exceções em ErrorPayload)
"""

from .engine import Engine, RunResult
from .planner import CycleDetectedError, UnknownDependencyError, plan_execution

__all__ = [
    "Engine",
    "RunResult",
    "CycleDetectedError",
    "UnknownDependencyError",
    "plan_execution",
]
