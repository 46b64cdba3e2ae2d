# src/kubemerge/core/pipeline/step.py
"""
Contrato canônico de Step do kubemerge.

Um Step é a menor unidade executável do pipeline (descobrir, parsear,
mesclar, validar, exportar). Steps não conhecem o Engine nem o planner e
se comunicam exclusivamente via `RunContext`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable

from .context import RunContext
from .types import StepKind, StepResult, StepStatus


@runtime_checkable
class Step(Protocol):
    """
    Contrato mínimo de um Step.

    Atributos obrigatórios:
        - id: identificador único e estável do Step
        - kind: classificação semântica do Step (`StepKind`)
        - depends_on: lista de `step_id` dos Steps dos quais depende

    Invariantes:
        - `run` é executado no máximo uma vez por run
        - O retorno de `run` é sempre um `StepResult`
    """
    id: str
    kind: StepKind
    depends_on: List[str]

    def run(self, ctx: RunContext) -> StepResult:
        """Executa a etapa uma única vez usando exclusivamente o RunContext."""
        ...


def get_step_config(ctx: RunContext, step_id: str) -> Dict[str, Any]:
    """Retorna `config.steps[step_id]` ou `{}` quando ausente ou malformado."""
    cfg = ctx.config or {}
    if not isinstance(cfg, dict):
        return {}
    steps_cfg = cfg.get("steps")
    if not isinstance(steps_cfg, dict):
        return {}
    step_cfg = steps_cfg.get(step_id) or {}
    return step_cfg if isinstance(step_cfg, dict) else {}


def failed_result(
    ctx: RunContext,
    *,
    step_id: str,
    kind: StepKind,
    error: Exception,
) -> StepResult:
    """
    Registra a falha no log do run e monta o StepResult FAILED correspondente.

    Exceções do kubemerge são convertidas no payload canônico (com código
    estável); outras exceções carregam apenas classe e mensagem.
    """
    to_payload = getattr(error, "to_payload", None)
    if callable(to_payload):
        error_dict = to_payload().to_dict()
    else:
        error_dict = {
            "type": error.__class__.__name__,
            "message": str(error) or "error",
        }

    ctx.log(
        step_id=step_id,
        level="error",
        message=f"{step_id} failed",
        error_type=error_dict["type"],
        error_message=error_dict["message"],
    )
    return StepResult(
        step_id=step_id,
        kind=kind,
        status=StepStatus.FAILED,
        summary=error_dict["message"],
        payload={"error": error_dict},
    )
