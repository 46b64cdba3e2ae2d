# src/kubemerge/core/engine/engine.py
"""
Engine de execução do pipeline do kubemerge.

Executa os Steps na ordem produzida pelo planner, aplicando as políticas
explícitas de execução:

- Step desabilitado por config (`steps.<id>.enabled: false`) → SKIPPED
- Step cuja dependência falhou ou foi pulada por falha → SKIPPED
- Exceção escapando de `Step.run` → FAILED com ErrorPayload (sem stack trace)
- `engine.fail_fast` (default true) → a primeira falha encerra o run

O Engine não muta instâncias de StepResult in-place: warnings registrados no
RunContext e o impacto do Step são incorporados criando uma nova instância
(`dataclasses.replace`).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

from kubemerge.core.errors import (
    ErrorPayload,
    engine_configuration_error,
    engine_execution_error,
)
from kubemerge.core.pipeline.context import RunContext
from kubemerge.core.pipeline.step import Step
from kubemerge.core.pipeline.types import StepKind, StepResult, StepStatus

from .planner import plan_execution


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma execução de pipeline."""
    steps: Dict[str, StepResult] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not any(r.status == StepStatus.FAILED for r in self.steps.values())

    def failed(self) -> List[StepResult]:
        return [r for r in self.steps.values() if r.status == StepStatus.FAILED]

    def first_error(self) -> Optional[Dict[str, Any]]:
        for r in self.failed():
            error = r.payload.get("error")
            if error:
                return error
        return None


class Engine:
    """Engine canônico do kubemerge (planner + executor)."""

    def __init__(self, *, steps: Sequence[Step], ctx: RunContext):
        self.steps: List[Step] = list(steps)
        self.ctx: RunContext = ctx

    def _is_enabled(self, step_id: str) -> bool:
        steps_cfg = (self.ctx.config or {}).get("steps", {}) or {}
        step_cfg = steps_cfg.get(step_id, {}) or {}
        return bool(step_cfg.get("enabled", True))

    def _fail_fast(self) -> bool:
        engine_cfg = (self.ctx.config or {}).get("engine", {}) or {}
        return bool(engine_cfg.get("fail_fast", True))

    def _exception_to_error(self, step_id: str, exc: Exception) -> ErrorPayload:
        to_payload = getattr(exc, "to_payload", None)
        if callable(to_payload):
            return to_payload()
        return engine_execution_error(
            step=step_id,
            exc_type=exc.__class__.__name__,
            exc_message=str(exc) or None,
        )

    def _enrich(self, *, step: Step, result: StepResult) -> StepResult:
        """Retorna uma NOVA instância com warnings do contexto e impacto do Step."""
        sid = step.id
        merged_w: List[str] = []
        for msg in list(result.warnings) + list(self.ctx.warnings.get(sid, [])):
            if msg not in merged_w:
                merged_w.append(msg)

        payload = dict(result.payload)
        impact = self.ctx.impacts.get(sid)
        if impact is not None and "impact" not in payload:
            payload["impact"] = impact

        kind = result.kind or getattr(step, "kind", None) or StepKind.VALIDATE
        return replace(result, step_id=sid, kind=kind, warnings=merged_w, payload=payload)

    def _mk_result(
        self,
        *,
        step: Step,
        status: StepStatus,
        summary: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> StepResult:
        kind = getattr(step, "kind", None) or StepKind.VALIDATE
        r = StepResult(
            step_id=step.id,
            kind=kind,
            status=status,
            summary=summary,
            payload=dict(payload or {}),
        )
        return self._enrich(step=step, result=r)

    def run(self) -> RunResult:
        ordered = plan_execution(self.steps)
        results: Dict[str, StepResult] = {}
        blocked: set = set()

        for step in ordered:
            sid = step.id

            if not self._is_enabled(sid):
                results[sid] = self._mk_result(
                    step=step,
                    status=StepStatus.SKIPPED,
                    summary="skipped by config",
                )
                continue

            deps = list(getattr(step, "depends_on", []) or [])
            if any(d in blocked for d in deps):
                blocked.add(sid)
                results[sid] = self._mk_result(
                    step=step,
                    status=StepStatus.SKIPPED,
                    summary="skipped due to failed dependency",
                )
                continue

            try:
                step_result = step.run(self.ctx)
                if not isinstance(step_result, StepResult):
                    error = engine_configuration_error(
                        message="Step retornou tipo inválido",
                        details={
                            "step_id": sid,
                            "expected": "StepResult",
                            "received": type(step_result).__name__,
                        },
                        hint="Ajuste o Step para retornar StepResult",
                    )
                    step_result = self._mk_result(
                        step=step,
                        status=StepStatus.FAILED,
                        summary=error.message,
                        payload={"error": error.to_dict()},
                    )
                else:
                    step_result = self._enrich(step=step, result=step_result)
            except Exception as e:
                error = self._exception_to_error(sid, e)
                self.ctx.log(
                    step_id=sid,
                    level="error",
                    message=error.message,
                    error_type=error.type,
                )
                step_result = self._mk_result(
                    step=step,
                    status=StepStatus.FAILED,
                    summary=error.message,
                    payload={"error": error.to_dict()},
                )

            results[sid] = step_result
            if step_result.status == StepStatus.FAILED:
                blocked.add(sid)
                if self._fail_fast():
                    break

        return RunResult(steps=results)
