"""Step canônico: validate.references (v1).

Responsabilidades:
- consumir `kubeconfig.merged` (merge.documents)
- executar `kubemerge.core.validation.validate`
- converter cada referência pendente em warning do run (não fatal)
- falhar quando current-context não existe (ValidationError)
- publicar `kubeconfig.warnings`
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from kubemerge.core.pipeline.context import (
    MERGED_ARTIFACT_KEY,
    WARNINGS_ARTIFACT_KEY,
    RunContext,
)
from kubemerge.core.pipeline.step import Step, failed_result
from kubemerge.core.pipeline.types import StepKind, StepResult, StepStatus
from kubemerge.core.validation.validator import validate


@dataclass
class ValidateReferencesStep(Step):
    """Valida a integridade referencial do kubeconfig mesclado."""

    id: str = "validate.references"
    kind: StepKind = StepKind.VALIDATE
    depends_on: List[str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.depends_on is None:
            self.depends_on = ["merge.documents"]

    def run(self, ctx: RunContext) -> StepResult:
        try:
            if not ctx.has_artifact(MERGED_ARTIFACT_KEY):
                raise ValueError(f"Missing required artifact: {MERGED_ARTIFACT_KEY}")

            warnings = validate(ctx.get_artifact(MERGED_ARTIFACT_KEY))
            for w in warnings:
                ctx.add_warning(step_id=self.id, message=w.message)
                ctx.log(
                    step_id=self.id,
                    level="warning",
                    message=w.message,
                    context=w.context,
                    ref_kind=w.ref_kind,
                    reference=w.reference,
                )
            ctx.set_artifact(WARNINGS_ARTIFACT_KEY, warnings)

            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=StepStatus.SUCCESS,
                summary=(
                    "references valid"
                    if not warnings
                    else f"{len(warnings)} dangling references"
                ),
                metrics={"dangling_references": len(warnings)},
                payload={"dangling_references": [w.to_dict() for w in warnings]},
            )

        except Exception as e:
            return failed_result(ctx, step_id=self.id, kind=self.kind, error=e)
