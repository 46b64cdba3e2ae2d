"""Step canônico: merge.documents (v1).

Responsabilidades:
- consumir `kubeconfig.documents` (parse.documents), já em ordem de precedência
- executar o fold via `merge_with_report`
- publicar `kubeconfig.merged`
- registrar o impacto do merge (adicionados, duplicatas descartadas,
  proveniência do current-context)

Princípio: a política de precedência vive no core (`kubemerge.core.merge`);
este Step apenas a aplica e audita.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from kubemerge.core.merge.merger import merge_with_report
from kubemerge.core.pipeline.context import (
    DOCUMENTS_ARTIFACT_KEY,
    MERGED_ARTIFACT_KEY,
    RunContext,
)
from kubemerge.core.pipeline.step import Step, failed_result
from kubemerge.core.pipeline.types import StepKind, StepResult, StepStatus


@dataclass
class MergeDocumentsStep(Step):
    """Mescla os documentos parseados em um kubeconfig único."""

    id: str = "merge.documents"
    kind: StepKind = StepKind.MERGE
    depends_on: List[str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.depends_on is None:
            self.depends_on = ["parse.documents"]

    def run(self, ctx: RunContext) -> StepResult:
        try:
            if not ctx.has_artifact(DOCUMENTS_ARTIFACT_KEY):
                raise ValueError(f"Missing required artifact: {DOCUMENTS_ARTIFACT_KEY}")

            merged, report = merge_with_report(ctx.get_artifact(DOCUMENTS_ARTIFACT_KEY))

            for category, name, source in report.added:
                ctx.log(
                    step_id=self.id,
                    level="debug",
                    message=f"adding {category[:-1]}: {name}",
                    source=source,
                )
            for dup in report.skipped:
                ctx.log(
                    step_id=self.id,
                    level="debug",
                    message=f"skipping duplicate {dup.category[:-1]}: {dup.name}",
                    source=dup.source,
                    kept_from=dup.kept_from,
                )
            for source, count in report.added_by_source().items():
                ctx.log(
                    step_id=self.id,
                    level="info",
                    message=f"added {count} items",
                    source=source,
                )
            if merged.current_context:
                ctx.log(
                    step_id=self.id,
                    level="info",
                    message=f"using current-context: {merged.current_context}",
                    source=report.current_context_source,
                )

            ctx.set_artifact(MERGED_ARTIFACT_KEY, merged)
            ctx.set_impact(step_id=self.id, impact=report.to_dict())

            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=StepStatus.SUCCESS,
                summary="kubeconfig documents merged",
                metrics={
                    "clusters": len(merged.clusters or ()),
                    "contexts": len(merged.contexts or ()),
                    "users": len(merged.users or ()),
                    "duplicates_skipped": len(report.skipped),
                    "documents_blank": report.documents_blank,
                },
            )

        except Exception as e:
            return failed_result(ctx, step_id=self.id, kind=self.kind, error=e)
