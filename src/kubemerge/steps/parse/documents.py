"""Step canônico: parse.documents (v1).

Responsabilidades:
- consumir `kubeconfig.sources` (discover.files)
- converter cada fonte em `Document` via `kubemerge.core.kubeconfig.parse`
- aplicar a política de erro declarada:
  - abort (default): o primeiro ParseError encerra o Step com FAILED
  - skip: a fonte inválida é descartada com warning e o parse continua
- publicar `kubeconfig.documents` preservando a ordem das fontes

Documentos em branco são mantidos (o merge os ignora) e registrados em log.

Config esperada:
steps:
  parse.documents:
    on_error: abort | skip
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from kubemerge.core.exceptions import ParseError
from kubemerge.core.kubeconfig.codec import parse
from kubemerge.core.kubeconfig.model import Document
from kubemerge.core.pipeline.context import (
    DOCUMENTS_ARTIFACT_KEY,
    SOURCES_ARTIFACT_KEY,
    RunContext,
)
from kubemerge.core.pipeline.step import Step, failed_result, get_step_config
from kubemerge.core.pipeline.types import StepKind, StepResult, StepStatus


ON_ERROR_POLICIES = ("abort", "skip")


def _validate_config(step_cfg: Dict[str, Any]) -> Dict[str, Any]:
    on_error = step_cfg.get("on_error", "abort")
    if on_error not in ON_ERROR_POLICIES:
        raise ValueError("steps.parse.documents.on_error must be 'abort' or 'skip'")
    return {"on_error": on_error}


@dataclass
class ParseDocumentsStep(Step):
    """Converte as fontes lidas em documentos tipados."""

    id: str = "parse.documents"
    kind: StepKind = StepKind.PARSE
    depends_on: List[str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.depends_on is None:
            self.depends_on = ["discover.files"]

    def run(self, ctx: RunContext) -> StepResult:
        try:
            parsed = _validate_config(get_step_config(ctx, self.id))
            if not ctx.has_artifact(SOURCES_ARTIFACT_KEY):
                raise ValueError(f"Missing required artifact: {SOURCES_ARTIFACT_KEY}")

            documents: List[Document] = []
            invalid: List[Dict[str, Any]] = []
            blank = 0

            for src in ctx.get_artifact(SOURCES_ARTIFACT_KEY):
                ctx.log(step_id=self.id, level="info", message="processing", source=src.source)
                try:
                    document = parse(src.text, source=src.source)
                except ParseError as e:
                    if parsed["on_error"] == "abort":
                        raise
                    invalid.append({"source": src.source, "message": e.message})
                    ctx.add_warning(step_id=self.id, message=f"Ignorando kubeconfig inválido: {e.message}")
                    ctx.log(
                        step_id=self.id,
                        level="warning",
                        message="skipping invalid document",
                        source=src.source,
                        error_message=e.message,
                    )
                    continue

                if document.is_blank():
                    blank += 1
                    ctx.log(step_id=self.id, level="debug", message="empty document", source=src.source)
                documents.append(document)

            ctx.set_artifact(DOCUMENTS_ARTIFACT_KEY, documents)

            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=StepStatus.SUCCESS,
                summary=f"{len(documents)} documents parsed",
                metrics={
                    "documents": len(documents),
                    "blank": blank,
                    "invalid": len(invalid),
                },
                payload={"on_error": parsed["on_error"], "invalid": invalid},
            )

        except Exception as e:
            return failed_result(ctx, step_id=self.id, kind=self.kind, error=e)
