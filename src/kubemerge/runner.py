# src/kubemerge/runner.py
"""
Montagem e execução do pipeline canônico do kubemerge.

Ordem declarada (e planejada) dos Steps:
    discover.files → parse.documents → merge.documents
        → validate.references → export.kubeconfig

Este módulo é o ponto de entrada programático da ferramenta completa; a CLI
apenas resolve a configuração, chama `run_merge` e apresenta o resultado.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from kubemerge.core.config.hashing import compute_config_hash
from kubemerge.core.engine.engine import Engine, RunResult
from kubemerge.core.pipeline.context import RunContext
from kubemerge.core.pipeline.registry import StepRegistry
from kubemerge.core.pipeline.step import Step
from kubemerge.steps.discover.files import DiscoverFilesStep
from kubemerge.steps.export.kubeconfig import ExportKubeconfigStep
from kubemerge.steps.merge.documents import MergeDocumentsStep
from kubemerge.steps.parse.documents import ParseDocumentsStep
from kubemerge.steps.validate.references import ValidateReferencesStep


@dataclass(frozen=True)
class MergeRun:
    """Resultado de `run_merge`: resultado do Engine + contexto do run."""

    result: RunResult
    ctx: RunContext

    @property
    def ok(self) -> bool:
        return self.result.ok


def default_steps() -> List[Step]:
    registry = StepRegistry()
    registry.add(DiscoverFilesStep())
    registry.add(ParseDocumentsStep())
    registry.add(MergeDocumentsStep())
    registry.add(ValidateReferencesStep())
    registry.add(ExportKubeconfigStep())
    return registry.list()


def run_merge(
    config: Dict[str, Any],
    *,
    run_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
    steps: Optional[List[Step]] = None,
) -> MergeRun:
    """
    Executa o pipeline completo com a configuração já resolvida.

    Args:
        config: Configuração efetiva (ver `kubemerge.core.config.load_config`).
        run_id: Identificador do run (gerado quando omitido).
        created_at: Instante canônico do run (agora, em UTC, quando omitido).
        steps: Steps alternativos (testes); por padrão o pipeline canônico.
    """
    ctx = RunContext(
        run_id=run_id or uuid.uuid4().hex[:12],
        created_at=created_at or datetime.now(timezone.utc),
        config=config,
        meta={"config_hash": compute_config_hash(config)},
    )
    engine = Engine(steps=steps if steps is not None else default_steps(), ctx=ctx)
    return MergeRun(result=engine.run(), ctx=ctx)
