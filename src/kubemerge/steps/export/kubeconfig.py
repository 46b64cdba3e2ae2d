"""Step canônico: export.kubeconfig (v1).

Responsabilidades:
- serializar `kubeconfig.merged` (YAML canônico) e publicar `kubeconfig.rendered`
- se o arquivo de saída já existir e `backup` estiver ativo, copiá-lo para
  `<output>.backup.<YYYYmmdd-HHMMSS>` (timestamp = `ctx.created_at`, horário local)
- criar o diretório pai da saída quando necessário
- gravar o kubeconfig já com `file_mode` (default 0600: o arquivo contém
  credenciais), via arquivo temporário + `os.replace`
- `dry_run`: nenhuma escrita em disco; apenas `kubeconfig.rendered`

Config esperada:
steps:
  export.kubeconfig:
    output: ~/.kube/config
    backup: true
    file_mode: "0600"
    dry_run: false
"""

from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from kubemerge.core.config.hashing import compute_content_hash
from kubemerge.core.exceptions import ExportError
from kubemerge.core.kubeconfig.codec import serialize
from kubemerge.core.pipeline.context import (
    MERGED_ARTIFACT_KEY,
    RENDERED_ARTIFACT_KEY,
    RunContext,
)
from kubemerge.core.pipeline.step import Step, failed_result, get_step_config
from kubemerge.core.pipeline.types import StepKind, StepResult, StepStatus


BACKUP_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


def _validate_config(step_cfg: Dict[str, Any]) -> Dict[str, Any]:
    dry_run = step_cfg.get("dry_run", False)
    if not isinstance(dry_run, bool):
        raise TypeError("steps.export.kubeconfig.dry_run must be a bool")

    backup = step_cfg.get("backup", True)
    if not isinstance(backup, bool):
        raise TypeError("steps.export.kubeconfig.backup must be a bool")

    output = step_cfg.get("output")
    if not isinstance(output, str) or not output.strip():
        raise ValueError("steps.export.kubeconfig.output must be a non-empty string")

    file_mode = step_cfg.get("file_mode", "0600")
    mode: Optional[int]
    if file_mode is None:
        mode = None
    else:
        try:
            mode = int(str(file_mode), 8)
        except ValueError as e:
            raise ValueError(
                "steps.export.kubeconfig.file_mode must be an octal string (ex.: '0600')"
            ) from e

    return {
        "output": Path(output).expanduser(),
        "backup": backup,
        "file_mode": mode,
        "dry_run": dry_run,
    }


def backup_path_for(output: Path, created_at: datetime) -> Path:
    """Caminho do backup: `<output>.backup.<YYYYmmdd-HHMMSS>`."""
    local = created_at.astimezone() if created_at.tzinfo else created_at
    return output.with_name(f"{output.name}.backup.{local.strftime(BACKUP_TIMESTAMP_FORMAT)}")


def create_backup(output: Path, created_at: datetime) -> Path:
    target = backup_path_for(output, created_at)
    try:
        shutil.copy2(output, target)
    except OSError as e:
        raise ExportError(
            message=f"Falha ao criar backup de {output}: {e}",
            details={"output": str(output), "backup": str(target)},
        ) from e
    return target


def write_kubeconfig(output: Path, text: str, *, file_mode: Optional[int]) -> None:
    """
    Grava o kubeconfig sem expor credenciais durante a escrita.

    O conteúdo vai para um arquivo temporário no mesmo diretório, criado com
    permissão 0600 (`tempfile.mkstemp`), recebe `file_mode` e só então
    substitui `output` via `os.replace`. Com `file_mode=None`, preserva o
    modo de um `output` pré-existente.
    """
    tmp_name: Optional[str] = None
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=output.parent, prefix=f".{output.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        if file_mode is not None:
            os.chmod(tmp_name, file_mode)
        elif output.exists():
            shutil.copymode(output, tmp_name)
        os.replace(tmp_name, output)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ExportError(
            message=f"Falha ao gravar {output}: {e}",
            details={"output": str(output)},
            hint="Verifique permissões do diretório de saída.",
        ) from e


@dataclass
class ExportKubeconfigStep(Step):
    """Grava o kubeconfig mesclado (com backup do arquivo anterior)."""

    id: str = "export.kubeconfig"
    kind: StepKind = StepKind.EXPORT
    depends_on: List[str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.depends_on is None:
            self.depends_on = ["validate.references"]

    def run(self, ctx: RunContext) -> StepResult:
        try:
            parsed = _validate_config(get_step_config(ctx, self.id))
            if not ctx.has_artifact(MERGED_ARTIFACT_KEY):
                raise ValueError(f"Missing required artifact: {MERGED_ARTIFACT_KEY}")

            text = serialize(ctx.get_artifact(MERGED_ARTIFACT_KEY))
            ctx.set_artifact(RENDERED_ARTIFACT_KEY, text)
            sha256 = compute_content_hash(text)

            output: Path = parsed["output"]
            artifacts: Dict[str, str] = {"sha256": sha256}

            if parsed["dry_run"]:
                ctx.log(step_id=self.id, level="info", message="dry run: nothing written", output=str(output))
                return StepResult(
                    step_id=self.id,
                    kind=self.kind,
                    status=StepStatus.SUCCESS,
                    summary="dry run: kubeconfig rendered only",
                    metrics={"bytes": len(text.encode("utf-8"))},
                    artifacts=artifacts,
                    payload={"dry_run": True},
                )

            if output.exists() and parsed["backup"]:
                backup = create_backup(output, ctx.created_at)
                artifacts["backup_path"] = str(backup)
                ctx.log(step_id=self.id, level="info", message=f"created backup: {backup}")

            write_kubeconfig(output, text, file_mode=parsed["file_mode"])
            artifacts["output_path"] = str(output)
            ctx.log(step_id=self.id, level="info", message=f"kubeconfig written: {output}")

            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=StepStatus.SUCCESS,
                summary=f"kubeconfig written to {output}",
                metrics={"bytes": len(text.encode("utf-8"))},
                artifacts=artifacts,
                payload={"dry_run": False},
            )

        except Exception as e:
            return failed_result(ctx, step_id=self.id, kind=self.kind, error=e)
