"""Step canônico: discover.files (v1).

Responsabilidades:
- listar os kubeconfigs do diretório de entrada (somente arquivos regulares,
  sem recursão) cujas extensões estejam em `extensions`
- descartar arquivos cujo NOME contenha algum dos padrões de `exclude`
  (substring simples, não glob)
- ordenar lexicograficamente por caminho: esta ordem define a precedência
  do merge
- ler cada arquivo como UTF-8 e publicar `kubeconfig.sources`

Config esperada (exemplo):
steps:
  discover.files:
    input_dir: ~/.kube
    exclude: [backup, old]
    extensions: [.yaml, .yml]

Limites explícitos (v1):
- NÃO faz parse (ver parse.documents)
- NÃO segue subdiretórios
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Sequence

from kubemerge.core.config.hashing import compute_content_hash
from kubemerge.core.exceptions import DiscoveryError
from kubemerge.core.pipeline.context import SOURCES_ARTIFACT_KEY, RunContext
from kubemerge.core.pipeline.step import Step, failed_result, get_step_config
from kubemerge.core.pipeline.types import StepKind, StepResult, StepStatus


DEFAULT_EXTENSIONS = (".yaml", ".yml")


@dataclass(frozen=True)
class SourceDocument:
    """Par (proveniência, texto bruto) entregue ao parse."""

    source: str
    text: str


def _validate_config(step_cfg: Dict[str, Any]) -> Dict[str, Any]:
    input_dir = step_cfg.get("input_dir")
    if not isinstance(input_dir, str) or not input_dir.strip():
        raise ValueError("steps.discover.files.input_dir must be a non-empty string")

    exclude = step_cfg.get("exclude") or []
    if not isinstance(exclude, list) or not all(isinstance(p, str) and p for p in exclude):
        raise ValueError("steps.discover.files.exclude must be a list of non-empty strings")

    extensions = step_cfg.get("extensions") or list(DEFAULT_EXTENSIONS)
    if not isinstance(extensions, list) or not all(isinstance(e, str) and e for e in extensions):
        raise ValueError("steps.discover.files.extensions must be a list of non-empty strings")
    normalized = [e.lower() if e.startswith(".") else f".{e.lower()}" for e in extensions]

    return {
        "input_dir": Path(input_dir).expanduser(),
        "exclude": list(exclude),
        "extensions": normalized,
    }


def should_exclude(path: Path, exclude_patterns: Sequence[str]) -> bool:
    """True quando o nome do arquivo contém algum dos padrões."""
    return any(pattern in path.name for pattern in exclude_patterns)


def find_kubeconfig_files(
    input_dir: Path,
    *,
    exclude: Sequence[str] = (),
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> List[Path]:
    """Lista os arquivos elegíveis de `input_dir`, em ordem lexicográfica."""
    if not input_dir.is_dir():
        raise DiscoveryError(
            message=f"Diretório de entrada não existe: {input_dir}",
            details={"input_dir": str(input_dir)},
            hint="Informe um diretório existente com --input.",
        )

    found = [
        p
        for p in input_dir.iterdir()
        if p.is_file()
        and p.suffix.lower() in extensions
        and not should_exclude(p, exclude)
    ]
    return sorted(found)


@dataclass
class DiscoverFilesStep(Step):
    """Descobre e lê os kubeconfigs de entrada em ordem determinística."""

    id: str = "discover.files"
    kind: StepKind = StepKind.DISCOVER
    depends_on: List[str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.depends_on is None:
            self.depends_on = []

    def run(self, ctx: RunContext) -> StepResult:
        try:
            parsed = _validate_config(get_step_config(ctx, self.id))
            input_dir: Path = parsed["input_dir"]

            ctx.log(
                step_id=self.id,
                level="debug",
                message="scanning directory",
                input_dir=str(input_dir),
            )
            files = find_kubeconfig_files(
                input_dir,
                exclude=parsed["exclude"],
                extensions=parsed["extensions"],
            )
            if not files:
                raise DiscoveryError(
                    message=f"Nenhum kubeconfig YAML encontrado em {input_dir}",
                    details={
                        "input_dir": str(input_dir),
                        "exclude": parsed["exclude"],
                        "extensions": parsed["extensions"],
                    },
                    hint="Verifique o diretório de entrada e os padrões de exclusão.",
                )

            sources: List[SourceDocument] = []
            fingerprints: Dict[str, str] = {}
            for path in files:
                try:
                    text = path.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as e:
                    raise DiscoveryError(
                        message=f"Falha ao ler {path}: {e}",
                        details={"source": str(path)},
                    ) from e
                sources.append(SourceDocument(source=str(path), text=text))
                fingerprints[str(path)] = compute_content_hash(text)

            ctx.set_artifact(SOURCES_ARTIFACT_KEY, sources)
            ctx.log(
                step_id=self.id,
                level="info",
                message=f"found {len(sources)} kubeconfig files",
                files=[s.source for s in sources],
            )

            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=StepStatus.SUCCESS,
                summary=f"{len(sources)} kubeconfig files discovered",
                metrics={"files": len(sources)},
                artifacts={"input_dir": str(input_dir)},
                payload={"sources": [{"path": p, "sha256": h} for p, h in fingerprints.items()]},
            )

        except Exception as e:
            return failed_result(ctx, step_id=self.id, kind=self.kind, error=e)
