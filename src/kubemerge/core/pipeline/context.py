# src/kubemerge/core/pipeline/context.py
"""
Contexto de execução compartilhado de um run do kubemerge.

O `RunContext` é o único meio pelo qual os Steps trocam informação:
    - artefatos intermediários (fontes lidas, documentos, kubeconfig mesclado)
    - eventos de log estruturados
    - warnings não fatais agrupados por Step
    - payloads de impacto (auditoria do merge)

Chaves de artefato canônicas:
    - `kubeconfig.sources`   → List[SourceDocument] (discover.files)
    - `kubeconfig.documents` → List[Document]       (parse.documents)
    - `kubeconfig.merged`    → MergedDocument       (merge.documents)
    - `kubeconfig.warnings`  → List[ReferenceWarning] (validate.references)
    - `kubeconfig.rendered`  → str, YAML final      (export.kubeconfig)

Invariantes:
    - Logs sempre incluem `run_id` e `step_id`
    - Warnings são agrupados por `step_id`
    - Cada run possui seu próprio contexto (sem estado global)

Limites explícitos:
    - Não executa Steps
    - Não imprime nada (a apresentação é responsabilidade da CLI)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


SOURCES_ARTIFACT_KEY = "kubeconfig.sources"
DOCUMENTS_ARTIFACT_KEY = "kubeconfig.documents"
MERGED_ARTIFACT_KEY = "kubeconfig.merged"
WARNINGS_ARTIFACT_KEY = "kubeconfig.warnings"
RENDERED_ARTIFACT_KEY = "kubeconfig.rendered"

LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class RunContext:
    """
    Contexto de execução compartilhado de um run.

    `created_at` é o instante canônico do run: é usado, por exemplo, no nome
    do arquivo de backup, o que mantém o run reprodutível em testes.
    """
    run_id: str
    created_at: datetime
    config: Dict[str, Any]
    meta: Dict[str, Any] = field(default_factory=dict)

    _artifacts: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)
    impacts: Dict[str, Any] = field(default_factory=dict, init=False)

    # -----------------------------
    # Artifact store
    # -----------------------------
    def set_artifact(self, key: str, value: Any) -> None:
        self._artifacts[key] = value

    def has_artifact(self, key: str) -> bool:
        return key in self._artifacts

    def get_artifact(self, key: str) -> Any:
        if key not in self._artifacts:
            raise KeyError(key)
        return self._artifacts[key]

    # -----------------------------
    # Impact payloads
    # -----------------------------
    def set_impact(self, *, step_id: str, impact: Any) -> None:
        self.impacts[step_id] = impact

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        if level not in LOG_LEVELS:
            raise ValueError(f"invalid log level: {level}")
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)

    def all_warnings(self) -> List[str]:
        """Warnings de todos os Steps, na ordem em que os Steps os registraram."""
        out: List[str] = []
        for messages in self.warnings.values():
            out.extend(messages)
        return out
