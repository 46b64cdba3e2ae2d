"""Renderização textual do resultado de um run (CLI).

Produz:
- a lista de kubeconfigs encontrados
- o resumo do kubeconfig mesclado (contagens e current-context)
- os warnings do run
- as linhas de log filtradas por nível

Limites explícitos:
- NÃO imprime (retorna strings; a CLI decide o destino)
- NÃO lê nem grava arquivos
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence

from kubemerge.core.kubeconfig.model import MergedDocument
from kubemerge.core.pipeline.context import LOG_LEVELS


# campos extras de evento exibidos entre parênteses
EVENT_FIELDS = ("source",)


def render_files(files: Sequence[str]) -> str:
    lines = [f"Found {len(files)} kubeconfig files:"]
    lines.extend(f"  - {f}" for f in files)
    return "\n".join(lines)


def render_summary(merged: MergedDocument) -> str:
    lines = [
        "Merged config contains:",
        f"  - {len(merged.clusters or ())} clusters",
        f"  - {len(merged.contexts or ())} contexts",
        f"  - {len(merged.users or ())} users",
    ]
    if merged.current_context:
        lines.append(f"  - Current context: {merged.current_context}")
    else:
        lines.append("  - No current context set")
    return "\n".join(lines)


def render_warnings(warnings: Sequence[str]) -> str:
    if not warnings:
        return ""
    lines = [f"{len(warnings)} warning(s):"]
    lines.extend(f"  ! {w}" for w in warnings)
    return "\n".join(lines)


def _level_rank(level: str) -> int:
    try:
        return LOG_LEVELS.index(level.lower())
    except ValueError:
        return 0


def render_events(
    events: Iterable[Dict[str, Any]],
    *,
    min_level: str = "info",
) -> List[str]:
    """Formata eventos do RunContext como `[LEVEL] step_id: message (source=...)`."""
    threshold = _level_rank(min_level)
    lines: List[str] = []
    for event in events:
        if _level_rank(event.get("level", "info")) < threshold:
            continue
        extras = ", ".join(
            f"{k}={event[k]}" for k in EVENT_FIELDS if event.get(k) is not None
        )
        line = f"[{event.get('level', 'info').upper()}] {event.get('step_id')}: {event.get('message')}"
        if extras:
            line = f"{line} ({extras})"
        lines.append(line)
    return lines
