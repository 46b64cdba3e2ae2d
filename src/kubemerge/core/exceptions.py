"""
kubemerge — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do kubemerge.

Objetivo:
- Permitir que o core (parse, merge, validação) e os Steps levantem
  exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload
- Evitar ValueError/RuntimeError genéricos nos pontos de falha do fluxo

Taxonomia:
- DiscoveryError  → diretório de entrada inválido ou sem documentos
- ParseError      → documento malformado ou registro sem campo obrigatório
- MergeError      → nenhum documento contribuiu com conteúdo
- ValidationError → current-context não resolvido no documento mesclado
- ExportError     → falha ao materializar o kubeconfig de saída

Regras:
- Exceções carregam apenas dados estruturados (serializáveis).
- Cada classe está associada a exatamente um código do catálogo em
  `kubemerge.core.errors`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from .errors import (
    DISCOVERY_ERROR,
    ENGINE_EXECUTION_ERROR,
    EXPORT_ERROR,
    KUBECONFIG_CURRENT_CONTEXT_NOT_FOUND,
    KUBECONFIG_MERGE_EMPTY,
    KUBECONFIG_PARSE_ERROR,
    ErrorPayload,
)


@dataclass(frozen=True)
class KubemergeException(Exception):
    """Base class para exceções internas do kubemerge.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    error_type: ClassVar[str] = ENGINE_EXECUTION_ERROR

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    def to_payload(self) -> ErrorPayload:
        """Converte a exceção no payload canônico de erro."""
        return ErrorPayload(
            type=self.error_type,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Descoberta de documentos
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DiscoveryError(KubemergeException):
    """Diretório de entrada ausente ou sem documentos elegíveis."""

    error_type: ClassVar[str] = DISCOVERY_ERROR


# ---------------------------------------------------------------------------
# Core: parse / merge / validação
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParseError(KubemergeException):
    """Documento malformado ou registro sem campo estruturalmente obrigatório."""

    error_type: ClassVar[str] = KUBECONFIG_PARSE_ERROR


@dataclass(frozen=True)
class MergeError(KubemergeException):
    """Nenhum documento contribuiu com entidade, current-context ou preferência."""

    error_type: ClassVar[str] = KUBECONFIG_MERGE_EMPTY


@dataclass(frozen=True)
class ValidationError(KubemergeException):
    """current-context não corresponde a nenhum context mesclado."""

    error_type: ClassVar[str] = KUBECONFIG_CURRENT_CONTEXT_NOT_FOUND


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ExportError(KubemergeException):
    """Falha ao gravar o kubeconfig mesclado ou seu backup."""

    error_type: ClassVar[str] = EXPORT_ERROR
