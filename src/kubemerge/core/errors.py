"""
kubemerge — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do kubemerge.
Erros são considerados artefatos de domínio e fazem parte do contrato operacional
do sistema, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do kubemerge.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        # o chamador deve garantir que details seja serializável
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Descoberta / Export
DISCOVERY_ERROR = "DISCOVERY_ERROR"
EXPORT_ERROR = "EXPORT_ERROR"

# Kubeconfig (core)
KUBECONFIG_PARSE_ERROR = "KUBECONFIG_PARSE_ERROR"
KUBECONFIG_MERGE_EMPTY = "KUBECONFIG_MERGE_EMPTY"
KUBECONFIG_CURRENT_CONTEXT_NOT_FOUND = "KUBECONFIG_CURRENT_CONTEXT_NOT_FOUND"
KUBECONFIG_DANGLING_REFERENCE = "KUBECONFIG_DANGLING_REFERENCE"

# Engine / Execução
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
ENGINE_CONFIGURATION_ERROR = "ENGINE_CONFIGURATION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def dangling_reference(
    *,
    context: str,
    ref_kind: str,
    reference: str,
    hint: str = "Declare o registro referenciado em algum kubeconfig de entrada ou remova o context que o utiliza.",
) -> ErrorPayload:
    return ErrorPayload(
        type=KUBECONFIG_DANGLING_REFERENCE,
        message=f"Context '{context}' referencia {ref_kind} inexistente '{reference}'",
        details={
            "context": context,
            "ref_kind": ref_kind,
            "reference": reference,
        },
        hint=hint,
    )


def engine_execution_error(
    *,
    step: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique os eventos do run para diagnosticar a falha. Nenhum fallback é aplicado automaticamente.",
) -> ErrorPayload:
    return ErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message=exc_message or "Falha inesperada durante a execução do pipeline",
        details={
            "step": step,
            "exc_type": exc_type,
        },
        hint=hint,
    )


def engine_configuration_error(
    *,
    message: str = "Configuração inválida para execução do pipeline",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Revise a configuração do run/steps e declare explicitamente as opções necessárias antes de reexecutar.",
) -> ErrorPayload:
    return ErrorPayload(
        type=ENGINE_CONFIGURATION_ERROR,
        message=message,
        details=details or {},
        hint=hint,
    )
