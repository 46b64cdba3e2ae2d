# src/kubemerge/core/validation/validator.py
"""
Validação de integridade referencial do kubeconfig mesclado.

Regras (v1):
    - `current-context` não vazio que não nomeia nenhum context mesclado
      → ValidationError (fatal). Verificado primeiro; não há warnings
      quando esta regra falha.
    - para cada context mesclado:
        - referência a cluster inexistente → 1 warning
        - referência a user inexistente → 1 warning
      (checagens independentes, nunca fatais)

A assimetria é intencional: `current-context` seleciona a configuração
operativa, então uma seleção inválida impede o uso do kubeconfig; contexts
com referências pendentes podem ser entradas não utilizadas ou reservadas.

Limites explícitos:
    - Não muta o documento
    - Não valida conteúdo de credenciais nem URLs de servidor
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from kubemerge.core.errors import dangling_reference
from kubemerge.core.exceptions import ValidationError
from kubemerge.core.kubeconfig.model import MergedDocument


@dataclass(frozen=True)
class ReferenceWarning:
    """Context que referencia, por nome, um cluster ou user inexistente."""

    context: str
    ref_kind: str  # "cluster" | "user"
    reference: str

    @property
    def message(self) -> str:
        return dangling_reference(
            context=self.context,
            ref_kind=self.ref_kind,
            reference=self.reference,
        ).message

    def to_dict(self) -> Dict[str, Any]:
        return dangling_reference(
            context=self.context,
            ref_kind=self.ref_kind,
            reference=self.reference,
        ).to_dict()

    def __str__(self) -> str:
        return self.message


def validate(document: MergedDocument) -> List[ReferenceWarning]:
    """
    Valida referências entre registros do documento mesclado.

    Args:
        document: Documento produzido por `merge`.

    Returns:
        List[ReferenceWarning]: Referências pendentes, na ordem dos contexts
            (para cada context: cluster antes de user).

    Raises:
        ValidationError: Se `current-context` não corresponder a nenhum context.
    """
    context_names = set(document.context_names())

    if document.current_context and document.current_context not in context_names:
        raise ValidationError(
            message=(
                f"current-context '{document.current_context}' "
                "não corresponde a nenhum context mesclado"
            ),
            details={
                "current_context": document.current_context,
                "contexts": sorted(context_names),
            },
            hint="Declare o context selecionado em algum kubeconfig de entrada ou ajuste current-context.",
        )

    cluster_names = set(document.cluster_names())
    user_names = set(document.user_names())
    warnings: List[ReferenceWarning] = []

    for named in document.contexts or ():
        ctx = named.payload
        if ctx.cluster not in cluster_names:
            warnings.append(
                ReferenceWarning(context=named.name, ref_kind="cluster", reference=ctx.cluster)
            )
        if ctx.user not in user_names:
            warnings.append(
                ReferenceWarning(context=named.name, ref_kind="user", reference=ctx.user)
            )

    return warnings
