# src/kubemerge/core/pipeline/types.py
"""
Tipos canônicos do pipeline do kubemerge.

Componentes principais:
    - StepStatus → enum de estados finais (SUCCESS, SKIPPED, FAILED)
    - StepKind   → enum de classificação semântica de Steps
    - StepResult → estrutura imutável de resultado de execução

Invariantes:
    - Enums possuem valores textuais canônicos (serializáveis em JSON)
    - StepResult é imutável
    - Tipos não dependem de engine, CLI ou I/O

Limites explícitos:
    - Não executa Steps
    - Não contém lógica de domínio
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class StepKind(str, Enum):
    """
    Tipos semânticos de Steps no pipeline do kubemerge.

    Tipos definidos:
        - DISCOVER: localização e leitura dos kubeconfigs de entrada
        - PARSE: conversão de texto em documentos tipados
        - MERGE: fold dos documentos em um kubeconfig único
        - VALIDATE: verificações de integridade do resultado
        - EXPORT: materialização do resultado (arquivo, backup)

    O tipo é puramente informativo: o Engine não o usa para decidir execução.
    """
    DISCOVER = "discover"
    PARSE = "parse"
    MERGE = "merge"
    VALIDATE = "validate"
    EXPORT = "export"


class StepStatus(str, Enum):
    """
    Estados finais possíveis da execução de um Step.

    Estados definidos:
        - SUCCESS: execução concluída com sucesso
        - SKIPPED: execução pulada por decisão explícita (config ou dependência falha)
        - FAILED: execução interrompida por erro
    """
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult:
    """
    Resultado imutável da execução de um Step.

    Campos:
        - step_id: identificador único do Step
        - kind: tipo semântico do Step
        - status: estado final da execução do Step
        - summary: resumo textual da execução
        - metrics: contagens produzidas pelo Step
        - warnings: avisos não fatais gerados durante a execução
        - artifacts: referências a artefatos produzidos (ex.: caminhos)
        - payload: dados adicionais livres (ex.: `impact`, `error`)
    """
    step_id: str
    kind: StepKind
    status: StepStatus
    summary: str
    metrics: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    artifacts: Dict[str, str] = field(default_factory=dict)
    payload: Dict[str, Any] = field(default_factory=dict)
