# tests/conftest.py
"""
Fixtures compartilhados para testes do kubemerge.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos kubeconfig em YAML (strings) para parse/merge/validação
- configuração mínima e determinística
- contexto de execução controlado (RunContext)
- Steps dummy para testes estruturais do engine

Decisões arquiteturais:
    - Documentos são fornecidos como strings para evitar I/O
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa pipeline real
    - Nenhuma fixture realiza I/O

Limites explícitos:
    - Não substituir testes de integração (ver tests/e2e)
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Kubeconfig documents
# =====================================================

@pytest.fixture
def dev_kubeconfig_yaml() -> str:
    """Kubeconfig completo com um cluster, um context, um user e current-context."""
    return """\
apiVersion: v1
kind: Config
clusters:
- name: dev
  cluster:
    server: https://dev.example.com:6443
    certificate-authority-data: REVWLUNB
contexts:
- name: dev
  context:
    cluster: dev
    user: dev-admin
    namespace: default
users:
- name: dev-admin
  user:
    token: dev-token
current-context: dev
preferences:
  colors: true
"""


@pytest.fixture
def prod_kubeconfig_yaml() -> str:
    """Kubeconfig de produção, sem current-context, com preferência conflitante."""
    return """\
apiVersion: v1
kind: Config
clusters:
- name: prod
  cluster:
    server: https://prod.example.com:6443
contexts:
- name: prod
  context:
    cluster: prod
    user: prod-admin
users:
- name: prod-admin
  user:
    client-certificate-data: Q0VSVA==
    client-key-data: S0VZ
preferences:
  colors: false
"""


@pytest.fixture
def dangling_kubeconfig_yaml() -> str:
    """Context que referencia um user não declarado em nenhum documento."""
    return """\
clusters:
- name: staging
  cluster:
    server: https://staging.example.com
contexts:
- name: staging
  context:
    cluster: staging
    user: ghost
"""


# =====================================================
# Pipeline fixtures (Step + RunContext)
# =====================================================

@pytest.fixture
def dummy_config() -> dict:
    """
    Configuração mínima e válida, já resolvida, para testes do engine.

    Returns:
        dict: Configuração com `fail_fast` explicitamente habilitado.
    """
    return {
        "engine": {"fail_fast": True, "log_level": "INFO"},
        "steps": {"discover.files": {"enabled": True}},
    }


@pytest.fixture
def dummy_ctx(dummy_config):
    """
    RunContext determinístico para testes.

    `run_id` e `created_at` são fixos; o timestamp é timezone-aware (UTC).
    """
    from kubemerge.core.pipeline.context import RunContext

    return RunContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config=dummy_config,
        meta={"source": "pytest"},
    )


@pytest.fixture
def DummyStep():
    """
    Fixture factory que fornece uma implementação mínima e duck-typed de um Step.

    Retorna uma *classe* (não uma instância) que:
    - expõe `id`, `kind`, `depends_on`
    - registra um artefato `<id>.ok` e retorna SUCCESS

    Usado por:
        - Testes de planner (ordenação, dependências)
        - Testes de engine (execução, status, transições)
    """
    from kubemerge.core.pipeline.types import StepKind, StepResult, StepStatus

    class _DummyStep:
        def __init__(
            self,
            step_id: str = "discover.files",
            kind: StepKind = StepKind.DISCOVER,
            depends_on=None,
        ):
            self.id = step_id
            self.kind = kind
            self.depends_on = depends_on or []

        def run(self, ctx):
            ctx.set_artifact(f"{self.id}.ok", True)
            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=StepStatus.SUCCESS,
                summary="dummy ok",
                metrics={},
                warnings=[],
                artifacts={"ok": f"{self.id}.ok"},
                payload={"note": "dummy"},
            )

    return _DummyStep
