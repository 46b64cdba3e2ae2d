# tests/core/engine/test_executor.py
"""
Testes do Engine: execução, skip por config, skip por dependência falha,
fail-fast e conversão de exceções em payload de erro.
"""

import pytest

try:
    from kubemerge.core.engine.engine import Engine
    from kubemerge.core.exceptions import MergeError
    from kubemerge.core.pipeline.types import StepStatus
except Exception as e:
    Engine = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


class FailingStep:
    """Step que sempre lança RuntimeError."""

    kind = None

    def __init__(self, step_id="fail", depends_on=None):
        self.id = step_id
        self.depends_on = depends_on or []

    def run(self, ctx):
        raise RuntimeError("boom")


class DomainFailingStep(FailingStep):
    def run(self, ctx):
        raise MergeError(message="nothing to merge", details={"documents_total": 0})


class BadReturnStep(FailingStep):
    def run(self, ctx):
        return {"not": "a StepResult"}


@pytest.fixture(autouse=True)
def _require_engine():
    if Engine is None:
        pytest.fail(f"Missing Engine. Import error: {_IMPORT_ERR}")


def test_happy_path(DummyStep, dummy_ctx):
    steps = [DummyStep("a"), DummyStep("b", depends_on=["a"])]
    result = Engine(steps=steps, ctx=dummy_ctx).run()

    assert result.steps["a"].status == StepStatus.SUCCESS
    assert result.steps["b"].status == StepStatus.SUCCESS
    assert result.ok is True
    assert dummy_ctx.get_artifact("b.ok") is True


def test_skip_by_config(DummyStep, dummy_ctx):
    dummy_ctx.config["steps"] = {"a": {"enabled": False}}
    result = Engine(steps=[DummyStep("a")], ctx=dummy_ctx).run()

    assert result.steps["a"].status == StepStatus.SKIPPED
    assert result.ok is True


def test_fail_fast_stops_execution(DummyStep, dummy_ctx):
    dummy_ctx.config["engine"] = {"fail_fast": True}
    steps = [FailingStep(), DummyStep("independent")]
    result = Engine(steps=steps, ctx=dummy_ctx).run()

    assert result.steps["fail"].status == StepStatus.FAILED
    assert "independent" not in result.steps
    assert result.ok is False


def test_without_fail_fast_dependents_are_skipped(DummyStep, dummy_ctx):
    dummy_ctx.config["engine"] = {"fail_fast": False}
    steps = [FailingStep(), DummyStep("child", depends_on=["fail"]), DummyStep("independent")]
    result = Engine(steps=steps, ctx=dummy_ctx).run()

    assert result.steps["fail"].status == StepStatus.FAILED
    assert result.steps["child"].status == StepStatus.SKIPPED
    assert result.steps["independent"].status == StepStatus.SUCCESS


def test_exception_becomes_error_payload(dummy_ctx):
    result = Engine(steps=[FailingStep()], ctx=dummy_ctx).run()

    error = result.first_error()
    assert error["type"] == "ENGINE_EXECUTION_ERROR"
    assert error["message"] == "boom"
    assert error["details"]["exc_type"] == "RuntimeError"
    assert any(ev["level"] == "error" for ev in dummy_ctx.events)


def test_domain_exception_keeps_catalog_code(dummy_ctx):
    result = Engine(steps=[DomainFailingStep()], ctx=dummy_ctx).run()
    assert result.first_error()["type"] == "KUBECONFIG_MERGE_EMPTY"


def test_invalid_return_type_fails(dummy_ctx):
    result = Engine(steps=[BadReturnStep()], ctx=dummy_ctx).run()

    assert result.steps["fail"].status == StepStatus.FAILED
    assert result.first_error()["type"] == "ENGINE_CONFIGURATION_ERROR"


def test_context_warnings_are_attached_to_result(DummyStep, dummy_ctx):
    class WarningStep(DummyStep):
        def run(self, ctx):
            ctx.add_warning(step_id=self.id, message="careful")
            return super().run(ctx)

    result = Engine(steps=[WarningStep("w")], ctx=dummy_ctx).run()
    assert result.steps["w"].warnings == ["careful"]
