# tests/steps/test_parse_documents_step.py
"""Testes do Step parse.documents (políticas abort/skip)."""

from __future__ import annotations

from datetime import datetime, timezone

from kubemerge.core.pipeline.context import (
    DOCUMENTS_ARTIFACT_KEY,
    SOURCES_ARTIFACT_KEY,
    RunContext,
)
from kubemerge.core.pipeline.types import StepStatus
from kubemerge.steps.discover.files import SourceDocument
from kubemerge.steps.parse.documents import ParseDocumentsStep


def _make_ctx(sources, on_error="abort") -> RunContext:
    ctx = RunContext(
        run_id="test",
        created_at=datetime.now(timezone.utc),
        config={"steps": {"parse.documents": {"on_error": on_error}}},
    )
    ctx.set_artifact(SOURCES_ARTIFACT_KEY, sources)
    return ctx


def test_parse_all_documents(dev_kubeconfig_yaml):
    ctx = _make_ctx(
        [
            SourceDocument(source="a.yaml", text=dev_kubeconfig_yaml),
            SourceDocument(source="b.yaml", text=""),
        ]
    )
    sr = ParseDocumentsStep().run(ctx)

    assert sr.status == StepStatus.SUCCESS
    docs = ctx.get_artifact(DOCUMENTS_ARTIFACT_KEY)
    assert [d.source for d in docs] == ["a.yaml", "b.yaml"]
    assert sr.metrics == {"documents": 2, "blank": 1, "invalid": 0}


def test_abort_on_invalid_document(dev_kubeconfig_yaml):
    ctx = _make_ctx(
        [
            SourceDocument(source="a.yaml", text="- not a mapping\n"),
            SourceDocument(source="b.yaml", text=dev_kubeconfig_yaml),
        ]
    )
    sr = ParseDocumentsStep().run(ctx)

    assert sr.status == StepStatus.FAILED
    assert sr.payload["error"]["type"] == "KUBECONFIG_PARSE_ERROR"
    assert sr.payload["error"]["details"]["source"] == "a.yaml"
    assert not ctx.has_artifact(DOCUMENTS_ARTIFACT_KEY)


def test_skip_invalid_document_with_warning(dev_kubeconfig_yaml):
    ctx = _make_ctx(
        [
            SourceDocument(source="a.yaml", text="- not a mapping\n"),
            SourceDocument(source="b.yaml", text=dev_kubeconfig_yaml),
        ],
        on_error="skip",
    )
    sr = ParseDocumentsStep().run(ctx)

    assert sr.status == StepStatus.SUCCESS
    assert [d.source for d in ctx.get_artifact(DOCUMENTS_ARTIFACT_KEY)] == ["b.yaml"]
    assert sr.metrics["invalid"] == 1
    assert sr.payload["invalid"][0]["source"] == "a.yaml"
    assert len(ctx.warnings["parse.documents"]) == 1


def test_invalid_policy_fails():
    sr = ParseDocumentsStep().run(_make_ctx([], on_error="ignore"))
    assert sr.status == StepStatus.FAILED


def test_missing_sources_artifact_fails():
    ctx = RunContext(run_id="t", created_at=datetime.now(timezone.utc), config={})
    sr = ParseDocumentsStep().run(ctx)

    assert sr.status == StepStatus.FAILED
    assert "kubeconfig.sources" in sr.payload["error"]["message"]
