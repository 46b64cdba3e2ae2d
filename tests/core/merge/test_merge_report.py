# tests/core/merge/test_merge_report.py
"""Testes da auditoria do merge (MergeReport)."""

from kubemerge.core.kubeconfig.codec import parse
from kubemerge.core.merge.merger import SkippedDuplicate, merge_with_report


def test_report_tracks_added_and_skipped(dev_kubeconfig_yaml):
    a = parse(dev_kubeconfig_yaml, source="a.yaml")
    b = parse(dev_kubeconfig_yaml.replace("current-context: dev", "current-context: ''"), source="b.yaml")
    blank = parse("", source="c.yaml")

    merged, report = merge_with_report([a, b, blank])

    assert report.documents_total == 3
    assert report.documents_blank == 1
    assert report.added == (
        ("clusters", "dev", "a.yaml"),
        ("contexts", "dev", "a.yaml"),
        ("users", "dev-admin", "a.yaml"),
    )
    assert SkippedDuplicate(category="clusters", name="dev", source="b.yaml", kept_from="a.yaml") in report.skipped
    assert len(report.skipped) == 3
    assert report.current_context_source == "a.yaml"
    assert report.added_by_source() == {"a.yaml": 3}
    assert merged.current_context == "dev"


def test_report_preference_sources_follow_last_writer():
    a = parse("preferences:\n  colors: true\n", source="a.yaml")
    b = parse("preferences:\n  colors: false\n", source="b.yaml")

    _, report = merge_with_report([a, b])

    assert report.preference_sources == {"colors": "b.yaml"}


def test_report_to_dict_is_plain_data(dev_kubeconfig_yaml):
    _, report = merge_with_report([parse(dev_kubeconfig_yaml, source="a.yaml")])
    d = report.to_dict()

    assert d["documents_total"] == 1
    assert d["added"][0] == {"category": "clusters", "name": "dev", "source": "a.yaml"}
    assert d["skipped"] == []
    assert d["current_context_source"] == "a.yaml"
