# tests/core/merge/test_merge_precedence.py
"""
Testes da política de precedência do merge.

Política validada:
    - a ordem da sequência é a ordem de precedência
    - entidades: primeira ocorrência (por nome) vence, inclusive dentro do
      mesmo documento
    - current-context: primeiro valor não vazio vence
    - preferences: último documento vence, chave a chave
    - documentos em branco são ignorados
    - nenhum documento com conteúdo → MergeError
"""

import pytest

from kubemerge.core.exceptions import MergeError
from kubemerge.core.kubeconfig.codec import parse
from kubemerge.core.kubeconfig.model import Document, MergedDocument
from kubemerge.core.merge.merger import merge


def _doc(text: str, source: str) -> Document:
    return parse(text, source=source)


def test_single_document_is_identity(dev_kubeconfig_yaml):
    doc = _doc(dev_kubeconfig_yaml, "dev.yaml")
    assert merge([doc]) == MergedDocument.from_document(doc)


def test_blank_documents_do_not_change_result(dev_kubeconfig_yaml):
    doc = _doc(dev_kubeconfig_yaml, "dev.yaml")
    blank = _doc("", "empty.yaml")

    assert merge([blank, doc, blank]) == merge([doc])


def test_disjoint_documents_are_concatenated(dev_kubeconfig_yaml, prod_kubeconfig_yaml):
    merged = merge([_doc(dev_kubeconfig_yaml, "a.yaml"), _doc(prod_kubeconfig_yaml, "b.yaml")])

    assert merged.cluster_names() == ("dev", "prod")
    assert merged.context_names() == ("dev", "prod")
    assert merged.user_names() == ("dev-admin", "prod-admin")


def test_first_entity_wins():
    first = _doc("clusters:\n- name: shared\n  cluster:\n    server: https://first\n", "a.yaml")
    second = _doc("clusters:\n- name: shared\n  cluster:\n    server: https://second\n", "b.yaml")

    assert merge([first, second]).clusters[0].payload.server == "https://first"
    assert merge([second, first]).clusters[0].payload.server == "https://second"


def test_duplicate_inside_one_document_keeps_first():
    doc = _doc(
        "users:\n- name: u\n  user:\n    token: one\n- name: u\n  user:\n    token: two\n",
        "a.yaml",
    )
    merged = merge([doc])

    assert merged.user_names() == ("u",)
    assert merged.users[0].payload.token == "one"


def test_first_non_empty_current_context_wins():
    a = _doc("current-context: ''\ncontexts:\n- name: x\n  context: {cluster: c, user: u}\n", "a.yaml")
    b = _doc("current-context: b-ctx\n", "b.yaml")
    c = _doc("current-context: c-ctx\n", "c.yaml")

    assert merge([a, b, c]).current_context == "b-ctx"


def test_current_context_unset_when_nobody_sets_it(prod_kubeconfig_yaml):
    assert merge([_doc(prod_kubeconfig_yaml, "p.yaml")]).current_context == ""


def test_preferences_last_wins_key_by_key():
    a = _doc("preferences:\n  colors: true\n  only-a: 1\n", "a.yaml")
    b = _doc("preferences:\n  colors: false\n", "b.yaml")

    assert merge([a, b]).preferences == {"colors": False, "only-a": 1}


def test_merge_is_deterministic(dev_kubeconfig_yaml, prod_kubeconfig_yaml):
    docs = [_doc(dev_kubeconfig_yaml, "a.yaml"), _doc(prod_kubeconfig_yaml, "b.yaml")]
    assert merge(docs) == merge(list(docs))


def test_survivor_keeps_opaque_fields():
    a = _doc("clusters:\n- name: c\n  cluster:\n    server: https://a\n    proxy-url: http://p\n", "a.yaml")
    b = _doc("clusters:\n- name: c\n  cluster:\n    server: https://b\n", "b.yaml")

    assert merge([a, b]).clusters[0].payload.extra == {"proxy-url": "http://p"}


def test_output_metadata_is_canonical():
    merged = merge([_doc("apiVersion: v2\nkind: Other\ncurrent-context: x\n", "a.yaml")])
    assert merged.api_version == "v1"
    assert merged.kind == "Config"


@pytest.mark.parametrize("documents", [[], ["", "null\n", "{}\n"]])
def test_nothing_to_merge_raises(documents):
    with pytest.raises(MergeError) as exc:
        merge([_doc(text, f"{i}.yaml") for i, text in enumerate(documents)])
    assert exc.value.to_payload().type == "KUBECONFIG_MERGE_EMPTY"


def test_inputs_are_not_mutated(dev_kubeconfig_yaml, prod_kubeconfig_yaml):
    a = _doc(dev_kubeconfig_yaml, "a.yaml")
    b = _doc(prod_kubeconfig_yaml, "b.yaml")
    prefs_before = dict(a.preferences)

    merged = merge([a, b])

    assert a.preferences == prefs_before
    assert merged.preferences is not a.preferences
