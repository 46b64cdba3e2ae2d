# tests/core/config/test_deep_merge.py
"""
Testes do deep-merge de configuração.

Política validada:
    - dict → merge recursivo
    - list → substituição total
    - escalar → override
    - conflito de tipo → ConfigTypeConflictError com caminho completo
    - inputs nunca são mutados
"""

import pytest

from kubemerge.core.config.errors import ConfigTypeConflictError
from kubemerge.core.config.merge import deep_merge


def test_merge_simple_override():
    base = {"a": 1, "b": 2}
    override = {"b": 99}

    out = deep_merge(base, override)

    assert out == {"a": 1, "b": 99}
    assert base == {"a": 1, "b": 2}
    assert override == {"b": 99}


def test_merge_nested_dict():
    base = {"engine": {"fail_fast": True, "log_level": "INFO"}}
    out = deep_merge(base, {"engine": {"log_level": "DEBUG"}})
    assert out == {"engine": {"fail_fast": True, "log_level": "DEBUG"}}


def test_merge_list_override_total():
    base = {"steps": {"discover.files": {"exclude": ["backup", "old"]}}}
    out = deep_merge(base, {"steps": {"discover.files": {"exclude": ["tmp"]}}})
    assert out["steps"]["discover.files"]["exclude"] == ["tmp"]


def test_merge_none_overrides():
    out = deep_merge({"a": {"b": 1}}, {"a": None})
    assert out == {"a": None}


def test_merge_type_conflict_raises_with_path():
    base = {"steps": {"parse.documents": {"on_error": "abort"}}}
    with pytest.raises(ConfigTypeConflictError) as exc:
        deep_merge(base, {"steps": {"parse.documents": {"on_error": 1}}})
    assert "steps.parse.documents.on_error" in str(exc.value)


def test_merge_bool_vs_int_is_conflict():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"fail_fast": True}, {"fail_fast": 0})
