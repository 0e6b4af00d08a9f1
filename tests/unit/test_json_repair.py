"""
Testes unitários da limpeza/parse das respostas do modelo.

Cobre blocos markdown em qualquer caixa (```json, ```JSON, ```Json) e
``` simples, além das falhas de parse.
"""

import pytest

from app.errors import ModelOutputParseError
from utils.json_repair import parse_model_json, parse_model_json_object, strip_code_fences


@pytest.mark.parametrize("raw", [
    '```json\n{"pos": 10}\n```',
    '```JSON\n{"pos": 10}\n```',
    '```Json{"pos": 10}```',
    '```\n{"pos": 10}\n```',
    '   \n{"pos": 10}\n  ',
    '{"pos": 10}',
])
def test_strip_code_fences_variants(raw):
    assert strip_code_fences(raw) == '{"pos": 10}'


def test_strip_code_fences_removes_every_marker():
    raw = 'Here you go:\n```json\n{"a": 1}\n```\n'

    assert strip_code_fences(raw) == 'Here you go:\n\n{"a": 1}'


def test_parse_model_json_fenced_object():
    parsed = parse_model_json('```json\n{"pos": 60, "praise": ["great"]}\n```')

    assert parsed == {"pos": 60, "praise": ["great"]}


def test_parse_model_json_invalid_keeps_raw_output():
    with pytest.raises(ModelOutputParseError) as exc_info:
        parse_model_json("NOT JSON")

    assert exc_info.value.raw_output == "NOT JSON"
    assert "Invalid JSON" in str(exc_info.value)


def test_parse_model_json_truncated_object_fails():
    with pytest.raises(ModelOutputParseError):
        parse_model_json('{"pos": 60, "neg":')


def test_parse_model_json_empty_response_fails():
    with pytest.raises(ModelOutputParseError):
        parse_model_json("")


def test_parse_model_json_object_rejects_arrays():
    with pytest.raises(ModelOutputParseError, match="not a JSON object"):
        parse_model_json_object("[1, 2, 3]")


def test_parse_model_json_object_accepts_objects():
    assert parse_model_json_object('```json {"ok": true} ```') == {"ok": True}
