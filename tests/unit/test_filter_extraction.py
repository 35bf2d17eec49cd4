import pytest

from wardrobo.services import (
    FilterExtraction,
    LLMAPIError,
    LLMConfigurationError,
    get_filter_extraction_service,
)
from wardrobo.services import llm_client
from wardrobo.services.filter_extraction import normalize_extraction, parse_extraction_content


def test_normalize_extraction_keeps_well_typed_values():
    extraction = normalize_extraction(
        {
            "category": "top",
            "color": "Blue",
            "search": "blue t shirt",
            "brand": "Everyday Supply",
            "priceMin": 10,
            "priceMax": 49.5,
        }
    )
    assert extraction == FilterExtraction(
        category="TOP",
        color="blue",
        search="blue t shirt",
        brand="Everyday Supply",
        price_min=10,
        price_max=49.5,
    )


def test_normalize_extraction_drops_wrong_types():
    extraction = normalize_extraction(
        {"category": 3, "color": ["red"], "search": None, "priceMin": "20", "priceMax": True}
    )
    assert extraction == FilterExtraction()
    assert normalize_extraction(["not", "a", "dict"]) == FilterExtraction()


def test_normalize_extraction_rejects_non_finite_numbers():
    assert normalize_extraction({"priceMin": float("nan"), "priceMax": float("inf")}) == FilterExtraction()


def test_parse_extraction_content_finds_embedded_object():
    content = 'Sure! Here you go:\n```json\n{"color": "green", "category": null}\n```'
    assert parse_extraction_content(content) == FilterExtraction(color="green")


@pytest.mark.parametrize("content", [None, "", "no json here", "{not valid}"])
def test_parse_extraction_content_malformed_gives_empty(content):
    assert parse_extraction_content(content) == FilterExtraction()


def test_service_extract_uses_chat_model(monkeypatch, make_chat_reply):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_CHAT_MODEL", "test-model")
    captured = {}

    def fake_post(url, headers=None, json=None, timeout=None):  # noqa: A002
        captured["payload"] = json
        return make_chat_reply('{"category":"BOTTOM","color":null,"search":"chinos","brand":null,"priceMin":null,"priceMax":80}')

    monkeypatch.setattr(llm_client.requests, "post", fake_post)

    extraction = get_filter_extraction_service().extract("chinos under $80")

    assert extraction == FilterExtraction(category="BOTTOM", search="chinos", price_max=80)
    assert captured["payload"]["model"] == "test-model"
    assert captured["payload"]["temperature"] == 0
    assert captured["payload"]["max_tokens"] == 200
    assert captured["payload"]["messages"][1] == {"role": "user", "content": "chinos under $80"}


def test_service_extract_without_key():
    with pytest.raises(LLMConfigurationError):
        get_filter_extraction_service().extract("anything")


def test_service_extract_propagates_api_errors(monkeypatch, fake_response):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(llm_client.requests, "post", lambda *a, **kw: fake_response(status_code=500, text="boom"))
    with pytest.raises(LLMAPIError, match="OpenAI API error: 500"):
        get_filter_extraction_service().extract("anything")


def test_parse_extraction_content_drops_integers_beyond_float_range():
    content = '{"color": "blue", "priceMin": ' + "9" * 400 + ', "priceMax": 1e400}'
    assert parse_extraction_content(content) == FilterExtraction(color="blue")
