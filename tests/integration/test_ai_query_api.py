import json

import pytest

from wardrobo.services import llm_client

URL = "/api/ai/query"


@pytest.fixture
def llm_reply(monkeypatch, make_chat_reply):
    """Configure an API key and answer every chat completion with ``content``."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    calls = []

    def _install(content):
        def fake_post(url, headers=None, json=None, timeout=None):  # noqa: A002
            calls.append(json)
            return make_chat_reply(content)

        monkeypatch.setattr(llm_client.requests, "post", fake_post)
        return calls

    return _install


def _names(response):
    return sorted(item["name"] for item in response.json()["data"])


def test_requires_json_content_type(client):
    r = client.post(URL, content="prompt=blue", headers={"Content-Type": "text/plain"})
    assert r.status_code == 415
    assert r.json() == {"error": "Content-Type must be application/json"}


@pytest.mark.parametrize("body", [{}, {"prompt": ""}, {"prompt": "   "}, {"prompt": 42}])
def test_missing_prompt(client, body):
    r = client.post(URL, json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing prompt"}


def test_malformed_json_body_is_missing_prompt(client):
    r = client.post(URL, content="{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing prompt"}


def test_missing_api_key_is_bad_gateway(client):
    r = client.post(URL, json={"prompt": "blue shirt"})
    assert r.status_code == 502
    assert r.json() == {"error": "OPENAI_API_KEY is not configured"}


def test_upstream_error_is_bad_gateway(client, monkeypatch, fake_response):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(
        llm_client.requests,
        "post",
        lambda *a, **kw: fake_response(status_code=401, text="invalid key"),
    )
    r = client.post(URL, json={"prompt": "blue shirt"})
    assert r.status_code == 502
    assert r.json()["error"].startswith("OpenAI API error: 401")


def test_disabled_llm_features(client, monkeypatch):
    monkeypatch.setenv("LLM_FEATURES_ENABLED", "false")
    r = client.post(URL, json={"prompt": "blue shirt"})
    assert r.status_code == 503
    assert r.json() == {"error": "LLM features are currently disabled"}


def test_extracted_filters_are_applied(client, item_factory, llm_reply):
    item_factory(name="Blue Tee", category="TOP", primary_color="blue")
    item_factory(name="Blue Chinos", category="BOTTOM", primary_color="blue")
    item_factory(name="Red Tee", category="TOP", primary_color="red")
    calls = llm_reply('{"category":"top","color":"Blue","search":"blue t shirt","brand":null,"priceMin":null,"priceMax":null}')

    r = client.post(URL, json={"prompt": "show me blue t-shirts"})

    assert r.status_code == 200
    assert _names(r) == ["Blue Tee"]
    assert r.json()["meta"] == {"page": 1, "perPage": 12, "total": 1, "totalPages": 1}
    assert calls[0]["messages"][1]["content"] == "show me blue t-shirts"


def test_malformed_model_reply_returns_unfiltered_catalog(client, item_factory, llm_reply):
    item_factory(name="A")
    item_factory(name="B", category="BOTTOM")
    llm_reply("I could not understand that request.")

    r = client.post(URL, json={"prompt": "something"})

    assert r.status_code == 200
    assert _names(r) == ["A", "B"]


def test_seed_filters_override_extraction(client, item_factory, llm_reply):
    item_factory(name="Green Chinos", category="BOTTOM", primary_color="green")
    item_factory(name="Green Tee", category="TOP", primary_color="green")
    llm_reply(json.dumps({"category": "TOP", "color": "red"}))

    r = client.post(URL, json={"prompt": "anything", "category": "bottom", "color": "GREEN"})

    assert _names(r) == ["Green Chinos"]


def test_search_expands_to_feature_tokens(client, item_factory, llm_reply):
    item_factory(name="Breton", category="DRESS", materials=["pattern:striped"])
    item_factory(name="Plain Tee", category="TOP")
    item_factory(name="Chinos", category="BOTTOM")
    llm_reply(json.dumps({"category": None, "color": None, "search": "striped tee"}))

    r = client.post(URL, json={"prompt": "striped tees"})

    assert _names(r) == ["Breton", "Plain Tee"]


def test_search_ignored_when_color_extracted(client, item_factory, llm_reply):
    item_factory(name="Navy Breton", category="DRESS", primary_color="navy", materials=["pattern:striped"])
    item_factory(name="Navy Chinos", category="BOTTOM", primary_color="navy")
    item_factory(name="Red Breton", category="DRESS", primary_color="red", materials=["pattern:striped"])
    llm_reply(json.dumps({"color": "navy", "search": "striped"}))

    r = client.post(URL, json={"prompt": "navy stripes"})

    assert _names(r) == ["Navy Breton", "Navy Chinos"]


def test_explicit_empty_seed_disables_extracted_filter(client, item_factory, llm_reply):
    item_factory(name="Blue Tee", category="TOP", primary_color="blue")
    item_factory(name="Red Tee", category="TOP", primary_color="red")
    llm_reply(json.dumps({"category": "TOP", "color": "blue"}))

    r = client.post(URL, json={"prompt": "blue tops", "color": ""})

    assert _names(r) == ["Blue Tee", "Red Tee"]


def test_oversized_price_in_model_reply_is_ignored(client, item_factory, llm_reply):
    item_factory(name="Budget", price=20)
    item_factory(name="Luxury", price=200)
    llm_reply('{"priceMin": 50, "priceMax": ' + "9" * 400 + "}")

    r = client.post(URL, json={"prompt": "over 50 dollars"})

    assert r.status_code == 200
    assert _names(r) == ["Luxury"]


def test_price_bounds(client, item_factory, llm_reply):
    item_factory(name="Budget", price=20)
    item_factory(name="Mid", price=55)
    item_factory(name="Luxury", price=200)
    llm_reply(json.dumps({"priceMin": 30, "priceMax": 100}))

    r = client.post(URL, json={"prompt": "between 30 and 100 dollars"})

    assert _names(r) == ["Mid"]


def test_body_pagination(client, item_factory, llm_reply):
    for i in range(5):
        item_factory(name=f"Item {i}")
    llm_reply("{}")

    r = client.post(URL, json={"prompt": "everything", "page": 2, "perPage": 2})

    assert r.json()["meta"] == {"page": 2, "perPage": 2, "total": 5, "totalPages": 3}
    assert len(r.json()["data"]) == 2


def test_invalid_body_pagination_uses_defaults(client, item_factory, llm_reply):
    item_factory()
    llm_reply("{}")

    r = client.post(URL, json={"prompt": "everything", "page": "2", "perPage": 0})

    assert r.json()["meta"] == {"page": 1, "perPage": 12, "total": 1, "totalPages": 1}
