import asyncio
import logging

import pytest

from kpi_dashboard_functions.providers.auth import firebase
from kpi_dashboard_functions.providers.auth.firebase import AuthContext, FirebaseTokenVerifier, bearer_token
from kpi_dashboard_functions.providers.llm.gemini import GeminiProvider


class _FakeMessage:
    def __init__(self, content) -> None:
        self.content = content


class _FakeLLM:
    def __init__(self, content=None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.prompts: list[str] = []

    async def ainvoke(self, prompt: str):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return _FakeMessage(self.content)


def test_provider_uses_configured_model(make_settings) -> None:
    provider = GeminiProvider(make_settings())
    assert provider.model == "gemini-1.5-flash"

    provider = GeminiProvider(make_settings(gemini_model="gemini-2.0-flash-lite"))
    assert provider.model == "gemini-2.0-flash-lite"


def test_provider_returns_text_as_is(make_settings, monkeypatch) -> None:
    provider = GeminiProvider(make_settings())
    llm = _FakeLLM(content="  Revenue up.\n")
    monkeypatch.setattr(provider, "_get_llm", lambda: llm)

    text = asyncio.run(provider.generate_content("prompt"))

    assert text == "  Revenue up.\n"
    assert llm.prompts == ["prompt"]


def test_provider_joins_content_parts(make_settings, monkeypatch) -> None:
    provider = GeminiProvider(make_settings())
    llm = _FakeLLM(content=[{"type": "text", "text": "Part one. "}, "Part two."])
    monkeypatch.setattr(provider, "_get_llm", lambda: llm)

    assert asyncio.run(provider.generate_content("prompt")) == "Part one. Part two."


def test_provider_logs_and_reraises(make_settings, monkeypatch, caplog) -> None:
    provider = GeminiProvider(make_settings())
    error = RuntimeError("429 Resource has been exhausted")
    monkeypatch.setattr(provider, "_get_llm", lambda: _FakeLLM(error=error))

    with caplog.at_level(logging.ERROR):
        with pytest.raises(RuntimeError):
            asyncio.run(provider.generate_content("prompt"))

    messages = [record.getMessage() for record in caplog.records]
    assert any("llm.error model=gemini-1.5-flash type=RuntimeError" in message for message in messages)


def test_provider_error_detail_is_clipped(make_settings) -> None:
    provider = GeminiProvider(make_settings())
    detail = provider._extract_error_detail(RuntimeError("x" * 5000))
    assert detail.endswith("...(truncated)")
    assert len(detail) < 1100


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        (None, None),
        ("", None),
        ("Bearer abc.def", "abc.def"),
        ("bearer   abc ", "abc"),
        ("Basic abc", None),
        ("Bearer ", None),
    ],
)
def test_bearer_token(header, expected) -> None:
    assert bearer_token(header) == expected


def test_verifier_returns_context_for_valid_token(make_settings, monkeypatch) -> None:
    verifier = FirebaseTokenVerifier(make_settings())
    captured = {}

    def fake_verify(id_token, app=None):
        captured["token"] = id_token
        return {"uid": "user-1", "email": "gm@example.com"}

    monkeypatch.setattr(verifier, "_get_app", lambda: None)
    monkeypatch.setattr(firebase.auth, "verify_id_token", fake_verify)

    context = asyncio.run(verifier.verify("token-123"))

    assert context == AuthContext(uid="user-1", token={"uid": "user-1", "email": "gm@example.com"})
    assert captured["token"] == "token-123"


def test_verifier_treats_invalid_token_as_anonymous(make_settings, monkeypatch) -> None:
    verifier = FirebaseTokenVerifier(make_settings())

    def fake_verify(id_token, app=None):
        raise firebase.auth.InvalidIdTokenError("Could not verify token signature.")

    monkeypatch.setattr(verifier, "_get_app", lambda: None)
    monkeypatch.setattr(firebase.auth, "verify_id_token", fake_verify)

    assert asyncio.run(verifier.verify("garbage")) is None


def test_verifier_skips_missing_token(make_settings, monkeypatch) -> None:
    verifier = FirebaseTokenVerifier(make_settings())

    def fake_verify(id_token, app=None):
        raise AssertionError("must not be called")

    monkeypatch.setattr(firebase.auth, "verify_id_token", fake_verify)

    assert asyncio.run(verifier.verify(None)) is None


def test_verifier_misconfiguration_is_raised_and_logged(make_settings, monkeypatch, caplog) -> None:
    verifier = FirebaseTokenVerifier(make_settings())

    def fake_verify(id_token, app=None):
        raise ValueError("A project ID is required to access the auth service.")

    monkeypatch.setattr(verifier, "_get_app", lambda: None)
    monkeypatch.setattr(firebase.auth, "verify_id_token", fake_verify)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(ValueError):
            asyncio.run(verifier.verify("token-123"))

    messages = [record.getMessage() for record in caplog.records]
    assert any("auth.verifier_misconfigured" in message for message in messages)
