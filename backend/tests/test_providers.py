"""
Tests for the provider adapters.

HTTP adapters run against httpx.MockTransport; LLM adapters get a stubbed
completion call.
"""

import json

import httpx
import pytest

from services.providers import (
    AzureProvider,
    DeepLProvider,
    GeminiProvider,
    MissingCredentialError,
    MyMemoryProvider,
    OpenAIProvider,
    ProviderError,
    ProviderResponseError,
    build_providers,
)
from services.providers.llm import LLMPromptProvider, generate_prompt, parse_lines
from tests.helpers import run


def mymemory_handler(request: httpx.Request) -> httpx.Response:
    text = request.url.params["q"]
    if "fail" in text:
        return httpx.Response(500, text="server error")
    if "quota" in text:
        return httpx.Response(200, json={"responseStatus": 429, "responseData": {"translatedText": "MYMEMORY WARNING"}})
    if "blank" in text:
        return httpx.Response(200, json={"responseStatus": 200, "responseData": {"translatedText": ""}})
    return httpx.Response(200, json={"responseStatus": 200, "responseData": {"translatedText": f"TR:{text}"}})


@pytest.fixture
def mymemory(protector):
    return MyMemoryProvider(protector, delay_ms=0, transport=httpx.MockTransport(mymemory_handler))


# MyMemory

def test_mymemory_translates_each_item(mymemory):
    assert run(mymemory.translate(["Welcome", "Goodbye"], "tr")) == ["TR:Welcome", "TR:Goodbye"]


def test_mymemory_item_failures_fall_back_individually(mymemory):
    texts = ["Welcome", "please fail", "quota hit", "blank answer", "x", "Thanks"]

    assert run(mymemory.translate(texts, "de")) == [
        "TR:Welcome", "please fail", "quota hit", "blank answer", "x", "TR:Thanks",
    ]


def test_mymemory_network_error_falls_back(protector):
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    provider = MyMemoryProvider(protector, delay_ms=0, transport=httpx.MockTransport(handler))

    assert run(provider.translate(["Welcome"], "tr")) == ["Welcome"]


def test_mymemory_protects_terms_and_maps_locale(protector):
    seen = []

    def handler(request):
        seen.append(dict(request.url.params))
        return httpx.Response(200, json={"responseStatus": 200,
                                         "responseData": {"translatedText": "SR:" + request.url.params["q"]}})

    provider = MyMemoryProvider(protector, delay_ms=0, email="ops@example.com",
                                transport=httpx.MockTransport(handler))
    result = run(provider.translate(["Order via duxa for {name}"], "me"))

    assert seen[0]["q"] == "Order via ___TERM1___ for ___VAR0___"
    assert seen[0]["langpair"] == "en|sr-Latn"
    assert seen[0]["de"] == "ops@example.com"
    assert result == ["SR:Order via duxa for {name}"]


@pytest.mark.parametrize("count", [0, 1, 20])
def test_mymemory_length_alignment(mymemory, count):
    texts = [f"Item {chr(65 + i % 26)}" for i in range(count)]

    assert len(run(mymemory.translate(texts, "tr"))) == count


# DeepL

def test_deepl_sends_whole_batch(protector):
    requests = []

    def handler(request):
        requests.append(request)
        body = json.loads(request.content)
        return httpx.Response(200, json={"translations": [{"text": f"DE:{t}"} for t in body["text"]]})

    provider = DeepLProvider(protector, transport=httpx.MockTransport(handler))
    result = run(provider.translate(["Open the POS", "Hello {name}"], "de", "secret:fx"))

    assert len(requests) == 1
    assert requests[0].url.host == "api-free.deepl.com"
    assert requests[0].headers["Authorization"] == "DeepL-Auth-Key secret:fx"
    body = json.loads(requests[0].content)
    assert body["target_lang"] == "DE"
    assert body["text"] == ["Open the ___TERM2___", "Hello ___VAR0___"]
    assert result == ["DE:Open the POS", "DE:Hello {name}"]


def test_deepl_pro_key_uses_pro_endpoint(protector):
    provider = DeepLProvider(protector)

    assert provider.endpoint_for("abc") == "https://api.deepl.com/v2/translate"


def test_deepl_requires_key(protector):
    provider = DeepLProvider(protector)

    with pytest.raises(MissingCredentialError):
        run(provider.translate(["Hello"], "de"))


def test_deepl_rejects_unsupported_target_without_calling_api(protector):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(400, text="Value for 'target_lang' not supported.")

    provider = DeepLProvider(protector, transport=httpx.MockTransport(handler))

    with pytest.raises(ProviderError, match="does not support target language 'me'"):
        run(provider.translate(["Hello"], "me", "key"))
    assert requests == []


def test_deepl_http_error_fails_batch(protector):
    provider = DeepLProvider(protector, transport=httpx.MockTransport(lambda r: httpx.Response(403, text="Forbidden")))

    with pytest.raises(ProviderResponseError):
        run(provider.translate(["Hello"], "de", "key"))


def test_deepl_count_mismatch_fails_batch(protector):
    provider = DeepLProvider(protector, transport=httpx.MockTransport(
        lambda r: httpx.Response(200, json={"translations": [{"text": "Hallo"}]})))

    with pytest.raises(ProviderResponseError):
        run(provider.translate(["Hello", "World"], "de", "key"))


# Azure

def test_azure_sends_whole_batch(protector):
    requests = []

    def handler(request):
        requests.append(request)
        body = json.loads(request.content)
        return httpx.Response(200, json=[{"translations": [{"text": f"SR:{item['Text']}", "to": "sr-Latn"}]}
                                         for item in body])

    provider = AzureProvider(protector, region="westeurope", transport=httpx.MockTransport(handler))
    result = run(provider.translate(["Scan the QR code", "Menu"], "me", "azure-key"))

    request = requests[0]
    assert request.url.path == "/translate"
    assert request.url.params["to"] == "sr-Latn"
    assert request.url.params["from"] == "en"
    assert request.headers["Ocp-Apim-Subscription-Key"] == "azure-key"
    assert request.headers["Ocp-Apim-Subscription-Region"] == "westeurope"
    assert json.loads(request.content)[0] == {"Text": "Scan the ___TERM3___ code"}
    assert result == ["SR:Scan the QR code", "SR:Menu"]


def test_azure_requires_key(protector):
    with pytest.raises(MissingCredentialError):
        run(AzureProvider(protector).translate(["Hello"], "tr", None))


def test_azure_http_error_fails_batch(protector):
    provider = AzureProvider(protector, transport=httpx.MockTransport(lambda r: httpx.Response(401, text="denied")))

    with pytest.raises(ProviderResponseError):
        run(provider.translate(["Hello"], "tr", "key"))


# LLM providers

class ScriptedLLM(LLMPromptProvider):
    name = "scripted"

    def __init__(self, protector, response: str):
        super().__init__(protector)
        self.response = response
        self.prompts = []

    async def complete(self, prompt, api_key):
        self.prompts.append((prompt, api_key))
        return self.response


def test_parse_lines_strips_enumeration_and_fences():
    response = "```\n1. Hallo\n2) Welt\n\n3. 2.5 kg Mehl\n```"

    assert parse_lines(response, ["Hello", "World", "2.5 kg flour"]) == ["Hallo", "Welt", "2.5 kg Mehl"]


def test_parse_lines_pads_and_truncates():
    sources = [f"s{i}" for i in range(7)]

    assert parse_lines("a\nb\nc\nd\ne", sources) == ["a", "b", "c", "d", "e", "s5", "s6"]
    assert parse_lines("a\nb\nc", ["x", "y"]) == ["a", "b"]


def test_parse_lines_places_numbered_lines_by_number():
    response = "1. Hallo\n2.\n3. Tschüss"

    assert parse_lines(response, ["Hello", "---", "Bye"]) == ["Hallo", "", "Tschüss"]
    assert parse_lines("2. Welt\n1. Hallo", ["Hello", "World", "Again"]) == ["Hallo", "Welt", "Again"]


def test_parse_lines_keeps_blank_line_when_counts_match():
    assert parse_lines("Hallo\n\nTschüss", ["Hello", "---", "Bye"]) == ["Hallo", "", "Tschüss"]


def test_llm_provider_blank_answer_does_not_shift_later_items(protector):
    provider = ScriptedLLM(protector, "1. Erste Zeile\n2.\n3. Dritte Zeile")

    result = run(provider.translate(["First line", "Second line", "Third line"], "de", "key"))

    assert result == ["Erste Zeile", "Second line", "Dritte Zeile"]


def test_generate_prompt_lists_rules_and_numbered_lines():
    prompt = generate_prompt(["Hello ___VAR0___", "Line one\nLine two"], "tr", "DUXA, POS")

    assert "into Turkish" in prompt
    assert "Return exactly 2 lines" in prompt
    assert "NEVER translate these brand names and terms: DUXA, POS" in prompt
    assert "{businessName}" in prompt
    assert "1. Hello ___VAR0___" in prompt
    assert "2. Line one<br/>Line two" in prompt


def test_llm_provider_round_trip(protector):
    provider = ScriptedLLM(protector, "1. Merhaba ___VAR0___\n2. ___TERM1___ ile sipariş<br/>verin")

    result = run(provider.translate(["Hello {name}", "Order with duxa\nnow"], "tr", "key"))

    assert result == ["Merhaba {name}", "duxa ile sipariş\nverin"]
    assert provider.prompts[0][1] == "key"
    assert "___TERM1___" in provider.prompts[0][0]


def test_llm_provider_pads_short_response(protector):
    texts = [f"Text number {chr(65 + i)}" for i in range(7)]
    provider = ScriptedLLM(protector, "\n".join(f"{i + 1}. T{i}" for i in range(5)))

    result = run(provider.translate(texts, "de", "key"))

    assert len(result) == 7
    assert result[:5] == ["T0", "T1", "T2", "T3", "T4"]
    assert result[5:] == texts[5:]


def test_llm_provider_requires_key(protector):
    with pytest.raises(MissingCredentialError):
        run(ScriptedLLM(protector, "x").translate(["Hello"], "de"))


def test_llm_provider_empty_response_fails_batch(protector):
    with pytest.raises(ProviderResponseError):
        run(ScriptedLLM(protector, "  ").translate(["Hello"], "de", "key"))


@pytest.mark.parametrize("count", [0, 1, 20])
def test_llm_length_alignment(protector, count):
    provider = ScriptedLLM(protector, "\n".join("ok" for _ in range(count)) or "ok")

    assert len(run(provider.translate(["Hello"] * count, "de", "key"))) == count


def test_openai_and_gemini_share_llm_contract(protector, monkeypatch):
    for cls in (OpenAIProvider, GeminiProvider):
        provider = cls(protector)

        async def fake_complete(prompt, api_key):
            return "1. Bonjour"

        monkeypatch.setattr(provider, "complete", fake_complete)

        assert run(provider.translate(["Hello"], "fr", "key")) == ["Bonjour"]


def test_build_providers_uses_settings(test_settings, protector):
    providers = build_providers(test_settings, protector)

    assert set(providers) == {"mymemory", "azure", "deepl", "openai", "gemini"}
    assert providers["mymemory"].delay_ms == 0
    assert providers["openai"].model == test_settings.openai_model
    assert not providers["mymemory"].requires_key
    assert all(providers[name].requires_key for name in ("azure", "deepl", "openai", "gemini"))
