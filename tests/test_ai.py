"""
Tests for the AI client wrapper: configuration and provider error mapping.
"""

import httpx
import openai
import pytest

from bookstore.core.ai import AIClient, build_ai_client
from bookstore.core.config import Config
from bookstore.core.exceptions import AIAnalysisError, ProviderUnavailableError
from bookstore.modules.dashboard.prompts import (
    NO_INCOME_SERIES,
    NO_TOP_PRODUCTS,
    build_analysis_prompt,
)
from bookstore.modules.dashboard.schemas import AnalyzeRequest

REQUEST = httpx.Request("POST", "https://ai.test/chat/completions")


def _status_error(cls, status_code: int):
    return cls(
        f"Error code: {status_code}",
        response=httpx.Response(status_code, request=REQUEST),
        body=None,
    )


@pytest.fixture
async def ai():
    ai = AIClient(api_key="test-key", model="gemini-2.5-pro", max_retries=0)
    yield ai
    await ai.close()


def _fail_with(monkeypatch, ai: AIClient, error: Exception):
    async def create(**kwargs):
        raise error

    monkeypatch.setattr(ai._client.chat.completions, "create", create)


class TestBuildAIClient:
    def test_no_key_means_no_client(self):
        assert build_ai_client(Config(GEMINI_API_KEY="")) is None

    def test_client_uses_configured_model(self):
        settings = Config(GEMINI_API_KEY="secret", AI_MODEL="gemini-2.5-flash", AI_TEMPERATURE=0.2)

        client = build_ai_client(settings)

        assert client is not None
        assert client.model == "gemini-2.5-flash"
        assert client.temperature == 0.2


class TestGenerate:
    async def test_returns_stripped_text(self, monkeypatch, ai):
        captured = {}

        async def create(**kwargs):
            captured.update(kwargs)
            message = openai.types.chat.ChatCompletionMessage(
                role="assistant", content="  บทวิเคราะห์  \n"
            )
            choice = openai.types.chat.chat_completion.Choice(
                index=0, finish_reason="stop", message=message
            )
            return openai.types.chat.ChatCompletion(
                id="cmpl-1",
                choices=[choice],
                created=0,
                model="gemini-2.5-pro",
                object="chat.completion",
            )

        monkeypatch.setattr(ai._client.chat.completions, "create", create)

        assert await ai.generate("prompt") == "บทวิเคราะห์"
        assert captured["model"] == "gemini-2.5-pro"
        assert captured["temperature"] == 0.5
        assert captured["messages"] == [{"role": "user", "content": "prompt"}]

    @pytest.mark.parametrize(
        "error",
        [
            _status_error(openai.InternalServerError, 503),
            _status_error(openai.RateLimitError, 429),
            openai.APIConnectionError(request=REQUEST),
            openai.APITimeoutError(request=REQUEST),
        ],
    )
    async def test_transient_errors_mean_provider_unavailable(self, monkeypatch, ai, error):
        _fail_with(monkeypatch, ai, error)

        with pytest.raises(ProviderUnavailableError) as exc_info:
            await ai.generate("prompt")
        assert exc_info.value.status_code == 503

    async def test_other_api_errors_are_analysis_errors(self, monkeypatch, ai):
        _fail_with(monkeypatch, ai, _status_error(openai.BadRequestError, 400))

        with pytest.raises(AIAnalysisError) as exc_info:
            await ai.generate("prompt")
        assert exc_info.value.status_code == 500
        assert exc_info.value.detail.startswith("AI analysis failed: ")


class TestAnalysisPrompt:
    def test_empty_payload_uses_no_data_sentences(self):
        prompt = build_analysis_prompt(AnalyzeRequest())

        assert "รายได้รวมทั้งหมด: 0 บาท" in prompt
        assert NO_TOP_PRODUCTS in prompt
        assert NO_INCOME_SERIES in prompt

    def test_products_are_joined(self):
        data = AnalyzeRequest.model_validate(
            {
                "totalAllIncome": 5000,
                "topProducts": [
                    {"name": "A", "totalSold": 3, "totalRevenue": 900},
                    {"name": "B", "totalSold": 1, "totalRevenue": 120},
                ],
            }
        )

        prompt = build_analysis_prompt(data)

        assert "A (ขาย 3 ชิ้น, รายได้ 900 บาท); B (ขาย 1 ชิ้น, รายได้ 120 บาท)" in prompt
        assert "4-5 ย่อหน้า" in prompt
