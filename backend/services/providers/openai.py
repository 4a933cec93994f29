"""
OpenAI provider - Chat completion per batch.
"""

from openai import AsyncOpenAI

from services.providers.llm import LLMPromptProvider

SYSTEM_PROMPT = (
    "You are a professional software localization translator. "
    "You output only the translated lines, nothing else."
)


class OpenAIProvider(LLMPromptProvider):
    name = "openai"

    def __init__(self, protector, source_language: str = "en", model: str = "gpt-4o-mini",
                 temperature: float = 0.3, timeout: float = 30.0):
        super().__init__(protector, source_language, model, temperature)
        self.timeout = timeout

    async def complete(self, prompt: str, api_key: str) -> str:
        client = AsyncOpenAI(api_key=api_key, timeout=self.timeout)
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
            )
        finally:
            await client.close()

        return response.choices[0].message.content or ""
