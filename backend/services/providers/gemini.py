"""
Gemini provider - generate_content per batch.
"""

import google.generativeai as genai

from services.providers.llm import LLMPromptProvider


class GeminiProvider(LLMPromptProvider):
    name = "gemini"

    def __init__(self, protector, source_language: str = "en", model: str = "gemini-2.0-flash",
                 temperature: float = 0.3, max_output_tokens: int = 4096):
        super().__init__(protector, source_language, model, temperature)
        self.max_output_tokens = max_output_tokens

    async def complete(self, prompt: str, api_key: str) -> str:
        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(self.model)

        response = await model.generate_content_async(
            prompt,
            generation_config=genai.types.GenerationConfig(
                temperature=self.temperature,
                max_output_tokens=self.max_output_tokens,
            ),
        )
        return response.text
