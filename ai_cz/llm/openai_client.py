"""OpenAI LLM Client"""

import openai

from ai_cz.llm.base import LLMClient, LLMResponse, LLMError, SUGGESTIONS_SCHEMA


class OpenAIClient(LLMClient):
    """OpenAI chat completions client with a JSON-schema constrained response."""

    DEFAULT_MODEL = "gpt-4o-mini"
    TEMPERATURE = 0.1

    def __init__(self, api_key: str | None = None, model: str | None = None,
                 temperature: float | None = None, client=None):
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.temperature = self.TEMPERATURE if temperature is None else temperature

        if client is not None:
            self._client = client
            return

        if not self.api_key:
            raise LLMError(
                "No API key found. Run 'ai-cz --token' or set OPENAI_API_KEY:\n"
                "  export OPENAI_API_KEY='sk-...'"
            )
        self._client = openai.OpenAI(api_key=self.api_key)

    @property
    def name(self) -> str:
        return f"OpenAI ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "commit_suggestions",
                        "schema": SUGGESTIONS_SCHEMA,
                    },
                },
            )
        except openai.AuthenticationError:
            raise LLMError("Invalid API key. Run 'ai-cz --token' to set a new one.")
        except openai.RateLimitError as e:
            raise LLMError(f"OpenAI rate limit or quota exceeded: {e.message}")
        except openai.APIConnectionError:
            raise LLMError("Could not reach the OpenAI API. Check your network connection.")
        except openai.APIError as e:
            raise LLMError(f"OpenAI API error: {e.message}")
        except openai.OpenAIError as e:
            raise LLMError(f"OpenAI client error: {e}")

        content = ""
        if response.choices:
            content = (response.choices[0].message.content or "").strip()
        if not content:
            raise LLMError("No response from OpenAI")

        usage = getattr(response, "usage", None)
        return LLMResponse(
            content=content,
            model=getattr(response, "model", None) or self.model,
            tokens_used=getattr(usage, "total_tokens", 0) or 0,
        )
