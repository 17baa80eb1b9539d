import os
from openai import AsyncOpenAI
from app.config import get_settings


def _make_async_openai_client() -> AsyncOpenAI:
    """Create an AsyncOpenAI client with optional LangSmith tracing."""
    settings = get_settings()
    client = AsyncOpenAI(
        api_key=settings.llm_api_key,
        base_url=settings.llm_api_base,
    )

    # Wrap with LangSmith tracing if configured
    if settings.langsmith_api_key:
        try:
            from langsmith.wrappers import wrap_openai
            os.environ.setdefault("LANGCHAIN_TRACING_V2", "true")
            os.environ.setdefault("LANGCHAIN_API_KEY", settings.langsmith_api_key)
            os.environ.setdefault("LANGCHAIN_ENDPOINT", settings.langsmith_endpoint)
            os.environ.setdefault("LANGCHAIN_PROJECT", settings.langsmith_project)
            client = wrap_openai(client)
        except ImportError:
            pass  # langsmith not installed, skip tracing

    return client


class LLMService:
    """
    Generic LLM service using OpenAI-compatible Chat Completions API.
    Works with Groq, OpenAI, OpenRouter, Ollama, LM Studio, etc.
    Automatically traced via LangSmith when configured.
    """

    def __init__(self):
        settings = get_settings()
        self.client = _make_async_openai_client()
        self.model = settings.llm_model

    async def chat_completion(
        self,
        messages: list[dict],
        system_prompt: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        top_p: float | None = None,
    ) -> str:
        """
        Get a non-streaming chat completion response.

        Args:
            messages: List of message dicts with 'role' and 'content'
            system_prompt: Optional system prompt to prepend
            max_tokens: Optional max tokens limit
            temperature: Optional sampling temperature
            top_p: Optional nucleus-sampling threshold
        """
        chat_messages = []

        if system_prompt:
            chat_messages.append({"role": "system", "content": system_prompt})

        chat_messages.extend(messages)

        kwargs = {
            "model": self.model,
            "messages": chat_messages,
        }
        if max_tokens:
            kwargs["max_tokens"] = max_tokens
        if temperature is not None:
            kwargs["temperature"] = temperature
        if top_p is not None:
            kwargs["top_p"] = top_p

        response = await self.client.chat.completions.create(**kwargs)
        return response.choices[0].message.content or ""


# Singleton instance
_llm_service: LLMService | None = None


def get_llm_service() -> LLMService:
    global _llm_service
    if _llm_service is None:
        _llm_service = LLMService()
    return _llm_service
