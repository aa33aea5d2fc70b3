"""Model-agnostic async advisory client using an OpenAI-compatible API.

Supports Anthropic (OpenAI-compatible endpoint), OpenAI, DeepSeek and
Ollama. The client makes exactly one attempt per request; the recommendation
generator owns the deadline and the fallback decision.
"""

import logging

from openai import APIError, APITimeoutError, AsyncOpenAI

from reforester.advisory.prompts import ADVISOR_SYSTEM_PROMPT
from reforester.config import ReforesterSettings, get_config
from reforester.errors import AdvisoryError

logger = logging.getLogger(__name__)


class AdvisoryClient:
    """Thin async wrapper around a chat-completions endpoint."""

    PROVIDER_CONFIGS = {
        "anthropic": {"base_url": "https://api.anthropic.com/v1/", "default_model": "claude-sonnet-4-5-20250929"},
        "openai": {"base_url": "https://api.openai.com/v1", "default_model": "gpt-4o"},
        "deepseek": {"base_url": "https://api.deepseek.com/v1", "default_model": "deepseek-chat"},
        "ollama": {"base_url": "http://localhost:11434/v1", "default_model": "llama3.1:8b"},
    }

    def __init__(self, config: ReforesterSettings | None = None, client: AsyncOpenAI | None = None):
        self.config = config or get_config()
        provider = self.config.llm_provider.lower()
        provider_cfg = self.PROVIDER_CONFIGS.get(provider, {})

        api_key = self.config.llm_api_key
        if not api_key and provider != "ollama":
            raise ValueError(
                f"REFORESTER_LLM_API_KEY is required for provider '{provider}'. "
                "Set it in .env or as an environment variable."
            )

        self.model = self.config.llm_model or provider_cfg.get("default_model", "")
        self.client = client or AsyncOpenAI(
            base_url=self.config.llm_base_url or provider_cfg.get("base_url"),
            api_key=api_key or "ollama",
            timeout=self.config.llm_timeout,
            max_retries=0,
        )
        logger.info("AdvisoryClient initialized: provider=%s, model=%s", provider, self.model)

    async def complete(self, prompt: str) -> str:
        """Send one user prompt under the advisor persona and return the text."""
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": ADVISOR_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.config.llm_temperature,
                max_tokens=self.config.llm_max_tokens,
            )
        except APITimeoutError as exc:
            raise AdvisoryError("Advisory API timed out", timed_out=True) from exc
        except APIError as exc:
            raise AdvisoryError(f"Advisory API error: {exc}") from exc

        text = (response.choices[0].message.content or "").strip() if response.choices else ""
        if not text:
            raise AdvisoryError("Advisory API returned an empty answer")
        return text

    async def aclose(self) -> None:
        await self.client.close()
