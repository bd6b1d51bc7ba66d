from typing import Any, Dict, List, Optional, Type, TypeVar

import instructor
from anthropic import Anthropic
from google import genai
from loguru import logger
from openai import OpenAI
from pydantic import BaseModel

from studio_core.config_manager import IntelligenceConfig

SUPPORTED_PROVIDERS = ("gemini", "openai", "anthropic")

T = TypeVar("T", bound=BaseModel)


class LLMClient:
    """
    Process-wide handle on one hosted model.

    Structured calls go through Instructor so the reply is validated against a
    pydantic model; free-text calls use the provider SDK directly.
    """

    def __init__(self, provider: str, model_name: str, sdk: Any, structured: Any, max_tokens: int = 8192):
        self.provider = provider
        self.model_name = model_name
        self.sdk = sdk
        self.structured = structured
        self.max_tokens = max_tokens

    def complete_structured(self, prompt: str, response_model: Type[T], system: Optional[str] = None) -> Optional[T]:
        messages: List[Dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        kwargs: Dict[str, Any] = {}
        if self.provider == "anthropic":
            kwargs["max_tokens"] = self.max_tokens

        return self.structured.chat.completions.create(
            model=self.model_name,
            response_model=response_model,
            messages=messages,
            max_retries=1,  # single attempt, no re-asking
            **kwargs,
        )

    def complete_text(self, prompt: str) -> str:
        if self.provider == "gemini":
            resp = self.sdk.models.generate_content(model=self.model_name, contents=prompt)
            return resp.text or ""

        if self.provider == "anthropic":
            resp = self.sdk.messages.create(
                model=self.model_name,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
            return "".join(block.text for block in resp.content if getattr(block, "type", None) == "text")

        resp = self.sdk.chat.completions.create(
            model=self.model_name,
            messages=[{"role": "user", "content": prompt}],
        )
        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""


def build_llm_client(cfg: IntelligenceConfig) -> Optional[LLMClient]:
    """Initialize the configured provider. Returns None when its API key is missing."""
    provider = cfg.llm_provider

    if provider == "gemini":
        api_key = cfg.gemini_api_key
        if not api_key:
            logger.warning("Gemini API Key not found. Set GEMINI_API_KEY or GOOGLE_API_KEY.")
            return None
        sdk = genai.Client(api_key=api_key)
        structured = instructor.from_genai(sdk)

    elif provider == "openai":
        api_key = cfg.openai_api_key
        if not api_key:
            logger.warning("OpenAI API Key not found.")
            return None
        sdk = OpenAI(api_key=api_key)
        structured = instructor.from_openai(sdk)

    elif provider == "anthropic":
        api_key = cfg.anthropic_api_key
        if not api_key:
            logger.warning("Anthropic API Key not found.")
            return None
        sdk = Anthropic(api_key=api_key)
        structured = instructor.from_anthropic(sdk)

    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")

    logger.info(f"LLM client ready: {provider}/{cfg.model_name}")
    return LLMClient(provider, cfg.model_name, sdk, structured, max_tokens=cfg.max_tokens)
