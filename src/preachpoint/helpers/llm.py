import logging

from llama_index.core.llms import LLM, ChatMessage, MessageRole
from llama_index.llms.ollama import Ollama
from llama_index.llms.openai import OpenAI

from preachpoint.config import ChatModel
from preachpoint.constants import (
    COMMENTARY_SYSTEM_PROMPT,
    COMMENTARY_USER_PROMPT,
    DEFAULT_COMMENTARY_LEVEL,
    DEFAULT_COMMENTARY_TONE,
    DEFAULT_LANGUAGE_LABEL,
    LANGUAGE_LABELS,
    TRANSLATION_SYSTEM_PROMPT,
    TRANSLATION_USER_PROMPT,
)

logger = logging.getLogger(__name__)


class LanguageModelError(Exception):
    """The external language model failed or returned nothing usable."""


def build_llm(model_config: ChatModel) -> LLM:
    """
    Build a LlamaIndex chat LLM from its configuration.

    Args:
        model_config: Model name, platform and generation parameters

    Returns:
        An Ollama or OpenAI LLM instance
    """
    if model_config.platform == "ollama":
        additional_kwargs = {}
        if model_config.max_tokens is not None:
            additional_kwargs["num_predict"] = model_config.max_tokens
        return Ollama(
            model=model_config.name,
            temperature=model_config.temperature,
            request_timeout=model_config.request_timeout,
            # Manually set the context window to limit memory usage
            context_window=model_config.context_window,
            additional_kwargs=additional_kwargs,
            **(model_config.other_kwargs or {}),
        )
    elif model_config.platform == "openai":
        return OpenAI(
            model=model_config.name,
            api_key=model_config.api_key,
            temperature=model_config.temperature,
            max_tokens=model_config.max_tokens,
            timeout=model_config.request_timeout,
            **(model_config.other_kwargs or {}),
        )
    else:
        raise Exception(f"Unsupported LLM platform: {model_config.platform}")


def language_label(lang: str | None) -> str:
    return LANGUAGE_LABELS.get(lang or "", DEFAULT_LANGUAGE_LABEL)


async def _chat(llm: LLM, system_prompt: str, user_prompt: str) -> str:
    messages = [
        ChatMessage(role=MessageRole.SYSTEM, content=system_prompt),
        ChatMessage(role=MessageRole.USER, content=user_prompt),
    ]
    try:
        response = await llm.achat(messages)
    except Exception as e:
        raise LanguageModelError(f"Language model request failed: {e}") from e

    content = response.message.content
    if not content or not content.strip():
        raise LanguageModelError("Language model returned an empty response")
    return content.strip()


async def translate_passage(llm: LLM, passage: str) -> str:
    """Translate verse lines into Afrikaans, keeping the "<chapter>:<verse>" prefixes."""
    return await _chat(
        llm,
        TRANSLATION_SYSTEM_PROMPT,
        TRANSLATION_USER_PROMPT.format(passage=passage),
    )


async def write_commentary(
    llm: LLM,
    reference: str,
    passage: str,
    tone: str | None,
    level: str | None,
    lang: str | None,
) -> str:
    """Generate a commentary of the passage in the requested language, tone and level.

    Missing tone or level fall back to DEFAULT_COMMENTARY_TONE and DEFAULT_COMMENTARY_LEVEL.
    """
    user_prompt = COMMENTARY_USER_PROMPT.format(
        reference=reference,
        passage=passage,
        language=language_label(lang),
        level=level or DEFAULT_COMMENTARY_LEVEL,
        tone=tone or DEFAULT_COMMENTARY_TONE,
    )
    logger.debug(f"Commentary prompt: {user_prompt[:100]}...")
    return await _chat(llm, COMMENTARY_SYSTEM_PROMPT, user_prompt)
