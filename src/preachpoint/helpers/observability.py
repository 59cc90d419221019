import logging

from langfuse import Langfuse
from openinference.instrumentation.llama_index import LlamaIndexInstrumentor

from preachpoint.config import LangfuseConfig


logger = logging.getLogger(__name__)


def setup_langfuse_client(langfuse_config: LangfuseConfig) -> Langfuse:
    langfuse = Langfuse(
        public_key=langfuse_config.public_key,
        secret_key=langfuse_config.secret_key,
        host=langfuse_config.host,
    )

    if langfuse.auth_check():
        logger.info(f"Langfuse client is authenticated and ready! ({langfuse_config.host})")
    else:
        raise Exception(
            "Langfuse authentication failed. Please check your credentials and host."
        )

    return langfuse


def setup_observability(langfuse_config: LangfuseConfig) -> bool:
    """Trace translation and commentary LLM calls to Langfuse when it is configured.

    Returns True when the instrumentation is active.
    """
    if not langfuse_config.enabled:
        logger.warning(
            "Langfuse keys not configured. Skipping observability setup."
        )
        return False

    try:
        setup_langfuse_client(langfuse_config)
    except Exception as e:
        logger.error(
            f"Failed to setup Langfuse client: {str(e)}. Skipping observability setup."
        )
        return False
    # Exports OpenTelemetry spans of every LlamaIndex LLM call to Langfuse.
    LlamaIndexInstrumentor().instrument()
    return True
