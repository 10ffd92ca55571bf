import logging
from typing import Iterable, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from .config import Settings, settings as default_settings
from .outline import DEFAULT_OUTLINE, PlanOutline

logger = logging.getLogger(__name__)

EMPTY_COMPLETION = "Failed to generate business plan."
EMPTY_MODIFICATION = "Failed to modify business plan."


class ServiceError(Exception):
    """The completion service rejected a request. Carries the upstream message."""
    status_code = 502


class AuthenticationError(ServiceError):
    status_code = 401


class QuotaExceededError(ServiceError):
    status_code = 402


class RateLimitError(ServiceError):
    status_code = 429


def classify_error(e: Exception) -> ServiceError:
    """Wrap a provider exception in the matching ServiceError.

    An HTTP status on the exception decides the class. The message text is
    only looked at when the provider gives no status.
    """
    if isinstance(e, ServiceError):
        return e
    status = getattr(e, "status_code", None) or getattr(getattr(e, "response", None), "status_code", None)
    if status is None and isinstance(getattr(e, "code", None), int):
        # google-genai / api-core errors carry the HTTP status as `code`
        status = e.code
    msg = str(e) or e.__class__.__name__
    lowered = msg.lower()
    if status is not None:
        is_auth = status in (401, 403)
        is_quota = status == 402
        is_rate_limit = status == 429
    else:
        is_auth = "api key" in lowered or "unauthorized" in lowered or "permission_denied" in lowered
        is_rate_limit = "429" in msg or "rate limit" in lowered or "resource_exhausted" in lowered
        is_quota = not is_rate_limit and ("insufficient credits" in lowered or "quota" in lowered)
    if is_auth:
        return AuthenticationError(f"Invalid API key. Please check your API key configuration. ({msg})")
    if is_quota:
        return QuotaExceededError(f"Insufficient credits. Please check your billing. ({msg})")
    if is_rate_limit:
        return RateLimitError(f"Rate limit exceeded. Please wait a moment and try again. ({msg})")
    return ServiceError(msg)


def get_chat_model(config: Settings = default_settings) -> BaseChatModel:
    """
    Returns a chat model for the configured provider.

    Both clients are built with max_retries=0, so a failed request reaches
    the caller straight away.

    Args:
        config (Settings): Provider, model name, key and sampling options.

    Returns:
        BaseChatModel: Gemini through langchain-google-genai, or any
        OpenAI-compatible endpoint (OpenRouter) through langchain-openai.
    """
    if config.llm_provider == "openrouter":
        from langchain_openai import ChatOpenAI
        return ChatOpenAI(
            base_url=config.openrouter_base_url,
            api_key=config.openrouter_api_key,
            model=config.model_name,
            temperature=config.llm_temperature,
            max_tokens=config.llm_max_tokens,
            max_retries=0,
        )
    if config.llm_provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI
        return ChatGoogleGenerativeAI(
            model=config.model_name,
            google_api_key=config.google_api_key,
            temperature=config.llm_temperature,
            max_output_tokens=config.llm_max_tokens,
            max_retries=0,
        )
    raise ValueError(f"Unknown LLM provider: {config.llm_provider}")


class CompletionService:
    """Sends one prompt to the hosted model and returns the text answer.

    There is no retry here: a failure is reported to the caller as a
    ServiceError and the operation that asked for the completion stops.
    """

    def __init__(self, llm: Optional[BaseChatModel] = None, config: Settings = default_settings,
                 outline: PlanOutline = DEFAULT_OUTLINE):
        self.config = config
        self.outline = outline
        self._llm = llm

    @property
    def model_name(self) -> str:
        return self.config.model_name

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            if not self.config.has_api_key():
                raise AuthenticationError("API key not configured. Please add your API key to the .env file.")
            self._llm = get_chat_model(self.config)
        return self._llm

    def build_messages(self, prompt: str, context: Iterable[str] = ()):
        messages = [SystemMessage(content=self.outline.system_prompt)]
        # earlier turns are replayed as assistant messages
        messages.extend(AIMessage(content=c) for c in context)
        messages.append(HumanMessage(content=prompt))
        return messages

    def complete(self, prompt: str, context: Iterable[str] = (), empty_text: str = EMPTY_COMPLETION) -> str:
        """Return the model's answer, or `empty_text` when the answer is blank."""
        messages = self.build_messages(prompt, context)
        try:
            response = self.llm.invoke(messages)
        except ServiceError:
            raise
        except Exception as e:
            err = classify_error(e)
            logger.error(f"Completion request failed: {err}", exc_info=True)
            raise err from e
        content = getattr(response, "content", response)
        if isinstance(content, list):
            # some providers return content blocks
            content = "".join(part.get("text", "") if isinstance(part, dict) else str(part) for part in content)
        if not content or not str(content).strip():
            logger.warning("Completion service returned no content")
            return empty_text
        logger.info(f"Received completion of {len(content)} chars")
        return str(content)


_default_service: Optional[CompletionService] = None


def get_completion_service() -> CompletionService:
    global _default_service
    if _default_service is None:
        _default_service = CompletionService()
    return _default_service
