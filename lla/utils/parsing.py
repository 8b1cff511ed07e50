"""Reply normalisation and the backend call wrapper shared by the agents."""

import sys

import httpx
from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential

from lla.config import get_config

# Statuses an Ollama server returns while loading a model or under load.
RETRYABLE_STATUS = frozenset({429, 500, 502, 503})


def normalize_reply(text: str) -> str:
    """Trim and lowercase an orchestrator reply before matching."""
    return text.strip().lower()


def _status_code(exc: BaseException) -> int | None:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    # ollama.ResponseError carries the status directly
    return getattr(exc, "status_code", None)


def _is_transient(exc: BaseException) -> bool:
    """True when the Ollama server was unreachable, slow or briefly unavailable."""
    if isinstance(exc, (httpx.TimeoutException, httpx.ConnectError, ConnectionError)):
        return True
    return _status_code(exc) in RETRYABLE_STATUS


def _announce_retry(retry_state) -> None:
    print(
        f"[LLA] Backend call failed on attempt {retry_state.attempt_number} "
        f"({retry_state.outcome.exception()!r}); "
        f"trying again in {retry_state.next_action.sleep:.0f}s.",
        file=sys.stderr,
    )


def invoke_with_retry(llm, messages, max_retries: int | None = None):
    """Return ``llm.invoke(messages)``, repeating the call after transient backend errors.

    ``max_retries`` extra attempts are allowed; when omitted it comes from the
    ``llm_max_retries`` config key, and a missing key means a single attempt.
    The last error is re-raised unchanged.
    """
    if max_retries is None:
        max_retries = get_config().get("llm_max_retries") or 0

    retrying = Retrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=1, min=2, max=16),
        retry=retry_if_exception(_is_transient),
        reraise=True,
        before_sleep=_announce_retry,
    )
    return retrying(llm.invoke, messages)
