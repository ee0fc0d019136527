"""Chat-completions transport and response decoding.

Architectural role:
    Executes one HTTP POST against an OpenAI-compatible chat-completions
    endpoint and turns the JSON body into the completion text or a
    `GatewayError`.

Model invocation flow:
    `engine.Dispatcher.analyze` -> `ChatCompletionsClient.invoke(model, messages)`
    -> `requests.post` -> `extract_content(data)` -> text.

Retry behavior:
    No retry loop is implemented. Each call is attempted once with the
    configured timeout.

Decode contract (fixed order):
    1. Non-object body -> `DECODE`.
    2. Non-null `error` -> `API_REPORTED`, even when `choices` is present.
    3. `choices` missing or empty -> `EMPTY_RESPONSE`; not a list -> `DECODE`.
    4. `RESPONSE_SHAPES` tried in priority order on `choices[0]`;
       no match -> `DECODE`.
    5. Blank extracted text -> `EMPTY_RESPONSE`.

Failure handling model:
    Exceptions are raised, never returned as strings. The API key is never
    included in log output or error messages.
"""

import logging
from typing import Sequence

import requests

from fileai.core.errors import GatewayError, GatewayErrorKind, MissingCredentialError
from fileai.core.routing_types import AnalysisRequest, ConversationMessage
from fileai.llm.provider_config import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS


logger = logging.getLogger(__name__)


# =========================================================
# RESPONSE SHAPES
# =========================================================

def _chat_shape(choice: dict):
    """`{"message": {"content": "..."}}` (chat completions)."""
    message = choice.get("message")
    if isinstance(message, dict) and isinstance(message.get("content"), str):
        return message["content"]
    return None


def _legacy_completion_shape(choice: dict):
    """`{"text": "..."}` (legacy completions)."""
    text = choice.get("text")
    if isinstance(text, str):
        return text
    return None


RESPONSE_SHAPES = (
    ("chat", _chat_shape),
    ("legacy_completion", _legacy_completion_shape),
)


def _error_message(error) -> str:
    if isinstance(error, dict):
        message = error.get("message")
        if message:
            return str(message)
        return str(error)
    return str(error)


def extract_content(data) -> str:
    """Extract completion text from a decoded response body.

    Args:
        data: Parsed JSON body.

    Returns:
        Completion text, stripped.

    Raises:
        GatewayError: `API_REPORTED`, `EMPTY_RESPONSE` or `DECODE`.
    """
    if not isinstance(data, dict):
        raise GatewayError(GatewayErrorKind.DECODE, "response is not a JSON object")

    error = data.get("error")
    if error is not None:
        raise GatewayError(GatewayErrorKind.API_REPORTED, _error_message(error))

    choices = data.get("choices")
    if choices is None or choices == []:
        raise GatewayError(GatewayErrorKind.EMPTY_RESPONSE, "no response from API")
    if not isinstance(choices, list):
        raise GatewayError(GatewayErrorKind.DECODE, "invalid response format: choices is not a list")

    first_choice = choices[0]
    if not isinstance(first_choice, dict):
        raise GatewayError(GatewayErrorKind.DECODE, "invalid format for first choice")

    for shape_name, extractor in RESPONSE_SHAPES:
        content = extractor(first_choice)
        if content is None:
            continue
        logger.debug("Decoded response using %s shape", shape_name)
        content = content.strip()
        if not content:
            raise GatewayError(GatewayErrorKind.EMPTY_RESPONSE, "API returned empty content")
        return content

    raise GatewayError(GatewayErrorKind.DECODE, "content missing from first choice")


# =========================================================
# TRANSPORT
# =========================================================

class ChatCompletionsClient:
    """Stateless gateway to a chat-completions endpoint.

    Holds only immutable connection settings, so one instance can serve
    concurrent callers.
    """

    def __init__(
        self,
        api_key: str | None,
        url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self.url = url
        self.timeout = timeout

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def invoke(
        self,
        model: str,
        messages: Sequence[ConversationMessage],
        timeout: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Send one conversation and return the completion text.

        Raises:
            ValueError: `messages` is empty.
            MissingCredentialError: No API key; raised before any request.
            GatewayError: Transport, decode, provider or empty-response failure.
        """
        request = AnalysisRequest(model=model, messages=messages, max_tokens=max_tokens)
        return self.send_request(request, timeout=timeout)

    def send_request(self, request: AnalysisRequest, timeout: float | None = None) -> str:
        """Send a prebuilt `AnalysisRequest`. See `invoke`."""
        if not self._api_key:
            raise MissingCredentialError("API key not set (OPENAI_API_KEY)")

        effective_timeout = self.timeout if timeout is None else timeout

        logger.debug(
            "POST %s model=%s messages=%d timeout=%s",
            self.url, request.model, len(request.messages), effective_timeout,
        )

        try:
            response = requests.post(
                self.url,
                headers=self._headers(),
                json=request.to_payload(),
                timeout=effective_timeout,
            )
        except requests.exceptions.RequestException as err:
            raise GatewayError(
                GatewayErrorKind.TRANSPORT, f"error sending request: {err}"
            ) from err

        status_code = response.status_code
        logger.debug("Gateway responded with HTTP %s", status_code)

        try:
            data = response.json()
        except ValueError as err:
            if status_code >= 400:
                raise GatewayError(
                    GatewayErrorKind.TRANSPORT, f"HTTP error {status_code}"
                ) from err
            raise GatewayError(
                GatewayErrorKind.DECODE, f"error decoding response: {err}"
            ) from err

        if status_code >= 400 and not (isinstance(data, dict) and data.get("error") is not None):
            raise GatewayError(GatewayErrorKind.TRANSPORT, f"HTTP error {status_code}")

        return extract_content(data)
