"""Dispatch engine for single-file analysis.

Architectural role:
    Orchestrates classify -> prepare payload -> build request -> invoke
    gateway -> shape result. Lower layers (classifier, payload preparer,
    request builders, gateway client) carry no routing logic of their own.

State machine:
    START -> CLASSIFIED -> PAYLOAD_READY -> GATEWAY_INVOKED -> SUCCEEDED
    Any state may end in FAILED; terminal states are final.

Failure model:
    Each failure raises a `FileAIError` subclass (`MissingCredentialError`,
    `ReadError`, `UnsupportedTypeError`, `ContentTooLargeError`,
    `ImageProcessingError`, `GatewayError`). No automatic retries.

Concurrency:
    The dispatcher keeps only immutable configuration and stateless
    collaborators. Per-call state lives in local variables, so concurrent
    `analyze` calls need no locking.
"""

import logging
import mimetypes
import os

from fileai.core.errors import (
    ContentTooLargeError,
    FileAIError,
    MissingCredentialError,
    UnsupportedTypeError,
)
from fileai.core.routing_types import (
    AnalysisResult,
    ClassificationVerdict,
    DispatchState,
)
from fileai.llm.client import ChatCompletionsClient
from fileai.llm.provider_config import AnalysisConfig
from fileai.llm.service import build_image_request, build_text_request
from fileai.multimodal.classifier import classify
from fileai.multimodal.file_input_manager import prepare_image, prepare_text, read_bytes
from fileai.prompting.prompt_builder import estimate_tokens


logger = logging.getLogger(__name__)


def _describe_unknown(file_path: str) -> str:
    mime_type, _ = mimetypes.guess_type(file_path)
    name = os.path.basename(file_path)
    if mime_type:
        return f"unsupported file type: '{name}' is of type '{mime_type}'"
    return f"unsupported file type: '{name}'"


class Dispatcher:
    """Route one file through classification and the gateway.

    Args:
        config: Resolved, immutable configuration.
        gateway: Object exposing `invoke(model, messages, timeout=..., max_tokens=...)`.
            Defaults to a `ChatCompletionsClient` built from `config`.
        reader: `path -> bytes` storage collaborator.
    """

    def __init__(self, config: AnalysisConfig, gateway=None, reader=read_bytes) -> None:
        self.config = config
        self.gateway = gateway or ChatCompletionsClient(
            api_key=config.api_key,
            url=config.api_url,
            timeout=config.timeout_seconds,
        )
        self.reader = reader

    def analyze(self, file_path: str) -> AnalysisResult:
        """Analyze `file_path` and return its summary or description.

        Raises:
            FileAIError: On any terminal failure.
        """
        state = DispatchState.START
        try:
            # Credential precondition: fail before touching disk or network.
            if not self.config.api_key:
                raise MissingCredentialError("API key not set (OPENAI_API_KEY)")

            content = self.reader(file_path)
            verdict = classify(content, file_path)
            state = self._advance(state, DispatchState.CLASSIFIED, file_path, verdict.value)

            if verdict is ClassificationVerdict.TEXT:
                text = prepare_text(content)
                token_estimate = estimate_tokens(text)
                if token_estimate > self.config.max_text_tokens:
                    raise ContentTooLargeError(
                        f"text content too large: ~{token_estimate} tokens "
                        f"(limit {self.config.max_text_tokens})"
                    )
                request = build_text_request(self.config, text)
            elif verdict is ClassificationVerdict.IMAGE:
                request = build_image_request(self.config, prepare_image(file_path))
            else:
                raise UnsupportedTypeError(_describe_unknown(file_path))

            state = self._advance(state, DispatchState.PAYLOAD_READY, file_path, request.model)

            output = self.gateway.invoke(
                request.model,
                request.messages,
                timeout=self.config.timeout_seconds,
                max_tokens=request.max_tokens,
            )
            state = self._advance(state, DispatchState.GATEWAY_INVOKED, file_path)

        except FileAIError as err:
            logger.debug(
                "%s: %s -> %s (%s)",
                file_path, state.value, DispatchState.FAILED.value, err.reason.value,
            )
            raise

        self._advance(state, DispatchState.SUCCEEDED, file_path)
        return AnalysisResult(
            source_path=file_path,
            summary_or_description=output,
            verdict=verdict,
        )

    @staticmethod
    def _advance(current, target, file_path, detail=None):
        if detail is None:
            logger.debug("%s: %s -> %s", file_path, current.value, target.value)
        else:
            logger.debug("%s: %s -> %s (%s)", file_path, current.value, target.value, detail)
        return target


def analyze_file(file_path: str, config: AnalysisConfig) -> AnalysisResult:
    """Convenience wrapper: analyze one file with a default dispatcher."""
    return Dispatcher(config).analyze(file_path)
