"""Payload-to-request adapter for gateway invocation.

Architectural role:
    Selects model, prompt and message framing for each content kind and
    returns a ready `AnalysisRequest`. This module bridges prompt composition
    (`fileai.prompting`) and transport (`fileai.llm.client`).

Message framing:
    - Text:  `[system: config.system_message, user: summary prompt + content]`
    - Image: `[user: description prompt + image_url part (base64 JPEG data URL)]`

Determinism:
    Request construction is deterministic for fixed inputs and configuration.
"""

from fileai.core.routing_types import AnalysisRequest, ConversationMessage, Role
from fileai.llm.provider_config import AnalysisConfig
from fileai.multimodal.file_input_manager import image_data_url
from fileai.prompting.prompt_builder import compose_prompt


def build_text_request(config: AnalysisConfig, text: str) -> AnalysisRequest:
    """Build the summary request for decoded text content."""
    prompt = config.prompt_for("text").summary
    return AnalysisRequest(
        model=config.text_model,
        messages=(
            ConversationMessage(Role.SYSTEM, config.system_message),
            ConversationMessage(Role.USER, compose_prompt(prompt, text)),
        ),
    )


def build_image_request(config: AnalysisConfig, payload: str) -> AnalysisRequest:
    """Build the description request for a base64 JPEG payload."""
    prompt = config.prompt_for("image").description
    return AnalysisRequest(
        model=config.vision_model,
        messages=(
            ConversationMessage(Role.USER, prompt, image_url=image_data_url(payload)),
        ),
        max_tokens=config.image_max_tokens,
    )
