"""
Postcard prompt instruction and text-model output parsing.
"""
from typing import Any, Dict

POSTCARD_INSTRUCTIONS = (
    "You are an expert prompt engineer. You help the user write prompts that can be used "
    "to generate high quality images using AI image generation models.  The style of the "
    "image should always be similar to a Postcard. If the user's prompt is not related to "
    "image generation, you politely inform them that you can only help with image generation "
    "prompts. You only return the detailed prompt. No other text should be returned."
)


def extract_output_text(response: Dict[str, Any]) -> str:
    """
    Return the first `output_text` part of the first assistant message.
    Anything malformed yields an empty string.
    """
    output = response.get("output") if isinstance(response, dict) else None
    if not isinstance(output, list):
        return ""

    message = next(
        (
            item for item in output
            if isinstance(item, dict) and item.get("type") == "message" and item.get("role") == "assistant"
        ),
        None,
    )
    if message is None or not isinstance(message.get("content"), list):
        return ""

    for part in message["content"]:
        if isinstance(part, dict) and part.get("type") == "output_text":
            text = part.get("text")
            return text if isinstance(text, str) else ""
    return ""
