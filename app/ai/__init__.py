from app.ai.client import ai_client, WorkersAIClient, WorkersAIError
from app.ai.prompts import POSTCARD_INSTRUCTIONS, extract_output_text

__all__ = ["ai_client", "WorkersAIClient", "WorkersAIError", "POSTCARD_INSTRUCTIONS", "extract_output_text"]
