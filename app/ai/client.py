"""
Cloudflare Workers AI REST client.
Runs text and image models by name; returns the unwrapped `result` payload.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class WorkersAIError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[Any] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class WorkersAIClient:
    def __init__(
        self,
        account_id: Optional[str] = None,
        api_token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.account_id = account_id or settings.CLOUDFLARE_ACCOUNT_ID
        self.api_token = api_token or settings.CLOUDFLARE_API_TOKEN
        self.base_url = (base_url or settings.AI_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.AI_TIMEOUT_SECONDS
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _url(self, model: str) -> str:
        return f"{self.base_url}/accounts/{self.account_id}/ai/run/{model.lstrip('/')}"

    def run(self, model: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run a model and return its result object.

        Raises:
            WorkersAIError: missing credentials, transport failure, HTTP status >= 400,
                or a response that is not a JSON object.
        """
        if not self.account_id or not self.api_token:
            raise WorkersAIError("CLOUDFLARE_ACCOUNT_ID and CLOUDFLARE_API_TOKEN must be set")

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                r = client.post(self._url(model), headers=self._headers(), json=payload)
        except httpx.RequestError as e:
            logger.exception("Workers AI request error for model %s", model)
            raise WorkersAIError(str(e))

        if r.status_code >= 400:
            logger.warning("Workers AI error %s for model %s: %s", r.status_code, model, r.text[:500] if r.text else "")
            raise WorkersAIError(f"Workers AI run failed: {r.status_code}", status_code=r.status_code, body=r.text)

        try:
            data = r.json()
        except ValueError:
            raise WorkersAIError("Workers AI returned a non-JSON response", status_code=r.status_code, body=r.text)

        if isinstance(data, dict) and "result" in data:
            data = data["result"]
        if not isinstance(data, dict):
            raise WorkersAIError("Workers AI returned an unexpected payload", status_code=r.status_code, body=r.text)
        return data

    def generate_text(self, instructions: str, text: str) -> Dict[str, Any]:
        """Run the text model with a system instruction and user input."""
        return self.run(settings.TEXT_MODEL, {"input": text, "instructions": instructions})

    def generate_image(self, prompt: str, num_steps: Optional[int] = None) -> Dict[str, Any]:
        """Run the image model. The result carries a base64 `image` field."""
        steps = num_steps if num_steps is not None else settings.IMAGE_NUM_STEPS
        return self.run(settings.IMAGE_MODEL, {"prompt": prompt, "num_steps": steps})


ai_client = WorkersAIClient()
