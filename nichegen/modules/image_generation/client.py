"""
Pass-through client for an OpenAI compatible image generation endpoint.
"""
import logging
from typing import Optional

import requests

from ...exceptions import NicheGenError

logger = logging.getLogger(__name__)


class ImageGenerationError(NicheGenError):
    """``status_code`` is the upstream HTTP status, None for transport errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code in (401, 403)


class ImageGenerationClient:

    def __init__(self,
                 api_url: str,
                 api_key: str,
                 model: str = 'dall-e-3',
                 size: str = '1024x1024',
                 timeout: float = 120,
                 session: Optional[requests.Session] = None):
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.size = size
        self.timeout = timeout
        self._session = session or requests.Session()

    def generate(self, prompt: str) -> str:
        """Returns an image URL (or a base64 data URL if the provider inlines the image)."""
        if not self.api_key:
            raise ImageGenerationError('image API key is not configured', status_code=401)

        try:
            response = self._session.post(
                self.api_url,
                json={'model': self.model, 'prompt': prompt, 'n': 1, 'size': self.size},
                headers={'Authorization': f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ImageGenerationError(f"request failed: {e}") from e

        if response.status_code != 200:
            raise ImageGenerationError(
                f"image provider returned status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            image = response.json()['data'][0]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ImageGenerationError('malformed response body') from e

        if image.get('url'):
            return image['url']
        if image.get('b64_json'):
            return f"data:image/png;base64,{image['b64_json']}"
        raise ImageGenerationError('response contained no image')
