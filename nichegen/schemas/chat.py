# nichegen/schemas/chat.py

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerateRequestSchema(BaseModel):
    """
    Body of ``POST /api/generate``.

    ``prompt`` is kept exactly as sent; it only has to contain something other
    than whitespace. ``length``, ``tone`` and ``platform`` are optional and take
    precedence over directives written inside the prompt.
    """
    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(..., min_length=1)
    chat_id: Optional[str] = Field(None, alias='chatId')
    length: Optional[str] = None
    tone: Optional[str] = None
    platform: Optional[str] = None

    @field_validator('prompt')
    @classmethod
    def reject_blank_prompt(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def directive_overrides(self) -> Dict[str, str]:
        overrides = {'length': self.length, 'tone': self.tone, 'platform': self.platform}
        return {key: value.strip() for key, value in overrides.items() if value and value.strip()}


class ImageRequestSchema(BaseModel):
    """Body of ``POST /generate-image``."""
    model_config = ConfigDict(str_strip_whitespace=True)

    prompt: str = Field(..., min_length=1)
