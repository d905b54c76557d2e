from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StoreSettings(BaseModel):
    """Store-wide configuration record."""
    model_config = ConfigDict(frozen=True)

    qr_code_image: Optional[str] = Field(default=None, description="Payment QR image as a data URI; None when not configured")

    @property
    def has_qr(self) -> bool:
        return bool(self.qr_code_image)
