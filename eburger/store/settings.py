from __future__ import annotations

from pydantic import TypeAdapter

from ..data.interface import SETTINGS_KEY, Persistence
from ..data.models import StoreSettings
from .base import PersistedStore


class SettingsStore(PersistedStore[StoreSettings]):
    """Singleton store settings. Always replaced wholesale."""

    def __init__(self, persistence: Persistence) -> None:
        super().__init__(persistence, SETTINGS_KEY, TypeAdapter(StoreSettings), StoreSettings)

    def get(self) -> StoreSettings:
        return self._value

    def set(self, settings: StoreSettings) -> StoreSettings:
        self._mutate(lambda _: settings)
        self.logger.info(f"Store settings saved (qr configured: {settings.has_qr})")
        return settings

    def clear_qr(self) -> StoreSettings:
        cleared = self._mutate(lambda current: current.model_copy(update={"qr_code_image": None}))
        self.logger.info("Store QR code cleared")
        return cleared
