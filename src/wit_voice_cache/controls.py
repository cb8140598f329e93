"""
Toolkit-independent state for the editor's "Update Voice List" control.

An inspector panel asks ``button_state()`` each time it draws, calls
``on_update_clicked()`` when the user presses the button, and calls
``ensure_voices()`` once per draw so that a project with no voice list
gets a single automatic update.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .cache import VoiceCache
from .config import WitConfiguration

logger = logging.getLogger("wit-voice-cache.controls")

LABEL_UPDATE = "Update Voice List"
LABEL_UPDATING = "Updating Voice List"
LABEL_LOADING = "Loading Voice List"


@dataclass(frozen=True)
class UpdateButtonState:
    """How the update button should be drawn."""

    label: str
    enabled: bool


class VoiceUpdateControls:
    """Drives the update button for one cache.

    Args:
        cache: The voice cache to update.
        config_provider: Returns the service configuration to use when an
            update starts.
    """

    def __init__(
        self,
        cache: VoiceCache,
        config_provider: Callable[[], WitConfiguration],
    ) -> None:
        self.cache = cache
        self._config_provider = config_provider
        self._forced_update = False

    def button_state(self) -> UpdateButtonState:
        if self.cache.is_updating:
            return UpdateButtonState(LABEL_UPDATING, False)
        if self.cache.is_loading:
            return UpdateButtonState(LABEL_LOADING, False)
        return UpdateButtonState(LABEL_UPDATE, True)

    async def on_update_clicked(self) -> bool:
        """Start an update if the button is enabled."""
        if not self.button_state().enabled:
            return False
        return await self.cache.update(self._config_provider())

    async def ensure_voices(self) -> Optional[bool]:
        """Force one update when no voices are known.

        Returns:
            The update outcome the first time an update is forced, None
            on every other call.
        """
        if self._forced_update or not self.button_state().enabled:
            return None
        catalog = self.cache.catalog
        if catalog is not None and len(catalog) > 0:
            return None

        self._forced_update = True
        logger.info("No voice list available, requesting one automatically")
        return await self.cache.update(self._config_provider())
