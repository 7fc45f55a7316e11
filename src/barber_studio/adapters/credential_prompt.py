"""Credential prompt that asks the operator to re-select the API key."""

import logging
from dataclasses import dataclass

from barber_studio.services.styling import CredentialPrompt

_logger = logging.getLogger(__name__)


@dataclass
class LoggingCredentialPrompt(CredentialPrompt):
    """Flags a credential reset and tells the operator through the log."""

    reselect_requested: bool = False

    async def request_reselect(self) -> None:
        """Record that the API key must be selected again."""
        self.reselect_requested = True
        _logger.warning(
            "Gemini rejected the configured API key; select a valid key "
            "(GEMINI_API_KEY) before retrying"
        )
