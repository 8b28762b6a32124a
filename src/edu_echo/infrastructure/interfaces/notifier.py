"""Abstract interface for live status notifications."""

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Broadcasts plain-text status messages to connected observers."""

    @abstractmethod
    async def broadcast(self, message: str) -> None:
        """Sends message to every observer that is currently connected."""
