"""Abstract interface for text generation backends."""

from abc import ABC, abstractmethod


class TextGenerator(ABC):
    """Abstract base class for LLM backends."""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Returns the free-text completion of a prompt.

        Raises:
            GenerationError: If the LLM call fails.
        """
