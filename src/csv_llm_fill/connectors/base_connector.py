"""Base connector class for LLM providers."""
from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class BaseConnector(ABC):
    """
    Abstract base class for all LLM provider connectors.
    Defines the interface the column filler relies on.
    """

    # Overwrite cells that already hold a value when filling a column.
    always_overwrite: bool = False

    def __init__(self, name: str):
        """
        Initialize the connector.

        Args:
            name: Name of the provider (for logging and output)
        """
        self.name = name
        self.logger = logging.getLogger(f'{__name__}.{name}')

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """
        Send a single prompt and return the completion text.

        Args:
            prompt: Fully resolved user prompt

        Returns:
            Completion text
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release any resources held by the connector."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
