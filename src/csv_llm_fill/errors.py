"""Exception types shared across csv-llm-fill."""
from typing import Optional


class CsvLlmFillError(Exception):
    """Base class for expected csv-llm-fill failures."""


class ConfigurationError(CsvLlmFillError):
    """A required setting is missing or has an invalid value."""


class OutputExistsError(CsvLlmFillError):
    """The configured output file is already present on disk."""

    def __init__(self, path):
        self.path = path
        super().__init__(
            f"Output file '{path}' already exists. "
            "Please remove it or specify a different output file."
        )


class APIError(CsvLlmFillError):
    """Provider returned a non-success HTTP status."""

    def __init__(self, provider: str, status_code: int, body: Optional[str] = None):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"{provider} API call failed (HTTP {status_code}): {body}"
        )


class ResponseFormatError(CsvLlmFillError):
    """Provider response did not contain a completion."""
