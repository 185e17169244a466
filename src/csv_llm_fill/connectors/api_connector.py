"""Connector for OpenAI-style chat completion APIs."""
import requests
from typing import Any, Dict, Optional
import logging

from csv_llm_fill.errors import APIError, ConfigurationError
from .base_connector import BaseConnector

logger = logging.getLogger(__name__)


class ChatCompletionConnector(BaseConnector):
    """
    Connector for chat completion endpoints.
    Handles bearer authentication, request construction and error handling.
    """

    # Environment variable holding the key, used in error messages.
    api_key_variable = 'API_KEY'

    def __init__(
        self,
        name: str,
        url: str,
        model: str,
        system_prompt: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize chat completion connector.

        Args:
            name: Name of the API service
            url: Full chat completions endpoint URL
            model: Model identifier sent with every request
            system_prompt: System message sent with every request
            api_key: Bearer token for authentication
            timeout: Request timeout in seconds (None waits indefinitely)
        """
        super().__init__(name)
        self.url = url
        self.model = model
        self.system_prompt = system_prompt
        self.api_key = api_key
        self.timeout = timeout
        self.session = requests.Session()

    def _require_api_key(self) -> str:
        if self.api_key is None or not self.api_key.strip():
            raise ConfigurationError(f'Missing {self.api_key_variable}')
        return self.api_key

    def build_request_body(self, prompt: str) -> Dict[str, Any]:
        """
        Build the JSON request body.

        Args:
            prompt: Resolved user prompt

        Returns:
            Request body with model and system/user messages
        """
        return {
            'model': self.model,
            'messages': [
                {'role': 'system', 'content': self.system_prompt},
                {'role': 'user', 'content': prompt},
            ],
        }

    def post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Make an authenticated POST request.

        Args:
            body: JSON body

        Returns:
            JSON response as dictionary

        Raises:
            ConfigurationError: If no API key is configured
            APIError: If the response status is not 2xx
            requests.RequestException: If the request cannot be sent
        """
        api_key = self._require_api_key()
        headers = {
            'Authorization': f'Bearer {api_key}',
            'Content-Type': 'application/json',
        }

        response = self.session.post(
            self.url,
            json=body,
            headers=headers,
            timeout=self.timeout,
        )
        if not response.ok:
            raise APIError(self.name, response.status_code, response.text)
        return response.json()

    @staticmethod
    def extract_content(data: Dict[str, Any]) -> Optional[str]:
        """Return choices[0].message.content, or None if the path is missing."""
        try:
            return data['choices'][0]['message']['content']
        except (KeyError, IndexError, TypeError):
            return None

    def complete(self, prompt: str) -> Optional[str]:
        """
        Send a prompt and return the raw completion text.

        Args:
            prompt: Resolved user prompt

        Returns:
            Completion text, or None if the response holds none
        """
        data = self.post(self.build_request_body(prompt))

        usage = data.get('usage') if isinstance(data, dict) else None
        if usage:
            self.logger.debug(
                f"{self.name} usage: {usage.get('prompt_tokens', 0)} prompt, "
                f"{usage.get('completion_tokens', 0)} completion tokens"
            )

        return self.extract_content(data)

    def close(self) -> None:
        """Close the session."""
        self.session.close()
        self.logger.debug(f'Closed connection to {self.name}')
