"""OpenAI GPT chat completions connector."""
from typing import Optional

from .api_connector import ChatCompletionConnector

GPT_URL = 'https://api.openai.com/v1/chat/completions'
NO_RESPONSE_PLACEHOLDER = '[No valid GPT response]'


class GPTConnector(ChatCompletionConnector):
    """GPT connector. Overwrites filled cells as well as empty ones."""

    always_overwrite = True
    api_key_variable = 'GPT_API_KEY'

    def __init__(
        self,
        model: str,
        system_prompt: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        url: str = GPT_URL,
    ):
        super().__init__(
            name='gpt',
            url=url,
            model=model,
            system_prompt=system_prompt,
            api_key=api_key,
            timeout=timeout,
        )

    def complete(self, prompt: str) -> str:
        content = super().complete(prompt)
        if content is None:
            return NO_RESPONSE_PLACEHOLDER
        return content
