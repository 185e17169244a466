"""Perplexity chat completions connector."""
import re
from typing import Any, Dict, Optional

from csv_llm_fill.errors import ResponseFormatError
from .api_connector import ChatCompletionConnector

PERPLEXITY_URL = 'https://api.perplexity.ai/chat/completions'
PERPLEXITY_MAX_TOKENS = 1_000

# Citation markers such as [1], [23]
CITATION_MARKER = re.compile(r'\[\d+\]')


class PerplexityConnector(ChatCompletionConnector):
    """
    Perplexity connector.

    Only fills empty cells, and strips citation markers from answers.
    """

    always_overwrite = False
    api_key_variable = 'PERPLEXITY_API_KEY'

    def __init__(
        self,
        model: str,
        system_prompt: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        url: str = PERPLEXITY_URL,
    ):
        super().__init__(
            name='perplexity',
            url=url,
            model=model,
            system_prompt=system_prompt,
            api_key=api_key,
            timeout=timeout,
        )

    def build_request_body(self, prompt: str) -> Dict[str, Any]:
        body = super().build_request_body(prompt)
        body['max_tokens'] = PERPLEXITY_MAX_TOKENS
        return body

    def complete(self, prompt: str) -> str:
        content = super().complete(prompt)
        if content is None:
            raise ResponseFormatError('Perplexity response contained no completion')
        return CITATION_MARKER.sub('', content)
