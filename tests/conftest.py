"""Pytest configuration and fixtures."""
from typing import Dict
from unittest.mock import MagicMock

import pytest

from csv_llm_fill.connectors.base_connector import BaseConnector


class FakeConnector(BaseConnector):
    """Connector returning canned answers; raises for prompts in fail_on."""

    def __init__(self, name='fake', always_overwrite=False, fail_on=()):
        super().__init__(name)
        self.always_overwrite = always_overwrite
        self.fail_on = set(fail_on)
        self.prompts = []
        self.closed = False

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if prompt in self.fail_on:
            raise RuntimeError(f'boom: {prompt}')
        return f'answer: {prompt}'

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_connector():
    return FakeConnector()


@pytest.fixture
def make_connector():
    """Factory for FakeConnector instances with custom behaviour."""
    return FakeConnector


@pytest.fixture
def base_env(tmp_path) -> Dict[str, str]:
    """Minimal environment for Settings.from_env."""
    return {
        'CSV_SEPARATOR': ',',
        'INPUT_CSV_FILE': str(tmp_path / 'input.csv'),
        'OUTPUT_CSV_FILE': str(tmp_path / 'output.csv'),
    }


@pytest.fixture
def mock_response():
    """Factory for mocked requests.Response objects."""
    def _make(status_code=200, payload=None, text=''):
        response = MagicMock()
        response.status_code = status_code
        response.ok = 200 <= status_code < 300
        response.json.return_value = payload
        response.text = text
        return response
    return _make
