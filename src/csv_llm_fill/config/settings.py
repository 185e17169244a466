"""
Configuration settings for csv-llm-fill.

Settings are resolved once per run from environment variables, optionally
overridden by a local .env file, into an immutable Settings value that is
passed to every component that needs it.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values
from dotenv.parser import parse_stream

from csv_llm_fill.errors import ConfigurationError, OutputExistsError

DEFAULT_ENV_FILE = '.env'

# Provider defaults
DEFAULT_PERPLEXITY_MODEL = 'llama-3.1-sonar-small-128k-online'
DEFAULT_PERPLEXITY_SYSTEM_PROMPT = 'Be precise and concise.'
DEFAULT_GPT_MODEL = 'gpt-4o'
DEFAULT_GPT_SYSTEM_PROMPT = 'You are a helpful assistant.'

REQUIRED_VARIABLES = ('CSV_SEPARATOR', 'INPUT_CSV_FILE', 'OUTPUT_CSV_FILE')


def _unescape(value: str) -> str:
    """Interpret literal \\t and \\n sequences written in a .env file."""
    return value.replace('\\t', '\t').replace('\\n', '\n')


def _double_quoted_keys(path: Path) -> set[str]:
    """Keys whose value is double-quoted; dotenv already decodes their escapes."""
    with open(path, 'r', encoding='utf-8') as f:
        quoted = {
            binding.key: binding.original.string.partition('=')[2].lstrip().startswith('"')
            for binding in parse_stream(f)
            if binding.key
        }
    return {key for key, is_quoted in quoted.items() if is_quoted}


def load_env_file(env_file) -> dict[str, str]:
    """
    Read KEY=VALUE pairs from a .env file.

    Blank lines and comments are ignored and keys without a value are
    dropped. Literal \\t / \\n escapes are converted in unquoted and
    single-quoted values; double-quoted values keep dotenv's own decoding.

    Args:
        env_file: Path to the .env file

    Returns:
        Mapping of variable name to value (empty if the file does not exist)
    """
    path = Path(env_file)
    if not path.is_file():
        return {}

    values = dotenv_values(path)
    decoded = _double_quoted_keys(path)
    return {
        key: value if key in decoded else _unescape(value)
        for key, value in values.items()
        if key and value is not None
    }


@dataclass(frozen=True)
class Settings:
    """Resolved settings for a single run."""

    csv_separator: str
    input_csv_file: Path
    output_csv_file: Path
    csv_has_headers: bool = False
    skip_initial_lines: int = 0

    # Perplexity
    perplexity_api_key: Optional[str] = None
    perplexity_model: str = DEFAULT_PERPLEXITY_MODEL
    perplexity_system_prompt: str = DEFAULT_PERPLEXITY_SYSTEM_PROMPT

    # GPT
    gpt_api_key: Optional[str] = None
    gpt_model: str = DEFAULT_GPT_MODEL
    gpt_system_prompt: str = DEFAULT_GPT_SYSTEM_PROMPT

    # Logging / transport
    log_level: str = 'INFO'
    log_file: Optional[Path] = None
    request_timeout: Optional[float] = None

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        env_file=DEFAULT_ENV_FILE,
    ) -> 'Settings':
        """
        Build settings from the environment.

        Values read from env_file take precedence over environ.

        Args:
            environ: Variables to read (defaults to os.environ)
            env_file: Optional .env file path, None to skip it

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If a required variable is missing or a value
                cannot be parsed
        """
        env = dict(os.environ if environ is None else environ)
        if env_file is not None:
            env.update(load_env_file(env_file))

        missing = [name for name in REQUIRED_VARIABLES if name not in env]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )

        separator = env['CSV_SEPARATOR']
        if len(separator) != 1:
            raise ConfigurationError(
                f'CSV_SEPARATOR must be a single character, got {separator!r}'
            )

        skip_lines = _parse_int(env.get('SKIP_INITIAL_LINES', '0'), 'SKIP_INITIAL_LINES')
        if skip_lines < 0:
            raise ConfigurationError('SKIP_INITIAL_LINES must not be negative')

        log_level = env.get('LOG_LEVEL', 'INFO').upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(f'LOG_LEVEL is not a valid level name: {log_level!r}')
        if logging.getLevelName(log_level) > logging.ERROR:
            raise ConfigurationError(
                f'LOG_LEVEL must not be above ERROR, got {log_level!r}'
            )

        timeout = None
        if env.get('REQUEST_TIMEOUT'):
            try:
                timeout = float(env['REQUEST_TIMEOUT'])
            except ValueError:
                raise ConfigurationError(
                    f"REQUEST_TIMEOUT must be a number, got {env['REQUEST_TIMEOUT']!r}"
                ) from None

        return cls(
            csv_separator=separator,
            input_csv_file=Path(env['INPUT_CSV_FILE']),
            output_csv_file=Path(env['OUTPUT_CSV_FILE']),
            csv_has_headers=env.get('CSV_HAS_HEADERS', 'false') == 'true',
            skip_initial_lines=skip_lines,
            perplexity_api_key=env.get('PERPLEXITY_API_KEY'),
            perplexity_model=env.get('PERPLEXITY_MODEL', DEFAULT_PERPLEXITY_MODEL),
            perplexity_system_prompt=env.get(
                'PERPLEXITY_SYSTEM_PROMPT', DEFAULT_PERPLEXITY_SYSTEM_PROMPT
            ),
            gpt_api_key=env.get('GPT_API_KEY'),
            gpt_model=env.get('GPT_MODEL_NAME', DEFAULT_GPT_MODEL),
            gpt_system_prompt=env.get('GPT_SYSTEM_PROMPT', DEFAULT_GPT_SYSTEM_PROMPT),
            log_level=log_level,
            log_file=Path(env['LOG_FILE']) if env.get('LOG_FILE') else None,
            request_timeout=timeout,
        )

    def ensure_output_available(self) -> None:
        """
        Refuse to run when the output file already exists.

        Raises:
            OutputExistsError: If output_csv_file is present on disk
        """
        if self.output_csv_file.exists():
            raise OutputExistsError(self.output_csv_file)


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f'{name} must be an integer, got {value!r}') from None
