"""Unit tests for settings loading."""
from pathlib import Path

import pytest

from csv_llm_fill.config.settings import Settings, load_env_file
from csv_llm_fill.errors import ConfigurationError, OutputExistsError


class TestSettingsFromEnv:
    """Test resolving settings from environment variables."""

    def test_defaults(self, base_env):
        """Optional settings fall back to documented defaults."""
        settings = Settings.from_env(base_env, env_file=None)

        assert settings.csv_separator == ','
        assert settings.input_csv_file == Path(base_env['INPUT_CSV_FILE'])
        assert settings.csv_has_headers is False
        assert settings.skip_initial_lines == 0
        assert settings.perplexity_api_key is None
        assert settings.perplexity_model == 'llama-3.1-sonar-small-128k-online'
        assert settings.perplexity_system_prompt == 'Be precise and concise.'
        assert settings.gpt_model == 'gpt-4o'
        assert settings.gpt_system_prompt == 'You are a helpful assistant.'
        assert settings.request_timeout is None

    def test_overrides(self, base_env):
        """Environment values override defaults."""
        env = {
            **base_env,
            'CSV_HAS_HEADERS': 'true',
            'SKIP_INITIAL_LINES': '2',
            'GPT_API_KEY': 'sk-test',
            'GPT_MODEL_NAME': 'gpt-4o-mini',
            'REQUEST_TIMEOUT': '12.5',
            'LOG_LEVEL': 'debug',
        }
        settings = Settings.from_env(env, env_file=None)

        assert settings.csv_has_headers is True
        assert settings.skip_initial_lines == 2
        assert settings.gpt_api_key == 'sk-test'
        assert settings.gpt_model == 'gpt-4o-mini'
        assert settings.request_timeout == 12.5
        assert settings.log_level == 'DEBUG'

    def test_headers_flag_only_accepts_literal_true(self, base_env):
        """Any value other than 'true' disables headers."""
        settings = Settings.from_env({**base_env, 'CSV_HAS_HEADERS': 'yes'}, env_file=None)
        assert settings.csv_has_headers is False

    def test_missing_required_variables(self):
        """Every missing required variable is named in the error."""
        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_env({'CSV_SEPARATOR': ','}, env_file=None)

        message = str(exc_info.value)
        assert 'INPUT_CSV_FILE' in message
        assert 'OUTPUT_CSV_FILE' in message
        assert 'CSV_SEPARATOR' not in message

    def test_separator_must_be_single_character(self, base_env):
        with pytest.raises(ConfigurationError):
            Settings.from_env({**base_env, 'CSV_SEPARATOR': '||'}, env_file=None)

    def test_invalid_skip_lines(self, base_env):
        with pytest.raises(ConfigurationError):
            Settings.from_env({**base_env, 'SKIP_INITIAL_LINES': 'three'}, env_file=None)
        with pytest.raises(ConfigurationError):
            Settings.from_env({**base_env, 'SKIP_INITIAL_LINES': '-1'}, env_file=None)

    def test_invalid_log_level(self, base_env):
        with pytest.raises(ConfigurationError, match='LOG_LEVEL'):
            Settings.from_env({**base_env, 'LOG_LEVEL': 'chatty'}, env_file=None)

    @pytest.mark.parametrize('level', ['CRITICAL', 'critical'])
    def test_log_level_above_error_rejected(self, base_env, level):
        """Levels that would hide error messages are refused."""
        with pytest.raises(ConfigurationError, match='above ERROR'):
            Settings.from_env({**base_env, 'LOG_LEVEL': level}, env_file=None)

    def test_log_level_error_accepted(self, base_env):
        settings = Settings.from_env({**base_env, 'LOG_LEVEL': 'error'}, env_file=None)
        assert settings.log_level == 'ERROR'

    def test_settings_are_immutable(self, base_env):
        settings = Settings.from_env(base_env, env_file=None)
        with pytest.raises(AttributeError):
            settings.csv_separator = ';'


class TestEnvFile:
    """Test .env file handling."""

    def test_escapes_are_interpreted(self, tmp_path):
        """Literal \\t and \\n in values become tab and newline."""
        env_file = tmp_path / '.env'
        env_file.write_text(
            '# comment\n'
            '\n'
            'CSV_SEPARATOR=\\t\n'
            'GPT_SYSTEM_PROMPT=Line one\\nLine two\n',
            encoding='utf-8',
        )

        values = load_env_file(env_file)

        assert values['CSV_SEPARATOR'] == '\t'
        assert values['GPT_SYSTEM_PROMPT'] == 'Line one\nLine two'

    def test_double_quoted_values_are_decoded_once(self, tmp_path):
        """Double-quoted values keep dotenv's decoding and are not unescaped again."""
        env_file = tmp_path / '.env'
        env_file.write_text(
            'CSV_SEPARATOR=,\n'
            'INPUT_CSV_FILE="C:\\\\data\\\\notes.csv"\n'
            'OUTPUT_CSV_FILE=out.csv\n'
            'GPT_SYSTEM_PROMPT="Write \\\\n literally"\n'
            "PERPLEXITY_SYSTEM_PROMPT='Tab\\there'\n",
            encoding='utf-8',
        )

        values = load_env_file(env_file)
        settings = Settings.from_env({}, env_file=env_file)

        assert values['INPUT_CSV_FILE'] == 'C:\\data\\notes.csv'
        assert values['GPT_SYSTEM_PROMPT'] == 'Write \\n literally'
        assert values['PERPLEXITY_SYSTEM_PROMPT'] == 'Tab\there'
        assert str(settings.input_csv_file).endswith('notes.csv')
        assert '\n' not in str(settings.input_csv_file)

    def test_missing_env_file(self, tmp_path):
        assert load_env_file(tmp_path / 'absent.env') == {}

    def test_env_file_takes_precedence(self, tmp_path, base_env):
        """Values from the .env file win over the process environment."""
        env_file = tmp_path / '.env'
        env_file.write_text('CSV_SEPARATOR=;\nPERPLEXITY_API_KEY=pplx-file\n', encoding='utf-8')

        settings = Settings.from_env(
            {**base_env, 'PERPLEXITY_API_KEY': 'pplx-env'},
            env_file=env_file,
        )

        assert settings.csv_separator == ';'
        assert settings.perplexity_api_key == 'pplx-file'

    def test_env_file_supplies_required_values(self, tmp_path):
        env_file = tmp_path / '.env'
        env_file.write_text(
            'CSV_SEPARATOR=,\nINPUT_CSV_FILE=in.csv\nOUTPUT_CSV_FILE=out.csv\n',
            encoding='utf-8',
        )

        settings = Settings.from_env({}, env_file=env_file)

        assert settings.input_csv_file == Path('in.csv')
        assert settings.output_csv_file == Path('out.csv')


class TestOutputGuard:
    """Test the output-exists startup guard."""

    def test_output_available(self, base_env):
        settings = Settings.from_env(base_env, env_file=None)
        settings.ensure_output_available()

    def test_output_exists(self, base_env):
        Path(base_env['OUTPUT_CSV_FILE']).write_text('already here\n', encoding='utf-8')
        settings = Settings.from_env(base_env, env_file=None)

        with pytest.raises(OutputExistsError) as exc_info:
            settings.ensure_output_available()

        assert 'already exists' in str(exc_info.value)
