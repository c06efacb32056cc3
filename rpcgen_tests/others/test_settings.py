# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from rpcgen.conf import DEFAULT_SETTINGS_FILEPATH
from rpcgen.conf.get_settings import CONFIG_YAML_ENV_VAR, get_global_settings, get_settings_source
from rpcgen.conf.settings import GeneratorSettings

FIXTURES_DIR = Path(__file__).parent.parent / 'fixtures'


def test_default_settings() -> None:
    settings = GeneratorSettings.from_yaml(filepath=DEFAULT_SETTINGS_FILEPATH)
    assert settings == GeneratorSettings()
    assert settings.RUNTIME_PACKAGE == 'xmlrpc'
    assert settings.ERROR_INTERFACE == 'Error'
    assert settings.DEFAULT_FAULT_CODE == 500
    assert settings.DEFAULT_NAME_PREFIX == 'var'
    assert settings.FAILURE_NAME == 'err'


def test_custom_settings_from_yaml() -> None:
    settings = GeneratorSettings.from_yaml(filepath=str(FIXTURES_DIR / 'custom_settings.yml'))
    assert settings == GeneratorSettings(RUNTIME_PACKAGE='rpc', DEFAULT_FAULT_CODE=400)


def test_extended_settings_from_yaml() -> None:
    settings = GeneratorSettings.from_yaml(filepath=str(FIXTURES_DIR / 'extends_settings.yml'))
    assert settings == GeneratorSettings(RUNTIME_PACKAGE='rpc', DEFAULT_FAULT_CODE=400, ERROR_INTERFACE='CodedError')


@pytest.mark.parametrize(
    ['filename', 'error'],
    [
        ('invalid_settings.yml', "Value error, 'not-a-package' is not a valid identifier"),
        ('unknown_settings.yml', 'Extra inputs are not permitted'),
    ]
)
def test_invalid_settings_from_yaml(filename: str, error: str) -> None:
    with pytest.raises(ValidationError) as e:
        GeneratorSettings.from_yaml(filepath=str(FIXTURES_DIR / filename))
    assert e.value.errors()[0]['msg'] == error


def test_settings_are_frozen() -> None:
    settings = GeneratorSettings()
    with pytest.raises(ValidationError):
        settings.DEFAULT_FAULT_CODE = 400  # type: ignore[misc]


def test_global_settings() -> None:
    with patch('rpcgen.conf.get_settings._settings_singleton', None):
        settings = get_global_settings()
        assert get_global_settings() is settings
        assert get_settings_source() == os.environ.get(CONFIG_YAML_ENV_VAR, DEFAULT_SETTINGS_FILEPATH)


def test_global_settings_from_env() -> None:
    custom_filepath = str(FIXTURES_DIR / 'custom_settings.yml')
    with patch('rpcgen.conf.get_settings._settings_singleton', None):
        with patch.dict(os.environ, {CONFIG_YAML_ENV_VAR: custom_filepath}):
            settings = get_global_settings()
            assert settings.RUNTIME_PACKAGE == 'rpc'
            assert get_settings_source() == custom_filepath

        # loading a different file afterwards is refused
        with pytest.raises(Exception) as e:
            get_global_settings()
        assert str(e.value) == 'loading config twice with a different file'


def test_settings_source_before_load() -> None:
    with patch('rpcgen.conf.get_settings._settings_singleton', None):
        with pytest.raises(AssertionError):
            get_settings_source()
