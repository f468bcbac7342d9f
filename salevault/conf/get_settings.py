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

import importlib
import logging
import os
from typing import Optional

from salevault.conf.settings import VaultSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = 'salevault.conf.localnet'
CONFIG_FILE_ENV = 'SALEVAULT_CONFIG_FILE'

_settings_singleton: Optional[VaultSettings] = None
_config_file: Optional[str] = None


def get_global_settings() -> VaultSettings:
    """Return the settings of the module named by SALEVAULT_CONFIG_FILE.

    The module must define a `SETTINGS` attribute. The result is cached; changing the environment variable
    afterwards is an error because the running code may already depend on the loaded values.
    """
    global _settings_singleton, _config_file

    config_file = os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)

    if _settings_singleton is not None:
        if _config_file != config_file:
            raise RuntimeError(f'settings already loaded from {_config_file}, cannot switch to {config_file}')
        return _settings_singleton

    module = importlib.import_module(config_file)
    settings = getattr(module, 'SETTINGS', None)
    if not isinstance(settings, VaultSettings):
        raise ValueError(f'{config_file} does not define a VaultSettings SETTINGS attribute')

    logger.debug('loaded settings from %s (network=%s)', config_file, settings.NETWORK_NAME)
    _settings_singleton = settings
    _config_file = config_file
    return settings


def reset_global_settings() -> None:
    """Forget the cached settings. Meant for tests."""
    global _settings_singleton, _config_file
    _settings_singleton = None
    _config_file = None
