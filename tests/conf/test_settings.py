import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from salevault.conf import localnet
from salevault.conf.get_settings import CONFIG_FILE_ENV, get_global_settings, reset_global_settings
from salevault.conf.settings import U256_MAX, VaultSettings


class VaultSettingsTestCase(unittest.TestCase):
    def test_defaults(self):
        settings = VaultSettings()
        self.assertEqual(settings.NATIVE_TOKEN_UID, b"\x00")
        self.assertEqual(settings.MAX_AMOUNT, U256_MAX)

    def test_validation(self):
        with self.assertRaises(ValidationError):
            VaultSettings(NATIVE_TOKEN_UID=b"")
        with self.assertRaises(ValidationError):
            VaultSettings(MAX_AMOUNT=0)
        with self.assertRaises(ValidationError):
            VaultSettings(DECIMAL_PLACES=-1)

    def test_frozen(self):
        settings = VaultSettings()
        with self.assertRaises(ValidationError):
            settings.NETWORK_NAME = "mainnet"


class GetSettingsTestCase(unittest.TestCase):
    def setUp(self):
        reset_global_settings()

    def tearDown(self):
        reset_global_settings()

    def test_load_and_cache(self):
        with patch.dict(os.environ, {CONFIG_FILE_ENV: "salevault.conf.localnet"}):
            settings = get_global_settings()
            self.assertIs(settings, localnet.SETTINGS)
            self.assertIs(get_global_settings(), settings)

    def test_cannot_switch_config(self):
        with patch.dict(os.environ, {CONFIG_FILE_ENV: "salevault.conf.localnet"}):
            get_global_settings()
        with patch.dict(os.environ, {CONFIG_FILE_ENV: "salevault.conf.other"}):
            with self.assertRaises(RuntimeError):
                get_global_settings()

    def test_module_without_settings(self):
        with patch.dict(os.environ, {CONFIG_FILE_ENV: "salevault.conf.settings"}):
            with self.assertRaises(ValueError):
                get_global_settings()
