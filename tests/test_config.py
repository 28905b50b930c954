import os
import unittest
from unittest import mock

from product_schema.config import ENV_VAR, ServiceConfig, load_config
from tests._util import tmp_json


class ConfigTests(unittest.TestCase):
    def test_bundled_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(ENV_VAR, None)
            self.assertEqual(load_config(), ServiceConfig())

    def test_explicit_path(self):
        p = tmp_json({"default_limit": 25, "log_level": "DEBUG"})
        try:
            config = load_config(p)
        finally:
            p.unlink(missing_ok=True)
        self.assertEqual(config.default_limit, 25)
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.products_collection, "products")

    def test_env_var_path(self):
        p = tmp_json({"leads_collection": "inbound"})
        try:
            with mock.patch.dict(os.environ, {ENV_VAR: str(p)}):
                self.assertEqual(load_config().leads_collection, "inbound")
        finally:
            p.unlink(missing_ok=True)

    def test_invalid_values_rejected(self):
        for raw, message in (
            ({"default_limit": 0}, "must be at least 1"),
            ({"default_limit": "10"}, "must be a number"),
            ({"default_limit": 2.5}, "field 'default_limit' must be a whole number"),
            ({"log_level": "LOUD"}, "must be one of"),
            ({"colour": "blue"}, "unknown field 'colour'"),
        ):
            p = tmp_json(raw)
            try:
                with self.assertRaisesRegex(ValueError, message):
                    load_config(p)
            finally:
                p.unlink(missing_ok=True)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/tmp/does-not-exist-config.json")

    def test_whole_float_limit_becomes_int(self):
        config = ServiceConfig.from_mapping({"default_limit": 20.0})
        self.assertEqual(config.default_limit, 20)
        self.assertIsInstance(config.default_limit, int)
