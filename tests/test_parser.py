import json
import tempfile
import unittest
from pathlib import Path

from product_schema import loader, parser


class ParserTests(unittest.TestCase):
    def setUp(self):
        self.schema = loader.load_schema("contact_lead.json")["schema"]
        self.base   = {
            "name":  "Jane Doe",
            "email": "jane@example.com",
            "age":   34,
        }

    def test_parse_mapping(self):
        out = parser.parse_input(self.base, schema=self.schema)
        self.assertEqual(out, self.base)
        self.assertIsNot(out, self.base)

    def test_parse_path(self):
        with tempfile.NamedTemporaryFile("w+", delete=False) as tmp:
            json.dump(self.base, tmp)
            tmp.flush()
            p = Path(tmp.name)
        try:
            self.assertEqual(parser.parse_input(p, schema=self.schema), self.base)
            self.assertEqual(parser.parse_input(str(p), schema=self.schema), self.base)
        finally:
            p.unlink(missing_ok=True)

    def test_parse_json_literal(self):
        literal = json.dumps(self.base)
        out = parser.parse_input(literal, schema=self.schema)
        self.assertEqual(out, self.base)

    def test_parse_cli_tokens(self):
        cli = [
            "--name",  "Jane Doe",
            "--email", "jane@example.com",
            "--age",   "34",
        ]
        out = parser.parse_input(cli, schema=self.schema)
        self.assertEqual(out, self.base)
        self.assertIsInstance(out["age"], int)

    def test_parse_cli_string(self):
        out = parser.parse_input("--name 'Jane Doe' --score 0.5", schema=self.schema)
        self.assertEqual(out, {"name": "Jane Doe", "score": 0.5})

    def test_number_flag_keeps_floats(self):
        out = parser.parse_input(["--age", "34.5"], schema=self.schema)
        self.assertEqual(out["age"], 34.5)

    def test_boolean_flag(self):
        out_with_flag = parser.parse_input(["--subscribed"], schema=self.schema)
        self.assertIs(out_with_flag["subscribed"], True)

        out_without_flag = parser.parse_input([], schema=self.schema)
        self.assertNotIn("subscribed", out_without_flag)

    def test_composite_flags_take_json(self):
        cli = ["--interests", '["tech", "sales"]', "--user-info", '{"first_name": "Jane"}']
        out = parser.parse_input(cli, schema=self.schema)
        self.assertEqual(out["interests"], ["tech", "sales"])
        self.assertEqual(out["user_info"], {"first_name": "Jane"})

    def test_enum_becomes_choices(self):
        schema = {"stage": {"type": "string", "enum": ["new", "won"]}}
        self.assertEqual(parser.parse_input(["--stage", "won"], schema=schema), {"stage": "won"})
        with self.assertRaises(SystemExit):
            parser.parse_input(["--stage", "lost"], schema=schema)

    def test_unknown_argument_raises(self):
        with self.assertRaises(ValueError):
            parser.parse_input(["--unknown", "x"], schema=self.schema)

    def test_parse_unsupported_type_raises(self):
        with self.assertRaises(TypeError):
            parser.parse_input(12345, schema=self.schema)

class ParserConfigTests(unittest.TestCase):
    def setUp(self):
        self.schema = loader.load_schema("contact_lead.json")["schema"]
        self.base   = {"name": "Jane", "email": "jane@example.com"}

    def test_config_flag_overrides_everything(self):
        with tempfile.NamedTemporaryFile("w+", delete=False) as tmp:
            json.dump(self.base, tmp)
            tmp.flush()
            cfg = Path(tmp.name)

        try:
            cli = ["--config", str(cfg), "--name", "BAD"]  # ignored
            out = parser.parse_input(cli, schema=self.schema)
            self.assertEqual(out, self.base)
        finally:
            cfg.unlink(missing_ok=True)

    def test_config_file_not_found_raises(self):
        cli = ["--config", "/tmp/does-not-exist.json"]
        with self.assertRaises(FileNotFoundError):
            parser.parse_input(cli, schema=self.schema)

    def test_config_file_bad_json_raises(self):
        with tempfile.NamedTemporaryFile("w+", delete=False) as tmp:
            tmp.write("{ not json")
            tmp.flush()
            cfg = Path(tmp.name)
        try:
            cli = ["--config", str(cfg)]
            with self.assertRaises(json.JSONDecodeError):
                parser.parse_input(cli, schema=self.schema)
        finally:
            cfg.unlink(missing_ok=True)
