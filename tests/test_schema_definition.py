import unittest

from product_schema.errors import MalformedSchema, SchemaError
from product_schema.validator import validate_schema_definition
from tests._util import NESTED_SCHEMA, PERSON_SCHEMA


class WellFormedSchemaTests(unittest.TestCase):
    def test_reference_schemas_pass(self):
        self.assertEqual(list(validate_schema_definition(PERSON_SCHEMA)), ["name", "age"])
        validate_schema_definition(NESTED_SCHEMA)

    def test_every_kind_and_constraint(self):
        schema = {
            "s":  {"type": "string", "pattern": "^a", "minLength": 1, "maxLength": 3,
                   "enum": ["ab", "abc"], "description": "text"},
            "n":  {"type": "number", "minimum": 0, "maximum": 10.5},
            "d":  {"type": "double", "enum": [0.5, 1.5]},
            "b":  {"type": "bool"},
            "z":  {"type": "null"},
            "dt": {"type": "date"},
            "ts": {"type": "timestamp", "required": True},
            "o":  {"type": "object", "schema": {"x": {"type": "string"}}, "additionalProperties": False},
            "a":  {"type": "array", "items": {"type": "array", "items": "number"},
                   "minItems": 0, "maxItems": 5},
        }
        self.assertEqual(len(validate_schema_definition(schema)), 9)

    def test_empty_schema_is_valid(self):
        self.assertEqual(validate_schema_definition({}), {})


class MalformedSchemaTests(unittest.TestCase):
    def assertMalformed(self, schema, message_regex):
        with self.assertRaisesRegex(MalformedSchema, message_regex):
            validate_schema_definition(schema)

    def test_is_a_schema_error(self):
        self.assertTrue(issubclass(MalformedSchema, SchemaError))

    def test_schema_must_be_a_mapping(self):
        self.assertMalformed(["name"], r"^schema must be an object")

    def test_field_names(self):
        self.assertMalformed({"$set": {"type": "string"}}, r"field '\$set': field names must not start with '\$'")
        self.assertMalformed({"a.b": {"type": "string"}}, r"field names must not contain '\.'")
        self.assertMalformed({"": {"type": "string"}}, r"non-empty strings")

    def test_nested_field_names(self):
        schema = {"o": {"type": "object", "properties": {"$x": {"type": "string"}}}}
        self.assertMalformed(schema, r"^field 'o\.\$x'")

    def test_entry_must_be_a_mapping(self):
        self.assertMalformed({"a": ["string"]}, r"^field 'a': definition must be an object$")

    def test_type_is_required_and_recognised(self):
        self.assertMalformed({"a": {"required": True}}, r"missing 'type'")
        self.assertMalformed({"a": {"type": "uuid"}}, r"unsupported type 'uuid'")
        self.assertMalformed({"a": {"type": ["string"]}}, r"'type' must be a string")

    def test_array_requires_items(self):
        self.assertMalformed({"tags": {"type": "array"}}, r"^field 'tags': array type requires 'items'$")

    def test_nested_array_item_requires_items(self):
        self.assertMalformed({"m": {"type": "array", "items": "array"}}, r"^field 'm\[\]': array type requires")

    def test_item_spec_must_be_string_or_mapping(self):
        self.assertMalformed({"a": {"type": "array", "items": 3}}, r"'items' must be a type name or an object")
        self.assertMalformed({"a": {"type": "array", "items": "uuid"}}, r"^field 'a\[\]': unsupported type")

    def test_item_field_map_is_checked(self):
        schema = {"contacts": {"type": "array", "items": {"email": {"type": "strng"}}}}
        self.assertMalformed(schema, r"^field 'contacts\[\]\.email': unsupported type 'strng'$")

    def test_constraint_illegal_for_kind(self):
        self.assertMalformed({"n": {"type": "number", "pattern": "^x$"}},
                             r"constraint 'pattern' is not allowed for type 'number'")
        self.assertMalformed({"s": {"type": "string", "minimum": 1}},
                             r"constraint 'minimum' is not allowed for type 'string'")
        self.assertMalformed({"b": {"type": "boolean", "items": "string"}},
                             r"constraint 'items' is not allowed for type 'boolean'")

    def test_unknown_key(self):
        self.assertMalformed({"s": {"type": "string", "format": "email"}}, r"unknown key 'format'")

    def test_constraint_values(self):
        self.assertMalformed({"s": {"type": "string", "required": "yes"}}, r"'required' must be a boolean")
        self.assertMalformed({"s": {"type": "string", "pattern": "("}}, r"not a valid regular expression")
        self.assertMalformed({"s": {"type": "string", "minLength": -1}}, r"'minLength' must be a non-negative integer")
        self.assertMalformed({"s": {"type": "string", "maxLength": True}}, r"'maxLength' must be a non-negative integer")
        self.assertMalformed({"n": {"type": "number", "minimum": "0"}}, r"'minimum' must be a number")
        self.assertMalformed({"n": {"type": "number", "enum": []}}, r"'enum' must be a non-empty list")
        self.assertMalformed({"s": {"type": "string", "enum": [1, 2]}}, r"'enum' members must be strings$")
        self.assertMalformed({"n": {"type": "number", "enum": [True]}}, r"'enum' members must be numbers$")
        self.assertMalformed({"d": {"type": "double", "enum": [1.5, "2"]}}, r"'enum' members must be numbers$")
        self.assertMalformed({"o": {"type": "object", "properties": []}}, r"'properties' must be an object")

    def test_bounds_must_be_ordered(self):
        self.assertMalformed({"n": {"type": "number", "minimum": 5, "maximum": 1}},
                             r"'minimum' must not exceed 'maximum'")
        self.assertMalformed({"s": {"type": "string", "minLength": 5, "maxLength": 1}},
                             r"'minLength' must not exceed 'maxLength'")

    def test_first_violation_in_declaration_order(self):
        schema = {"good": {"type": "string"}, "first": {"type": "nope"}, "second": {"type": "array"}}
        self.assertMalformed(schema, r"^field 'first'")
