import unittest

import typeshape as ts
from tests._util import Color, messages, ok, summary


class UnionTests(unittest.TestCase):
    def test_first_valid_alternative_wins(self):
        descriptor = ts.union([ts.integer(), ts.string()])
        self.assertEqual(ok(descriptor, 3), 3)
        self.assertEqual(ok(descriptor, "3"), "3")
        self.assertEqual(ok(descriptor, "3", coerce=True), 3)

    def test_tie_reports_last_alternative(self):
        descriptor = ts.union([ts.string(), ts.integer()])
        self.assertEqual(messages(descriptor, 3.14), ["expected type integer, got float"])

    def test_furthest_alternative_is_reported(self):
        descriptor = ts.union([
            ts.mapping({"a": ts.integer(), "b": ts.integer()}),
            ts.integer(),
        ])
        self.assertEqual(summary(descriptor, {"a": 1, "b": "x"}), {"b": ["expected type integer, got string"]})

    def test_alternatives_run_their_own_effects(self):
        descriptor = ts.union([
            ts.integer().refine(lambda v: v > 0),
            ts.string().transform(str.upper),
        ])
        self.assertEqual(ok(descriptor, "ab"), "AB")
        self.assertEqual(messages(descriptor, -1), ["expected type string, got integer"])

    def test_needs_two_descriptors(self):
        with self.assertRaises(ts.SchemaError):
            ts.union([ts.string()])
        with self.assertRaises(ts.SchemaError):
            ts.union([ts.string(), str])

    def test_json_schema(self):
        self.assertEqual(
            ts.json_schema(ts.union([ts.string(), ts.integer()])),
            {"anyOf": [{"type": "string"}, {"type": "integer"}]},
        )


class DiscriminatedUnionTests(unittest.TestCase):
    def setUp(self):
        self.pet = ts.discriminated_union("type", [
            ts.mapping({"type": ts.literal("dog"), "barks": ts.boolean()}),
            ts.mapping({"type": ts.literal("cat"), "lives": ts.integer(max=9)}),
        ])

    def test_dispatch_on_discriminator(self):
        self.assertEqual(ok(self.pet, {"type": "cat", "lives": 9}), {"type": "cat", "lives": 9})
        self.assertEqual(summary(self.pet, {"type": "dog", "barks": "loud"}),
                         {"barks": ["expected type boolean, got string"]})

    def test_unknown_tag(self):
        self.assertEqual(
            messages(self.pet, {"type": "bird"}),
            ["expected field type to be one of 'dog' or 'cat', got 'bird'"],
        )
        self.assertEqual(
            messages(self.pet, {}),
            ["expected field type to be one of 'dog' or 'cat', got null"],
        )

    def test_discriminator_does_not_match_across_types(self):
        descriptor = ts.discriminated_union("v", [
            ts.mapping({"v": ts.literal(1), "a": ts.string()}),
            ts.mapping({"v": ts.literal(2), "b": ts.string()}),
        ])
        result = ts.parse(descriptor, {"v": "1", "a": "x"})
        self.assertEqual(
            [(i.path, i.message) for i in result.issues],
            [((), "expected field v to be one of 1 or 2, got '1'")],
        )

    def test_not_a_mapping(self):
        self.assertEqual(messages(self.pet, "dog"), ["expected type map, got string"])

    def test_enum_discriminator_matches_canonical_form(self):
        descriptor = ts.discriminated_union(Color.RED, [
            ts.mapping({Color.RED: ts.literal("a"), "n": ts.integer()}),
            ts.mapping({"red": ts.literal("b")}),
        ])
        self.assertEqual(ok(descriptor, {"red": "b"}), {"red": "b"})

    def test_construction_errors(self):
        with self.assertRaisesRegex(ts.SchemaError, "only accepts mapping descriptors"):
            ts.discriminated_union("type", [ts.mapping({"type": ts.literal("a")}), ts.string()])
        with self.assertRaisesRegex(ts.SchemaError, "must exist in all mapping descriptors"):
            ts.discriminated_union("type", [ts.mapping({"type": ts.literal("a")}), ts.mapping({})])
        with self.assertRaisesRegex(ts.SchemaError, "must be a literal"):
            ts.discriminated_union("type", [ts.mapping({"type": ts.literal("a")}), ts.mapping({"type": ts.string()})])

    def test_json_schema(self):
        schema = ts.json_schema(self.pet)
        self.assertEqual(schema["discriminator"], {"propertyName": "type"})
        self.assertEqual(schema["oneOf"][0]["properties"]["type"], {"const": "dog"})


if __name__ == "__main__":
    unittest.main()
