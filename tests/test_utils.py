import dataclasses
import datetime as dt
import re
import unittest
from decimal import Decimal

import pandas as pd

import typeshape as ts
from typeshape import utils
from tests._util import Color, User


class NumberParsingTests(unittest.TestCase):
    def test_parse_integer_is_strict(self):
        self.assertEqual(utils.parse_integer("-12"), -12)
        for bad in ("1.0", " 1", "1e3", "", 1):
            self.assertIsNone(utils.parse_integer(bad), bad)

    def test_parse_float_rejects_specials(self):
        self.assertEqual(utils.parse_float("1e3"), 1000.0)
        self.assertEqual(utils.parse_float(".5"), 0.5)
        for bad in ("nan", "inf", "1,5", "abc"):
            self.assertIsNone(utils.parse_float(bad), bad)

    def test_round_half_away(self):
        self.assertEqual(utils.round_half_away(0.5), 1)
        self.assertEqual(utils.round_half_away(-0.5), -1)
        self.assertEqual(utils.round_half_away(Decimal("2.5")), 3)


class LazyValueTests(unittest.TestCase):
    def test_ref_loads_attribute(self):
        self.assertEqual(ts.Ref("tests._util:constant_bound")(), 10)
        self.assertIs(ts.Ref("tests._util:Color.RED").load(), Color.RED)
        with self.assertRaises(ts.SchemaError):
            ts.Ref("no colon here")

    def test_relative_tuples(self):
        self.assertTrue(utils.is_relative((2, "week", "from_now")))
        self.assertFalse(utils.is_relative((2, "fortnight", "from_now")))
        self.assertFalse(utils.is_relative((True, "day", "from_now")))

    def test_shift_clamps_month_end(self):
        start = dt.datetime(2024, 1, 31, tzinfo=dt.timezone.utc)
        self.assertEqual(utils.shift(start, 1, "month"), dt.datetime(2024, 2, 29, tzinfo=dt.timezone.utc))
        self.assertEqual(utils.shift(start, -1, "year").year, 2023)
        self.assertEqual(utils.shift(start, 3, "hour").hour, 3)

    def test_resolve(self):
        self.assertEqual(utils.resolve(5), 5)
        self.assertEqual(utils.resolve(lambda: ts.Ok(6)), 6)
        self.assertIs(utils.resolve(dict), dict)

    def test_arity(self):
        self.assertEqual(utils.arity(lambda v: v), 1)
        self.assertEqual(utils.arity(lambda v, ctx: v), 2)
        self.assertEqual(utils.arity(lambda v, ctx=None: v), 1)
        self.assertEqual(utils.arity(ts.Ref("tests._util:is_even")), 1)


class KeyAndTypeTests(unittest.TestCase):
    def test_canonical_key_and_lookup(self):
        self.assertEqual(utils.canonical_key(Color.RED), "red")
        self.assertEqual(utils.lookup({"red": 1}, Color.RED), 1)
        self.assertEqual(utils.lookup({Color.GREEN: 2}, "green"), 2)
        self.assertIsNone(utils.lookup({}, "x"))
        self.assertTrue(utils.same_key(Color.RED, "red"))

    def test_same_key_keeps_scalar_types_apart(self):
        self.assertFalse(utils.same_key(1, "1"))
        self.assertFalse(utils.same_key(True, 1))
        self.assertTrue(utils.same_key(1, 1))
        self.assertTrue(utils.same_key("red", Color.RED))

    def test_typeof(self):
        self.assertEqual(utils.typeof(None), "null")
        self.assertEqual(utils.typeof(True), "boolean")
        self.assertEqual(utils.typeof(1), "integer")
        self.assertEqual(utils.typeof(1, "number"), "number")
        self.assertEqual(utils.typeof({}), "map")
        self.assertEqual(utils.typeof(Color.RED, "atom"), "atom")
        self.assertEqual(utils.typeof(len), "function")

    def test_coerce_flag(self):
        self.assertFalse(utils.coerce_flag({}))
        self.assertEqual(utils.coerce_flag({"coerce": "unsafe"}), "unsafe")
        with self.assertRaises(ts.SchemaError):
            utils.coerce_flag({"coerce": 1.5})


class JsonSafeTests(unittest.TestCase):
    def test_nested_values(self):
        value = {
            Color.RED: [Decimal("1.5"), dt.date(2024, 1, 2)],
            "when": dt.datetime(2024, 1, 2, tzinfo=dt.timezone.utc),
            "re": re.compile("^a"),
            "user": User(name="a", age=1),
        }
        self.assertEqual(
            utils._json_safe(value),
            {
                "red": [1.5, "2024-01-02"],
                "when": "2024-01-02T00:00:00Z",
                "re": "^a",
                "user": dataclasses.asdict(User(name="a", age=1)),
            },
        )

    def test_dataframe_examples(self):
        df = pd.DataFrame({"a": [1, 2]})
        self.assertEqual(utils._json_safe(df), [{"a": 1}, {"a": 2}])


if __name__ == "__main__":
    unittest.main()
