import datetime as dt
import unittest

import typeshape as ts
from typeshape.context import Context, score
from typeshape.result import Err, Ok
from tests._util import User


class PipelineTests(unittest.TestCase):
    def test_required_missing_is_one_issue_at_root(self):
        result = ts.parse(ts.string(), None)
        self.assertFalse(result.ok)
        self.assertEqual(len(result.issues), 1)
        self.assertEqual(result.issues[0].path, ())
        self.assertEqual(result.issues[0].message, "is required")

    def test_optional_missing_halts_without_effects(self):
        calls = []
        descriptor = ts.string().optional().transform(lambda v: calls.append(v) or v)
        self.assertEqual(ts.parse(descriptor, None), Ok(None))
        self.assertEqual(calls, [])

    def test_literal_default_is_copied_per_parse(self):
        descriptor = ts.list_(ts.integer()).with_default([1, 2])
        first = ts.parse(descriptor, None).value
        first.append(3)
        self.assertEqual(ts.parse(descriptor, None).value, [1, 2])

    def test_default_still_goes_through_validation(self):
        result = ts.parse(ts.integer(min=5).with_default(1), None)
        self.assertEqual([i.message for i in result.issues], ["must be at least 5, got 1"])

    def test_supplier_default(self):
        self.assertEqual(ts.parse(ts.integer().with_default(lambda: 7), None), Ok(7))
        self.assertEqual(ts.parse(ts.integer().with_default(lambda: Ok(8)), None), Ok(8))

    def test_ref_default(self):
        descriptor = ts.integer().with_default(ts.Ref("tests._util:constant_bound"))
        self.assertEqual(ts.parse(descriptor, None), Ok(10))

    def test_relative_default(self):
        before = dt.datetime.now(dt.timezone.utc).replace(microsecond=0)
        value = ts.parse(ts.date_time().with_default((1, "day", "from_now")), None).value
        self.assertGreaterEqual(value, before + dt.timedelta(days=1))
        self.assertIsNotNone(value.tzinfo)

    def test_default_resolving_to_none_is_fatal(self):
        with self.assertRaisesRegex(ts.SchemaError, "default value cannot be None"):
            ts.parse(ts.integer().with_default(lambda: None), None)

    def test_default_supplier_returning_err_is_fatal(self):
        with self.assertRaises(ts.SchemaError):
            ts.parse(ts.integer().with_default(lambda: Err([])), None)

    def test_nested_paths_are_absolute(self):
        descriptor = ts.mapping({"users": ts.list_(ts.mapping({"email": ts.email()}))})
        result = ts.parse(descriptor, {"users": [{"email": "a@b.com"}, {"email": "nope"}]})
        self.assertEqual([i.path for i in result.issues], [("users", 1, "email")])

    def test_partial_parse_keeps_partial_output_and_scores(self):
        descriptor = ts.list_(ts.integer())
        ctx = Context.new(descriptor, ["a", 2, "c"]).parse()
        self.assertFalse(ctx.valid)
        self.assertEqual(ctx.output, [2])
        self.assertEqual(ctx.score, 2)
        self.assertEqual([i.path for i in ctx.issues], [(0,), (2,)])

    def test_unknown_parse_option_is_rejected(self):
        with self.assertRaises(ts.SchemaError):
            ts.parse(ts.string(), "x", strict=True)
        with self.assertRaises(ts.SchemaError):
            ts.parse(ts.string(), "x", coerce="sometimes")


class ContextBookkeepingTests(unittest.TestCase):
    def test_append_nothing_keeps_context_valid(self):
        ctx = Context.new(ts.string(), "x")
        self.assertIs(ctx.append_issues([]), ctx)
        self.assertTrue(ctx.valid)

    def test_add_issue_uses_context_path(self):
        ctx = Context.new(ts.string(), "x").put_path(["a", 1]).add_issue("is taken")
        self.assertFalse(ctx.valid)
        self.assertEqual(ctx.issues[0].path, ("a", 1))
        self.assertEqual(ctx.unwrap().issues[0].message, "is taken")

    def test_inc_score(self):
        ctx = Context.new(ts.string(), "x")
        self.assertIs(ctx.inc_score(0), ctx)
        self.assertEqual(ctx.inc_score().inc_score(2).score, 3)


class ScoreTests(unittest.TestCase):
    def test_structural_estimate(self):
        self.assertEqual(score(None), 0)
        self.assertEqual(score("x"), 1)
        self.assertEqual(score([1, 2]), 3)
        self.assertEqual(score({"a": 1, "b": [1]}), 4)
        self.assertEqual(score(User(name="a", age=1)), 3)


if __name__ == "__main__":
    unittest.main()
