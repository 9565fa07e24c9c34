import unittest

import typeshape as ts
from typeshape.issue import issue
from typeshape.result import Err, Ok
from tests._util import messages, ok


class TransformTests(unittest.TestCase):
    def test_transforms_run_in_order(self):
        descriptor = ts.string().transform(str.upper).transform(lambda v: v + "!")
        self.assertEqual(ok(descriptor, "hi"), "HI!")

    def test_transform_by_reference(self):
        descriptor = ts.integer().transform(ts.Ref("builtins:str"))
        self.assertEqual(ok(descriptor, 5), "5")

    def test_transform_only_runs_after_successful_parse(self):
        calls = []
        descriptor = ts.integer().transform(lambda v: calls.append(v) or v)
        messages(descriptor, "x")
        self.assertEqual(calls, [])

    def test_raised_exceptions_propagate(self):
        descriptor = ts.integer().transform(lambda v: 1 / 0)
        with self.assertRaises(ZeroDivisionError):
            ts.parse(descriptor, 1)

    def test_non_callable_is_rejected_at_build_time(self):
        with self.assertRaises(ts.SchemaError):
            ts.integer().transform(42)


class RefineTests(unittest.TestCase):
    def test_boolean_outcomes(self):
        descriptor = ts.integer().refine(lambda v: v % 2 == 0)
        self.assertEqual(ok(descriptor, 4), 4)
        self.assertEqual(messages(descriptor, 3), ["is invalid"])

    def test_custom_error_template(self):
        descriptor = ts.integer().refine(ts.Ref("tests._util:is_even"), error="must be even, got %{actual}")
        self.assertEqual(messages(descriptor, 3), ["must be even, got 3"])

    def test_continue_and_ok(self):
        self.assertEqual(ok(ts.integer().refine(lambda v: ts.Continue()), 1), 1)
        self.assertEqual(ok(ts.integer().refine(lambda v: Ok(v)), 1), 1)

    def test_fail_with_message(self):
        descriptor = ts.integer().refine(lambda v: ts.Fail("must be below %{limit}", {"limit": 3}))
        self.assertEqual(messages(descriptor, 5), ["must be below 3"])

    def test_exception_instance_becomes_issue(self):
        descriptor = ts.string().refine(lambda v: ValueError("already taken"))
        self.assertEqual(messages(descriptor, "bob"), ["already taken"])

    def test_err_issues_are_rooted_at_the_value(self):
        descriptor = ts.mapping({
            "password": ts.string().refine(lambda v: Err([issue(["strength"], "too weak")])),
        })
        result = ts.parse(descriptor, {"password": "abc"})
        self.assertEqual([(i.path, i.message) for i in result.issues], [(("password", "strength"), "too weak")])

    def test_empty_err_uses_own_template(self):
        self.assertEqual(messages(ts.integer().refine(lambda v: Err([])), 1), ["is invalid"])

    def test_two_argument_refine_receives_context(self):
        def check(value, ctx):
            if value == "root":
                return ctx.add_issue("is reserved")
            return ctx

        descriptor = ts.mapping({"login": ts.string().refine(check)})
        self.assertEqual(ok(descriptor, {"login": "alice"}), {"login": "alice"})
        result = ts.parse(descriptor, {"login": "root"})
        self.assertEqual([(i.path, i.message) for i in result.issues], [(("login",), "is reserved")])

    def test_fail_with_reports_context_issues(self):
        def check(value, ctx):
            return ts.FailWith(ctx.add_issue("first").add_issue("second"))

        self.assertEqual(messages(ts.integer().refine(check), 1), ["first", "second"])

    def test_failed_refine_stops_later_effects(self):
        calls = []
        descriptor = (
            ts.integer()
            .refine(lambda v: False)
            .transform(lambda v: calls.append(v) or v)
        )
        messages(descriptor, 1)
        self.assertEqual(calls, [])

    def test_bad_return_value_is_a_programming_error(self):
        with self.assertRaises(TypeError):
            ts.parse(ts.integer().refine(lambda v: "yes"), 1)


if __name__ == "__main__":
    unittest.main()
