import datetime as dt
import unittest

import typeshape as ts
from tests._util import messages, ok

UTC = dt.timezone.utc


class DateTimeTests(unittest.TestCase):
    def test_native_value(self):
        moment = dt.datetime(2024, 5, 1, 12, tzinfo=UTC)
        self.assertEqual(ok(ts.date_time(), moment), moment)
        self.assertEqual(messages(ts.date_time(), dt.date(2024, 5, 1)), ["expected type datetime, got date"])

    def test_iso_coercion_requires_an_offset(self):
        self.assertEqual(
            ok(ts.date_time(), "2024-05-01T12:00:00+00:00", coerce=True),
            dt.datetime(2024, 5, 1, 12, tzinfo=UTC),
        )
        self.assertEqual(
            messages(ts.date_time(), "2024-05-01T12:00:00", coerce=True),
            ["must be a valid ISO8601 date-time string"],
        )
        self.assertEqual(messages(ts.date_time(), "2024-05-01T12:00:00+00:00"), ["expected type datetime, got string"])

    def test_bounds(self):
        floor = dt.datetime(2024, 1, 1, tzinfo=UTC)
        descriptor = ts.date_time(min=floor)
        self.assertEqual(
            messages(descriptor, dt.datetime(2023, 12, 31, tzinfo=UTC)),
            ["must be after 2024-01-01T00:00:00Z"],
        )
        self.assertEqual(
            messages(ts.date_time(max=floor), dt.datetime(2024, 1, 2, tzinfo=UTC)),
            ["must be before 2024-01-01T00:00:00Z"],
        )

    def test_naive_values_compare_as_utc(self):
        descriptor = ts.date_time(min=dt.datetime(2024, 1, 1, tzinfo=UTC))
        naive = dt.datetime(2024, 6, 1)
        self.assertEqual(ok(descriptor, naive), naive)

    def test_relative_bound_is_resolved_on_each_parse(self):
        descriptor = ts.date_time(min=(1, "hour", "from_now"))
        past = dt.datetime.now(UTC)
        self.assertEqual(messages(descriptor, past), ["must be after 1 hours from now"])
        self.assertEqual(ok(descriptor, past + dt.timedelta(days=1)), past + dt.timedelta(days=1))

    def test_callable_bound(self):
        descriptor = ts.date_time(max=lambda: dt.datetime(2000, 1, 1, tzinfo=UTC))
        self.assertEqual(
            messages(descriptor, dt.datetime(2001, 1, 1, tzinfo=UTC)),
            ["must be before 2000-01-01T00:00:00Z"],
        )

    def test_bad_bound_is_rejected(self):
        with self.assertRaises(ts.SchemaError):
            ts.date_time(min="2024-01-01")

    def test_json_schema(self):
        self.assertEqual(ts.json_schema(ts.date_time()), {"type": "string", "format": "date-time"})


class DateTests(unittest.TestCase):
    def test_datetimes_are_not_dates(self):
        self.assertEqual(
            messages(ts.date(), dt.datetime(2024, 1, 1, tzinfo=UTC)),
            ["expected type date, got datetime"],
        )

    def test_coercion(self):
        self.assertEqual(ok(ts.date(), "2024-02-29", coerce=True), dt.date(2024, 2, 29))
        self.assertEqual(messages(ts.date(), "2023-02-29", coerce=True), ["must be a valid ISO8601 date string"])

    def test_bounds_from_relative_time(self):
        today = dt.datetime.now(UTC).date()
        descriptor = ts.date(min=(0, "day", "from_now"))
        self.assertEqual(ok(descriptor, today + dt.timedelta(days=2)), today + dt.timedelta(days=2))
        self.assertEqual(messages(descriptor, today - dt.timedelta(days=2)), ["must be after 0 days from now"])

    def test_custom_error(self):
        descriptor = ts.date(max=ts.p(dt.date(2020, 1, 1), error="is too late"))
        self.assertEqual(messages(descriptor, dt.date(2021, 1, 1)), ["is too late"])

    def test_json_schema(self):
        self.assertEqual(ts.json_schema(ts.date().optional()), {"type": ["string", "null"], "format": "date"})


if __name__ == "__main__":
    unittest.main()
