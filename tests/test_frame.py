import unittest

import pandas as pd

import typeshape as ts
from typeshape.frame import parse_frame


class FrameTests(unittest.TestCase):
    def setUp(self):
        self.schema = ts.mapping({
            "name": ts.string(),
            "age": ts.integer(min=0),
            "city": ts.string().with_default("unknown"),
        })

    def test_valid_frame(self):
        df = pd.DataFrame(
            {"name": ["Ann", "Bo"], "age": [3, 4], "city": ["Oslo", None]},
            index=["a", "b"],
        )
        out = parse_frame(self.schema, df)
        self.assertTrue(out.ok)
        self.assertEqual(list(out.value.index), ["a", "b"])
        self.assertEqual(out.value.loc["b", "city"], "unknown")

    def test_issues_are_prefixed_with_the_row_label(self):
        df = pd.DataFrame({"name": ["Ann", float("nan")], "age": [-1, 4], "city": ["x", "y"]})
        out = parse_frame(self.schema, df)
        self.assertEqual(
            ts.summarize(out.issues),
            {"0.age": ["must be at least 0, got -1"], "1.name": ["is required"]},
        )

    def test_coercion(self):
        df = pd.DataFrame({"name": ["Ann"], "age": ["7"], "city": ["x"]})
        self.assertEqual(parse_frame(self.schema, df, coerce=True).value.loc[0, "age"], 7)

    def test_bad_arguments(self):
        with self.assertRaises(ts.SchemaError):
            parse_frame(ts.string(), pd.DataFrame())
        with self.assertRaises(TypeError):
            parse_frame(self.schema, [{"name": "Ann"}])


if __name__ == "__main__":
    unittest.main()
