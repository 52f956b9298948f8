"""Tests for the plantpack command line.

Validates:
  - extract writes the polygon JSON (stdout or --out)
  - pack writes a layout whose seed is the expected circle
  - bad input and failed extraction exit with status 1
  - logging setup replaces its handlers and can write a log file
"""

from __future__ import annotations

import contextlib
import io
import json
import logging
import os
import tempfile
import unittest

from plantpack.app import main, parse_radii
from plantpack.logging_config import setup_logging


SQUARE_SOURCE = {
    "type": "polyline",
    "vertices": [[0, 0], [10, 0], [10, 10], [0, 10]],
    "closed": True,
}


class CliTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def write_source(self, data, name="bed.json") -> str:
        path = os.path.join(self.tmp, name)
        with open(path, "w", encoding="utf-8") as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)
        return path

    def read_json(self, name: str) -> dict:
        with open(os.path.join(self.tmp, name), encoding="utf-8") as f:
            return json.load(f)


class TestExtractCommand(CliTestCase):

    def test_extract_to_stdout(self):
        src = self.write_source(SQUARE_SOURCE)
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            code = main(["extract", src])
        self.assertEqual(code, 0)
        data = json.loads(buf.getvalue())
        self.assertTrue(data["ok"])
        self.assertEqual(len(data["polygon"]["points"]), 5)

    def test_extract_to_file(self):
        src = self.write_source({"type": "circle", "center": [0, 0], "radius": 5})
        out = os.path.join(self.tmp, "polygon.json")
        self.assertEqual(main(["extract", src, "--out", out]), 0)
        data = self.read_json("polygon.json")
        self.assertEqual(len(data["polygon"]["points"]), 65)

    def test_open_polyline_fails(self):
        src = self.write_source({**SQUARE_SOURCE, "closed": False})
        out = os.path.join(self.tmp, "polygon.json")
        self.assertEqual(main(["extract", src, "--out", out]), 1)
        data = self.read_json("polygon.json")
        self.assertFalse(data["ok"])
        self.assertEqual(data["error"]["kind"], "not_closed")


class TestPackCommand(CliTestCase):

    def test_pack_square(self):
        src = self.write_source(SQUARE_SOURCE)
        out = os.path.join(self.tmp, "layout.json")
        self.assertEqual(main(["pack", src, "--radii", "3,2,1", "--out", out]), 0)
        data = self.read_json("layout.json")
        self.assertEqual(data["circles"][0], {"x": 4.0, "y": 4.0, "radius": 3.0})
        self.assertGreater(len(data["circles"]), 1)
        self.assertEqual(data["radii"], [3.0, 2.0, 1.0])

    def test_iteration_cap(self):
        src = self.write_source(SQUARE_SOURCE)
        out = os.path.join(self.tmp, "layout.json")
        code = main(["pack", src, "--radii", "3", "--max-iterations", "0", "--out", out])
        self.assertEqual(code, 0)
        data = self.read_json("layout.json")
        self.assertEqual(len(data["circles"]), 1)
        self.assertEqual(data["iterations"], 0)

    def test_pack_fails_on_open_boundary(self):
        src = self.write_source({**SQUARE_SOURCE, "closed": False})
        out = os.path.join(self.tmp, "layout.json")
        self.assertEqual(main(["pack", src, "--radii", "1", "--out", out]), 1)
        self.assertFalse(os.path.exists(out))


class TestBadInput(CliTestCase):

    def test_missing_file(self):
        self.assertEqual(main(["extract", os.path.join(self.tmp, "nope.json")]), 1)

    def test_malformed_json(self):
        src = self.write_source("{not json")
        self.assertEqual(main(["extract", src]), 1)

    def test_unknown_source_type(self):
        src = self.write_source({"type": "spline"})
        self.assertEqual(main(["extract", src]), 1)

    def test_top_level_array(self):
        src = self.write_source([1, 2])
        self.assertEqual(main(["extract", src]), 1)

    def test_loop_entry_not_an_object(self):
        src = self.write_source({"type": "region", "loops": [1]})
        self.assertEqual(main(["extract", src]), 1)

    def test_short_3d_vertex(self):
        src = self.write_source({"type": "polyline3d", "vertices": [[1]], "closed": True})
        self.assertEqual(main(["extract", src]), 1)

    def test_bad_radii(self):
        src = self.write_source(SQUARE_SOURCE)
        self.assertEqual(main(["pack", src, "--radii", "3,big"]), 1)

    def test_non_positive_tolerance(self):
        src = self.write_source(SQUARE_SOURCE)
        self.assertEqual(main(["extract", src, "--tolerance", "0"]), 1)

    def test_parse_radii(self):
        self.assertEqual(parse_radii("7, 5,3"), [7.0, 5.0, 3.0])
        with self.assertRaises(ValueError):
            parse_radii(" , ")


class TestLogging(CliTestCase):

    def tearDown(self):
        # closes the file handler before the temp dir goes away
        setup_logging(logging.WARNING)
        super().tearDown()

    def test_handlers_replaced_on_repeat_setup(self):
        setup_logging(logging.INFO)
        logger = setup_logging(logging.DEBUG)
        self.assertEqual(logger.name, "plantpack")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_log_file_records_packing(self):
        src = self.write_source(SQUARE_SOURCE)
        log_path = os.path.join(self.tmp, "run.log")
        out = os.path.join(self.tmp, "layout.json")
        code = main(["--log-file", log_path, "pack", src, "--radii", "3,2,1", "--out", out])
        self.assertEqual(code, 0)
        setup_logging(logging.WARNING)
        with open(log_path, encoding="utf-8") as f:
            text = f.read()
        self.assertIn("Seed circle at centroid", text)
        self.assertIn("[plantpack.pipeline.packer.engine]", text)


if __name__ == "__main__":
    unittest.main()
