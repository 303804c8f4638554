"""Tests for reading and decoding records files."""

from __future__ import annotations

import json
import os
import tempfile
import unittest

from httpdiff.core.errors import (
    DuplicateKeyError,
    InvalidUrlError,
    RecordDecodeError,
    RecordFileError,
    RecordReadError,
    RecordShapeError,
)
from httpdiff.core.tree import OrderedTree
from httpdiff.records import decode_json, describe_record, load_records


class TestDecodeJson(unittest.TestCase):
    def test_objects_become_ordered_trees(self):
        decoded = decode_json('{"b": 1, "a": {"y": [1, {"z": null}], "x": 2}}')
        self.assertIsInstance(decoded, OrderedTree)
        self.assertEqual(list(decoded.keys()), ["b", "a"])
        self.assertEqual(list(decoded["a"].keys()), ["y", "x"])
        self.assertIsInstance(decoded["a"]["y"][1], OrderedTree)

    def test_duplicate_keys_rejected(self):
        with self.assertRaises(DuplicateKeyError):
            decode_json('{"a": 1, "a": 2}')

    def test_scalars(self):
        self.assertIsNone(decode_json("null"))
        self.assertEqual(decode_json('"x"'), "x")


class TestLoadRecords(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

    def _write(self, name: str, contents: str) -> str:
        path = os.path.join(self._tmp.name, name)
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(contents)
        return path

    def test_loads_array_of_records(self):
        path = self._write(
            "records.json",
            json.dumps([{"request": {"method": "GET", "url": "http://a/"}}, {"version": "HTTP/2"}]),
        )
        records = load_records(path)
        self.assertEqual(len(records), 2)
        self.assertTrue(all(isinstance(r, OrderedTree) for r in records))

    def test_missing_file(self):
        path = os.path.join(self._tmp.name, "nope.json")
        with self.assertRaises(RecordReadError) as ctx:
            load_records(path)
        self.assertEqual(ctx.exception.path, path)
        self.assertIn(path, str(ctx.exception))
        self.assertIsInstance(ctx.exception, RecordFileError)

    def test_malformed_json(self):
        path = self._write("bad.json", "[{")
        with self.assertRaises(RecordDecodeError) as ctx:
            load_records(path)
        self.assertIn("Could not decode the file", str(ctx.exception))

    def test_duplicate_keys_are_decode_errors(self):
        path = self._write("dup.json", '[{"version": 1, "version": 2}]')
        with self.assertRaises(RecordDecodeError) as ctx:
            load_records(path)
        self.assertIsInstance(ctx.exception.__cause__, DuplicateKeyError)

    def test_top_level_must_be_array_of_objects(self):
        with self.assertRaises(RecordDecodeError):
            load_records(self._write("obj.json", '{"request": {}}'))
        with self.assertRaises(RecordDecodeError):
            load_records(self._write("mixed.json", '[{"a": 1}, 2]'))

    def test_empty_array(self):
        self.assertEqual(load_records(self._write("empty.json", "[]")), [])


class TestDescribeRecord(unittest.TestCase):
    def test_label(self):
        record = decode_json(
            '{"request": {"method": "POST", "url": "https://api.example.com:8443/v1/items?x=1"}}'
        )
        self.assertEqual(describe_record(record), "POST https://api.example.com/v1/items")

    def test_missing_url(self):
        with self.assertRaises(RecordShapeError):
            describe_record(decode_json('{"request": {"method": "GET"}}'))

    def test_host_case_is_kept(self):
        record = decode_json('{"request": {"method": "GET", "url": "http://u@Example.COM:81/a"}}')
        self.assertEqual(describe_record(record), "GET http://Example.COM/a")

    def test_invalid_url(self):
        record = decode_json('{"request": {"method": "GET", "url": "http://[::1/x"}}')
        with self.assertRaises(InvalidUrlError) as ctx:
            describe_record(record)
        self.assertIsInstance(ctx.exception, RecordShapeError)
        self.assertIn("not a valid URL", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, ValueError)


if __name__ == "__main__":
    unittest.main()
