#!/usr/bin/env python3
"""
Tests for the add-in staging pipeline.

Run with: python3 -m pytest xllgo/addin/test_pipeline.py
"""

import os
import shutil
import tempfile
import unittest
from unittest.mock import Mock

from xllgo.addin.config import AddInBuildError
from xllgo.addin.diagnostics import Importance
from xllgo.addin.file_system import PhysicalFileSystem
from xllgo.addin.pipeline import create_addin
from xllgo.addin.stager import ManifestEntry
from xllgo.addin.test_resolver import make_config
from xllgo.addin.test_support import MemoryFileSystem

LOADERS = ["ExcelDna.xll", "ExcelDna64.xll"]


def out(name):
    return os.path.join("bin", name)


class TestCreateAddIn(unittest.TestCase):
    def setUp(self):
        self.config = make_config(packed_file_suffix="")
        self.log = Mock()

    def run_pipeline(self, project_files, disk_files=None, config=None):
        file_system = MemoryFileSystem(LOADERS + list(disk_files if disk_files is not None else project_files))
        result = create_addin(config or self.config, project_files, file_system=file_system, log=self.log)
        return result, file_system

    def logged(self, importance=None):
        return [
            c.args[0] for c in self.log.log.call_args_list
            if importance is None or (len(c.args) > 1 and c.args[1] == importance)
        ]

    def test_single_descriptor_becomes_both_addins(self):
        result, file_system = self.run_pipeline(["Book.dna"])

        self.assertTrue(result.is_success())
        self.assertEqual(result.get_value(), (
            ManifestEntry(out("Book32.dna"), out("Book32.xll"), out("Book32.xll.config")),
            ManifestEntry(out("Book64.dna"), out("Book64.xll"), out("Book64.xll.config")),
        ))
        for name in ["Book32.dna", "Book32.xll", "Book64.dna", "Book64.xll"]:
            self.assertIn(out(name), file_system.files)
        self.assertEqual(file_system.files[out("Book64.xll")], b"ExcelDna64.xll")

    def test_explicit_variant_is_not_overwritten(self):
        result, file_system = self.run_pipeline(["Book.dna", "Book32.dna"])

        self.assertTrue(result.is_success())
        self.assertIn(("Book32.dna", out("Book32.dna")), file_system.copies)
        self.assertNotIn(("Book.dna", out("Book32.dna")), file_system.copies)
        self.assertIn(("Book.dna", out("Book64.dna")), file_system.copies)

    def test_manifest_order_follows_sorted_descriptors(self):
        files = ["Zeta.dna", "Alpha.dna", "Mid.dna"]

        forward, _ = self.run_pipeline(files)
        backward, _ = self.run_pipeline(list(reversed(files)))

        self.assertEqual(forward.get_value(), backward.get_value())
        self.assertEqual(
            [e.descriptor_output_path for e in forward.get_value()],
            [out(n) for n in [
                "Alpha32.dna", "Mid32.dna", "Zeta32.dna",
                "Alpha64.dna", "Mid64.dna", "Zeta64.dna",
            ]],
        )

    def test_config_fallback_chain(self):
        result, file_system = self.run_pipeline(["Book.dna", "App.config", "App64.config"])

        self.assertTrue(result.is_success())
        self.assertEqual(file_system.files[out("Book32.xll.config")], b"App.config")
        self.assertEqual(file_system.files[out("Book64.xll.config")], b"App64.config")

    def test_disabled_bitness(self):
        config = make_config(create_64bit_addin=False, packed_file_suffix="")

        result, file_system = self.run_pipeline(["Book.dna"], config=config)

        self.assertEqual(len(result.get_value()), 1)
        self.assertNotIn(out("Book64.dna"), file_system.files)

    def test_passes_are_separated_in_log(self):
        self.run_pipeline(["Book.dna"])

        messages = self.logged()
        self.assertIn("---", messages)
        self.assertLess(messages.index("Book.dna -> " + out("Book32.dna")), messages.index("---"))
        self.assertIn("Number of files in project: 1", self.logged(Importance.LOW))
        self.assertIn("----Arguments----", self.logged(Importance.LOW))

    def test_equal_suffixes_fail_before_any_io(self):
        config = make_config(file_suffix_32bit="Bit", file_suffix_64bit="BIT")

        result, file_system = self.run_pipeline(["Book.dna"], config=config)

        self.assertTrue(result.is_failure())
        self.assertIsInstance(result.get_error(), AddInBuildError)
        self.assertIn("cannot be identical", str(result.get_error()))
        self.assertIsNone(result.get_value())
        self.assertEqual(file_system.copies, [])
        self.assertEqual(file_system.created_directories, [])

    def test_missing_loader_fails(self):
        file_system = MemoryFileSystem(["ExcelDna64.xll", "Book.dna"])

        result = create_addin(self.config, ["Book.dna"], file_system=file_system, log=self.log)

        self.assertTrue(result.is_failure())
        self.assertIn("Xll32FilePath", str(result.get_error()))
        self.assertEqual(file_system.copies, [])

    def test_io_failure_aborts_run(self):
        result, file_system = self.run_pipeline(["Book.dna", "Missing.dna"], disk_files=["Book.dna"])

        self.assertTrue(result.is_failure())
        self.assertIsInstance(result.get_error(), FileNotFoundError)
        # Book was staged before Missing failed and stays in place
        self.assertIn(out("Book32.dna"), file_system.files)
        self.assertNotIn(out("Missing64.dna"), file_system.files)
        errors = self.logged(Importance.ERROR)
        self.assertEqual(len(errors), 2)
        self.assertTrue(errors[0].startswith("DNA"))
        self.assertIn("Traceback", errors[1])

    def test_config_file_count_is_logged(self):
        self.run_pipeline(["Book.dna", "App.config", "App64.config", "notes.txt"])

        self.assertIn("Number of config files in project: 2", self.logged(Importance.LOW))

    def test_no_project_files(self):
        result, file_system = self.run_pipeline(None, disk_files=[])

        self.assertTrue(result.is_success())
        self.assertEqual(result.get_value(), ())
        self.assertEqual(file_system.copies, [])


class TestCreateAddInOnDisk(unittest.TestCase):
    """Run the pipeline against a real project directory."""

    def setUp(self):
        self.project_dir = tempfile.mkdtemp()
        for name in ["ExcelDna.xll", "ExcelDna64.xll", "MyAddIn.dna", "MyAddIn64.dna", "App.config"]:
            with open(os.path.join(self.project_dir, name), "w") as f:
                f.write(name)

    def tearDown(self):
        shutil.rmtree(self.project_dir, ignore_errors=True)

    def read(self, *parts):
        with open(os.path.join(self.project_dir, *parts)) as f:
            return f.read()

    def test_stage_project(self):
        config = make_config(file_suffix_32bit="", file_suffix_64bit="64")
        file_system = PhysicalFileSystem(self.project_dir)

        result = create_addin(config, file_system.list_project_files(), file_system=file_system, log=Mock())

        self.assertTrue(result.is_success(), result.get_error())
        self.assertEqual(self.read("bin", "MyAddIn.dna"), "MyAddIn.dna")
        self.assertEqual(self.read("bin", "MyAddIn64.dna"), "MyAddIn64.dna")
        self.assertEqual(self.read("bin", "MyAddIn.xll"), "ExcelDna.xll")
        self.assertEqual(self.read("bin", "MyAddIn64.xll"), "ExcelDna64.xll")
        self.assertEqual(self.read("bin", "MyAddIn64.xll.config"), "App.config")
        self.assertEqual(len(result.get_value()), 2)


if __name__ == '__main__':
    unittest.main()
