#!/usr/bin/env python3
"""
Tests for sorting project files into descriptors and config files.

Run with: python3 -m pytest xllgo/addin/test_classifier.py
"""

import unittest

from xllgo.addin.classifier import ConfigCandidateSet, classify_inputs


class TestClassifyInputs(unittest.TestCase):
    FILES = ["b.dna", "App.config", "A.DNA", "readme.txt", "x.Config", "lib/ExcelDna.xll"]

    def test_partitions_by_extension(self):
        inputs = classify_inputs(self.FILES)

        self.assertEqual(inputs.descriptor_files, ("A.DNA", "b.dna"))
        self.assertEqual(tuple(inputs.config_files), ("App.config", "x.Config"))

    def test_result_does_not_depend_on_input_order(self):
        forward = classify_inputs(self.FILES)
        backward = classify_inputs(list(reversed(self.FILES)))

        self.assertEqual(forward.descriptor_files, backward.descriptor_files)
        self.assertEqual(tuple(forward.config_files), tuple(backward.config_files))

    def test_duplicates_are_dropped(self):
        inputs = classify_inputs(["Book.dna", "Book.dna"])
        self.assertEqual(inputs.descriptor_files, ("Book.dna",))

    def test_empty_input(self):
        for files in ([], None):
            inputs = classify_inputs(files)
            self.assertEqual(inputs.descriptor_files, ())
            self.assertEqual(len(inputs.config_files), 0)


class TestConfigCandidateSet(unittest.TestCase):
    def setUp(self):
        self.configs = ConfigCandidateSet(["Book32.config", "App.config", "addins/Other.config"])

    def test_find_ignores_case(self):
        self.assertEqual(self.configs.find("app.CONFIG"), "App.config")
        self.assertEqual(self.configs.find("BOOK32.config"), "Book32.config")

    def test_find_compares_whole_path(self):
        self.assertIsNone(self.configs.find("Other.config"))
        self.assertEqual(self.configs.find("addins/other.config"), "addins/Other.config")

    def test_find_missing(self):
        self.assertIsNone(self.configs.find("Book64.config"))
        self.assertIsNone(self.configs.find(""))
        self.assertIsNone(self.configs.find(None))

    def test_sorted_and_counted(self):
        self.assertEqual(self.configs.files, ("App.config", "Book32.config", "addins/Other.config"))
        self.assertEqual(len(ConfigCandidateSet(["App.config", "App.config"])), 1)


if __name__ == '__main__':
    unittest.main()
