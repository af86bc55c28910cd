#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: test_packaging.py
# Project: textsense
# Description: Keeps setup.py metadata in step with the package
# Created: 2025-06-05 11:02:44
# Modified: 2025-06-05 11:02:44

import re
import unittest
from pathlib import Path

from textsense import __version__

ROOT = Path(__file__).resolve().parent.parent


class PackagingTestCase(unittest.TestCase):
    def setUp(self):
        self.setup_source = (ROOT / "setup.py").read_text()

    def test_version_matches_package(self):
        match = re.search(r'version="([^"]+)"', self.setup_source)
        self.assertIsNotNone(match)
        self.assertEqual(match.group(1), __version__)

    def test_setup_does_not_execute_package_files(self):
        self.assertNotIn("exec(", self.setup_source)

    def test_console_script(self):
        self.assertIn('"textsense = textsense.cli:main"', self.setup_source)


if __name__ == "__main__":
    unittest.main()
