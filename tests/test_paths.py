"""Tests for runtime data directory and output path helpers."""

from __future__ import annotations

import os
import sys
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import mock

# Ensure the repository's src/ directory is importable without installation.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from taxcat.core.paths import get_data_dir, resolve_output_file  # noqa: E402


class DataDirEnvironmentOverrideTests(unittest.TestCase):
    """Verify that TAXCAT_DATA_DIR overrides the runtime data dir."""

    def test_get_data_dir_honors_environment_override(self) -> None:
        """get_data_dir should return the directory specified by the env var."""
        with TemporaryDirectory() as tmp:
            override = Path(tmp) / "custom-location"
            with mock.patch.dict(os.environ, {"TAXCAT_DATA_DIR": str(override)}, clear=False):
                data_dir = get_data_dir()
        self.assertEqual(data_dir, override.resolve())


class ResolveOutputFileTests(unittest.TestCase):

    def test_relative_path_resolves_against_working_directory(self) -> None:
        with TemporaryDirectory() as tmp:
            cwd = os.getcwd()
            os.chdir(tmp)
            try:
                resolved = resolve_output_file("reports/results.txt", ensure_parent=True)
                self.assertEqual(resolved.resolve(), (Path(tmp) / "reports" / "results.txt").resolve())
                self.assertTrue(resolved.parent.is_dir())
            finally:
                os.chdir(cwd)

    def test_absolute_path_is_kept(self) -> None:
        with TemporaryDirectory() as tmp:
            target = Path(tmp) / "results.txt"
            self.assertEqual(resolve_output_file(str(target)), target)


if __name__ == "__main__":
    unittest.main()
