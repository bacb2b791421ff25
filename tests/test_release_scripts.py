"""
Tests for scripts/prepare_release.py - release checks and version agreement.
"""

import importlib.util
import io
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import MagicMock, patch

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "prepare_release.py"


def load_script():
    found = importlib.util.spec_from_file_location("prepare_release", SCRIPT)
    module = importlib.util.module_from_spec(found)
    found.loader.exec_module(module)
    return module


class TestRunCheck(unittest.TestCase):

    def setUp(self):
        self.release = load_script()

    def run_check(self, *cmd, returncode=0, error=None):
        out = io.StringIO()
        run = MagicMock(return_value=MagicMock(returncode=returncode), side_effect=error)
        with patch.object(self.release.subprocess, "run", run), redirect_stdout(out):
            ok = self.release.run_check("Unit tests", *cmd)
        return ok, out.getvalue(), run

    def test_passing_command(self):
        ok, out, run = self.run_check("pytest", "-q")
        self.assertTrue(ok)
        self.assertIn("Unit tests - PASSED", out)
        run.assert_called_once_with(["pytest", "-q"], check=False)

    def test_failing_command_reports_exit_code(self):
        ok, out, _ = self.run_check("pytest", returncode=2)
        self.assertFalse(ok)
        self.assertIn("FAILED (exit 2)", out)

    def test_missing_command(self):
        ok, out, _ = self.run_check("nosuchtool", error=FileNotFoundError())
        self.assertFalse(ok)
        self.assertIn("nosuchtool not found", out)


class TestVersionConsistency(unittest.TestCase):

    def setUp(self):
        self.release = load_script()
        self.temp_dir = tempfile.mkdtemp()
        self.old_cwd = os.getcwd()
        os.chdir(self.temp_dir)
        os.mkdir("agent_browser")

    def tearDown(self):
        os.chdir(self.old_cwd)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write_versions(self, setup_version, package_version):
        Path("setup.py").write_text(f'setup(version="{setup_version}")\n')
        Path("agent_browser", "__init__.py").write_text(
            f'__version__ = "{package_version}"\n'
        )

    def check(self):
        with redirect_stdout(io.StringIO()):
            return self.release.check_version_consistency()

    def test_matching_versions(self):
        self.write_versions("1.2.0", "1.2.0")
        self.assertTrue(self.check())

    def test_mismatched_versions(self):
        self.write_versions("1.2.0", "1.1.0")
        self.assertFalse(self.check())


if __name__ == "__main__":
    unittest.main()
