#!/usr/bin/env python3
"""
Quick release preparation script for agent-browser.

Runs the checks that must pass before tagging a release.
"""

import re
import subprocess
import sys
import os
from pathlib import Path


def run_check(description, *cmd):
    """Run one release check; True when the command exits 0."""
    print(f"\n🔍 {description}")
    print(f"$ {' '.join(cmd)}")
    print("-" * 50)

    try:
        returncode = subprocess.run(list(cmd), check=False).returncode
    except FileNotFoundError:
        print(f"❌ {description} - {cmd[0]} not found")
        return False

    status = "PASSED" if returncode == 0 else f"FAILED (exit {returncode})"
    print(f"{'✅' if returncode == 0 else '❌'} {description} - {status}")
    return returncode == 0


def read_version(path, pattern):
    try:
        match = re.search(pattern, Path(path).read_text())
    except FileNotFoundError:
        print(f"❌ {path} not found")
        return None
    return match.group(1) if match else None


def check_version_consistency():
    """Check that setup.py and the package agree on the version."""
    print("\n🔍 Checking version consistency")
    print("-" * 50)

    setup_version = read_version("setup.py", r'version="([^"]+)"')
    package_version = read_version(
        os.path.join("agent_browser", "__init__.py"), r'__version__ = "([^"]+)"'
    )

    if not setup_version or not package_version:
        print("❌ Could not extract versions from files")
        return False
    if setup_version != package_version:
        print(
            f"❌ Version mismatch: setup.py={setup_version}, agent_browser={package_version}"
        )
        return False
    print(f"✅ Version consistency - Both files have version {setup_version}")
    return True


def main():
    """Main release preparation function."""
    print("🚀 agent-browser Release Preparation")
    print("=" * 60)

    os.chdir(Path(__file__).resolve().parent.parent)

    all_checks_passed = True

    all_checks_passed &= check_version_consistency()

    all_checks_passed &= run_check(
        "Running unit tests", sys.executable, os.path.join("scripts", "run_tests.py")
    )

    all_checks_passed &= run_check(
        "Testing CLI entry point", sys.executable, "-m", "agent_browser.main", "--help"
    )

    all_checks_passed &= run_check("Building package", sys.executable, "-m", "build")

    print("\n" + "=" * 60)
    if all_checks_passed:
        print("🎉 All checks passed! Ready for release.")
        print("\nNext steps:")
        print("1. Commit any final changes")
        print("2. Create and push a git tag: git tag vX.Y.Z && git push origin vX.Y.Z")
    else:
        print("❌ Some checks failed. Please fix issues before releasing.")

    return 0 if all_checks_passed else 1


if __name__ == "__main__":
    sys.exit(main())
