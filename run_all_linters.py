#!/usr/bin/env python3
"""Run every formatter, linter and the test suite in one go.

Runs, in order:
1. Black format check
2. isort import-order check
3. Ruff static checks
4. Pylint static analysis
5. pytest

All output is collected and summarized at the end.
"""

from pathlib import Path
import subprocess
import sys

PACKAGES = ["app", "core", "infrastructure", "main.py"]


def run_command(cmd: list[str], description: str) -> tuple[bool, str]:
    """Run a command and return (success, combined output)."""
    print(f"\n{'='*60}")
    print(f"Running: {description}")
    print(f"Command: {' '.join(cmd)}")
    print("=" * 60)

    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, check=False, cwd=Path(__file__).parent
        )
    except OSError as e:
        print(f"❌ Could not start: {e}")
        return False, str(e)

    success = result.returncode == 0
    output = result.stdout + result.stderr
    print("✅ OK" if success else "❌ FAILED")
    if output.strip():
        print("\nOutput:")
        print(output)
    else:
        print("(no output)")
    return success, output


def main() -> None:
    """Run all checks and exit non-zero if any failed."""
    commands = [
        ([sys.executable, "-m", "black", ".", "--check"], "Black format check"),
        ([sys.executable, "-m", "isort", ".", "--check-only"], "isort import check"),
        ([sys.executable, "-m", "ruff", "check", "."], "Ruff static checks"),
        ([sys.executable, "-m", "pylint", *PACKAGES], "Pylint static analysis"),
        ([sys.executable, "-m", "pytest", "-q"], "pytest"),
    ]

    results = []
    for cmd, description in commands:
        success, output = run_command(cmd, description)
        results.append((description, success, output))

    print(f"\n{'='*60}")
    print("Summary")
    print("=" * 60)

    all_passed = True
    for description, success, _ in results:
        print(f"{description}: {'✅ passed' if success else '❌ failed'}")
        all_passed = all_passed and success

    print(f"\nOverall: {'✅ all passed' if all_passed else '❌ failures'}")
    sys.exit(0 if all_passed else 1)


if __name__ == "__main__":
    main()
