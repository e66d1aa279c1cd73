#!/usr/bin/env python3
"""Test runner for the eFootball card scanner.

Selects unit or integration tests by marker. Integration tests need a local
tesseract install with ``jpn`` language data and are skipped otherwise.
"""

import sys
import subprocess
import argparse
from pathlib import Path


def run_command(cmd, description):
    """Run a command and report the outcome."""
    print(f"\n{'='*60}")
    print(f"Running: {description}")
    print(f"Command: {' '.join(cmd)}")
    print(f"{'='*60}\n")

    try:
        subprocess.run(cmd, check=True)
        print(f"\n✅ {description} completed successfully!")
        return True
    except subprocess.CalledProcessError as e:
        print(f"\n❌ {description} failed with exit code {e.returncode}")
        return False
    except FileNotFoundError:
        print(f"\n❌ Command not found: {cmd[0]}")
        print("Install the test extra first: pip install -e '.[test]'")
        return False


def main():
    parser = argparse.ArgumentParser(
        description="Run efscan tests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_tests.py                      # Run all tests
  python run_tests.py --unit               # Unit tests only
  python run_tests.py --integration        # Tests against a real tesseract
  python run_tests.py --file test_stats.py # One test module
        """
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--unit', action='store_true', help='Run only unit tests')
    group.add_argument('--integration', action='store_true', help='Run only integration tests')
    parser.add_argument('--file', type=str, help='Run tests from specific file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    parser.add_argument('--fast', action='store_true', help='Skip slow tests')

    args = parser.parse_args()

    if not Path('efscan').exists() or not Path('tests').exists():
        print("❌ Error: Please run this script from the project root directory")
        sys.exit(1)

    cmd = [sys.executable, '-m', 'pytest']

    markers = []
    if args.unit:
        markers.append('unit')
    elif args.integration:
        markers.append('integration')
    if args.fast:
        markers.append('not slow')
    if markers:
        cmd.extend(['-m', ' and '.join(markers)])

    cmd.append(f'tests/{args.file}' if args.file else 'tests/')

    if args.verbose:
        cmd.append('-v')

    cmd.extend(['--tb=short', '--strict-markers'])

    success = run_command(cmd, "efscan tests")
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
