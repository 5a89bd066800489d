#!/usr/bin/env python
"""
Test runner for the cart store.

Unit tests need nothing but the installed packages. Integration tests open
SQLite files under pytest's tmp_path and loopback TCP sockets; the PostgreSQL
credential test only needs the psycopg driver installed, not a server.
"""

import argparse
import subprocess
import sys

SUITES = {
    "unit": "tests/unit/",
    "integration": "tests/integration/",
}


def build_command(paths, verbose=False, coverage=False, keyword=None, fail_fast=False):
    """Build the pytest command line."""
    cmd = [sys.executable, "-m", "pytest", "--asyncio-mode=strict"]

    if verbose:
        cmd.append("-v")
    if fail_fast:
        cmd.append("-x")
    if keyword:
        cmd.extend(["-k", keyword])
    if coverage:
        cmd.extend(["--cov=cartstore", "--cov-report=term-missing"])

    cmd.extend(paths or ["tests/"])
    return cmd


def main():
    """Parse arguments and run tests."""
    parser = argparse.ArgumentParser(description="Run the cart store test suite.")
    parser.add_argument("paths", nargs="*", help="Specific test files or directories")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("-c", "--coverage", action="store_true", help="Report coverage (needs pytest-cov)")
    parser.add_argument("-k", dest="keyword", help="Only run tests matching this expression")
    parser.add_argument("-x", "--fail-fast", action="store_true", help="Stop at the first failure")
    suite = parser.add_mutually_exclusive_group()
    for name in SUITES:
        suite.add_argument(f"--{name}", action="store_const", const=name, dest="suite",
                           help=f"Run only {name} tests")

    args = parser.parse_args()

    paths = list(args.paths)
    if args.suite:
        paths.append(SUITES[args.suite])

    cmd = build_command(paths, args.verbose, args.coverage, args.keyword, args.fail_fast)
    print(f"Running: {' '.join(cmd)}")
    return subprocess.call(cmd)


if __name__ == "__main__":
    sys.exit(main())
