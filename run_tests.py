"""
Quick&dirty solution to discover tests and then run them in separate processes.
Essentially, it emulates CMake/CTest approach.

Every test case runs in its own interpreter with a timeout, so a runaway
scheduler (e.g. endless graph walk) shows up as a TIMEOUT instead of a hang.

Zero flexibility, runs everything on a working copy for now.
"""

import argparse
import os
import re
import subprocess
import sys
import time
import unittest

DEFAULT_TIMEOUT = 10
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
TESTS_PACKAGE = "test"
TESTS_ROOT = os.path.join(PROJECT_ROOT, TESTS_PACKAGE)
TEST_MODULE_REGEX = re.compile(r"^test.*\.py$")

if PROJECT_ROOT not in sys.path:
  sys.path.insert(0, PROJECT_ROOT)


def collect_tests():
  tests = []
  loader = unittest.TestLoader()
  for root, _, files in os.walk(TESTS_ROOT):
    for f in sorted(files):
      if TEST_MODULE_REGEX.match(f):
        test_file = os.path.join(root, f)
        module_name, _ = os.path.splitext(os.path.relpath(test_file, PROJECT_ROOT))
        module_name = module_name.replace(os.sep, ".")
        module = __import__(module_name, fromlist=["*"])
        for test_class in loader.loadTestsFromModule(module):
          for test_function in test_class:
            test_full_name = ".".join([module_name, type(test_function).__name__, test_function._testMethodName])
            tests.append((test_file, module_name, test_full_name))
  return tests


def run_tests(test_list, show_output, timeout):
  any_failed = False
  reports = []
  for _, _, test in test_list:
    print("* ", "Starting", test, "...")
    output_config = {} if show_output else {"stdout": subprocess.DEVNULL, "stderr": subprocess.DEVNULL}
    start_time = time.time()
    try:
      retcode = subprocess.run([sys.executable, "-B", "-m", "unittest", test], cwd=PROJECT_ROOT,
                               timeout=timeout, **output_config).returncode
      test_failed = retcode != 0
      execution_time_str = "{:.2f}s".format(time.time() - start_time)
    except subprocess.TimeoutExpired:
      test_failed = True
      execution_time_str = "TIMEOUT ({} seconds)".format(timeout)
    report = " ".join(["  ", "FAILED" if test_failed else "PASSED", execution_time_str, test])
    reports.append(report)
    if not show_output:
      print(report)
    any_failed = any_failed or test_failed
  print("\nSummary:")
  for report in reports:
    print(report)
  return any_failed


def main():
  parser = argparse.ArgumentParser(description="Run every test case in a separate process")
  parser.add_argument("-o", "--show-output", action="store_true", help="show test output")
  parser.add_argument("-t", "--timeout", type=float, default=DEFAULT_TIMEOUT, help="per-test timeout in seconds")
  parser.add_argument("filter", type=str, nargs="?", default=None, help="run only tests with names matching the regex")
  args = parser.parse_args()

  tests = collect_tests()
  if args.filter:
    name_filter = re.compile(args.filter)
    tests = [t for t in tests if name_filter.search(t[2])]
  sys.exit(1 if run_tests(tests, args.show_output, args.timeout) else 0)


if __name__ == "__main__":
  main()
