#!/usr/bin/env python3
"""
Test runner for FitColumns.

Runs the whole suite under tests/, or just the named test modules. Module
names may be given with or without the 'tests.' prefix. The Win32 list view
tests are skipped away from Windows; the runner says how many were skipped.

Usage:
    python run_tests.py                                  # Run all tests
    python run_tests.py test_allocator test_resizer      # Run specific test modules
    python run_tests.py tests.test_resizer.TestEvents    # Run one test class
    python run_tests.py -v                               # Run with verbose output
    python run_tests.py -x                               # Stop at the first failure
"""

import sys, os, unittest

def qualify(name):
    """Turn 'test_allocator' into 'tests.test_allocator'."""
    return name if name.startswith('tests.') else f"tests.{name}"

def main():
    """Run the test suite."""
    project_root = os.path.dirname(os.path.abspath(__file__))
    sys.path.insert(0, project_root)

    names = [arg for arg in sys.argv[1:] if not arg.startswith('-')]
    flags = {arg for arg in sys.argv[1:] if arg.startswith('-')}

    loader = unittest.TestLoader()
    if names:
        suite = unittest.TestSuite()
        for name in names:
            try:
                suite.addTest(loader.loadTestsFromName(qualify(name)))
            except (ImportError, AttributeError) as e:
                print(f"Error loading tests '{name}': {e}")
                return 1
    else:
        suite = loader.discover(os.path.join(project_root, 'tests'), pattern='test_*.py')

    verbosity = 2 if flags & {'-v', '--verbose'} else 1
    failfast = bool(flags & {'-x', '--failfast'})

    runner = unittest.TextTestRunner(verbosity=verbosity, failfast=failfast)
    result = runner.run(suite)
    if result.skipped:
        print(f"{len(result.skipped)} test(s) skipped (platform specific)")

    return 0 if result.wasSuccessful() else 1

if __name__ == '__main__':
    sys.exit(main())
