"""
scalatest-launcher - run ScalaTest suites from a declarative configuration.

This package provides tools to:
- Build the ScalaTest Runner command line for a test run
- Launch the runner in a JVM and capture its output to files
- Turn the runner's exit code into a pass, warning or build failure
"""

__version__ = "0.1.0"
__author__ = "scalatest-launcher Team"
