"""Fuzz testing infrastructure for fakevalues.

This package contains intensive property tests excluded from normal runs:
- test_expansion_property: generated templates and regexify patterns

Run with: pytest -m fuzz

Python 3.13+.
"""
