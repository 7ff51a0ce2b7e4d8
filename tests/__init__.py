"""MoodSense Test Suite

This package contains all tests for the MoodSense insights engine.

Test organization:
- unit/insights/: Unit tests for each analyzer, the assembler, the narrative
  generator, the SQLite store and configuration
- integration/: End-to-end runs from stored check-ins to coaching prompt

Running tests:
    # All tests
    pytest

    # Specific module
    pytest tests/unit/insights/test_pattern_classifier.py

    # With coverage
    pytest --cov=moodsense --cov-report=term-missing
"""
