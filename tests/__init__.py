"""
Test suite for ksdist

Contains:
- tests/unit/          : Unit tests for individual modules
"""
