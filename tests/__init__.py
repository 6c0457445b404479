"""
Test suite for goldquote

Contains:
- tests/unit/          : Unit tests for individual modules
"""
