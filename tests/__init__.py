"""
Test suite for farm-sim

Contains:
- tests/unit/          : Unit tests for individual modules and session scenarios
"""
