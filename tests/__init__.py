"""
Test suite for gemsfun-sdk

Contains:
- tests/unit/          : Unit tests for individual modules (no network)
"""
