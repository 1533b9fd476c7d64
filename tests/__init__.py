"""
Test suite for vault-pricing-core

Contains:
- tests/unit/          : Unit tests for individual modules
"""
