"""
Test suite for auction-amounts

Contains:
- tests/unit/          : Unit tests for individual modules
"""
