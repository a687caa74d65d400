"""
Test suite for lpdex

Contains:
- tests/unit/          : Unit tests for individual modules and the liquidity engine
"""
