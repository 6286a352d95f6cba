"""
Property-based tests for the AArch64 renderer.

This package hosts Hypothesis strategies that build well-formed decoded
instructions for every encoding family, plus the properties checked on them.
"""
