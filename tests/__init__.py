# FreshTag Tests Package

"""
Test suite for the FreshTag freshness engine.

Run tests:
    pytest tests -v
"""
