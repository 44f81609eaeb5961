"""Test package for the StratSync client.

Structure:
    - unit/: Individual function and class tests
    - integration/: End-to-end chat and summary flows against a stub backend
"""
