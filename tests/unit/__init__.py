"""Unit tests for isolated components."""
