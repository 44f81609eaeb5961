"""Integration tests for chat and summary flows.

Requests go through the real BackendClient and HTTPX, routed in-process to
a FastAPI stub of the StratSync backend.
"""
