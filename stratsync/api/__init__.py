"""FastAPI hosting application for the StratSync client.

Endpoints:
    - GET /health: Service health status
    - /: NiceGUI chat page (mounted at startup)
"""

from stratsync.api.app import create_app

__all__ = ["create_app"]
