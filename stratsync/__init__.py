"""StratSync Client - conversational UI for the StratSync analytics backend.

Combines NiceGUI for the chat interface, HTTPX for backend calls,
FastAPI for the hosting service, and Pydantic for data validation.

Components:
    - backend: HTTP adapter for the query and summary endpoints
    - core: reply normalization, conversation state, summarization
    - models: message and request schemas
    - ui: Web interface for chat interactions
    - api: Hosting application with health check
"""

__version__ = "0.1.0"
