"""Backend transport for the StratSync query and summary endpoints.

Responsibilities:
    - POST /process_user_query/ with the user's query
    - POST /generate_summary/ with the query and serialized reply data
    - Mapping network failures to TransportError

Returns raw responses only. Classification happens in stratsync.core.
"""

from stratsync.backend.client import BackendClient, TransportError

__all__ = ["BackendClient", "TransportError"]
