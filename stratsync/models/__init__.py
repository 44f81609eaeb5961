"""Pydantic models for conversation state and backend requests.

Provides type safety and validation for everything that crosses a component
boundary.

Models:
    - Message: One entry in the conversation
    - PayloadBundle: Query context retained for later summarization
    - QueryRequest / SummaryRequest: Outbound request bodies
    - SummaryArtifact / SummaryOutcome: Results of summarization
"""

from stratsync.models.schemas import (
    Message,
    PayloadBundle,
    QueryRequest,
    Row,
    Sender,
    SummaryArtifact,
    SummaryOutcome,
    SummaryRequest,
    SummaryStatus,
)

__all__ = [
    "Message",
    "PayloadBundle",
    "QueryRequest",
    "Row",
    "Sender",
    "SummaryArtifact",
    "SummaryOutcome",
    "SummaryRequest",
    "SummaryStatus",
]
