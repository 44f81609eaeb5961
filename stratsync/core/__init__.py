"""Core chat logic, independent of the UI.

Responsibilities:
    - Classifying backend replies as text, table or error
    - Append-only conversation history
    - Rebuilding and sending summary requests for stored replies
    - Owning the single live summary document

The UI renders what this package produces and never inspects raw
backend payloads itself.
"""

from stratsync.core.artifacts import ArtifactManager
from stratsync.core.conversation import ConversationStore
from stratsync.core.normalizer import (
    ErrorReply,
    NormalizedReply,
    TableReply,
    TextReply,
    normalize,
)
from stratsync.core.session import ChatSession
from stratsync.core.summarizer import (
    SummarizationError,
    SummarizationOrchestrator,
    build_summary_request,
    extract_document,
    strip_code_fences,
)

__all__ = [
    "ArtifactManager",
    "ChatSession",
    "ConversationStore",
    "ErrorReply",
    "NormalizedReply",
    "SummarizationError",
    "SummarizationOrchestrator",
    "TableReply",
    "TextReply",
    "build_summary_request",
    "extract_document",
    "normalize",
    "strip_code_fences",
]
