"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display as text bubbles or tables
    - Summarize actions and the rendered summary document
    - Typing indicator while queries are pending

Contains no reply parsing. Delegates all operations to stratsync.core.
"""
