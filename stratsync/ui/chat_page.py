"""NiceGUI chat interface with table replies and HTML summaries."""

import functools
import html
from typing import Any

from nicegui import ui

from stratsync.backend.client import BackendClient
from stratsync.config import get_client_config
from stratsync.core.artifacts import ArtifactManager
from stratsync.core.session import ChatSession
from stratsync.models.schemas import Message, SummaryStatus
from stratsync.ui.formatting import ROW_KEY, table_view

NO_DATA_HINT = (
    "Sorry, I couldn't find any matching data. "
    "You can try asking in a different way or use another prompt."
)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #0e7490 0%, #155e75 100%); }

    .message-user {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #111827;
        border-radius: 18px 18px 18px 4px;
    }

    .message-table { max-height: 60vh; overflow-y: auto; }

    .avatar-user { background: #6b7280; }
    .avatar-assistant { background: #0e7490; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #0e7490;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #0e7490; }

    .send-btn { background: #0e7490 !important; }

    .summary-frame { width: 100%; height: 80vh; border: 0; }
</style>
"""


def summary_frame_html(document: str, message_id: int) -> str:
    """Embed a summary document in a sandboxed iframe."""
    return (
        f'<iframe title="summary-{message_id}" class="summary-frame" sandbox="allow-scripts" '
        f'srcdoc="{html.escape(document, quote=True)}"></iframe>'
    )


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    config = get_client_config()
    session = ChatSession(
        BackendClient(config),
        ArtifactManager(config.artifact_dir),
    )
    ui.context.client.on_delete(session.close)

    messages_container: ui.column
    input_field: ui.textarea

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "insights"
        avatar_classes = f"w-9 h-9 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes("text-white text-lg")

    def render_table(table: list[dict[str, Any]]) -> None:
        if not table:
            ui.label("No rows returned.").classes("text-sm text-gray-500 italic")
            return
        columns, rows = table_view(table)
        ui.table(columns=columns, rows=rows, row_key=ROW_KEY).props(
            "dense flat separator=horizontal"
        ).classes("bg-transparent")

    def render_summarize_action(msg: Message) -> None:
        busy = session.summarizer.is_busy(msg.id)
        with ui.column().classes("gap-1 self-start"):
            button = ui.button(
                "Summarizing..." if busy else "Summarize",
                on_click=functools.partial(summarize, msg),
            ).props("outline rounded dense no-caps size=sm color=cyan-8")
            if busy or not msg.can_summarize:
                button.disable()
            if not msg.can_summarize:
                ui.label(NO_DATA_HINT).classes("text-xs text-red-500 max-w-xs")

    def render_summary(msg: Message) -> None:
        artifact = session.artifacts.artifact_for(msg.id)
        if artifact is None:
            return
        with ui.column().classes("w-full gap-1 p-1 bg-white border rounded"):
            ui.html(summary_frame_html(artifact.document, msg.id), sanitize=False).classes(
                "w-full"
            )
            ui.button(
                "Download", icon="download", on_click=functools.partial(download_summary, msg)
            ).props("flat dense no-caps size=sm")

    def render_message(msg: Message) -> None:
        is_user = msg.is_user
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        payload = msg.render_payload()
        width = "max-w-full" if "table" in payload else "max-w-[70%]"

        with ui.row().classes(f"w-full {align} gap-3 items-start no-wrap"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes(f"{width} gap-1"):
                if "table" in payload:
                    with ui.element("div").classes(f"px-4 py-3 {bubble} message-table"):
                        render_table(payload["table"])
                else:
                    with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                        ui.label(payload["content"]).classes(
                            "text-sm leading-relaxed whitespace-pre-wrap break-words"
                        )
                ui.label(msg.time_label).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
                if not is_user:
                    render_summarize_action(msg)
            if is_user:
                render_avatar(True)
        if not is_user:
            render_summary(msg)

    def render_status_indicator(status_text: str = "Thinking") -> None:
        """Render status indicator with animated dots and status text."""
        with ui.row().classes("w-full justify-start gap-3 items-end"):
            render_avatar(False)
            with ui.element("div").classes("message-assistant px-4 py-3"):
                with ui.row().classes("items-center gap-2"):
                    with ui.row().classes("gap-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
                    ui.label(status_text).classes("text-sm text-gray-500 italic")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.store.has_user_messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("insights").classes("text-5xl text-gray-300")
                    ui.label(f"Welcome to {config.title}").classes(
                        "text-2xl font-semibold text-gray-700"
                    )
                    ui.label(
                        "Your AI co-pilot for customer success and growth. "
                        "Ask me anything to get started!"
                    ).classes("text-gray-400 text-center")
            else:
                for msg in session.store:
                    render_message(msg)
            if session.is_waiting:
                render_status_indicator()

    async def send_message() -> None:
        text = input_field.value.strip()
        if not text:
            return

        input_field.value = ""
        await session.send_query(text, on_sent=refresh_messages)
        refresh_messages()

    async def summarize(msg: Message) -> None:
        outcome = await session.summarize(msg, on_start=refresh_messages)
        if outcome.status is SummaryStatus.FAILED:
            # The clicked button was replaced by on_start's refresh
            with messages_container:
                ui.notify(outcome.error, type="negative", close_button="OK", timeout=0)
        refresh_messages()

    def download_summary(msg: Message) -> None:
        artifact = session.artifacts.artifact_for(msg.id)
        if artifact is None or not artifact.path.exists():
            ui.notify("This summary is no longer available.", type="warning")
            return
        ui.download.file(artifact.path, f"summary-{msg.id}.html")

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-4xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center gap-3"):
            ui.icon("insights").classes("text-white text-3xl")
            ui.label(config.title).classes("text-lg font-semibold text-white")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.textarea(placeholder="Ask a question...")
                    .props("autogrow borderless dense rows=1")
                    .classes("w-full")
                    .on("keydown.enter.prevent", send_message)
                )
            ui.button(icon="send", on_click=send_message).props("round unelevated").classes(
                "send-btn"
            )

    refresh_messages()


def main() -> None:
    config = get_client_config()
    ui.run(title=config.title, favicon="💬", port=8080, reload=False)


if __name__ == "__main__":
    main()
