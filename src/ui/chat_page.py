"""NiceGUI chat page for the RITE Digital Mentor."""

from nicegui import events, ui

from src.agent.model_service import AgnoModelService
from src.models.schemas import ConversationTurn, Role
from src.session.manager import SessionManager
from src.ui.formatting import markdown_to_html

MENTOR_NAME = "RITE Digital Mentor"

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    :root {
        --aston-purple: #4b0f5b;
        --aston-magenta: #c0047d;
    }
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; }

    .header {
        background: linear-gradient(135deg, var(--aston-purple) 0%, var(--aston-magenta) 100%);
    }

    .message-user {
        background: var(--aston-purple);
        color: white;
        border-radius: 15px 15px 0 15px;
    }

    .message-model {
        background: white;
        color: #1f2937;
        border-radius: 15px 15px 15px 0;
        box-shadow: 0 1px 2px rgba(0, 0, 0, 0.08);
    }

    .mentor-name { color: var(--aston-purple); }

    .file-chip {
        background: rgba(255, 255, 255, 0.2);
        border-radius: 6px;
    }

    .pending-chip {
        background: #f3e8f7;
        border: 1px solid #d8b4e2;
        border-radius: 8px;
    }

    .trap {
        background: #fff0f0;
        border-left: 3px solid red;
        border-radius: 5px;
    }

    .send-btn { background: var(--aston-magenta) !important; }

    .message-model strong { font-weight: 600; }
    .message-model code { font-family: 'Menlo', 'Monaco', monospace; }
    .message-model a { color: var(--aston-magenta); }
</style>
"""


def render_sidebar() -> None:
    """Static Descriptor 3 quick reference and disclaimer."""
    with ui.column().classes("w-72 h-full p-5 gap-4 bg-gray-50 border-r max-md:hidden"):
        ui.label("Quick Reference").classes("text-lg font-semibold mentor-name")

        ui.label("What is Descriptor 3?").classes("text-sm text-gray-500 font-medium")
        ui.html(
            "Comprehensive understanding and effective practice that provides a basis "
            "from which you <strong>lead or influence</strong> those who teach and/or "
            "support high-quality learning.",
            sanitize=False,
        ).classes("text-sm leading-snug")

        ui.label('The "Trap" to Avoid').classes("text-sm text-gray-500 font-medium")
        ui.label(
            "Focusing on your own teaching excellence (D2) rather than how you "
            "influenced your colleagues (D3)."
        ).classes("text-sm leading-snug trap p-2")

        ui.label("Key Criteria").classes("text-sm text-gray-500 font-medium")
        ui.html(
            '<ul class="list-disc pl-5 space-y-1">'
            "<li><strong>D3.1:</strong> Sustained record of leading/influencing.</li>"
            "<li><strong>D3.2:</strong> Effective, inclusive practice integrating Dimensions.</li>"
            "<li><strong>D3.3:</strong> Extending significantly beyond direct teaching.</li>"
            "</ul>",
            sanitize=False,
        ).classes("text-sm")

        ui.space()
        with ui.column().classes("gap-1 border-t pt-3"):
            ui.label("Disclaimer").classes("text-xs uppercase text-pink-700 font-semibold")
            ui.label(
                "This tool is for brainstorming and developing ideas. The advice provided "
                "here is AI-generated and should be checked with an official Aston "
                "University RITE mentor."
            ).classes("text-xs italic text-gray-500 leading-snug")


def render_turn(turn: ConversationTurn) -> None:
    is_user = turn.role == Role.USER
    align = "justify-end" if is_user else "justify-start"
    bubble = "message-user" if is_user else "message-model"

    with ui.row().classes(f"w-full {align}"):
        with ui.element("div").classes(f"max-w-[80%] px-4 py-3 {bubble}"):
            if not is_user:
                ui.label(MENTOR_NAME).classes("text-xs font-bold mentor-name mb-1")
            if turn.attachment_name:
                with ui.row().classes("file-chip items-center gap-1 px-2 py-1 mb-2"):
                    ui.icon("description").classes("text-sm")
                    ui.label(turn.attachment_name).classes("text-xs")
            if is_user:
                ui.label(turn.text).classes("text-sm whitespace-pre-wrap")
            else:
                ui.html(markdown_to_html(turn.text), sanitize=False).classes(
                    "text-sm leading-relaxed"
                )


@ui.page("/")
def chat_page() -> None:
    """Main chat page. Each page load gets its own mentor session."""
    ui.add_head_html(CUSTOM_CSS)

    messages_container: ui.column
    attachment_row: ui.row
    input_field: ui.textarea
    send_btn: ui.button
    attach_btn: ui.button

    def refresh() -> None:
        refresh_messages()
        refresh_attachment()
        update_controls()

    manager = SessionManager(AgnoModelService(), on_change=refresh)

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            for turn in manager.conversation:
                render_turn(turn)
            if manager.is_awaiting_response:
                ui.label(f"{MENTOR_NAME} is analyzing...").classes(
                    "text-sm italic text-gray-400 ml-2"
                )

    def refresh_attachment() -> None:
        attachment_row.clear()
        pending = manager.pending_attachment
        attachment_row.set_visibility(pending is not None)
        if pending is None:
            return
        with attachment_row:
            ui.icon("description").classes("text-lg mentor-name")
            ui.label(pending.name).classes("text-sm font-medium")
            ui.button(icon="close", on_click=manager.composer.clear).props(
                "flat round dense size=sm"
            )

    def update_controls() -> None:
        send_btn.set_enabled(manager.can_submit(input_field.value))
        attach_btn.set_enabled(not manager.is_awaiting_response)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        content = await e.file.read()
        await manager.composer.attach(e.file.name, e.file.content_type, content)
        upload.reset()

    async def send_message() -> None:
        text = input_field.value or ""
        if not manager.can_submit(text):
            return
        input_field.value = ""
        await manager.submit(text)

    async def start_session() -> None:
        await manager.initialize()

    async def new_conversation() -> None:
        if manager.is_awaiting_response:
            return
        input_field.value = ""
        await manager.initialize()

    # === UI Layout ===
    with ui.column().classes("w-full h-screen gap-0"):
        # Header
        with ui.row().classes("w-full header px-7 py-5 items-center justify-between"):
            with ui.column().classes("gap-1"):
                ui.label("RITE Scheme").classes("text-2xl font-semibold text-white")
                ui.label("Senior Fellowship (D3) Digital Mentor").classes(
                    "text-sm text-white/90"
                )
            with ui.row().classes("items-center gap-3"):
                ui.label("Aston University").classes("text-xs text-white/80")
                ui.button(icon="refresh", on_click=new_conversation).props(
                    "flat round color=white"
                ).tooltip("Start a new conversation")

        with ui.row().classes("w-full flex-grow gap-0 no-wrap overflow-hidden"):
            render_sidebar()

            with ui.column().classes("flex-grow h-full gap-0"):
                # Messages
                with (
                    ui.scroll_area().classes("flex-grow w-full bg-gray-100"),
                    ui.column().classes("w-full p-5"),
                ):
                    messages_container = ui.column().classes("w-full gap-4")

                # Input
                with ui.column().classes("w-full p-4 gap-2 bg-white border-t"):
                    attachment_row = ui.row().classes("pending-chip items-center gap-2 px-3 py-1")

                    upload = (
                        ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                        .props('accept=".pdf,.txt"')
                        .classes("hidden")
                    )

                    with ui.row().classes("w-full gap-2 items-end no-wrap"):
                        attach_btn = (
                            ui.button(icon="attach_file", on_click=lambda: upload.run_method("pickFiles"))
                            .props("flat round")
                            .tooltip("Upload PDF or Text document")
                        )
                        input_field = (
                            ui.textarea(
                                placeholder="Type your message here or upload a draft for review...",
                                on_change=update_controls,
                            )
                            .props("autogrow outlined dense rows=1")
                            .classes("flex-grow")
                            .on("keydown.enter.exact.prevent", send_message)
                        )
                        send_btn = (
                            ui.button("Send", on_click=send_message)
                            .props("unelevated text-color=white")
                            .classes("send-btn")
                        )

                    ui.label(
                        "Disclaimer: This tool is for brainstorming. "
                        "Always check advice with an official RITE mentor."
                    ).classes("w-full text-center text-[10px] italic text-gray-400")

    refresh()
    ui.timer(0.1, start_session, once=True)
