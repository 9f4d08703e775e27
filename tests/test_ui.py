"""Tests for the Textual TUI."""
import logging

import httpx
import pytest
from stubs import ProxyStub, reply_response

from avachat.conversation import ConversationStore, Message
from avachat.ui import (
    AvaChatApp,
    DebugPanel,
    DebugPanelHandler,
    LogLevel,
    PromptInput,
    TranscriptView,
)
from avachat.ui.callbacks import component_for


async def _type_and_submit(app: AvaChatApp, pilot, text: str) -> None:
    await pilot.press(*text)
    await pilot.press("enter")
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


class TestAvaChatApp:
    """Pilot-driven tests for the chat screen."""

    @pytest.mark.asyncio
    async def test_enter_sends_prompt_and_shows_reply(self, make_dispatcher):
        stub = ProxyStub(reply_response("Hi!"))
        dispatcher = make_dispatcher(stub)
        app = AvaChatApp(dispatcher)

        async with app.run_test() as pilot:
            await _type_and_submit(app, pilot, "hello")

            assert dispatcher.store.messages == (Message.user("hello"), Message.assistant("Hi!"))
            assert app.query_one("#prompt-input", PromptInput).value == ""
            assert app.query_one("#transcript", TranscriptView).messages == dispatcher.store.messages
            assert not app.query_one("#prompt-input", PromptInput).disabled

        assert stub.bodies == [{"messages": [{"role": "user", "content": "hello"}]}]

    @pytest.mark.asyncio
    async def test_failed_request_keeps_input(self, make_dispatcher):
        stub = ProxyStub(httpx.Response(500))
        dispatcher = make_dispatcher(stub)
        app = AvaChatApp(dispatcher)

        async with app.run_test() as pilot:
            await _type_and_submit(app, pilot, "hello")

            assert dispatcher.store.messages == ()
            assert dispatcher.store.pending_input == "hello"
            assert app.query_one("#prompt-input", PromptInput).value == "hello"

        assert len(stub.requests) == 1

    @pytest.mark.asyncio
    async def test_new_conversation_clears_everything(self, make_dispatcher):
        store = ConversationStore()
        store.append([Message.user("a"), Message.assistant("b")])
        store.set_pending_input("draft")
        app = AvaChatApp(make_dispatcher(ProxyStub(reply_response("unused")), store=store))

        async with app.run_test() as pilot:
            assert app.query_one("#prompt-input", PromptInput).value == "draft"

            await pilot.press("ctrl+n")
            await pilot.pause()

            assert store.messages == ()
            assert store.pending_input == ""
            assert app.query_one("#prompt-input", PromptInput).value == ""
            assert app.query_one("#transcript", TranscriptView).messages == ()

    @pytest.mark.asyncio
    async def test_assistant_bubbles_are_indented(self, make_dispatcher):
        store = ConversationStore()
        store.append([Message.user("Hello"), Message.assistant("Hi!")])
        app = AvaChatApp(make_dispatcher(ProxyStub(reply_response("unused")), store=store))

        async with app.run_test() as pilot:
            await pilot.pause()
            user_bubble = app.query_one(".user-message")
            assistant_bubble = app.query_one(".assistant-message")

            assert user_bubble.styles.margin.left == 0
            assert assistant_bubble.styles.margin.left == 10
            assert assistant_bubble.region.x > user_bubble.region.x

    @pytest.mark.asyncio
    async def test_log_panel_renders_entries(self, make_dispatcher):
        app = AvaChatApp(make_dispatcher(ProxyStub(reply_response("unused"))))

        async with app.run_test() as pilot:
            await pilot.press("f2")
            await pilot.pause()
            panel = app.query_one("#debug-panel", DebugPanel)
            panel.write_entry("TUI", "panel entry", LogLevel.ERROR)
            await pilot.pause()

            assert panel.display
            assert any("[TUI] panel entry" in line.text for line in panel.lines)

    @pytest.mark.asyncio
    async def test_logger_state_restored_after_exit(self, make_dispatcher):
        package_logger = logging.getLogger("avachat")
        before = (package_logger.level, package_logger.propagate, list(package_logger.handlers))
        app = AvaChatApp(make_dispatcher(ProxyStub(reply_response("unused"))))

        async with app.run_test():
            assert any(isinstance(h, DebugPanelHandler) for h in package_logger.handlers)

        after = (package_logger.level, package_logger.propagate, list(package_logger.handlers))
        assert after == before


class _RecordingPanel:
    def __init__(self) -> None:
        self.entries: list[tuple[str, str, int]] = []

    def write_entry(self, component: str, message: str, level: int) -> None:
        self.entries.append((component, message, level))


class TestDebugPanelHandler:
    """Tests for routing log records into the panel."""

    def test_forwards_records(self):
        panel = _RecordingPanel()
        handler = DebugPanelHandler(panel)  # type: ignore[arg-type]
        logger = logging.getLogger("avachat.dispatch.dispatcher.test")
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        try:
            logger.warning("Rate limited: Too Many Requests (attempt %d)", 1)
        finally:
            logger.removeHandler(handler)

        assert panel.entries == [
            ("Dispatch", "Rate limited: Too Many Requests (attempt 1)", LogLevel.WARNING),
        ]

    @pytest.mark.parametrize(
        ("name", "component"),
        [
            ("avachat.dispatch.dispatcher", "Dispatch"),
            ("avachat.dispatch.client", "HTTP"),
            ("avachat.conversation.store", "Store"),
            ("avachat.ui.app", "TUI"),
            ("somewhere.else", "else"),
        ],
    )
    def test_component_for(self, name, component):
        assert component_for(name) == component

    def test_log_level_names(self):
        assert LogLevel.from_string("WARNING") == logging.WARNING
        assert LogLevel.from_string("nonsense") == LogLevel.DEBUG
        assert LogLevel.name(LogLevel.ERROR) == "ERROR"
        assert LogLevel.name(99) == "UNKNOWN"
