"""Tests for the MCP wiring in server.py: result envelopes and shared state."""

from __future__ import annotations

import httpx
import pytest
import respx
from mcp.shared.memory import create_connected_server_and_client_session

from shadcn_mcp import server
from shadcn_mcp.errors import ErrorCode, ShadcnMcpError
from shadcn_mcp.models.tools import ToolOutput
from shadcn_mcp.server import mcp, run_tool

DIALOG_URL = (
    "https://raw.githubusercontent.com/shadcn-ui/ui/refs/heads/main/apps"
    "/www/content/docs/components/dialog.mdx"
)

EXPECTED_TOOLS = {
    "list-components",
    "get-component-docs",
    "install-component",
    "list-blocks",
    "get-block-docs",
    "install-blocks",
}


class TestRunTool:
    async def test_success_is_plain_text_result(self) -> None:
        async def handler() -> ToolOutput:
            return ToolOutput(text='["button"]')

        result = await run_tool("list-components", "Error fetching components list", handler())
        assert not result.isError
        assert result.content[0].text == '["button"]'

    async def test_expected_error_uses_message_and_suggestion(self) -> None:
        async def handler() -> ToolOutput:
            raise ShadcnMcpError(
                code=ErrorCode.BLOCK_NOT_FOUND,
                message="Block 'x' not found.",
                suggestion="Use list-blocks to see available blocks.",
            )

        result = await run_tool("get-block-docs", "Error fetching block documentation", handler())
        assert result.isError is True
        assert result.content[0].text == (
            "Block 'x' not found. Use list-blocks to see available blocks."
        )

    async def test_unexpected_error_is_prefixed_not_raised(self) -> None:
        async def handler() -> ToolOutput:
            raise RuntimeError("selector exploded")

        result = await run_tool("list-blocks", "Error fetching blocks", handler())
        assert result.isError is True
        assert result.content[0].text == "Error fetching blocks: selector exploded"


async def test_all_tools_registered() -> None:
    tools = await mcp.list_tools()
    assert {tool.name for tool in tools} == EXPECTED_TOOLS


async def test_install_tool_runtime_is_optional() -> None:
    tools = {tool.name: tool for tool in await mcp.list_tools()}
    schema = tools["install-component"].inputSchema
    assert "component" in schema["required"]
    assert "runtime" not in schema.get("required", [])


@pytest.fixture()
def shared_state(monkeypatch: pytest.MonkeyPatch) -> server.SharedState:
    """A fresh process-wide state holder wired into the server lifespan."""
    monkeypatch.setattr(server, "_setup_logging", lambda _settings: None)
    fresh = server.SharedState()
    monkeypatch.setattr(server, "_shared", fresh)
    return fresh


class TestSharedState:
    async def test_overlapping_sessions_share_one_state(
        self, shared_state: server.SharedState
    ) -> None:
        first = await shared_state.acquire()
        second = await shared_state.acquire()
        assert first is second
        assert first.http_client is not None

        await shared_state.release()
        assert not first.http_client.is_closed

        await shared_state.release()
        assert first.http_client.is_closed

    async def test_cache_outlives_sessions(self, shared_state: server.SharedState) -> None:
        first = await shared_state.acquire()
        await shared_state.release()

        second = await shared_state.acquire()
        try:
            assert second.cache is first.cache
            assert second.settings is first.settings
            assert second.http_client is not first.http_client
            assert second.http_client is not None
            assert not second.http_client.is_closed
        finally:
            await shared_state.release()


@respx.mock
async def test_sessions_share_component_cache(
    shared_state: server.SharedState, dialog_mdx: str
) -> None:
    route = respx.get(DIALOG_URL).mock(return_value=httpx.Response(200, text=dialog_mdx))

    for _ in range(2):
        async with create_connected_server_and_client_session(
            mcp._mcp_server  # pyright: ignore[reportPrivateUsage]
        ) as session:
            result = await session.call_tool("get-component-docs", {"component": "dialog"})
            assert not result.isError
            assert result.content[0].text == dialog_mdx  # type: ignore[union-attr]

    assert route.call_count == 1
