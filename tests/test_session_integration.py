"""End-to-end session tests over a real WebSocket connection."""

from __future__ import annotations

import pytest

from wsterm.core.session import Session, SessionState

from .fakes import wait_until
from .mock_ws_server import MockShellServer


@pytest.mark.asyncio
async def test_connect_send_receive_disconnect() -> None:
    async with MockShellServer() as server:
        session = Session()

        session.initiate(server.url, "")
        assert session.state is SessionState.CONNECTED
        assert session.status == "Connected"

        assert await session.submit_line("help") is True
        assert await server.wait_for_frames(1) == ["help\n"]
        await wait_until(lambda: session.output.endswith("ok\n"))

        await session.terminate()
        assert session.state is SessionState.DISCONNECTED
        assert session.status == "Disconnected"
        assert await server.wait_for_close() == [1001]

        assert await session.submit_line("after") is False
        assert server.received == ["help\n"]


@pytest.mark.asyncio
async def test_lines_arrive_in_order() -> None:
    async with MockShellServer(reply=lambda message: []) as server:
        session = Session()
        session.initiate(server.url)

        for line in ("a", "b", "c"):
            await session.submit_line(line)

        assert await server.wait_for_frames(3) == ["a\n", "b\n", "c\n"]
        await session.terminate()


@pytest.mark.asyncio
async def test_bearer_credential_on_handshake() -> None:
    async with MockShellServer(token="t0k3n") as server:
        session = Session()
        session.initiate(server.url, "t0k3n")

        assert await session.submit_line("whoami") is True
        await wait_until(lambda: session.output == "ok\n")
        assert server.request_headers[0]["Authorization"] == "Bearer t0k3n"

        await session.terminate()


@pytest.mark.asyncio
async def test_rejected_credential_reports_connect_error() -> None:
    async with MockShellServer(token="t0k3n") as server:
        session = Session()
        session.initiate(server.url, "wrong")

        await wait_until(lambda: not session.connected)
        assert session.status.startswith("Connect error: ")
        assert "401" in session.status


@pytest.mark.asyncio
async def test_binary_output_decoded_leniently() -> None:
    async with MockShellServer(greeting=b"caf\xc3\xa9\xfe\n") as server:
        session = Session()
        session.initiate(server.url)

        await wait_until(lambda: session.output != "")
        assert session.output == "café�\n"

        await session.terminate()


@pytest.mark.asyncio
async def test_remote_close_reports_receive_error() -> None:
    async with MockShellServer() as server:
        session = Session()
        session.initiate(server.url)
        await session.submit_line("exit")
        await wait_until(lambda: session.output == "ok\n")

        await server.drop_clients(code=1000)

        await wait_until(lambda: not session.connected)
        assert session.state is SessionState.DISCONNECTED
        assert session.status.startswith("Receive error: ")

        await session.terminate()
        assert session.status.startswith("Receive error: ")


@pytest.mark.asyncio
async def test_reconnect_after_terminate() -> None:
    async with MockShellServer() as server:
        session = Session()
        session.initiate(server.url)
        await session.submit_line("one")
        await wait_until(lambda: session.output == "ok\n")
        await session.terminate()

        session.initiate(server.url)
        await session.submit_line("two")
        await wait_until(lambda: session.output == "ok\nok\n")

        assert server.received == ["one\n", "two\n"]
        await session.terminate()
