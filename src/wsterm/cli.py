from __future__ import annotations

import asyncio
import contextlib
import sys
import threading
from collections.abc import AsyncIterator

import click

from wsterm.constants import STATUS_DISCONNECTED
from wsterm.core.session import SessionChange
from wsterm.core.terminal import TerminalModel
from wsterm.logging import configure_logging, get_logger
from wsterm.settings import Settings

logger = get_logger(__name__)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def cli() -> None:
    """wsterm command line interface."""


@cli.command("connect")
@click.option("--url", default=None, help="WebSocket endpoint. Defaults to WSTERM_SERVER_URL.")
@click.option("--token", default=None, help="Bearer credential. Defaults to WSTERM_TOKEN.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Overrides WSTERM_LOG_LEVEL.",
)
def connect(url: str | None, token: str | None, log_level: str | None) -> None:
    """Open a session and relay stdin lines to the remote shell.

    Remote output is written to stdout as it arrives; connection status goes
    to stderr. Ends on EOF or when the connection drops.
    """
    settings = Settings()
    configure_logging(settings, level=log_level)

    model = TerminalModel(settings=settings)
    if url is not None:
        model.server_url = url
    if token is not None:
        model.token = token

    exit_code = asyncio.run(run_interactive(model, _stdin_lines()))
    sys.exit(exit_code)


async def run_interactive(model: TerminalModel, lines: AsyncIterator[str]) -> int:
    """Drive ``model`` from ``lines`` until they run out or the session ends.

    Returns:
        0 after a user-initiated disconnect, 1 on any failure
    """
    ended = asyncio.Event()

    def _on_change(change: SessionChange) -> None:
        if change.kind == "output":
            click.echo(change.text, nl=False)
            return
        click.echo(f"[{change.status}]", err=True)
        if not change.connected:
            ended.set()

    model.watch(_on_change)
    await model.toggle_connection()
    if not model.connected:
        return 1

    pump = asyncio.create_task(_pump(model, lines))
    waiter = asyncio.create_task(ended.wait())
    try:
        await asyncio.wait({pump, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (pump, waiter):
            task.cancel()
        await asyncio.gather(pump, waiter, return_exceptions=True)

    if model.connected:
        await model.toggle_connection()
    await model.session.wait_closed()

    return 0 if model.status == STATUS_DISCONNECTED else 1


async def _pump(model: TerminalModel, lines: AsyncIterator[str]) -> None:
    async for line in lines:
        model.input = line.rstrip("\r\n")
        if not await model.send_line():
            logger.info("cli_line_dropped", status=model.status)


async def _stdin_lines() -> AsyncIterator[str]:
    """Yield stdin lines without blocking the event loop.

    A daemon thread does the blocking reads so an idle prompt never holds up
    interpreter shutdown.
    """
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[str | None] = asyncio.Queue()

    def _reader() -> None:
        # The loop may already be closed when input arrives after exit
        with contextlib.suppress(RuntimeError):
            for line in sys.stdin:
                loop.call_soon_threadsafe(queue.put_nowait, line)
            loop.call_soon_threadsafe(queue.put_nowait, None)

    threading.Thread(target=_reader, name="wsterm-stdin", daemon=True).start()

    while (line := await queue.get()) is not None:
        yield line
