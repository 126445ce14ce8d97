"""Development-server client: find a server on the LAN and follow its commands."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

import websockets

logger = logging.getLogger(__name__)

DEV_SERVER_PORT = 15194
BROADCAST_HOST = "255.255.255.255"
DISCOVER_REQUEST = b"SRT_DISCOVER"
DISCOVER_REPLY = b"SRT_SERVER"
DISCOVER_TIMEOUT = 2.0
RETRY_DELAY = 3.0
DEFAULT_VERSION = "0.0.0-dev"


@dataclass(frozen=True)
class Reload:
    """Replace the running script with new source."""

    code: str


@dataclass(frozen=True)
class Stop:
    """Go back to the default script."""


Command = Union[Reload, Stop]


def parse_message(text: str) -> Optional[Command]:
    """The command carried by a server message, or None if it carries none."""
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    kind = data.get("type")
    if kind == "reload":
        code = data.get("code")
        return Reload(code) if isinstance(code, str) else None
    if kind == "stop":
        return Stop()
    return None


def info_message(version: str, platform_name: str) -> str:
    """The greeting sent to the server after connecting."""
    return json.dumps(
        {"type": "info", "platform": platform_name, "version": version},
        separators=(",", ":"),
    )


def _os_name() -> str:
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform == "darwin":
        return "macos"
    if sys.platform in ("win32", "cygwin"):
        return "windows"
    return sys.platform


def _version() -> str:
    return os.environ.get("SOLIDRT_VERSION", DEFAULT_VERSION)


class _DiscoveryProtocol(asyncio.DatagramProtocol):
    def __init__(self) -> None:
        self.replies: asyncio.Queue[tuple[bytes, Any]] = asyncio.Queue()

    def datagram_received(self, data: bytes, addr: Any) -> None:
        self.replies.put_nowait((data, addr))

    def error_received(self, exc: Exception) -> None:
        logger.warning("[sgo] UDP recv error: %s", exc)


async def _discover(host: str, port: int, timeout: float, retry_delay: float) -> str:
    loop = asyncio.get_running_loop()
    transport, protocol = await loop.create_datagram_endpoint(
        _DiscoveryProtocol, local_addr=("0.0.0.0", 0), allow_broadcast=True
    )
    try:
        while True:
            try:
                transport.sendto(DISCOVER_REQUEST, (host, port))
            except OSError as exc:
                logger.warning("[sgo] UDP send failed: %s", exc)
            try:
                data, addr = await asyncio.wait_for(protocol.replies.get(), timeout)
            except asyncio.TimeoutError:
                logger.debug("[sgo] No dev server found, retrying...")
            else:
                if data == DISCOVER_REPLY:
                    address = f"{addr[0]}:{port}"
                    logger.info("[sgo] Discovered dev server at %s", address)
                    return address
            await asyncio.sleep(retry_delay)
    finally:
        transport.close()


async def discover_server(
    port: int = DEV_SERVER_PORT,
    timeout: float = DISCOVER_TIMEOUT,
    retry_delay: float = RETRY_DELAY,
) -> str:
    """Broadcast discovery requests until a server answers; return its host:port."""
    logger.info("[sgo] Starting UDP discovery on port %d...", port)
    return await _discover(BROADCAST_HOST, port, timeout, retry_delay)


async def listen(
    address: str,
    on_command: Callable[[Command], Any],
    retry_delay: float = RETRY_DELAY,
) -> None:
    """Stay connected to the server at host:port, passing every command to on_command."""
    uri = f"ws://{address}/"
    logger.info("[sgo] Connecting to %s...", uri)
    while True:
        connected = False
        try:
            async with websockets.connect(uri) as ws:
                connected = True
                logger.info("[sgo] Connected to %s", uri)
                await ws.send(info_message(_version(), _os_name()))
                async for message in ws:
                    if not isinstance(message, str):
                        continue
                    command = parse_message(message)
                    if command is not None:
                        on_command(command)
        except (OSError, asyncio.TimeoutError, websockets.exceptions.WebSocketException) as exc:
            if not connected:
                logger.warning(
                    "[sgo] Connection failed: %s, retrying in %ss...", exc, retry_delay
                )
                await asyncio.sleep(retry_delay)
                continue
        logger.warning("[sgo] Connection lost, reconnecting in %ss...", retry_delay)
        await asyncio.sleep(retry_delay)


async def run(on_command: Callable[[Command], Any]) -> None:
    """Discover a development server and follow its commands for good."""
    address = await discover_server()
    await listen(address, on_command)