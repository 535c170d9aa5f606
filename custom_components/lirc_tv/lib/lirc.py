from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

log = logging.getLogger("lirctv.dispatch")

DEFAULT_PORT = 8765
DELAY_PREFIX = "DELAY|"


class LircError(Exception):
    """Base class for failures while dispatching a command sequence."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class LircConnectionError(LircError):
    """The daemon could not be reached."""


class LircWriteError(LircError):
    """Connected, but the request could not be transmitted."""


class LircTimeoutError(LircError):
    """Connect or write took longer than the configured timeout."""


class InvalidCommandError(LircError, ValueError):
    """A token could not be parsed."""


@dataclass(frozen=True, slots=True)
class Delay:
    milliseconds: int


@dataclass(frozen=True, slots=True)
class Send:
    key: str


Token = Union[Delay, Send]


def parse_token(raw: str) -> Token:
    """Turn a raw string into a Delay or a Send token.

    A token is a delay if and only if it starts with ``DELAY|``; the rest must
    be an unsigned base-10 millisecond count, surrounding spaces allowed.
    Anything else is a key name, which must be ASCII without whitespace.
    """

    if raw.startswith(DELAY_PREFIX):
        value = raw[len(DELAY_PREFIX):].strip()
        if not (value.isascii() and value.isdigit()):
            raise InvalidCommandError(f"Invalid delay token: {raw!r}", key=raw)
        return Delay(int(value, 10))
    # one request per line, fields split on single spaces
    if not raw or not raw.isascii() or any(ch.isspace() for ch in raw):
        raise InvalidCommandError(f"Invalid key: {raw!r}", key=raw)
    return Send(raw)


def parse_sequence(raw: Iterable[str]) -> List[Token]:
    return [parse_token(item) for item in raw]


def format_request(remote: str, key: str) -> bytes:
    return f"SEND_ONCE {remote} {key}\r\n".encode("ascii")


async def _async_open(host: str, port: int):
    return await asyncio.open_connection(host, port)


class LircController:
    """Send command sequences to a LIRC daemon, one connection per key.

    Tokens run strictly in order: a delay token only sleeps, any other token
    opens a fresh TCP connection, writes ``SEND_ONCE <remote> <key>``, closes
    it and then waits ``delay`` milliseconds. The first transport failure
    aborts the rest of the sequence.

    Overlapping calls to :meth:`async_send_commands` are not serialized here.
    """

    def __init__(
        self,
        host: str,
        port: Optional[int] = None,
        remote: str = "",
        delay: int = 0,
        *,
        timeout: Optional[float] = None,
    ) -> None:
        if not host:
            raise ValueError("host is required")
        if not remote:
            raise ValueError("remote is required")
        self.host = host
        self.port = port or DEFAULT_PORT
        self.remote = remote
        self.delay = delay or 0
        self.timeout = timeout or None

    def __repr__(self) -> str:
        return f"LircController({self.host}:{self.port}, remote={self.remote!r})"

    async def async_send_commands(self, keys: Iterable[str]) -> None:
        tokens = parse_sequence(keys)
        for token in tokens:
            if isinstance(token, Delay):
                log.info("Delaying for %sms", token.milliseconds)
                await asyncio.sleep(token.milliseconds / 1000)
            else:
                await self._async_send_once(token.key)
                if self.delay:
                    await asyncio.sleep(self.delay / 1000)

    async def _async_send_once(self, key: str) -> None:
        request = format_request(self.remote, key)

        try:
            _reader, writer = await self._with_timeout(
                _async_open(self.host, self.port),
                f"Timed out connecting to {self.host}:{self.port} for {key}",
                key,
            )
        except OSError as err:
            log.error("Could not connect to %s:%s: %s", self.host, self.port, err)
            raise LircConnectionError(
                f"Could not connect to {self.host}:{self.port} for {key}: {err}", key=key
            ) from err

        log.info("Sending command to LIRC: %s", request.decode("ascii").rstrip())
        try:
            writer.write(request)
            await self._with_timeout(writer.drain(), f"Timed out sending {key}", key)
        except OSError as err:
            log.error("Could not send %s: %s", key, err)
            raise LircWriteError(f"Could not send {key}: {err}", key=key) from err
        finally:
            writer.close()

    async def _with_timeout(self, awaitable, message: str, key: str):
        if self.timeout is None:
            return await awaitable
        try:
            async with asyncio.timeout(self.timeout) as deadline:
                return await awaitable
        except TimeoutError as err:
            # ETIMEDOUT from the socket is a TimeoutError too
            if not deadline.expired():
                raise
            log.error(message)
            raise LircTimeoutError(message, key=key) from err


__all__ = [
    "DEFAULT_PORT",
    "DELAY_PREFIX",
    "Delay",
    "InvalidCommandError",
    "LircConnectionError",
    "LircController",
    "LircError",
    "LircTimeoutError",
    "LircWriteError",
    "Send",
    "Token",
    "format_request",
    "parse_sequence",
    "parse_token",
]
