"""HTTP transport for a remote warehouse bot.

Endpoints (relative to ``{base_url}/{bot}``):

- ``PUT move/{direction}``: 200 moved, 405 wall in the way, 404 unknown bot
- ``GET scan/near``: JSON ``{"north": bool, ..., "items": [str, ...]}``
- ``GET scan/far``: JSON ``{"north": int, "east": int, "south": int, "west": int}``
- ``PUT reset``: return to the start position
"""

from __future__ import annotations

from typing import Callable, Optional, Tuple, TypeVar
from urllib import error, request

from pydantic import ValidationError
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from warehousebot.config import Config
from warehousebot.logging_utils import log_bot, log_debug, log_error
from warehousebot.warehouse import Direction

from .commands import (
    BotCommands,
    FarScan,
    HitWall,
    InvalidTarget,
    NearScan,
    ScanFailed,
    TransportError,
)

T = TypeVar("T")


def _perform_request(method: str, url: str, timeout: float) -> Tuple[int, str]:
    """Execute one blocking HTTP request and return ``(status, body)``.

    HTTP error statuses are returned, not raised; the caller decides what
    they mean. Only an unreachable server raises.
    """

    req = request.Request(url, method=method, headers={"Accept": "application/json"})
    try:
        with request.urlopen(req, timeout=timeout) as resp:
            return resp.status, resp.read().decode("utf-8")
    except error.HTTPError as exc:
        body = exc.read().decode("utf-8", errors="ignore") if exc.fp else ""
        return exc.code, body
    except error.URLError as exc:
        raise TransportError(f"Could not reach bot service at {url}: {exc.reason}") from exc
    except TimeoutError as exc:
        raise TransportError(f"Bot service at {url} timed out after {timeout}s") from exc


class RestBot(BotCommands):
    """Bot driven over the REST API.

    Transport failures (unreachable server, 5xx) are retried with exponential
    backoff; refusals such as ``HitWall`` are final and never retried.
    """

    def __init__(
        self,
        bot: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        backoff_seconds: float = 0.5,
    ):
        self.bot = bot or Config.BOT_NAME
        self.base_url = (base_url or Config.BOT_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else Config.BOT_REQUEST_TIMEOUT_SECONDS
        self.max_attempts = max_attempts if max_attempts is not None else Config.BOT_MAX_ATTEMPTS
        self.backoff_seconds = backoff_seconds

    def go(self, direction: Direction) -> None:
        log_bot(f"{self.bot} move {direction.value.lower()}")
        status, _ = self._call("PUT", f"move/{direction.value.lower()}")
        if status == 200:
            return
        if status == 405:
            raise HitWall(f"Bot {self.bot} hit a wall going {direction.value}")
        if status == 404:
            raise InvalidTarget(f"No such bot: {self.bot}")
        raise TransportError(f"Unexpected status {status} for move {direction.value}")

    def scan_near(self) -> NearScan:
        log_bot(f"{self.bot} scan near")
        body = self._scan("scan/near")
        return self._parse(NearScan, body)

    def scan_far(self) -> FarScan:
        log_bot(f"{self.bot} scan far")
        body = self._scan("scan/far")
        return self._parse(FarScan, body)

    def reset(self) -> None:
        log_bot(f"{self.bot} reset")
        status, _ = self._call("PUT", "reset")
        if status == 404:
            raise InvalidTarget(f"No such bot: {self.bot}")
        if status != 200:
            raise TransportError(f"Unexpected status {status} for reset")

    def _scan(self, path: str) -> str:
        status, body = self._call("GET", path)
        if status == 200:
            return body
        if status == 404:
            raise InvalidTarget(f"No such bot: {self.bot}")
        raise ScanFailed(f"{path} returned status {status}")

    @staticmethod
    def _parse(model: type[T], body: str) -> T:
        try:
            return model.model_validate_json(body)
        except ValidationError as exc:
            raise ScanFailed(f"Malformed {model.__name__} payload: {exc}") from exc

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{self.bot}/{path}"

    def _call(self, method: str, path: str) -> Tuple[int, str]:
        """Send a request, retrying transport failures and 5xx answers."""

        url = self._url(path)

        def _attempt() -> Tuple[int, str]:
            status, body = _perform_request(method, url, self.timeout)
            log_debug(f"HTTP {method} {url}: {status}")
            if status >= 500:
                raise TransportError(f"Bot service error {status} for {method} {path}")
            return status, body

        return self._with_retries(_attempt)

    def _with_retries(self, func: Callable[[], T]) -> T:
        attempt_number = 0
        for attempt in Retrying(
            retry=retry_if_exception_type(TransportError),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.backoff_seconds, max=5),
            reraise=True,
        ):
            with attempt:
                attempt_number += 1
                if attempt_number > 1:
                    log_error(f"Bot request retry {attempt_number}/{self.max_attempts}")
                return func()

        # Retrying with reraise=True exits via return or raise.
        raise RuntimeError("Bot retry mechanism exited unexpectedly")
