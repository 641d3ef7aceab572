'''
bounded retry with capped exponential backoff for the shellhttp client

Raises
------
NoAttemptsLeftError
    _raised when all attempts are exhausted, from the last transport error
    or naming the last retryable status_
'''

import asyncio
import dataclasses as dc
import logging
import ssl

import httpx

from shellhttp.http._config import (
    DEFAULT_RETRY_MAX,
    DEFAULT_RETRY_WAIT_MAX,
    DEFAULT_RETRY_WAIT_MIN,
)


class NoAttemptsLeftError(Exception):
    ...


_sleep = asyncio.sleep


def _caused_by(exc: BaseException, kind: type[BaseException]) -> bool:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, kind):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


@dc.dataclass(frozen=True, slots=True)
class RetryPolicy:
    '''
    How often and how long to wait before a failed request is sent again.

    `retry_max` counts retries after the first attempt; waits are in
    seconds.
    '''
    wait_min: float = DEFAULT_RETRY_WAIT_MIN
    wait_max: float = DEFAULT_RETRY_WAIT_MAX
    retry_max: int = DEFAULT_RETRY_MAX

    @property
    def attempts(self) -> int:
        return 1 + max(0, self.retry_max)

    def backoff(
        self,
        attempt_no: int,
        response: httpx.Response | None = None,
    ) -> float:
        '''
        The wait before the next attempt, `wait_min * 2**attempt_no`
        capped at `wait_max`. A numeric Retry-After on a 429 or 503
        response takes precedence.

        Parameters
        ----------
        attempt_no : int
            Zero-based number of the attempt that just failed.
        response : httpx.Response | None, optional

        Returns
        -------
        float
        '''
        if response is not None and response.status_code in (429, 503):
            retry_after = response.headers.get('Retry-After', '')
            if retry_after.isdigit():
                return float(retry_after)

        wait = self.wait_min * (2 ** attempt_no)
        return min(wait, self.wait_max)

    def should_retry(
        self,
        response: httpx.Response | None,
        exc: BaseException | None = None,
    ) -> bool:
        if exc is not None:
            if isinstance(exc, httpx.UnsupportedProtocol):
                return False
            if _caused_by(exc, ssl.SSLCertVerificationError):
                return False
            return isinstance(exc, httpx.TransportError)

        if response is None:
            return False
        status = response.status_code
        if status == 429:
            return True
        return status >= 500 and status != 501


class RetryTransport(httpx.AsyncBaseTransport):
    '''
    Sends requests through `inner`, retrying failed attempts according
    to `policy`. Attempts are logged to `logger` when one is given.
    '''
    def __init__(
        self,
        inner: httpx.AsyncBaseTransport,
        policy: RetryPolicy | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._inner = inner
        self.policy: RetryPolicy = policy or RetryPolicy()
        self._logger = logger

    @property
    def inner(self) -> httpx.AsyncBaseTransport:
        return self._inner

    def _log(self, message: str) -> None:
        if self._logger is not None:
            self._logger.debug(message)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        last_exc: httpx.TransportError | None = None
        reason = ''
        for attempt_no in range(self.policy.attempts):
            response: httpx.Response | None = None
            try:
                response = await self._inner.handle_async_request(request)
            except httpx.TransportError as exc:
                if not self.policy.should_retry(None, exc):
                    raise
                last_exc = exc
                reason = str(exc)
            else:
                if not self.policy.should_retry(response):
                    return response
                last_exc = None
                reason = f'last status {response.status_code}'

            if attempt_no == self.policy.attempts - 1:
                if response is not None:
                    await response.aclose()
                break

            wait = self.policy.backoff(attempt_no, response)
            if response is not None:
                status = response.status_code
                await response.aclose()
                self._log(
                    f'{request.method} {request.url} got {status}, '
                    f'retrying in {wait:.2f}s'
                )
            else:
                self._log(
                    f'{request.method} {request.url} failed: {last_exc}, '
                    f'retrying in {wait:.2f}s'
                )
            await _sleep(wait)

        raise NoAttemptsLeftError(
            f'{request.method} {request.url} giving up after '
            f'{self.policy.attempts} attempt(s): {reason}'
        ) from last_exc

    async def aclose(self) -> None:
        await self._inner.aclose()
