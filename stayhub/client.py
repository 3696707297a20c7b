import time

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from .config import Config
from .logger import setup_logger

logger = setup_logger(__name__)


def _server_error(response: httpx.Response) -> bool:
    return response.status_code >= 500


def _log_retry(retry_state):
    outcome = retry_state.outcome
    if outcome.failed:
        reason = repr(outcome.exception())
    else:
        reason = f"HTTP {outcome.result().status_code}"
    logger.warning("Profile fetch failed (%s), attempt %d", reason, retry_state.attempt_number)


def _give_up(retry_state):
    logger.error("Profile fetch gave up after %d attempts", retry_state.attempt_number)
    return None


class ProfileClient:
    """
    Client for the profile endpoint.

    Server errors (HTTP >= 500) and network failures are retried with a fixed
    delay, up to ``retries`` extra attempts. Client errors are not retried.
    """

    def __init__(
        self,
        base_url: str = Config.PROFILE_API_URL,
        retries: int = Config.PROFILE_FETCH_RETRIES,
        delay: float = Config.PROFILE_FETCH_DELAY,
        transport: httpx.BaseTransport | None = None,
        sleep=time.sleep,
    ):
        self.retries = retries
        self.delay = delay
        self._sleep = sleep
        self._client = httpx.Client(base_url=base_url, transport=transport, timeout=10.0)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def fetch_profile(self, user_id: str, token: str) -> dict | None:
        """Return the profile dict, or None if it could not be fetched."""

        @retry(
            stop=stop_after_attempt(self.retries + 1),
            wait=wait_fixed(self.delay),
            retry=retry_if_exception_type(httpx.TransportError) | retry_if_result(_server_error),
            before_sleep=_log_retry,
            retry_error_callback=_give_up,
            sleep=self._sleep,
        )
        def _post():
            return self._client.post(
                "/api/profile",
                json={"userId": user_id},
                headers={"Authorization": f"Bearer {token}"},
            )

        response = _post()
        if response is None:
            return None

        if response.is_error:
            logger.error("Profile fetch for %s failed with HTTP %d", user_id, response.status_code)
            return None

        data = response.json()
        if data.get("success") and data.get("profile"):
            return data["profile"]
        return None
