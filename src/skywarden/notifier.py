import requests

from .clients import get_http_session
from .core import DEFAULT_NOTIFY_URL, NOTIFY_TIMEOUT_SECONDS
from .logger import logger


class Notifier:
    """
    Fire-and-forget delivery of operator messages.
    Failures are logged here and never reach the caller.
    """

    def __init__(
        self,
        url: str = DEFAULT_NOTIFY_URL,
        timeout: float = NOTIFY_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or get_http_session()

    def notify(self, message: str) -> bool:
        """Returns True when the endpoint answered with a 2xx status."""
        try:
            resp = self.session.post(
                self.url, json={"message": message}, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Notification POST failed: {e}")
            return False

        if not 200 <= resp.status_code < 300:
            logger.error(f"Notification endpoint returned non-2xx status: {resp.status_code}")
            return False

        return True
