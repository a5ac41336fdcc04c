from collections.abc import Callable

import requests

from .clients import get_http_session
from .core import (
    KEY_INSTANCE_ID,
    KEY_INSTANCE_NAME,
    KEY_MACHINE_TYPE,
    KEY_MAINTENANCE_EVENT,
    KEY_PREEMPTED,
    KEY_PROJECT_ID,
    KEY_ZONE,
    METADATA_BASE_URL,
    METADATA_HEADERS,
    METADATA_TIMEOUT_SECONDS,
    PREEMPTED_VALUE,
    UNKNOWN_NAME,
)
from .errors import MetadataError, MetadataNotOK, MetadataUnavailable, StartupError
from .logger import logger
from .models import InstanceIdentity, short_name


class MetadataClient:
    """
    Reads facts about the running VM from the GCP metadata server.
    Every request carries the Metadata-Flavor header and a short timeout.
    """

    def __init__(
        self,
        base_url: str = METADATA_BASE_URL,
        timeout: float = METADATA_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.session = session or get_http_session()

    def get(self, key: str) -> str:
        try:
            resp = self.session.get(
                self.base_url + key,
                headers=METADATA_HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise MetadataUnavailable(key, f"HTTP request failed: {e}") from e

        if resp.status_code != 200:
            raise MetadataNotOK(key, resp.status_code)

        return resp.text

    def fetch_identity(
        self,
        placeholder: str = UNKNOWN_NAME,
        get: Callable[[str], str] | None = None,
    ) -> InstanceIdentity:
        """
        Reads the static identity of this VM.
        The name is cosmetic and falls back to a placeholder; the others are
        required for self-termination and raise StartupError.

        `get` replaces self.get for each individual read, so a caller can
        put its own deadline around every key.
        """
        read = get or self.get

        def required(key: str) -> str:
            try:
                return read(key).strip()
            except MetadataError as e:
                raise StartupError(key, e) from e

        instance_id = required(KEY_INSTANCE_ID)

        try:
            name = read(KEY_INSTANCE_NAME).strip()
        except MetadataError as e:
            logger.warning(f"Failed to get instance name: {e}")
            name = placeholder

        # Zone and machine type come back as full paths
        zone = short_name(required(KEY_ZONE))
        machine_type = short_name(required(KEY_MACHINE_TYPE))
        project_id = required(KEY_PROJECT_ID)

        return InstanceIdentity(
            id=instance_id,
            name=name,
            zone=zone,
            machine_type=machine_type,
            project_id=project_id,
        )

    def is_preempted(self) -> bool:
        # GCP flips this to "TRUE" roughly 30 seconds before reclaiming the VM
        return self.get(KEY_PREEMPTED).strip() == PREEMPTED_VALUE

    def maintenance_event(self) -> str:
        return self.get(KEY_MAINTENANCE_EVENT).strip()
