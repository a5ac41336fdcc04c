from typing import Any

from google.auth.credentials import Credentials
from google.cloud import compute_v1

from .clients import get_compute_instances_client
from .core import TERMINATE_TIMEOUT_SECONDS
from .errors import TerminationError
from .logger import logger


class InstanceTerminator:
    """
    Deletes a VM through the Compute Engine API.

    Credentials are injectable; without them the shared client built from
    Application Default Credentials is used.
    """

    def __init__(
        self,
        credentials: Credentials | None = None,
        timeout: float = TERMINATE_TIMEOUT_SECONDS,
    ):
        self.credentials = credentials
        self.timeout = timeout

    def _client(self) -> Any:
        if self.credentials is not None:
            return compute_v1.InstancesClient(credentials=self.credentials)
        return get_compute_instances_client()

    def terminate(self, project_id: str, zone: str, instance_name: str) -> None:
        """
        Issues a single delete request. Does not wait for the operation to
        finish; the VM running this code is the one being deleted.
        """
        request = compute_v1.DeleteInstanceRequest(
            project=project_id, zone=zone, instance=instance_name
        )
        try:
            self._client().delete(request=request, timeout=self.timeout)
        except Exception as e:
            raise TerminationError(f"failed to delete instance {instance_name}: {e}") from e

        logger.info(f"Delete requested for {project_id}/{zone}/{instance_name}")
