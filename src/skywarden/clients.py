from __future__ import annotations

from functools import lru_cache
from typing import Any

import requests
from google.cloud import compute_v1

# Shared Client Registry (Lazy-loaded and cached)


@lru_cache(maxsize=1)
def get_compute_instances_client() -> Any:
    # Application Default Credentials: on a VM this is the attached
    # service account, which needs compute.instances.delete on itself.
    return compute_v1.InstancesClient()


@lru_cache(maxsize=1)
def get_http_session() -> requests.Session:
    return requests.Session()
