from datetime import timedelta

# GCP Metadata Server
METADATA_BASE_URL = "http://metadata.google.internal/computeMetadata/v1/"
METADATA_HEADERS = {"Metadata-Flavor": "Google"}
METADATA_TIMEOUT_SECONDS = 2.0

# Caller-side guard around every metadata probe, independent of the
# HTTP client's own timeout.
PROBE_TIMEOUT_SECONDS = 5.0

# Notification channel (JSON {"message": ...} relay in front of Slack)
DEFAULT_NOTIFY_URL = "https://v7uagcoglkqlufu7bah6luxjta0dsfht.lambda-url.us-east-2.on.aws"
NOTIFY_TIMEOUT_SECONDS = 10.0

# Compute API delete call
TERMINATE_TIMEOUT_SECONDS = 60.0

# Lifecycle timings
DEFAULT_TERMINATE_AFTER_HOURS = 24
GRACE_PERIOD = timedelta(minutes=15)
POLL_INTERVAL = timedelta(seconds=5)

UNKNOWN_NAME = "unknown"
DEFAULT_LOG_LEVEL = "INFO"

# Metadata keys
KEY_INSTANCE_ID = "instance/id"
KEY_INSTANCE_NAME = "instance/name"
KEY_ZONE = "instance/zone"
KEY_MACHINE_TYPE = "instance/machine-type"
KEY_PROJECT_ID = "project/project-id"
KEY_PREEMPTED = "instance/preempted"
KEY_MAINTENANCE_EVENT = "instance/maintenance-event"

PREEMPTED_VALUE = "TRUE"
MAINTENANCE_TERMINATE_VALUE = "TERMINATE_ON_HOST_MAINTENANCE"
