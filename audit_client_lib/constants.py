"""
Fixed names shared by the builders, validators and the dispatcher.

Values that a deployment may want to change (service location, timeouts,
retry policy) live in :mod:`audit_client_lib.config` instead.
"""

# Env prefix used by ``AuditClientSettings``
MAIN_ENV_PREFIX = "AUDIT_CLIENT_"

DEFAULT_SERVICE_ID = "audit"
DEFAULT_SERVICE_URI = "https://localhost:8443/audit"
DEFAULT_DISCOVERY_URL = "http://localhost:8500"

# Base paths of the remote endpoints (appended after the service id)
AUDIT_BASE_PATH = "/v1/audit"
REPLAY_BASE_PATH = "/v1/replay"

# -------------------------------------------------------------------
# Replay request parameters
# -------------------------------------------------------------------
PATH_URI_PARAM = "pathUri"
SEND_RATE_PARAM = "sendRate"
REPLAY_UNFINISHED_FILES_PARAM = "replayUnfinishedFiles"

# -------------------------------------------------------------------
# Audit request parameters
# -------------------------------------------------------------------
QUERY_STRING = "query"
QUERY_AUTHORIZATIONS = "auths"
QUERY_USER_DN = "userDn"
QUERY_AUDIT_TYPE = "auditType"
QUERY_SECURITY_MARKING_COLVIZ = "columnVisibility"
QUERY_LOGIC_CLASS = "logicClass"

AUDIT_REQUIRED_PARAMS = [
    QUERY_STRING,
    QUERY_AUDIT_TYPE,
    QUERY_SECURITY_MARKING_COLVIZ,
    QUERY_LOGIC_CLASS,
    QUERY_USER_DN,
    QUERY_AUTHORIZATIONS,
]

# Field name reported when a request carries no caller identity
CALLER_IDENTITY_FIELD = "caller_identity"
TARGET_ID_FIELD = "id"
