"""Internal constants shared across the library."""

BASE_URL = "https://api.paladins.com/paladinsapi.svc"
USER_AGENT = "pypaladins"

#: Remote method used to mint a new session.
CREATE_SESSION_METHOD = "createsession"

#: ``ret_msg`` value of a successful ``createsession`` call.
SESSION_APPROVED = "Approved"

#: Session lifetime granted by the API (12 minutes).
SESSION_TTL_SECONDS: float = 12 * 60

SESSION_CACHE_SUFFIX = "sessionId"

#: Soft-error messages that mean the cached session id was rejected.
INVALID_SESSION_MESSAGES: frozenset[str] = frozenset({"invalid session id"})

DEFAULT_MAX_TRIES = 3
DEFAULT_PLATFORM = 5
