"""Centralized constants for the Password Safe client.

This module contains constants that are wire-protocol or implementation
details, NOT per-deployment configuration. For configurable values use
`passwordsafe/core/config.py` instead.

Categories:
- API paths: endpoint segments relative to the base API URL
- Headers: authorization prefixes and content types
- Access requests: defaults for the credential-release handshake
- Retry: backoff defaults
- Limits: validation bounds for inputs
"""

# =============================================================================
# API Paths
# =============================================================================

API_PATH_SEGMENT: str = "/BeyondTrust/api/public/v"
"""Fixed segment every base API URL must contain."""

TOKEN_PATH: str = "Auth/connect/token"
SIGN_APP_IN_PATH: str = "Auth/SignAppIn"
SIGN_OUT_PATH: str = "Auth/Signout"
MANAGED_ACCOUNTS_PATH: str = "ManagedAccounts"
REQUESTS_PATH: str = "Requests"
CREDENTIALS_PATH: str = "Credentials"
SECRETS_PATH: str = "secrets-safe/secrets"
MANAGED_SYSTEMS_PATH: str = "ManagedSystems"


# =============================================================================
# Headers
# =============================================================================

BEARER_PREFIX: str = "Bearer "
"""HTTP Authorization header prefix for Bearer tokens."""

API_KEY_PREFIX: str = "PS-Auth key="
"""HTTP Authorization header prefix for static API keys."""

CONTENT_TYPE_JSON: str = "application/json"
CONTENT_TYPE_FORM: str = "application/x-www-form-urlencoded"

CLIENT_CREDENTIALS_GRANT: str = "client_credentials"


# =============================================================================
# Access Requests
# =============================================================================

DEFAULT_REQUEST_DURATION_MINUTES: int = 5
"""Lifetime of an access request created for a single credential fetch."""

DEFAULT_REQUEST_REASON: str = "Credential retrieval"

CONFLICT_OPTION_REUSE: str = "reuse"
"""Return an already open request for the account instead of failing."""

REQUEST_ID_MASK: str = "****"
"""Replacement for request ids in log lines."""


# =============================================================================
# Timeouts and Retry
# =============================================================================

CLIENT_TIMEOUT_SECONDS_DEFAULT: int = 30

RETRY_INITIAL_INTERVAL_SECONDS: float = 0.5
RETRY_MULTIPLIER: float = 1.5
RETRY_RANDOMIZATION_FACTOR: float = 0.5
RETRY_MAX_INTERVAL_SECONDS: float = 60.0
RETRY_MAX_ELAPSED_TIME_SECONDS: float = 120.0


# =============================================================================
# Limits
# =============================================================================

DEFAULT_SEPARATOR: str = "/"

MAX_FILE_SECRET_SIZE_BYTES_DEFAULT: int = 4_000_000
MAX_FILE_SECRET_SIZE_BYTES_LIMIT: int = 5_000_000

MAX_SYSTEM_NAME_LENGTH: int = 128
MAX_ACCOUNT_NAME_LENGTH: int = 245
MAX_SECRET_PATH_LENGTH: int = 1792
MAX_SECRET_TITLE_LENGTH: int = 256
MAX_SECRET_PATH_DEPTH: int = 7
