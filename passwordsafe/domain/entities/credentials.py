"""Session credentials.

A session authenticates with either an OAuth client pair or a static API key,
never both. The two modes are distinct types so the choice is made once, at
construction time.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, kw_only=True)
class OAuthCredentials:
    """OAuth client-credentials pair exchanged for a bearer token.

    Attributes:
        client_id: OAuth client id.
        client_secret: OAuth client secret (excluded from repr).
    """

    client_id: str
    client_secret: str = field(repr=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class ApiKeyCredentials:
    """Static API key sent as `PS-Auth key=<api key>`.

    Attributes:
        api_key: API key (excluded from repr).
    """

    api_key: str = field(repr=False)


type SessionCredentials = OAuthCredentials | ApiKeyCredentials
