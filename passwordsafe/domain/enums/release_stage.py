"""Stages of the managed-account credential-release handshake.

Stages run strictly in order for each managed account reference:

    LOOKUP -> REQUEST_CREATE -> CREDENTIAL_FETCH -> CHECK_IN

A failure at any stage ends the handshake for that reference. The stage is
recorded on the returned error so callers know how far the handshake got.
"""

from enum import Enum


class ReleaseStage(str, Enum):
    """Credential-release handshake stage."""

    PARSE = "parse"
    LOOKUP = "lookup"
    REQUEST_CREATE = "request_create"
    CREDENTIAL_FETCH = "credential_fetch"
    CHECK_IN = "check_in"
