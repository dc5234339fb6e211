"""Test suite for the Password Safe client.

- unit/: domain logic, settings, retry policy and logging in isolation
- integration/: HTTP-level tests against a mocked Password Safe API (respx)
"""
