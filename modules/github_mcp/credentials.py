"""Per-request GitHub credential resolution."""

from __future__ import annotations


class CredentialResolver:
    """Pick the credential attached to outbound GitHub calls.

    Priority:
    1. The request-scoped token (``X-GITHUB-TOKEN``)
    2. The process-wide fallback (``GITHUB_PAT_FOR_PROJECT``)
    3. ``None``: the call goes out unauthenticated
    """

    def __init__(self, fallback: str | None = None):
        self._fallback = (fallback or "").strip() or None

    def resolve(self, request_credential: str | None = None) -> str | None:
        if request_credential and request_credential.strip():
            return request_credential.strip()
        return self._fallback
