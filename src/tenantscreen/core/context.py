from __future__ import annotations

from dataclasses import dataclass

from .identities import IdentityRotation
from .session import SessionCredentialCache


@dataclass(slots=True)
class ScreeningContext:
    """Shared mutable state for screening runs.

    Both members synchronise internally; one context is shared by every
    request in the process.
    """

    credentials: SessionCredentialCache
    identities: IdentityRotation
