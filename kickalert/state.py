from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .models import LeagueSummary


class RunPhase(Enum):
    """Run phase definitions for the check state machine"""
    START = "start"
    AUTHENTICATING = "authenticating"
    RESOLVING_BUDGET = "resolving_budget"
    ALERTING = "alerting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SessionState:
    """Authenticated session plus league cache for one account.

    Lives in process memory only. A warm process reuses the same instance
    across runs; `lock` serializes overlapping runs.
    """

    token: Optional[str] = None
    expiry: Optional[datetime] = None
    leagues: List[LeagueSummary] = field(default_factory=list)
    phase: RunPhase = RunPhase.START
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    def reset(self) -> None:
        self.token = None
        self.expiry = None
        self.leagues = []
        self.phase = RunPhase.START


# Process-wide session (module-level singleton)
SESSION = SessionState()
