from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class LeagueSummary:
    """One league the account participates in."""

    id: str
    name: str = ""
    creator: str = ""
    creator_id: str = ""
    created_at: str = ""
    max_members: int = 0
    admin_count: int = 0
    member_count: int = 0
    is_commissioner: bool = False
    cpi: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "LeagueSummary":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            creator=data.get("creator") or "",
            creator_id=str(data.get("creatorId") or ""),
            created_at=data.get("creation") or "",
            max_members=int(data.get("maxMembers") or 0),
            admin_count=int(data.get("adminCount") or 0),
            member_count=int(data.get("memberCount") or 0),
            is_commissioner=bool(data.get("isCommissioner", False)),
            cpi=str(data.get("cpi") or ""),
        )

    def __bool__(self) -> bool:
        return bool(self.id)


def parse_leagues(items: List[Any]) -> List[LeagueSummary]:
    # Non-object entries keep their slot as a falsy placeholder
    return [LeagueSummary.from_api(item) if isinstance(item, dict) else LeagueSummary(id="") for item in items]


@dataclass
class LoginResult:
    token: str
    expiry: datetime
    leagues: Optional[List[LeagueSummary]] = None
    user: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BudgetSnapshot:
    """Budget of the primary league, as returned by /me/budget."""

    league_id: str
    current: int
    previous: Optional[int] = None
    spent: Optional[int] = None

    @classmethod
    def from_api(cls, league_id: str, data: Dict[str, Any]) -> "BudgetSnapshot":
        previous = data.get("pbas")
        spent = data.get("bs")
        return cls(
            league_id=league_id,
            current=int(data.get("b") or 0),
            previous=int(previous) if previous is not None else None,
            spent=int(spent) if spent is not None else None,
        )


@dataclass
class CheckResult:
    budget: int
    threshold: int
    alerted: bool
    message_sid: Optional[str] = None
