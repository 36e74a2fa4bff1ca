from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class BanRecord(BaseModel):
    """One currently active ban"""

    model_config = ConfigDict(frozen=True)

    ip: str
    """The banned address, taken verbatim from the daemon"""
    banned_at: datetime
    """When the ban started"""
    unban_at: Optional[datetime] = None
    """When the ban will be lifted. None for permanent bans."""
    jail: str
    """The jail owning the ban"""

    @property
    def permanent(self) -> bool:
        return self.unban_at is None

    @model_validator(mode="after")
    def check_unban_after_ban(self) -> "BanRecord":
        if self.unban_at is not None and self.unban_at < self.banned_at:
            raise ValueError(f"unban_at ({self.unban_at}) is before banned_at ({self.banned_at})")
        return self


class ReportStatistics(BaseModel):
    """Aggregate figures shown above the ban table"""

    unique_ips: int = 0
    """Number of distinct addresses across all selected jails"""
    oldest: Optional[datetime] = None
    """Earliest ban start, None when nothing is banned"""
    newest: Optional[datetime] = None
    """Latest ban start, None when nothing is banned"""
    jails: List[str] = []
    """Jails included in the report"""
