from pydantic import BaseModel, ConfigDict, Field


class TeamMember(BaseModel):
    """GitHub team member as returned by the team members endpoint."""

    model_config = ConfigDict(extra="ignore")

    login: str


class OwnerCheck(BaseModel):
    """Outcome of checking a single required owner."""

    owner: str
    is_team: bool = False
    satisfied: bool
    approved_by: list[str] = Field(default_factory=list)
    error: str | None = None


class ApprovalReport(BaseModel):
    """Per-owner verdicts for one pull request."""

    required_owners: list[str] = Field(default_factory=list)
    checks: list[OwnerCheck] = Field(default_factory=list)

    @property
    def approved(self) -> bool:
        """True when every required owner is satisfied (vacuously true with no owners)."""
        return all(check.satisfied for check in self.checks)

    @property
    def missing_owners(self) -> list[str]:
        """Owners whose approval is still missing, in check order."""
        return [check.owner for check in self.checks if not check.satisfied]
