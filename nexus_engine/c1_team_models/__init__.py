"""C1 Team Models - Team snapshots and payloads."""
from nexus_engine.c1_team_models.team import (
    Team,
    TeamCreate,
    TeamMember,
    TeamMemberCreate,
    TeamUpdate,
)

__all__ = ["Team", "TeamCreate", "TeamMember", "TeamMemberCreate", "TeamUpdate"]
