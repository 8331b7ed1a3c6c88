"""Lifecycle rules for teams."""

import logging
from datetime import datetime
from typing import List, Sequence

from nexus_engine.c1_lifecycle_errors.errors import DependentsExistError, EntityValidationError
from nexus_engine.c1_project_models.project import Project
from nexus_engine.c1_task_models.task import Task
from nexus_engine.c1_team_models.team import Team, TeamCreate, TeamMember, TeamUpdate
from nexus_engine.c2_lifecycle_service.patching import new_id, patch_changes, require_text

logger = logging.getLogger(__name__)


class TeamLifecycleService:
    """Team creation and guarded deletion."""

    def create(self, payload: TeamCreate, now: datetime) -> Team:
        require_text(payload.name, "name", "Team name")
        if not payload.members:
            raise EntityValidationError("Team must have at least one member", field="members")

        team = Team(
            id=new_id("team"),
            name=payload.name,
            description=payload.description,
            members=[
                TeamMember(id=new_id("member"), name=m.name, email=m.email, role=m.role)
                for m in payload.members
            ],
            created_at=now,
            updated_at=now,
        )
        logger.info(f"Created team {team.id} with {len(team.members)} member(s)")
        return team

    def update(self, team: Team, patch: TeamUpdate, now: datetime) -> Team:
        changes = patch_changes(patch, nullable=("description",))
        if not changes:
            return team
        if "members" in changes and len(changes["members"]) == 0:
            raise EntityValidationError("Team must have at least one member", field="members")
        if "name" in changes:
            require_text(changes["name"], "name", "Team name")

        changes["updated_at"] = now
        return team.model_copy(update=changes)

    @staticmethod
    def projects_for(team_id: str, projects: Sequence[Project]) -> List[Project]:
        """Projects the team is assigned to or has a resource allocation on."""
        return [
            p for p in projects
            if team_id in p.assigned_team_ids
            or any(a.team_id == team_id for a in p.resource_allocations)
        ]

    @staticmethod
    def tasks_for(team_id: str, tasks: Sequence[Task]) -> List[Task]:
        return [t for t in tasks if t.assignee_team_id == team_id]

    def delete(self, team: Team, projects: Sequence[Project], tasks: Sequence[Task]) -> None:
        """Certify a team for deletion.

        Raises:
            DependentsExistError: Team is still assigned to projects or tasks
        """
        assigned_projects = self.projects_for(team.id, projects)
        if assigned_projects:
            raise DependentsExistError(
                len(assigned_projects),
                f"Team is assigned to {len(assigned_projects)} project(s). Remove assignments first.",
            )

        assigned_tasks = self.tasks_for(team.id, tasks)
        if assigned_tasks:
            raise DependentsExistError(
                len(assigned_tasks),
                f"Team is assigned to {len(assigned_tasks)} task(s). Remove assignments first.",
            )

        logger.info(f"Team {team.id} cleared for deletion")
