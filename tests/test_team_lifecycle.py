"""Tests for TeamLifecycleService."""

from datetime import date

import pytest

from nexus_engine.c1_lifecycle_errors.errors import DependentsExistError, EntityValidationError
from nexus_engine.c1_team_models.team import TeamCreate, TeamMemberCreate, TeamUpdate
from nexus_engine.c2_lifecycle_service.team_lifecycle import TeamLifecycleService


@pytest.fixture
def service():
    return TeamLifecycleService()


@pytest.fixture
def team(service, now):
    return service.create(
        TeamCreate(
            name="Platform",
            members=[TeamMemberCreate(name="Ada", email="ada@example.com", role="Developer")],
        ),
        now,
    )


def test_create_assigns_member_ids(team):
    assert team.id.startswith("team-")
    assert team.members[0].id.startswith("member-")


def test_team_needs_a_member(service, now):
    with pytest.raises(EntityValidationError, match="at least one member"):
        service.create(TeamCreate(name="Empty"), now)


def test_update_cannot_remove_every_member(service, team, now):
    with pytest.raises(EntityValidationError):
        service.update(team, TeamUpdate(members=[]), now)

    renamed = service.update(team, TeamUpdate(name="Core Platform"), now)
    assert renamed.name == "Core Platform"
    assert renamed.members == team.members


def test_delete_blocked_by_project_assignment(service, team, make_project):
    projects = [make_project(assigned_team_ids=[team.id])]

    with pytest.raises(DependentsExistError, match="1 project\\(s\\)"):
        service.delete(team, projects, [])


def test_delete_blocked_by_resource_allocation(service, team, make_project, make_allocation):
    projects = [make_project(resource_allocations=[make_allocation(1000, date(2024, 1, 1), team_id=team.id)])]

    assert service.projects_for(team.id, projects) == projects
    with pytest.raises(DependentsExistError):
        service.delete(team, projects, [])


def test_delete_blocked_by_task_assignment(service, team, make_task):
    tasks = [make_task("A", assignee_team_id=team.id)]

    with pytest.raises(DependentsExistError, match="1 task\\(s\\)"):
        service.delete(team, [], tasks)


def test_delete_unassigned_team(service, team, make_project, make_task):
    service.delete(team, [make_project()], [make_task("A")])
