"""Tests for ProjectLifecycleService."""

from datetime import date, timedelta

import pytest

from nexus_engine.c1_entity_enums.entity_enums import ErrorKind, HealthStatus
from nexus_engine.c1_lifecycle_errors.errors import (
    EntityValidationError,
    ImmutableStateError,
    InvalidTransitionError,
)
from nexus_engine.c1_project_models.project import (
    AllocationCreate,
    DeliverableCreate,
    ExpenseCreate,
    ProjectCreate,
    ProjectUpdate,
)
from nexus_engine.c2_lifecycle_service.project_lifecycle import ProjectLifecycleService


@pytest.fixture
def service():
    return ProjectLifecycleService(default_currency="EUR")


@pytest.fixture
def payload():
    """Valid project creation payload."""
    return ProjectCreate(
        name="Website relaunch",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31),
        budget_allocated=50000,
        client_id="client-1",
        deliverables=[DeliverableCreate(title="Design system"), DeliverableCreate(title="CMS")],
    )


class TestCreate:
    def test_creates_active_project(self, service, payload, now):
        project = service.create(payload, now)

        assert project.id.startswith("proj-")
        assert project.status == "active"
        assert project.currency == "EUR"
        assert project.expenses == []
        assert project.resource_allocations == []
        assert project.created_at == project.updated_at == now

    def test_deliverables_get_ids_and_start_incomplete(self, service, payload, now):
        project = service.create(payload, now)

        assert [d.title for d in project.deliverables] == ["Design system", "CMS"]
        assert all(d.id.startswith("deliverable-") for d in project.deliverables)
        assert not any(d.is_completed for d in project.deliverables)

    def test_explicit_currency_wins(self, service, payload, now):
        project = service.create(payload.model_copy(update={"currency": "GBP"}), now)
        assert project.currency == "GBP"

    def test_inverted_dates_rejected(self, service, payload, now):
        bad = payload.model_copy(update={"end_date": date(2024, 1, 1)})

        with pytest.raises(EntityValidationError, match="Start date must be before end date"):
            service.create(bad, now)

    @pytest.mark.parametrize("budget", [0, -10])
    def test_non_positive_budget_rejected(self, service, payload, now, budget):
        with pytest.raises(EntityValidationError, match="Budget must be greater than zero"):
            service.create(payload.model_copy(update={"budget_allocated": budget}), now)

    def test_blank_name_rejected(self, service, payload, now):
        with pytest.raises(EntityValidationError) as exc_info:
            service.create(payload.model_copy(update={"name": "   "}), now)
        assert exc_info.value.field == "name"


class TestUpdate:
    def test_archived_project_is_immutable(self, service, make_project, now):
        project = make_project(status="archived")
        snapshot = project.model_dump()

        with pytest.raises(ImmutableStateError) as exc_info:
            service.update(project, ProjectUpdate(name="Renamed"), now)

        assert exc_info.value.kind == ErrorKind.IMMUTABLE_STATE
        assert project.model_dump() == snapshot

    def test_only_set_fields_change(self, service, make_project, now):
        project = make_project()
        later = now + timedelta(hours=2)

        updated = service.update(project, ProjectUpdate(description="New scope"), later)

        assert updated.description == "New scope"
        assert updated.name == project.name
        assert updated.budget_allocated == project.budget_allocated
        assert updated.updated_at == later
        assert project.description == ""

    def test_empty_patch_is_noop(self, service, make_project, now):
        project = make_project()
        assert service.update(project, ProjectUpdate(), now) is project

    def test_date_check_uses_merged_values(self, service, make_project, now):
        project = make_project()
        with pytest.raises(EntityValidationError):
            service.update(project, ProjectUpdate(start_date=date(2025, 2, 1)), now)

    def test_explicit_null_on_required_field_rejected(self, service, make_project, now):
        with pytest.raises(EntityValidationError, match="name cannot be cleared"):
            service.update(make_project(), ProjectUpdate(name=None), now)

    def test_cannot_archive_through_update(self, service, make_project, now):
        with pytest.raises(EntityValidationError, match="Use archive"):
            service.update(make_project(), ProjectUpdate(status="archived"), now)

    def test_unknown_status_rejected(self, service, make_project, now):
        with pytest.raises(EntityValidationError):
            service.update(make_project(), ProjectUpdate(status="paused"), now)

    def test_budget_must_stay_positive(self, service, make_project, now):
        with pytest.raises(EntityValidationError):
            service.update(make_project(), ProjectUpdate(budget_allocated=0), now)


class TestArchiveAndDelete:
    def test_archive_active_project(self, service, make_project, now):
        archived = service.archive(make_project(), now)

        assert archived.status == "archived"
        assert archived.archived_at == now

    def test_archive_twice_rejected(self, service, make_project, now):
        with pytest.raises(ImmutableStateError):
            service.archive(make_project(status="archived"), now)

    def test_draft_cannot_be_archived(self, service, make_project, now):
        with pytest.raises(InvalidTransitionError):
            service.archive(make_project(status="draft"), now)

    def test_delete_requires_archive(self, service, make_project, now):
        project = make_project()
        with pytest.raises(ImmutableStateError, match="must be archived"):
            service.delete(project)

        service.delete(service.archive(project, now))


class TestLedgerOperations:
    def test_record_expense_appends(self, service, make_project, now):
        project = make_project()

        updated = service.record_expense(
            project, ExpenseCreate(category="hosting", amount=1200, date=date(2024, 5, 1)), now
        )

        assert len(updated.expenses) == 1
        assert updated.expenses[0].created_at == now
        assert project.expenses == []
        assert service.total_spend(updated, date(2024, 6, 1)) == 1200

    def test_expense_on_archived_project_rejected(self, service, make_project, now):
        with pytest.raises(ImmutableStateError):
            service.record_expense(
                make_project(status="archived"),
                ExpenseCreate(category="hosting", amount=10, date=date(2024, 5, 1)),
                now,
            )

    def test_allocate_resource_accrues(self, service, make_project, now):
        project = service.allocate_resource(
            make_project(),
            AllocationCreate(team_id="team-1", monthly_rate=12000, start_date=date(2024, 1, 1)),
            now,
        )

        assert service.total_spend(project, date(2024, 3, 1)) == pytest.approx(24000)
        assert service.remaining_budget(project, date(2024, 3, 1)) == pytest.approx(76000)

    def test_allocation_end_must_follow_start(self, service, make_project, now):
        with pytest.raises(EntityValidationError):
            service.allocate_resource(
                make_project(),
                AllocationCreate(
                    team_id="team-1",
                    monthly_rate=100,
                    start_date=date(2024, 3, 1),
                    end_date=date(2024, 3, 1),
                ),
                now,
            )

    def test_complete_deliverable(self, service, payload, now):
        project = service.create(payload, now)
        target = project.deliverables[1]

        updated = service.complete_deliverable(project, target.id, now)

        assert updated.deliverables[1].is_completed
        assert updated.deliverables[1].completed_date == now.date()
        assert not updated.deliverables[0].is_completed

    def test_complete_unknown_deliverable(self, service, make_project, now):
        with pytest.raises(EntityValidationError):
            service.complete_deliverable(make_project(), "deliverable-x", now)

    def test_health_and_summary(self, service, make_project, make_task):
        project = make_project()
        tasks = [make_task("A", end_date=date(2024, 2, 1))]

        assert service.health(project, tasks, date(2024, 3, 1)) == HealthStatus.YELLOW
        summary = service.budget_summary(project, tasks, date(2024, 3, 1))
        assert summary.overdue_task_ids == ["A"]
