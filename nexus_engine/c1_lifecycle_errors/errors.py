"""Typed failures raised by the lifecycle engine.

Every failure is a ``ValueError`` so callers that only care about
"the input was rejected" can catch that, while callers that need to react
to a specific rule can inspect ``kind`` or catch the subclass.
"""

from typing import Iterable, List, Optional

from nexus_engine.c1_entity_enums.entity_enums import ErrorKind


class LifecycleError(ValueError):
    """Base class for every rejected engine operation."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EntityValidationError(LifecycleError):
    """Malformed input: inverted dates, non-positive budget, empty field."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidTransitionError(LifecycleError):
    """Workflow transition not permitted by the configuration."""

    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot transition from {current} to {target}")
        self.current = current
        self.target = target


class CircularDependencyError(LifecycleError):
    """A dependency set would close a cycle."""

    kind = ErrorKind.CIRCULAR_DEPENDENCY

    def __init__(self, task_id: str):
        super().__init__(f"Circular dependency detected for task {task_id}")
        self.task_id = task_id


class DependencyNotFoundError(LifecycleError):
    """One or more dependency ids do not resolve."""

    kind = ErrorKind.DEPENDENCY_NOT_FOUND

    def __init__(self, dependency_ids: Iterable[str]):
        self.dependency_ids: List[str] = list(dependency_ids)
        super().__init__(f"Dependencies not found: {', '.join(self.dependency_ids)}")


class CrossProjectDependencyError(LifecycleError):
    """One or more dependencies belong to a different project."""

    kind = ErrorKind.CROSS_PROJECT_DEPENDENCY

    def __init__(self, dependency_ids: Iterable[str]):
        self.dependency_ids: List[str] = list(dependency_ids)
        super().__init__(
            f"Dependencies in a different project: {', '.join(self.dependency_ids)}"
        )


class IncompleteDependenciesError(LifecycleError):
    """Completion attempted while direct dependencies are unfinished."""

    kind = ErrorKind.INCOMPLETE_DEPENDENCIES

    def __init__(self, dependency_ids: Iterable[str]):
        self.dependency_ids: List[str] = list(dependency_ids)
        super().__init__(
            f"Cannot mark task as done: {len(self.dependency_ids)} dependency(ies) not completed"
        )


class DependentsExistError(LifecycleError):
    """Deletion attempted while other entities still reference the target."""

    kind = ErrorKind.DEPENDENTS_EXIST

    def __init__(self, count: int, message: Optional[str] = None):
        super().__init__(
            message
            or f"Cannot delete task: {count} task(s) depend on it. "
            "Remove dependencies first or delete dependent tasks."
        )
        self.count = count


class ImmutableStateError(LifecycleError):
    """Update or delete attempted on an entity whose state forbids it."""

    kind = ErrorKind.IMMUTABLE_STATE

    def __init__(self, entity_id: str, status: str, message: Optional[str] = None):
        super().__init__(message or f"Entity {entity_id} is {status} and cannot be modified")
        self.entity_id = entity_id
        self.status = status


class FeatureDisabledError(LifecycleError):
    """Operation blocked by a configuration feature gate."""

    kind = ErrorKind.FEATURE_DISABLED

    def __init__(self, feature: str):
        super().__init__(f"Feature disabled: {feature}")
        self.feature = feature
