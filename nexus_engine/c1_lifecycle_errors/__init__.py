"""C1 Lifecycle Errors - Typed failure hierarchy."""
from nexus_engine.c1_lifecycle_errors.errors import (
    CircularDependencyError,
    CrossProjectDependencyError,
    DependencyNotFoundError,
    DependentsExistError,
    EntityValidationError,
    FeatureDisabledError,
    ImmutableStateError,
    IncompleteDependenciesError,
    InvalidTransitionError,
    LifecycleError,
)

__all__ = [
    "CircularDependencyError",
    "CrossProjectDependencyError",
    "DependencyNotFoundError",
    "DependentsExistError",
    "EntityValidationError",
    "FeatureDisabledError",
    "ImmutableStateError",
    "IncompleteDependenciesError",
    "InvalidTransitionError",
    "LifecycleError",
]
