"""C2 Dependency Service - Task dependency graph validation."""
from nexus_engine.c2_dependency_service.dependency_graph import DependencyGraph
from nexus_engine.c2_dependency_service.models import DependencyIssue, DependencyValidationResult

__all__ = ["DependencyGraph", "DependencyIssue", "DependencyValidationResult"]
