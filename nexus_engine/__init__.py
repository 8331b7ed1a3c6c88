"""Nexus lifecycle engine.

Workflow, dependency and budget rules for projects, tasks, tickets and
teams. Operations take plain snapshots plus explicit configuration and
time, and return new snapshots or raise a ``LifecycleError``.
"""

__version__ = "1.0.0"
