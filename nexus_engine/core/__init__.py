"""Core configuration for the Nexus lifecycle engine."""
from nexus_engine.core.config import EngineSettings, FeatureFlags

__all__ = ["EngineSettings", "FeatureFlags"]
