"""Scenario contexts for the Kraken behaviour suite."""

from core.scenarios.context import AuthenticatedContext, PublicContext

__all__ = ["AuthenticatedContext", "PublicContext"]
