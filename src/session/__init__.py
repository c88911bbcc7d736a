"""Session — командная поверхность фермы и магазина."""

from .controller import CommandResult, FarmSession, SessionPrompt, WalkInPrompt

__all__ = [
    "FarmSession",
    "SessionPrompt",
    "WalkInPrompt",
    "CommandResult",
]
