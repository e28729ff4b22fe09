"""Core capability-resolution engine for EVS camera roles."""

__all__ = [
    "capabilities",
    "logging",
    "resolver",
]
