"""Runnable lease scenario demo."""

from .run_demo import run_lease_scenario

__all__ = ["run_lease_scenario"]
