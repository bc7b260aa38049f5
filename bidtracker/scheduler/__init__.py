"""Scheduler jobs module."""

from .jobs import send_reminders_job

__all__ = ["send_reminders_job"]
