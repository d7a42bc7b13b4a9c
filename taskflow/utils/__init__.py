"""Utility functions for TaskFlow."""

from .task_filters import CompletionSummary, TaskFilter, filter_tasks, summarize

__all__ = ["CompletionSummary", "TaskFilter", "filter_tasks", "summarize"]
