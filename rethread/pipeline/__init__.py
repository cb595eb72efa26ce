"""Workflow orchestration."""

from .workflow import WorkflowController

__all__ = ["WorkflowController"]
