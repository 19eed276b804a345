"""Taskboard: Users and Tasks REST API with assignment synchronization."""

__version__ = "1.0.0"
