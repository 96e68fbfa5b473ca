"""
todo_sync: a task list editor whose state is persisted locally and
pushed to a remote task collection on a fixed interval.
"""

__version__ = "0.1.0"
