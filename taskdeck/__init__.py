"""Taskdeck: personal task management core"""

__version__ = "1.0.0"
