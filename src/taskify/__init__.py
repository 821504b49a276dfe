"""Taskify: personal task and appointment tracker.

The HTTP backend for the Taskify single-page client: registration,
JWT login, and owner-scoped CRUD for tasks and appointments.
"""

__version__ = "0.1.0"
