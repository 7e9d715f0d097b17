"""Personal task-management API: user-owned categories, shared and private tasks."""

__version__ = "0.1.0"
