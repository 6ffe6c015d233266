"""Administrative backend for the public website content."""

__version__ = "1.0.0"
