"""Task management API with JWT authentication and role-based authorization."""

__version__ = "0.1.0"
