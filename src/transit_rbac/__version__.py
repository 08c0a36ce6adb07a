"""Version information for transit-rbac."""

__version__ = "0.1.0"
