"""Core exceptions and value objects shared by every feature."""
