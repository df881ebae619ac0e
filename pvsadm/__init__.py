"""Helpers for Power Virtual Server workspaces: purge selection and deletion, audit logs, sync specs and image files."""

__version__ = "0.1.0"