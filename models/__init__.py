"""
Data models module for the blog core.

This module contains:
- Post and Comment domain dataclasses
- SQLAlchemy ORM records used by the storage collaborator
"""
