"""
Licenses module - License Store and administrative lifecycle.

This module handles:
- License entity, key generation and status transitions
- License persistence (Django ORM adapter)
- Generate, list, get, revoke, reset, delete and stats operations
"""
