"""
Core module for shared domain infrastructure.

This module contains:
- Domain events, exceptions and value objects
- Event bus, cache and store adapters
- Middleware components
- Health and metrics endpoints
"""
