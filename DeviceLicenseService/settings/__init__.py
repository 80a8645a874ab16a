"""
Settings for the device license service.

Select a module with DJANGO_SETTINGS_MODULE:
- base: shared settings, store, cache, logging and license options
- dev: local development (SQLite and LocMem fallbacks)
- test: in-memory SQLite, LocMem cache, admin keys disabled
- prod: hardened production settings
"""
