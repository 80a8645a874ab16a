"""HTTP API for the device license service."""
