"""
Core application configuration.
"""
from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Wires process-wide observability and event handlers at startup."""

    name = "core"
    verbose_name = "Core"

    def ready(self):
        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry

        setup_opentelemetry()
        register_event_handlers()
