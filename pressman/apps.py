"""
Django Pressman app configuration.
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class PressmanConfig(AppConfig):
    """Pressman application configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "pressman"
    verbose_name = _("Controle de Produção")

    def ready(self):
        """Import signal handlers when app is ready."""
        # Import handlers to register them
        from pressman.signals import handlers  # noqa: F401
