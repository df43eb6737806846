"""Core app configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core application."""

    name = "verseandme.core"
    verbose_name = "Verse & Me Core"
    default_auto_field = "django.db.models.BigAutoField"
