from django.apps import AppConfig


class FeaturedConfig(AppConfig):
    name = "verseandme.featured"
    verbose_name = "Featured Products"
    default_auto_field = "django.db.models.BigAutoField"
