# logistics_core/apps.py

from django.apps import AppConfig


class LogisticsCoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "logistics_core"
    verbose_name = "Math trade logistics"
