# days/apps.py
from django.apps import AppConfig


class DaysConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "days"
    verbose_name = "Days"
