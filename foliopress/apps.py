from django.apps import AppConfig


class FoliopressConfig(AppConfig):
    name = "foliopress"
    verbose_name = "Foliopress"
