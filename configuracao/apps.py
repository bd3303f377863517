from django.apps import AppConfig


class ConfiguracaoConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "configuracao"
    verbose_name = "Configuração"
