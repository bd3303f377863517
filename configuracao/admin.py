from django.contrib import admin

from .models import ConfiguracaoGeral


@admin.register(ConfiguracaoGeral)
class ConfiguracaoGeralAdmin(admin.ModelAdmin):
    list_display = ("salao_nome", "moeda", "regime_fiscal", "atualizado_em")
