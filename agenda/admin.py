from django.contrib import admin

from .models import Agendamento, HorarioTrabalho, Profissional


class HorarioTrabalhoInline(admin.TabularInline):
    model = HorarioTrabalho
    extra = 0


@admin.register(Profissional)
class ProfissionalAdmin(admin.ModelAdmin):
    list_display = ("nome", "telefone", "email", "avaliacao", "comissao", "ativo")
    list_filter = ("ativo",)
    search_fields = ("nome", "email")
    inlines = [HorarioTrabalhoInline]


@admin.register(Agendamento)
class AgendamentoAdmin(admin.ModelAdmin):
    list_display = ("codigo", "nome_cliente", "profissional", "data", "hora_inicio", "hora_fim", "preco_total", "status")
    list_filter = ("status", "profissional", "data")
    search_fields = ("nome_cliente", "telefone_cliente", "email_cliente")
    filter_horizontal = ("servicos",)
    readonly_fields = ("duracao_total", "preco_total", "criado_em", "atualizado_em")
