from django.contrib import admin

from .models import HistoricoPreco, ItemPacote, PacoteServico, Servico


class HistoricoPrecoInline(admin.TabularInline):
    model = HistoricoPreco
    extra = 0
    readonly_fields = ("preco_anterior", "preco_novo", "motivo", "alterado_por", "alterado_em")


@admin.register(Servico)
class ServicoAdmin(admin.ModelAdmin):
    list_display = ("nome", "categoria", "preco", "duracao", "ativo", "total_agendamentos", "receita_total")
    list_filter = ("categoria", "ativo")
    search_fields = ("nome", "descricao")
    filter_horizontal = ("profissionais",)
    inlines = [HistoricoPrecoInline]


class ItemPacoteInline(admin.TabularInline):
    model = ItemPacote
    extra = 0


@admin.register(PacoteServico)
class PacoteServicoAdmin(admin.ModelAdmin):
    list_display = ("nome", "preco_original", "desconto_percentual", "preco_final", "validade_dias", "ativo")
    list_filter = ("ativo",)
    search_fields = ("nome",)
    readonly_fields = ("preco_original", "preco_final")
    inlines = [ItemPacoteInline]
