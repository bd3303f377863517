from django.contrib import admin

from .models import (
    Cliente,
    MovimentoPontos,
    AtendimentoCliente,
    SolicitacaoLGPD,
    TemplateComunicacao,
    MensagemAgendada,
)


class MovimentoPontosInline(admin.TabularInline):
    model = MovimentoPontos
    extra = 0
    readonly_fields = ("tipo", "pontos", "descricao", "criado_em")


@admin.register(Cliente)
class ClienteAdmin(admin.ModelAdmin):
    list_display = (
        "nome_completo",
        "telefone",
        "email",
        "nivel_fidelidade",
        "pontos_atuais",
        "total_gasto",
        "ultima_visita",
        "status",
    )
    list_filter = ("status", "nivel_fidelidade", "lgpd_consentimento_marketing")
    search_fields = ("nome_completo", "telefone", "email", "cpf")
    readonly_fields = (
        "pontos_atuais",
        "total_pontos_ganhos",
        "total_pontos_resgatados",
        "nivel_fidelidade",
        "pontos_proximo_nivel",
        "total_gasto",
        "quantidade_visitas",
        "ultima_visita",
        "criado_em",
        "atualizado_em",
    )
    inlines = [MovimentoPontosInline]


@admin.register(AtendimentoCliente)
class AtendimentoClienteAdmin(admin.ModelAdmin):
    list_display = ("cliente", "servico_nome", "profissional_nome", "data", "preco_final", "status")
    list_filter = ("status", "data")
    search_fields = ("cliente__nome_completo", "servico_nome")


@admin.register(SolicitacaoLGPD)
class SolicitacaoLGPDAdmin(admin.ModelAdmin):
    list_display = ("cliente", "tipo", "status", "solicitado_em", "processado_em")
    list_filter = ("tipo", "status")


@admin.register(TemplateComunicacao)
class TemplateComunicacaoAdmin(admin.ModelAdmin):
    list_display = ("nome", "tipo", "canal", "ativo")
    list_filter = ("tipo", "canal", "ativo")


@admin.register(MensagemAgendada)
class MensagemAgendadaAdmin(admin.ModelAdmin):
    list_display = ("cliente", "template", "canal", "status", "agendada_para", "enviada_em")
    list_filter = ("status", "canal")
