from django.contrib import admin

from .models import (
    AlertaFinanceiro,
    Caixa,
    CategoriaTransacao,
    Conta,
    DocumentoFiscal,
    MetodoPagamento,
    MovimentoCaixa,
    ObrigacaoFiscal,
    Transacao,
)


@admin.register(CategoriaTransacao)
class CategoriaTransacaoAdmin(admin.ModelAdmin):
    list_display = ("nome", "tipo", "ativo")
    list_filter = ("tipo", "ativo")


@admin.register(MetodoPagamento)
class MetodoPagamentoAdmin(admin.ModelAdmin):
    list_display = ("nome", "tipo", "taxa", "ativo")


@admin.register(Transacao)
class TransacaoAdmin(admin.ModelAdmin):
    list_display = ("data", "tipo", "categoria", "descricao", "valor", "metodo_pagamento", "caixa")
    list_filter = ("tipo", "categoria", "metodo_pagamento", "data")
    search_fields = ("descricao", "referencia")


class MovimentoCaixaInline(admin.TabularInline):
    model = MovimentoCaixa
    extra = 0


@admin.register(Caixa)
class CaixaAdmin(admin.ModelAdmin):
    list_display = ("data", "status", "saldo_abertura", "saldo_esperado", "saldo_fechamento", "diferenca")
    list_filter = ("status",)
    readonly_fields = ("saldo_esperado", "diferenca", "aberto_em", "fechado_em")
    inlines = [MovimentoCaixaInline]


@admin.register(Conta)
class ContaAdmin(admin.ModelAdmin):
    list_display = ("descricao", "tipo", "valor", "vencimento", "status", "recorrente")
    list_filter = ("tipo", "status", "recorrente")
    search_fields = ("descricao", "fornecedor", "cliente")


@admin.register(AlertaFinanceiro)
class AlertaFinanceiroAdmin(admin.ModelAdmin):
    list_display = ("titulo", "tipo", "severidade", "lido", "criado_em")
    list_filter = ("tipo", "severidade", "lido")


@admin.register(DocumentoFiscal)
class DocumentoFiscalAdmin(admin.ModelAdmin):
    list_display = ("numero", "tipo", "data", "valor", "status")
    list_filter = ("tipo", "status")


@admin.register(ObrigacaoFiscal)
class ObrigacaoFiscalAdmin(admin.ModelAdmin):
    list_display = ("nome", "referencia", "vencimento", "valor", "status")
    list_filter = ("regime", "status")
