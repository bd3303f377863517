from django.urls import path

from .views import (
    FinanceiroDashboardView,
    TransacoesListView,
    TransacaoCreateView,
    CaixaView,
    ContasListView,
    ContaPagarView,
    AlertasView,
    AlertaLidoView,
    RelatoriosFinanceirosView,
    ExportarRelatorioView,
    FiscalView,
)

app_name = "financeiro"

urlpatterns = [
    path("", FinanceiroDashboardView.as_view(), name="dashboard"),
    path("transacoes/", TransacoesListView.as_view(), name="transacoes"),
    path("transacoes/nova/", TransacaoCreateView.as_view(), name="nova_transacao"),
    path("caixa/", CaixaView.as_view(), name="caixa"),
    path("contas/", ContasListView.as_view(), name="contas"),
    path("contas/<int:pk>/pagar/", ContaPagarView.as_view(), name="pagar_conta"),
    path("alertas/", AlertasView.as_view(), name="alertas"),
    path("alertas/<int:pk>/lido/", AlertaLidoView.as_view(), name="alerta_lido"),
    path("relatorios/", RelatoriosFinanceirosView.as_view(), name="relatorios"),
    path("relatorios/exportar/", ExportarRelatorioView.as_view(), name="exportar_relatorio"),
    path("fiscal/", FiscalView.as_view(), name="fiscal"),
]
