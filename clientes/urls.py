# clientes/urls.py
from django.urls import path

from .views import (
    ClientesListView,
    ClientesExportarCSVView,
    ClienteDetailView,
    ClienteCreateView,
    ClienteUpdateView,
    ClienteDeleteView,
    ClienteExportarDadosView,
    ClientePontosView,
    ClienteEnviarMensagemView,
)

app_name = "clientes"

urlpatterns = [
    path("", ClientesListView.as_view(), name="lista"),
    path("exportar/", ClientesExportarCSVView.as_view(), name="exportar_csv"),
    path("novo/", ClienteCreateView.as_view(), name="criar"),
    path("<int:pk>/", ClienteDetailView.as_view(), name="detalhe"),
    path("<int:pk>/editar/", ClienteUpdateView.as_view(), name="editar"),
    path("<int:pk>/excluir/", ClienteDeleteView.as_view(), name="excluir"),
    path("<int:pk>/lgpd/exportar/", ClienteExportarDadosView.as_view(), name="exportar_dados"),
    path("<int:pk>/pontos/", ClientePontosView.as_view(), name="pontos"),
    path("<int:pk>/mensagem/", ClienteEnviarMensagemView.as_view(), name="enviar_mensagem"),
]
