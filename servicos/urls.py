from django.urls import path

from .views import (
    ServicosListView,
    ServicoDetailView,
    ServicoCreateView,
    ServicoUpdateView,
    ServicoAtualizarPrecoView,
    ServicoDuplicarView,
    PacoteCreateView,
    PacoteUpdateView,
    PacoteDuplicarView,
    ServicosRelatorioView,
    ServicosRelatorioCSVView,
)

app_name = "servicos"

urlpatterns = [
    path("", ServicosListView.as_view(), name="lista"),
    path("novo/", ServicoCreateView.as_view(), name="criar"),
    path("<int:pk>/", ServicoDetailView.as_view(), name="detalhe"),
    path("<int:pk>/editar/", ServicoUpdateView.as_view(), name="editar"),
    path("<int:pk>/preco/", ServicoAtualizarPrecoView.as_view(), name="atualizar_preco"),
    path("<int:pk>/duplicar/", ServicoDuplicarView.as_view(), name="duplicar"),

    path("pacotes/novo/", PacoteCreateView.as_view(), name="criar_pacote"),
    path("pacotes/<int:pk>/editar/", PacoteUpdateView.as_view(), name="editar_pacote"),
    path("pacotes/<int:pk>/duplicar/", PacoteDuplicarView.as_view(), name="duplicar_pacote"),

    path("relatorio/", ServicosRelatorioView.as_view(), name="relatorio"),
    path("relatorio/csv/", ServicosRelatorioCSVView.as_view(), name="relatorio_csv"),
]
