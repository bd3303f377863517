from django.urls import path

from .views import (
    RelatoriosResumoView,
    ExportarRelatorioPDFView,
    HistoricoRelatoriosView,
    DownloadRelatorioPDFView,
)

app_name = "relatorios"

urlpatterns = [
    path("", RelatoriosResumoView.as_view(), name="resumo"),
    path("exportar/", ExportarRelatorioPDFView.as_view(), name="exportar_pdf"),
    path("historico/", HistoricoRelatoriosView.as_view(), name="historico"),
    path("historico/<int:pk>/download/", DownloadRelatorioPDFView.as_view(), name="download_pdf"),
]
