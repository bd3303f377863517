import logging
from datetime import MAXYEAR, MINYEAR, date, timedelta

from django.core.files.base import ContentFile
from django.http import Http404, HttpResponse
from django.shortcuts import get_object_or_404, render
from django.utils import timezone
from django.views import View

from accounts.permissions import AdminRequiredMixin

from .dados import calcular_resumo
from .models import ReportePDF
from .utils import render_to_pdf

logger = logging.getLogger(__name__)


class BaseRelatoriosMixin(AdminRequiredMixin):

    def _parse_date(self, value):
        """'AAAA-MM-DD' ou None."""
        if not value:
            return None
        try:
            data = date.fromisoformat(value)
        except ValueError:
            return None
        if not MINYEAR < data.year < MAXYEAR:
            return None
        return data

    def _periodo_informado(self, request):
        hoje = timezone.localdate()
        fim = self._parse_date(request.GET.get("fim")) or hoje
        inicio = self._parse_date(request.GET.get("inicio")) or fim - timedelta(days=6)
        if inicio > fim:
            inicio, fim = fim, inicio
        return inicio, fim


class RelatoriosResumoView(BaseRelatoriosMixin, View):
    """Resumo do período com gráfico de receita e agendamentos (padrão: últimos 7 dias)."""

    def get(self, request, *args, **kwargs):
        inicio, fim = self._periodo_informado(request)
        context = {
            "active_menu": "relatorios",
            "inicio": inicio,
            "fim": fim,
            **calcular_resumo(inicio, fim),
        }
        return render(request, "relatorios/resumo.html", context)


class ExportarRelatorioPDFView(BaseRelatoriosMixin, View):
    """
    Gera o PDF do resumo e guarda no histórico.
    modo=diario | semanal | mensal | anual | personalizado (usa inicio/fim)
    """

    def get_periodo_por_modo(self, modo, request):
        hoje = timezone.localdate()
        modo = (modo or "").lower()

        if modo == "diario":
            return hoje, hoje, ReportePDF.Tipo.DIARIO
        if modo == "semanal":
            return hoje - timedelta(days=6), hoje, ReportePDF.Tipo.SEMANAL
        if modo == "mensal":
            return hoje - timedelta(days=29), hoje, ReportePDF.Tipo.MENSAL
        if modo == "anual":
            return hoje - timedelta(days=364), hoje, ReportePDF.Tipo.ANUAL

        inicio, fim = self._periodo_informado(request)
        return inicio, fim, ReportePDF.Tipo.PERSONALIZADO

    def get(self, request, *args, **kwargs):
        inicio, fim, tipo = self.get_periodo_por_modo(request.GET.get("modo", "personalizado"), request)
        dados = calcular_resumo(inicio, fim)

        context = {
            "inicio": inicio,
            "fim": fim,
            "tipo": tipo,
            "usuario": request.user,
            "gerado_em": timezone.localtime(),
            **dados,
        }

        pdf_bytes = render_to_pdf("relatorios/pdf_relatorio.html", context)
        if pdf_bytes is None:
            raise Http404("Não foi possível gerar o PDF")

        nome = f"relatorio_{tipo.lower()}_{inicio}_{fim}.pdf"
        relatorio = ReportePDF(
            tipo=tipo,
            data_inicio=inicio,
            data_fim=fim,
            total_agendamentos=dados["total_agendamentos"],
            receita_total=dados["receita_total"],
            despesa_total=dados["despesa_total"],
            usuario=request.user,
        )
        relatorio.arquivo.save(nome, ContentFile(pdf_bytes), save=True)
        logger.info("Relatório PDF %s gerado por %s", nome, request.user)

        response = HttpResponse(pdf_bytes, content_type="application/pdf")
        response["Content-Disposition"] = f'attachment; filename="{nome}"'
        return response


class HistoricoRelatoriosView(BaseRelatoriosMixin, View):
    """PDFs já gerados, filtráveis por tipo e data de criação."""

    def get(self, request, *args, **kwargs):
        qs = ReportePDF.objects.select_related("usuario")

        tipo = request.GET.get("tipo") or ""
        inicio = self._parse_date(request.GET.get("inicio"))
        fim = self._parse_date(request.GET.get("fim"))

        if tipo:
            qs = qs.filter(tipo=tipo)
        if inicio:
            qs = qs.filter(criado_em__date__gte=inicio)
        if fim:
            qs = qs.filter(criado_em__date__lte=fim)

        context = {
            "active_menu": "relatorios",
            "relatorios": qs,
            "tipo_filtro": tipo,
            "inicio": inicio,
            "fim": fim,
            "tipos": ReportePDF.Tipo.choices,
        }
        return render(request, "relatorios/historico.html", context)


class DownloadRelatorioPDFView(BaseRelatoriosMixin, View):
    def get(self, request, pk, *args, **kwargs):
        relatorio = get_object_or_404(ReportePDF, pk=pk)
        if not relatorio.arquivo:
            raise Http404("O arquivo do relatório não existe")

        with relatorio.arquivo.open("rb") as arquivo:
            pdf_bytes = arquivo.read()
        response = HttpResponse(pdf_bytes, content_type="application/pdf")
        response["Content-Disposition"] = f'attachment; filename="{relatorio.arquivo.name.split("/")[-1]}"'
        return response
