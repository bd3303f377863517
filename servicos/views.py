import logging
from datetime import MAXYEAR, MINYEAR, date, timedelta

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.db.models import Avg, Count, Sum
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views import View

from accounts.permissions import AdminRequiredMixin
from agenda.models import Profissional

from .busca import FiltrosPacote, FiltrosServico, buscar_pacotes, buscar_servicos
from .forms import AtualizarPrecoForm, PacoteServicoForm, ServicoForm
from .models import PacoteServico, Servico
from .operacoes import atualizar_preco, duplicar_pacote, duplicar_servico, salvar_itens_pacote
from .relatorios import (
    exportar_relatorio_servicos_csv,
    gerar_relatorio_pacotes,
    gerar_relatorio_servicos,
)

logger = logging.getLogger(__name__)


def _parse_date(value):
    if not value:
        return None
    try:
        data = date.fromisoformat(value)
    except ValueError:
        return None
    # Anos nas pontas do calendário estouram a aritmética de períodos
    if not MINYEAR < data.year < MAXYEAR:
        return None
    return data


def _periodo(request):
    """Período do relatório; por padrão os últimos 30 dias."""
    hoje = timezone.localdate()
    fim = _parse_date(request.GET.get("fim")) or hoje
    inicio = _parse_date(request.GET.get("inicio")) or (fim - timedelta(days=29))
    if inicio > fim:
        inicio, fim = fim, inicio
    return inicio, fim


class ServicosListView(LoginRequiredMixin, View):
    """Catálogo de serviços e pacotes com busca."""

    def get(self, request, *args, **kwargs):
        servicos = buscar_servicos(FiltrosServico.from_querydict(request.GET)).prefetch_related("profissionais")
        pacotes = buscar_pacotes(FiltrosPacote.from_querydict(request.GET)).prefetch_related("itens__servico")

        kpis = Servico.objects.aggregate(
            total=Count("id"),
            receita=Sum("receita_total"),
            avaliacao=Avg("avaliacao_media"),
        )
        kpis["ativos"] = Servico.objects.filter(ativo=True).count()
        kpis["pacotes_ativos"] = PacoteServico.objects.filter(ativo=True).count()

        context = {
            "servicos": servicos,
            "pacotes": pacotes,
            "categorias": Servico.Categoria.choices,
            "profissionais": Profissional.objects.filter(ativo=True),
            "filtros": request.GET,
            "kpis": kpis,
            "active_menu": "servicos",
        }
        return render(request, "servicos/lista_servicos.html", context)


class ServicoDetailView(LoginRequiredMixin, View):
    def get(self, request, pk, *args, **kwargs):
        servico = get_object_or_404(Servico, pk=pk)
        context = {
            "servico": servico,
            "historico": servico.historico_precos.select_related("alterado_por"),
            "preco_form": AtualizarPrecoForm(initial={"preco": servico.preco}),
            "active_menu": "servicos",
        }
        return render(request, "servicos/detalhe_servico.html", context)


class ServicoCreateView(AdminRequiredMixin, View):
    def get(self, request, *args, **kwargs):
        context = {
            "form": ServicoForm(),
            "modo": "criar",
            "active_menu": "servicos",
        }
        return render(request, "servicos/form_servico.html", context)

    def post(self, request, *args, **kwargs):
        form = ServicoForm(request.POST)
        if form.is_valid():
            servico = form.save(commit=False)
            servico.criado_por = request.user
            servico.save()
            form.save_m2m()
            messages.success(request, "Serviço criado com sucesso.")
            return redirect("servicos:lista")
        context = {
            "form": form,
            "modo": "criar",
            "active_menu": "servicos",
        }
        return render(request, "servicos/form_servico.html", context, status=400)


class ServicoUpdateView(AdminRequiredMixin, View):
    """
    Edição dos dados do serviço. Mudanças de preço passam pelo
    histórico de preços.
    """

    def get(self, request, pk, *args, **kwargs):
        servico = get_object_or_404(Servico, pk=pk)
        context = {
            "form": ServicoForm(instance=servico),
            "servico": servico,
            "modo": "editar",
            "active_menu": "servicos",
        }
        return render(request, "servicos/form_servico.html", context)

    def post(self, request, pk, *args, **kwargs):
        servico = get_object_or_404(Servico, pk=pk)
        preco_anterior = servico.preco
        form = ServicoForm(request.POST, instance=servico)
        if form.is_valid():
            novo_preco = form.cleaned_data["preco"]
            servico = form.save(commit=False)
            servico.preco = preco_anterior
            servico.save()
            form.save_m2m()
            if novo_preco != preco_anterior:
                atualizar_preco(servico, novo_preco, "Alteração no cadastro", request.user)
            messages.success(request, "Serviço atualizado com sucesso.")
            return redirect("servicos:detalhe", pk=servico.pk)
        context = {
            "form": form,
            "servico": servico,
            "modo": "editar",
            "active_menu": "servicos",
        }
        return render(request, "servicos/form_servico.html", context, status=400)


class ServicoAtualizarPrecoView(AdminRequiredMixin, View):
    def post(self, request, pk, *args, **kwargs):
        servico = get_object_or_404(Servico, pk=pk)
        form = AtualizarPrecoForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Informe um preço válido.")
            return redirect("servicos:detalhe", pk=servico.pk)
        try:
            atualizar_preco(
                servico,
                form.cleaned_data["preco"],
                form.cleaned_data["motivo"],
                request.user,
            )
            messages.success(request, "Preço atualizado.")
        except ValidationError as e:
            messages.error(request, "; ".join(e.messages))
        return redirect("servicos:detalhe", pk=servico.pk)


class ServicoDuplicarView(AdminRequiredMixin, View):
    def post(self, request, pk, *args, **kwargs):
        servico = get_object_or_404(Servico, pk=pk)
        copia = duplicar_servico(servico)
        messages.success(request, f"Serviço duplicado como '{copia.nome}'.")
        return redirect("servicos:editar", pk=copia.pk)


class PacoteCreateView(AdminRequiredMixin, View):
    def get(self, request, *args, **kwargs):
        context = {
            "form": PacoteServicoForm(),
            "modo": "criar",
            "active_menu": "servicos",
        }
        return render(request, "servicos/form_pacote.html", context)

    def post(self, request, *args, **kwargs):
        form = PacoteServicoForm(request.POST)
        if form.is_valid():
            pacote = form.save()
            salvar_itens_pacote(pacote, form.cleaned_data["servicos"])
            messages.success(request, "Pacote criado com sucesso.")
            return redirect("servicos:lista")
        context = {
            "form": form,
            "modo": "criar",
            "active_menu": "servicos",
        }
        return render(request, "servicos/form_pacote.html", context, status=400)


class PacoteUpdateView(AdminRequiredMixin, View):
    def get(self, request, pk, *args, **kwargs):
        pacote = get_object_or_404(PacoteServico, pk=pk)
        context = {
            "form": PacoteServicoForm(instance=pacote),
            "pacote": pacote,
            "modo": "editar",
            "active_menu": "servicos",
        }
        return render(request, "servicos/form_pacote.html", context)

    def post(self, request, pk, *args, **kwargs):
        pacote = get_object_or_404(PacoteServico, pk=pk)
        form = PacoteServicoForm(request.POST, instance=pacote)
        if form.is_valid():
            pacote = form.save()
            salvar_itens_pacote(pacote, form.cleaned_data["servicos"])
            messages.success(request, "Pacote atualizado com sucesso.")
            return redirect("servicos:lista")
        context = {
            "form": form,
            "pacote": pacote,
            "modo": "editar",
            "active_menu": "servicos",
        }
        return render(request, "servicos/form_pacote.html", context, status=400)


class PacoteDuplicarView(AdminRequiredMixin, View):
    def post(self, request, pk, *args, **kwargs):
        pacote = get_object_or_404(PacoteServico, pk=pk)
        copia = duplicar_pacote(pacote)
        messages.success(request, f"Pacote duplicado como '{copia.nome}'.")
        return redirect("servicos:editar_pacote", pk=copia.pk)


class ServicosRelatorioView(LoginRequiredMixin, View):
    def get(self, request, *args, **kwargs):
        inicio, fim = _periodo(request)
        context = {
            "relatorio": gerar_relatorio_servicos(inicio, fim),
            "relatorio_pacotes": gerar_relatorio_pacotes(inicio, fim),
            "filtros": {"inicio": inicio, "fim": fim},
            "active_menu": "servicos",
        }
        return render(request, "servicos/relatorio_servicos.html", context)


class ServicosRelatorioCSVView(LoginRequiredMixin, View):
    def get(self, request, *args, **kwargs):
        inicio, fim = _periodo(request)
        relatorio = gerar_relatorio_servicos(inicio, fim)
        response = HttpResponse(
            exportar_relatorio_servicos_csv(relatorio),
            content_type="text/csv; charset=utf-8",
        )
        response["Content-Disposition"] = (
            f'attachment; filename="relatorio-servicos-{inicio.isoformat()}-{fim.isoformat()}.csv"'
        )
        return response
