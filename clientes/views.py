# clientes/views.py
import logging
from decimal import Decimal

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.db.models import Sum
from django.http import HttpResponse
from django.shortcuts import render, redirect, get_object_or_404
from django.views import View

from accounts.permissions import AdminRequiredMixin

from .busca import FiltrosBuscaCliente, buscar_clientes
from .comunicacao import enviar_mensagem
from .exportacao import (
    exportar_clientes_csv,
    exportar_dados_cliente,
    nome_arquivo_csv,
    nome_arquivo_lgpd,
)
from .fidelidade import adicionar_pontos, resgatar_pontos
from .forms import ClienteForm, EnviarMensagemForm, PontosForm
from .models import Cliente, MovimentoPontos, NivelFidelidade

logger = logging.getLogger(__name__)


def _kpis(clientes):
    total_gasto = sum((c.total_gasto for c in clientes), Decimal("0.00"))
    return {
        "total": len(clientes),
        "ativos": sum(1 for c in clientes if c.status == Cliente.Status.ATIVO),
        "com_alergias": sum(1 for c in clientes if c.tem_alergias),
        "total_gasto": total_gasto,
        "ticket_medio": (total_gasto / len(clientes)).quantize(Decimal("0.01")) if clientes else Decimal("0.00"),
    }


class ClientesListView(LoginRequiredMixin, View):
    """
    Listagem de clientes com busca avançada.
    Os KPIs são calculados sobre o conjunto filtrado.
    """

    def get(self, request, *args, **kwargs):
        filtros = FiltrosBuscaCliente.from_querydict(request.GET)
        clientes = buscar_clientes(filtros)

        context = {
            "clientes": clientes,
            "kpis": _kpis(clientes),
            "filtros": request.GET,
            "niveis": NivelFidelidade.choices,
            "status_choices": Cliente.Status.choices,
            "active_menu": "clientes",
        }
        return render(request, "clientes/lista_clientes.html", context)


class ClientesExportarCSVView(LoginRequiredMixin, View):
    def get(self, request, *args, **kwargs):
        clientes = buscar_clientes(FiltrosBuscaCliente.from_querydict(request.GET))
        response = HttpResponse(
            exportar_clientes_csv(clientes),
            content_type="text/csv; charset=utf-8",
        )
        response["Content-Disposition"] = f'attachment; filename="{nome_arquivo_csv()}"'
        return response


class ClienteDetailView(LoginRequiredMixin, View):
    """
    Ficha completa do cliente: fidelidade, histórico de atendimentos
    e mensagens enviadas.
    """

    def get(self, request, pk, *args, **kwargs):
        cliente = get_object_or_404(Cliente, pk=pk)
        atendimentos = cliente.atendimentos.all()

        context = {
            "cliente": cliente,
            "atendimentos": atendimentos,
            "total_atendimentos": atendimentos.aggregate(total=Sum("preco_final"))["total"] or Decimal("0.00"),
            "movimentos": cliente.movimentos_pontos.all()[:20],
            "mensagens": cliente.mensagens.select_related("template")[:20],
            "pontos_form": PontosForm(),
            "mensagem_form": EnviarMensagemForm(),
            "active_menu": "clientes",
        }
        return render(request, "clientes/detalhe_cliente.html", context)


class ClienteCreateView(LoginRequiredMixin, View):
    def get(self, request, *args, **kwargs):
        context = {
            "form": ClienteForm(),
            "modo": "criar",
            "active_menu": "clientes",
        }
        return render(request, "clientes/form_cliente.html", context)

    def post(self, request, *args, **kwargs):
        form = ClienteForm(request.POST)
        if form.is_valid():
            cliente = form.save()
            logger.info("Cliente %s cadastrado", cliente.pk)
            messages.success(request, "Cliente cadastrado com sucesso.")
            return redirect("clientes:detalhe", pk=cliente.pk)
        context = {
            "form": form,
            "modo": "criar",
            "active_menu": "clientes",
        }
        return render(request, "clientes/form_cliente.html", context, status=400)


class ClienteUpdateView(LoginRequiredMixin, View):
    def get(self, request, pk, *args, **kwargs):
        cliente = get_object_or_404(Cliente, pk=pk)
        context = {
            "form": ClienteForm(instance=cliente),
            "cliente": cliente,
            "modo": "editar",
            "active_menu": "clientes",
        }
        return render(request, "clientes/form_cliente.html", context)

    def post(self, request, pk, *args, **kwargs):
        cliente = get_object_or_404(Cliente, pk=pk)
        form = ClienteForm(request.POST, instance=cliente)
        if form.is_valid():
            form.save()
            messages.success(request, "Cliente atualizado com sucesso.")
            return redirect("clientes:detalhe", pk=cliente.pk)
        context = {
            "form": form,
            "cliente": cliente,
            "modo": "editar",
            "active_menu": "clientes",
        }
        return render(request, "clientes/form_cliente.html", context, status=400)


class ClienteDeleteView(AdminRequiredMixin, View):
    """
    Confirma e exclui um cliente.
    Os agendamentos ficam preservados (Agendamento.cliente é SET_NULL).
    """

    def get(self, request, pk, *args, **kwargs):
        cliente = get_object_or_404(Cliente, pk=pk)
        return render(
            request,
            "clientes/confirmar_exclusao_cliente.html",
            {"cliente": cliente, "active_menu": "clientes"},
        )

    def post(self, request, pk, *args, **kwargs):
        cliente = get_object_or_404(Cliente, pk=pk)
        logger.info("Cliente %s excluído por %s", cliente.pk, request.user)
        cliente.delete()
        messages.success(request, "Cliente excluído.")
        return redirect("clientes:lista")


class ClienteExportarDadosView(LoginRequiredMixin, View):
    """Download do JSON de portabilidade (LGPD)."""

    def get(self, request, pk, *args, **kwargs):
        cliente = get_object_or_404(Cliente, pk=pk)
        response = HttpResponse(
            exportar_dados_cliente(cliente),
            content_type="application/json; charset=utf-8",
        )
        response["Content-Disposition"] = f'attachment; filename="{nome_arquivo_lgpd(cliente)}"'
        return response


class ClientePontosView(LoginRequiredMixin, View):
    """Lançamento manual de pontos: acao=adicionar (bônus) ou acao=resgatar."""

    def post(self, request, pk, *args, **kwargs):
        cliente = get_object_or_404(Cliente, pk=pk)
        form = PontosForm(request.POST)
        acao = request.POST.get("acao", "adicionar")

        if not form.is_valid():
            messages.error(request, "Informe uma quantidade de pontos válida e a descrição.")
            return redirect("clientes:detalhe", pk=cliente.pk)

        pontos = form.cleaned_data["pontos"]
        descricao = form.cleaned_data["descricao"]
        try:
            if acao == "resgatar":
                resgatar_pontos(cliente, pontos, descricao)
                messages.success(request, f"{pontos} pontos resgatados.")
            else:
                adicionar_pontos(cliente, pontos, descricao, tipo=MovimentoPontos.Tipo.BONUS)
                messages.success(request, f"{pontos} pontos adicionados.")
        except ValidationError as e:
            messages.error(request, "; ".join(e.messages))

        return redirect("clientes:detalhe", pk=cliente.pk)


class ClienteEnviarMensagemView(LoginRequiredMixin, View):
    def post(self, request, pk, *args, **kwargs):
        cliente = get_object_or_404(Cliente, pk=pk)
        form = EnviarMensagemForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Selecione um template de mensagem.")
            return redirect("clientes:detalhe", pk=cliente.pk)

        try:
            enviar_mensagem(cliente, form.cleaned_data["template"])
            messages.success(request, "Mensagem enviada.")
        except ValidationError as e:
            messages.error(request, "; ".join(e.messages))
        return redirect("clientes:detalhe", pk=cliente.pk)
