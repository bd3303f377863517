# agenda/views.py
import logging
from datetime import MAXYEAR, MINYEAR, date

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.http import HttpResponseBadRequest, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils import timezone
from django.views import View

from . import operacoes
from .disponibilidade import (
    NOMES_MESES,
    calendario_mes,
    disponibilidade,
    horarios_disponiveis,
    mes_vizinho,
)
from .forms import AgendamentoForm, ReagendarForm
from .models import Agendamento, Profissional

logger = logging.getLogger(__name__)


def _voltar_para_dia(dia):
    return redirect(f"{reverse('agenda:calendario')}?dia={dia.isoformat()}")


def _parse_date(value):
    """'AAAA-MM-DD' válida ou None; anos nas pontas do calendário ficam de fora."""
    if not value:
        return None
    try:
        data = date.fromisoformat(value)
    except ValueError:
        return None
    if not MINYEAR < data.year < MAXYEAR:
        return None
    return data


def _int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class CalendarioView(LoginRequiredMixin, View):
    """
    Calendário mensal com a lista de agendamentos do dia selecionado.
    Filtros por profissional e status.
    """

    def get(self, request, *args, **kwargs):
        hoje = timezone.localdate()
        dia = _parse_date(request.GET.get("dia")) or hoje
        ano = _int(request.GET.get("ano"), dia.year)
        mes = _int(request.GET.get("mes"), dia.month)
        if not (1 <= mes <= 12 and MINYEAR < ano < MAXYEAR):
            ano, mes = hoje.year, hoje.month

        profissional_id = _int(request.GET.get("profissional"), None)
        status = (request.GET.get("status") or "").strip()

        do_mes = Agendamento.objects.filter(data__year=ano, data__month=mes)
        if profissional_id is not None:
            do_mes = do_mes.filter(profissional_id=profissional_id)
        if status:
            do_mes = do_mes.filter(status=status)

        por_dia = {}
        for data_ag in do_mes.exclude(status=Agendamento.Status.CANCELADO).values_list("data", flat=True):
            por_dia[data_ag] = por_dia.get(data_ag, 0) + 1

        do_dia = (
            Agendamento.objects.filter(data=dia)
            .select_related("profissional", "cliente")
            .prefetch_related("servicos")
        )
        if profissional_id is not None:
            do_dia = do_dia.filter(profissional_id=profissional_id)
        if status:
            do_dia = do_dia.filter(status=status)

        anterior = mes_vizinho(ano, mes, -1)
        proximo = mes_vizinho(ano, mes, 1)

        context = {
            "semanas": [
                [{"data": d, "total": por_dia.get(d, 0)} if d else None for d in semana]
                for semana in calendario_mes(ano, mes)
            ],
            "ano": ano,
            "mes": mes,
            "nome_mes": NOMES_MESES[mes - 1],
            "mes_anterior": {"ano": anterior[0], "mes": anterior[1]},
            "mes_proximo": {"ano": proximo[0], "mes": proximo[1]},
            "hoje": hoje,
            "dia": dia,
            "agendamentos": do_dia,
            "profissionais": Profissional.objects.filter(ativo=True),
            "status_choices": Agendamento.Status.choices,
            "filtros": {"profissional": profissional_id, "status": status},
            "reagendar_form": ReagendarForm(),
            "active_menu": "agenda",
        }
        return render(request, "agenda/calendario.html", context)


class AgendamentoCreateView(LoginRequiredMixin, View):
    def get(self, request, *args, **kwargs):
        inicial = {"data": _parse_date(request.GET.get("dia")) or timezone.localdate()}
        if request.GET.get("profissional"):
            inicial["profissional"] = request.GET["profissional"]
        context = {
            "form": AgendamentoForm(initial=inicial),
            "active_menu": "agenda",
        }
        return render(request, "agenda/form_agendamento.html", context)

    def post(self, request, *args, **kwargs):
        form = AgendamentoForm(request.POST)
        if form.is_valid():
            dados = form.cleaned_data
            try:
                agendamento = operacoes.agendar(
                    profissional=dados["profissional"],
                    servicos=dados["servicos"],
                    data=dados["data"],
                    hora_inicio=dados["hora_inicio"],
                    cliente=dados["cliente"],
                    nome_cliente=dados["nome_cliente"].strip(),
                    telefone_cliente=dados["telefone_cliente"],
                    email_cliente=dados["email_cliente"],
                    observacoes=dados["observacoes"],
                )
            except ValidationError as e:
                form.add_error(None, e)
            else:
                messages.success(request, f"Agendamento {agendamento.codigo} criado.")
                return _voltar_para_dia(agendamento.data)

        context = {
            "form": form,
            "active_menu": "agenda",
        }
        return render(request, "agenda/form_agendamento.html", context, status=400)


class AgendamentoStatusActionView(LoginRequiredMixin, View):
    """
    Muda o status de um agendamento: confirmar, cancelar, concluir ou falta.
    """

    ACOES = {
        "confirmar": (operacoes.confirmar, "confirmado"),
        "cancelar": (operacoes.cancelar, "cancelado"),
        "concluir": (operacoes.concluir, "concluído"),
        "falta": (operacoes.marcar_falta, "marcado como falta"),
    }

    def post(self, request, pk, *args, **kwargs):
        agendamento = get_object_or_404(Agendamento, pk=pk)
        acao = (request.POST.get("acao") or "").strip().lower()

        if acao not in self.ACOES:
            return HttpResponseBadRequest("Ação inválida.")

        funcao, rotulo = self.ACOES[acao]
        try:
            funcao(agendamento)
            messages.success(request, f"Agendamento {agendamento.codigo} {rotulo}.")
        except ValidationError as e:
            messages.warning(request, "; ".join(e.messages))

        return _voltar_para_dia(agendamento.data)


class AgendamentoReagendarView(LoginRequiredMixin, View):
    def post(self, request, pk, *args, **kwargs):
        agendamento = get_object_or_404(Agendamento, pk=pk)
        form = ReagendarForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Informe a nova data e o horário.")
            return _voltar_para_dia(agendamento.data)

        try:
            operacoes.reagendar(
                agendamento,
                form.cleaned_data["data"],
                form.cleaned_data["hora_inicio"],
            )
            messages.success(request, f"Agendamento {agendamento.codigo} reagendado.")
        except ValidationError as e:
            messages.error(request, "; ".join(e.messages))

        return _voltar_para_dia(agendamento.data)


class HorariosDisponiveisView(LoginRequiredMixin, View):
    """JSON com os horários livres de um profissional numa data."""

    def get(self, request, *args, **kwargs):
        profissional = get_object_or_404(Profissional, pk=_int(request.GET.get("profissional"), 0))
        data = _parse_date(request.GET.get("data"))
        if data is None:
            return JsonResponse({"erro": "Data inválida."}, status=400)

        info = disponibilidade(profissional, data)
        return JsonResponse({
            "profissional_id": profissional.pk,
            "data": data.isoformat(),
            "horario_trabalho": info["horario_trabalho"],
            "horarios": horarios_disponiveis(profissional, data),
            "ocupados": [
                {
                    "inicio": ag.hora_inicio.strftime("%H:%M"),
                    "fim": ag.hora_fim.strftime("%H:%M"),
                    "status": ag.status,
                }
                for ag in info["agendamentos"]
                if ag.status != Agendamento.Status.CANCELADO
            ],
        })
