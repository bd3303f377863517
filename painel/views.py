import json
from datetime import datetime, timedelta

from django.contrib.auth.decorators import login_required
from django.db.models import Avg, Sum
from django.shortcuts import render
from django.utils import timezone
from django.utils.safestring import mark_safe

from agenda.models import Agendamento, Profissional
from clientes.models import Cliente
from financeiro.models import AlertaFinanceiro, TipoLancamento, Transacao


def _minutos(inicio, fim):
    base = datetime.min.date()
    return int((datetime.combine(base, fim) - datetime.combine(base, inicio)).total_seconds() // 60)


@login_required
def dashboard(request):
    """
    Painel principal do salão.

    Mostra:
    - Agendamentos de hoje e ocupação dos profissionais.
    - Receita de hoje e ticket médio.
    - Clientes ativos, novos no mês e aniversariantes.
    - Alertas financeiros não lidos.
    - Próximos atendimentos e série de receita dos últimos 14 dias.
    """
    today = timezone.localdate()

    # --- Agenda de hoje ---
    ativos_hoje = (
        Agendamento.objects.filter(data=today)
        .exclude(status=Agendamento.Status.CANCELADO)
        .select_related("profissional")
    )
    agendamentos_hoje = ativos_hoje.count()
    concluidos_hoje = ativos_hoje.filter(status=Agendamento.Status.CONCLUIDO).count()

    # Ocupação = minutos agendados / minutos de expediente de quem trabalha hoje
    minutos_expediente = 0
    for profissional in Profissional.objects.filter(ativo=True).prefetch_related("horarios"):
        horario = profissional.horario_do_dia(today)
        if horario is not None and horario.trabalha:
            minutos_expediente += _minutos(horario.hora_inicio, horario.hora_fim)
    minutos_agendados = sum(ag.duracao_total for ag in ativos_hoje)
    ocupacao_pct = round(minutos_agendados / minutos_expediente * 100) if minutos_expediente else 0

    # --- Receita de hoje ---
    receitas_hoje = Transacao.objects.filter(data=today, tipo=TipoLancamento.RECEITA)
    receita_hoje = receitas_hoje.aggregate(total=Sum("valor"))["total"] or 0
    ticket_medio = receitas_hoje.aggregate(avg=Avg("valor"))["avg"] or 0

    # --- Clientes ---
    clientes_ativos = Cliente.objects.filter(status=Cliente.Status.ATIVO).count()
    novos_clientes_mes = Cliente.objects.filter(
        criado_em__date__gte=today.replace(day=1)
    ).count()
    aniversariantes = Cliente.objects.filter(
        data_nascimento__month=today.month,
        status=Cliente.Status.ATIVO,
    ).order_by("data_nascimento__day")[:5]

    proximos = (
        Agendamento.objects.filter(
            data=today,
            hora_inicio__gte=timezone.localtime().time(),
            status__in=[Agendamento.Status.PENDENTE, Agendamento.Status.CONFIRMADO],
        )
        .select_related("profissional")
        .order_by("hora_inicio")[:8]
    )

    # --- Receita dos últimos 14 dias (gráfico) ---
    labels = []
    values = []
    for i in range(13, -1, -1):
        day = today - timedelta(days=i)
        labels.append(day.strftime("%d/%m"))
        total_dia = (
            Transacao.objects.filter(data=day, tipo=TipoLancamento.RECEITA)
            .aggregate(total=Sum("valor"))["total"] or 0
        )
        values.append(float(total_dia))

    context = {
        "active_menu": "dashboard",
        "today": today,

        "agendamentos_hoje": agendamentos_hoje,
        "concluidos_hoje": concluidos_hoje,
        "ocupacao_pct": ocupacao_pct,

        "receita_hoje": receita_hoje,
        "ticket_medio": ticket_medio,

        "clientes_ativos": clientes_ativos,
        "novos_clientes_mes": novos_clientes_mes,
        "aniversariantes": aniversariantes,

        "alertas": AlertaFinanceiro.objects.filter(lido=False)[:5],
        "proximos": proximos,

        "receita_labels": mark_safe(json.dumps(labels)),
        "receita_values": mark_safe(json.dumps(values)),
    }
    return render(request, "painel/dashboard.html", context)
