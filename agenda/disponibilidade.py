# agenda/disponibilidade.py
"""
Cálculo de horários livres e montagem do calendário mensal.
"""
import calendar
from datetime import date, datetime, time, timedelta

from .models import Agendamento

INTERVALO_SLOT_MINUTOS = 30
HORARIO_PADRAO = (time(9, 0), time(18, 0))

NOMES_MESES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]


def calendario_mes(ano: int, mes: int):
    """
    Semanas do mês começando no domingo.
    Dias de outros meses viram None (células vazias na grade).
    """
    cal = calendar.Calendar(firstweekday=6)
    semanas = []
    for semana in cal.monthdatescalendar(ano, mes):
        semanas.append([d if d.month == mes else None for d in semana])
    return semanas


def mes_vizinho(ano: int, mes: int, passo: int):
    """(ano, mes) deslocado `passo` meses para frente ou para trás."""
    indice = ano * 12 + (mes - 1) + passo
    return indice // 12, indice % 12 + 1


def agendamentos_ativos(profissional, data, excluir_pk=None):
    qs = Agendamento.objects.filter(profissional=profissional, data=data).exclude(
        status=Agendamento.Status.CANCELADO
    )
    if excluir_pk:
        qs = qs.exclude(pk=excluir_pk)
    return qs


def horarios_disponiveis(profissional, data: date):
    """
    Slots de 30 minutos dentro do expediente do profissional que não caem
    em nenhum agendamento ativo (inicio <= slot < fim).
    """
    horario = profissional.horario_do_dia(data)
    if horario is None or not horario.trabalha:
        return []

    ocupados = [
        (ag.hora_inicio, ag.hora_fim)
        for ag in agendamentos_ativos(profissional, data)
    ]

    slots = []
    atual = datetime.combine(data, horario.hora_inicio)
    fim = datetime.combine(data, horario.hora_fim)
    while atual < fim:
        slot = atual.time()
        if not any(inicio <= slot < termino for inicio, termino in ocupados):
            slots.append(slot.strftime("%H:%M"))
        atual += timedelta(minutes=INTERVALO_SLOT_MINUTOS)
    return slots


def disponibilidade(profissional, data: date):
    """Expediente do dia (padrão 09:00-18:00) e os agendamentos do profissional."""
    horario = profissional.horario_do_dia(data)
    if horario is not None:
        inicio, fim = horario.hora_inicio, horario.hora_fim
    else:
        inicio, fim = HORARIO_PADRAO

    return {
        "profissional_id": profissional.pk,
        "data": data.isoformat(),
        "horario_trabalho": {
            "inicio": inicio.strftime("%H:%M"),
            "fim": fim.strftime("%H:%M"),
        },
        "bloqueios": [],
        "agendamentos": list(
            Agendamento.objects.filter(profissional=profissional, data=data)
            .order_by("hora_inicio")
        ),
    }
