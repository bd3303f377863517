# relatorios/dados.py
import json
from collections import OrderedDict
from datetime import timedelta
from decimal import Decimal

from django.db.models import Count, Sum
from django.utils.safestring import mark_safe

from agenda.models import Agendamento
from financeiro.models import TipoLancamento, Transacao
from financeiro.relatorios import gerar_dre

DIAS_SEMANA = ["Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom"]


def _agrupar_series(dias, receitas, agendamentos, inicio, fim):
    """
    Eixo X do gráfico conforme o tamanho do período:

    - até 7 dias        → dia da semana (Seg, Ter, ...)
    - mesmo mês (>7d)   → dia (dd/mm)
    - até ~1 ano        → mês (mm/aaaa)
    - mais de ~1 ano    → ano (aaaa)
    """
    if len(dias) <= 7:
        return [DIAS_SEMANA[d.weekday()] for d in dias], receitas, agendamentos

    if inicio.year == fim.year and inicio.month == fim.month:
        return [d.strftime("%d/%m") for d in dias], receitas, agendamentos

    por_mes = len(dias) <= 370
    grupos = OrderedDict()
    for d, receita, qtd in zip(dias, receitas, agendamentos):
        chave = (d.year, d.month) if por_mes else d.year
        grupo = grupos.setdefault(chave, {"receita": 0.0, "agendamentos": 0})
        grupo["receita"] += receita
        grupo["agendamentos"] += qtd

    return (
        [f"{k[1]:02d}/{k[0]}" if por_mes else str(k) for k in grupos],
        [round(g["receita"], 2) for g in grupos.values()],
        [g["agendamentos"] for g in grupos.values()],
    )


def calcular_resumo(inicio, fim) -> dict:
    """Números do período para a tela de resumo e para o PDF."""
    dias = []
    d = inicio
    while d <= fim:
        dias.append(d)
        d += timedelta(days=1)

    agendamentos = Agendamento.objects.filter(data__gte=inicio, data__lte=fim)
    total_agendamentos = agendamentos.exclude(status=Agendamento.Status.CANCELADO).count()
    por_status = {
        r["status"]: r["total"]
        for r in agendamentos.values("status").annotate(total=Count("id")).order_by()
    }

    transacoes = Transacao.objects.filter(data__gte=inicio, data__lte=fim)
    receitas = transacoes.filter(tipo=TipoLancamento.RECEITA)
    despesas = transacoes.filter(tipo=TipoLancamento.DESPESA)
    receita_total = receitas.aggregate(t=Sum("valor"))["t"] or Decimal("0.00")
    despesa_total = despesas.aggregate(t=Sum("valor"))["t"] or Decimal("0.00")
    qtd_receitas = receitas.count()

    receita_por_dia = {
        r["data"]: r["total"]
        for r in receitas.values("data").annotate(total=Sum("valor")).order_by()
    }
    agendamentos_por_dia = {
        r["data"]: r["total"]
        for r in agendamentos.exclude(status=Agendamento.Status.CANCELADO)
        .values("data").annotate(total=Count("id")).order_by()
    }

    labels, serie_receita, serie_agendamentos = _agrupar_series(
        dias,
        [float(receita_por_dia.get(d, 0)) for d in dias],
        [agendamentos_por_dia.get(d, 0) for d in dias],
        inicio,
        fim,
    )

    return {
        "total_agendamentos": total_agendamentos,
        "agendamentos_por_status": por_status,
        "receita_total": receita_total,
        "despesa_total": despesa_total,
        "saldo": receita_total - despesa_total,
        "ticket_medio": (receita_total / qtd_receitas).quantize(Decimal("0.01")) if qtd_receitas else Decimal("0.00"),
        "dre": gerar_dre(inicio, fim),
        "chart_labels": mark_safe(json.dumps(labels)),
        "chart_receita": mark_safe(json.dumps(serie_receita)),
        "chart_agendamentos": mark_safe(json.dumps(serie_agendamentos)),
        "agendamentos_list": agendamentos.select_related("profissional").order_by("-data", "-hora_inicio")[:50],
        "transacoes_list": transacoes.select_related("categoria", "metodo_pagamento").order_by("-data")[:50],
    }
