# financeiro/relatorios.py
import json
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.core.serializers.json import DjangoJSONEncoder

from .models import TipoLancamento, Transacao

ZERO = Decimal("0.00")

CATEGORIA_SERVICOS = "Serviços"
CATEGORIA_PRODUTOS = "Produtos"
DESPESAS_FIXAS = ("Aluguel", "Salários")


def _q(valor) -> Decimal:
    return Decimal(valor).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _margem(valor, receita) -> Decimal:
    if not receita:
        return ZERO
    return _q(valor * 100 / receita)


def _crescimento(atual, anterior) -> Decimal:
    if not anterior:
        return ZERO
    return _q((atual - anterior) * 100 / anterior)


def transacoes_do_periodo(inicio, fim):
    return (
        Transacao.objects.filter(data__gte=inicio, data__lte=fim)
        .select_related("categoria", "metodo_pagamento")
    )


def _agrupar(transacoes):
    total = ZERO
    por_categoria = defaultdict(lambda: ZERO)
    por_metodo = defaultdict(lambda: ZERO)
    for t in transacoes:
        total += t.valor
        por_categoria[t.categoria.nome] += t.valor
        por_metodo[t.metodo_pagamento.nome] += t.valor
    return {
        "total": total,
        "por_categoria": dict(por_categoria),
        "por_metodo_pagamento": dict(por_metodo),
    }


def gerar_fluxo_caixa(inicio, fim) -> dict:
    transacoes = list(transacoes_do_periodo(inicio, fim))
    receitas = _agrupar(t for t in transacoes if t.tipo == TipoLancamento.RECEITA)
    despesas = _agrupar(t for t in transacoes if t.tipo == TipoLancamento.DESPESA)
    return {
        "periodo": {"inicio": inicio, "fim": fim},
        "saldo_inicial": ZERO,
        "receitas": receitas,
        "despesas": despesas,
        "saldo_final": receitas["total"] - despesas["total"],
    }


def gerar_dre(inicio, fim) -> dict:
    """
    Demonstração do Resultado do Exercício simplificada.

    Despesas com Aluguel e Salários são fixas, as demais variáveis.
    Não há resultado financeiro nem impostos sobre o lucro, então o
    lucro líquido é igual ao EBITDA.
    """
    receita = {"servicos": ZERO, "produtos": ZERO, "outras": ZERO}
    despesa = {"fixas": ZERO, "variaveis": ZERO}

    for t in transacoes_do_periodo(inicio, fim):
        nome = t.categoria.nome
        if t.tipo == TipoLancamento.RECEITA:
            if nome == CATEGORIA_SERVICOS:
                receita["servicos"] += t.valor
            elif nome == CATEGORIA_PRODUTOS:
                receita["produtos"] += t.valor
            else:
                receita["outras"] += t.valor
        elif nome in DESPESAS_FIXAS:
            despesa["fixas"] += t.valor
        else:
            despesa["variaveis"] += t.valor

    receita["total"] = receita["servicos"] + receita["produtos"] + receita["outras"]
    despesa["total"] = despesa["fixas"] + despesa["variaveis"]

    lucro_bruto = receita["total"] - despesa["variaveis"]
    ebitda = lucro_bruto - despesa["fixas"]
    lucro_liquido = ebitda

    return {
        "periodo": {"inicio": inicio, "fim": fim},
        "receita": receita,
        "despesas": despesa,
        "lucro_bruto": lucro_bruto,
        "despesas_operacionais": {
            "administrativas": despesa["fixas"],
            "comerciais": ZERO,
            "total": despesa["fixas"],
        },
        "ebitda": ebitda,
        "resultado_financeiro": ZERO,
        "lucro_liquido": lucro_liquido,
        "margens": {
            "bruta": _margem(lucro_bruto, receita["total"]),
            "ebitda": _margem(ebitda, receita["total"]),
            "liquida": _margem(lucro_liquido, receita["total"]),
        },
    }


def _ticket_medio(receitas) -> Decimal:
    if not receitas:
        return ZERO
    return _q(sum((t.valor for t in receitas), ZERO) / len(receitas))


def _periodo_anterior(inicio, fim):
    """Mesma quantidade de dias logo antes de `inicio`, limitada a date.min."""
    if inicio == date.min:
        return date.min, date.min
    dias = (fim - inicio).days + 1
    try:
        ant_inicio = inicio - timedelta(days=dias)
    except OverflowError:
        ant_inicio = date.min
    return ant_inicio, inicio - timedelta(days=1)


def gerar_desempenho(inicio, fim) -> dict:
    ant_inicio, ant_fim = _periodo_anterior(inicio, fim)

    receitas = [t for t in transacoes_do_periodo(inicio, fim) if t.tipo == TipoLancamento.RECEITA]
    anteriores = [t for t in transacoes_do_periodo(ant_inicio, ant_fim) if t.tipo == TipoLancamento.RECEITA]

    agrupado = _agrupar(receitas)
    total_anterior = sum((t.valor for t in anteriores), ZERO)
    ticket = _ticket_medio(receitas)
    ticket_anterior = _ticket_medio(anteriores)
    dre = gerar_dre(inicio, fim)

    return {
        "periodo": {"inicio": inicio, "fim": fim},
        "receita": {
            "total": agrupado["total"],
            "crescimento": _crescimento(agrupado["total"], total_anterior),
            "por_categoria": agrupado["por_categoria"],
            "por_metodo_pagamento": agrupado["por_metodo_pagamento"],
        },
        "ticket_medio": {
            "atual": ticket,
            "anterior": ticket_anterior,
            "crescimento": _crescimento(ticket, ticket_anterior),
        },
        "rentabilidade": dre["margens"],
    }


def exportar_relatorio(relatorio: dict) -> str:
    """Serializa qualquer relatório em JSON (datas e decimais inclusos)."""
    return json.dumps(relatorio, cls=DjangoJSONEncoder, ensure_ascii=False, indent=2)
