# servicos/relatorios.py
"""
Relatórios do catálogo montados a partir dos agendamentos do período.

Agendamentos cancelados não contam como atendimento nem geram receita,
mas entram no denominador da taxa de conversão.
"""
import csv
import io
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP

from agenda.models import Agendamento

from .models import PacoteServico, Servico

MESES_CURTOS = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"]

CABECALHO_CSV = ["Serviço", "Agendamentos", "Receita", "Avaliação Média", "Crescimento (%)"]

DOIS = Decimal("0.01")


def _q(valor) -> Decimal:
    return Decimal(valor).quantize(DOIS, rounding=ROUND_HALF_UP)


def _percentual(parte, total) -> Decimal:
    if not total:
        return Decimal("0.00")
    return _q(Decimal(parte) * 100 / Decimal(total))


def _crescimento(atual, anterior) -> Decimal:
    if not anterior:
        return Decimal("100.00") if atual else Decimal("0.00")
    return _q((Decimal(atual) - Decimal(anterior)) * 100 / Decimal(anterior))


def periodo_anterior(inicio, fim):
    """Período imediatamente anterior com a mesma quantidade de dias."""
    if inicio == date.min:
        return date.min, date.min
    dias = (fim - inicio).days + 1
    try:
        ant_inicio = inicio - timedelta(days=dias)
    except OverflowError:
        ant_inicio = date.min
    return ant_inicio, inicio - timedelta(days=1)


def _agendamentos(inicio, fim):
    return (
        Agendamento.objects.filter(data__gte=inicio, data__lte=fim)
        .prefetch_related("servicos")
    )


def _totais_por_servico(agendamentos):
    """servico_id -> {"agendamentos": int, "receita": Decimal}"""
    totais = defaultdict(lambda: {"agendamentos": 0, "receita": Decimal("0.00")})
    for ag in agendamentos:
        if ag.status == Agendamento.Status.CANCELADO:
            continue
        for servico in ag.servicos.all():
            totais[servico.pk]["agendamentos"] += 1
            totais[servico.pk]["receita"] += servico.preco
    return totais


def _serie_mensal(agendamentos, inicio, fim):
    serie = {}
    ano, mes = inicio.year, inicio.month
    while (ano, mes) <= (fim.year, fim.month):
        serie[(ano, mes)] = {
            "mes": MESES_CURTOS[mes - 1],
            "ano": ano,
            "agendamentos": 0,
            "receita": Decimal("0.00"),
        }
        ano, mes = (ano + 1, 1) if mes == 12 else (ano, mes + 1)

    for ag in agendamentos:
        if ag.status == Agendamento.Status.CANCELADO:
            continue
        ponto = serie.get((ag.data.year, ag.data.month))
        if ponto is not None:
            ponto["agendamentos"] += 1
            ponto["receita"] += ag.preco_total
    return list(serie.values())


def gerar_relatorio_servicos(inicio, fim) -> dict:
    agendamentos = list(_agendamentos(inicio, fim))
    ant_inicio, ant_fim = periodo_anterior(inicio, fim)
    anteriores = _totais_por_servico(_agendamentos(ant_inicio, ant_fim))
    atuais = _totais_por_servico(agendamentos)

    servicos = {s.pk: s for s in Servico.objects.all()}

    linhas = []
    for servico_id, totais in atuais.items():
        servico = servicos.get(servico_id)
        if servico is None:
            continue
        linhas.append({
            "servico_id": servico_id,
            "servico": servico.nome,
            "categoria": servico.categoria,
            "agendamentos": totais["agendamentos"],
            "receita": totais["receita"],
            "avaliacao_media": servico.avaliacao_media,
            "crescimento": _crescimento(
                totais["agendamentos"],
                anteriores.get(servico_id, {}).get("agendamentos", 0),
            ),
        })
    linhas.sort(key=lambda l: (-l["agendamentos"], -l["receita"], l["servico"]))

    # Desempenho por categoria
    total_itens = sum(l["agendamentos"] for l in linhas)
    categorias = []
    for valor, rotulo in Servico.Categoria.choices:
        da_categoria = [l for l in linhas if l["categoria"] == valor]
        if not da_categoria:
            continue
        qtd = sum(l["agendamentos"] for l in da_categoria)
        receita = sum((l["receita"] for l in da_categoria), Decimal("0.00"))
        categorias.append({
            "categoria": valor,
            "rotulo": rotulo,
            "agendamentos": qtd,
            "receita": receita,
            "preco_medio": _q(receita / qtd) if qtd else Decimal("0.00"),
            "participacao": _percentual(qtd, total_itens),
        })

    realizados = [a for a in agendamentos if a.status != Agendamento.Status.CANCELADO]
    receita_total = sum((a.preco_total for a in realizados), Decimal("0.00"))

    crescendo = max(linhas, key=lambda l: l["crescimento"], default=None)
    caindo = min(linhas, key=lambda l: l["crescimento"], default=None)

    return {
        "periodo": {"inicio": inicio, "fim": fim},
        "top_servicos": linhas[:10],
        "categorias": categorias,
        "receita": {
            "total": receita_total,
            "ticket_medio": _q(receita_total / len(realizados)) if realizados else Decimal("0.00"),
            "total_agendamentos": len(realizados),
            "taxa_conversao": _percentual(len(realizados), len(agendamentos)),
        },
        "tendencias": {
            "maior_crescimento": crescendo["servico"] if crescendo else "",
            "maior_queda": caindo["servico"] if caindo else "",
            "serie_mensal": _serie_mensal(agendamentos, inicio, fim),
        },
    }


def gerar_relatorio_pacotes(inicio, fim) -> dict:
    pacotes = sorted(
        PacoteServico.objects.all(),
        key=lambda p: (-p.vendas_mes, p.nome),
    )

    ranking = [
        {
            "pacote_id": p.pk,
            "pacote": p.nome,
            "vendas": p.vendas_mes,
            "receita": p.receita_mes,
            "taxa_conversao": p.taxa_conversao,
            "avaliacao_media": p.avaliacao_media,
        }
        for p in pacotes
    ]

    if pacotes:
        desconto_medio = _q(sum(p.desconto_percentual for p in pacotes) / len(pacotes))
        avaliacao_media = _q(sum(p.avaliacao_media for p in pacotes) / len(pacotes))
    else:
        desconto_medio = avaliacao_media = Decimal("0.00")

    economia_total = sum((p.economia * p.total_vendas for p in pacotes), Decimal("0.00"))

    return {
        "periodo": {"inicio": inicio, "fim": fim},
        "top_pacotes": ranking,
        "descontos": {
            "desconto_medio": desconto_medio,
            "economia_oferecida": economia_total,
            "avaliacao_media": avaliacao_media,
        },
        "uso": {
            "mais_vendido": pacotes[0].nome if pacotes else "",
            "menos_vendido": pacotes[-1].nome if pacotes else "",
        },
    }


def exportar_relatorio_servicos_csv(relatorio: dict) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CABECALHO_CSV)
    for linha in relatorio["top_servicos"]:
        writer.writerow([
            linha["servico"],
            linha["agendamentos"],
            linha["receita"],
            linha["avaliacao_media"],
            linha["crescimento"],
        ])
    return buffer.getvalue()
