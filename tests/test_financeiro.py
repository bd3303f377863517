"""
Tests for financeiro: caixa, transações, alertas, impostos e relatórios.
"""
import json
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from financeiro.alertas import gerar_alertas, marcar_lido
from financeiro.caixa import (
    abrir_caixa,
    caixa_aberto,
    calcular_saldo_esperado,
    fechar_caixa,
    registrar_movimento,
    registrar_transacao,
)
from financeiro.fiscal import calcular_impostos, emitir_documento_fiscal, vencimento_referente
from financeiro.models import (
    AlertaFinanceiro,
    Caixa,
    Conta,
    DocumentoFiscal,
    MovimentoCaixa,
    ObrigacaoFiscal,
    TipoLancamento,
)
from financeiro.relatorios import exportar_relatorio, gerar_desempenho, gerar_dre, gerar_fluxo_caixa

OUTUBRO = (date(2026, 10, 1), date(2026, 10, 31))


def _receita(categorias, metodos, valor, metodo="dinheiro", categoria="Serviços", data=None):
    return registrar_transacao(
        tipo=TipoLancamento.RECEITA,
        categoria=categorias[categoria],
        valor=valor,
        descricao=f"Receita {valor}",
        metodo_pagamento=metodos[metodo],
        data=data,
    )


def _despesa(categorias, metodos, valor, metodo="dinheiro", categoria="Materiais", data=None):
    return registrar_transacao(
        tipo=TipoLancamento.DESPESA,
        categoria=categorias[categoria],
        valor=valor,
        descricao=f"Despesa {valor}",
        metodo_pagamento=metodos[metodo],
        data=data,
    )


# --- Caixa ---


@pytest.mark.django_db
def test_abrir_caixa():
    """Só um caixa aberto por vez e saldo de abertura não negativo."""
    with pytest.raises(ValidationError):
        abrir_caixa(-1)
    caixa = abrir_caixa("200.00")
    assert caixa_aberto() == caixa
    assert caixa.saldo_esperado == Decimal("200.00")
    with pytest.raises(ValidationError):
        abrir_caixa(100)


@pytest.mark.django_db
def test_saldo_esperado_conta_apenas_dinheiro(categorias, metodos):
    """PIX não entra no caixa físico; sangria e suprimento entram."""
    caixa = abrir_caixa(200)
    _receita(categorias, metodos, 100)
    _receita(categorias, metodos, 300, metodo="pix")
    _despesa(categorias, metodos, 30)
    registrar_movimento(caixa, MovimentoCaixa.Tipo.SUPRIMENTO, 50, "Troco")
    registrar_movimento(caixa, MovimentoCaixa.Tipo.SANGRIA, 120, "Depósito", autorizado_por="admin")

    assert calcular_saldo_esperado(caixa) == Decimal("200.00")
    caixa.refresh_from_db()
    assert caixa.saldo_esperado == Decimal("200.00")
    assert caixa.transacoes.count() == 3


@pytest.mark.django_db
def test_movimento_invalido():
    """Movimento precisa de caixa aberto, valor positivo e tipo conhecido."""
    with pytest.raises(ValidationError):
        registrar_movimento(None, MovimentoCaixa.Tipo.SANGRIA, 10, "x")
    caixa = abrir_caixa(100)
    with pytest.raises(ValidationError):
        registrar_movimento(caixa, MovimentoCaixa.Tipo.SANGRIA, 0, "x")
    with pytest.raises(ValidationError):
        registrar_movimento(caixa, "outro", 10, "x")


@pytest.mark.django_db
def test_fechar_caixa_sem_diferenca(categorias, metodos):
    """Fechamento exato deixa o caixa fechado."""
    caixa = abrir_caixa(100)
    _receita(categorias, metodos, 50)
    caixa = fechar_caixa(caixa, "150.00", "Tudo certo")
    assert caixa.status == Caixa.Status.FECHADO
    assert caixa.diferenca == Decimal("0.00")
    assert caixa.fechado_em is not None
    assert caixa_aberto() is None
    with pytest.raises(ValidationError):
        fechar_caixa(caixa, 150)


@pytest.mark.django_db
def test_fechar_caixa_com_diferenca_exige_revisao(config):
    """Diferença acima do limite fica pendente de revisão quando exigido."""
    config.caixa_exige_aprovacao = True
    config.save()

    caixa = fechar_caixa(abrir_caixa(100), 85)
    assert caixa.diferenca == Decimal("-15.00")
    assert caixa.status == Caixa.Status.EM_REVISAO


@pytest.mark.django_db
def test_fechar_caixa_diferenca_dentro_do_limite(config):
    """Diferença até o limite fecha normalmente."""
    config.caixa_exige_aprovacao = True
    config.save()

    caixa = fechar_caixa(abrir_caixa(100), 95)
    assert caixa.status == Caixa.Status.FECHADO


@pytest.mark.django_db
def test_transacao_sem_caixa_aberto(categorias, metodos):
    """Transação fora do horário de caixa fica sem vínculo."""
    transacao = _receita(categorias, metodos, 80)
    assert transacao.caixa is None
    assert transacao.data == timezone.localdate()


@pytest.mark.django_db
def test_transacao_com_valor_invalido(categorias, metodos):
    """Valor precisa ser positivo."""
    with pytest.raises(ValidationError):
        _receita(categorias, metodos, 0)


# --- Alertas ---


@pytest.mark.django_db
def test_alerta_de_vencimento_proximo(config):
    """Conta que vence dentro do prazo gera um único aviso."""
    hoje = date(2026, 10, 19)
    Conta.objects.create(
        tipo=Conta.Tipo.PAGAR,
        categoria="Aluguel",
        descricao="Aluguel do salão",
        valor=Decimal("2500.00"),
        vencimento=hoje + timedelta(days=3),
    )
    criados = gerar_alertas(hoje)
    assert len(criados) == 1
    assert criados[0].severidade == AlertaFinanceiro.Severidade.AVISO
    assert "em 3 dias" in criados[0].mensagem
    assert gerar_alertas(hoje) == []


@pytest.mark.django_db
def test_conta_vencida(config):
    """Conta pendente vencida muda de status e gera erro."""
    hoje = date(2026, 10, 19)
    conta = Conta.objects.create(
        tipo=Conta.Tipo.PAGAR,
        categoria="Energia",
        descricao="Conta de luz",
        valor=Decimal("320.00"),
        vencimento=hoje - timedelta(days=1),
    )
    criados = gerar_alertas(hoje)
    conta.refresh_from_db()
    assert conta.status == Conta.Status.VENCIDA
    assert [a.severidade for a in criados] == [AlertaFinanceiro.Severidade.ERRO]
    assert gerar_alertas(hoje) == []


@pytest.mark.django_db
def test_alerta_de_despesa_alta(config, categorias, metodos):
    """Despesa acima do limite alerta uma vez."""
    _despesa(categorias, metodos, "6000.00", metodo="pix", categoria="Aluguel")
    _despesa(categorias, metodos, "100.00", metodo="pix")
    criados = gerar_alertas()
    assert [a.tipo for a in criados] == [AlertaFinanceiro.Tipo.DESPESA_ALTA]
    assert gerar_alertas() == []


@pytest.mark.django_db
def test_alerta_de_caixa_baixo(config):
    """Caixa aberto abaixo do limite alerta uma vez."""
    abrir_caixa(100)
    criados = gerar_alertas()
    assert [a.tipo for a in criados] == [AlertaFinanceiro.Tipo.CAIXA_BAIXO]
    assert gerar_alertas() == []


@pytest.mark.django_db
def test_marcar_lido(config):
    """Alerta lido sai da lista de pendentes."""
    abrir_caixa(100)
    alerta = gerar_alertas()[0]
    marcar_lido(alerta)
    assert not AlertaFinanceiro.objects.filter(lido=False).exists()


# --- Fiscal ---


def test_vencimento_referente():
    """Dia 20 do mês seguinte, virando o ano em dezembro."""
    assert vencimento_referente(date(2026, 10, 1)) == date(2026, 11, 20)
    assert vencimento_referente(date(2026, 12, 1)) == date(2027, 1, 20)


@pytest.mark.django_db
def test_impostos_mei(config, categorias, metodos):
    """MEI paga o DAS fixo independentemente da receita."""
    _receita(categorias, metodos, 1000, metodo="pix", data=date(2026, 10, 5))
    obrigacao = calcular_impostos(*OUTUBRO)
    assert obrigacao.valor == Decimal("66.60")
    assert obrigacao.aliquota == Decimal("0.00")
    assert obrigacao.base_calculo == Decimal("1000.00")
    assert obrigacao.referencia == "10/2026"
    assert obrigacao.vencimento == date(2026, 11, 20)


@pytest.mark.django_db
def test_impostos_simples_recalcula_mesmo_mes(config, categorias, metodos):
    """Simples aplica a alíquota; recalcular atualiza a mesma obrigação."""
    config.regime_fiscal = config.RegimeFiscal.SIMPLES
    config.save()

    _receita(categorias, metodos, 1000, metodo="pix", data=date(2026, 10, 5))
    assert calcular_impostos(*OUTUBRO, config=config).valor == Decimal("60.00")

    _receita(categorias, metodos, 500, metodo="pix", data=date(2026, 10, 20))
    obrigacao = calcular_impostos(*OUTUBRO, config=config)
    assert obrigacao.valor == Decimal("90.00")
    assert ObrigacaoFiscal.objects.count() == 1


@pytest.mark.django_db
def test_documentos_fiscais_numerados_em_sequencia():
    """Numeração sequencial dos documentos emitidos."""
    primeiro = emitir_documento_fiscal(DocumentoFiscal.Tipo.RECIBO, Decimal("60.00"), "Corte + Barba")
    segundo = emitir_documento_fiscal(DocumentoFiscal.Tipo.RECIBO, Decimal("35.00"), "Corte")
    assert segundo.numero == primeiro.numero + 1
    assert segundo.status == DocumentoFiscal.Status.EMITIDO


# --- Relatórios ---


@pytest.fixture
def movimento_outubro(categorias, metodos):
    _receita(categorias, metodos, 800, data=date(2026, 10, 3))
    _receita(categorias, metodos, 200, metodo="pix", categoria="Produtos", data=date(2026, 10, 4))
    _despesa(categorias, metodos, 300, categoria="Aluguel", data=date(2026, 10, 5))
    _despesa(categorias, metodos, 100, metodo="pix", data=date(2026, 10, 6))
    _receita(categorias, metodos, 500, data=date(2026, 9, 20))


@pytest.mark.django_db
def test_fluxo_de_caixa(movimento_outubro):
    """Totais agrupados por categoria e método de pagamento."""
    fluxo = gerar_fluxo_caixa(*OUTUBRO)
    assert fluxo["receitas"]["total"] == Decimal("1000.00")
    assert fluxo["receitas"]["por_categoria"] == {"Serviços": Decimal("800.00"), "Produtos": Decimal("200.00")}
    assert fluxo["despesas"]["por_metodo_pagamento"] == {"Dinheiro": Decimal("300.00"), "PIX": Decimal("100.00")}
    assert fluxo["saldo_final"] == Decimal("600.00")


@pytest.mark.django_db
def test_dre(movimento_outubro):
    """Aluguel é custo fixo; o restante é variável."""
    dre = gerar_dre(*OUTUBRO)
    assert dre["receita"]["servicos"] == Decimal("800.00")
    assert dre["receita"]["produtos"] == Decimal("200.00")
    assert dre["despesas"]["fixas"] == Decimal("300.00")
    assert dre["despesas"]["variaveis"] == Decimal("100.00")
    assert dre["lucro_bruto"] == Decimal("900.00")
    assert dre["ebitda"] == dre["lucro_liquido"] == Decimal("600.00")
    assert dre["margens"]["liquida"] == Decimal("60.00")


@pytest.mark.django_db
def test_dre_sem_receita():
    """Margens zeradas quando não há receita."""
    assert gerar_dre(*OUTUBRO)["margens"] == {
        "bruta": Decimal("0.00"),
        "ebitda": Decimal("0.00"),
        "liquida": Decimal("0.00"),
    }


@pytest.mark.django_db
def test_desempenho_compara_com_periodo_anterior(movimento_outubro):
    """Crescimento da receita sobre o período anterior de mesmo tamanho."""
    desempenho = gerar_desempenho(*OUTUBRO)
    assert desempenho["receita"]["total"] == Decimal("1000.00")
    assert desempenho["receita"]["crescimento"] == Decimal("100.00")
    assert desempenho["ticket_medio"]["atual"] == Decimal("500.00")


@pytest.mark.django_db
def test_desempenho_sem_periodo_anterior(categorias, metodos):
    """Sem receita anterior o crescimento é zero."""
    _receita(categorias, metodos, 100, data=date(2026, 10, 3))
    assert gerar_desempenho(*OUTUBRO)["receita"]["crescimento"] == Decimal("0.00")


@pytest.mark.django_db
def test_desempenho_no_inicio_do_calendario(categorias, metodos):
    """Período que começa em date.min não tem período anterior para trás."""
    desempenho = gerar_desempenho(date.min, date(1, 1, 31))
    assert desempenho["receita"]["total"] == Decimal("0.00")
    assert desempenho["ticket_medio"]["anterior"] == Decimal("0.00")


@pytest.mark.django_db
def test_exportar_relatorio_json(movimento_outubro):
    """JSON com datas ISO e decimais como texto."""
    dados = json.loads(exportar_relatorio(gerar_fluxo_caixa(*OUTUBRO)))
    assert dados["periodo"] == {"inicio": "2026-10-01", "fim": "2026-10-31"}
    assert dados["saldo_final"] == "600.00"
