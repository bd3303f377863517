# financeiro/alertas.py
import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from configuracao.models import ConfiguracaoGeral

from .caixa import caixa_aberto, calcular_saldo_esperado
from .models import AlertaFinanceiro, Conta, TipoLancamento, Transacao

logger = logging.getLogger(__name__)


def _alertar_vencimentos(hoje, dias):
    criados = []
    limite = hoje + timedelta(days=dias)
    proximas = (
        Conta.objects.filter(
            status=Conta.Status.PENDENTE,
            vencimento__gte=hoje,
            vencimento__lte=limite,
        )
        .exclude(alertas__tipo=AlertaFinanceiro.Tipo.VENCIMENTO)
    )
    for conta in proximas:
        faltam = (conta.vencimento - hoje).days
        quando = "hoje" if faltam == 0 else f"em {faltam} dia{'s' if faltam > 1 else ''}"
        criados.append(AlertaFinanceiro.objects.create(
            tipo=AlertaFinanceiro.Tipo.VENCIMENTO,
            titulo="Conta próxima do vencimento",
            mensagem=f"{conta.descricao} vence {quando}",
            severidade=AlertaFinanceiro.Severidade.AVISO,
            conta=conta,
        ))
    return criados


def _marcar_vencidas(hoje):
    criados = []
    vencidas = Conta.objects.filter(status=Conta.Status.PENDENTE, vencimento__lt=hoje)
    for conta in vencidas:
        conta.status = Conta.Status.VENCIDA
        conta.save(update_fields=["status", "atualizado_em"])
        criados.append(AlertaFinanceiro.objects.create(
            tipo=AlertaFinanceiro.Tipo.VENCIMENTO,
            titulo="Conta vencida",
            mensagem=f"{conta.descricao} venceu em {conta.vencimento:%d/%m/%Y}",
            severidade=AlertaFinanceiro.Severidade.ERRO,
            conta=conta,
        ))
    return criados


def _alertar_despesas_altas(limite):
    criados = []
    despesas = (
        Transacao.objects.filter(tipo=TipoLancamento.DESPESA, valor__gt=limite)
        .exclude(alertas__tipo=AlertaFinanceiro.Tipo.DESPESA_ALTA)
    )
    for t in despesas:
        criados.append(AlertaFinanceiro.objects.create(
            tipo=AlertaFinanceiro.Tipo.DESPESA_ALTA,
            titulo="Despesa acima do limite",
            mensagem=f"{t.descricao}: R$ {t.valor}",
            severidade=AlertaFinanceiro.Severidade.AVISO,
            transacao=t,
        ))
    return criados


def _alertar_caixa_baixo(limite):
    caixa = caixa_aberto()
    if caixa is None:
        return []
    saldo = calcular_saldo_esperado(caixa)
    if saldo >= limite or caixa.alertas.filter(tipo=AlertaFinanceiro.Tipo.CAIXA_BAIXO).exists():
        return []
    return [AlertaFinanceiro.objects.create(
        tipo=AlertaFinanceiro.Tipo.CAIXA_BAIXO,
        titulo="Saldo de caixa baixo",
        mensagem=f"O saldo esperado do caixa é R$ {saldo}",
        severidade=AlertaFinanceiro.Severidade.AVISO,
        caixa=caixa,
    )]


@transaction.atomic
def gerar_alertas(hoje=None):
    """
    Varre contas, despesas e o caixa aberto e cria os alertas que ainda
    não existem. Devolve a lista de alertas criados.
    """
    hoje = hoje or timezone.localdate()
    config = ConfiguracaoGeral.get_solo()

    criados = []
    criados += _alertar_vencimentos(hoje, config.alerta_dias_vencimento)
    criados += _marcar_vencidas(hoje)
    criados += _alertar_despesas_altas(config.alerta_despesa_alta)
    criados += _alertar_caixa_baixo(config.alerta_caixa_baixo)

    if criados:
        logger.info("%d alerta(s) financeiro(s) gerado(s)", len(criados))
    return criados


def marcar_lido(alerta: AlertaFinanceiro) -> AlertaFinanceiro:
    alerta.lido = True
    alerta.save(update_fields=["lido"])
    return alerta
