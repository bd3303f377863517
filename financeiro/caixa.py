# financeiro/caixa.py
import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from configuracao.models import ConfiguracaoGeral

from .models import Caixa, MetodoPagamento, MovimentoCaixa, TipoLancamento, Transacao

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def caixa_aberto():
    return Caixa.objects.filter(status=Caixa.Status.ABERTO).order_by("-aberto_em").first()


def _soma(qs) -> Decimal:
    return qs.aggregate(total=Sum("valor"))["total"] or ZERO


def calcular_saldo_esperado(caixa: Caixa) -> Decimal:
    """
    abertura + receitas em dinheiro - despesas em dinheiro
             + suprimentos - sangrias

    Só entram as transações e movimentos do próprio caixa.
    """
    em_dinheiro = caixa.transacoes.filter(metodo_pagamento__tipo=MetodoPagamento.Tipo.DINHEIRO)
    receitas = _soma(em_dinheiro.filter(tipo=TipoLancamento.RECEITA))
    despesas = _soma(em_dinheiro.filter(tipo=TipoLancamento.DESPESA))
    suprimentos = _soma(caixa.movimentos.filter(tipo=MovimentoCaixa.Tipo.SUPRIMENTO))
    sangrias = _soma(caixa.movimentos.filter(tipo=MovimentoCaixa.Tipo.SANGRIA))
    return caixa.saldo_abertura + receitas - despesas + suprimentos - sangrias


@transaction.atomic
def abrir_caixa(saldo_abertura, usuario=None) -> Caixa:
    saldo_abertura = Decimal(str(saldo_abertura))
    if saldo_abertura < 0:
        raise ValidationError("O saldo de abertura não pode ser negativo.")
    if caixa_aberto() is not None:
        raise ValidationError("Já existe um caixa aberto. Feche-o antes de abrir outro.")

    caixa = Caixa.objects.create(
        data=timezone.localdate(),
        saldo_abertura=saldo_abertura,
        saldo_esperado=saldo_abertura,
        diferenca=ZERO,
        status=Caixa.Status.ABERTO,
        aberto_por=usuario,
        aberto_em=timezone.now(),
    )
    logger.info("Caixa %s aberto com R$ %s por %s", caixa.pk, saldo_abertura, usuario)
    return caixa


def registrar_movimento(caixa: Caixa, tipo, valor, motivo, autorizado_por="") -> MovimentoCaixa:
    """Sangria ou suprimento no caixa aberto."""
    if caixa is None or not caixa.aberto:
        raise ValidationError("Não há caixa aberto para registrar o movimento.")
    valor = Decimal(str(valor))
    if valor <= 0:
        raise ValidationError("O valor do movimento deve ser maior que zero.")
    if tipo not in MovimentoCaixa.Tipo.values:
        raise ValidationError("Tipo de movimento inválido.")

    movimento = MovimentoCaixa.objects.create(
        caixa=caixa,
        tipo=tipo,
        valor=valor,
        motivo=motivo,
        autorizado_por=autorizado_por,
    )
    caixa.saldo_esperado = calcular_saldo_esperado(caixa)
    caixa.save(update_fields=["saldo_esperado"])
    logger.info("%s de R$ %s no caixa %s: %s", movimento.get_tipo_display(), valor, caixa.pk, motivo)
    return movimento


@transaction.atomic
def fechar_caixa(caixa: Caixa, saldo_fechamento, observacoes="", usuario=None) -> Caixa:
    """
    Fecha o caixa calculando o saldo esperado e a diferença.
    Se a configuração exigir aprovação e a diferença passar do limite,
    o caixa fica pendente de revisão.
    """
    if not caixa.aberto:
        raise ValidationError("Este caixa já foi fechado.")

    saldo_fechamento = Decimal(str(saldo_fechamento))
    esperado = calcular_saldo_esperado(caixa)
    diferenca = saldo_fechamento - esperado

    config = ConfiguracaoGeral.get_solo()
    status = Caixa.Status.FECHADO
    if config.caixa_exige_aprovacao and abs(diferenca) > config.caixa_diferenca_maxima:
        status = Caixa.Status.EM_REVISAO

    caixa.saldo_fechamento = saldo_fechamento
    caixa.saldo_esperado = esperado
    caixa.diferenca = diferenca
    caixa.status = status
    caixa.fechado_por = usuario
    caixa.fechado_em = timezone.now()
    caixa.observacoes = observacoes or ""
    caixa.save()

    if diferenca:
        logger.warning("Caixa %s fechado com diferença de R$ %s", caixa.pk, diferenca)
    else:
        logger.info("Caixa %s fechado sem diferença", caixa.pk)
    return caixa


def registrar_transacao(*, tipo, categoria, valor, descricao, metodo_pagamento,
                        data=None, subcategoria="", referencia="", usuario=None) -> Transacao:
    """Cria a transação, vinculando-a ao caixa aberto quando houver."""
    valor = Decimal(str(valor))
    if valor <= 0:
        raise ValidationError("O valor da transação deve ser maior que zero.")

    caixa = caixa_aberto()
    transacao = Transacao.objects.create(
        tipo=tipo,
        categoria=categoria,
        subcategoria=subcategoria,
        valor=valor,
        descricao=descricao,
        data=data or timezone.localdate(),
        metodo_pagamento=metodo_pagamento,
        referencia=referencia,
        caixa=caixa,
        criado_por=usuario,
    )
    if caixa is not None:
        caixa.saldo_esperado = calcular_saldo_esperado(caixa)
        caixa.save(update_fields=["saldo_esperado"])
    return transacao
