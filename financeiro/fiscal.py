# financeiro/fiscal.py
import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from django.db import transaction
from django.db.models import Sum

from configuracao.models import ConfiguracaoGeral

from .models import DocumentoFiscal, ObrigacaoFiscal, TipoLancamento, Transacao

logger = logging.getLogger(__name__)

DIA_VENCIMENTO = 20

NOMES_OBRIGACAO = {
    ConfiguracaoGeral.RegimeFiscal.MEI: "DAS MEI",
    ConfiguracaoGeral.RegimeFiscal.SIMPLES: "DAS Simples Nacional",
    ConfiguracaoGeral.RegimeFiscal.LUCRO_PRESUMIDO: "Impostos - Lucro Presumido",
    ConfiguracaoGeral.RegimeFiscal.LUCRO_REAL: "Impostos - Lucro Real",
}


def vencimento_referente(inicio: date) -> date:
    """Dia 20 do mês seguinte ao início do período."""
    if inicio.month == 12:
        return date(inicio.year + 1, 1, DIA_VENCIMENTO)
    return date(inicio.year, inicio.month + 1, DIA_VENCIMENTO)


def calcular_impostos(inicio, fim, config=None) -> ObrigacaoFiscal:
    """
    MEI paga o valor fixo do DAS; os demais regimes aplicam a alíquota
    configurada sobre as receitas do período.
    Recalcular o mesmo mês atualiza a obrigação existente.
    """
    config = config or ConfiguracaoGeral.get_solo()
    base = (
        Transacao.objects.filter(
            tipo=TipoLancamento.RECEITA,
            data__gte=inicio,
            data__lte=fim,
        ).aggregate(total=Sum("valor"))["total"]
        or Decimal("0.00")
    )

    if config.regime_fiscal == ConfiguracaoGeral.RegimeFiscal.MEI:
        valor = config.valor_das_mei
        aliquota = Decimal("0.00")
    else:
        aliquota = config.aliquota_simples
        valor = (base * aliquota / 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    obrigacao, _ = ObrigacaoFiscal.objects.update_or_create(
        regime=config.regime_fiscal,
        referencia=f"{inicio:%m/%Y}",
        defaults={
            "nome": NOMES_OBRIGACAO.get(config.regime_fiscal, "Impostos"),
            "vencimento": vencimento_referente(inicio),
            "valor": valor,
            "base_calculo": base,
            "aliquota": aliquota,
        },
    )
    logger.info("Obrigação %s %s calculada: R$ %s", obrigacao.nome, obrigacao.referencia, valor)
    return obrigacao


@transaction.atomic
def emitir_documento_fiscal(tipo, valor, descricao, cliente="", fornecedor="") -> DocumentoFiscal:
    documento = DocumentoFiscal.objects.create(
        tipo=tipo,
        numero=DocumentoFiscal.proximo_numero(),
        valor=valor,
        descricao=descricao,
        cliente=cliente,
        fornecedor=fornecedor,
        status=DocumentoFiscal.Status.EMITIDO,
    )
    logger.info("Documento fiscal %s emitido", documento)
    return documento
