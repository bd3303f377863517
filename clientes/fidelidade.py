# clientes/fidelidade.py
"""
Regras do programa de fidelidade: nível por pontos, pontos que faltam
para o próximo nível, crédito e resgate de pontos.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from .models import Cliente, MovimentoPontos, NivelFidelidade

logger = logging.getLogger(__name__)

# (pontos mínimos, nível), do maior para o menor
FAIXAS_NIVEL = [
    (2000, NivelFidelidade.PLATINA),
    (1000, NivelFidelidade.OURO),
    (500, NivelFidelidade.PRATA),
]

LIMITE_PROXIMO_NIVEL = {
    NivelFidelidade.BRONZE: 500,
    NivelFidelidade.PRATA: 1000,
    NivelFidelidade.OURO: 2000,
}


def nivel_por_pontos(pontos: int) -> str:
    for minimo, nivel in FAIXAS_NIVEL:
        if pontos >= minimo:
            return nivel
    return NivelFidelidade.BRONZE


def pontos_para_proximo_nivel(pontos: int, nivel: str) -> int:
    """Platina (ou nível desconhecido) não tem próximo nível: devolve 0."""
    limite = LIMITE_PROXIMO_NIVEL.get(nivel)
    if limite is None:
        return 0
    return limite - pontos


def _recalcular_nivel(cliente: Cliente):
    cliente.nivel_fidelidade = nivel_por_pontos(cliente.pontos_atuais)
    # O campo é positivo; pontos acima do limite (dados legados) zeram a distância
    cliente.pontos_proximo_nivel = max(
        pontos_para_proximo_nivel(cliente.pontos_atuais, cliente.nivel_fidelidade), 0
    )


@transaction.atomic
def adicionar_pontos(cliente: Cliente, pontos: int, descricao: str,
                     tipo: str = MovimentoPontos.Tipo.GANHO) -> Cliente:
    if pontos <= 0:
        raise ValidationError("A quantidade de pontos deve ser maior que zero.")

    cliente.pontos_atuais += pontos
    cliente.total_pontos_ganhos += pontos
    _recalcular_nivel(cliente)
    cliente.save()

    MovimentoPontos.objects.create(
        cliente=cliente,
        tipo=tipo,
        pontos=pontos,
        descricao=descricao,
    )
    logger.info(
        "%s pontos creditados para %s (nível %s)",
        pontos, cliente, cliente.nivel_fidelidade,
    )
    return cliente


@transaction.atomic
def resgatar_pontos(cliente: Cliente, pontos: int, descricao: str) -> Cliente:
    if pontos <= 0:
        raise ValidationError("A quantidade de pontos deve ser maior que zero.")
    if pontos > cliente.pontos_atuais:
        raise ValidationError(
            f"Saldo insuficiente: o cliente possui {cliente.pontos_atuais} pontos."
        )

    cliente.pontos_atuais -= pontos
    cliente.total_pontos_resgatados += pontos
    _recalcular_nivel(cliente)
    cliente.save()

    MovimentoPontos.objects.create(
        cliente=cliente,
        tipo=MovimentoPontos.Tipo.RESGATE,
        pontos=pontos,
        descricao=descricao,
    )
    logger.info("%s pontos resgatados por %s", pontos, cliente)
    return cliente
