"""
Tests for the loyalty program: níveis, pontos para o próximo nível, crédito e resgate.
"""
import pytest
from django.core.exceptions import ValidationError

from clientes.fidelidade import (
    adicionar_pontos,
    nivel_por_pontos,
    pontos_para_proximo_nivel,
    resgatar_pontos,
)
from clientes.models import MovimentoPontos, NivelFidelidade


@pytest.mark.parametrize(
    "pontos, nivel",
    [
        (0, NivelFidelidade.BRONZE),
        (499, NivelFidelidade.BRONZE),
        (500, NivelFidelidade.PRATA),
        (999, NivelFidelidade.PRATA),
        (1000, NivelFidelidade.OURO),
        (2000, NivelFidelidade.PLATINA),
        (5000, NivelFidelidade.PLATINA),
    ],
)
def test_nivel_por_pontos(pontos, nivel):
    """Faixas 500 / 1000 / 2000."""
    assert nivel_por_pontos(pontos) == nivel


def test_pontos_para_proximo_nivel():
    """Distância até o limite do próximo nível; platina não tem próximo."""
    assert pontos_para_proximo_nivel(120, NivelFidelidade.BRONZE) == 380
    assert pontos_para_proximo_nivel(750, NivelFidelidade.PRATA) == 250
    assert pontos_para_proximo_nivel(1500, NivelFidelidade.OURO) == 500
    assert pontos_para_proximo_nivel(2500, NivelFidelidade.PLATINA) == 0


@pytest.mark.django_db
def test_adicionar_pontos_sobe_de_nivel(cliente):
    """Crédito atualiza saldo, total ganho, nível e histórico."""
    adicionar_pontos(cliente, 450, "Corte + Barba")
    adicionar_pontos(cliente, 100, "Bônus de aniversário", tipo=MovimentoPontos.Tipo.BONUS)

    cliente.refresh_from_db()
    assert cliente.pontos_atuais == 550
    assert cliente.total_pontos_ganhos == 550
    assert cliente.nivel_fidelidade == NivelFidelidade.PRATA
    assert cliente.pontos_proximo_nivel == 450
    assert list(cliente.movimentos_pontos.values_list("tipo", flat=True).order_by("pontos")) == [
        MovimentoPontos.Tipo.BONUS,
        MovimentoPontos.Tipo.GANHO,
    ]


@pytest.mark.django_db
def test_adicionar_pontos_invalidos(cliente):
    """Quantidade precisa ser positiva."""
    with pytest.raises(ValidationError):
        adicionar_pontos(cliente, 0, "Nada")


@pytest.mark.django_db
def test_resgatar_pontos(cliente):
    """Resgate desconta do saldo e pode rebaixar o nível."""
    adicionar_pontos(cliente, 600, "Atendimentos")
    resgatar_pontos(cliente, 200, "Desconto em corte")

    cliente.refresh_from_db()
    assert cliente.pontos_atuais == 400
    assert cliente.total_pontos_resgatados == 200
    assert cliente.total_pontos_ganhos == 600
    assert cliente.nivel_fidelidade == NivelFidelidade.BRONZE
    assert cliente.movimentos_pontos.filter(tipo=MovimentoPontos.Tipo.RESGATE).count() == 1


@pytest.mark.django_db
def test_resgatar_sem_saldo(cliente):
    """Resgate maior que o saldo é recusado sem alterar nada."""
    adicionar_pontos(cliente, 50, "Sobrancelha")
    with pytest.raises(ValidationError, match="Saldo insuficiente"):
        resgatar_pontos(cliente, 100, "Desconto")
    cliente.refresh_from_db()
    assert cliente.pontos_atuais == 50
