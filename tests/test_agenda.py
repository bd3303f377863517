"""
Tests for agenda: horários livres, calendário e ciclo de vida do agendamento.
"""
from datetime import date, time
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from agenda import operacoes
from agenda.disponibilidade import calendario_mes, disponibilidade, horarios_disponiveis, mes_vizinho
from agenda.models import Agendamento, Profissional, somar_minutos
from clientes.models import AtendimentoCliente, MovimentoPontos
from servicos.models import Servico

from .conftest import DOMINGO, SEGUNDA


def _agendar(profissional, servicos, hora=time(10, 0), **kwargs):
    kwargs.setdefault("nome_cliente", "Carlos Oliveira")
    return operacoes.agendar(
        profissional=profissional,
        servicos=servicos,
        data=SEGUNDA,
        hora_inicio=hora,
        **kwargs,
    )


def test_calendario_comeca_no_domingo():
    """Outubro de 2026 começa numa quinta: quatro células vazias antes do dia 1."""
    semanas = calendario_mes(2026, 10)
    assert semanas[0][:4] == [None, None, None, None]
    assert semanas[0][4] == date(2026, 10, 1)
    assert all(len(s) == 7 for s in semanas)


def test_mes_vizinho_vira_o_ano():
    """Navegação entre meses atravessa a virada do ano."""
    assert mes_vizinho(2026, 12, 1) == (2027, 1)
    assert mes_vizinho(2026, 1, -1) == (2025, 12)


def test_somar_minutos():
    """Soma de minutos não passa da meia-noite."""
    assert somar_minutos(time(9, 0), 45) == time(9, 45)
    assert somar_minutos(time(23, 30), 60) == time(23, 59, 59)


@pytest.mark.django_db
def test_horarios_disponiveis_excluem_ocupados(profissional, corte, barba):
    """Slots dentro de um agendamento ativo somem da lista."""
    _agendar(profissional, [corte, barba])
    slots = horarios_disponiveis(profissional, SEGUNDA)
    assert slots[0] == "09:00"
    assert slots[-1] == "17:30"
    assert "10:00" not in slots
    assert "10:30" not in slots
    assert "11:00" in slots


@pytest.mark.django_db
def test_horarios_disponiveis_ignora_cancelados(profissional, corte):
    """Agendamento cancelado libera o horário."""
    ag = _agendar(profissional, [corte])
    operacoes.cancelar(ag)
    assert "10:00" in horarios_disponiveis(profissional, SEGUNDA)


@pytest.mark.django_db
def test_sem_horarios_em_dia_de_folga(profissional):
    """Dia sem expediente não tem horários."""
    assert horarios_disponiveis(profissional, DOMINGO) == []


@pytest.mark.django_db
def test_disponibilidade_usa_horario_padrao():
    """Profissional sem horário cadastrado cai no padrão 09:00-18:00."""
    prof = Profissional.objects.create(nome="Pedro Santos")
    info = disponibilidade(prof, SEGUNDA)
    assert info["horario_trabalho"] == {"inicio": "09:00", "fim": "18:00"}
    assert info["agendamentos"] == []


@pytest.mark.django_db
def test_agendar_soma_duracao_e_preco(profissional, corte, barba):
    """Fim, duração e preço saem da soma dos serviços."""
    ag = _agendar(profissional, [corte, barba])
    assert ag.hora_fim == time(11, 0)
    assert ag.duracao_total == 60
    assert ag.preco_total == Decimal("60.00")
    assert ag.status == Agendamento.Status.PENDENTE
    assert ag.codigo == f"AGD{ag.pk:04d}"


@pytest.mark.django_db
def test_agendar_com_cliente_copia_contato(profissional, corte, cliente):
    """Sem nome informado, os dados de contato vêm do cadastro."""
    ag = _agendar(profissional, [corte], nome_cliente="", cliente=cliente)
    assert ag.nome_cliente == "Maria Silva Santos"
    assert ag.telefone_cliente == cliente.telefone
    assert ag.email_cliente == cliente.email


@pytest.mark.django_db
def test_agendar_sem_servicos(profissional):
    """Agendamento precisa de ao menos um serviço."""
    with pytest.raises(ValidationError):
        _agendar(profissional, [])


@pytest.mark.django_db
def test_agendar_sem_cliente(profissional, corte):
    """Agendamento precisa de um cliente identificado."""
    with pytest.raises(ValidationError):
        _agendar(profissional, [corte], nome_cliente="")


@pytest.mark.django_db
def test_agendar_em_dia_de_folga(profissional, corte):
    """Profissional não atende aos domingos."""
    with pytest.raises(ValidationError):
        operacoes.agendar(
            profissional=profissional,
            servicos=[corte],
            data=DOMINGO,
            hora_inicio=time(10, 0),
            nome_cliente="Carlos",
        )


@pytest.mark.django_db
def test_agendar_fora_do_expediente(profissional, corte, barba):
    """Intervalo que termina depois do expediente é recusado."""
    with pytest.raises(ValidationError):
        _agendar(profissional, [corte, barba], hora=time(17, 30))


@pytest.mark.django_db
def test_agendar_com_sobreposicao(profissional, corte, barba):
    """Dois agendamentos ativos não podem se sobrepor."""
    _agendar(profissional, [corte, barba])
    with pytest.raises(ValidationError):
        _agendar(profissional, [corte], hora=time(10, 30))
    # Encostado no fim do anterior é permitido
    assert _agendar(profissional, [corte], hora=time(11, 0)).pk


@pytest.mark.django_db
def test_transicoes_de_status(profissional, corte):
    """Confirmar só de pendente; falta só de pendente ou confirmado."""
    ag = _agendar(profissional, [corte])
    operacoes.confirmar(ag)
    assert ag.status == Agendamento.Status.CONFIRMADO
    assert ag.confirmacao_enviada is True

    with pytest.raises(ValidationError):
        operacoes.confirmar(ag)

    operacoes.marcar_falta(ag)
    assert ag.status == Agendamento.Status.NAO_COMPARECEU

    with pytest.raises(ValidationError):
        operacoes.marcar_falta(ag)
    with pytest.raises(ValidationError):
        operacoes.reagendar(ag, SEGUNDA, time(14, 0))


@pytest.mark.django_db
def test_cancelar_concluido(profissional, corte):
    """Agendamento concluído não pode ser cancelado."""
    ag = _agendar(profissional, [corte])
    operacoes.concluir(ag)
    with pytest.raises(ValidationError):
        operacoes.cancelar(ag)


@pytest.mark.django_db
def test_reagendar_mantem_duracao(profissional, corte, barba):
    """Reagendar move o horário e recalcula o fim, ignorando o próprio agendamento."""
    ag = _agendar(profissional, [corte, barba])
    operacoes.reagendar(ag, SEGUNDA, time(10, 30))
    ag.refresh_from_db()
    assert ag.hora_inicio == time(10, 30)
    assert ag.hora_fim == time(11, 30)


@pytest.mark.django_db
def test_reagendar_para_horario_ocupado(profissional, corte):
    """Reagendar para cima de outro agendamento é recusado."""
    _agendar(profissional, [corte], hora=time(14, 0))
    ag = _agendar(profissional, [corte])
    with pytest.raises(ValidationError):
        operacoes.reagendar(ag, SEGUNDA, time(14, 0))


@pytest.mark.django_db
def test_concluir_atualiza_cliente_e_servicos(profissional, corte, barba, cliente):
    """Concluir gera atendimento, pontos e métricas dos serviços."""
    ag = _agendar(profissional, [corte, barba], cliente=cliente)
    operacoes.concluir(ag)

    cliente.refresh_from_db()
    assert cliente.total_gasto == Decimal("60.00")
    assert cliente.quantidade_visitas == 1
    assert cliente.ultima_visita == SEGUNDA
    assert cliente.pontos_atuais == 60

    atendimento = AtendimentoCliente.objects.get(agendamento=ag)
    assert atendimento.pontos_ganhos == 60
    assert atendimento.servico_nome == "Corte Masculino + Barba Completa"
    assert MovimentoPontos.objects.filter(cliente=cliente, pontos=60).exists()

    corte = Servico.objects.get(pk=corte.pk)
    assert corte.total_agendamentos == 1
    assert corte.receita_total == Decimal("35.00")
    assert corte.ultimo_agendamento is not None


@pytest.mark.django_db
def test_concluir_sem_cliente_cadastrado(profissional, corte):
    """Cliente avulso não gera atendimento nem pontos."""
    ag = _agendar(profissional, [corte])
    operacoes.concluir(ag)
    assert ag.status == Agendamento.Status.CONCLUIDO
    assert not AtendimentoCliente.objects.exists()


@pytest.mark.django_db
def test_concluir_apos_falta(profissional, corte, cliente):
    """Falta é definitiva: não vira atendimento nem rende pontos."""
    ag = _agendar(profissional, [corte], cliente=cliente)
    operacoes.marcar_falta(ag)

    with pytest.raises(ValidationError):
        operacoes.concluir(ag)

    ag.refresh_from_db()
    cliente.refresh_from_db()
    assert ag.status == Agendamento.Status.NAO_COMPARECEU
    assert cliente.pontos_atuais == 0
    assert cliente.quantidade_visitas == 0
    assert not AtendimentoCliente.objects.exists()
