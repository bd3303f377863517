# agenda/operacoes.py
import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from clientes.fidelidade import adicionar_pontos
from clientes.models import AtendimentoCliente

from .disponibilidade import agendamentos_ativos
from .models import Agendamento, somar_minutos

logger = logging.getLogger(__name__)


def _validar_horario(profissional, data, hora_inicio, hora_fim, excluir_pk=None):
    """
    - O profissional precisa trabalhar nesse dia e o intervalo deve caber no expediente.
    - Não pode haver outro agendamento ativo que se sobreponha.

    Dois intervalos [i1, f1) e [i2, f2) se sobrepõem se:
        i1 < f2 AND f1 > i2
    """
    horario = profissional.horario_do_dia(data)
    if horario is None or not horario.trabalha:
        raise ValidationError(f"{profissional} não atende neste dia.")

    if hora_inicio < horario.hora_inicio or hora_fim > horario.hora_fim:
        raise ValidationError(
            "O horário escolhido está fora do expediente do profissional "
            f"({horario.hora_inicio:%H:%M}-{horario.hora_fim:%H:%M})."
        )

    conflito = agendamentos_ativos(profissional, data, excluir_pk=excluir_pk).filter(
        hora_inicio__lt=hora_fim,
        hora_fim__gt=hora_inicio,
    )
    if conflito.exists():
        raise ValidationError(
            "O profissional já possui um agendamento nesse horário. "
            "Escolha outro horário ou outro profissional."
        )


@transaction.atomic
def agendar(
    *,
    profissional,
    servicos,
    data,
    hora_inicio,
    nome_cliente="",
    cliente=None,
    telefone_cliente="",
    email_cliente="",
    observacoes="",
    status=Agendamento.Status.PENDENTE,
):
    """
    Cria um agendamento. Duração e preço total saem da soma dos serviços.
    """
    servicos = list(servicos)
    if not servicos:
        raise ValidationError("Selecione pelo menos um serviço.")

    if cliente is not None:
        nome_cliente = nome_cliente or cliente.nome_completo
        telefone_cliente = telefone_cliente or cliente.telefone
        email_cliente = email_cliente or cliente.email

    if not nome_cliente:
        raise ValidationError("Informe o cliente do agendamento.")

    duracao = sum(s.duracao for s in servicos)
    preco = sum((s.preco for s in servicos), Decimal("0.00"))
    hora_fim = somar_minutos(hora_inicio, duracao)

    _validar_horario(profissional, data, hora_inicio, hora_fim)

    agendamento = Agendamento.objects.create(
        cliente=cliente,
        nome_cliente=nome_cliente,
        telefone_cliente=telefone_cliente,
        email_cliente=email_cliente,
        profissional=profissional,
        data=data,
        hora_inicio=hora_inicio,
        hora_fim=hora_fim,
        duracao_total=duracao,
        preco_total=preco,
        status=status,
        observacoes=observacoes,
    )
    agendamento.servicos.set(servicos)

    logger.info("Agendamento %s criado para %s", agendamento.codigo, nome_cliente)
    return agendamento


def confirmar(agendamento):
    if agendamento.status != Agendamento.Status.PENDENTE:
        raise ValidationError("Somente agendamentos pendentes podem ser confirmados.")
    agendamento.status = Agendamento.Status.CONFIRMADO
    agendamento.confirmacao_enviada = True
    agendamento.save(update_fields=["status", "confirmacao_enviada", "atualizado_em"])
    return agendamento


def cancelar(agendamento):
    if agendamento.status in {Agendamento.Status.CONCLUIDO, Agendamento.Status.CANCELADO}:
        raise ValidationError("Não é possível cancelar um agendamento concluído ou já cancelado.")
    agendamento.status = Agendamento.Status.CANCELADO
    agendamento.save(update_fields=["status", "atualizado_em"])
    logger.info("Agendamento %s cancelado", agendamento.codigo)
    return agendamento


def marcar_falta(agendamento):
    if agendamento.status not in {Agendamento.Status.PENDENTE, Agendamento.Status.CONFIRMADO}:
        raise ValidationError("Somente agendamentos pendentes ou confirmados podem ser marcados como falta.")
    agendamento.status = Agendamento.Status.NAO_COMPARECEU
    agendamento.save(update_fields=["status", "atualizado_em"])
    return agendamento


def reagendar(agendamento, nova_data, nova_hora_inicio):
    """
    Move o agendamento mantendo a duração total; o fim é recalculado.
    """
    if agendamento.status in {
        Agendamento.Status.CONCLUIDO,
        Agendamento.Status.CANCELADO,
        Agendamento.Status.NAO_COMPARECEU,
    }:
        raise ValidationError("Este agendamento não pode mais ser reagendado.")

    nova_hora_fim = somar_minutos(nova_hora_inicio, agendamento.duracao_total)
    _validar_horario(
        agendamento.profissional,
        nova_data,
        nova_hora_inicio,
        nova_hora_fim,
        excluir_pk=agendamento.pk,
    )

    agendamento.data = nova_data
    agendamento.hora_inicio = nova_hora_inicio
    agendamento.hora_fim = nova_hora_fim
    agendamento.save(update_fields=["data", "hora_inicio", "hora_fim", "atualizado_em"])
    return agendamento


@transaction.atomic
def concluir(agendamento):
    """
    Finaliza o atendimento:
    - status CONCLUIDO;
    - cliente ganha 1 ponto por real inteiro gasto e tem os totais atualizados;
    - cada serviço soma agendamento e receita nas métricas.
    """
    if agendamento.status in {
        Agendamento.Status.CONCLUIDO,
        Agendamento.Status.CANCELADO,
        Agendamento.Status.NAO_COMPARECEU,
    }:
        raise ValidationError("Este agendamento já foi concluído, cancelado ou marcado como falta.")

    agendamento.status = Agendamento.Status.CONCLUIDO
    agendamento.save(update_fields=["status", "atualizado_em"])

    servicos = list(agendamento.servicos.all())
    agora = timezone.now()
    for servico in servicos:
        type(servico).objects.filter(pk=servico.pk).update(
            total_agendamentos=F("total_agendamentos") + 1,
            receita_total=F("receita_total") + servico.preco,
            ultimo_agendamento=agora,
        )

    cliente = agendamento.cliente
    if cliente is None:
        return agendamento

    pontos = int(agendamento.preco_total)
    nomes = " + ".join(s.nome for s in servicos)

    AtendimentoCliente.objects.create(
        cliente=cliente,
        agendamento=agendamento,
        servico_nome=nomes,
        profissional_nome=agendamento.profissional.nome,
        data=agendamento.data,
        duracao=agendamento.duracao_total,
        preco=agendamento.preco_total,
        preco_final=agendamento.preco_total,
        status=AtendimentoCliente.Status.CONCLUIDO,
        pontos_ganhos=pontos,
    )

    cliente.total_gasto = (cliente.total_gasto or Decimal("0.00")) + agendamento.preco_total
    cliente.quantidade_visitas = (cliente.quantidade_visitas or 0) + 1
    if cliente.ultima_visita is None or agendamento.data > cliente.ultima_visita:
        cliente.ultima_visita = agendamento.data
    cliente.save(update_fields=["total_gasto", "quantidade_visitas", "ultima_visita", "atualizado_em"])

    if pontos > 0:
        adicionar_pontos(cliente, pontos, nomes or f"Atendimento {agendamento.codigo}")

    return agendamento
