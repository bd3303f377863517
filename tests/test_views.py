"""
Tests for the web layer: login, permissões, páginas e downloads.
"""
import json
from datetime import time

import pytest
from django.urls import reverse
from django.utils import timezone

from agenda import operacoes
from agenda.models import Agendamento
from clientes.models import Cliente, MovimentoPontos
from relatorios.models import ReportePDF

from .conftest import SEGUNDA

pytestmark = pytest.mark.django_db


def test_paginas_exigem_login(client):
    """Visitante é levado ao login."""
    response = client.get(reverse("clientes:lista"))
    assert response.status_code == 302
    assert reverse("accounts:login") in response["Location"]


def test_login_redireciona_admin_para_o_painel(client, django_user_model):
    """Admin entra no painel; aceita e-mail no lugar do usuário."""
    django_user_model.objects.create_user(
        username="gerente",
        email="gerente@salao.com",
        password="senha-forte-123",
        role=django_user_model.Roles.ADMIN,
    )
    response = client.post(reverse("accounts:login"), {"username": "gerente@salao.com", "password": "senha-forte-123"})
    assert response.status_code == 302
    assert response["Location"] == reverse("painel:dashboard")


def test_login_invalido(client):
    """Credenciais erradas voltam ao formulário."""
    response = client.post(reverse("accounts:login"), {"username": "ninguem", "password": "x"})
    assert response.status_code == 200
    assert "Credenciais inválidas." in response.content.decode()


def test_recepcao_nao_acessa_financeiro(recepcao_client):
    """Área administrativa redireciona para o painel."""
    response = recepcao_client.get(reverse("financeiro:dashboard"))
    assert response.status_code == 302
    assert response["Location"] == reverse("painel:dashboard")


def test_recepcao_acessa_agenda_e_clientes(recepcao_client, profissional):
    """Módulos operacionais ficam abertos para a recepção."""
    assert recepcao_client.get(reverse("agenda:calendario")).status_code == 200
    assert recepcao_client.get(reverse("clientes:lista")).status_code == 200


@pytest.mark.parametrize(
    "nome",
    [
        "painel:dashboard",
        "agenda:calendario",
        "agenda:criar",
        "clientes:lista",
        "clientes:criar",
        "servicos:lista",
        "servicos:criar",
        "servicos:criar_pacote",
        "servicos:relatorio",
        "financeiro:dashboard",
        "financeiro:transacoes",
        "financeiro:nova_transacao",
        "financeiro:caixa",
        "financeiro:contas",
        "financeiro:alertas",
        "financeiro:relatorios",
        "financeiro:fiscal",
        "relatorios:resumo",
        "relatorios:historico",
        "configuracao:geral",
    ],
)
def test_paginas_do_admin(admin_client, nome, profissional, corte, cliente):
    """Todas as telas principais abrem para o administrador."""
    assert admin_client.get(reverse(nome)).status_code == 200


def test_detalhe_de_cliente_e_servico(admin_client, cliente, corte):
    """Fichas de cliente e serviço."""
    assert admin_client.get(reverse("clientes:detalhe", args=[cliente.pk])).status_code == 200
    assert admin_client.get(reverse("servicos:detalhe", args=[corte.pk])).status_code == 200


@pytest.mark.parametrize(
    "params",
    [
        {"ano": "abc", "mes": "13", "profissional": "x"},
        {"dia": "2026-02-30"},
        {"dia": "0001-01-01"},
        {"ano": "0", "mes": "1"},
        {"ano": "10000", "mes": "12"},
        {"ano": "9999", "mes": "12"},
    ],
)
def test_calendario_com_parametros_invalidos(admin_client, profissional, params):
    """Parâmetros inválidos caem no mês atual sem erro."""
    response = admin_client.get(reverse("agenda:calendario"), params)
    assert response.status_code == 200
    assert response.context["dia"] == timezone.localdate()


def test_novo_agendamento_com_dia_impossivel(admin_client, profissional):
    """Dia inexistente no formulário vira hoje."""
    response = admin_client.get(reverse("agenda:criar"), {"dia": "2026-02-30"})
    assert response.status_code == 200
    assert response.context["form"].initial["data"] == timezone.localdate()


def test_horarios_disponiveis_json(admin_client, profissional, corte):
    """JSON com os slots livres e os ocupados."""
    operacoes.agendar(profissional=profissional, servicos=[corte], data=SEGUNDA,
                      hora_inicio=time(9), nome_cliente="Carlos")
    response = admin_client.get(
        reverse("agenda:horarios"),
        {"profissional": profissional.pk, "data": SEGUNDA.isoformat()},
    )
    dados = response.json()
    assert dados["horarios"][0] == "09:30"
    assert dados["ocupados"] == [{"inicio": "09:00", "fim": "09:30", "status": "PENDENTE"}]


@pytest.mark.parametrize("data", ["x", "2026-02-30", "9999-12-31"])
def test_horarios_com_data_invalida(admin_client, profissional, data):
    """Data inválida ou impossível devolve 400."""
    response = admin_client.get(reverse("agenda:horarios"), {"profissional": profissional.pk, "data": data})
    assert response.status_code == 400


def test_criar_agendamento(admin_client, profissional, corte):
    """POST válido cria e volta para o calendário do dia."""
    response = admin_client.post(reverse("agenda:criar"), {
        "nome_cliente": "Carlos Oliveira",
        "profissional": profissional.pk,
        "servicos": [corte.pk],
        "data": SEGUNDA.isoformat(),
        "hora_inicio": "10:00",
    })
    assert response.status_code == 302
    assert Agendamento.objects.get().hora_fim == time(10, 30)


def test_criar_agendamento_com_conflito(admin_client, profissional, corte):
    """Conflito de horário volta ao formulário com erro."""
    operacoes.agendar(profissional=profissional, servicos=[corte], data=SEGUNDA,
                      hora_inicio=time(10), nome_cliente="Carlos")
    response = admin_client.post(reverse("agenda:criar"), {
        "nome_cliente": "Ana",
        "profissional": profissional.pk,
        "servicos": [corte.pk],
        "data": SEGUNDA.isoformat(),
        "hora_inicio": "10:00",
    })
    assert response.status_code == 400
    assert Agendamento.objects.count() == 1


def test_acao_de_status(admin_client, profissional, corte):
    """Ação confirmar pelo POST; ação desconhecida é 400."""
    ag = operacoes.agendar(profissional=profissional, servicos=[corte], data=SEGUNDA,
                           hora_inicio=time(10), nome_cliente="Carlos")
    url = reverse("agenda:status", args=[ag.pk])
    assert admin_client.post(url, {"acao": "confirmar"}).status_code == 302
    ag.refresh_from_db()
    assert ag.status == Agendamento.Status.CONFIRMADO
    assert admin_client.post(url, {"acao": "teleportar"}).status_code == 400


def test_exportar_clientes_csv(admin_client, cliente):
    """Download do CSV filtrado."""
    response = admin_client.get(reverse("clientes:exportar_csv"), {"q": "maria"})
    assert response["Content-Type"].startswith("text/csv")
    assert response["Content-Disposition"].startswith('attachment; filename="clientes-')
    assert "Maria Silva Santos" in response.content.decode()


def test_exportar_dados_lgpd(admin_client, cliente):
    """Download do JSON de portabilidade."""
    response = admin_client.get(reverse("clientes:exportar_dados", args=[cliente.pk]))
    assert 'filename="dados-cliente-maria-silva-santos.json"' in response["Content-Disposition"]
    assert json.loads(response.content)["email"] == "maria@email.com"


def test_lancar_pontos(admin_client, cliente):
    """Bônus manual e resgate acima do saldo."""
    url = reverse("clientes:pontos", args=[cliente.pk])
    admin_client.post(url, {"acao": "adicionar", "pontos": 100, "descricao": "Indicação"})
    admin_client.post(url, {"acao": "resgatar", "pontos": 500, "descricao": "Desconto"})
    cliente.refresh_from_db()
    assert cliente.pontos_atuais == 100
    assert cliente.movimentos_pontos.get().tipo == MovimentoPontos.Tipo.BONUS


def test_excluir_cliente_exige_admin(recepcao_client, admin_client, cliente):
    """Somente a administração exclui clientes."""
    url = reverse("clientes:excluir", args=[cliente.pk])
    recepcao_client.post(url)
    assert Cliente.objects.filter(pk=cliente.pk).exists()
    admin_client.post(url)
    assert not Cliente.objects.filter(pk=cliente.pk).exists()


def test_relatorio_de_servicos_csv(admin_client, corte):
    """Download do relatório do catálogo."""
    response = admin_client.get(reverse("servicos:relatorio_csv"))
    assert response["Content-Type"].startswith("text/csv")
    assert response.content.decode().startswith("Serviço,Agendamentos")


@pytest.mark.parametrize(
    "nome, params",
    [
        ("servicos:relatorio", {"inicio": "0001-01-01", "fim": "9999-12-31"}),
        ("servicos:relatorio_csv", {"inicio": "0001-01-05"}),
        ("financeiro:relatorios", {"inicio": "0001-01-01", "fim": "9999-12-31"}),
        ("relatorios:resumo", {"fim": "0001-01-03"}),
    ],
)
def test_relatorios_com_datas_nas_pontas_do_calendario(admin_client, nome, params):
    """Datas em 0001 ou 9999 são ignoradas e o período padrão é usado."""
    assert admin_client.get(reverse(nome), params).status_code == 200


def test_exportar_relatorio_financeiro_json(admin_client):
    """Download do DRE em JSON; tipo desconhecido volta para a tela."""
    response = admin_client.get(reverse("financeiro:exportar_relatorio"), {"tipo": "dre"})
    assert "lucro_liquido" in json.loads(response.content)
    response = admin_client.get(reverse("financeiro:exportar_relatorio"), {"tipo": "balanco"})
    assert response.status_code == 302


def test_exportar_pdf_guarda_historico(admin_client, settings, tmp_path, monkeypatch):
    """PDF gerado vai para o histórico de relatórios."""
    settings.MEDIA_ROOT = tmp_path
    monkeypatch.setattr("relatorios.views.render_to_pdf", lambda template, context: b"%PDF-1.4 teste")

    response = admin_client.get(reverse("relatorios:exportar_pdf"), {"modo": "semanal"})
    assert response["Content-Type"] == "application/pdf"
    relatorio = ReportePDF.objects.get()
    assert relatorio.tipo == ReportePDF.Tipo.SEMANAL
    assert (relatorio.data_fim - relatorio.data_inicio).days == 6


def test_exportar_pdf_com_falha(admin_client, monkeypatch):
    """Falha na geração do PDF vira 404 e nada é salvo."""
    monkeypatch.setattr("relatorios.views.render_to_pdf", lambda template, context: None)
    response = admin_client.get(reverse("relatorios:exportar_pdf"), {"modo": "diario"})
    assert response.status_code == 404
    assert not ReportePDF.objects.exists()
