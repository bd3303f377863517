"""
Tests for the carregar_dados_demo management command.
"""
import io

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from agenda.models import Agendamento, HorarioTrabalho, Profissional
from clientes.models import Cliente, TemplateComunicacao
from financeiro.models import Conta, Transacao
from servicos.models import HistoricoPreco, PacoteServico, Servico

pytestmark = pytest.mark.django_db


def _carregar(*args):
    saida = io.StringIO()
    call_command("carregar_dados_demo", *args, stdout=saida)
    return saida.getvalue()


def _contagens():
    return {
        modelo.__name__: modelo.objects.count()
        for modelo in (
            Profissional, HorarioTrabalho, Servico, PacoteServico, HistoricoPreco,
            Cliente, TemplateComunicacao, Transacao, Conta, Agendamento,
        )
    }


def test_carrega_catalogo_e_cadastros():
    """Profissionais com expediente semanal, catálogo e clientes."""
    assert "Dados de demonstração carregados." in _carregar()

    joao = Profissional.objects.get(nome="João Silva")
    assert joao.horarios.count() == 7
    assert joao.horarios.get(dia_semana=HorarioTrabalho.DiaSemana.DOMINGO).trabalha is False

    corte = Servico.objects.get(nome="Corte Masculino Tradicional")
    assert corte.historico_precos.get().motivo == "Ajuste de inflação"

    for pacote in PacoteServico.objects.all():
        assert pacote.itens.count() >= 2
        assert pacote.preco_final < pacote.preco_original

    assert Cliente.objects.exists()
    assert Conta.objects.filter(recorrente=True).exists()


def test_idempotente():
    """Rodar duas vezes não duplica nada."""
    _carregar()
    antes = _contagens()
    _carregar()
    assert _contagens() == antes


def test_cria_admin():
    """--admin cria o usuário administrador uma única vez."""
    _carregar("--admin")
    _carregar("--admin")
    User = get_user_model()
    admin = User.objects.get(username="admin")
    assert admin.is_superuser
    assert admin.role == User.Roles.ADMIN
    assert admin.check_password("admin123")
