"""
Fixtures compartilhadas: um profissional com expediente de segunda a
sábado, serviços do catálogo, um cliente e o cadastro financeiro básico.
"""
from datetime import date, time
from decimal import Decimal

import pytest

from agenda.models import HorarioTrabalho, Profissional
from clientes.models import Cliente
from configuracao.models import ConfiguracaoGeral
from financeiro.models import CategoriaTransacao, MetodoPagamento, TipoLancamento
from servicos.models import Servico

SEGUNDA = date(2026, 10, 19)
DOMINGO = date(2026, 10, 25)


@pytest.fixture
def config(db):
    return ConfiguracaoGeral.get_solo()


@pytest.fixture
def profissional(db):
    prof = Profissional.objects.create(nome="João Silva", email="joao@barbearia.com")
    for dia in range(6):
        HorarioTrabalho.objects.create(
            profissional=prof,
            dia_semana=dia,
            hora_inicio=time(9, 0),
            hora_fim=time(18, 0),
        )
    HorarioTrabalho.objects.create(
        profissional=prof,
        dia_semana=6,
        hora_inicio=time(9, 0),
        hora_fim=time(18, 0),
        trabalha=False,
    )
    return prof


@pytest.fixture
def corte(profissional):
    servico = Servico.objects.create(
        nome="Corte Masculino",
        descricao="Corte clássico com acabamento na navalha.",
        preco=Decimal("35.00"),
        duracao=30,
        categoria=Servico.Categoria.CORTE,
    )
    servico.profissionais.add(profissional)
    return servico


@pytest.fixture
def barba(profissional):
    servico = Servico.objects.create(
        nome="Barba Completa",
        descricao="Aparo e desenho da barba com toalha quente.",
        preco=Decimal("25.00"),
        duracao=30,
        categoria=Servico.Categoria.BARBA,
    )
    servico.profissionais.add(profissional)
    return servico


@pytest.fixture
def sobrancelha(profissional):
    servico = Servico.objects.create(
        nome="Sobrancelha",
        descricao="Design de sobrancelha masculina.",
        preco=Decimal("15.00"),
        duracao=15,
        categoria=Servico.Categoria.ESTETICA,
    )
    servico.profissionais.add(profissional)
    return servico


@pytest.fixture
def cliente(db):
    return Cliente.objects.create(
        nome_completo="Maria Silva Santos",
        telefone="11999998888",
        email="maria@email.com",
        data_nascimento=date(1990, 3, 15),
    )


@pytest.fixture
def categorias(db):
    return {
        "Serviços": CategoriaTransacao.objects.create(nome="Serviços", tipo=TipoLancamento.RECEITA),
        "Produtos": CategoriaTransacao.objects.create(nome="Produtos", tipo=TipoLancamento.RECEITA),
        "Aluguel": CategoriaTransacao.objects.create(nome="Aluguel", tipo=TipoLancamento.DESPESA),
        "Materiais": CategoriaTransacao.objects.create(nome="Materiais", tipo=TipoLancamento.DESPESA),
    }


@pytest.fixture
def metodos(db):
    return {
        "dinheiro": MetodoPagamento.objects.create(nome="Dinheiro", tipo=MetodoPagamento.Tipo.DINHEIRO),
        "pix": MetodoPagamento.objects.create(nome="PIX", tipo=MetodoPagamento.Tipo.PIX),
    }


@pytest.fixture
def recepcao_client(client, django_user_model):
    usuario = django_user_model.objects.create_user(
        username="recepcao",
        password="senha-recepcao-123",
        role=django_user_model.Roles.RECEPCAO,
    )
    client.force_login(usuario)
    return client
