"""
Tests for clientes: busca com filtros, exportação CSV, portabilidade LGPD e mensagens.
"""
import csv
import io
import json
from datetime import date
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.http import QueryDict

from clientes.busca import FiltrosBuscaCliente, buscar_clientes
from clientes.comunicacao import enviar_mensagem, renderizar_template
from clientes.exportacao import (
    CABECALHO_CSV,
    exportar_clientes_csv,
    exportar_dados_cliente,
    nome_arquivo_csv,
    nome_arquivo_lgpd,
)
from clientes.fidelidade import adicionar_pontos
from clientes.forms import ClienteForm
from clientes.models import (
    Cliente,
    MensagemAgendada,
    NivelFidelidade,
    SolicitacaoLGPD,
    TemplateComunicacao,
)


@pytest.fixture
def carteira(cliente):
    cliente.total_gasto = Decimal("1250.00")
    cliente.ultima_visita = date(2026, 10, 1)
    cliente.nivel_fidelidade = NivelFidelidade.OURO
    cliente.alergias = ["Amônia"]
    cliente.save()

    pedro = Cliente.objects.create(
        nome_completo="Pedro Henrique Costa",
        telefone="11977776666",
        email="pedro@email.com",
        data_nascimento=date(1985, 7, 22),
        total_gasto=Decimal("180.00"),
        ultima_visita=date(2026, 8, 10),
    )
    novo = Cliente.objects.create(
        nome_completo="Ana Paula Lima",
        telefone="11966665555",
        email="ana@email.com",
        data_nascimento=date(1995, 3, 2),
        status=Cliente.Status.INATIVO,
    )
    return cliente, pedro, novo


def _buscar(query):
    return {c.nome_completo for c in buscar_clientes(FiltrosBuscaCliente.from_querydict(QueryDict(query)))}


@pytest.mark.django_db
def test_busca_sem_filtros(carteira):
    """Sem filtros, todos os clientes voltam."""
    assert len(_buscar("")) == 3


@pytest.mark.django_db
def test_busca_por_nome_e_telefone(carteira):
    """Nome é parcial e sem diferenciar maiúsculas."""
    assert _buscar("q=silva") == {"Maria Silva Santos"}
    assert _buscar("telefone=7777") == {"Pedro Henrique Costa"}


@pytest.mark.django_db
def test_busca_por_ultima_visita_mantem_quem_nunca_veio(carteira):
    """Filtro de datas só restringe quem já tem visita."""
    assert _buscar("visita_de=2026-09-01") == {"Maria Silva Santos", "Ana Paula Lima"}


@pytest.mark.django_db
def test_busca_por_total_gasto(carteira):
    """Mínimo zero é ignorado; máximo restringe."""
    assert len(_buscar("gasto_min=0")) == 3
    assert _buscar("gasto_min=200&gasto_max=2000") == {"Maria Silva Santos"}


@pytest.mark.django_db
def test_busca_por_nivel_status_e_alergias(carteira):
    """Listas de nível e status; alergias sim/nao."""
    assert _buscar("nivel=gold&nivel=silver") == {"Maria Silva Santos"}
    assert _buscar("status=inactive") == {"Ana Paula Lima"}
    assert _buscar("alergias=sim") == {"Maria Silva Santos"}
    assert _buscar("alergias=nao") == {"Pedro Henrique Costa", "Ana Paula Lima"}


@pytest.mark.django_db
def test_busca_por_mes_de_aniversario(carteira):
    """Mês de nascimento; valores fora de 1-12 são ignorados."""
    assert _buscar("mes_aniversario=3") == {"Maria Silva Santos", "Ana Paula Lima"}
    assert len(_buscar("mes_aniversario=13")) == 3


def test_filtros_com_valores_invalidos():
    """Números e datas inválidos viram None."""
    filtros = FiltrosBuscaCliente.from_querydict(QueryDict("gasto_min=abc&visita_de=ontem"))
    assert filtros.total_gasto_min is None
    assert filtros.ultima_visita_de is None


@pytest.mark.django_db
def test_exportar_clientes_csv(carteira):
    """Cabeçalho fixo e 'Nunca' para quem não tem visita."""
    maria, _, ana = carteira
    linhas = list(csv.reader(io.StringIO(exportar_clientes_csv([maria, ana]))))
    assert linhas[0] == CABECALHO_CSV
    assert linhas[1] == [
        "Maria Silva Santos", "maria@email.com", "11999998888",
        "01/10/2026", "1250.00", "0", "gold",
    ]
    assert linhas[2][3] == "Nunca"


def test_nomes_de_arquivo():
    """Nomes dos arquivos de exportação."""
    assert nome_arquivo_csv(date(2026, 10, 19)) == "clientes-2026-10-19.csv"
    assert nome_arquivo_lgpd(Cliente(nome_completo="Maria Silva Santos")) == "dados-cliente-maria-silva-santos.json"


@pytest.mark.django_db
def test_exportar_dados_cliente_registra_solicitacao(cliente):
    """Portabilidade devolve o perfil completo e fica registrada."""
    adicionar_pontos(cliente, 80, "Corte")
    dados = json.loads(exportar_dados_cliente(cliente))

    assert dados["nomeCompleto"] == "Maria Silva Santos"
    assert dados["fidelidade"]["pontosAtuais"] == 80
    assert dados["fidelidade"]["historico"][0]["descricao"] == "Corte"
    assert dados["atendimentos"] == []
    assert "consentimentoDados" in dados["lgpd"]
    assert dados["exportReason"].startswith("Solicitação de portabilidade")
    assert "exportedAt" in dados

    solicitacao = SolicitacaoLGPD.objects.get(cliente=cliente)
    assert solicitacao.tipo == SolicitacaoLGPD.Tipo.PORTABILIDADE
    assert solicitacao.status == SolicitacaoLGPD.Status.CONCLUIDA


@pytest.mark.django_db
def test_registrar_consentimento_mantem_primeiro_aceite(cliente):
    """A data do primeiro consentimento não muda em atualizações."""
    cliente.registrar_consentimento(dados=True, marketing=False)
    primeiro = cliente.lgpd_data_consentimento
    cliente.registrar_consentimento(dados=True, marketing=True)
    assert cliente.lgpd_data_consentimento == primeiro
    assert cliente.lgpd_consentimento_marketing is True


def test_renderizar_template():
    """Variáveis conhecidas são trocadas; desconhecidas ficam como estão."""
    texto = renderizar_template("Olá {{nome}}, seu horário é {{ hora }} com {{profissional}}.",
                                {"nome": "Maria", "hora": "10:00"})
    assert texto == "Olá Maria, seu horário é 10:00 com {{profissional}}."


@pytest.mark.django_db
def test_enviar_mensagem(cliente):
    """Mensagem renderizada com o primeiro nome e registrada como enviada."""
    template = TemplateComunicacao.objects.create(
        nome="Lembrete",
        conteudo="Oi {{nome}}! Amanhã às {{hora}}.",
    )
    mensagem = enviar_mensagem(cliente, template, {"hora": "15:00"})
    assert mensagem.conteudo_renderizado == "Oi Maria! Amanhã às 15:00."
    assert mensagem.status == MensagemAgendada.Status.ENVIADA
    assert mensagem.canal == template.canal
    assert mensagem.enviada_em is not None


@pytest.mark.django_db
def test_enviar_mensagem_template_inativo(cliente):
    """Template inativo não envia."""
    template = TemplateComunicacao.objects.create(nome="Antigo", conteudo="x", ativo=False)
    with pytest.raises(ValidationError):
        enviar_mensagem(cliente, template)
    assert not MensagemAgendada.objects.exists()


@pytest.mark.django_db
def test_formulario_de_cliente_valida_telefone_e_nascimento():
    """Telefone com 10 ou 11 dígitos e nascimento no passado."""
    form = ClienteForm(data={
        "nome_completo": "Carlos Oliveira",
        "telefone": "1234",
        "email": "carlos@email.com",
        "data_nascimento": "2999-01-01",
        "frequencia_preferida": Cliente.Frequencia.MENSAL,
        "lembrete_preferencia": Cliente.Lembrete.UM_DIA,
        "status": Cliente.Status.ATIVO,
    })
    assert not form.is_valid()
    assert "telefone" in form.errors
    assert "data_nascimento" in form.errors
