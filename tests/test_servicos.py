"""
Tests for servicos: validação, preços, pacotes, busca e relatórios do catálogo.
"""
import csv
import io
from datetime import date, time
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.http import QueryDict

from agenda import operacoes as agenda
from servicos.busca import FiltrosServico, buscar_servicos
from servicos.forms import ServicoForm
from servicos.models import HistoricoPreco, PacoteServico, Servico
from servicos.operacoes import atualizar_preco, duplicar_pacote, duplicar_servico, salvar_itens_pacote
from servicos.relatorios import (
    CABECALHO_CSV,
    exportar_relatorio_servicos_csv,
    gerar_relatorio_pacotes,
    gerar_relatorio_servicos,
    periodo_anterior,
)
from servicos.validacao import eh_valido, erros, validar_pacote, validar_servico

SERVICO_OK = {
    "nome": "Corte Masculino",
    "descricao": "Corte clássico.",
    "preco": "35.00",
    "duracao": 30,
    "categoria": "corte",
    "profissionais": [1],
}

PACOTE_OK = {
    "nome": "Combo Completo",
    "servicos": [1, 2, 3],
    "desconto_percentual": 20,
    "validade_dias": 30,
    "limite_uso": 1,
}


@pytest.fixture
def pacote(corte, barba, sobrancelha):
    combo = PacoteServico.objects.create(
        nome="Combo Completo",
        desconto_percentual=Decimal("20"),
    )
    salvar_itens_pacote(combo, [corte, barba, sobrancelha])
    return combo


# --- Validação ---


def test_servico_valido():
    """Todos os campos preenchidos corretamente."""
    assert eh_valido(validar_servico(**SERVICO_OK))


@pytest.mark.parametrize(
    "campo, valor, mensagem",
    [
        ("nome", "  ", "Nome é obrigatório"),
        ("preco", "0", "Preço deve ser maior que zero"),
        ("preco", "10000", "Preço deve ser menor que R$ 9.999,99"),
        ("duracao", 481, "Duração deve ser menor que 8 horas"),
        ("categoria", "manicure", "Categoria inválida"),
        ("profissionais", [], "Pelo menos um profissional deve ser habilitado"),
    ],
)
def test_servico_invalido(campo, valor, mensagem):
    """Cada regra devolve a mensagem no próprio campo."""
    resultado = validar_servico(**{**SERVICO_OK, campo: valor})
    assert not eh_valido(resultado)
    assert erros(resultado) == {campo: mensagem}


def test_pacote_valido():
    """Pacote com 3 serviços e 20% de desconto."""
    assert eh_valido(validar_pacote(**PACOTE_OK))


@pytest.mark.parametrize(
    "campo, valor, trecho",
    [
        ("servicos", [1], "pelo menos 2 serviços"),
        ("servicos", [1, 2, 3, 4, 5, 6], "no máximo 5 serviços"),
        ("desconto_percentual", 75, "Desconto deve ser menor que 70%"),
        ("validade_dias", 10, "pelo menos 15 dias"),
        ("validade_dias", 120, "no máximo 90 dias"),
        ("limite_uso", 11, "no máximo 10"),
    ],
)
def test_pacote_invalido(campo, valor, trecho):
    """Limites de composição, desconto, validade e uso."""
    mensagens = erros(validar_pacote(**{**PACOTE_OK, campo: valor}))
    assert list(mensagens) == [campo]
    assert trecho in mensagens[campo]


# --- Operações ---


@pytest.mark.django_db
def test_pacote_recalcula_precos(pacote):
    """35 + 25 + 15 com 20% de desconto."""
    assert pacote.preco_original == Decimal("75.00")
    assert pacote.preco_final == Decimal("60.00")
    assert pacote.economia == Decimal("15.00")


@pytest.mark.django_db
def test_salvar_itens_substitui_composicao(pacote, corte, barba):
    """Itens fora da nova lista são removidos."""
    salvar_itens_pacote(pacote, [corte, barba])
    assert pacote.itens.count() == 2
    assert pacote.preco_original == Decimal("60.00")
    assert pacote.preco_final == Decimal("48.00")


@pytest.mark.django_db
def test_atualizar_preco_guarda_historico(pacote, corte, admin_user):
    """Histórico registrado e pacotes recalculados."""
    atualizar_preco(corte, "40.00", "Ajuste de inflação", admin_user)

    historico = HistoricoPreco.objects.get(servico=corte)
    assert historico.preco_anterior == Decimal("35.00")
    assert historico.preco_novo == Decimal("40.00")
    assert historico.alterado_por == admin_user

    pacote.refresh_from_db()
    assert pacote.preco_original == Decimal("80.00")
    assert pacote.preco_final == Decimal("64.00")


@pytest.mark.django_db
def test_atualizar_preco_invalido(corte):
    """Preço fora da faixa não altera o serviço."""
    with pytest.raises(ValidationError):
        atualizar_preco(corte, "0")
    with pytest.raises(ValidationError):
        atualizar_preco(corte, "10000")
    assert not HistoricoPreco.objects.exists()


@pytest.mark.django_db
def test_duplicar_servico(corte, profissional):
    """Cópia com sufixo, mesmos profissionais e métricas zeradas."""
    Servico.objects.filter(pk=corte.pk).update(total_agendamentos=120, receita_total=Decimal("4200.00"))
    corte.refresh_from_db()

    copia = duplicar_servico(corte)
    assert copia.pk != corte.pk
    assert copia.nome == "Corte Masculino (Cópia)"
    assert list(copia.profissionais.all()) == [profissional]
    assert copia.total_agendamentos == 0
    assert copia.receita_total == Decimal("0.00")


@pytest.mark.django_db
def test_duplicar_servico_respeita_tamanho_do_nome(corte):
    """Nome da cópia fica dentro de 50 caracteres."""
    corte.nome = "Corte Masculino com Lavagem e Hidratação Profunda"
    corte.save()
    assert len(duplicar_servico(corte).nome) == 50


@pytest.mark.django_db
def test_duplicar_pacote(pacote):
    """Cópia com os mesmos itens e preços."""
    copia = duplicar_pacote(pacote)
    assert copia.nome == "Combo Completo (Cópia)"
    assert copia.itens.count() == 3
    assert copia.preco_final == pacote.preco_final
    assert copia.total_vendas == 0


@pytest.mark.django_db
def test_buscar_servicos(corte, barba, sobrancelha, profissional):
    """Filtros combinados; zero e vazio são ignorados."""
    filtros = FiltrosServico.from_querydict(QueryDict("categoria=corte&categoria=barba&preco_min=30"))
    assert list(buscar_servicos(filtros)) == [corte]

    filtros = FiltrosServico(duracao_max=20, profissional_id=profissional.pk, preco_min=Decimal("0"))
    assert list(buscar_servicos(filtros)) == [sobrancelha]


# --- Relatórios ---


def test_periodo_anterior():
    """Mesmo número de dias imediatamente antes."""
    assert periodo_anterior(date(2026, 10, 1), date(2026, 10, 31)) == (date(2026, 8, 31), date(2026, 9, 30))


def test_periodo_anterior_nas_pontas_do_calendario():
    """Período anterior que passaria de date.min fica limitado a ele."""
    assert periodo_anterior(date.min, date(2026, 1, 1)) == (date.min, date.min)
    assert periodo_anterior(date(1, 1, 10), date(9999, 12, 31)) == (date.min, date(1, 1, 9))


@pytest.mark.django_db
def test_relatorio_de_servicos_no_fim_do_calendario(corte):
    """Série mensal chega a dezembro de 9999 sem estourar."""
    relatorio = gerar_relatorio_servicos(date(9999, 11, 1), date.max)
    serie = relatorio["tendencias"]["serie_mensal"]
    assert [(p["mes"], p["ano"]) for p in serie] == [("Nov", 9999), ("Dez", 9999)]


@pytest.mark.django_db
def test_relatorio_de_servicos(profissional, corte, barba):
    """Ranking por agendamentos, receita e crescimento sobre o período anterior."""
    segunda = date(2026, 10, 19)
    for hora in (time(9), time(10), time(11)):
        agenda.agendar(profissional=profissional, servicos=[corte], data=segunda,
                       hora_inicio=hora, nome_cliente="Cliente")
    agenda.agendar(profissional=profissional, servicos=[barba], data=segunda,
                   hora_inicio=time(14), nome_cliente="Cliente")
    cancelado = agenda.agendar(profissional=profissional, servicos=[barba], data=segunda,
                               hora_inicio=time(15), nome_cliente="Cliente")
    agenda.cancelar(cancelado)

    relatorio = gerar_relatorio_servicos(date(2026, 10, 1), date(2026, 10, 31))
    top = relatorio["top_servicos"]
    assert [linha["servico"] for linha in top] == ["Corte Masculino", "Barba Completa"]
    assert top[0]["agendamentos"] == 3
    assert top[0]["receita"] == Decimal("105.00")
    assert top[0]["crescimento"] == Decimal("100.00")
    assert top[1]["agendamentos"] == 1


@pytest.mark.django_db
def test_relatorio_de_pacotes(pacote):
    """Pacote mais vendido e economia oferecida."""
    PacoteServico.objects.filter(pk=pacote.pk).update(vendas_mes=12, total_vendas=10)
    vazio = PacoteServico.objects.create(nome="Barba Express", desconto_percentual=Decimal("10"))

    relatorio = gerar_relatorio_pacotes(date(2026, 10, 1), date(2026, 10, 31))
    assert relatorio["uso"] == {"mais_vendido": "Combo Completo", "menos_vendido": vazio.nome}
    assert relatorio["descontos"]["desconto_medio"] == Decimal("15.00")
    assert relatorio["descontos"]["economia_oferecida"] == Decimal("150.00")


@pytest.mark.django_db
def test_exportar_relatorio_csv(profissional, corte):
    """Uma linha por serviço com o cabeçalho fixo."""
    agenda.agendar(profissional=profissional, servicos=[corte], data=date(2026, 10, 19),
                   hora_inicio=time(9), nome_cliente="Cliente")
    texto = exportar_relatorio_servicos_csv(gerar_relatorio_servicos(date(2026, 10, 1), date(2026, 10, 31)))
    linhas = list(csv.reader(io.StringIO(texto)))
    assert linhas[0] == CABECALHO_CSV
    assert linhas[1][:3] == ["Corte Masculino", "1", "35.00"]


@pytest.mark.django_db
def test_formulario_de_servico_mostra_erros_por_campo(profissional):
    """As regras do catálogo aparecem como erros inline do formulário."""
    form = ServicoForm(data={
        "nome": "Corte",
        "descricao": "Corte clássico.",
        "preco": "10000",
        "duracao": 500,
        "categoria": "corte",
        "profissionais": [profissional.pk],
        "ativo": "on",
    })
    assert not form.is_valid()
    assert form.errors["preco"] == ["Preço deve ser menor que R$ 9.999,99"]
    assert form.errors["duracao"] == ["Duração deve ser menor que 8 horas"]
