# servicos/validacao.py
"""
Regras de validação do catálogo.

Cada função devolve um dict campo -> ResultadoValidacao, para que os
formulários possam mostrar a mensagem ao lado de cada campo.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

CATEGORIAS_VALIDAS = ("corte", "barba", "quimica", "estetica", "tratamento")

PRECO_MAXIMO = Decimal("9999.99")
DURACAO_MAXIMA = 480
DESCONTO_MAXIMO = Decimal("70")


@dataclass(frozen=True)
class ResultadoValidacao:
    valido: bool = True
    mensagem: str = ""


OK = ResultadoValidacao()


def _erro(mensagem):
    return ResultadoValidacao(valido=False, mensagem=mensagem)


def _decimal(valor):
    if valor in (None, ""):
        return None
    try:
        return Decimal(str(valor))
    except (InvalidOperation, ValueError):
        return None


def _inteiro(valor):
    if valor in (None, ""):
        return None
    try:
        return int(valor)
    except (TypeError, ValueError):
        return None


def validar_servico(nome=None, descricao=None, preco=None, duracao=None,
                    categoria=None, profissionais=None) -> dict:
    resultado = {}

    if not nome or not nome.strip():
        resultado["nome"] = _erro("Nome é obrigatório")
    elif len(nome) > 50:
        resultado["nome"] = _erro("Nome deve ter no máximo 50 caracteres")
    else:
        resultado["nome"] = OK

    if not descricao or not descricao.strip():
        resultado["descricao"] = _erro("Descrição é obrigatória")
    elif len(descricao) > 1000:
        resultado["descricao"] = _erro("Descrição deve ter no máximo 1000 caracteres")
    else:
        resultado["descricao"] = OK

    preco = _decimal(preco)
    if preco is None or preco <= 0:
        resultado["preco"] = _erro("Preço deve ser maior que zero")
    elif preco > PRECO_MAXIMO:
        resultado["preco"] = _erro("Preço deve ser menor que R$ 9.999,99")
    else:
        resultado["preco"] = OK

    duracao = _inteiro(duracao)
    if duracao is None or duracao <= 0:
        resultado["duracao"] = _erro("Duração deve ser maior que zero")
    elif duracao > DURACAO_MAXIMA:
        resultado["duracao"] = _erro("Duração deve ser menor que 8 horas")
    else:
        resultado["duracao"] = OK

    if categoria not in CATEGORIAS_VALIDAS:
        resultado["categoria"] = _erro("Categoria inválida")
    else:
        resultado["categoria"] = OK

    if not profissionais:
        resultado["profissionais"] = _erro("Pelo menos um profissional deve ser habilitado")
    else:
        resultado["profissionais"] = OK

    return resultado


def validar_pacote(nome=None, servicos=None, desconto_percentual=None,
                   validade_dias=None, limite_uso=None) -> dict:
    resultado = {}

    if not nome or not nome.strip():
        resultado["nome"] = _erro("Nome é obrigatório")
    elif len(nome) > 100:
        resultado["nome"] = _erro("Nome deve ter no máximo 100 caracteres")
    else:
        resultado["nome"] = OK

    quantidade = len(servicos or [])
    if quantidade < 2:
        resultado["servicos"] = _erro("Pacote deve ter pelo menos 2 serviços")
    elif quantidade > 5:
        resultado["servicos"] = _erro("Pacote deve ter no máximo 5 serviços")
    else:
        resultado["servicos"] = OK

    desconto = _decimal(desconto_percentual)
    if desconto is None or desconto <= 0:
        resultado["desconto_percentual"] = _erro("Desconto deve ser maior que zero")
    elif desconto > DESCONTO_MAXIMO:
        resultado["desconto_percentual"] = _erro("Desconto deve ser menor que 70%")
    else:
        resultado["desconto_percentual"] = OK

    validade = _inteiro(validade_dias)
    if validade is None or validade < 15:
        resultado["validade_dias"] = _erro("Período de validade deve ser pelo menos 15 dias")
    elif validade > 90:
        resultado["validade_dias"] = _erro("Período de validade deve ser no máximo 90 dias")
    else:
        resultado["validade_dias"] = OK

    limite = _inteiro(limite_uso)
    if limite is None or limite <= 0:
        resultado["limite_uso"] = _erro("Limite de uso deve ser maior que zero")
    elif limite > 10:
        resultado["limite_uso"] = _erro("Limite de uso deve ser no máximo 10")
    else:
        resultado["limite_uso"] = OK

    return resultado


def eh_valido(resultado: dict) -> bool:
    return all(r.valido for r in resultado.values())


def erros(resultado: dict) -> dict:
    """Apenas os campos inválidos, campo -> mensagem."""
    return {campo: r.mensagem for campo, r in resultado.items() if not r.valido}
