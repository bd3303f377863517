# servicos/busca.py
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Optional

from .models import PacoteServico, Servico


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


def _booleano(valor):
    if valor in ("1", "true", "sim"):
        return True
    if valor in ("0", "false", "nao"):
        return False
    return None


@dataclass
class FiltrosServico:
    nome: str = ""
    categorias: list = field(default_factory=list)
    preco_min: Optional[Decimal] = None
    preco_max: Optional[Decimal] = None
    duracao_min: Optional[int] = None
    duracao_max: Optional[int] = None
    profissional_id: Optional[int] = None
    ativo: Optional[bool] = None
    ranking_max: Optional[int] = None
    avaliacao_min: Optional[Decimal] = None

    @classmethod
    def from_querydict(cls, params):
        return cls(
            nome=(params.get("q") or "").strip(),
            categorias=[c for c in params.getlist("categoria") if c],
            preco_min=_decimal(params.get("preco_min")),
            preco_max=_decimal(params.get("preco_max")),
            duracao_min=_inteiro(params.get("duracao_min")),
            duracao_max=_inteiro(params.get("duracao_max")),
            profissional_id=_inteiro(params.get("profissional")),
            ativo=_booleano(params.get("ativo")),
            ranking_max=_inteiro(params.get("ranking_max")),
            avaliacao_min=_decimal(params.get("avaliacao_min")),
        )


@dataclass
class FiltrosPacote:
    nome: str = ""
    desconto_min: Optional[Decimal] = None
    desconto_max: Optional[Decimal] = None
    preco_min: Optional[Decimal] = None
    preco_max: Optional[Decimal] = None
    ativo: Optional[bool] = None
    validade_min: Optional[int] = None
    validade_max: Optional[int] = None

    @classmethod
    def from_querydict(cls, params):
        return cls(
            nome=(params.get("q") or "").strip(),
            desconto_min=_decimal(params.get("desconto_min")),
            desconto_max=_decimal(params.get("desconto_max")),
            preco_min=_decimal(params.get("preco_min")),
            preco_max=_decimal(params.get("preco_max")),
            ativo=_booleano(params.get("ativo")),
            validade_min=_inteiro(params.get("validade_min")),
            validade_max=_inteiro(params.get("validade_max")),
        )


def buscar_servicos(filtros: FiltrosServico, queryset=None):
    """Filtros numéricos zerados ou vazios são ignorados."""
    qs = Servico.objects.all() if queryset is None else queryset

    if filtros.nome:
        qs = qs.filter(nome__icontains=filtros.nome)
    if filtros.categorias:
        qs = qs.filter(categoria__in=filtros.categorias)
    if filtros.preco_min:
        qs = qs.filter(preco__gte=filtros.preco_min)
    if filtros.preco_max:
        qs = qs.filter(preco__lte=filtros.preco_max)
    if filtros.duracao_min:
        qs = qs.filter(duracao__gte=filtros.duracao_min)
    if filtros.duracao_max:
        qs = qs.filter(duracao__lte=filtros.duracao_max)
    if filtros.profissional_id:
        qs = qs.filter(profissionais__id=filtros.profissional_id)
    if filtros.ativo is not None:
        qs = qs.filter(ativo=filtros.ativo)
    if filtros.ranking_max:
        qs = qs.filter(ranking_popularidade__lte=filtros.ranking_max)
    if filtros.avaliacao_min:
        qs = qs.filter(avaliacao_media__gte=filtros.avaliacao_min)

    return qs.distinct()


def buscar_pacotes(filtros: FiltrosPacote, queryset=None):
    qs = PacoteServico.objects.all() if queryset is None else queryset

    if filtros.nome:
        qs = qs.filter(nome__icontains=filtros.nome)
    if filtros.desconto_min:
        qs = qs.filter(desconto_percentual__gte=filtros.desconto_min)
    if filtros.desconto_max:
        qs = qs.filter(desconto_percentual__lte=filtros.desconto_max)
    if filtros.preco_min:
        qs = qs.filter(preco_final__gte=filtros.preco_min)
    if filtros.preco_max:
        qs = qs.filter(preco_final__lte=filtros.preco_max)
    if filtros.ativo is not None:
        qs = qs.filter(ativo=filtros.ativo)
    if filtros.validade_min:
        qs = qs.filter(validade_dias__gte=filtros.validade_min)
    if filtros.validade_max:
        qs = qs.filter(validade_dias__lte=filtros.validade_max)

    return qs
