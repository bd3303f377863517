# clientes/busca.py
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from django.db.models import Q
from django.utils.dateparse import parse_date

from .models import Cliente


@dataclass
class FiltrosBuscaCliente:
    nome: str = ""
    telefone: str = ""
    email: str = ""
    ultima_visita_de: Optional[date] = None
    ultima_visita_ate: Optional[date] = None
    total_gasto_min: Optional[Decimal] = None
    total_gasto_max: Optional[Decimal] = None
    niveis: list = field(default_factory=list)
    status: list = field(default_factory=list)
    tem_alergias: Optional[bool] = None
    mes_aniversario: Optional[int] = None

    @classmethod
    def from_querydict(cls, params):
        """Monta os filtros a partir de request.GET; valores inválidos são ignorados."""

        def _decimal(nome):
            valor = (params.get(nome) or "").strip().replace(",", ".")
            if not valor:
                return None
            try:
                return Decimal(valor)
            except InvalidOperation:
                return None

        def _data(nome):
            valor = (params.get(nome) or "").strip()
            if not valor:
                return None
            try:
                return parse_date(valor)
            except ValueError:
                return None

        alergias = (params.get("alergias") or "").strip()
        mes = (params.get("mes_aniversario") or "").strip()
        mes_aniversario = int(mes) if mes.isdigit() and 1 <= int(mes) <= 12 else None

        return cls(
            nome=(params.get("q") or params.get("nome") or "").strip(),
            telefone=(params.get("telefone") or "").strip(),
            email=(params.get("email") or "").strip(),
            ultima_visita_de=_data("visita_de"),
            ultima_visita_ate=_data("visita_ate"),
            total_gasto_min=_decimal("gasto_min"),
            total_gasto_max=_decimal("gasto_max"),
            niveis=[n for n in params.getlist("nivel") if n],
            status=[s for s in params.getlist("status") if s],
            tem_alergias={"sim": True, "nao": False}.get(alergias),
            mes_aniversario=mes_aniversario,
        )


def buscar_clientes(filtros: FiltrosBuscaCliente, queryset=None):
    """
    Aplica todos os filtros informados (todos precisam bater).

    - Datas de última visita só restringem clientes que já têm uma visita.
    - Totais mínimo/máximo iguais a zero são ignorados.
    """
    qs = Cliente.objects.all() if queryset is None else queryset

    if filtros.nome:
        qs = qs.filter(nome_completo__icontains=filtros.nome)
    if filtros.telefone:
        qs = qs.filter(telefone__contains=filtros.telefone)
    if filtros.email:
        qs = qs.filter(email__icontains=filtros.email)

    if filtros.ultima_visita_de:
        qs = qs.filter(
            Q(ultima_visita__isnull=True) | Q(ultima_visita__gte=filtros.ultima_visita_de)
        )
    if filtros.ultima_visita_ate:
        qs = qs.filter(
            Q(ultima_visita__isnull=True) | Q(ultima_visita__lte=filtros.ultima_visita_ate)
        )

    if filtros.total_gasto_min:
        qs = qs.filter(total_gasto__gte=filtros.total_gasto_min)
    if filtros.total_gasto_max:
        qs = qs.filter(total_gasto__lte=filtros.total_gasto_max)

    if filtros.niveis:
        qs = qs.filter(nivel_fidelidade__in=filtros.niveis)
    if filtros.status:
        qs = qs.filter(status__in=filtros.status)

    if filtros.mes_aniversario is not None:
        qs = qs.filter(data_nascimento__month=filtros.mes_aniversario)

    clientes = list(qs)

    # Alergias ficam numa lista JSON; filtramos em Python para funcionar em qualquer banco
    if filtros.tem_alergias is not None:
        clientes = [c for c in clientes if c.tem_alergias == filtros.tem_alergias]

    return clientes
