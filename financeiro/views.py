# financeiro/views.py
import logging
from datetime import MAXYEAR, MINYEAR, date, timedelta
from decimal import Decimal

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.db.models import Q, Sum
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views import View

from accounts.permissions import AdminRequiredMixin

from .alertas import gerar_alertas, marcar_lido
from .caixa import (
    abrir_caixa,
    caixa_aberto,
    calcular_saldo_esperado,
    fechar_caixa,
    registrar_movimento,
    registrar_transacao,
)
from .fiscal import calcular_impostos, emitir_documento_fiscal
from .forms import (
    AbrirCaixaForm,
    ContaForm,
    DocumentoFiscalForm,
    FecharCaixaForm,
    MovimentoCaixaForm,
    TransacaoForm,
)
from .models import (
    AlertaFinanceiro,
    Caixa,
    Conta,
    DocumentoFiscal,
    ObrigacaoFiscal,
    TipoLancamento,
    Transacao,
)
from .relatorios import exportar_relatorio, gerar_desempenho, gerar_dre, gerar_fluxo_caixa

logger = logging.getLogger(__name__)

RELATORIOS = {
    "fluxo": gerar_fluxo_caixa,
    "dre": gerar_dre,
    "desempenho": gerar_desempenho,
}


def _parse_date(value):
    if not value:
        return None
    try:
        data = date.fromisoformat(value)
    except ValueError:
        return None
    # Anos nas pontas do calendário estouram a aritmética de períodos
    if not MINYEAR < data.year < MAXYEAR:
        return None
    return data


def _periodo_mes(request):
    """Período vindo do GET; por padrão o mês corrente."""
    hoje = timezone.localdate()
    inicio = _parse_date(request.GET.get("inicio")) or hoje.replace(day=1)
    fim = _parse_date(request.GET.get("fim")) or hoje
    if inicio > fim:
        inicio, fim = fim, inicio
    return inicio, fim


class FinanceiroDashboardView(AdminRequiredMixin, View):
    """
    Visão geral financeira: receitas e despesas do mês,
    caixa aberto, alertas não lidos e contas a vencer.
    """

    def get(self, request, *args, **kwargs):
        hoje = timezone.localdate()
        inicio_mes = hoje.replace(day=1)

        do_mes = Transacao.objects.filter(data__gte=inicio_mes, data__lte=hoje)
        receitas = do_mes.filter(tipo=TipoLancamento.RECEITA).aggregate(t=Sum("valor"))["t"] or Decimal("0.00")
        despesas = do_mes.filter(tipo=TipoLancamento.DESPESA).aggregate(t=Sum("valor"))["t"] or Decimal("0.00")
        receitas_hoje = (
            Transacao.objects.filter(data=hoje, tipo=TipoLancamento.RECEITA)
            .aggregate(t=Sum("valor"))["t"] or Decimal("0.00")
        )

        caixa = caixa_aberto()
        kpis = {
            "receitas_mes": receitas,
            "despesas_mes": despesas,
            "saldo_mes": receitas - despesas,
            "receitas_hoje": receitas_hoje,
            "saldo_caixa": calcular_saldo_esperado(caixa) if caixa else None,
        }

        context = {
            "kpis": kpis,
            "caixa": caixa,
            "alertas": AlertaFinanceiro.objects.filter(lido=False)[:10],
            "contas_proximas": Conta.objects.filter(
                status__in=[Conta.Status.PENDENTE, Conta.Status.VENCIDA],
                vencimento__lte=hoje + timedelta(days=15),
            )[:10],
            "ultimas_transacoes": Transacao.objects.select_related("categoria", "metodo_pagamento")[:10],
            "active_menu": "financeiro",
        }
        return render(request, "financeiro/dashboard.html", context)


class TransacoesListView(AdminRequiredMixin, View):
    def get(self, request, *args, **kwargs):
        qs = Transacao.objects.select_related("categoria", "metodo_pagamento")

        q = (request.GET.get("q") or "").strip()
        tipo = (request.GET.get("tipo") or "").strip()
        inicio = _parse_date(request.GET.get("inicio"))
        fim = _parse_date(request.GET.get("fim"))

        if q:
            qs = qs.filter(
                Q(descricao__icontains=q)
                | Q(referencia__icontains=q)
                | Q(categoria__nome__icontains=q)
            )
        if tipo:
            qs = qs.filter(tipo=tipo)
        if inicio:
            qs = qs.filter(data__gte=inicio)
        if fim:
            qs = qs.filter(data__lte=fim)

        totais = {
            "receitas": qs.filter(tipo=TipoLancamento.RECEITA).aggregate(t=Sum("valor"))["t"] or Decimal("0.00"),
            "despesas": qs.filter(tipo=TipoLancamento.DESPESA).aggregate(t=Sum("valor"))["t"] or Decimal("0.00"),
        }

        context = {
            "transacoes": qs,
            "totais": totais,
            "tipos": TipoLancamento.choices,
            "filtros": {
                "q": q,
                "tipo": tipo,
                "inicio": request.GET.get("inicio", ""),
                "fim": request.GET.get("fim", ""),
            },
            "active_menu": "financeiro",
        }
        return render(request, "financeiro/lista_transacoes.html", context)


class TransacaoCreateView(AdminRequiredMixin, View):
    def get(self, request, *args, **kwargs):
        context = {
            "form": TransacaoForm(initial={"data": timezone.localdate()}),
            "active_menu": "financeiro",
        }
        return render(request, "financeiro/form_transacao.html", context)

    def post(self, request, *args, **kwargs):
        form = TransacaoForm(request.POST)
        if form.is_valid():
            dados = form.cleaned_data
            registrar_transacao(
                tipo=dados["tipo"],
                categoria=dados["categoria"],
                subcategoria=dados["subcategoria"],
                valor=dados["valor"],
                descricao=dados["descricao"],
                data=dados["data"],
                metodo_pagamento=dados["metodo_pagamento"],
                referencia=dados["referencia"],
                usuario=request.user,
            )
            messages.success(request, "Transação registrada.")
            return redirect("financeiro:transacoes")
        context = {
            "form": form,
            "active_menu": "financeiro",
        }
        return render(request, "financeiro/form_transacao.html", context, status=400)


class CaixaView(AdminRequiredMixin, View):
    """
    Tela do caixa. O POST recebe `acao`:
    abrir, fechar ou movimento (sangria/suprimento).
    """

    def _context(self, **extra):
        caixa = caixa_aberto()
        context = {
            "caixa": caixa,
            "saldo_esperado": calcular_saldo_esperado(caixa) if caixa else None,
            "movimentos": caixa.movimentos.all() if caixa else [],
            "transacoes": caixa.transacoes.select_related("metodo_pagamento") if caixa else [],
            "historico": Caixa.objects.exclude(status=Caixa.Status.ABERTO)[:10],
            "abrir_form": AbrirCaixaForm(),
            "fechar_form": FecharCaixaForm(),
            "movimento_form": MovimentoCaixaForm(),
            "active_menu": "financeiro",
        }
        context.update(extra)
        return context

    def get(self, request, *args, **kwargs):
        return render(request, "financeiro/caixa.html", self._context())

    def post(self, request, *args, **kwargs):
        acao = request.POST.get("acao")
        try:
            if acao == "abrir":
                form = AbrirCaixaForm(request.POST)
                if not form.is_valid():
                    return render(request, "financeiro/caixa.html", self._context(abrir_form=form), status=400)
                abrir_caixa(form.cleaned_data["saldo_abertura"], request.user)
                messages.success(request, "Caixa aberto.")

            elif acao == "fechar":
                form = FecharCaixaForm(request.POST)
                caixa = caixa_aberto()
                if caixa is None:
                    raise ValidationError("Não há caixa aberto.")
                if not form.is_valid():
                    return render(request, "financeiro/caixa.html", self._context(fechar_form=form), status=400)
                caixa = fechar_caixa(
                    caixa,
                    form.cleaned_data["saldo_fechamento"],
                    form.cleaned_data["observacoes"],
                    request.user,
                )
                if caixa.status == Caixa.Status.EM_REVISAO:
                    messages.warning(
                        request,
                        f"Caixa fechado com diferença de R$ {caixa.diferenca}; aguardando revisão.",
                    )
                else:
                    messages.success(request, "Caixa fechado.")

            elif acao == "movimento":
                form = MovimentoCaixaForm(request.POST)
                if not form.is_valid():
                    return render(request, "financeiro/caixa.html", self._context(movimento_form=form), status=400)
                registrar_movimento(
                    caixa_aberto(),
                    form.cleaned_data["tipo"],
                    form.cleaned_data["valor"],
                    form.cleaned_data["motivo"],
                    form.cleaned_data["autorizado_por"] or request.user.get_username(),
                )
                messages.success(request, "Movimento registrado.")
            else:
                messages.error(request, "Ação inválida.")
        except ValidationError as e:
            messages.error(request, "; ".join(e.messages))

        return redirect("financeiro:caixa")


class ContasListView(AdminRequiredMixin, View):
    def get(self, request, *args, **kwargs):
        qs = Conta.objects.all()
        tipo = (request.GET.get("tipo") or "").strip()
        status = (request.GET.get("status") or "").strip()
        if tipo:
            qs = qs.filter(tipo=tipo)
        if status:
            qs = qs.filter(status=status)

        context = {
            "contas": qs,
            "form": ContaForm(),
            "tipos": Conta.Tipo.choices,
            "status_choices": Conta.Status.choices,
            "filtros": {"tipo": tipo, "status": status},
            "active_menu": "financeiro",
        }
        return render(request, "financeiro/lista_contas.html", context)

    def post(self, request, *args, **kwargs):
        form = ContaForm(request.POST)
        if form.is_valid():
            form.save()
            messages.success(request, "Conta cadastrada.")
            return redirect("financeiro:contas")
        context = {
            "contas": Conta.objects.all(),
            "form": form,
            "tipos": Conta.Tipo.choices,
            "status_choices": Conta.Status.choices,
            "filtros": {},
            "active_menu": "financeiro",
        }
        return render(request, "financeiro/lista_contas.html", context, status=400)


class ContaPagarView(AdminRequiredMixin, View):
    def post(self, request, pk, *args, **kwargs):
        conta = get_object_or_404(Conta, pk=pk)
        if conta.status in {Conta.Status.PAGA, Conta.Status.CANCELADA}:
            messages.error(request, "Esta conta já foi quitada ou cancelada.")
        else:
            conta.status = Conta.Status.PAGA
            conta.pago_em = timezone.localdate()
            conta.save(update_fields=["status", "pago_em", "atualizado_em"])
            logger.info("Conta %s marcada como paga", conta.pk)
            messages.success(request, "Conta marcada como paga.")
        return redirect("financeiro:contas")


class AlertasView(AdminRequiredMixin, View):
    def get(self, request, *args, **kwargs):
        context = {
            "alertas": AlertaFinanceiro.objects.select_related("conta", "transacao", "caixa"),
            "active_menu": "financeiro",
        }
        return render(request, "financeiro/alertas.html", context)

    def post(self, request, *args, **kwargs):
        criados = gerar_alertas()
        messages.info(request, f"{len(criados)} novo(s) alerta(s).")
        return redirect("financeiro:alertas")


class AlertaLidoView(AdminRequiredMixin, View):
    def post(self, request, pk, *args, **kwargs):
        marcar_lido(get_object_or_404(AlertaFinanceiro, pk=pk))
        return redirect("financeiro:alertas")


class RelatoriosFinanceirosView(AdminRequiredMixin, View):
    def get(self, request, *args, **kwargs):
        inicio, fim = _periodo_mes(request)
        context = {
            "fluxo": gerar_fluxo_caixa(inicio, fim),
            "dre": gerar_dre(inicio, fim),
            "desempenho": gerar_desempenho(inicio, fim),
            "filtros": {"inicio": inicio, "fim": fim},
            "active_menu": "financeiro",
        }
        return render(request, "financeiro/relatorios.html", context)


class ExportarRelatorioView(AdminRequiredMixin, View):
    """Download em JSON de um relatório: ?tipo=fluxo|dre|desempenho."""

    def get(self, request, *args, **kwargs):
        tipo = request.GET.get("tipo", "fluxo")
        gerador = RELATORIOS.get(tipo)
        if gerador is None:
            messages.error(request, "Relatório desconhecido.")
            return redirect("financeiro:relatorios")

        inicio, fim = _periodo_mes(request)
        response = HttpResponse(
            exportar_relatorio(gerador(inicio, fim)),
            content_type="application/json; charset=utf-8",
        )
        response["Content-Disposition"] = (
            f'attachment; filename="relatorio-{tipo}-{inicio.isoformat()}-{fim.isoformat()}.json"'
        )
        return response


class FiscalView(AdminRequiredMixin, View):
    """Obrigações fiscais e documentos emitidos."""

    def get(self, request, *args, **kwargs):
        context = {
            "obrigacoes": ObrigacaoFiscal.objects.all(),
            "documentos": DocumentoFiscal.objects.all()[:20],
            "documento_form": DocumentoFiscalForm(),
            "active_menu": "financeiro",
        }
        return render(request, "financeiro/fiscal.html", context)

    def post(self, request, *args, **kwargs):
        acao = request.POST.get("acao")
        if acao == "impostos":
            inicio, fim = _periodo_mes(request)
            referencia = _parse_date(request.POST.get("mes"))
            if referencia:
                inicio = referencia.replace(day=1)
                fim = (inicio + timedelta(days=32)).replace(day=1) - timedelta(days=1)
            obrigacao = calcular_impostos(inicio, fim)
            messages.success(request, f"{obrigacao.nome} {obrigacao.referencia}: R$ {obrigacao.valor}")
        elif acao == "documento":
            form = DocumentoFiscalForm(request.POST)
            if form.is_valid():
                documento = emitir_documento_fiscal(**form.cleaned_data)
                messages.success(request, f"{documento} emitido.")
            else:
                messages.error(request, "Preencha os dados do documento.")
        return redirect("financeiro:fiscal")
