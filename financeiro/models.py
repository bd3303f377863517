# financeiro/models.py
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Max
from django.utils import timezone


class TipoLancamento(models.TextChoices):
    RECEITA = "income", "Receita"
    DESPESA = "expense", "Despesa"


class CategoriaTransacao(models.Model):
    nome = models.CharField(max_length=80)
    tipo = models.CharField(max_length=10, choices=TipoLancamento.choices)
    cor = models.CharField(max_length=7, default="#6B7280")
    icone = models.CharField("Ícone", max_length=40, blank=True)
    ativo = models.BooleanField(default=True)
    subcategorias = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ["tipo", "nome"]
        verbose_name = "Categoria de transação"
        verbose_name_plural = "Categorias de transação"

    def __str__(self):
        return self.nome


class MetodoPagamento(models.Model):
    class Tipo(models.TextChoices):
        DINHEIRO = "cash", "Dinheiro"
        CARTAO = "card", "Cartão"
        PIX = "pix", "PIX"
        TRANSFERENCIA = "transfer", "Transferência"
        CHEQUE = "check", "Cheque"
        OUTRO = "other", "Outro"

    nome = models.CharField(max_length=60)
    tipo = models.CharField(max_length=10, choices=Tipo.choices)
    ativo = models.BooleanField(default=True)
    taxa = models.DecimalField(
        "Taxa (%)",
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta:
        ordering = ["nome"]
        verbose_name = "Método de pagamento"
        verbose_name_plural = "Métodos de pagamento"

    def __str__(self):
        return self.nome


class Caixa(models.Model):
    class Status(models.TextChoices):
        ABERTO = "open", "Aberto"
        FECHADO = "closed", "Fechado"
        EM_REVISAO = "pending_review", "Pendente de revisão"

    data = models.DateField(default=timezone.localdate)
    saldo_abertura = models.DecimalField(max_digits=12, decimal_places=2)
    saldo_fechamento = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    saldo_esperado = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    diferenca = models.DecimalField("Diferença", max_digits=12, decimal_places=2, default=Decimal("0.00"))
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ABERTO,
        db_index=True,
    )
    aberto_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="caixas_abertos",
    )
    fechado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="caixas_fechados",
    )
    aberto_em = models.DateTimeField(default=timezone.now)
    fechado_em = models.DateTimeField(null=True, blank=True)
    observacoes = models.TextField("Observações", blank=True)

    class Meta:
        ordering = ["-aberto_em"]
        verbose_name = "Caixa"
        verbose_name_plural = "Caixas"

    def __str__(self):
        return f"Caixa {self.data:%d/%m/%Y} ({self.get_status_display()})"

    @property
    def aberto(self) -> bool:
        return self.status == self.Status.ABERTO


class Transacao(models.Model):
    tipo = models.CharField(max_length=10, choices=TipoLancamento.choices)
    categoria = models.ForeignKey(
        CategoriaTransacao,
        on_delete=models.PROTECT,
        related_name="transacoes",
    )
    subcategoria = models.CharField(max_length=80, blank=True)
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    descricao = models.CharField("Descrição", max_length=255)
    data = models.DateField(default=timezone.localdate, db_index=True)
    metodo_pagamento = models.ForeignKey(
        MetodoPagamento,
        on_delete=models.PROTECT,
        related_name="transacoes",
    )
    referencia = models.CharField(
        "Referência",
        max_length=60,
        blank=True,
        help_text="Código do agendamento, nota fiscal etc.",
    )
    caixa = models.ForeignKey(
        Caixa,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transacoes",
    )
    criado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transacoes_criadas",
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-data", "-criado_em"]
        verbose_name = "Transação"
        verbose_name_plural = "Transações"

    def __str__(self):
        return f"{self.get_tipo_display()} · {self.descricao} · R$ {self.valor}"

    @property
    def em_dinheiro(self) -> bool:
        return self.metodo_pagamento.tipo == MetodoPagamento.Tipo.DINHEIRO


class MovimentoCaixa(models.Model):
    class Tipo(models.TextChoices):
        SANGRIA = "withdrawal", "Sangria"
        SUPRIMENTO = "supply", "Suprimento"

    caixa = models.ForeignKey(
        Caixa,
        on_delete=models.CASCADE,
        related_name="movimentos",
    )
    tipo = models.CharField(max_length=10, choices=Tipo.choices)
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    motivo = models.CharField(max_length=200)
    autorizado_por = models.CharField(max_length=150, blank=True)
    criado_em = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["criado_em"]
        verbose_name = "Movimento de caixa"
        verbose_name_plural = "Movimentos de caixa"

    def __str__(self):
        return f"{self.get_tipo_display()} R$ {self.valor} · {self.motivo}"


class Conta(models.Model):
    class Tipo(models.TextChoices):
        PAGAR = "payable", "A pagar"
        RECEBER = "receivable", "A receber"

    class Status(models.TextChoices):
        PENDENTE = "pending", "Pendente"
        PAGA = "paid", "Paga"
        VENCIDA = "overdue", "Vencida"
        CANCELADA = "cancelled", "Cancelada"

    class Frequencia(models.TextChoices):
        DIARIA = "daily", "Diária"
        SEMANAL = "weekly", "Semanal"
        MENSAL = "monthly", "Mensal"
        ANUAL = "yearly", "Anual"

    tipo = models.CharField(max_length=10, choices=Tipo.choices)
    categoria = models.CharField(max_length=80)
    descricao = models.CharField("Descrição", max_length=255)
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    vencimento = models.DateField(db_index=True)
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDENTE,
        db_index=True,
    )
    recorrente = models.BooleanField(default=False)
    frequencia = models.CharField(max_length=10, choices=Frequencia.choices, blank=True)
    intervalo = models.PositiveIntegerField(default=1)
    recorrencia_ate = models.DateField(null=True, blank=True)
    fornecedor = models.CharField(max_length=150, blank=True)
    cliente = models.CharField(max_length=150, blank=True)
    referencia = models.CharField("Referência", max_length=60, blank=True)
    pago_em = models.DateField(null=True, blank=True)

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["vencimento"]
        verbose_name = "Conta"
        verbose_name_plural = "Contas"

    def __str__(self):
        return f"{self.descricao} · vence {self.vencimento:%d/%m/%Y}"


class AlertaFinanceiro(models.Model):
    class Tipo(models.TextChoices):
        VENCIMENTO = "due_date", "Vencimento"
        CAIXA_BAIXO = "low_cash", "Caixa baixo"
        DESPESA_ALTA = "high_expense", "Despesa alta"
        META_ATINGIDA = "target_achieved", "Meta atingida"
        PERSONALIZADO = "custom", "Personalizado"

    class Severidade(models.TextChoices):
        INFO = "info", "Informação"
        AVISO = "warning", "Aviso"
        ERRO = "error", "Erro"
        SUCESSO = "success", "Sucesso"

    tipo = models.CharField(max_length=20, choices=Tipo.choices)
    titulo = models.CharField("Título", max_length=150)
    mensagem = models.CharField(max_length=255)
    severidade = models.CharField(max_length=10, choices=Severidade.choices, default=Severidade.INFO)
    lido = models.BooleanField(default=False)
    criado_em = models.DateTimeField(default=timezone.now)
    expira_em = models.DateTimeField(null=True, blank=True)

    conta = models.ForeignKey(
        Conta,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="alertas",
    )
    transacao = models.ForeignKey(
        Transacao,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="alertas",
    )
    caixa = models.ForeignKey(
        Caixa,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="alertas",
    )

    class Meta:
        ordering = ["lido", "-criado_em"]
        verbose_name = "Alerta financeiro"
        verbose_name_plural = "Alertas financeiros"

    def __str__(self):
        return self.titulo


class DocumentoFiscal(models.Model):
    class Tipo(models.TextChoices):
        NFE = "nfe", "NF-e"
        RECIBO = "receipt", "Recibo"
        FATURA = "invoice", "Fatura"
        DOCUMENTO = "tax_document", "Documento fiscal"

    class Status(models.TextChoices):
        RASCUNHO = "draft", "Rascunho"
        EMITIDO = "issued", "Emitido"
        CANCELADO = "cancelled", "Cancelado"

    tipo = models.CharField(max_length=15, choices=Tipo.choices)
    numero = models.PositiveIntegerField("Número", unique=True)
    serie = models.CharField("Série", max_length=5, default="1")
    data = models.DateField(default=timezone.localdate)
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    cliente = models.CharField(max_length=150, blank=True)
    fornecedor = models.CharField(max_length=150, blank=True)
    descricao = models.CharField("Descrição", max_length=255)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.EMITIDO)
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-numero"]
        verbose_name = "Documento fiscal"
        verbose_name_plural = "Documentos fiscais"

    def __str__(self):
        return f"{self.get_tipo_display()} nº {self.numero:06d}"

    @classmethod
    def proximo_numero(cls) -> int:
        ultimo = cls.objects.aggregate(m=Max("numero"))["m"]
        return (ultimo or 0) + 1


class ObrigacaoFiscal(models.Model):
    class Status(models.TextChoices):
        PENDENTE = "pending", "Pendente"
        PAGA = "paid", "Paga"
        VENCIDA = "overdue", "Vencida"

    regime = models.CharField(max_length=20)
    nome = models.CharField(max_length=80)
    vencimento = models.DateField()
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDENTE)
    referencia = models.CharField("Referência", max_length=7, help_text="MM/AAAA")
    base_calculo = models.DecimalField("Base de cálculo", max_digits=12, decimal_places=2)
    aliquota = models.DecimalField("Alíquota (%)", max_digits=5, decimal_places=2)
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-vencimento"]
        unique_together = [("regime", "referencia")]
        verbose_name = "Obrigação fiscal"
        verbose_name_plural = "Obrigações fiscais"

    def __str__(self):
        return f"{self.nome} {self.referencia}"
