from datetime import time
from decimal import Decimal

from django.db import models


class ConfiguracaoGeral(models.Model):
    MOEDAS = [
        ("BRL", "Real brasileiro (R$)"),
        ("USD", "Dólar americano (USD)"),
        ("EUR", "Euro (EUR)"),
    ]

    class RegimeFiscal(models.TextChoices):
        MEI = "MEI", "MEI"
        SIMPLES = "SIMPLES", "Simples Nacional"
        LUCRO_PRESUMIDO = "LUCRO_PRESUMIDO", "Lucro presumido"
        LUCRO_REAL = "LUCRO_REAL", "Lucro real"

    salao_nome = models.CharField("Nome do salão", max_length=150, default="Salão sem nome")
    salao_slogan = models.CharField("Slogan", max_length=200, blank=True)
    salao_email = models.EmailField("E-mail de contato", blank=True)
    salao_telefone = models.CharField("Telefone", max_length=50, blank=True)
    salao_endereco = models.CharField("Endereço", max_length=255, blank=True)

    moeda = models.CharField("Moeda padrão", max_length=3, choices=MOEDAS, default="BRL")
    fuso_horario = models.CharField("Fuso horário", max_length=50, default="America/Sao_Paulo")

    # --- Caixa ---
    caixa_fechamento_automatico = models.BooleanField("Fechar caixa automaticamente", default=True)
    caixa_horario_fechamento = models.TimeField("Horário de fechamento do caixa", default=time(22, 0))
    caixa_exige_aprovacao = models.BooleanField(
        "Exigir aprovação de diferenças",
        default=False,
        help_text="Se ativo, caixas com diferença acima do limite ficam pendentes de revisão.",
    )
    caixa_diferenca_maxima = models.DecimalField(
        "Diferença máxima aceita no caixa",
        max_digits=10,
        decimal_places=2,
        default=Decimal("10.00"),
    )

    # --- Alertas ---
    alerta_dias_vencimento = models.PositiveIntegerField(
        "Dias de antecedência para alerta de vencimento", default=5
    )
    alerta_caixa_baixo = models.DecimalField(
        "Limite de caixa baixo", max_digits=10, decimal_places=2, default=Decimal("500.00")
    )
    alerta_despesa_alta = models.DecimalField(
        "Limite de despesa alta", max_digits=10, decimal_places=2, default=Decimal("5000.00")
    )

    # --- Fiscal ---
    regime_fiscal = models.CharField(
        "Regime fiscal",
        max_length=20,
        choices=RegimeFiscal.choices,
        default=RegimeFiscal.MEI,
    )
    cnpj = models.CharField("CNPJ", max_length=18, blank=True)
    valor_das_mei = models.DecimalField(
        "Valor mensal do DAS MEI", max_digits=8, decimal_places=2, default=Decimal("66.60")
    )
    aliquota_simples = models.DecimalField(
        "Alíquota do Simples (%)", max_digits=5, decimal_places=2, default=Decimal("6.00")
    )

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Configuração geral"
        verbose_name_plural = "Configuração geral"

    def __str__(self):
        return "Configuração geral do sistema"

    @classmethod
    def get_solo(cls):
        """
        Devolve a única instância de configuração (cria se não existir).
        """
        obj, created = cls.objects.get_or_create(pk=1)
        return obj
