import datetime
from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ConfiguracaoGeral",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("salao_nome", models.CharField(default="Salão sem nome", max_length=150, verbose_name="Nome do salão")),
                ("salao_slogan", models.CharField(blank=True, max_length=200, verbose_name="Slogan")),
                ("salao_email", models.EmailField(blank=True, max_length=254, verbose_name="E-mail de contato")),
                ("salao_telefone", models.CharField(blank=True, max_length=50, verbose_name="Telefone")),
                ("salao_endereco", models.CharField(blank=True, max_length=255, verbose_name="Endereço")),
                (
                    "moeda",
                    models.CharField(
                        choices=[
                            ("BRL", "Real brasileiro (R$)"),
                            ("USD", "Dólar americano (USD)"),
                            ("EUR", "Euro (EUR)"),
                        ],
                        default="BRL",
                        max_length=3,
                        verbose_name="Moeda padrão",
                    ),
                ),
                ("fuso_horario", models.CharField(default="America/Sao_Paulo", max_length=50, verbose_name="Fuso horário")),
                (
                    "caixa_fechamento_automatico",
                    models.BooleanField(default=True, verbose_name="Fechar caixa automaticamente"),
                ),
                (
                    "caixa_horario_fechamento",
                    models.TimeField(default=datetime.time(22, 0), verbose_name="Horário de fechamento do caixa"),
                ),
                (
                    "caixa_exige_aprovacao",
                    models.BooleanField(
                        default=False,
                        help_text="Se ativo, caixas com diferença acima do limite ficam pendentes de revisão.",
                        verbose_name="Exigir aprovação de diferenças",
                    ),
                ),
                (
                    "caixa_diferenca_maxima",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("10.00"),
                        max_digits=10,
                        verbose_name="Diferença máxima aceita no caixa",
                    ),
                ),
                (
                    "alerta_dias_vencimento",
                    models.PositiveIntegerField(
                        default=5, verbose_name="Dias de antecedência para alerta de vencimento"
                    ),
                ),
                (
                    "alerta_caixa_baixo",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("500.00"), max_digits=10, verbose_name="Limite de caixa baixo"
                    ),
                ),
                (
                    "alerta_despesa_alta",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("5000.00"), max_digits=10, verbose_name="Limite de despesa alta"
                    ),
                ),
                (
                    "regime_fiscal",
                    models.CharField(
                        choices=[
                            ("MEI", "MEI"),
                            ("SIMPLES", "Simples Nacional"),
                            ("LUCRO_PRESUMIDO", "Lucro presumido"),
                            ("LUCRO_REAL", "Lucro real"),
                        ],
                        default="MEI",
                        max_length=20,
                        verbose_name="Regime fiscal",
                    ),
                ),
                ("cnpj", models.CharField(blank=True, max_length=18, verbose_name="CNPJ")),
                (
                    "valor_das_mei",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("66.60"), max_digits=8, verbose_name="Valor mensal do DAS MEI"
                    ),
                ),
                (
                    "aliquota_simples",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("6.00"), max_digits=5, verbose_name="Alíquota do Simples (%)"
                    ),
                ),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Configuração geral",
                "verbose_name_plural": "Configuração geral",
            },
        ),
    ]
