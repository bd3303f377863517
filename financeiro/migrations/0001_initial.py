from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

TIPO_LANCAMENTO = [("income", "Receita"), ("expense", "Despesa")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="CategoriaTransacao",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=80)),
                ("tipo", models.CharField(choices=TIPO_LANCAMENTO, max_length=10)),
                ("cor", models.CharField(default="#6B7280", max_length=7)),
                ("icone", models.CharField(blank=True, max_length=40, verbose_name="Ícone")),
                ("ativo", models.BooleanField(default=True)),
                ("subcategorias", models.JSONField(blank=True, default=list)),
            ],
            options={
                "verbose_name": "Categoria de transação",
                "verbose_name_plural": "Categorias de transação",
                "ordering": ["tipo", "nome"],
            },
        ),
        migrations.CreateModel(
            name="MetodoPagamento",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=60)),
                (
                    "tipo",
                    models.CharField(
                        choices=[
                            ("cash", "Dinheiro"),
                            ("card", "Cartão"),
                            ("pix", "PIX"),
                            ("transfer", "Transferência"),
                            ("check", "Cheque"),
                            ("other", "Outro"),
                        ],
                        max_length=10,
                    ),
                ),
                ("ativo", models.BooleanField(default=True)),
                ("taxa", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5, verbose_name="Taxa (%)")),
            ],
            options={
                "verbose_name": "Método de pagamento",
                "verbose_name_plural": "Métodos de pagamento",
                "ordering": ["nome"],
            },
        ),
        migrations.CreateModel(
            name="Caixa",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("data", models.DateField(default=django.utils.timezone.localdate)),
                ("saldo_abertura", models.DecimalField(decimal_places=2, max_digits=12)),
                ("saldo_fechamento", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("saldo_esperado", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("diferenca", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12, verbose_name="Diferença")),
                (
                    "status",
                    models.CharField(
                        choices=[("open", "Aberto"), ("closed", "Fechado"), ("pending_review", "Pendente de revisão")],
                        db_index=True,
                        default="open",
                        max_length=20,
                    ),
                ),
                ("aberto_em", models.DateTimeField(default=django.utils.timezone.now)),
                ("fechado_em", models.DateTimeField(blank=True, null=True)),
                ("observacoes", models.TextField(blank=True, verbose_name="Observações")),
                (
                    "aberto_por",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="caixas_abertos",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "fechado_por",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="caixas_fechados",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Caixa",
                "verbose_name_plural": "Caixas",
                "ordering": ["-aberto_em"],
            },
        ),
        migrations.CreateModel(
            name="Transacao",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tipo", models.CharField(choices=TIPO_LANCAMENTO, max_length=10)),
                ("subcategoria", models.CharField(blank=True, max_length=80)),
                ("valor", models.DecimalField(decimal_places=2, max_digits=12)),
                ("descricao", models.CharField(max_length=255, verbose_name="Descrição")),
                ("data", models.DateField(db_index=True, default=django.utils.timezone.localdate)),
                (
                    "referencia",
                    models.CharField(
                        blank=True,
                        help_text="Código do agendamento, nota fiscal etc.",
                        max_length=60,
                        verbose_name="Referência",
                    ),
                ),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
                (
                    "caixa",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="transacoes",
                        to="financeiro.caixa",
                    ),
                ),
                (
                    "categoria",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transacoes",
                        to="financeiro.categoriatransacao",
                    ),
                ),
                (
                    "criado_por",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="transacoes_criadas",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "metodo_pagamento",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transacoes",
                        to="financeiro.metodopagamento",
                    ),
                ),
            ],
            options={
                "verbose_name": "Transação",
                "verbose_name_plural": "Transações",
                "ordering": ["-data", "-criado_em"],
            },
        ),
        migrations.CreateModel(
            name="MovimentoCaixa",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "tipo",
                    models.CharField(choices=[("withdrawal", "Sangria"), ("supply", "Suprimento")], max_length=10),
                ),
                ("valor", models.DecimalField(decimal_places=2, max_digits=12)),
                ("motivo", models.CharField(max_length=200)),
                ("autorizado_por", models.CharField(blank=True, max_length=150)),
                ("criado_em", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "caixa",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="movimentos",
                        to="financeiro.caixa",
                    ),
                ),
            ],
            options={
                "verbose_name": "Movimento de caixa",
                "verbose_name_plural": "Movimentos de caixa",
                "ordering": ["criado_em"],
            },
        ),
        migrations.CreateModel(
            name="Conta",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tipo", models.CharField(choices=[("payable", "A pagar"), ("receivable", "A receber")], max_length=10)),
                ("categoria", models.CharField(max_length=80)),
                ("descricao", models.CharField(max_length=255, verbose_name="Descrição")),
                ("valor", models.DecimalField(decimal_places=2, max_digits=12)),
                ("vencimento", models.DateField(db_index=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pendente"),
                            ("paid", "Paga"),
                            ("overdue", "Vencida"),
                            ("cancelled", "Cancelada"),
                        ],
                        db_index=True,
                        default="pending",
                        max_length=10,
                    ),
                ),
                ("recorrente", models.BooleanField(default=False)),
                (
                    "frequencia",
                    models.CharField(
                        blank=True,
                        choices=[("daily", "Diária"), ("weekly", "Semanal"), ("monthly", "Mensal"), ("yearly", "Anual")],
                        max_length=10,
                    ),
                ),
                ("intervalo", models.PositiveIntegerField(default=1)),
                ("recorrencia_ate", models.DateField(blank=True, null=True)),
                ("fornecedor", models.CharField(blank=True, max_length=150)),
                ("cliente", models.CharField(blank=True, max_length=150)),
                ("referencia", models.CharField(blank=True, max_length=60, verbose_name="Referência")),
                ("pago_em", models.DateField(blank=True, null=True)),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Conta",
                "verbose_name_plural": "Contas",
                "ordering": ["vencimento"],
            },
        ),
        migrations.CreateModel(
            name="AlertaFinanceiro",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "tipo",
                    models.CharField(
                        choices=[
                            ("due_date", "Vencimento"),
                            ("low_cash", "Caixa baixo"),
                            ("high_expense", "Despesa alta"),
                            ("target_achieved", "Meta atingida"),
                            ("custom", "Personalizado"),
                        ],
                        max_length=20,
                    ),
                ),
                ("titulo", models.CharField(max_length=150, verbose_name="Título")),
                ("mensagem", models.CharField(max_length=255)),
                (
                    "severidade",
                    models.CharField(
                        choices=[("info", "Informação"), ("warning", "Aviso"), ("error", "Erro"), ("success", "Sucesso")],
                        default="info",
                        max_length=10,
                    ),
                ),
                ("lido", models.BooleanField(default=False)),
                ("criado_em", models.DateTimeField(default=django.utils.timezone.now)),
                ("expira_em", models.DateTimeField(blank=True, null=True)),
                (
                    "caixa",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="alertas",
                        to="financeiro.caixa",
                    ),
                ),
                (
                    "conta",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="alertas",
                        to="financeiro.conta",
                    ),
                ),
                (
                    "transacao",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="alertas",
                        to="financeiro.transacao",
                    ),
                ),
            ],
            options={
                "verbose_name": "Alerta financeiro",
                "verbose_name_plural": "Alertas financeiros",
                "ordering": ["lido", "-criado_em"],
            },
        ),
        migrations.CreateModel(
            name="DocumentoFiscal",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "tipo",
                    models.CharField(
                        choices=[
                            ("nfe", "NF-e"),
                            ("receipt", "Recibo"),
                            ("invoice", "Fatura"),
                            ("tax_document", "Documento fiscal"),
                        ],
                        max_length=15,
                    ),
                ),
                ("numero", models.PositiveIntegerField(unique=True, verbose_name="Número")),
                ("serie", models.CharField(default="1", max_length=5, verbose_name="Série")),
                ("data", models.DateField(default=django.utils.timezone.localdate)),
                ("valor", models.DecimalField(decimal_places=2, max_digits=12)),
                ("cliente", models.CharField(blank=True, max_length=150)),
                ("fornecedor", models.CharField(blank=True, max_length=150)),
                ("descricao", models.CharField(max_length=255, verbose_name="Descrição")),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Rascunho"), ("issued", "Emitido"), ("cancelled", "Cancelado")],
                        default="issued",
                        max_length=10,
                    ),
                ),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Documento fiscal",
                "verbose_name_plural": "Documentos fiscais",
                "ordering": ["-numero"],
            },
        ),
        migrations.CreateModel(
            name="ObrigacaoFiscal",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("regime", models.CharField(max_length=20)),
                ("nome", models.CharField(max_length=80)),
                ("vencimento", models.DateField()),
                ("valor", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pendente"), ("paid", "Paga"), ("overdue", "Vencida")],
                        default="pending",
                        max_length=10,
                    ),
                ),
                ("referencia", models.CharField(help_text="MM/AAAA", max_length=7, verbose_name="Referência")),
                ("base_calculo", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="Base de cálculo")),
                ("aliquota", models.DecimalField(decimal_places=2, max_digits=5, verbose_name="Alíquota (%)")),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Obrigação fiscal",
                "verbose_name_plural": "Obrigações fiscais",
                "ordering": ["-vencimento"],
                "unique_together": {("regime", "referencia")},
            },
        ),
    ]
