from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("agenda", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Servico",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=50)),
                ("descricao", models.TextField(max_length=1000, verbose_name="Descrição")),
                ("preco", models.DecimalField(decimal_places=2, max_digits=7, verbose_name="Preço")),
                ("duracao", models.PositiveIntegerField(verbose_name="Duração (min)")),
                (
                    "categoria",
                    models.CharField(
                        choices=[
                            ("corte", "Corte"),
                            ("barba", "Barba"),
                            ("quimica", "Química"),
                            ("estetica", "Estética"),
                            ("tratamento", "Tratamento"),
                        ],
                        default="corte",
                        max_length=12,
                    ),
                ),
                ("ativo", models.BooleanField(default=True)),
                ("imagem", models.URLField(blank=True)),
                ("requisitos", models.JSONField(blank=True, default=list)),
                ("contraindicacoes", models.JSONField(blank=True, default=list, verbose_name="Contraindicações")),
                ("cuidados_pos", models.JSONField(blank=True, default=list, verbose_name="Cuidados pós-serviço")),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
                ("total_agendamentos", models.PositiveIntegerField(default=0)),
                ("receita_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("avaliacao_media", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=3)),
                ("total_avaliacoes", models.PositiveIntegerField(default=0)),
                ("ranking_popularidade", models.PositiveIntegerField(default=0)),
                ("ultimo_agendamento", models.DateTimeField(blank=True, null=True)),
                ("agendamentos_mes", models.PositiveIntegerField(default=0)),
                ("receita_mes", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("taxa_conversao", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5)),
                (
                    "criado_por",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="servicos_criados",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "profissionais",
                    models.ManyToManyField(
                        blank=True,
                        related_name="servicos",
                        to="agenda.profissional",
                        verbose_name="Profissionais habilitados",
                    ),
                ),
            ],
            options={
                "verbose_name": "Serviço",
                "verbose_name_plural": "Serviços",
                "ordering": ["categoria", "nome"],
            },
        ),
        migrations.CreateModel(
            name="HistoricoPreco",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("preco_anterior", models.DecimalField(decimal_places=2, max_digits=7)),
                ("preco_novo", models.DecimalField(decimal_places=2, max_digits=7)),
                ("motivo", models.CharField(blank=True, max_length=200)),
                ("alterado_em", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "alterado_por",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="alteracoes_preco",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "servico",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="historico_precos",
                        to="servicos.servico",
                    ),
                ),
            ],
            options={
                "verbose_name": "Histórico de preço",
                "verbose_name_plural": "Histórico de preços",
                "ordering": ["-alterado_em"],
            },
        ),
        migrations.CreateModel(
            name="PacoteServico",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=100)),
                ("descricao", models.TextField(blank=True, verbose_name="Descrição")),
                ("preco_original", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=9)),
                (
                    "desconto_percentual",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("10.00"), max_digits=5, verbose_name="Desconto (%)"
                    ),
                ),
                ("preco_final", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=9)),
                ("validade_dias", models.PositiveIntegerField(default=30, verbose_name="Validade (dias)")),
                ("limite_uso", models.PositiveIntegerField(default=1, verbose_name="Limite de uso")),
                ("ativo", models.BooleanField(default=True)),
                ("data_inicio", models.DateField(blank=True, null=True)),
                ("data_fim", models.DateField(blank=True, null=True)),
                (
                    "antecedencia_minima_horas",
                    models.PositiveIntegerField(blank=True, null=True, verbose_name="Antecedência mínima (h)"),
                ),
                (
                    "dias_permitidos",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Dias da semana permitidos (0=segunda ... 6=domingo).",
                    ),
                ),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
                ("total_vendas", models.PositiveIntegerField(default=0)),
                ("receita_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("avaliacao_media", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=3)),
                ("taxa_conversao", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5)),
                ("ranking_popularidade", models.PositiveIntegerField(default=0)),
                ("ultima_venda", models.DateTimeField(blank=True, null=True)),
                ("vendas_mes", models.PositiveIntegerField(default=0)),
                ("receita_mes", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
            ],
            options={
                "verbose_name": "Pacote de serviços",
                "verbose_name_plural": "Pacotes de serviços",
                "ordering": ["nome"],
            },
        ),
        migrations.CreateModel(
            name="ItemPacote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("obrigatorio", models.BooleanField(default=True)),
                ("pode_substituir", models.BooleanField(default=False)),
                (
                    "opcoes_substituicao",
                    models.ManyToManyField(
                        blank=True,
                        related_name="substituicoes_pacote",
                        to="servicos.servico",
                    ),
                ),
                (
                    "pacote",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="itens",
                        to="servicos.pacoteservico",
                    ),
                ),
                (
                    "servico",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="itens_pacote",
                        to="servicos.servico",
                    ),
                ),
            ],
            options={
                "verbose_name": "Item do pacote",
                "verbose_name_plural": "Itens do pacote",
                "unique_together": {("pacote", "servico")},
            },
        ),
    ]
