from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("agenda", "0001_initial"),
        ("clientes", "0001_initial"),
        ("servicos", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Agendamento",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome_cliente", models.CharField(max_length=150, verbose_name="Nome do cliente")),
                ("telefone_cliente", models.CharField(blank=True, max_length=20, verbose_name="Telefone do cliente")),
                ("email_cliente", models.EmailField(blank=True, max_length=254, verbose_name="E-mail do cliente")),
                ("data", models.DateField(db_index=True)),
                ("hora_inicio", models.TimeField()),
                ("hora_fim", models.TimeField()),
                ("duracao_total", models.PositiveIntegerField(default=0, verbose_name="Duração total (min)")),
                ("preco_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDENTE", "Pendente"),
                            ("CONFIRMADO", "Confirmado"),
                            ("EM_ANDAMENTO", "Em andamento"),
                            ("CONCLUIDO", "Concluído"),
                            ("CANCELADO", "Cancelado"),
                            ("NAO_COMPARECEU", "Não compareceu"),
                        ],
                        db_index=True,
                        default="PENDENTE",
                        max_length=20,
                    ),
                ),
                ("observacoes", models.TextField(blank=True)),
                ("lembrete_enviado", models.BooleanField(default=False)),
                ("confirmacao_enviada", models.BooleanField(default=False)),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
                (
                    "cliente",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="agendamentos",
                        to="clientes.cliente",
                    ),
                ),
                (
                    "profissional",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="agendamentos",
                        to="agenda.profissional",
                    ),
                ),
                ("servicos", models.ManyToManyField(related_name="agendamentos", to="servicos.servico")),
            ],
            options={
                "verbose_name": "Agendamento",
                "verbose_name_plural": "Agendamentos",
                "ordering": ["data", "hora_inicio"],
            },
        ),
    ]
