from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Profissional",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=120)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("telefone", models.CharField(blank=True, max_length=20)),
                ("avatar", models.URLField(blank=True)),
                ("especialidades", models.JSONField(blank=True, default=list)),
                ("avaliacao", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=3)),
                (
                    "comissao",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.50"),
                        help_text="Fração do valor do serviço repassada ao profissional (0.60 = 60%).",
                        max_digits=4,
                        verbose_name="Comissão",
                    ),
                ),
                ("ativo", models.BooleanField(default=True)),
                (
                    "usuario",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="profissional",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Profissional",
                "verbose_name_plural": "Profissionais",
                "ordering": ["nome"],
            },
        ),
        migrations.CreateModel(
            name="HorarioTrabalho",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "dia_semana",
                    models.PositiveSmallIntegerField(
                        choices=[
                            (0, "Segunda-feira"),
                            (1, "Terça-feira"),
                            (2, "Quarta-feira"),
                            (3, "Quinta-feira"),
                            (4, "Sexta-feira"),
                            (5, "Sábado"),
                            (6, "Domingo"),
                        ]
                    ),
                ),
                ("hora_inicio", models.TimeField()),
                ("hora_fim", models.TimeField()),
                ("trabalha", models.BooleanField(default=True)),
                (
                    "profissional",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="horarios",
                        to="agenda.profissional",
                    ),
                ),
            ],
            options={
                "verbose_name": "Horário de trabalho",
                "verbose_name_plural": "Horários de trabalho",
                "ordering": ["profissional", "dia_semana"],
                "unique_together": {("profissional", "dia_semana")},
            },
        ),
    ]
