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
            name="ReportePDF",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "tipo",
                    models.CharField(
                        choices=[
                            ("DIARIO", "Diário"),
                            ("SEMANAL", "Semanal"),
                            ("MENSAL", "Mensal"),
                            ("ANUAL", "Anual"),
                            ("PERSONALIZADO", "Personalizado"),
                        ],
                        max_length=20,
                    ),
                ),
                ("data_inicio", models.DateField()),
                ("data_fim", models.DateField()),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("arquivo", models.FileField(max_length=255, upload_to="relatorios/")),
                ("total_agendamentos", models.IntegerField(default=0)),
                ("receita_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("despesa_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                (
                    "usuario",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="relatorios_gerados",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Relatório PDF",
                "verbose_name_plural": "Relatórios PDF",
                "ordering": ["-criado_em"],
            },
        ),
    ]
