from decimal import Decimal

from django.conf import settings
from django.db import models


class ReportePDF(models.Model):
    class Tipo(models.TextChoices):
        DIARIO = "DIARIO", "Diário"
        SEMANAL = "SEMANAL", "Semanal"
        MENSAL = "MENSAL", "Mensal"
        ANUAL = "ANUAL", "Anual"
        PERSONALIZADO = "PERSONALIZADO", "Personalizado"

    tipo = models.CharField(max_length=20, choices=Tipo.choices)
    data_inicio = models.DateField()
    data_fim = models.DateField()
    criado_em = models.DateTimeField(auto_now_add=True)

    arquivo = models.FileField(upload_to="relatorios/", max_length=255)

    total_agendamentos = models.IntegerField(default=0)
    receita_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    despesa_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="relatorios_gerados",
    )

    class Meta:
        ordering = ["-criado_em"]
        verbose_name = "Relatório PDF"
        verbose_name_plural = "Relatórios PDF"

    def __str__(self):
        return f"{self.get_tipo_display()} ({self.data_inicio:%d/%m/%Y} a {self.data_fim:%d/%m/%Y})"
