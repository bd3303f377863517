from django.contrib import admin

from .models import ReportePDF


@admin.register(ReportePDF)
class ReportePDFAdmin(admin.ModelAdmin):
    list_display = ("tipo", "data_inicio", "data_fim", "total_agendamentos", "receita_total", "usuario", "criado_em")
    list_filter = ("tipo",)
