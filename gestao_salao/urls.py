"""
URL configuration for gestao_salao project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

# gestao_salao/urls.py
from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    path("admin/", admin.site.urls),

    # Auth
    path("", include("accounts.urls")),

    # Painel principal
    path("", include("painel.urls")),

    # Módulos
    path("agenda/", include("agenda.urls")),

    path("clientes/", include("clientes.urls")),

    path("servicos/", include("servicos.urls")),

    path("financeiro/", include("financeiro.urls")),

    path("relatorios/", include("relatorios.urls")),

    path("configuracao/", include("configuracao.urls")),
]
