from django.shortcuts import render
from django.views import View

from accounts.permissions import AdminRequiredMixin

from .models import ConfiguracaoGeral
from .forms import ConfiguracaoGeralForm


class ConfiguracaoGeralView(AdminRequiredMixin, View):
    """
    Tela única de configuração geral do sistema.
    """

    def get(self, request, *args, **kwargs):
        config = ConfiguracaoGeral.get_solo()
        form = ConfiguracaoGeralForm(instance=config)
        context = {
            "form": form,
            "config": config,
            "salvo": False,
            "active_menu": "configuracao",
        }
        return render(request, "configuracao/configuracao_geral.html", context)

    def post(self, request, *args, **kwargs):
        config = ConfiguracaoGeral.get_solo()
        form = ConfiguracaoGeralForm(request.POST, instance=config)
        salvo = False
        if form.is_valid():
            form.save()
            salvo = True
        context = {
            "form": form,
            "config": config,
            "salvo": salvo,
            "active_menu": "configuracao",
        }
        return render(
            request,
            "configuracao/configuracao_geral.html",
            context,
            status=200 if salvo else 400,
        )
