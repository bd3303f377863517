# accounts/permissions.py
from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import redirect

from .utils import _is_admin


class AdminRequiredMixin(LoginRequiredMixin):
    """
    Restringe a view à administração do salão (superuser ou papel ADMIN).
    Equipe autenticada sem esse papel volta para o painel.
    """
    login_url = "accounts:login"

    def dispatch(self, request, *args, **kwargs):
        if request.user.is_authenticated and not _is_admin(request.user):
            messages.error(
                request,
                "Você não tem permissão para acessar esta área administrativa."
            )
            return redirect("painel:dashboard")
        return super().dispatch(request, *args, **kwargs)
