import logging

from django.contrib import messages
from django.contrib.auth import authenticate, login, logout, get_user_model
from django.shortcuts import render, redirect
from django.utils.decorators import method_decorator
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View
from django.views.decorators.csrf import csrf_protect

from .utils import redirect_by_role

User = get_user_model()

logger = logging.getLogger(__name__)


def _autenticar(request, identificador, senha):
    """Aceita nome de usuário ou e-mail."""
    user = authenticate(request, username=identificador, password=senha)
    if user is not None or "@" not in identificador:
        return user

    username = (
        User.objects.filter(email__iexact=identificador)
        .values_list("username", flat=True)
        .first()
    )
    if username is None:
        return None
    return authenticate(request, username=username, password=senha)


@method_decorator(csrf_protect, name="dispatch")
class CustomLoginView(View):
    template_name = "accounts/login.html"

    def _formulario(self, request, proximo, erro=None):
        if erro:
            messages.error(request, erro)
        return render(request, self.template_name, {"next": proximo})

    def get(self, request, *args, **kwargs):
        # Com sessão ativa o formulário continua disponível para trocar de usuário
        return self._formulario(request, request.GET.get("next", ""))

    def post(self, request, *args, **kwargs):
        identificador = (request.POST.get("username") or request.POST.get("email") or "").strip()
        senha = (request.POST.get("password") or "").strip()
        proximo = (request.POST.get("next") or request.GET.get("next") or "").strip()

        user = _autenticar(request, identificador, senha)
        if user is None:
            logger.info("Falha de login para %s", identificador)
            return self._formulario(request, proximo, "Credenciais inválidas.")
        if not user.is_active:
            return self._formulario(request, proximo, "Sua conta está inativa.")

        login(request, user)
        logger.info("Login de %s (%s)", user.username, user.role)

        if proximo and url_has_allowed_host_and_scheme(proximo, allowed_hosts={request.get_host()}):
            return redirect(proximo)
        return redirect_by_role(user)


def logout_view(request):
    if request.user.is_authenticated:
        logger.info("Logout de %s", request.user.username)
    logout(request)
    return redirect("accounts:login")
