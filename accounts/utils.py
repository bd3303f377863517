from django.shortcuts import redirect
from django.urls import reverse, NoReverseMatch

ROLE_ADMIN = "ADMIN"

# Papéis tratados como administração além do próprio ADMIN
PAPEIS_ADMINISTRATIVOS = {ROLE_ADMIN, "GERENTE", "MANAGER"}


def _papel(user) -> str:
    return (getattr(user, "role", "") or "").upper()


def _url_ou_padrao(nome: str, padrao: str = "/") -> str:
    try:
        return reverse(nome)
    except NoReverseMatch:
        return padrao


def _is_admin(user) -> bool:
    return bool(getattr(user, "is_superuser", False) or _papel(user) in PAPEIS_ADMINISTRATIVOS)


def redirect_by_role(user):
    """Administração vai para o painel; equipe vai direto para a agenda."""
    if _is_admin(user):
        return redirect(_url_ou_padrao("painel:dashboard"))
    return redirect(_url_ou_padrao("agenda:calendario", "/agenda/"))
