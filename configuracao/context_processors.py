# configuracao/context_processors.py
from django.db import DatabaseError

from .models import ConfiguracaoGeral


def configuracao_geral(request):
    """
    Devolve a configuração geral do sistema na variável
    'config_geral' para todos os templates.
    """
    try:
        config = ConfiguracaoGeral.get_solo()
    except DatabaseError:
        config = None
    return {
        "config_geral": config
    }
