# clientes/comunicacao.py
import logging
import re

from django.core.exceptions import ValidationError
from django.utils import timezone

from .models import MensagemAgendada

logger = logging.getLogger(__name__)

_VARIAVEL = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def renderizar_template(conteudo: str, variaveis: dict) -> str:
    """Troca {{nome}} pelos valores; variáveis sem valor ficam como estão."""
    return _VARIAVEL.sub(
        lambda m: str(variaveis.get(m.group(1), m.group(0))),
        conteudo,
    )


def enviar_mensagem(cliente, template, variaveis=None) -> MensagemAgendada:
    """
    Registra o envio de uma mensagem para o cliente.
    O envio real (WhatsApp, e-mail, SMS) fica a cargo de um provedor externo;
    aqui apenas renderizamos, registramos e logamos.
    """
    if not template.ativo:
        raise ValidationError(f"O template '{template.nome}' está inativo.")

    variaveis = {"nome": cliente.nome_completo.split()[0], **(variaveis or {})}
    conteudo = renderizar_template(template.conteudo, variaveis)
    agora = timezone.now()

    mensagem = MensagemAgendada.objects.create(
        cliente=cliente,
        template=template,
        canal=template.canal,
        conteudo_renderizado=conteudo,
        agendada_para=agora,
        status=MensagemAgendada.Status.ENVIADA,
        enviada_em=agora,
        variaveis=variaveis,
    )
    logger.info(
        "Mensagem %s enviada via %s para %s", template.nome, template.canal, cliente
    )
    return mensagem
