import io
import logging

from django.template.loader import get_template
from xhtml2pdf import pisa

logger = logging.getLogger(__name__)


def render_to_pdf(template_src, context_dict=None):
    """
    Renderiza um template HTML em PDF e devolve os bytes.
    Em caso de erro, devolve None.
    """
    context_dict = context_dict or {}
    html = get_template(template_src).render(context_dict)

    result = io.BytesIO()
    pdf = pisa.CreatePDF(html, dest=result, encoding="utf-8")

    if pdf.err:
        logger.error("Falha ao gerar PDF a partir de %s (%s erros)", template_src, pdf.err)
        return None

    return result.getvalue()
