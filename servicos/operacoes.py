# servicos/operacoes.py
import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from .models import HistoricoPreco, ItemPacote, PacoteServico, Servico
from .validacao import PRECO_MAXIMO

logger = logging.getLogger(__name__)

SUFIXO_COPIA = " (Cópia)"


@transaction.atomic
def atualizar_preco(servico: Servico, novo_preco, motivo: str = "", usuario=None) -> Servico:
    """
    Altera o preço do serviço guardando o histórico.
    Os pacotes que contêm o serviço têm os preços recalculados.
    """
    novo_preco = Decimal(str(novo_preco))
    if novo_preco <= 0 or novo_preco > PRECO_MAXIMO:
        raise ValidationError("Preço deve estar entre R$ 0,01 e R$ 9.999,99.")

    HistoricoPreco.objects.create(
        servico=servico,
        preco_anterior=servico.preco,
        preco_novo=novo_preco,
        motivo=motivo,
        alterado_por=usuario if usuario and usuario.is_authenticated else None,
        alterado_em=timezone.now(),
    )
    anterior = servico.preco
    servico.preco = novo_preco
    servico.save(update_fields=["preco", "atualizado_em"])

    for pacote in PacoteServico.objects.filter(itens__servico=servico).distinct():
        pacote.recalcular_precos()

    logger.info("Preço de %s alterado de %s para %s", servico.nome, anterior, novo_preco)
    return servico


@transaction.atomic
def duplicar_servico(servico: Servico) -> Servico:
    """Cópia sem histórico de preços e com as métricas de uso zeradas."""
    profissionais = list(servico.profissionais.all())

    copia = Servico.objects.create(
        nome=(servico.nome + SUFIXO_COPIA)[:50],
        descricao=servico.descricao,
        preco=servico.preco,
        duracao=servico.duracao,
        categoria=servico.categoria,
        ativo=servico.ativo,
        imagem=servico.imagem,
        requisitos=list(servico.requisitos),
        contraindicacoes=list(servico.contraindicacoes),
        cuidados_pos=list(servico.cuidados_pos),
        criado_por=servico.criado_por,
        avaliacao_media=servico.avaliacao_media,
        ranking_popularidade=servico.ranking_popularidade,
        taxa_conversao=servico.taxa_conversao,
    )
    copia.profissionais.set(profissionais)
    logger.info("Serviço %s duplicado como %s", servico.pk, copia.pk)
    return copia


@transaction.atomic
def duplicar_pacote(pacote: PacoteServico) -> PacoteServico:
    """Cópia com os mesmos itens e as métricas de venda zeradas."""
    copia = PacoteServico.objects.create(
        nome=(pacote.nome + SUFIXO_COPIA)[:100],
        descricao=pacote.descricao,
        preco_original=pacote.preco_original,
        desconto_percentual=pacote.desconto_percentual,
        preco_final=pacote.preco_final,
        validade_dias=pacote.validade_dias,
        limite_uso=pacote.limite_uso,
        ativo=pacote.ativo,
        data_inicio=pacote.data_inicio,
        data_fim=pacote.data_fim,
        antecedencia_minima_horas=pacote.antecedencia_minima_horas,
        dias_permitidos=list(pacote.dias_permitidos),
        avaliacao_media=pacote.avaliacao_media,
        taxa_conversao=pacote.taxa_conversao,
        ranking_popularidade=pacote.ranking_popularidade,
    )
    for item in pacote.itens.all():
        novo = ItemPacote.objects.create(
            pacote=copia,
            servico=item.servico,
            obrigatorio=item.obrigatorio,
            pode_substituir=item.pode_substituir,
        )
        novo.opcoes_substituicao.set(item.opcoes_substituicao.all())

    logger.info("Pacote %s duplicado como %s", pacote.pk, copia.pk)
    return copia


@transaction.atomic
def salvar_itens_pacote(pacote: PacoteServico, servicos) -> PacoteServico:
    """Substitui os itens do pacote e recalcula os preços."""
    ids = [s.pk for s in servicos]
    pacote.itens.exclude(servico_id__in=ids).delete()
    existentes = set(pacote.itens.values_list("servico_id", flat=True))
    for servico in servicos:
        if servico.pk not in existentes:
            ItemPacote.objects.create(pacote=pacote, servico=servico)
    pacote.recalcular_precos()
    return pacote
