# clientes/exportacao.py
import csv
import io
import json
import logging

from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone

from .models import SolicitacaoLGPD

logger = logging.getLogger(__name__)

CABECALHO_CSV = ["Nome", "Email", "Telefone", "Última Visita", "Total Gasto", "Pontos", "Nível"]
MOTIVO_PORTABILIDADE = "Solicitação de portabilidade de dados (LGPD)"


def nome_arquivo_csv(data=None) -> str:
    data = data or timezone.localdate()
    return f"clientes-{data.isoformat()}.csv"


def exportar_clientes_csv(clientes) -> str:
    """CSV da listagem filtrada de clientes."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CABECALHO_CSV)
    for c in clientes:
        writer.writerow([
            c.nome_completo,
            c.email,
            c.telefone,
            c.ultima_visita.strftime("%d/%m/%Y") if c.ultima_visita else "Nunca",
            str(c.total_gasto),
            str(c.pontos_atuais),
            c.nivel_fidelidade,
        ])
    return buffer.getvalue()


def dados_cliente(cliente) -> dict:
    """Perfil completo do cliente, incluindo históricos, para portabilidade."""
    return {
        "id": cliente.pk,
        "nomeCompleto": cliente.nome_completo,
        "telefone": cliente.telefone,
        "email": cliente.email,
        "dataNascimento": cliente.data_nascimento,
        "dataAniversario": cliente.data_aniversario,
        "cpf": cliente.cpf,
        "foto": cliente.foto,
        "endereco": {
            "rua": cliente.endereco_rua,
            "numero": cliente.endereco_numero,
            "complemento": cliente.endereco_complemento,
            "bairro": cliente.endereco_bairro,
            "cidade": cliente.endereco_cidade,
            "estado": cliente.endereco_estado,
            "cep": cliente.endereco_cep,
        },
        "preferencias": {
            "servicosFavoritos": [s.nome for s in cliente.servicos_favoritos.all()],
            "profissionalPreferido": (
                cliente.profissional_preferido.nome if cliente.profissional_preferido else None
            ),
            "observacoes": cliente.observacoes,
            "alergias": cliente.alergias,
            "restricoes": cliente.restricoes,
            "frequencia": cliente.frequencia_preferida,
            "frequenciaDias": cliente.frequencia_dias,
            "horarios": cliente.horarios_preferidos,
            "dias": cliente.dias_preferidos,
        },
        "comunicacao": {
            "whatsapp": cliente.aceita_whatsapp,
            "email": cliente.aceita_email,
            "sms": cliente.aceita_sms,
            "telefone": cliente.aceita_telefone,
            "lembrete": cliente.lembrete_preferencia,
            "aniversario": cliente.mensagens_aniversario,
            "promocionais": cliente.mensagens_promocionais,
        },
        "fidelidade": {
            "pontosAtuais": cliente.pontos_atuais,
            "totalGanho": cliente.total_pontos_ganhos,
            "totalResgatado": cliente.total_pontos_resgatados,
            "nivel": cliente.nivel_fidelidade,
            "pontosProximoNivel": cliente.pontos_proximo_nivel,
            "historico": [
                {
                    "tipo": m.tipo,
                    "pontos": m.pontos,
                    "descricao": m.descricao,
                    "data": m.criado_em,
                }
                for m in cliente.movimentos_pontos.all()
            ],
        },
        "atendimentos": [
            {
                "servico": a.servico_nome,
                "profissional": a.profissional_nome,
                "data": a.data,
                "precoFinal": a.preco_final,
                "status": a.status,
            }
            for a in cliente.atendimentos.all()
        ],
        "lgpd": {
            "consentimentoDados": cliente.lgpd_consentimento_dados,
            "consentimentoMarketing": cliente.lgpd_consentimento_marketing,
            "periodoRetencaoAnos": cliente.lgpd_periodo_retencao,
            "dataConsentimento": cliente.lgpd_data_consentimento,
            "atualizadoEm": cliente.lgpd_atualizado_em,
        },
        "totalGasto": cliente.total_gasto,
        "quantidadeVisitas": cliente.quantidade_visitas,
        "ultimaVisita": cliente.ultima_visita,
        "status": cliente.status,
        "criadoEm": cliente.criado_em,
        "atualizadoEm": cliente.atualizado_em,
    }


def exportar_dados_cliente(cliente) -> str:
    """
    JSON de portabilidade (LGPD). A exportação fica registrada como
    solicitação de portabilidade concluída.
    """
    agora = timezone.now()
    dados = {
        **dados_cliente(cliente),
        "exportedAt": agora.isoformat(),
        "exportReason": MOTIVO_PORTABILIDADE,
    }

    SolicitacaoLGPD.objects.create(
        cliente=cliente,
        tipo=SolicitacaoLGPD.Tipo.PORTABILIDADE,
        status=SolicitacaoLGPD.Status.CONCLUIDA,
        motivo=MOTIVO_PORTABILIDADE,
        solicitado_em=agora,
        processado_em=agora,
    )
    logger.info("Dados do cliente %s exportados (LGPD)", cliente.pk)
    return json.dumps(dados, cls=DjangoJSONEncoder, ensure_ascii=False, indent=2)


def nome_arquivo_lgpd(cliente) -> str:
    return f"dados-cliente-{'-'.join(cliente.nome_completo.lower().split())}.json"
