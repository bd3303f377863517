import logging
from datetime import date, time, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from agenda.models import Agendamento, HorarioTrabalho, Profissional
from agenda.operacoes import agendar
from clientes.models import Cliente, NivelFidelidade, TemplateComunicacao
from configuracao.models import ConfiguracaoGeral
from financeiro.caixa import registrar_transacao
from financeiro.models import CategoriaTransacao, Conta, MetodoPagamento, TipoLancamento
from servicos.models import HistoricoPreco, ItemPacote, PacoteServico, Servico

logger = logging.getLogger(__name__)

PROFISSIONAIS = [
    {
        "nome": "João Silva",
        "email": "joao@barbearia.com",
        "telefone": "11988887777",
        "especialidades": ["Corte tradicional", "Barba", "Bigode"],
        "avaliacao": Decimal("4.8"),
        "comissao": Decimal("0.60"),
        "expediente": [(time(8), time(18))] * 5 + [(time(8), time(16))],
    },
    {
        "nome": "Pedro Santos",
        "email": "pedro@barbearia.com",
        "telefone": "11977776666",
        "especialidades": ["Corte moderno", "Fade", "Sobrancelha"],
        "avaliacao": Decimal("4.6"),
        "comissao": Decimal("0.50"),
        "expediente": [(time(9), time(19))] * 5 + [(time(8), time(16))],
    },
]

# (dados, profissionais, métricas)
SERVICOS = [
    (
        {
            "nome": "Corte Masculino Tradicional",
            "descricao": "Corte clássico masculino com acabamento na navalha e finalização.",
            "preco": Decimal("35.00"),
            "duracao": 30,
            "categoria": Servico.Categoria.CORTE,
            "requisitos": ["Cabelo limpo"],
            "contraindicacoes": [],
            "cuidados_pos": ["Evitar bonés apertados nas primeiras horas"],
        },
        ["João Silva", "Pedro Santos"],
        (450, "15750.00", "4.8", 380, 1, 85, "2975.00", "78.5"),
    ),
    (
        {
            "nome": "Barba Completa",
            "descricao": "Aparo, desenho e acabamento da barba com toalha quente.",
            "preco": Decimal("25.00"),
            "duracao": 25,
            "categoria": Servico.Categoria.BARBA,
            "requisitos": [],
            "contraindicacoes": ["Lesões de pele no rosto"],
            "cuidados_pos": ["Hidratar a pele após o barbear"],
        },
        ["João Silva"],
        (320, "8000.00", "4.9", 280, 2, 65, "1625.00", "82.1"),
    ),
    (
        {
            "nome": "Sobrancelha Masculina",
            "descricao": "Design de sobrancelha masculina com pinça e navalha.",
            "preco": Decimal("15.00"),
            "duracao": 15,
            "categoria": Servico.Categoria.ESTETICA,
            "requisitos": [],
            "contraindicacoes": ["Irritação na região dos olhos"],
            "cuidados_pos": [],
        },
        ["Pedro Santos"],
        (180, "2700.00", "4.6", 150, 4, 35, "525.00", "65.8"),
    ),
    (
        {
            "nome": "Lavagem + Hidratação",
            "descricao": "Lavagem com shampoo específico e hidratação profunda dos fios.",
            "preco": Decimal("20.00"),
            "duracao": 20,
            "categoria": Servico.Categoria.TRATAMENTO,
            "requisitos": [],
            "contraindicacoes": ["Alergia a componentes da máscara"],
            "cuidados_pos": ["Evitar secador muito quente no dia"],
        },
        ["João Silva", "Pedro Santos"],
        (220, "4400.00", "4.7", 180, 3, 45, "900.00", "71.2"),
    ),
]

# (dados, serviços, métricas)
PACOTES = [
    (
        {
            "nome": "Combo Completo",
            "descricao": "Corte, barba e sobrancelha com desconto especial.",
            "desconto_percentual": Decimal("20"),
            "validade_dias": 30,
            "limite_uso": 1,
            "antecedencia_minima_horas": 2,
            "dias_permitidos": [0, 1, 2, 3, 4, 5],
        },
        ["Corte Masculino Tradicional", "Barba Completa", "Sobrancelha Masculina"],
        (85, "5100.00", "4.8", "15.2", 1, 18, "1080.00"),
    ),
    (
        {
            "nome": "Duo Clássico",
            "descricao": "Corte tradicional e barba completa.",
            "desconto_percentual": Decimal("15"),
            "validade_dias": 45,
            "limite_uso": 2,
        },
        ["Corte Masculino Tradicional", "Barba Completa"],
        (120, "6120.00", "4.9", "22.8", 2, 25, "1275.00"),
    ),
]

CLIENTES = [
    {
        "nome_completo": "Maria Silva Santos",
        "telefone": "11987654321",
        "email": "maria.silva@email.com",
        "data_nascimento": date(1985, 3, 15),
        "endereco_rua": "Rua das Flores",
        "endereco_numero": "123",
        "endereco_complemento": "Apto 45",
        "endereco_bairro": "Centro",
        "endereco_cidade": "São Paulo",
        "endereco_estado": "SP",
        "endereco_cep": "01234-567",
        "cpf": "123.456.789-00",
        "alergias": ["Níquel"],
        "frequencia_preferida": Cliente.Frequencia.MENSAL,
        "pontos_atuais": 450,
        "total_pontos_ganhos": 1200,
        "total_pontos_resgatados": 750,
        "nivel_fidelidade": NivelFidelidade.PRATA,
        "pontos_proximo_nivel": 550,
        "total_gasto": Decimal("1200.00"),
        "quantidade_visitas": 22,
        "ultima_visita": date(2024, 1, 10),
        "lgpd_consentimento_dados": True,
        "lgpd_consentimento_marketing": True,
        "lgpd_periodo_retencao": 5,
    },
    {
        "nome_completo": "Ana Paula Oliveira",
        "telefone": "11976543210",
        "email": "ana.paula@email.com",
        "data_nascimento": date(1990, 7, 22),
        "alergias": ["Parafenilenodiamina"],
        "restricoes": ["Não usar produtos com amônia"],
        "frequencia_preferida": Cliente.Frequencia.QUINZENAL,
        "pontos_atuais": 180,
        "total_pontos_ganhos": 380,
        "total_pontos_resgatados": 200,
        "nivel_fidelidade": NivelFidelidade.BRONZE,
        "pontos_proximo_nivel": 320,
        "total_gasto": Decimal("380.00"),
        "quantidade_visitas": 8,
        "lgpd_consentimento_dados": True,
        "lgpd_periodo_retencao": 3,
    },
]

TEMPLATES = [
    {
        "nome": "Boas-vindas",
        "tipo": TemplateComunicacao.Tipo.BOAS_VINDAS,
        "conteudo": "Olá {{nome}}! Bem-vinda ao nosso salão!",
        "variaveis": ["nome"],
    },
    {
        "nome": "Lembrete de Agendamento",
        "tipo": TemplateComunicacao.Tipo.LEMBRETE,
        "conteudo": "Olá {{nome}}! Lembramos do seu horário às {{horario}} com {{profissional}}.",
        "variaveis": ["nome", "horario", "profissional"],
    },
    {
        "nome": "Aniversário",
        "tipo": TemplateComunicacao.Tipo.ANIVERSARIO,
        "conteudo": "Feliz aniversário, {{nome}}! Ganhe 20% de desconto no seu próximo serviço.",
        "variaveis": ["nome"],
    },
]

CATEGORIAS = [
    ("Serviços", TipoLancamento.RECEITA, "#10B981", ["Corte", "Barba", "Tratamentos"]),
    ("Produtos", TipoLancamento.RECEITA, "#3B82F6", ["Cosméticos", "Acessórios"]),
    ("Aluguel", TipoLancamento.DESPESA, "#EF4444", []),
    ("Salários", TipoLancamento.DESPESA, "#F59E0B", []),
    ("Materiais", TipoLancamento.DESPESA, "#8B5CF6", []),
]

METODOS = [
    ("Dinheiro", MetodoPagamento.Tipo.DINHEIRO, Decimal("0")),
    ("Cartão Débito", MetodoPagamento.Tipo.CARTAO, Decimal("2.5")),
    ("Cartão Crédito", MetodoPagamento.Tipo.CARTAO, Decimal("3.5")),
    ("PIX", MetodoPagamento.Tipo.PIX, Decimal("0")),
]


class Command(BaseCommand):
    help = "Carrega dados de demonstração (profissionais, serviços, clientes e financeiro)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--admin",
            action="store_true",
            help="Cria também o usuário admin/admin123 (papel ADMIN).",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        ConfiguracaoGeral.get_solo()

        if options["admin"]:
            self._criar_admin()

        profissionais = self._carregar_profissionais()
        servicos = self._carregar_servicos(profissionais)
        self._carregar_pacotes(servicos)
        self._carregar_clientes()
        self._carregar_templates()
        self._carregar_financeiro()
        self._carregar_agendamento(profissionais, servicos)

        logger.info("Dados de demonstração carregados")
        self.stdout.write(self.style.SUCCESS("Dados de demonstração carregados."))

    def _criar_admin(self):
        User = get_user_model()
        if User.objects.filter(username="admin").exists():
            return
        User.objects.create_superuser(
            username="admin",
            email="admin@salao.local",
            password="admin123",
            role=User.Roles.ADMIN,
        )
        self.stdout.write("Usuário admin criado (senha: admin123).")

    def _carregar_profissionais(self):
        profissionais = {}
        for dados in PROFISSIONAIS:
            dados = dict(dados)
            expediente = dados.pop("expediente")
            profissional, _ = Profissional.objects.get_or_create(nome=dados["nome"], defaults=dados)
            for dia, (inicio, fim) in enumerate(expediente):
                HorarioTrabalho.objects.get_or_create(
                    profissional=profissional,
                    dia_semana=dia,
                    defaults={"hora_inicio": inicio, "hora_fim": fim},
                )
            HorarioTrabalho.objects.get_or_create(
                profissional=profissional,
                dia_semana=HorarioTrabalho.DiaSemana.DOMINGO,
                defaults={"hora_inicio": time(0), "hora_fim": time(0), "trabalha": False},
            )
            profissionais[profissional.nome] = profissional
        return profissionais

    def _carregar_servicos(self, profissionais):
        servicos = {}
        for dados, nomes, metricas in SERVICOS:
            agendamentos, receita, avaliacao, avaliacoes, ranking, mes, receita_mes, conversao = metricas
            defaults = dict(
                dados,
                total_agendamentos=agendamentos,
                receita_total=Decimal(receita),
                avaliacao_media=Decimal(avaliacao),
                total_avaliacoes=avaliacoes,
                ranking_popularidade=ranking,
                agendamentos_mes=mes,
                receita_mes=Decimal(receita_mes),
                taxa_conversao=Decimal(conversao),
            )
            servico, criado = Servico.objects.get_or_create(nome=dados["nome"], defaults=defaults)
            if criado:
                servico.profissionais.set([profissionais[n] for n in nomes])
            servicos[servico.nome] = servico

        corte = servicos["Corte Masculino Tradicional"]
        if not corte.historico_precos.exists():
            HistoricoPreco.objects.create(
                servico=corte,
                preco_anterior=Decimal("30.00"),
                preco_novo=Decimal("35.00"),
                motivo="Ajuste de inflação",
            )
        return servicos

    def _carregar_pacotes(self, servicos):
        for dados, nomes, metricas in PACOTES:
            vendas, receita, avaliacao, conversao, ranking, vendas_mes, receita_mes = metricas
            pacote, criado = PacoteServico.objects.get_or_create(
                nome=dados["nome"],
                defaults=dict(
                    dados,
                    total_vendas=vendas,
                    receita_total=Decimal(receita),
                    avaliacao_media=Decimal(avaliacao),
                    taxa_conversao=Decimal(conversao),
                    ranking_popularidade=ranking,
                    vendas_mes=vendas_mes,
                    receita_mes=Decimal(receita_mes),
                ),
            )
            if criado:
                for nome in nomes:
                    ItemPacote.objects.create(pacote=pacote, servico=servicos[nome])
                pacote.recalcular_precos()

    def _carregar_clientes(self):
        for dados in CLIENTES:
            cliente, criado = Cliente.objects.get_or_create(email=dados["email"], defaults=dados)
            if criado:
                cliente.registrar_consentimento(
                    dados.get("lgpd_consentimento_dados", False),
                    dados.get("lgpd_consentimento_marketing", False),
                )
                cliente.save()

    def _carregar_templates(self):
        for dados in TEMPLATES:
            TemplateComunicacao.objects.get_or_create(nome=dados["nome"], defaults=dados)

    def _carregar_financeiro(self):
        categorias = {}
        for nome, tipo, cor, subcategorias in CATEGORIAS:
            categorias[nome], _ = CategoriaTransacao.objects.get_or_create(
                nome=nome,
                tipo=tipo,
                defaults={"cor": cor, "subcategorias": subcategorias},
            )

        metodos = {}
        for nome, tipo, taxa in METODOS:
            metodos[nome], _ = MetodoPagamento.objects.get_or_create(
                nome=nome, defaults={"tipo": tipo, "taxa": taxa}
            )

        hoje = timezone.localdate()
        if not categorias["Serviços"].transacoes.exists():
            registrar_transacao(
                tipo=TipoLancamento.RECEITA,
                categoria=categorias["Serviços"],
                subcategoria="Corte",
                valor=Decimal("35.00"),
                descricao="Corte de cabelo - João Silva",
                metodo_pagamento=metodos["Dinheiro"],
                referencia="AGD001",
                data=hoje,
            )
        if not categorias["Aluguel"].transacoes.exists():
            registrar_transacao(
                tipo=TipoLancamento.DESPESA,
                categoria=categorias["Aluguel"],
                valor=Decimal("1200.00"),
                descricao="Aluguel do salão",
                metodo_pagamento=metodos["PIX"],
                data=hoje,
            )

        Conta.objects.get_or_create(
            descricao="Aluguel do salão",
            tipo=Conta.Tipo.PAGAR,
            defaults={
                "categoria": "Aluguel",
                "valor": Decimal("1200.00"),
                "vencimento": hoje + timedelta(days=3),
                "recorrente": True,
                "frequencia": Conta.Frequencia.MENSAL,
                "fornecedor": "Imobiliária Centro",
            },
        )

    def _carregar_agendamento(self, profissionais, servicos):
        joao = profissionais["João Silva"]
        hoje = timezone.localdate()
        if Agendamento.objects.filter(profissional=joao, data=hoje, hora_inicio=time(10)).exists():
            return
        horario = joao.horario_do_dia(hoje)
        if horario is None or not horario.trabalha:
            self.stdout.write("João Silva não atende hoje; agendamento de exemplo ignorado.")
            return
        agendar(
            profissional=joao,
            servicos=[servicos["Corte Masculino Tradicional"], servicos["Barba Completa"]],
            data=hoje,
            hora_inicio=time(10),
            nome_cliente="Carlos Oliveira",
            telefone_cliente="11999998888",
            status=Agendamento.Status.CONFIRMADO,
        )
