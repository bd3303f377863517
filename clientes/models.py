# clientes/models.py
from decimal import Decimal

from django.db import models
from django.utils import timezone


class NivelFidelidade(models.TextChoices):
    BRONZE = "bronze", "Bronze"
    PRATA = "silver", "Prata"
    OURO = "gold", "Ouro"
    PLATINA = "platinum", "Platina"


class Cliente(models.Model):
    class Status(models.TextChoices):
        ATIVO = "active", "Ativo"
        INATIVO = "inactive", "Inativo"
        BLOQUEADO = "blocked", "Bloqueado"

    class Frequencia(models.TextChoices):
        SEMANAL = "weekly", "Semanal"
        QUINZENAL = "biweekly", "Quinzenal"
        MENSAL = "monthly", "Mensal"
        TRIMESTRAL = "quarterly", "Trimestral"
        PERSONALIZADA = "custom", "Personalizada"

    class Lembrete(models.TextChoices):
        NENHUM = "none", "Não enviar"
        UMA_HORA = "1_hour", "1 hora antes"
        DUAS_HORAS = "2_hours", "2 horas antes"
        UM_DIA = "1_day", "1 dia antes"
        DOIS_DIAS = "2_days", "2 dias antes"

    # --- Dados obrigatórios ---
    nome_completo = models.CharField("Nome completo", max_length=150)
    telefone = models.CharField("Telefone", max_length=20)
    email = models.EmailField("E-mail")
    data_nascimento = models.DateField("Data de nascimento")
    data_aniversario = models.DateField("Data comemorativa", null=True, blank=True)

    # --- Endereço (opcional) ---
    endereco_rua = models.CharField("Rua", max_length=150, blank=True)
    endereco_numero = models.CharField("Número", max_length=20, blank=True)
    endereco_complemento = models.CharField("Complemento", max_length=80, blank=True)
    endereco_bairro = models.CharField("Bairro", max_length=80, blank=True)
    endereco_cidade = models.CharField("Cidade", max_length=80, blank=True)
    endereco_estado = models.CharField("UF", max_length=2, blank=True)
    endereco_cep = models.CharField("CEP", max_length=9, blank=True)

    cpf = models.CharField("CPF", max_length=14, blank=True)
    foto = models.URLField("Foto", blank=True)

    # --- Preferências ---
    servicos_favoritos = models.ManyToManyField(
        "servicos.Servico",
        blank=True,
        related_name="clientes_favoritos",
    )
    profissional_preferido = models.ForeignKey(
        "agenda.Profissional",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="clientes_preferenciais",
    )
    observacoes = models.TextField("Observações especiais", blank=True)
    alergias = models.JSONField(default=list, blank=True)
    restricoes = models.JSONField(default=list, blank=True)
    frequencia_preferida = models.CharField(
        max_length=12,
        choices=Frequencia.choices,
        default=Frequencia.MENSAL,
    )
    frequencia_dias = models.PositiveIntegerField(null=True, blank=True)
    horarios_preferidos = models.JSONField(default=list, blank=True)
    dias_preferidos = models.JSONField(
        default=list,
        blank=True,
        help_text="Dias da semana (0 = segunda ... 6 = domingo).",
    )

    # --- Comunicação ---
    aceita_whatsapp = models.BooleanField(default=True)
    aceita_email = models.BooleanField(default=True)
    aceita_sms = models.BooleanField(default=False)
    aceita_telefone = models.BooleanField(default=False)
    lembrete_preferencia = models.CharField(
        max_length=10,
        choices=Lembrete.choices,
        default=Lembrete.UM_DIA,
    )
    mensagens_aniversario = models.BooleanField(default=True)
    mensagens_promocionais = models.BooleanField(default=False)

    # --- Programa de fidelidade ---
    pontos_atuais = models.PositiveIntegerField(default=0)
    total_pontos_ganhos = models.PositiveIntegerField(default=0)
    total_pontos_resgatados = models.PositiveIntegerField(default=0)
    nivel_fidelidade = models.CharField(
        max_length=10,
        choices=NivelFidelidade.choices,
        default=NivelFidelidade.BRONZE,
        db_index=True,
    )
    pontos_proximo_nivel = models.PositiveIntegerField(default=500)

    # --- Histórico resumido ---
    total_gasto = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    quantidade_visitas = models.PositiveIntegerField(default=0)
    ultima_visita = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.ATIVO,
        db_index=True,
    )

    # --- LGPD ---
    lgpd_consentimento_dados = models.BooleanField("Consentimento para tratamento de dados", default=False)
    lgpd_consentimento_marketing = models.BooleanField("Consentimento para marketing", default=False)
    lgpd_periodo_retencao = models.PositiveSmallIntegerField("Retenção de dados (anos)", default=5)
    lgpd_data_consentimento = models.DateTimeField(null=True, blank=True)
    lgpd_atualizado_em = models.DateTimeField(null=True, blank=True)

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["nome_completo"]
        verbose_name = "Cliente"
        verbose_name_plural = "Clientes"

    def __str__(self) -> str:
        return self.nome_completo

    @property
    def tem_alergias(self) -> bool:
        return bool(self.alergias)

    @property
    def endereco_formatado(self) -> str:
        if not self.endereco_rua:
            return ""
        partes = [f"{self.endereco_rua}, {self.endereco_numero}".strip(", ")]
        if self.endereco_complemento:
            partes.append(self.endereco_complemento)
        partes.append(" - ".join(p for p in [self.endereco_bairro, self.endereco_cidade] if p))
        if self.endereco_estado:
            partes.append(self.endereco_estado)
        if self.endereco_cep:
            partes.append(self.endereco_cep)
        return ", ".join(p for p in partes if p)

    def registrar_consentimento(self, dados: bool, marketing: bool):
        """Atualiza o consentimento LGPD mantendo a data original do primeiro aceite."""
        agora = timezone.now()
        if dados and self.lgpd_data_consentimento is None:
            self.lgpd_data_consentimento = agora
        self.lgpd_consentimento_dados = dados
        self.lgpd_consentimento_marketing = marketing
        self.lgpd_atualizado_em = agora


class MovimentoPontos(models.Model):
    class Tipo(models.TextChoices):
        GANHO = "earned", "Ganho"
        RESGATE = "redeemed", "Resgate"
        EXPIRADO = "expired", "Expirado"
        BONUS = "bonus", "Bônus"

    cliente = models.ForeignKey(
        Cliente,
        on_delete=models.CASCADE,
        related_name="movimentos_pontos",
    )
    tipo = models.CharField(max_length=10, choices=Tipo.choices)
    pontos = models.PositiveIntegerField()
    descricao = models.CharField(max_length=200)
    criado_em = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-criado_em"]
        verbose_name = "Movimento de pontos"
        verbose_name_plural = "Movimentos de pontos"

    def __str__(self):
        return f"{self.get_tipo_display()} {self.pontos} pts · {self.cliente}"


class AtendimentoCliente(models.Model):
    """Histórico de serviços realizados para o cliente."""

    class Status(models.TextChoices):
        CONCLUIDO = "completed", "Concluído"
        CANCELADO = "cancelled", "Cancelado"
        NAO_COMPARECEU = "no_show", "Não compareceu"

    cliente = models.ForeignKey(
        Cliente,
        on_delete=models.CASCADE,
        related_name="atendimentos",
    )
    agendamento = models.OneToOneField(
        "agenda.Agendamento",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="atendimento",
    )
    servico_nome = models.CharField(max_length=200)
    profissional_nome = models.CharField(max_length=120, blank=True)
    data = models.DateField()
    duracao = models.PositiveIntegerField("Duração (min)", default=0)
    preco = models.DecimalField(max_digits=10, decimal_places=2)
    desconto = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    preco_final = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.CONCLUIDO)
    observacoes = models.TextField(blank=True)
    pontos_ganhos = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["-data"]
        verbose_name = "Atendimento"
        verbose_name_plural = "Atendimentos"

    def __str__(self):
        return f"{self.servico_nome} · {self.cliente} · {self.data:%d/%m/%Y}"


class SolicitacaoLGPD(models.Model):
    class Tipo(models.TextChoices):
        PORTABILIDADE = "portability", "Portabilidade de dados"
        EXCLUSAO = "deletion", "Exclusão de dados"

    class Status(models.TextChoices):
        PENDENTE = "pending", "Pendente"
        PROCESSANDO = "processing", "Em processamento"
        CONCLUIDA = "completed", "Concluída"
        FALHOU = "failed", "Falhou"
        CANCELADA = "cancelled", "Cancelada"

    cliente = models.ForeignKey(
        Cliente,
        on_delete=models.CASCADE,
        related_name="solicitacoes_lgpd",
    )
    tipo = models.CharField(max_length=12, choices=Tipo.choices)
    status = models.CharField(max_length=12, choices=Status.choices, default=Status.PENDENTE)
    motivo = models.TextField(blank=True)
    solicitado_em = models.DateTimeField(default=timezone.now)
    processado_em = models.DateTimeField(null=True, blank=True)
    fim_periodo_retencao = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ["-solicitado_em"]
        verbose_name = "Solicitação LGPD"
        verbose_name_plural = "Solicitações LGPD"

    def __str__(self):
        return f"{self.get_tipo_display()} · {self.cliente} ({self.get_status_display()})"


class Canal(models.TextChoices):
    WHATSAPP = "whatsapp", "WhatsApp"
    EMAIL = "email", "E-mail"
    SMS = "sms", "SMS"


class TemplateComunicacao(models.Model):
    class Tipo(models.TextChoices):
        BOAS_VINDAS = "welcome", "Boas-vindas"
        LEMBRETE = "reminder", "Lembrete"
        ANIVERSARIO = "birthday", "Aniversário"
        PROMOCAO = "promotion", "Promoção"
        FEEDBACK = "feedback", "Feedback"
        PERSONALIZADO = "custom", "Personalizado"

    nome = models.CharField(max_length=100)
    tipo = models.CharField(max_length=10, choices=Tipo.choices, default=Tipo.PERSONALIZADO)
    canal = models.CharField(max_length=10, choices=Canal.choices, default=Canal.WHATSAPP)
    assunto = models.CharField(max_length=150, blank=True)
    conteudo = models.TextField(help_text="Use {{variavel}} para campos dinâmicos.")
    variaveis = models.JSONField(default=list, blank=True)
    ativo = models.BooleanField(default=True)
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["nome"]
        verbose_name = "Template de comunicação"
        verbose_name_plural = "Templates de comunicação"

    def __str__(self):
        return f"{self.nome} ({self.get_canal_display()})"


class MensagemAgendada(models.Model):
    class Status(models.TextChoices):
        PENDENTE = "pending", "Pendente"
        ENVIADA = "sent", "Enviada"
        FALHOU = "failed", "Falhou"
        CANCELADA = "cancelled", "Cancelada"

    cliente = models.ForeignKey(
        Cliente,
        on_delete=models.CASCADE,
        related_name="mensagens",
    )
    template = models.ForeignKey(
        TemplateComunicacao,
        on_delete=models.PROTECT,
        related_name="mensagens",
    )
    canal = models.CharField(max_length=10, choices=Canal.choices)
    conteudo_renderizado = models.TextField(blank=True)
    agendada_para = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDENTE)
    enviada_em = models.DateTimeField(null=True, blank=True)
    mensagem_erro = models.TextField(blank=True)
    variaveis = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["-agendada_para"]
        verbose_name = "Mensagem"
        verbose_name_plural = "Mensagens"

    def __str__(self):
        return f"{self.template.nome} → {self.cliente} ({self.get_status_display()})"
