from datetime import datetime, timedelta
from decimal import Decimal

from django.conf import settings
from django.db import models


class Profissional(models.Model):
    nome = models.CharField(max_length=120)
    email = models.EmailField(blank=True)
    telefone = models.CharField(max_length=20, blank=True)
    avatar = models.URLField(blank=True)
    especialidades = models.JSONField(default=list, blank=True)
    avaliacao = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    comissao = models.DecimalField(
        "Comissão",
        max_digits=4,
        decimal_places=2,
        default=Decimal("0.50"),
        help_text="Fração do valor do serviço repassada ao profissional (0.60 = 60%).",
    )
    ativo = models.BooleanField(default=True)
    usuario = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="profissional",
    )

    class Meta:
        ordering = ["nome"]
        verbose_name = "Profissional"
        verbose_name_plural = "Profissionais"

    def __str__(self) -> str:
        return self.nome

    def horario_do_dia(self, data):
        """HorarioTrabalho do dia da semana de `data` (ou None)."""
        return self.horarios.filter(dia_semana=data.weekday()).first()


class HorarioTrabalho(models.Model):
    class DiaSemana(models.IntegerChoices):
        SEGUNDA = 0, "Segunda-feira"
        TERCA = 1, "Terça-feira"
        QUARTA = 2, "Quarta-feira"
        QUINTA = 3, "Quinta-feira"
        SEXTA = 4, "Sexta-feira"
        SABADO = 5, "Sábado"
        DOMINGO = 6, "Domingo"

    profissional = models.ForeignKey(
        Profissional,
        on_delete=models.CASCADE,
        related_name="horarios",
    )
    dia_semana = models.PositiveSmallIntegerField(choices=DiaSemana.choices)
    hora_inicio = models.TimeField()
    hora_fim = models.TimeField()
    trabalha = models.BooleanField(default=True)

    class Meta:
        ordering = ["profissional", "dia_semana"]
        unique_together = [("profissional", "dia_semana")]
        verbose_name = "Horário de trabalho"
        verbose_name_plural = "Horários de trabalho"

    def __str__(self) -> str:
        return (
            f"{self.profissional} · {self.get_dia_semana_display()} "
            f"{self.hora_inicio:%H:%M}-{self.hora_fim:%H:%M}"
        )


class Agendamento(models.Model):
    class Status(models.TextChoices):
        PENDENTE = "PENDENTE", "Pendente"
        CONFIRMADO = "CONFIRMADO", "Confirmado"
        EM_ANDAMENTO = "EM_ANDAMENTO", "Em andamento"
        CONCLUIDO = "CONCLUIDO", "Concluído"
        CANCELADO = "CANCELADO", "Cancelado"
        NAO_COMPARECEU = "NAO_COMPARECEU", "Não compareceu"

    cliente = models.ForeignKey(
        "clientes.Cliente",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="agendamentos",
    )
    # Dados de contato (também para clientes sem cadastro)
    nome_cliente = models.CharField("Nome do cliente", max_length=150)
    telefone_cliente = models.CharField("Telefone do cliente", max_length=20, blank=True)
    email_cliente = models.EmailField("E-mail do cliente", blank=True)

    profissional = models.ForeignKey(
        Profissional,
        on_delete=models.PROTECT,
        related_name="agendamentos",
    )
    servicos = models.ManyToManyField(
        "servicos.Servico",
        related_name="agendamentos",
    )

    data = models.DateField(db_index=True)
    hora_inicio = models.TimeField()
    hora_fim = models.TimeField()
    duracao_total = models.PositiveIntegerField("Duração total (min)", default=0)
    preco_total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDENTE,
        db_index=True,
    )
    observacoes = models.TextField(blank=True)
    lembrete_enviado = models.BooleanField(default=False)
    confirmacao_enviada = models.BooleanField(default=False)

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["data", "hora_inicio"]
        verbose_name = "Agendamento"
        verbose_name_plural = "Agendamentos"

    def __str__(self):
        return f"{self.nome_cliente} · {self.data:%d/%m/%Y} {self.hora_inicio:%H:%M} · {self.profissional}"

    @property
    def codigo(self) -> str:
        """Código curto do agendamento, usado como referência financeira."""
        if not self.pk:
            return "AGD-PENDENTE"
        return f"AGD{self.pk:04d}"

    @property
    def ativo(self) -> bool:
        return self.status != self.Status.CANCELADO


def somar_minutos(hora, minutos: int):
    """Soma minutos a um `time`, sem passar da meia-noite."""
    base = datetime.combine(datetime.min.date(), hora) + timedelta(minutes=minutos)
    if base.date() != datetime.min.date():
        return datetime.max.time().replace(microsecond=0)
    return base.time()
