from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.db import models
from django.utils import timezone


class Servico(models.Model):
    class Categoria(models.TextChoices):
        CORTE = "corte", "Corte"
        BARBA = "barba", "Barba"
        QUIMICA = "quimica", "Química"
        ESTETICA = "estetica", "Estética"
        TRATAMENTO = "tratamento", "Tratamento"

    nome = models.CharField(max_length=50)
    descricao = models.TextField("Descrição", max_length=1000)
    preco = models.DecimalField("Preço", max_digits=7, decimal_places=2)
    duracao = models.PositiveIntegerField("Duração (min)")
    categoria = models.CharField(
        max_length=12,
        choices=Categoria.choices,
        default=Categoria.CORTE,
    )
    ativo = models.BooleanField(default=True)
    imagem = models.URLField(blank=True)

    profissionais = models.ManyToManyField(
        "agenda.Profissional",
        related_name="servicos",
        blank=True,
        verbose_name="Profissionais habilitados",
    )
    requisitos = models.JSONField(default=list, blank=True)
    contraindicacoes = models.JSONField("Contraindicações", default=list, blank=True)
    cuidados_pos = models.JSONField("Cuidados pós-serviço", default=list, blank=True)

    criado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="servicos_criados",
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    # Métricas
    total_agendamentos = models.PositiveIntegerField(default=0)
    receita_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    avaliacao_media = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    total_avaliacoes = models.PositiveIntegerField(default=0)
    ranking_popularidade = models.PositiveIntegerField(default=0)
    ultimo_agendamento = models.DateTimeField(null=True, blank=True)
    agendamentos_mes = models.PositiveIntegerField(default=0)
    receita_mes = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    taxa_conversao = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["categoria", "nome"]
        verbose_name = "Serviço"
        verbose_name_plural = "Serviços"

    def __str__(self):
        return f"{self.nome} (R$ {self.preco})"


class HistoricoPreco(models.Model):
    servico = models.ForeignKey(
        Servico,
        on_delete=models.CASCADE,
        related_name="historico_precos",
    )
    preco_anterior = models.DecimalField(max_digits=7, decimal_places=2)
    preco_novo = models.DecimalField(max_digits=7, decimal_places=2)
    motivo = models.CharField(max_length=200, blank=True)
    alterado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="alteracoes_preco",
    )
    alterado_em = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-alterado_em"]
        verbose_name = "Histórico de preço"
        verbose_name_plural = "Histórico de preços"

    def __str__(self):
        return f"{self.servico.nome}: {self.preco_anterior} → {self.preco_novo}"


class PacoteServico(models.Model):
    nome = models.CharField(max_length=100)
    descricao = models.TextField("Descrição", blank=True)
    preco_original = models.DecimalField(max_digits=9, decimal_places=2, default=Decimal("0.00"))
    desconto_percentual = models.DecimalField(
        "Desconto (%)", max_digits=5, decimal_places=2, default=Decimal("10.00")
    )
    preco_final = models.DecimalField(max_digits=9, decimal_places=2, default=Decimal("0.00"))
    validade_dias = models.PositiveIntegerField("Validade (dias)", default=30)
    limite_uso = models.PositiveIntegerField("Limite de uso", default=1)
    ativo = models.BooleanField(default=True)
    data_inicio = models.DateField(null=True, blank=True)
    data_fim = models.DateField(null=True, blank=True)
    antecedencia_minima_horas = models.PositiveIntegerField(
        "Antecedência mínima (h)", null=True, blank=True
    )
    dias_permitidos = models.JSONField(
        default=list,
        blank=True,
        help_text="Dias da semana permitidos (0=segunda ... 6=domingo).",
    )

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    # Métricas
    total_vendas = models.PositiveIntegerField(default=0)
    receita_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    avaliacao_media = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    taxa_conversao = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
    ranking_popularidade = models.PositiveIntegerField(default=0)
    ultima_venda = models.DateTimeField(null=True, blank=True)
    vendas_mes = models.PositiveIntegerField(default=0)
    receita_mes = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["nome"]
        verbose_name = "Pacote de serviços"
        verbose_name_plural = "Pacotes de serviços"

    def __str__(self):
        return self.nome

    @property
    def economia(self) -> Decimal:
        return self.preco_original - self.preco_final

    def recalcular_precos(self, commit=True):
        """
        Preço original = soma dos serviços do pacote;
        preço final = original com o desconto, arredondado em centavos.
        """
        original = sum(
            (item.servico.preco for item in self.itens.select_related("servico")),
            Decimal("0.00"),
        )
        fator = Decimal("1") - (self.desconto_percentual or Decimal("0")) / Decimal("100")
        self.preco_original = original
        self.preco_final = (original * fator).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        if commit:
            self.save(update_fields=["preco_original", "preco_final", "atualizado_em"])
        return self.preco_final


class ItemPacote(models.Model):
    pacote = models.ForeignKey(
        PacoteServico,
        on_delete=models.CASCADE,
        related_name="itens",
    )
    servico = models.ForeignKey(
        Servico,
        on_delete=models.PROTECT,
        related_name="itens_pacote",
    )
    obrigatorio = models.BooleanField(default=True)
    pode_substituir = models.BooleanField(default=False)
    opcoes_substituicao = models.ManyToManyField(
        Servico,
        related_name="substituicoes_pacote",
        blank=True,
    )

    class Meta:
        unique_together = [("pacote", "servico")]
        verbose_name = "Item do pacote"
        verbose_name_plural = "Itens do pacote"

    def __str__(self):
        return f"{self.pacote.nome} · {self.servico.nome}"
