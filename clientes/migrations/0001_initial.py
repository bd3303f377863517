from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("agenda", "0001_initial"),
        ("servicos", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Cliente",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome_completo", models.CharField(max_length=150, verbose_name="Nome completo")),
                ("telefone", models.CharField(max_length=20, verbose_name="Telefone")),
                ("email", models.EmailField(max_length=254, verbose_name="E-mail")),
                ("data_nascimento", models.DateField(verbose_name="Data de nascimento")),
                ("data_aniversario", models.DateField(blank=True, null=True, verbose_name="Data comemorativa")),
                ("endereco_rua", models.CharField(blank=True, max_length=150, verbose_name="Rua")),
                ("endereco_numero", models.CharField(blank=True, max_length=20, verbose_name="Número")),
                ("endereco_complemento", models.CharField(blank=True, max_length=80, verbose_name="Complemento")),
                ("endereco_bairro", models.CharField(blank=True, max_length=80, verbose_name="Bairro")),
                ("endereco_cidade", models.CharField(blank=True, max_length=80, verbose_name="Cidade")),
                ("endereco_estado", models.CharField(blank=True, max_length=2, verbose_name="UF")),
                ("endereco_cep", models.CharField(blank=True, max_length=9, verbose_name="CEP")),
                ("cpf", models.CharField(blank=True, max_length=14, verbose_name="CPF")),
                ("foto", models.URLField(blank=True, verbose_name="Foto")),
                ("observacoes", models.TextField(blank=True, verbose_name="Observações especiais")),
                ("alergias", models.JSONField(blank=True, default=list)),
                ("restricoes", models.JSONField(blank=True, default=list)),
                (
                    "frequencia_preferida",
                    models.CharField(
                        choices=[
                            ("weekly", "Semanal"),
                            ("biweekly", "Quinzenal"),
                            ("monthly", "Mensal"),
                            ("quarterly", "Trimestral"),
                            ("custom", "Personalizada"),
                        ],
                        default="monthly",
                        max_length=12,
                    ),
                ),
                ("frequencia_dias", models.PositiveIntegerField(blank=True, null=True)),
                ("horarios_preferidos", models.JSONField(blank=True, default=list)),
                (
                    "dias_preferidos",
                    models.JSONField(blank=True, default=list, help_text="Dias da semana (0 = segunda ... 6 = domingo)."),
                ),
                ("aceita_whatsapp", models.BooleanField(default=True)),
                ("aceita_email", models.BooleanField(default=True)),
                ("aceita_sms", models.BooleanField(default=False)),
                ("aceita_telefone", models.BooleanField(default=False)),
                (
                    "lembrete_preferencia",
                    models.CharField(
                        choices=[
                            ("none", "Não enviar"),
                            ("1_hour", "1 hora antes"),
                            ("2_hours", "2 horas antes"),
                            ("1_day", "1 dia antes"),
                            ("2_days", "2 dias antes"),
                        ],
                        default="1_day",
                        max_length=10,
                    ),
                ),
                ("mensagens_aniversario", models.BooleanField(default=True)),
                ("mensagens_promocionais", models.BooleanField(default=False)),
                ("pontos_atuais", models.PositiveIntegerField(default=0)),
                ("total_pontos_ganhos", models.PositiveIntegerField(default=0)),
                ("total_pontos_resgatados", models.PositiveIntegerField(default=0)),
                (
                    "nivel_fidelidade",
                    models.CharField(
                        choices=[("bronze", "Bronze"), ("silver", "Prata"), ("gold", "Ouro"), ("platinum", "Platina")],
                        db_index=True,
                        default="bronze",
                        max_length=10,
                    ),
                ),
                ("pontos_proximo_nivel", models.PositiveIntegerField(default=500)),
                ("total_gasto", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("quantidade_visitas", models.PositiveIntegerField(default=0)),
                ("ultima_visita", models.DateField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Ativo"), ("inactive", "Inativo"), ("blocked", "Bloqueado")],
                        db_index=True,
                        default="active",
                        max_length=10,
                    ),
                ),
                (
                    "lgpd_consentimento_dados",
                    models.BooleanField(default=False, verbose_name="Consentimento para tratamento de dados"),
                ),
                (
                    "lgpd_consentimento_marketing",
                    models.BooleanField(default=False, verbose_name="Consentimento para marketing"),
                ),
                (
                    "lgpd_periodo_retencao",
                    models.PositiveSmallIntegerField(default=5, verbose_name="Retenção de dados (anos)"),
                ),
                ("lgpd_data_consentimento", models.DateTimeField(blank=True, null=True)),
                ("lgpd_atualizado_em", models.DateTimeField(blank=True, null=True)),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
                (
                    "profissional_preferido",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="clientes_preferenciais",
                        to="agenda.profissional",
                    ),
                ),
                (
                    "servicos_favoritos",
                    models.ManyToManyField(blank=True, related_name="clientes_favoritos", to="servicos.servico"),
                ),
            ],
            options={
                "verbose_name": "Cliente",
                "verbose_name_plural": "Clientes",
                "ordering": ["nome_completo"],
            },
        ),
        migrations.CreateModel(
            name="MovimentoPontos",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "tipo",
                    models.CharField(
                        choices=[("earned", "Ganho"), ("redeemed", "Resgate"), ("expired", "Expirado"), ("bonus", "Bônus")],
                        max_length=10,
                    ),
                ),
                ("pontos", models.PositiveIntegerField()),
                ("descricao", models.CharField(max_length=200)),
                ("criado_em", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "cliente",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="movimentos_pontos",
                        to="clientes.cliente",
                    ),
                ),
            ],
            options={
                "verbose_name": "Movimento de pontos",
                "verbose_name_plural": "Movimentos de pontos",
                "ordering": ["-criado_em"],
            },
        ),
        migrations.CreateModel(
            name="AtendimentoCliente",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("servico_nome", models.CharField(max_length=200)),
                ("profissional_nome", models.CharField(blank=True, max_length=120)),
                ("data", models.DateField()),
                ("duracao", models.PositiveIntegerField(default=0, verbose_name="Duração (min)")),
                ("preco", models.DecimalField(decimal_places=2, max_digits=10)),
                ("desconto", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("preco_final", models.DecimalField(decimal_places=2, max_digits=10)),
                (
                    "status",
                    models.CharField(
                        choices=[("completed", "Concluído"), ("cancelled", "Cancelado"), ("no_show", "Não compareceu")],
                        default="completed",
                        max_length=10,
                    ),
                ),
                ("observacoes", models.TextField(blank=True)),
                ("pontos_ganhos", models.PositiveIntegerField(default=0)),
                (
                    "cliente",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="atendimentos",
                        to="clientes.cliente",
                    ),
                ),
            ],
            options={
                "verbose_name": "Atendimento",
                "verbose_name_plural": "Atendimentos",
                "ordering": ["-data"],
            },
        ),
        migrations.CreateModel(
            name="SolicitacaoLGPD",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "tipo",
                    models.CharField(
                        choices=[("portability", "Portabilidade de dados"), ("deletion", "Exclusão de dados")],
                        max_length=12,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pendente"),
                            ("processing", "Em processamento"),
                            ("completed", "Concluída"),
                            ("failed", "Falhou"),
                            ("cancelled", "Cancelada"),
                        ],
                        default="pending",
                        max_length=12,
                    ),
                ),
                ("motivo", models.TextField(blank=True)),
                ("solicitado_em", models.DateTimeField(default=django.utils.timezone.now)),
                ("processado_em", models.DateTimeField(blank=True, null=True)),
                ("fim_periodo_retencao", models.DateField(blank=True, null=True)),
                (
                    "cliente",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="solicitacoes_lgpd",
                        to="clientes.cliente",
                    ),
                ),
            ],
            options={
                "verbose_name": "Solicitação LGPD",
                "verbose_name_plural": "Solicitações LGPD",
                "ordering": ["-solicitado_em"],
            },
        ),
        migrations.CreateModel(
            name="TemplateComunicacao",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=100)),
                (
                    "tipo",
                    models.CharField(
                        choices=[
                            ("welcome", "Boas-vindas"),
                            ("reminder", "Lembrete"),
                            ("birthday", "Aniversário"),
                            ("promotion", "Promoção"),
                            ("feedback", "Feedback"),
                            ("custom", "Personalizado"),
                        ],
                        default="custom",
                        max_length=10,
                    ),
                ),
                (
                    "canal",
                    models.CharField(
                        choices=[("whatsapp", "WhatsApp"), ("email", "E-mail"), ("sms", "SMS")],
                        default="whatsapp",
                        max_length=10,
                    ),
                ),
                ("assunto", models.CharField(blank=True, max_length=150)),
                ("conteudo", models.TextField(help_text="Use {{variavel}} para campos dinâmicos.")),
                ("variaveis", models.JSONField(blank=True, default=list)),
                ("ativo", models.BooleanField(default=True)),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Template de comunicação",
                "verbose_name_plural": "Templates de comunicação",
                "ordering": ["nome"],
            },
        ),
        migrations.CreateModel(
            name="MensagemAgendada",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "canal",
                    models.CharField(
                        choices=[("whatsapp", "WhatsApp"), ("email", "E-mail"), ("sms", "SMS")],
                        max_length=10,
                    ),
                ),
                ("conteudo_renderizado", models.TextField(blank=True)),
                ("agendada_para", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pendente"),
                            ("sent", "Enviada"),
                            ("failed", "Falhou"),
                            ("cancelled", "Cancelada"),
                        ],
                        default="pending",
                        max_length=10,
                    ),
                ),
                ("enviada_em", models.DateTimeField(blank=True, null=True)),
                ("mensagem_erro", models.TextField(blank=True)),
                ("variaveis", models.JSONField(blank=True, default=dict)),
                (
                    "cliente",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="mensagens",
                        to="clientes.cliente",
                    ),
                ),
                (
                    "template",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="mensagens",
                        to="clientes.templatecomunicacao",
                    ),
                ),
            ],
            options={
                "verbose_name": "Mensagem",
                "verbose_name_plural": "Mensagens",
                "ordering": ["-agendada_para"],
            },
        ),
    ]
