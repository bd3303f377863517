import re

from django import forms
from django.utils import timezone

from .models import Cliente, TemplateComunicacao


class ClienteForm(forms.ModelForm):
    alergias_texto = forms.CharField(
        label="Alergias",
        required=False,
        help_text="Separe por vírgula.",
        widget=forms.TextInput(attrs={"class": "form-control"}),
    )

    class Meta:
        model = Cliente
        fields = [
            "nome_completo",
            "telefone",
            "email",
            "data_nascimento",
            "data_aniversario",
            "cpf",
            "endereco_rua",
            "endereco_numero",
            "endereco_complemento",
            "endereco_bairro",
            "endereco_cidade",
            "endereco_estado",
            "endereco_cep",
            "servicos_favoritos",
            "profissional_preferido",
            "observacoes",
            "frequencia_preferida",
            "frequencia_dias",
            "aceita_whatsapp",
            "aceita_email",
            "aceita_sms",
            "aceita_telefone",
            "lembrete_preferencia",
            "mensagens_aniversario",
            "mensagens_promocionais",
            "lgpd_consentimento_dados",
            "lgpd_consentimento_marketing",
            "status",
        ]
        widgets = {
            "nome_completo": forms.TextInput(attrs={"class": "form-control"}),
            "telefone": forms.TextInput(attrs={"class": "form-control"}),
            "email": forms.EmailInput(attrs={"class": "form-control"}),
            "data_nascimento": forms.DateInput(
                attrs={"class": "form-control", "type": "date"}, format="%Y-%m-%d"
            ),
            "data_aniversario": forms.DateInput(
                attrs={"class": "form-control", "type": "date"}, format="%Y-%m-%d"
            ),
            "observacoes": forms.Textarea(attrs={"class": "form-control", "rows": 3}),
            "servicos_favoritos": forms.SelectMultiple(attrs={"class": "form-select"}),
            "profissional_preferido": forms.Select(attrs={"class": "form-select"}),
            "frequencia_preferida": forms.Select(attrs={"class": "form-select"}),
            "lembrete_preferencia": forms.Select(attrs={"class": "form-select"}),
            "status": forms.Select(attrs={"class": "form-select"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            self.fields["alergias_texto"].initial = ", ".join(self.instance.alergias)

    def clean_telefone(self):
        telefone = self.cleaned_data["telefone"]
        digitos = re.sub(r"\D", "", telefone)
        if not 10 <= len(digitos) <= 11:
            raise forms.ValidationError("Telefone deve ter 10 ou 11 dígitos.")
        return telefone

    def clean_data_nascimento(self):
        data = self.cleaned_data["data_nascimento"]
        if data and data > timezone.localdate():
            raise forms.ValidationError("Data de nascimento não pode estar no futuro.")
        return data

    def save(self, commit=True):
        cliente = super().save(commit=False)
        cliente.alergias = [
            a.strip() for a in self.cleaned_data.get("alergias_texto", "").split(",") if a.strip()
        ]
        consentimento_mudou = {
            "lgpd_consentimento_dados",
            "lgpd_consentimento_marketing",
        } & set(self.changed_data)
        if consentimento_mudou or not cliente.pk:
            cliente.registrar_consentimento(
                cliente.lgpd_consentimento_dados,
                cliente.lgpd_consentimento_marketing,
            )
        if commit:
            cliente.save()
            self.save_m2m()
        return cliente


class PontosForm(forms.Form):
    pontos = forms.IntegerField(
        min_value=1,
        widget=forms.NumberInput(attrs={"class": "form-control", "min": 1}),
    )
    descricao = forms.CharField(
        max_length=200,
        widget=forms.TextInput(attrs={"class": "form-control"}),
    )


class EnviarMensagemForm(forms.Form):
    template = forms.ModelChoiceField(
        queryset=TemplateComunicacao.objects.filter(ativo=True),
        widget=forms.Select(attrs={"class": "form-select"}),
    )
