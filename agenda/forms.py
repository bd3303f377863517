from django import forms

from clientes.models import Cliente
from servicos.models import Servico

from .models import Profissional


class AgendamentoForm(forms.Form):
    cliente = forms.ModelChoiceField(
        queryset=Cliente.objects.filter(status=Cliente.Status.ATIVO),
        required=False,
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    nome_cliente = forms.CharField(
        max_length=150,
        required=False,
        widget=forms.TextInput(attrs={"class": "form-control"}),
    )
    telefone_cliente = forms.CharField(
        max_length=20,
        required=False,
        widget=forms.TextInput(attrs={"class": "form-control"}),
    )
    email_cliente = forms.EmailField(
        required=False,
        widget=forms.EmailInput(attrs={"class": "form-control"}),
    )
    profissional = forms.ModelChoiceField(
        queryset=Profissional.objects.filter(ativo=True),
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    servicos = forms.ModelMultipleChoiceField(
        queryset=Servico.objects.filter(ativo=True),
        widget=forms.CheckboxSelectMultiple(),
    )
    data = forms.DateField(widget=forms.DateInput(attrs={"class": "form-control", "type": "date"}))
    hora_inicio = forms.TimeField(widget=forms.TimeInput(attrs={"class": "form-control", "type": "time"}))
    observacoes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 2}),
    )

    def clean(self):
        cleaned = super().clean()
        if not cleaned.get("cliente") and not (cleaned.get("nome_cliente") or "").strip():
            self.add_error("nome_cliente", "Selecione um cliente cadastrado ou informe o nome.")
        profissional = cleaned.get("profissional")
        servicos = cleaned.get("servicos")
        if profissional and servicos:
            nao_habilitados = [s.nome for s in servicos if not s.profissionais.filter(pk=profissional.pk).exists()]
            if nao_habilitados:
                self.add_error(
                    "servicos",
                    f"{profissional} não realiza: {', '.join(nao_habilitados)}.",
                )
        return cleaned


class ReagendarForm(forms.Form):
    data = forms.DateField(widget=forms.DateInput(attrs={"class": "form-control", "type": "date"}))
    hora_inicio = forms.TimeField(widget=forms.TimeInput(attrs={"class": "form-control", "type": "time"}))
