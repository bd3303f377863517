from decimal import Decimal

from django import forms

from .models import (
    CategoriaTransacao,
    Conta,
    DocumentoFiscal,
    MetodoPagamento,
    MovimentoCaixa,
    Transacao,
)


class TransacaoForm(forms.ModelForm):
    class Meta:
        model = Transacao
        fields = [
            "tipo",
            "categoria",
            "subcategoria",
            "valor",
            "descricao",
            "data",
            "metodo_pagamento",
            "referencia",
        ]
        widgets = {
            "tipo": forms.Select(attrs={"class": "form-select"}),
            "categoria": forms.Select(attrs={"class": "form-select"}),
            "subcategoria": forms.TextInput(attrs={"class": "form-control"}),
            "valor": forms.NumberInput(attrs={"class": "form-control", "min": "0", "step": "0.01"}),
            "descricao": forms.TextInput(attrs={"class": "form-control"}),
            "data": forms.DateInput(attrs={"class": "form-control", "type": "date"}),
            "metodo_pagamento": forms.Select(attrs={"class": "form-select"}),
            "referencia": forms.TextInput(attrs={"class": "form-control"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["categoria"].queryset = CategoriaTransacao.objects.filter(ativo=True)
        self.fields["metodo_pagamento"].queryset = MetodoPagamento.objects.filter(ativo=True)

    def clean_valor(self):
        valor = self.cleaned_data["valor"]
        if valor is not None and valor <= 0:
            raise forms.ValidationError("O valor deve ser maior que zero.")
        return valor

    def clean(self):
        cleaned = super().clean()
        categoria = cleaned.get("categoria")
        tipo = cleaned.get("tipo")
        if categoria and tipo and categoria.tipo != tipo:
            self.add_error("categoria", "A categoria não corresponde ao tipo da transação.")
        return cleaned


class ContaForm(forms.ModelForm):
    class Meta:
        model = Conta
        fields = [
            "tipo",
            "categoria",
            "descricao",
            "valor",
            "vencimento",
            "recorrente",
            "frequencia",
            "intervalo",
            "recorrencia_ate",
            "fornecedor",
            "cliente",
            "referencia",
        ]
        widgets = {
            "tipo": forms.Select(attrs={"class": "form-select"}),
            "categoria": forms.TextInput(attrs={"class": "form-control"}),
            "descricao": forms.TextInput(attrs={"class": "form-control"}),
            "valor": forms.NumberInput(attrs={"class": "form-control", "min": "0", "step": "0.01"}),
            "vencimento": forms.DateInput(attrs={"class": "form-control", "type": "date"}),
            "frequencia": forms.Select(attrs={"class": "form-select"}),
            "recorrencia_ate": forms.DateInput(attrs={"class": "form-control", "type": "date"}),
        }

    def clean_valor(self):
        valor = self.cleaned_data["valor"]
        if valor is not None and valor <= 0:
            raise forms.ValidationError("O valor deve ser maior que zero.")
        return valor

    def clean(self):
        cleaned = super().clean()
        if cleaned.get("recorrente") and not cleaned.get("frequencia"):
            self.add_error("frequencia", "Informe a frequência da conta recorrente.")
        return cleaned


class AbrirCaixaForm(forms.Form):
    saldo_abertura = forms.DecimalField(
        min_value=0,
        max_digits=12,
        decimal_places=2,
        widget=forms.NumberInput(attrs={"class": "form-control", "step": "0.01"}),
    )


class FecharCaixaForm(forms.Form):
    saldo_fechamento = forms.DecimalField(
        min_value=0,
        max_digits=12,
        decimal_places=2,
        widget=forms.NumberInput(attrs={"class": "form-control", "step": "0.01"}),
    )
    observacoes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 2}),
    )


class MovimentoCaixaForm(forms.Form):
    tipo = forms.ChoiceField(
        choices=MovimentoCaixa.Tipo.choices,
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    valor = forms.DecimalField(
        min_value=Decimal("0.01"),
        max_digits=12,
        decimal_places=2,
        widget=forms.NumberInput(attrs={"class": "form-control", "step": "0.01"}),
    )
    motivo = forms.CharField(max_length=200, widget=forms.TextInput(attrs={"class": "form-control"}))
    autorizado_por = forms.CharField(
        max_length=150,
        required=False,
        widget=forms.TextInput(attrs={"class": "form-control"}),
    )


class DocumentoFiscalForm(forms.ModelForm):
    class Meta:
        model = DocumentoFiscal
        fields = ["tipo", "valor", "descricao", "cliente", "fornecedor"]
        widgets = {
            "tipo": forms.Select(attrs={"class": "form-select"}),
            "valor": forms.NumberInput(attrs={"class": "form-control", "step": "0.01"}),
            "descricao": forms.TextInput(attrs={"class": "form-control"}),
            "cliente": forms.TextInput(attrs={"class": "form-control"}),
            "fornecedor": forms.TextInput(attrs={"class": "form-control"}),
        }
