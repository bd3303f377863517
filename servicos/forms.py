from django import forms

from .models import PacoteServico, Servico
from .validacao import validar_pacote, validar_servico


def _lista(texto):
    return [linha.strip() for linha in (texto or "").splitlines() if linha.strip()]


class ServicoForm(forms.ModelForm):
    requisitos_texto = forms.CharField(
        label="Requisitos",
        required=False,
        help_text="Um por linha.",
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 2}),
    )
    contraindicacoes_texto = forms.CharField(
        label="Contraindicações",
        required=False,
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 2}),
    )
    cuidados_pos_texto = forms.CharField(
        label="Cuidados pós-serviço",
        required=False,
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 2}),
    )

    class Meta:
        model = Servico
        fields = [
            "nome",
            "descricao",
            "preco",
            "duracao",
            "categoria",
            "profissionais",
            "imagem",
            "ativo",
        ]
        widgets = {
            "nome": forms.TextInput(attrs={"class": "form-control"}),
            "descricao": forms.Textarea(attrs={"class": "form-control", "rows": 3}),
            "preco": forms.NumberInput(attrs={"class": "form-control", "min": "0", "step": "0.01"}),
            "duracao": forms.NumberInput(attrs={"class": "form-control", "min": 1}),
            "categoria": forms.Select(attrs={"class": "form-select"}),
            "profissionais": forms.CheckboxSelectMultiple(),
            "imagem": forms.URLInput(attrs={"class": "form-control"}),
            "ativo": forms.CheckboxInput(attrs={"class": "form-check-input"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Limites de tamanho e faixa ficam por conta de validar_servico
        for campo in ("nome", "descricao", "preco"):
            self.fields[campo].validators = []
        if self.instance.pk:
            self.fields["requisitos_texto"].initial = "\n".join(self.instance.requisitos)
            self.fields["contraindicacoes_texto"].initial = "\n".join(self.instance.contraindicacoes)
            self.fields["cuidados_pos_texto"].initial = "\n".join(self.instance.cuidados_pos)

    def clean(self):
        cleaned = super().clean()
        resultado = validar_servico(
            nome=cleaned.get("nome", ""),
            descricao=cleaned.get("descricao", ""),
            preco=cleaned.get("preco"),
            duracao=cleaned.get("duracao"),
            categoria=cleaned.get("categoria"),
            profissionais=cleaned.get("profissionais"),
        )
        for campo, r in resultado.items():
            if not r.valido and campo not in self.errors:
                self.add_error(campo, r.mensagem)
        return cleaned

    def save(self, commit=True):
        servico = super().save(commit=False)
        servico.requisitos = _lista(self.cleaned_data.get("requisitos_texto"))
        servico.contraindicacoes = _lista(self.cleaned_data.get("contraindicacoes_texto"))
        servico.cuidados_pos = _lista(self.cleaned_data.get("cuidados_pos_texto"))
        if commit:
            servico.save()
            self.save_m2m()
        return servico


class PacoteServicoForm(forms.ModelForm):
    servicos = forms.ModelMultipleChoiceField(
        queryset=Servico.objects.filter(ativo=True),
        widget=forms.CheckboxSelectMultiple(),
        required=False,
    )

    class Meta:
        model = PacoteServico
        fields = [
            "nome",
            "descricao",
            "desconto_percentual",
            "validade_dias",
            "limite_uso",
            "ativo",
            "data_inicio",
            "data_fim",
            "antecedencia_minima_horas",
        ]
        widgets = {
            "nome": forms.TextInput(attrs={"class": "form-control"}),
            "descricao": forms.Textarea(attrs={"class": "form-control", "rows": 3}),
            "desconto_percentual": forms.NumberInput(attrs={"class": "form-control", "step": "0.5"}),
            "validade_dias": forms.NumberInput(attrs={"class": "form-control"}),
            "limite_uso": forms.NumberInput(attrs={"class": "form-control"}),
            "ativo": forms.CheckboxInput(attrs={"class": "form-check-input"}),
            "data_inicio": forms.DateInput(attrs={"class": "form-control", "type": "date"}),
            "data_fim": forms.DateInput(attrs={"class": "form-control", "type": "date"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["nome"].max_length = None
        self.fields["nome"].validators = []
        if self.instance.pk:
            self.fields["servicos"].initial = [i.servico_id for i in self.instance.itens.all()]

    def clean(self):
        cleaned = super().clean()
        resultado = validar_pacote(
            nome=cleaned.get("nome", ""),
            servicos=cleaned.get("servicos"),
            desconto_percentual=cleaned.get("desconto_percentual"),
            validade_dias=cleaned.get("validade_dias"),
            limite_uso=cleaned.get("limite_uso"),
        )
        for campo, r in resultado.items():
            if not r.valido and campo not in self.errors:
                self.add_error(campo, r.mensagem)
        return cleaned


class AtualizarPrecoForm(forms.Form):
    preco = forms.DecimalField(
        max_digits=7,
        decimal_places=2,
        widget=forms.NumberInput(attrs={"class": "form-control", "step": "0.01"}),
    )
    motivo = forms.CharField(
        max_length=200,
        required=False,
        widget=forms.TextInput(attrs={"class": "form-control"}),
    )
