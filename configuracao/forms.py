from django import forms
from .models import ConfiguracaoGeral


class ConfiguracaoGeralForm(forms.ModelForm):
    class Meta:
        model = ConfiguracaoGeral
        fields = [
            "salao_nome",
            "salao_slogan",
            "salao_email",
            "salao_telefone",
            "salao_endereco",
            "moeda",
            "fuso_horario",
            "caixa_fechamento_automatico",
            "caixa_horario_fechamento",
            "caixa_exige_aprovacao",
            "caixa_diferenca_maxima",
            "alerta_dias_vencimento",
            "alerta_caixa_baixo",
            "alerta_despesa_alta",
            "regime_fiscal",
            "cnpj",
            "valor_das_mei",
            "aliquota_simples",
        ]
        widgets = {
            "caixa_horario_fechamento": forms.TimeInput(attrs={"type": "time"}),
        }
