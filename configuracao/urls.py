from django.urls import path
from .views import ConfiguracaoGeralView

app_name = "configuracao"

urlpatterns = [
    path("", ConfiguracaoGeralView.as_view(), name="geral"),
]
