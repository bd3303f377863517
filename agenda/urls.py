from django.urls import path

from .views import (
    CalendarioView,
    AgendamentoCreateView,
    AgendamentoStatusActionView,
    AgendamentoReagendarView,
    HorariosDisponiveisView,
)

app_name = "agenda"

urlpatterns = [
    path("", CalendarioView.as_view(), name="calendario"),
    path("novo/", AgendamentoCreateView.as_view(), name="criar"),
    path("<int:pk>/status/", AgendamentoStatusActionView.as_view(), name="status"),
    path("<int:pk>/reagendar/", AgendamentoReagendarView.as_view(), name="reagendar"),
    path("horarios/", HorariosDisponiveisView.as_view(), name="horarios"),
]
