import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("agenda", "0002_agendamento"),
        ("clientes", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="atendimentocliente",
            name="agendamento",
            field=models.OneToOneField(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="atendimento",
                to="agenda.agendamento",
            ),
        ),
    ]
