# Generated manually: la cita se agrega después de crear la app citas
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("servicios", "0001_initial"),
        ("citas", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="servicio",
            name="cita",
            field=models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="servicios",
                to="citas.cita",
            ),
        ),
    ]
