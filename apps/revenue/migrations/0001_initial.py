from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DailyRevenue",
            fields=[
                ("date", models.DateField(primary_key=True, serialize=False)),
                ("amount_cents", models.BigIntegerField(default=0)),
                ("order_count", models.PositiveIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["date"],
                "verbose_name_plural": "daily revenue",
            },
        ),
    ]
