# Generated manually for the initial costs schema

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Cost',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, null=True)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('category', models.CharField(choices=[('sueldo', 'Sueldo'), ('redes_sociales', 'Redes sociales'), ('impuestos', 'Impuestos'), ('marketing', 'Marketing'), ('servicios', 'Servicios'), ('alquiler', 'Alquiler'), ('otros', 'Otros')], db_index=True, max_length=30)),
                ('frequency', models.CharField(choices=[('one_time', 'Único'), ('monthly', 'Mensual'), ('quarterly', 'Trimestral'), ('yearly', 'Anual')], default='one_time', max_length=20)),
                ('date', models.DateField(db_index=True)),
                ('is_recurring', models.BooleanField(default=False)),
                ('next_payment_date', models.DateField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'costs',
                'ordering': ['-date', '-id'],
            },
        ),
    ]
