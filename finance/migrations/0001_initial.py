from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('description', models.CharField(max_length=255)),
                ('amount', models.DecimalField(decimal_places=2, help_text='Amount spent', max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('category', models.CharField(choices=[('Chicks', 'Chicks'), ('Feed', 'Feed'), ('Vaccines', 'Vaccines'), ('Utilities', 'Utilities'), ('Packaging', 'Packaging'), ('Marketing', 'Marketing'), ('Transport', 'Transport'), ('Coop Construction', 'Coop Construction'), ('Equipment', 'Equipment'), ('Other', 'Other')], max_length=50)),
                ('expense_type', models.CharField(choices=[('capital', 'Capital'), ('operational', 'Operational')], db_index=True, default='operational', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                'verbose_name': 'Expense',
                'verbose_name_plural': 'Expenses',
                'ordering': ['-created_at'],
            },
        ),
    ]
