from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='DeliverySettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('total_slots', models.PositiveIntegerField(default=0, help_text='Capacity of the current delivery run')),
                ('is_slots_enabled', models.BooleanField(default=True, help_text='Whether slot capacity is tracked at all')),
                ('disable_when_slots_full', models.BooleanField(default=True, help_text='Refuse new orders once slots are full')),
                ('slots_full_message', models.CharField(default="We're fully booked for now!", help_text='Shown to customers when ordering is closed', max_length=255)),
                ('next_delivery_date', models.DateTimeField(blank=True, null=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Delivery Settings',
                'verbose_name_plural': 'Delivery Settings',
            },
        ),
        migrations.CreateModel(
            name='SlotCounter',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('taken_slots', models.PositiveIntegerField(default=0)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Slot Counter',
                'verbose_name_plural': 'Slot Counter',
            },
        ),
        migrations.CreateModel(
            name='DeliveryRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('device_id', models.CharField(max_length=64, unique=True)),
                ('record_type', models.CharField(choices=[('delivered', 'Delivered'), ('dropped', 'Dropped')], db_index=True, max_length=20)),
                ('name', models.CharField(max_length=200)),
                ('phone', models.CharField(max_length=32)),
                ('delivery_location_type', models.CharField(max_length=20)),
                ('school', models.CharField(blank=True, default='', max_length=200)),
                ('block', models.CharField(blank=True, default='', max_length=100)),
                ('room', models.CharField(blank=True, default='', max_length=100)),
                ('area', models.CharField(blank=True, default='', max_length=100)),
                ('street', models.CharField(blank=True, default='', max_length=200)),
                ('house_number', models.CharField(blank=True, default='', max_length=100)),
                ('last_action_at', models.DateTimeField(db_index=True)),
            ],
            options={
                'verbose_name': 'Delivery Record',
                'verbose_name_plural': 'Delivery Records',
                'ordering': ['-last_action_at'],
            },
        ),
    ]
