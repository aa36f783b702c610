from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='PriceRecord',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('commodity', models.CharField(max_length=255)),
                ('brand', models.CharField(blank=True, default='', max_length=255)),
                ('variant', models.CharField(blank=True, default='', max_length=255)),
                ('size', models.CharField(blank=True, default='', max_length=64)),
                ('store', models.CharField(blank=True, default='', max_length=255)),
                ('category', models.CharField(choices=[('basic', 'Basic'), ('prime', 'Prime'), ('construction', 'Construction'), ('noche-buena', 'Noche Buena'), ('school-supplies', 'School Supplies'), ('general', 'General')], default='general', max_length=32)),
                ('month', models.CharField(blank=True, default='', max_length=32)),
                ('years', models.CharField(blank=True, default='', max_length=16)),
                ('price', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('srp', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('timestamp', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.AddIndex(
            model_name='pricerecord',
            index=models.Index(fields=['-timestamp'], name='price_timestamp_idx'),
        ),
        migrations.AddIndex(
            model_name='pricerecord',
            index=models.Index(fields=['commodity', 'store'], name='price_commodity_store_idx'),
        ),
        migrations.AddIndex(
            model_name='pricerecord',
            index=models.Index(fields=['month', 'years'], name='price_month_years_idx'),
        ),
        migrations.AddIndex(
            model_name='pricerecord',
            index=models.Index(fields=['commodity', 'store', 'timestamp'], name='price_comm_store_ts_idx'),
        ),
    ]
