from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='FileRecord',
            fields=[
                ('id', models.UUIDField(editable=False, primary_key=True, serialize=False)),
                ('display_name', models.CharField(help_text='Original filename as uploaded', max_length=255)),
                ('bucket_name', models.CharField(editable=False, max_length=63)),
                ('uploaded_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'File record',
                'verbose_name_plural': 'File records',
            },
        ),
    ]
