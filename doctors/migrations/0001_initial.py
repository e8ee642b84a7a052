from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Doctor',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('specialization', models.CharField(max_length=100, verbose_name='专科')),
                ('qualification', models.CharField(max_length=100, verbose_name='学历资质')),
                ('experience', models.PositiveIntegerField(default=0, verbose_name='从业年限')),
                ('consultation_fee', models.DecimalField(decimal_places=2, default=500, max_digits=10, verbose_name='诊费')),
                ('hospital_name', models.CharField(blank=True, max_length=200, verbose_name='医院名称')),
                ('hospital_address', models.CharField(blank=True, max_length=255, verbose_name='医院地址')),
                ('rating', models.FloatField(default=0.0, verbose_name='评分')),
                ('total_reviews', models.IntegerField(default=0, verbose_name='评价数量')),
                ('is_approved', models.BooleanField(default=False, verbose_name='是否审核通过')),
                ('approved_at', models.DateTimeField(blank=True, null=True, verbose_name='审核时间')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='创建时间')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='更新时间')),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='doctor_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': '医生',
                'verbose_name_plural': '医生',
                'db_table': 'doctor',
                'ordering': ['-rating', '-total_reviews', 'id'],
            },
        ),
        migrations.CreateModel(
            name='AvailabilitySlot',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('day', models.CharField(choices=[('Monday', '周一'), ('Tuesday', '周二'), ('Wednesday', '周三'), ('Thursday', '周四'), ('Friday', '周五'), ('Saturday', '周六'), ('Sunday', '周日')], max_length=10, verbose_name='星期')),
                ('start_time', models.CharField(help_text='格式：HH:mm，如 09:00', max_length=5, verbose_name='开始时间')),
                ('end_time', models.CharField(help_text='格式：HH:mm，如 17:00', max_length=5, verbose_name='结束时间')),
                ('is_available', models.BooleanField(default=True, verbose_name='是否出诊')),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='available_slots', to='doctors.doctor')),
            ],
            options={
                'verbose_name': '出诊时段',
                'verbose_name_plural': '出诊时段',
                'db_table': 'doctor_availability',
                'ordering': ['doctor', 'id'],
                'constraints': [models.UniqueConstraint(fields=('doctor', 'day'), name='unique_doctor_weekday')],
            },
        ),
    ]
