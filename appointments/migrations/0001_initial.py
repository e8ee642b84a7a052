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
            name='Appointment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('appointment_date', models.DateField(verbose_name='预约日期')),
                ('time_slot', models.CharField(max_length=5, verbose_name='预约时段')),
                ('status', models.CharField(choices=[('pending', '待确认'), ('confirmed', '已确认'), ('cancelled', '已取消'), ('completed', '已完成')], default='pending', max_length=20, verbose_name='状态')),
                ('symptoms', models.TextField(blank=True, verbose_name='症状描述')),
                ('documents', models.JSONField(blank=True, default=list, verbose_name='附件')),
                ('notes', models.TextField(blank=True, verbose_name='医生备注')),
                ('active_slot', models.BooleanField(default=True, editable=False, null=True, verbose_name='占用号源')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='创建时间')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='更新时间')),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='doctor_appointments', to=settings.AUTH_USER_MODEL)),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='patient_appointments', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': '预约',
                'verbose_name_plural': '预约',
                'db_table': 'appointment',
                'ordering': ['-appointment_date', '-time_slot'],
                'constraints': [models.UniqueConstraint(fields=('doctor', 'appointment_date', 'time_slot', 'active_slot'), name='unique_active_booking')],
            },
        ),
    ]
