"""
预约序列化器
"""
from django.conf import settings
from django.core.files.storage import default_storage
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework import serializers

from user.serializers import UserBriefSerializer
from .models import Appointment, AppointmentStatus
from .slots import TIME_FORMAT


class CalendarDateField(serializers.DateField):
    """接受日期或带时间的日期字符串，时间部分一律忽略，只保留日历日"""

    def to_internal_value(self, value):
        if isinstance(value, str) and len(value.strip()) > 10:
            parsed = parse_datetime(value.strip())
            if parsed is not None:
                return parsed.date()
        return super().to_internal_value(value)


class AppointmentSerializer(serializers.ModelSerializer):
    """预约序列化器（只读），附带双方的展示信息"""
    patient_id = serializers.IntegerField(read_only=True)
    doctor_id = serializers.IntegerField(read_only=True)
    patient = UserBriefSerializer(read_only=True)
    doctor = UserBriefSerializer(read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Appointment
        fields = ['id', 'patient_id', 'doctor_id', 'patient', 'doctor', 'appointment_date', 'time_slot',
                  'status', 'status_display', 'symptoms', 'documents', 'notes', 'created_at', 'updated_at']
        read_only_fields = fields


class AppointmentCreateSerializer(serializers.Serializer):
    """创建预约：doctor_id 为医生的用户ID"""
    doctor_id = serializers.IntegerField()
    appointment_date = CalendarDateField()
    time_slot = serializers.RegexField(r'^([01]\d|2[0-3]):[0-5]\d$', max_length=5,
                                       error_messages={'invalid': '时间格式错误，应为 HH:mm 格式'})
    symptoms = serializers.CharField(required=False, allow_blank=True, max_length=2000)
    # 已通过 /upload/file/ 上传的文件路径
    document_refs = serializers.ListField(child=serializers.CharField(max_length=255), required=False)

    def validate_appointment_date(self, value):
        """验证预约日期不能是过去"""
        if value < timezone.localdate():
            raise serializers.ValidationError('不能预约过去的日期')
        return value

    def validate_document_refs(self, value):
        for path in value:
            if not path.startswith('uploads/documents/') or '..' in path or not default_storage.exists(path):
                raise serializers.ValidationError(f'附件不存在: {path}')
        return value

    def validate(self, attrs):
        """今天的时段不能早于当前时间"""
        if attrs['appointment_date'] == timezone.localdate():
            now_label = timezone.localtime().strftime(TIME_FORMAT)
            if attrs['time_slot'] < now_label:
                raise serializers.ValidationError({'time_slot': '不能预约已过去的时间段'})
        return attrs

    def validate_total_documents(self, uploaded_count):
        max_count = settings.MAX_APPOINTMENT_DOCUMENTS
        if uploaded_count + len(self.validated_data.get('document_refs', [])) > max_count:
            raise serializers.ValidationError({'documents': f'最多上传{max_count}个文件'})


class AppointmentStatusSerializer(serializers.Serializer):
    """更新预约状态"""
    status = serializers.ChoiceField(choices=AppointmentStatus.choices)
    notes = serializers.CharField(required=False, allow_blank=True, max_length=2000)
