"""
医生序列化器
"""
from rest_framework import serializers

from user.serializers import UserBriefSerializer
from .models import AvailabilitySlot, Doctor, Weekday


class AvailabilitySlotSerializer(serializers.ModelSerializer):
    """周模板条目"""
    day = serializers.ChoiceField(choices=Weekday.choices)
    start_time = serializers.RegexField(r'^([01]\d|2[0-3]):[0-5]\d$', max_length=5)
    end_time = serializers.RegexField(r'^([01]\d|2[0-3]):[0-5]\d$', max_length=5)
    is_available = serializers.BooleanField(default=True)

    class Meta:
        model = AvailabilitySlot
        fields = ['day', 'start_time', 'end_time', 'is_available']


class DoctorSerializer(serializers.ModelSerializer):
    """医生序列化器"""
    user_id = serializers.IntegerField(source='user.id', read_only=True)
    user = UserBriefSerializer(read_only=True)
    available_slots = AvailabilitySlotSerializer(many=True, read_only=True)

    class Meta:
        model = Doctor
        fields = ['id', 'user_id', 'user', 'specialization', 'qualification', 'experience',
                  'consultation_fee', 'hospital_name', 'hospital_address', 'rating', 'total_reviews',
                  'available_slots', 'is_approved', 'approved_at', 'created_at', 'updated_at']
        read_only_fields = ['id', 'user_id', 'rating', 'total_reviews', 'is_approved',
                            'approved_at', 'created_at', 'updated_at']


class AvailabilityTemplateSerializer(serializers.Serializer):
    """整体替换周模板"""
    available_slots = AvailabilitySlotSerializer(many=True)
