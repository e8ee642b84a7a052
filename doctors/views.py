"""
医生视图
"""
from rest_framework import generics
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from appointments.serializers import CalendarDateField
from appointments.slots import available_slots
from user.models import Role
from utils.exceptions import NotFound
from utils.permissions import capability_required
from utils.response import success_response, error_response
from .models import Doctor
from .serializers import AvailabilityTemplateSerializer, AvailabilitySlotSerializer, DoctorSerializer
from .services import (
    DOCTOR_NOT_FOUND,
    approve_doctor,
    approved_doctors,
    get_approved_doctor,
    pending_doctors,
    set_template,
)

DOCTOR_INFO_NOT_FOUND = '医生信息不存在'


def current_doctor(request):
    """当前登录医生的档案"""
    try:
        return request.user.doctor_profile
    except Doctor.DoesNotExist:
        raise NotFound(DOCTOR_INFO_NOT_FOUND)


class DoctorList(generics.ListAPIView):
    """已审核医生列表（公开）"""
    serializer_class = DoctorSerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        return approved_doctors(
            specialization=self.request.query_params.get('specialization'),
            search=self.request.query_params.get('search'),
        )

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return success_response({
            'count': len(serializer.data),
            'results': serializer.data
        })


class DoctorDetail(generics.RetrieveAPIView):
    """医生详情：未审核医生对患者与游客不可见"""
    serializer_class = DoctorSerializer
    permission_classes = [AllowAny]

    def retrieve(self, request, *args, **kwargs):
        pk = kwargs['pk']
        user = request.user
        if user.is_authenticated and user.role == Role.ADMIN:
            instance = Doctor.objects.filter(pk=pk).select_related('user').first()
        elif user.is_authenticated and user.role == Role.DOCTOR and \
                Doctor.objects.filter(pk=pk, user=user).exists():
            instance = user.doctor_profile
        else:
            instance = Doctor.objects.filter(pk=pk, is_approved=True).select_related('user').first()
        if instance is None:
            return error_response(DOCTOR_NOT_FOUND, 404)
        return success_response(self.get_serializer(instance).data)


class DoctorSlots(APIView):
    """某位医生某天的可预约号源（公开）"""
    permission_classes = [AllowAny]

    def get(self, request, pk):
        raw_date = request.query_params.get('date')
        if not raw_date:
            return error_response('date为必填项，格式为YYYY-MM-DD', 400)
        day = CalendarDateField().run_validation(raw_date)
        doctor = get_approved_doctor(pk)
        return success_response({
            'doctor_id': doctor.id,
            'date': day.isoformat(),
            'available_slots': available_slots(doctor, day),
        })


class UpdateDoctorProfile(generics.RetrieveUpdateAPIView):
    """医生端查看/更新个人档案"""
    serializer_class = DoctorSerializer
    permission_classes = [capability_required('manage_doctor_profile')]

    def get_object(self):
        return current_doctor(self.request)

    def retrieve(self, request, *args, **kwargs):
        return success_response(self.get_serializer(self.get_object()).data)

    def update(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return success_response(serializer.data, '更新成功')


class DoctorAvailability(APIView):
    """医生端查看/整体替换每周出诊模板"""
    permission_classes = [capability_required('manage_availability')]

    def get(self, request):
        doctor = current_doctor(request)
        serializer = AvailabilitySlotSerializer(doctor.available_slots.all(), many=True)
        return success_response({'available_slots': serializer.data})

    def put(self, request):
        doctor = current_doctor(request)
        serializer = AvailabilityTemplateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entries = set_template(doctor, serializer.validated_data['available_slots'])
        return success_response(
            {'available_slots': AvailabilitySlotSerializer(entries, many=True).data},
            '出诊时间已更新'
        )


class PendingDoctorList(generics.ListAPIView):
    """待审核医生列表（管理员）"""
    serializer_class = DoctorSerializer
    permission_classes = [capability_required('review_doctors')]

    def get_queryset(self):
        return pending_doctors()

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return success_response({
            'count': len(serializer.data),
            'results': serializer.data
        })


class DoctorApprove(APIView):
    """审核通过某位医生（管理员）"""
    permission_classes = [capability_required('review_doctors')]

    def put(self, request, pk):
        doctor, changed = approve_doctor(pk, actor=request.user)
        message = '审核通过' if changed else '已是通过状态'
        return success_response(DoctorSerializer(doctor).data, message)
