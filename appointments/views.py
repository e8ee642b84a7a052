"""
预约视图
"""
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser

from uploads.storage import delete_documents, save_documents, validate_documents
from utils.permissions import HasCapability
from utils.response import success_response
from .serializers import (
    AppointmentCreateSerializer,
    AppointmentSerializer,
    AppointmentStatusSerializer,
    CalendarDateField,
)
from .services import appointments_for, book_appointment, get_appointment_for, set_status


class AppointmentViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """预约视图集"""
    serializer_class = AppointmentSerializer
    permission_classes = [HasCapability]
    parser_classes = (JSONParser, MultiPartParser, FormParser)

    # 各操作所需能力，见 utils.permissions.CAPABILITIES
    action_capabilities = {
        'create': 'book_appointment',
        'retrieve': 'view_own_appointments',
        'my': 'view_own_appointments',
        'update_status': 'update_appointment_status',
    }

    @property
    def required_capability(self):
        return self.action_capabilities.get(self.action)

    def get_object(self):
        return get_appointment_for(self.request.user, self.kwargs['pk'])

    def retrieve(self, request, *args, **kwargs):
        """获取预约详情（仅预约双方与管理员）"""
        return success_response(self.get_serializer(self.get_object()).data)

    @action(detail=False, methods=['get'], url_path='my')
    def my(self, request):
        """
        我的预约：患者看自己的预约，医生看自己的接诊安排，管理员看全部。
        可选参数 status 与 date（YYYY-MM-DD，医生查看当日排程）。
        """
        queryset = appointments_for(request.user)

        status = request.query_params.get('status')
        if status:
            queryset = queryset.filter(status=status)

        date = request.query_params.get('date')
        if date:
            queryset = queryset.filter(appointment_date=CalendarDateField().run_validation(date))

        serializer = self.get_serializer(queryset, many=True)
        return success_response({
            'count': len(serializer.data),
            'results': serializer.data
        })

    def create(self, request, *args, **kwargs):
        """创建预约（患者），可同时上传最多5个附件，表单键为 documents"""
        serializer = AppointmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        files = request.FILES.getlist('documents')
        validate_documents(files)
        serializer.validate_total_documents(len(files))
        saved = save_documents(files)

        try:
            appointment = book_appointment(
                patient=request.user,
                doctor_user_id=data['doctor_id'],
                appointment_date=data['appointment_date'],
                time_slot=data['time_slot'],
                symptoms=data.get('symptoms', ''),
                documents=data.get('document_refs', []) + saved,
            )
        except Exception:
            delete_documents(saved)
            raise

        return success_response(
            AppointmentSerializer(appointment).data,
            '预约成功',
            201
        )

    @action(detail=True, methods=['put', 'patch'], url_path='status')
    def update_status(self, request, pk=None):
        """更新预约状态：医生确认/取消/完成，患者取消待确认预约，管理员确认/取消"""
        serializer = AppointmentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        appointment = set_status(
            pk,
            serializer.validated_data['status'],
            request.user,
            notes=serializer.validated_data.get('notes'),
        )
        return success_response(AppointmentSerializer(appointment).data, '预约状态已更新')
