"""
管理员审核URL配置
"""
from django.urls import path
from .views import PendingDoctorList, DoctorApprove

urlpatterns = [
    path('doctors/pending/', PendingDoctorList.as_view(), name='doctor-pending-list'),  # 待审核医生 GET /admin/doctors/pending/
    path('doctors/<int:pk>/approve/', DoctorApprove.as_view(), name='doctor-approve'),  # 审核通过 PUT /admin/doctors/<id>/approve/
]
