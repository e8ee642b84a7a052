"""
医生URL配置
"""
from django.urls import path
from .views import (
    DoctorList,
    DoctorDetail,
    DoctorSlots,
    UpdateDoctorProfile,
    DoctorAvailability,
)

urlpatterns = [
    path('approved/', DoctorList.as_view(), name='doctor-list'),  # 已审核医生列表 GET /doctors/approved/
    path('me/', UpdateDoctorProfile.as_view(), name='update-doctor-profile'),  # 医生查看/更新档案 GET/PUT /doctors/me/
    path('me/availability/', DoctorAvailability.as_view(), name='doctor-availability'),  # 每周出诊模板 GET/PUT
    path('<int:pk>/', DoctorDetail.as_view(), name='doctor-detail'),  # 医生详情 GET /doctors/<id>/
    path('<int:pk>/slots/', DoctorSlots.as_view(), name='doctor-slots'),  # 可预约号源 GET /doctors/<id>/slots/?date=
]
