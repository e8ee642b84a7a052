"""
预约URL配置
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import AppointmentViewSet

router = DefaultRouter()
router.register(r'', AppointmentViewSet, basename='appointment')

urlpatterns = [
    path('', include(router.urls)),
    # 路由已通过ViewSet自动注册：
    # POST /appointments/ - 创建预约
    # GET /appointments/my/ - 我的预约
    # GET /appointments/{appointment_id}/ - 获取预约详情
    # PUT /appointments/{appointment_id}/status/ - 更新预约状态
]
