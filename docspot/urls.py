"""
URL configuration for docspot project.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView

urlpatterns = [
    path('admin/', admin.site.urls),

    # API文档路由
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    # API路由
    path('api/auth/', include('user.urls')),                  # 用户认证模块
    path('api/doctors/', include('doctors.urls')),            # 医生与排班模块
    path('api/admin/', include('doctors.admin_urls')),        # 管理员审核模块
    path('api/appointments/', include('appointments.urls')),  # 预约管理模块
    path('api/upload/', include('uploads.urls')),             # 文件上传模块
]

# 开发环境：提供媒体文件访问
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
