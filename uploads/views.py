"""
文件上传视图
"""
from django.conf import settings
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.views import APIView

from utils.permissions import HasCapability
from utils.response import success_response, error_response
from .storage import save_documents


class FileUploadView(APIView):
    """通用文件上传视图（图片/PDF/Word 文档）

    - 表单键：file
    - 返回：存储路径（可作为预约附件引用）及元信息
    """
    permission_classes = [HasCapability]
    required_capability = 'upload_documents'
    parser_classes = (MultiPartParser, FormParser)

    def post(self, request):
        file_obj = request.FILES.get('file')
        if not file_obj:
            return error_response('未找到文件，表单键应为 file', 400)

        orig_name = file_obj.name
        size = file_obj.size
        saved_path = save_documents([file_obj])[0]
        media_url = f"{settings.MEDIA_URL}{saved_path}"

        return success_response({
            'path': saved_path,
            'url': request.build_absolute_uri(media_url),
            'filename': orig_name,
            'size': size,
        }, '上传成功', 201)
