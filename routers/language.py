"""
语言识别路由
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter

# 项目内部导包
from models import LanguageDetectionRequest, LanguageDetectionResponse
from routers.services.language_service import LanguageService

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    tags=["语言识别"]
)


@router.post("/detect-language", response_model=LanguageDetectionResponse, summary="识别日记语言")
async def detect_language(request: LanguageDetectionRequest):
    """
    识别文本语言，返回ISO 639-1代码和置信度

    文本为空或无法识别时返回 en。
    """
    return await LanguageService().detect(request.text)
