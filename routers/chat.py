"""
陪伴聊天路由
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter, HTTPException

# 项目内部导包
from models import ChatRequest, ChatResponse
from routers.services.chat_service import ChatService

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    tags=["陪伴聊天"]
)


@router.post("/chat", response_model=ChatResponse, summary="单轮聊天")
async def chat(request: ChatRequest):
    """
    单轮聊天，context=wellness 时使用陪伴语气

    消息为空时返回400；LLM不可用时返回固定的致歉消息。
    """
    message = request.message.strip()
    if not message:
        raise HTTPException(status_code=400, detail="Message is required")

    return await ChatService().reply(message, request.context)
