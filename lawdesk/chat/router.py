from fastapi import APIRouter, Depends
from langchain_core.language_models.chat_models import BaseChatModel
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.auth.dependencies import get_current_identity
from lawdesk.auth.schemas import TokenPayload
from lawdesk.chat.schemas import ChatRequest, ChatResponse, ChatSessionResponse
from lawdesk.chat.service import ChatService
from lawdesk.database import get_db
from lawdesk.llm import get_chat_llm

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    db: AsyncSession = Depends(get_db),
    llm: BaseChatModel = Depends(get_chat_llm),
):
    service = ChatService(db, llm)
    reply = await service.chat(request.session_id, request.message, request.client_email)
    return ChatResponse(response=reply, session_id=request.session_id)


@router.get("/chat/{session_id}", response_model=ChatSessionResponse)
async def read_chat_session(
    session_id: str,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await ChatService(db).get_session_or_404(session_id)
