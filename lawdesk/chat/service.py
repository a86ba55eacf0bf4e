import logging
from typing import List, Optional

from fastapi import HTTPException
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lawdesk.chat.models import AiChatSession
from lawdesk.shared.models import utcnow

logger = logging.getLogger(__name__)

# History turns sent to the model along with the new message
MAX_HISTORY_MESSAGES = 10

FALLBACK_RESPONSE = (
    "I'm experiencing technical difficulties. Please contact Mason Martin Law directly at "
    "(808) 555-1234 or mason@masonmartinlaw.com for assistance."
)

SYSTEM_PROMPT = """You are an AI assistant for Mason Martin Law, a Hawaii-based law firm. You help potential clients understand legal services and schedule consultations.

About Mason Martin Law:
- Licensed attorney in Hawaii
- Practice areas: Civil Litigation, Trial Advocacy, Appellate Practice, Military Law
- Attorney Mason Martin is a former JAG officer with military law experience

Consultation options:
- Free 15-minute phone consultation
- Virtual consultation: $200/hour
- In-person consultation: $250/hour

Guidelines:
- Be professional, helpful, and empathetic
- Provide general information about legal processes and the firm's services
- Do not give specific legal advice; recommend a consultation for case-specific questions
- Encourage scheduling a consultation when appropriate
- Keep responses concise and clear"""


class ChatService:
    def __init__(self, db: AsyncSession, llm: Optional[BaseChatModel] = None):
        self.db = db
        self.llm = llm
        self.system_prompt = SYSTEM_PROMPT

    async def get_session(self, session_id: str) -> Optional[AiChatSession]:
        result = await self.db.execute(select(AiChatSession).where(AiChatSession.session_id == session_id))
        return result.scalars().first()

    async def get_session_or_404(self, session_id: str) -> AiChatSession:
        session = await self.get_session(session_id)
        if not session:
            raise HTTPException(status_code=404, detail="Chat session not found")
        return session

    def _build_messages(self, history: List[dict], user_message: str) -> List[BaseMessage]:
        """System prompt, trimmed history, then the new message."""
        messages: List[BaseMessage] = [SystemMessage(content=self.system_prompt)]
        for msg in history[-MAX_HISTORY_MESSAGES:]:
            if msg.get("role") == "assistant":
                messages.append(AIMessage(content=msg.get("content", "")))
            else:
                messages.append(HumanMessage(content=msg.get("content", "")))
        messages.append(HumanMessage(content=user_message))
        return messages

    async def _complete(self, messages: List[BaseMessage]) -> str:
        try:
            response = await self.llm.ainvoke(messages)
        except Exception as e:
            logger.error(f"AI chat completion failed: {e}")
            return FALLBACK_RESPONSE
        content = response.content if isinstance(response.content, str) else ""
        return content.strip() or FALLBACK_RESPONSE

    async def chat(self, session_id: str, message: str, client_email: Optional[str] = None) -> str:
        session = await self.get_session(session_id)
        if session is None:
            session = AiChatSession(session_id=session_id, client_email=client_email, messages=[])
            self.db.add(session)
        elif client_email and not session.client_email:
            session.client_email = client_email

        history = list(session.messages or [])
        reply = await self._complete(self._build_messages(history, message))

        turn = [
            {"role": "user", "content": message, "timestamp": utcnow().isoformat()},
            {"role": "assistant", "content": reply, "timestamp": utcnow().isoformat()},
        ]
        session.messages = history + turn
        try:
            await self.db.commit()
        except IntegrityError:
            # session row was created concurrently, append to that one
            await self.db.rollback()
            session = await self.get_session_or_404(session_id)
            session.messages = list(session.messages or []) + turn
            await self.db.commit()
        return reply
