"""
Chat service for local model conversations.

Orchestrates one chat turn: persist the user message, capture user facts,
compose the system prompt, call the model gateway, persist the reply and,
with memory on, the continuation context.

Dependencies: localchat.core, localchat.application.adapters, localchat.boundary.db
System role: Chat service orchestration layer
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from localchat.application.adapters.chat_history_adapter import ChatHistoryAdapter
from localchat.application.services.reference_service import ReferenceService
from localchat.boundary.db.CRUD.user_fact_crud import user_fact_crud
from localchat.core.fact_extractor import extract_user_facts
from localchat.core.fallback_store import InMemorySessionStore
from localchat.core.model_gateway import GenerationResult, ModelGateway
from localchat.core.prompt_composer import DEFAULT_HISTORY_WINDOW, PromptComposer
from localchat.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)


class ChatService:
    """
    Chat service for conversational turns against the local backend.

    Coordinates history persistence, fact capture, prompt composition and
    generation. Backend failures arrive as canned replies from the gateway
    and are stored like any other assistant turn.
    """

    def __init__(
        self,
        db: AsyncSession,
        gateway: ModelGateway,
        fallback: InMemorySessionStore,
        history_window: int = DEFAULT_HISTORY_WINDOW,
        ttl_ms: int | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for database operations
            gateway: Process-scoped model gateway
            fallback: Process-scoped in-memory session store
            history_window: Number of recent messages rendered into the prompt
            ttl_ms: Idle-session TTL applied after each message insert
        """
        self.db = db
        self.gateway = gateway
        self.fallback = fallback
        self.history_window = history_window
        self.ttl_ms = ttl_ms

    async def _store_facts(self, session_id: str, message: str) -> None:
        facts = extract_user_facts(message)
        if not facts:
            return
        try:
            for key, value in facts.items():
                await user_fact_crud.upsert(self.db, session_id, key, value)
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:_store_facts - Failed for session {session_id}: {e}")
            await self.db.rollback()
            return
        logger.info(f"{__name__}:_store_facts - Stored {sorted(facts)} for session {session_id}")

    async def _load_facts(self, session_id: str) -> dict[str, str]:
        try:
            return await user_fact_crud.get_for_session(self.db, session_id)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:_load_facts - Failed for session {session_id}: {e}")
            await self.db.rollback()
            return {}

    async def process_chat(
        self,
        session_id: str,
        message: str,
        model_name: str,
        memory_enabled: bool = False,
    ) -> GenerationResult:
        """
        Process chat message through full conversation flow.

        Flow:
        1. Store user message (creates the session when missing)
        2. Extract and store user facts
        3. Load prior context (memory on only)
        4. Compose system prompt
        5. Generate through the gateway with the session's active references
        6. Store assistant reply, and the new context when memory is on

        Args:
            session_id: Session id
            message: User's message
            model_name: Model to answer with
            memory_enabled: Whether history, facts and context are used

        Returns:
            GenerationResult: Reply (possibly a canned failure message)
        """
        logger.info(
            f"{__name__}:process_chat - Session {session_id}, model {model_name}, "
            f"memory={'on' if memory_enabled else 'off'}, message={safe_log_value(message)}"
        )
        history = ChatHistoryAdapter(session_id, self.db, self.fallback, ttl_ms=self.ttl_ms)

        await history.add_user_message(message)
        await self._store_facts(session_id, message)

        prior_context = await history.get_context() if memory_enabled else None

        composer = PromptComposer(
            history_loader=lambda sid, limit: history.get_messages(limit),
            facts_loader=self._load_facts,
            history_window=self.history_window,
        )
        system_prompt = await composer.compose(session_id, model_name, memory_enabled)

        references = await ReferenceService(self.db).get_active_references(session_id)

        result = await self.gateway.generate(
            prompt=message,
            prior_context=prior_context or [],
            system_prompt=system_prompt,
            model_name=model_name,
            session_id=session_id,
            references=references,
        )

        await history.add_assistant_message(result.content)
        if memory_enabled:
            await history.save_context(result.context)

        return result

    async def get_history(self, session_id: str) -> list[dict]:
        """
        Return every message of a session, oldest first.

        Args:
            session_id: Session id

        Returns:
            List of {role, content, timestamp}
        """
        history = ChatHistoryAdapter(session_id, self.db, self.fallback)
        return await history.get_messages_as_dicts()
