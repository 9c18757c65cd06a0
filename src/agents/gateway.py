"""Agent gateway: uniform way to invoke a named LLM agent.

The workflow never touches agno directly. It receives a lookup capability
`get_agent(name) -> agent | None` and calls `await agent.generate(messages)`.

- AgnoAgentAdapter: wraps an agno Agent and exposes `generate`
- LazyAgent: memoized async factory, builds the wrapped agent on first use
- AgentRegistry: explicit name -> agent mapping injected into the workflow
"""

import asyncio
from typing import Awaitable, Callable, Iterable, Optional, Protocol, Union

from agno.agent import Agent
from agno.models.message import Message

from src.models.models import AgentMessage, AgentReply
from src.utils.logger import logger


# Registry keys of the three pipeline agents
COOKING_AGENT = "cooking"
NUTRITION_AGENT = "nutrition"
MERGE_AGENT = "merge"

MessageInput = Union[AgentMessage, dict]


class GenerativeAgent(Protocol):
    """Anything that turns role-tagged messages into generated text."""

    async def generate(self, messages: list[MessageInput]) -> AgentReply: ...


AgentLookup = Callable[[str], Optional[GenerativeAgent]]


def _to_agent_message(message: MessageInput) -> AgentMessage:
    if isinstance(message, AgentMessage):
        return message
    return AgentMessage.model_validate(message)


def _extract_text(content) -> str:
    """Extract generated text from agno RunOutput.content (str, pydantic model or None)."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if hasattr(content, "model_dump_json"):
        return content.model_dump_json()
    return str(content)


class AgnoAgentAdapter:
    """Expose an agno Agent through the `generate(messages)` interface."""

    def __init__(self, agent: Agent) -> None:
        self.agent = agent

    @property
    def name(self) -> Optional[str]:
        return self.agent.name

    async def generate(self, messages: list[MessageInput]) -> AgentReply:
        """Run the wrapped agent once.

        Raises whatever agno raises (HTTP errors, guardrail rejections); callers
        in the workflow recover from it.
        """
        agno_messages = [
            Message(role=m.role, content=m.content) for m in (_to_agent_message(msg) for msg in messages)
        ]
        run_output = await self.agent.arun(input=agno_messages)
        return AgentReply(text=_extract_text(getattr(run_output, "content", None)))


class LazyAgent:
    """Build the underlying agent on first `generate` call and reuse it afterwards.

    Concurrent first callers await the same build. A caller that is cancelled
    or times out does not cancel the build. A failed or cancelled build is not
    cached, so a later call tries again.
    """

    def __init__(self, factory: Callable[[], Awaitable[GenerativeAgent]], name: str = "") -> None:
        self._factory = factory
        self._name = name
        self._agent: Optional[GenerativeAgent] = None
        self._pending: Optional[asyncio.Task] = None

    @property
    def initialized(self) -> bool:
        return self._agent is not None

    async def _ensure_initialized(self) -> GenerativeAgent:
        if self._agent is not None:
            return self._agent

        if self._pending is None:
            logger.info(f"Building agent '{self._name}' on first use...")
            self._pending = asyncio.ensure_future(self._factory())

        pending = self._pending
        try:
            # Shielded so a cancelled caller leaves the shared build running
            agent = await asyncio.shield(pending)
        except asyncio.CancelledError:
            if pending.cancelled() and self._pending is pending:
                self._pending = None
            raise
        except Exception:
            if self._pending is pending:
                self._pending = None
            raise

        self._agent = agent
        if self._pending is pending:
            self._pending = None
        return agent

    async def generate(self, messages: list[MessageInput]) -> AgentReply:
        agent = await self._ensure_initialized()
        return await agent.generate(messages)


class AgentRegistry:
    """Name -> agent mapping handed to the workflow as its agent lookup."""

    def __init__(self, agents: Optional[dict[str, GenerativeAgent]] = None) -> None:
        self._agents: dict[str, GenerativeAgent] = dict(agents or {})

    def register(self, name: str, agent: GenerativeAgent) -> None:
        self._agents[name] = agent

    def get_agent(self, name: str) -> Optional[GenerativeAgent]:
        return self._agents.get(name)

    def names(self) -> Iterable[str]:
        return list(self._agents)

    def __contains__(self, name: str) -> bool:
        return name in self._agents


def resolve_agent(get_agent: AgentLookup, name: str) -> Optional[GenerativeAgent]:
    """Look up an agent, treating a failing lookup the same as a missing agent."""
    try:
        return get_agent(name)
    except Exception as e:
        logger.error(f"Agent lookup for '{name}' failed: {e}", exc_info=True)
        return None
