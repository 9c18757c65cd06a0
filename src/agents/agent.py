"""Agent initialization factory for the Cooking Assistant.

Builds the three agno agents used by the workflow and registers them, each
behind a LazyAgent, in an AgentRegistry:
- cooking: identifies dishes and writes recipes (first-line JSON protocol)
- nutrition: estimates nutrition for one dish
- merge: writes the final user-facing answer

Agents are built on first use, so importing this module or creating the
registry does not contact Gemini.
"""

from agno.agent import Agent
from agno.models.google import Gemini

from src.agents.gateway import (
    COOKING_AGENT,
    MERGE_AGENT,
    NUTRITION_AGENT,
    AgentRegistry,
    AgnoAgentAdapter,
    LazyAgent,
)
from src.hooks.hooks import get_post_hooks, get_pre_hooks
from src.prompts.prompts import (
    get_cooking_instructions,
    get_merge_instructions,
    get_nutrition_instructions,
)
from src.utils.config import config
from src.utils.logger import logger


def _gemini(model_id: str) -> Gemini:
    return Gemini(
        id=model_id,
        api_key=config.GEMINI_API_KEY,
        temperature=config.TEMPERATURE,
        max_output_tokens=config.MAX_OUTPUT_TOKENS,
    )


def create_cooking_agent() -> Agent:
    """Cooking agent with the prompt-injection guardrail on its input."""
    return Agent(
        model=_gemini(config.GEMINI_MODEL),
        instructions=get_cooking_instructions(),
        pre_hooks=get_pre_hooks(),
        post_hooks=get_post_hooks(),
        # No retries: a failed call becomes a recovered step result
        retries=0,
        name="Cooking Process Specialist",
        description="Identifies dishes and provides recipes behind a first-line JSON header",
    )


def create_nutrition_agent() -> Agent:
    return Agent(
        model=_gemini(config.NUTRITION_MODEL),
        instructions=get_nutrition_instructions(),
        post_hooks=get_post_hooks(),
        retries=0,
        name="Nutrition Analysis Specialist",
        description="Estimates calories and macronutrients per serving for one dish",
    )


def create_merge_agent() -> Agent:
    return Agent(
        model=_gemini(config.GEMINI_MODEL),
        instructions=get_merge_instructions(),
        post_hooks=get_post_hooks(),
        retries=0,
        markdown=True,
        name="Response Integration Agent",
        description="Merges recipe and nutrition results into the final answer",
    )


def _lazy(name: str, factory) -> LazyAgent:
    async def build() -> AgnoAgentAdapter:
        agent = factory()
        logger.info(f"✓ Agent '{name}' configured ({agent.name})")
        return AgnoAgentAdapter(agent)

    return LazyAgent(build, name=name)


def initialize_agent_registry() -> AgentRegistry:
    """Validate configuration and register the three pipeline agents.

    Returns:
        AgentRegistry with lazily-built cooking, nutrition and merge agents.

    Raises:
        ValueError: If configuration is invalid (e.g. missing GEMINI_API_KEY).
    """
    logger.info("=== Initializing Cooking Assistant agents ===")
    config.validate()

    registry = AgentRegistry()
    registry.register(COOKING_AGENT, _lazy(COOKING_AGENT, create_cooking_agent))
    registry.register(NUTRITION_AGENT, _lazy(NUTRITION_AGENT, create_nutrition_agent))
    registry.register(MERGE_AGENT, _lazy(MERGE_AGENT, create_merge_agent))

    logger.info(f"✓ {len(registry.names())} agents registered: {', '.join(registry.names())}")
    return registry
