"""Step 2: fetch-nutrition.

Looks up nutrition for at most one dish per query: the detailed dish of a
combination, or the first identified dish of a single-dish query. Candidate
and secondary dishes are never looked up.
"""

from typing import Optional

from src.agents.gateway import NUTRITION_AGENT, AgentLookup, resolve_agent
from src.models.models import AgentMessage, PipelineState, QueryType
from src.prompts.prompts import build_nutrition_prompt
from src.utils.logger import logger


STEP_ID = "fetch-nutrition"


def select_target_dish(state: PipelineState) -> Optional[str]:
    """Pick the single dish to look up, or None when there is nothing well-defined to query."""
    if not state.has_any_recipe:
        return None
    return state.main_dish


def _without_nutrition(state: PipelineState) -> PipelineState:
    return state.model_copy(update={"has_nutrition_info": False, "nutrition_info": None})


async def fetch_nutrition(state: PipelineState, get_agent: AgentLookup) -> PipelineState:
    """Add nutrition fields to the analyzed state.

    Order of checks: no recipe -> skip; no target dish -> skip; build the
    prompt; missing or failing agent -> has_nutrition_info=False. Never raises.
    """
    log_extra = {"step": STEP_ID}

    if not state.has_any_recipe:
        logger.info("No recipe matched, skipping nutrition lookup", extra=log_extra)
        return _without_nutrition(state)

    target_dish = select_target_dish(state)
    if target_dish is None:
        if state.query_type == QueryType.COMBINATION:
            logger.warning("Combination without a detailed dish, skipping nutrition lookup", extra=log_extra)
        else:
            logger.warning("Single-dish query without identified dishes, skipping nutrition lookup", extra=log_extra)
        return _without_nutrition(state)

    prompt = build_nutrition_prompt(target_dish)

    nutrition_agent = resolve_agent(get_agent, NUTRITION_AGENT)
    if nutrition_agent is None:
        logger.warning("Nutrition agent unavailable, continuing without nutrition data", extra=log_extra)
        return _without_nutrition(state)

    try:
        reply = await nutrition_agent.generate([AgentMessage(role="user", content=prompt)])
        text = reply.text or ""
    except Exception as e:
        logger.error(f"Nutrition agent call failed for '{target_dish}': {e}", exc_info=True, extra=log_extra)
        return _without_nutrition(state)

    logger.info(f"✓ Nutrition info obtained for '{target_dish}'", extra=log_extra)
    return state.model_copy(update={"has_nutrition_info": True, "nutrition_info": text})
