"""Step 3: integrate-with-agent.

Builds the context prompt from the full pipeline state and asks the merge
agent for the final answer. Always returns a well-formed FinalOutput; the
metadata mirrors the state regardless of which branch ran.
"""

from src.agents.gateway import MERGE_AGENT, AgentLookup, resolve_agent
from src.models.models import AgentMessage, Architecture, FinalOutput, PipelineState, ResponseMetadata
from src.prompts.prompts import build_integration_prompt
from src.utils.logger import logger


STEP_ID = "integrate-with-agent"

UNAVAILABLE_MESSAGE = "The assistant is temporarily unavailable, please try again later."
ERROR_MESSAGE = "An error occurred while generating the answer, please try again."
EMPTY_REPLY_MESSAGE = "Failed to generate an answer, please try again."


def build_metadata(state: PipelineState, architecture: Architecture) -> ResponseMetadata:
    return ResponseMetadata(
        dishes=list(state.identified_dishes),
        query_type=state.query_type,
        detailed_dish=state.detailed_dish,
        has_any_recipe=state.has_any_recipe,
        has_nutrition_info=bool(state.has_nutrition_info),
        architecture=architecture,
    )


async def integrate_with_agent(state: PipelineState, get_agent: AgentLookup) -> FinalOutput:
    """Produce the final response envelope for `state`."""
    log_extra = {"step": STEP_ID}
    merge_agent = resolve_agent(get_agent, MERGE_AGENT)

    if merge_agent is None:
        logger.error("Merge agent unavailable, returning fallback message", extra=log_extra)
        return FinalOutput(response=UNAVAILABLE_MESSAGE, metadata=build_metadata(state, Architecture.UNAVAILABLE))

    try:
        prompt = build_integration_prompt(state)
        reply = await merge_agent.generate([AgentMessage(role="user", content=prompt)])
        text = reply.text or ""
    except Exception as e:
        logger.error(f"Merge agent call failed: {e}", exc_info=True, extra=log_extra)
        return FinalOutput(response=ERROR_MESSAGE, metadata=build_metadata(state, Architecture.ERROR))

    logger.info(f"✓ Final answer generated ({len(text)} chars)", extra=log_extra)
    return FinalOutput(
        response=text or EMPTY_REPLY_MESSAGE,
        metadata=build_metadata(state, Architecture.INTEGRATED),
    )
