"""Step 1: analyze-and-prepare-content.

Sends the user query to the cooking agent and parses its reply into the
analysis fields of PipelineState. Total: an unavailable or failing agent
yields a sentinel state and the pipeline carries on.
"""

from src.agents.gateway import COOKING_AGENT, AgentLookup, resolve_agent
from src.models.models import AgentMessage, PipelineState, QueryType
from src.prompts.prompts import build_cooking_request
from src.utils.logger import logger
from src.workflow.parsing import DEFAULT_SCAN_LINES, parse_analyzer_output


STEP_ID = "analyze-and-prepare-content"

AGENT_UNAVAILABLE = "AGENT_UNAVAILABLE"
AGENT_ERROR = "AGENT_ERROR"


def _sentinel_state(query: str, sentinel: str) -> PipelineState:
    return PipelineState(
        original_query=query,
        query_type=QueryType.SINGLE,
        identified_dishes=[],
        detailed_dish=None,
        has_any_recipe=False,
        cooking_info_raw=sentinel,
        approx_method=None,
        candidates=None,
    )


async def analyze_and_prepare_content(
    query: str,
    get_agent: AgentLookup,
    scan_lines: int = DEFAULT_SCAN_LINES,
) -> PipelineState:
    """Run the cooking agent on `query` and parse its reply.

    Args:
        query: User query, kept verbatim as original_query.
        get_agent: Agent lookup capability.
        scan_lines: Leading lines searched for the JSON header.

    Returns:
        PipelineState with the analysis fields populated.
    """
    log_extra = {"step": STEP_ID}
    cooking_agent = resolve_agent(get_agent, COOKING_AGENT)

    if cooking_agent is None:
        logger.warning("Cooking agent unavailable, continuing without recipe data", extra=log_extra)
        return _sentinel_state(query, AGENT_UNAVAILABLE)

    try:
        reply = await cooking_agent.generate([AgentMessage(role="user", content=build_cooking_request(query))])
        text = reply.text or ""
    except Exception as e:
        logger.error(f"Cooking agent call failed: {e}", exc_info=True, extra=log_extra)
        return _sentinel_state(query, AGENT_ERROR)

    analysis = parse_analyzer_output(text, scan_lines)

    logger.info(
        f"✓ Analysis: type={analysis.query_type.value}, dishes={analysis.dishes}, "
        f"detailed={analysis.detailed_dish}, candidates={len(analysis.candidates)}",
        extra=log_extra,
    )

    return PipelineState(
        original_query=query,
        query_type=analysis.query_type,
        identified_dishes=analysis.dishes,
        detailed_dish=analysis.detailed_dish,
        has_any_recipe=len(analysis.dishes) > 0,
        cooking_info_raw=text,
        approx_method=analysis.approx_method,
        candidates=analysis.candidates,
    )
