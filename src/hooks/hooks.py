"""Pre-hooks and post-hooks for the cooking assistant agents.

Pre-hook Pipeline (cooking agent only):
1. PromptInjectionGuardrail - rejects inputs that try to override the output protocol

Post-hook Pipeline (all agents):
1. log_run_metrics_post_hook - logs run_id and execution time of each agent run

A rejected input surfaces as an exception from `agent.arun`, which the
workflow step recovers from like any other agent failure.
"""

from typing import Callable, List, Optional

from agno.guardrails import PromptInjectionGuardrail
from agno.run.agent import RunOutput

from src.utils.config import config
from src.utils.logger import logger


def get_pre_hooks() -> List:
    """Pre-hooks for the cooking agent, based on ENABLE_GUARDRAILS."""
    if not config.ENABLE_GUARDRAILS:
        logger.info("Guardrails disabled (ENABLE_GUARDRAILS=false)")
        return []
    return [PromptInjectionGuardrail()]


def log_run_metrics_post_hook(
    run_output: RunOutput,
    session=None,
    user_id: Optional[str] = None,
    debug_mode: Optional[bool] = None,
) -> None:
    """Post-hook: log agent name, run_id and execution time from RunOutput metrics.

    Observability only; failures are logged at debug level and never affect the run.
    """
    try:
        run_id = getattr(run_output, "run_id", None)
        agent_name = getattr(run_output, "agent_name", None)

        execution_time_ms = 0
        metrics = getattr(run_output, "metrics", None)
        if metrics:
            time_taken = getattr(metrics, "duration", None) or getattr(metrics, "time_taken_seconds", None)
            if time_taken:
                execution_time_ms = int(time_taken * 1000)

        logger.info(
            f"Post-hook: agent={agent_name} run_id={run_id} execution_time_ms={execution_time_ms}",
            extra={"agent": agent_name},
        )
    except Exception as e:
        logger.debug(f"Run metrics post-hook failed: {e}")


def get_post_hooks() -> List[Callable]:
    """Post-hooks shared by all agents."""
    return [log_run_metrics_post_hook]
