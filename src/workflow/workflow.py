"""Cooking assistant workflow: analyze -> nutrition -> integrate.

Runs the three steps strictly in sequence, passing the accumulating
PipelineState forward. No branching back, no retries between steps. Every
step is total, so `run` always returns a FinalOutput.

Two entry points share the same steps:
- run(query): single-shot, returns FinalOutput
- stream(query): async generator of WorkflowEvent for progress display
"""

import uuid
from typing import AsyncIterator, Optional

from src.agents.gateway import AgentLookup
from src.models.models import FinalOutput, WorkflowEvent
from src.utils.config import config
from src.utils.logger import logger
from src.workflow import analyze, integrate, nutrition


STEP_IDS = (analyze.STEP_ID, nutrition.STEP_ID, integrate.STEP_ID)


class CookingWorkflow:
    """Three-step cooking assistant pipeline bound to an agent lookup."""

    def __init__(self, get_agent: AgentLookup, scan_lines: Optional[int] = None) -> None:
        self.get_agent = get_agent
        self.scan_lines = scan_lines if scan_lines is not None else config.ANALYZER_SCAN_LINES

    async def run(self, query: str) -> FinalOutput:
        """Run the whole pipeline and return the final envelope."""
        final: Optional[FinalOutput] = None
        async for event in self.stream(query):
            if event.type == "finish":
                final = FinalOutput.model_validate(event.result)
        return final

    async def stream(self, query: str, run_id: Optional[str] = None) -> AsyncIterator[WorkflowEvent]:
        """Run the pipeline, yielding start, per-step and finish events.

        Step results are serialized with wire (camelCase) names; the finish
        event carries the FinalOutput.
        """
        run_id = run_id or str(uuid.uuid4())
        logger.info(f"=== Workflow run {run_id} started ===", extra={"run_id": run_id})
        yield WorkflowEvent(type="start", run_id=run_id)

        yield self._step_start(run_id, analyze.STEP_ID)
        state = await analyze.analyze_and_prepare_content(query, self.get_agent, self.scan_lines)
        yield self._step_result(run_id, analyze.STEP_ID, state.model_dump(by_alias=True, mode="json"))

        yield self._step_start(run_id, nutrition.STEP_ID)
        state = await nutrition.fetch_nutrition(state, self.get_agent)
        yield self._step_result(run_id, nutrition.STEP_ID, state.model_dump(by_alias=True, mode="json"))

        yield self._step_start(run_id, integrate.STEP_ID)
        final = await integrate.integrate_with_agent(state, self.get_agent)
        final_dict = final.model_dump(by_alias=True, mode="json")
        yield self._step_result(run_id, integrate.STEP_ID, final_dict)

        logger.info(
            f"=== Workflow run {run_id} finished ({final.metadata.architecture.value}) ===",
            extra={"run_id": run_id},
        )
        yield WorkflowEvent(type="finish", run_id=run_id, result=final_dict)

    @staticmethod
    def _step_start(run_id: str, step_name: str) -> WorkflowEvent:
        logger.debug(f"Step started: {step_name}", extra={"run_id": run_id, "step": step_name})
        return WorkflowEvent(type="step-start", run_id=run_id, step_name=step_name, status="running")

    @staticmethod
    def _step_result(run_id: str, step_name: str, result: dict) -> WorkflowEvent:
        return WorkflowEvent(
            type="step-result", run_id=run_id, step_name=step_name, status="success", result=result
        )
