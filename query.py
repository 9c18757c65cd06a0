#!/usr/bin/env python3
"""Ad hoc query runner for the Cooking Assistant.

Runs one query through the analyze -> nutrition -> integrate workflow without
any server.

Usage:
    python query.py "红烧肉怎么做"
    python query.py --debug "What should I eat for breakfast?"   # Also print metadata JSON
    python query.py --stream "Something light with tofu"          # Show step progress

The whole run is bounded by REQUEST_TIMEOUT_SECONDS.
"""

import asyncio
import sys

from rich.console import Console
from rich.markdown import Markdown

from src.agents.agent import initialize_agent_registry
from src.models.models import FinalOutput
from src.utils.config import config
from src.utils.logger import logger
from src.workflow.workflow import STEP_IDS, CookingWorkflow

console = Console()

STEP_DESCRIPTIONS = {
    "analyze-and-prepare-content": "🔍 Analyzing query, identifying dishes",
    "fetch-nutrition": "📊 Fetching nutrition information",
    "integrate-with-agent": "🍳 Writing the final answer",
}


async def _run_streaming(workflow: CookingWorkflow, query: str) -> FinalOutput:
    final = None
    async for event in workflow.stream(query):
        if event.type == "step-start":
            index = STEP_IDS.index(event.step_name) + 1
            console.print(f"[dim][{index}/{len(STEP_IDS)}][/dim] {STEP_DESCRIPTIONS[event.step_name]}...")
        elif event.type == "step-result":
            console.print(f"[green]  ✓ {event.step_name} {event.status}[/green]")
        elif event.type == "finish":
            final = FinalOutput.model_validate(event.result)
    return final


def run_query(query: str, debug: bool = False, stream: bool = False) -> None:
    """Execute a single query and print the answer.

    Args:
        query: The user query.
        debug: If True, print the response metadata as JSON.
        stream: If True, print step progress while the workflow runs.
    """
    try:
        registry = initialize_agent_registry()
        workflow = CookingWorkflow(get_agent=registry.get_agent)

        logger.info(f"Running query: {query}")
        coro = _run_streaming(workflow, query) if stream else workflow.run(query)
        result = asyncio.run(asyncio.wait_for(coro, timeout=config.REQUEST_TIMEOUT_SECONDS))

        console.print()
        if debug:
            console.print("[bold cyan]Debug Mode: Response Metadata[/bold cyan]")
            console.print_json(data=result.metadata.model_dump(by_alias=True, mode="json"))
            console.print()

        console.print(Markdown(result.response))

    except KeyboardInterrupt:
        logger.info("Query interrupted by user.")
        sys.exit(0)
    except asyncio.TimeoutError:
        logger.error(f"Query timed out after {config.REQUEST_TIMEOUT_SECONDS}s")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Query execution failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    debug_mode = False
    stream_mode = False
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        if sys.argv[argv_start] == "--debug":
            debug_mode = True
        elif sys.argv[argv_start] == "--stream":
            stream_mode = True
        else:
            print(f"Unknown flag: {sys.argv[argv_start]}")
            sys.exit(1)
        argv_start += 1

    if argv_start >= len(sys.argv):
        print('Usage: python query.py [--debug] [--stream] "<your query>"')
        sys.exit(1)

    # Join all arguments after flags as the query (handles queries with spaces)
    run_query(" ".join(sys.argv[argv_start:]), debug=debug_mode, stream=stream_mode)
