"""Shared fixtures for unit tests: scripted agents and registries.

No test here talks to Gemini; agents are injected through AgentRegistry.
"""

import pytest

from src.agents.gateway import COOKING_AGENT, MERGE_AGENT, NUTRITION_AGENT, AgentRegistry
from src.models.models import AgentReply


class ScriptedAgent:
    """Fake agent returning a fixed text (or raising) and recording every call."""

    def __init__(self, text: str = "", error: Exception = None) -> None:
        self.text = text
        self.error = error
        self.calls = []

    async def generate(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AgentReply(text=self.text)

    @property
    def prompts(self) -> list[str]:
        """Content of the last message of each call."""
        return [call[-1].content for call in self.calls]


COOKING_SINGLE_REPLY = (
    '{"type":"single","dishes":["红烧肉"],"detailed":null}\n'
    "## Recipe\n"
    "- Name: 红烧肉\n"
    "### Steps\n"
    "1. Blanch the pork belly\n"
    "2. Braise with soy sauce and sugar\n"
)

COOKING_COMBINATION_REPLY = (
    '{"type":"combination","dishes":["菜A","菜B"],"detailed":"菜A"}\n'
    "## Recommended combination\n"
    "- 菜A: main dish\n"
    "- 菜B: side dish\n"
    "## CANDIDATES\n"
    "菜C | 菜D\n"
)

COOKING_NO_RECIPE_REPLY = (
    '{"type":"single","dishes":[],"detailed":null}\n'
    "## NO_RECIPE_FOUND\n"
    "Explanation: no matching recipe found\n"
    "## APPROX_METHOD\n"
    "- Cut the vegetables\n"
    "- Stir-fry on high heat\n"
    "## CANDIDATES\n"
    "清炒时蔬 | 蒜蓉西兰花\n"
)


@pytest.fixture
def make_registry():
    """Build a registry from keyword agents; pass None to leave an agent unregistered."""

    def _make(cooking=None, nutrition=None, merge=None) -> AgentRegistry:
        registry = AgentRegistry()
        for name, agent in ((COOKING_AGENT, cooking), (NUTRITION_AGENT, nutrition), (MERGE_AGENT, merge)):
            if agent is not None:
                registry.register(name, agent)
        return registry

    return _make


@pytest.fixture
def make_agent():
    """Factory for ScriptedAgent instances."""
    return ScriptedAgent


@pytest.fixture
def replies():
    """Canned cooking agent replies keyed by scenario."""
    return {
        "single": COOKING_SINGLE_REPLY,
        "combination": COOKING_COMBINATION_REPLY,
        "no_recipe": COOKING_NO_RECIPE_REPLY,
    }
