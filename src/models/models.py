"""Data models and schemas for the cooking assistant pipeline.

Pydantic v2 models for the state threaded through the three workflow steps,
the final response envelope, and the streaming events.

Wire names are camelCase (originalQuery, identifiedDishes, ...) through an
alias generator; Python code uses the snake_case attribute names. Serialize
with `model_dump(by_alias=True)` to get the external shape.
"""

from enum import Enum
from typing import Any, List, Literal, Optional, Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class QueryType(str, Enum):
    """Kind of request identified by the cooking agent."""

    SINGLE = "single"
    COMBINATION = "combination"


class Architecture(str, Enum):
    """Which integration branch produced the final response."""

    INTEGRATED = "agent-integrated"
    UNAVAILABLE = "agent-unavailable"
    ERROR = "agent-error"


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AgentMessage(BaseModel):
    """Role-tagged message sent to an agent."""

    role: Annotated[Literal["system", "user", "assistant"], Field(description="Message author role")]
    content: Annotated[str, Field(description="Message text")]


class AgentReply(BaseModel):
    """Generated text returned by an agent."""

    text: Annotated[str, Field("", description="Generated free text (empty when the model returned nothing)")]


class AnalysisResult(_WireModel):
    """Structured intent parsed out of the cooking agent's free text.

    Produced by `parse_analyzer_output`; never raised from, every field has a
    documented default for malformed input.
    """

    query_type: Annotated[QueryType, Field(QueryType.SINGLE, description="single or combination")]
    dishes: Annotated[List[str], Field(default_factory=list, description="Dish names recognized in the catalog")]
    detailed_dish: Annotated[Optional[str], Field(None, description="Dish selected for full detail")]
    candidates: Annotated[List[str], Field(default_factory=list, description="Near-miss dish names")]
    approx_method: Annotated[
        Optional[str], Field(None, description="Fallback cooking guidance, only when no dish matched")
    ]
    json_found: Annotated[bool, Field(False, description="Whether the header JSON line was found and parsed")]


class PipelineState(_WireModel):
    """Accumulating record threaded through analyze -> nutrition -> integrate.

    Frozen: steps never mutate their input, they return `model_copy(update=...)`
    with their own fields. Fields owned by earlier steps pass through untouched.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    # Step 1: analyze-and-prepare-content
    original_query: Annotated[str, Field(description="User query exactly as received")]
    query_type: Annotated[QueryType, Field(QueryType.SINGLE, description="Query type, single on any parse failure")]
    identified_dishes: Annotated[List[str], Field(default_factory=list, description="Recognized dish names (0..N)")]
    detailed_dish: Annotated[Optional[str], Field(None, description="Dish expanded in detail")]
    has_any_recipe: Annotated[bool, Field(False, description="True when at least one dish was recognized")]
    cooking_info_raw: Annotated[Optional[str], Field(None, description="Raw cooking agent text or sentinel")]
    approx_method: Annotated[Optional[str], Field(None, description="Approximate method when nothing matched")]
    candidates: Annotated[Optional[List[str]], Field(None, description="Near-miss dish names")]

    # Step 2: fetch-nutrition
    has_nutrition_info: Annotated[bool, Field(False, description="True only if the nutrition agent answered")]
    nutrition_info: Annotated[Optional[str], Field(None, description="Raw nutrition agent text")]

    @property
    def main_dish(self) -> Optional[str]:
        """The dish the answer is about: the detailed dish of a combination, else the first identified dish."""
        if self.query_type == QueryType.COMBINATION:
            return self.detailed_dish or None
        return self.identified_dishes[0] if self.identified_dishes else None

    @property
    def other_dishes(self) -> List[str]:
        """Identified dishes other than the main and detailed dish."""
        answered = {self.main_dish, self.detailed_dish}
        return [dish for dish in self.identified_dishes if dish not in answered]


class ResponseMetadata(_WireModel):
    """Stable metadata contract returned with every response, whichever branch ran."""

    dishes: Annotated[List[str], Field(default_factory=list, description="Identified dishes")]
    query_type: Annotated[QueryType, Field(description="single or combination")]
    detailed_dish: Annotated[Optional[str], Field(None, description="Dish expanded in detail")]
    has_any_recipe: Annotated[bool, Field(description="Whether any recipe matched")]
    has_nutrition_info: Annotated[bool, Field(description="Whether nutrition data was obtained")]
    architecture: Annotated[Architecture, Field(description="Integration branch tag")]


class FinalOutput(_WireModel):
    """Response envelope: user-visible text plus metadata."""

    response: Annotated[str, Field(description="Markdown answer shown to the user")]
    metadata: ResponseMetadata


class WorkflowEvent(_WireModel):
    """Progress event emitted by the streaming variant of the workflow.

    Sequence per run: start, (step-start, step-result) x 3, finish.
    """

    type: Annotated[Literal["start", "step-start", "step-result", "finish"], Field(description="Event kind")]
    run_id: Annotated[str, Field(description="Identifier shared by all events of one run")]
    step_name: Annotated[Optional[str], Field(None, description="Step id for step events")]
    status: Annotated[Optional[Literal["running", "success"]], Field(None, description="Step status")]
    result: Annotated[Optional[dict[str, Any]], Field(None, description="Step output or final output (by alias)")]
