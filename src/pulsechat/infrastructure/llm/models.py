"""Pydantic models for structured output."""

from typing import Literal

from pydantic import BaseModel, Field


class ActionPlanOutput(BaseModel):
    """Output model for action routing."""

    actions: list[str] = Field(
        default_factory=list,
        description="List of actions to execute (e.g., 'priority', 'calendar')",
    )
    priority: Literal["high", "medium", "low"] | None = Field(
        default=None,
        description="Overall priority of the message",
    )
    reasoning: str | None = Field(
        default=None,
        description="Brief reasoning for the action selection",
    )


class ContextDepthOutput(BaseModel):
    """Output model for history depth estimation."""

    depth: int = Field(
        ge=0,
        le=10,
        description="Number of previous messages needed for context",
    )
    reason: str = Field(description="Brief reason for the depth requirement")


class PriorityOutput(BaseModel):
    """Output model for priority detection."""

    is_priority: bool = Field(
        description="Whether this message contains priority information"
    )
    level: Literal["high", "urgent"] | None = Field(
        default=None,
        description="Priority level",
    )
    reason: str | None = Field(default=None, description="Brief reason for priority")


class CalendarEventOutput(BaseModel):
    """One extracted calendar event."""

    title: str = Field(description="Meeting/event title")
    description: str | None = Field(
        default=None,
        description="Brief description of the event or what will be discussed",
    )
    date: str = Field(description="Date in ISO format YYYY-MM-DD")
    time: str | None = Field(
        default=None,
        description="Time if specified (HH:MM format)",
    )
    participants: list[str] | None = Field(
        default=None,
        description="Mentioned participants by name",
    )


class CalendarEventsOutput(BaseModel):
    """Output model for calendar extraction."""

    events: list[CalendarEventOutput] = Field(default_factory=list)


class SummaryOutput(BaseModel):
    """Output model for chat summarization."""

    summary: str = Field(description="Concise summary of the conversation")


class ActionItemOutput(BaseModel):
    """One extracted action item."""

    text: str = Field(description="Description of the task")
    assignee: str | None = Field(
        default=None,
        description="Name of the person responsible, if mentioned",
    )
    dueDate: str | None = Field(
        default=None,
        description="Due date in ISO format YYYY-MM-DD, if mentioned",
    )
    status: Literal["pending", "done"] | None = Field(
        default=None,
        description="Whether the task is still pending or already done",
    )


class ActionItemsOutput(BaseModel):
    """Output model for action item extraction."""

    items: list[ActionItemOutput] = Field(default_factory=list)


class DecisionOutput(BaseModel):
    """One extracted decision."""

    subject: str = Field(description="What the decision is about")
    decision: str = Field(description="What was decided")
    messageIndex: int | None = Field(
        default=None,
        description="Number of the message where the decision was made",
    )


class DecisionsOutput(BaseModel):
    """Output model for decision extraction."""

    decisions: list[DecisionOutput] = Field(default_factory=list)


class SearchResultOutput(BaseModel):
    """One search hit."""

    index: int = Field(description="Number of the matching message")
    relevance: float = Field(ge=0, le=100, description="Relevance score 0-100")
    snippet: str = Field(description="Relevant excerpt of the message")


class SearchResultsOutput(BaseModel):
    """Output model for message search."""

    results: list[SearchResultOutput] = Field(default_factory=list)
