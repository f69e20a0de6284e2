"""
Request and response bodies for the HTTP API.

Bodies use camelCase field names, matching the stored node properties.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, model_validator
from pydantic.alias_generators import to_camel

from syllabus_graph.models.concept import ConceptType
from syllabus_graph.models.learning_path import LearningPathStatus, LearningPathStep
from syllabus_graph.models.resource import Resource, ResourceType


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Concepts


class CreateConceptRequest(ApiModel):
    id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    type: ConceptType
    description: str | None = Field(default=None, max_length=1000)
    parent_id: str | None = Field(default=None, max_length=100)


class UpdateConceptRequest(ApiModel):
    """Partial update; an empty or null `parentId` detaches the concept."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    type: ConceptType | None = None
    description: str | None = Field(default=None, max_length=1000)
    parent_id: str | None = Field(default=None, max_length=100)


class CreatePrerequisiteRequest(ApiModel):
    prerequisite_id: str = Field(..., min_length=1, max_length=100)


class MessageResponse(ApiModel):
    message: str


# Resources


class CreateResourceRequest(ApiModel):
    name: str = Field(..., min_length=2, max_length=255)
    type: ResourceType
    url: HttpUrl
    concept_id: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    price: float = Field(default=0, ge=0)
    grade: str | None = Field(default=None, max_length=50)
    is_public: bool = True
    tags: list[str] = Field(default_factory=list)

    def to_fields(self) -> dict:
        fields = self.model_dump(exclude={"name", "url", "type", "concept_id"})
        return {**fields, "title": self.name, "url": str(self.url), "type": self.type.value}


class UpdateResourceRequest(ApiModel):
    name: str | None = Field(default=None, min_length=2, max_length=255)
    type: ResourceType | None = None
    url: HttpUrl | None = None
    description: str | None = Field(default=None, max_length=1000)
    price: float | None = Field(default=None, ge=0)
    grade: str | None = Field(default=None, max_length=50)
    is_public: bool | None = None
    tags: list[str] | None = None

    def to_changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True, exclude={"name", "url", "type"})
        if self.name is not None:
            changes["title"] = self.name
        if self.url is not None:
            changes["url"] = str(self.url)
        if self.type is not None:
            changes["type"] = self.type.value
        return changes


class CreateResourceResponse(ApiModel):
    resource: Resource
    upload_url: str


# Questions


class CreateQuestionRequest(ApiModel):
    id: UUID | None = None
    question_text: str = Field(..., min_length=5, max_length=1000)
    options: list[str] = Field(..., min_length=2)
    correct_answer: str = Field(..., min_length=1)
    explanation: str | None = Field(default=None, max_length=500)
    tags: list[str] = Field(default_factory=list)
    concept_id: str | None = Field(default=None, max_length=100)

    @model_validator(mode="after")
    def answer_in_options(self):
        if self.correct_answer not in self.options:
            raise ValueError("correctAnswer must be one of the options")
        return self


class UpdateQuestionRequest(ApiModel):
    question_text: str | None = Field(default=None, min_length=5, max_length=1000)
    options: list[str] | None = Field(default=None, min_length=2)
    correct_answer: str | None = Field(default=None, min_length=1)
    explanation: str | None = Field(default=None, max_length=500)
    tags: list[str] | None = None
    concept_id: str | None = Field(default=None, max_length=100)


# Learning paths


class CreateLearningPathRequest(ApiModel):
    learning_goal: str = Field(..., min_length=1, max_length=1000)
    request_id: str | None = None
    difficulty_level: str | None = None


class UpdateLearningPathRequest(ApiModel):
    status: LearningPathStatus = LearningPathStatus.COMPLETED
    steps: list[LearningPathStep] = Field(default_factory=list)
    total_duration: str | None = None
    difficulty_level: str | None = None


# Health


class HealthResponse(ApiModel):
    status: str
    timestamp: str
    service: str
    database: str
