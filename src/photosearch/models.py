"""Pydantic models for photosearch.

Models are organized by domain:
- Config models (UnsplashConfig, SecretsConfig, PhotoSearchConfig)
- Action models (SearchRequest, PhotoResult, SearchSuccess, SearchFailure)
- Resolver models (SaveAccessKeyRequest, SaveAccessKeyResult, AccessKeyStatus)
- Manifest models (ActionInput, ActionDefinition, AgentDefinition, AgentManifest)

Resolver and manifest models accept the camelCase keys used on the wire
(``accessKey``, ``isSet``, ``conversationStarters``) through aliases.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from photosearch.constants import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_SECRETS_DB_PATH,
    MSG_UNTITLED,
    UNSPLASH_API_BASE_URL,
    UNSPLASH_PER_PAGE,
)

# =============================================================================
# CONFIG MODELS
# =============================================================================


class UnsplashConfig(BaseModel):
    """Unsplash API client configuration."""

    base_url: str = Field(default=UNSPLASH_API_BASE_URL, description="Unsplash API base URL")
    per_page: int = Field(
        default=UNSPLASH_PER_PAGE,
        ge=1,
        le=30,
        description="Results requested per search",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_HTTP_TIMEOUT_SECONDS,
        gt=0,
        description="HTTP timeout for API calls",
    )


class SecretsConfig(BaseModel):
    """Secret store configuration."""

    backend: Literal["sqlite", "memory"] = Field(
        default="sqlite",
        description="Secret store backend",
    )
    db_path: str = Field(
        default=DEFAULT_SECRETS_DB_PATH,
        description="SQLite database path (sqlite backend only)",
    )


class PhotoSearchConfig(BaseModel):
    """Root configuration for photosearch."""

    unsplash: UnsplashConfig = Field(default_factory=UnsplashConfig)
    secrets: SecretsConfig = Field(default_factory=SecretsConfig)
    manifest_path: str | None = Field(
        default=None,
        description="Agent manifest override; the bundled manifest is used when unset",
    )


# =============================================================================
# ACTION MODELS
# =============================================================================


class SearchRequest(BaseModel):
    """Parameters the agent passes to the search-photos action."""

    model_config = ConfigDict(extra="ignore")

    query: str | None = Field(default=None, description="Search terms")
    color: str | None = Field(default=None, description="Optional color filter")
    orientation: str | None = Field(default=None, description="Optional orientation filter")

    def filters(self) -> dict[str, str]:
        """Return only the optional filters that were supplied."""
        optional = {"color": self.color, "orientation": self.orientation}
        return {name: value for name, value in optional.items() if value}


class PhotoResult(BaseModel):
    """A single photo, reduced from the Unsplash search payload.

    Values other than ``description`` are passed through as the API sent
    them, so an entry with a null field still maps.
    """

    id: str | None = Field(default=None, description="Unsplash photo ID")
    description: str = Field(..., description="Description, alt text or 'Untitled'")
    url: str | None = Field(default=None, description="Full-size (regular) image URL")
    thumbnail: str | None = Field(default=None, description="Thumbnail image URL")
    photographer: str | None = Field(default=None, description="Photographer display name")
    photographer_url: str | None = Field(default=None, description="Photographer profile URL")
    download_url: str | None = Field(default=None, description="Download tracking URL")

    @classmethod
    def from_unsplash(cls, photo: dict[str, Any]) -> PhotoResult:
        """Build a result from one raw entry of the API's ``results`` array."""
        urls = photo["urls"]
        user = photo["user"]
        return cls(
            id=photo.get("id"),
            description=photo.get("description") or photo.get("alt_description") or MSG_UNTITLED,
            url=urls.get("regular"),
            thumbnail=urls.get("thumb"),
            photographer=user.get("name"),
            photographer_url=user["links"].get("html"),
            download_url=photo["links"].get("download_location"),
        )


class SearchSuccess(BaseModel):
    """Successful search, possibly with zero results."""

    status: Literal["success"] = "success"
    total: int = Field(..., ge=0, description="Total matches reported by the API")
    results: list[PhotoResult] = Field(default_factory=list, description="Mapped photos")
    message: str = Field(..., description="Human-readable summary")


class SearchFailure(BaseModel):
    """Failed search with a user-safe message."""

    status: Literal["error"] = "error"
    error: str = Field(..., description="User-facing error message")


ActionResponse = Annotated[SearchSuccess | SearchFailure, Field(discriminator="status")]


# =============================================================================
# RESOLVER MODELS
# =============================================================================


class SaveAccessKeyRequest(BaseModel):
    """Payload of the saveAccessKey resolver."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    access_key: str | None = Field(default=None, alias="accessKey", description="New access key")


class SaveAccessKeyResult(BaseModel):
    """Outcome of saveAccessKey."""

    success: bool = Field(..., description="Whether the key was stored")
    message: str | None = Field(default=None, description="Confirmation message")
    error: str | None = Field(default=None, description="User-facing error message")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class AccessKeyStatus(BaseModel):
    """Outcome of isAccessKeySet. Never carries the key itself."""

    model_config = ConfigDict(populate_by_name=True)

    is_set: bool = Field(..., alias="isSet", description="Whether a key is configured")
    error: str | None = Field(default=None, description="User-facing error message")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# MANIFEST MODELS
# =============================================================================


class ActionInput(BaseModel):
    """One input parameter of a declared action."""

    title: str = Field(..., description="Short label for the input")
    type: Literal["string", "integer", "number", "boolean"] = Field(default="string")
    required: bool = Field(default=False)
    description: str = Field(default="", description="Guidance for the agent's LLM")
    enum: list[str] | None = Field(default=None, description="Allowed values, if restricted")

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.enum:
            schema["enum"] = list(self.enum)
        return schema


class ActionDefinition(BaseModel):
    """An action the agent may call."""

    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(..., description="Action key, used as the tool name")
    name: str = Field(..., description="Display name")
    function: str = Field(..., description="Backend function that implements the action")
    description: str = Field(..., description="When the agent should use this action")
    action_verb: Literal["GET", "CREATE", "UPDATE", "DELETE", "TRIGGER"] = Field(
        default="GET",
        alias="actionVerb",
    )
    inputs: dict[str, ActionInput] = Field(default_factory=dict)

    def input_schema(self) -> dict[str, Any]:
        """Return the inputs as a JSON Schema object."""
        return {
            "type": "object",
            "properties": {name: item.json_schema() for name, item in self.inputs.items()},
            "required": [name for name, item in self.inputs.items() if item.required],
        }


class AgentDefinition(BaseModel):
    """The conversational agent's declarative configuration."""

    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(..., description="Agent key")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="Short description")
    prompt: str = Field(..., description="System prompt for the agent")
    conversation_starters: list[str] = Field(default_factory=list, alias="conversationStarters")
    actions: list[str] = Field(default_factory=list, description="Keys of actions it may call")


class AgentManifest(BaseModel):
    """The full manifest: one agent plus the actions it references."""

    agent: AgentDefinition
    actions: list[ActionDefinition] = Field(default_factory=list)

    def get_action(self, key: str) -> ActionDefinition | None:
        return next((action for action in self.actions if action.key == key), None)

    def agent_actions(self) -> list[ActionDefinition]:
        """Return the actions the agent references, in the agent's order."""
        return [
            action for key in self.agent.actions if (action := self.get_action(key)) is not None
        ]
