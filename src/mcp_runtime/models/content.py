"""Content models returned by resource and prompt handlers."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class TextContent(BaseModel):
    """A block of text content."""

    type: Literal["text"] = "text"
    text: str


class ResourceContents(BaseModel):
    """Text contents of a resource.

    Attributes:
        uri: Concrete URI that was read
        mime_type: Content type
        text: Resource body
    """

    model_config = ConfigDict(populate_by_name=True)

    uri: str
    mime_type: str = Field(default="text/plain", alias="mimeType")
    text: str


class ReadResourceResult(BaseModel):
    """Result of reading a resource."""

    contents: list[ResourceContents]

    @classmethod
    def text(cls, uri: str, text: str, mime_type: str = "text/plain") -> "ReadResourceResult":
        """Build a single-entry text result."""
        return cls(contents=[ResourceContents(uri=uri, mime_type=mime_type, text=text)])


class PromptMessage(BaseModel):
    """One message of an expanded prompt."""

    role: Literal["user", "assistant"]
    content: TextContent

    @classmethod
    def user(cls, text: str) -> "PromptMessage":
        return cls(role="user", content=TextContent(text=text))

    @classmethod
    def assistant(cls, text: str) -> "PromptMessage":
        return cls(role="assistant", content=TextContent(text=text))


class PromptResult(BaseModel):
    """Result of expanding a prompt template.

    Attributes:
        description: Short title of the expanded prompt
        messages: Conversation messages
    """

    description: Optional[str] = None
    messages: list[PromptMessage]
