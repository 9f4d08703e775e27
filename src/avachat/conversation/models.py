"""Data models for conversation state."""

from pydantic import BaseModel, ConfigDict, Field

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"


class Message(BaseModel):
    """One turn in the conversation.

    Roles are not validated; the proxy decides what it accepts.
    """

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user' or 'assistant'")
    content: str = Field(description="Content of the message")

    @classmethod
    def user(cls, content: str) -> "Message":
        """Create a user message."""
        return cls(role=USER_ROLE, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        """Create an assistant message."""
        return cls(role=ASSISTANT_ROLE, content=content)

    def to_payload(self) -> dict[str, str]:
        """Convert to the wire format sent to the proxy."""
        return {"role": self.role, "content": self.content}
