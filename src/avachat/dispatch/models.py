"""Wire and result models for dispatch."""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from .errors import DispatchError


class CompletionMessage(BaseModel):
    content: str


class CompletionChoice(BaseModel):
    message: CompletionMessage


class Completion(BaseModel):
    """Subset of an OpenAI chat completion that the client reads."""

    choices: list[CompletionChoice] = Field(min_length=1)


class ProxyResponse(BaseModel):
    """Body returned by the proxy on success: ``{"result": <completion>}``."""

    result: Completion

    @property
    def reply(self) -> str:
        """Assistant reply text from the first choice."""
        return self.result.choices[0].message.content


@dataclass
class DispatchResult:
    """Outcome of one round-trip.

    ``attempts`` counts HTTP requests actually sent.
    """

    ok: bool
    attempts: int
    reply: str | None = None
    error: DispatchError | None = None
