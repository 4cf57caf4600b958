from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Tuple

class SlashCommand(BaseModel):
    name: str
    description: str = ""
    requires_argument: bool = True
    tooltip_text: str = ""

class CommandInvocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    arguments: Tuple[str, ...] = Field(default_factory=tuple, description="Positional arguments in order")

class OutputSection(BaseModel):
    range: Tuple[int, int] = Field(description="Half-open [start, end) span into the output text")
    label: str

class SlashCommandOutput(BaseModel):
    text: str
    sections: List[OutputSection] = Field(default_factory=list)

    def sections_in_bounds(self) -> bool:
        """Whether every section range lies within [0, len(text)]"""
        return all(
            0 <= section.range[0] <= section.range[1] <= len(self.text)
            for section in self.sections
        )

class JinaResponse(BaseModel):
    """JSON envelope returned by the reader for the asynchronous strategy"""
    model_config = ConfigDict(extra="ignore")

    text: str

class SlashCommandRequest(BaseModel):
    name: str
    arguments: List[str] = Field(default_factory=list)

class SlashCommandResponse(SlashCommandOutput):
    invocation_id: Optional[str] = Field(None, description="Set when the fetch runs in the background")
