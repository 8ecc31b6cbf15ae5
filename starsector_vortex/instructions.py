"""
Install instructions returned to the host.

The host executes these after we return: attribute instructions set fields
on the installed mod's record, copy instructions move one file from the
extracted package into the game's mod directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union


@dataclass(frozen=True)
class AttributeInstruction:
    key: str
    value: str

    type: ClassVar[str] = "attribute"

    def to_dict(self) -> dict:
        return {"type": self.type, "key": self.key, "value": self.value}


@dataclass(frozen=True)
class CopyInstruction:
    source: str                              # relative to the package root
    destination: str                         # relative to the game's mod directory

    type: ClassVar[str] = "copy"

    def to_dict(self) -> dict:
        return {"type": self.type, "source": self.source, "destination": self.destination}


Instruction = Union[AttributeInstruction, CopyInstruction]


@dataclass
class InstallResult:
    """Everything the host needs to install one package, attributes first."""
    instructions: list[Instruction] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"instructions": [i.to_dict() for i in self.instructions]}


@dataclass
class SupportedResult:
    """Answer to the host's "can you install this?" probe."""
    supported: bool
    required_files: Optional[list[str]] = None

    def to_dict(self) -> dict:
        return {"supported": self.supported, "requiredFiles": self.required_files}
