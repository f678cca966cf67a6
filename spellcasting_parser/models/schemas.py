"""
Pydantic Models and Schemas
===========================

Typed AST for parsed spells plus the parse result model.
All AST nodes are frozen: they are built once by the converter and never mutated.
"""

from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

U32_MAX = 2**32 - 1


class FrozenModel(BaseModel):
    """Base model for immutable AST nodes."""

    model_config = ConfigDict(frozen=True, extra="forbid")


# Modifiers
class Adjective(FrozenModel):
    """Free-form descriptive word, e.g. "flaming"."""

    kind: Literal["adjective"] = "adjective"
    value: str = Field(..., description="Adjective text as written")

    def __str__(self) -> str:
        return f"Adjective: {self.value}"


class Repetition(FrozenModel):
    """Repeat count, e.g. "3 times"."""

    kind: Literal["repetition"] = "repetition"
    value: int = Field(..., ge=0, le=U32_MAX, description="Unsigned 32-bit repeat count")

    def __str__(self) -> str:
        return f"Repetition: {self.value}"


class Condition(FrozenModel):
    """Condition clause, e.g. "is burning"."""

    kind: Literal["condition"] = "condition"
    condition_type: str = Field(..., description="Condition text as written")

    def __str__(self) -> str:
        return f"Condition: {self.condition_type}"


class Duration(FrozenModel):
    """Duration with its unit, kept verbatim, e.g. "5s"."""

    kind: Literal["duration"] = "duration"
    value: str = Field(..., description="Duration text as written")

    def __str__(self) -> str:
        return f"Duration: {self.value}"


Modifier = Annotated[
    Union[Adjective, Repetition, Condition, Duration],
    Field(discriminator="kind"),
]


class Modifiers(FrozenModel):
    """Ordered modifiers of a clause. Source order is kept, duplicates are kept."""

    modifiers: Tuple[Modifier, ...] = Field(default=(), description="Modifiers in source order")

    def __str__(self) -> str:
        if not self.modifiers:
            return "No modifiers"
        return ", ".join(str(m) for m in self.modifiers)

    def __len__(self) -> int:
        return len(self.modifiers)


# Clauses
class SpellTypePart(FrozenModel):
    """Subject of a spell and its modifiers."""

    spell_type: str = Field(..., min_length=1, description="Spell type identifier")
    modifiers: Modifiers = Field(default_factory=Modifiers)

    def __str__(self) -> str:
        return f"{self.spell_type} with modifiers: [{self.modifiers}]"


class Executable(FrozenModel):
    """Action text, possibly several words ("apply heal")."""

    value: str = Field(..., min_length=1, description="Action text as written")

    def __str__(self) -> str:
        return f"Executable: {self.value}"


class ExecutablePart(FrozenModel):
    """One action clause and its modifiers."""

    executable: Executable
    modifiers: Modifiers = Field(default_factory=Modifiers)

    def __str__(self) -> str:
        return f"{self.executable.value} with modifiers: [{self.modifiers}]"


class Spell(FrozenModel):
    """One DSL statement."""

    invoke_word: str = Field(..., min_length=1, description="Leading keyword")
    spell_type_params: SpellTypePart
    executable_params: Tuple[ExecutablePart, ...] = Field(
        ..., min_length=1, description="Action clauses in source order"
    )

    def __str__(self) -> str:
        executables = ", ".join(str(p) for p in self.executable_params)
        return (
            f"Invoke: {self.invoke_word}\n"
            f"Spell Type: {self.spell_type_params}\n"
            f"Executable Params: {executables}\n"
        )


class Spells(FrozenModel):
    """Root of the AST: spells in source order. Empty for empty input."""

    spells: Tuple[Spell, ...] = Field(default=(), description="Parsed spells")

    def __str__(self) -> str:
        return "Spells:\n" + "".join(f"{spell}\n" for spell in self.spells)

    def __len__(self) -> int:
        return len(self.spells)


# Parsing Results
class ParseResult(BaseModel):
    """Result of a non-raising parse."""

    success: bool = Field(..., description="Whether parsing succeeded")
    spells: Optional[Spells] = Field(None, description="Parsed spells")
    errors: List[str] = Field(default_factory=list, description="Parsing errors")
    error_kind: Optional[Literal["syntax", "structural"]] = Field(
        None, description="Which stage rejected the input"
    )
    position: Optional[int] = Field(None, description="Source offset of the failure")
    processing_time: Optional[float] = Field(None, description="Parsing time in seconds")
