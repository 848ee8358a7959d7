"""Recipe synthesizer — canned step sequences without a real trace."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from . import constants
from .memory import MemoryState
from .memory_types import to_hex
from .messages import Messages, escape_newlines
from .run_types import ReplayConfig
from .snapshot import build_step
from .step_types import Step

logger = logging.getLogger(__name__)


class RecipeLocal(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    type: str | None = None
    size: int = Field(default=constants.DEFAULT_LOCAL_SIZE, ge=0)
    value: Any = 0
    line: int | None = None


class Recipe(BaseModel):
    """Outline of a tiny C program: locals, one heap block, some output."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    start_line: int | None = Field(default=None, alias="startLine")
    end_line: int | None = Field(default=None, alias="endLine")
    locals: list[RecipeLocal] = []
    heap_bytes: list[int] | None = Field(default=None, alias="heapBytes")
    print: str | None = None


def _lines(line: int | None) -> list[int]:
    return [line] if line else []


def synthesize(
    recipe: Recipe | Mapping[str, Any] | None = None,
    config: ReplayConfig = ReplayConfig(),
) -> list[Step]:
    """Build the step sequence described by *recipe*.

    The ``main`` frame is pushed first and is still live in the closing step.
    """
    if recipe is None:
        recipe = Recipe()
    elif not isinstance(recipe, Recipe):
        recipe = Recipe.model_validate(recipe)

    msg = Messages(config.locale)
    state = MemoryState()
    steps: list[Step] = []

    state.push_frame(constants.MAIN_FRAME_NAME)
    steps.append(build_step(_lines(recipe.start_line), msg("recipe.start"), state))

    for local in recipe.locals:
        state.declare_local(
            local.name,
            local.type or constants.RECIPE_DEFAULT_VTYPE,
            local.size or constants.DEFAULT_LOCAL_SIZE,
            local.value,
        )
        steps.append(
            build_step(_lines(local.line), msg("recipe.local", name=local.name), state)
        )

    if recipe.heap_bytes is not None:
        block = state.allocate_heap(len(recipe.heap_bytes), constants.RECIPE_HEAP_LABEL)
        for i, b in enumerate(recipe.heap_bytes):
            state.write_heap_byte(block.address, i, b & 0xFF)
        steps.append(
            build_step([], msg("recipe.heap", addr=to_hex(block.address)), state)
        )

    if recipe.print:
        state.append_output(recipe.print)
        steps.append(
            build_step([], msg("recipe.print", text=escape_newlines(recipe.print)), state)
        )

    steps.append(build_step(_lines(recipe.end_line), msg("recipe.end"), state))
    logger.info("Synthesized %d step(s) from recipe", len(steps))
    return steps
