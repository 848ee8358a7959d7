"""Memory Execution Visualizer — trace-to-step interpreter."""

from .dispatch import interpret, detect_mode  # noqa: F401
from .recipe import synthesize, Recipe  # noqa: F401
from .errors import (  # noqa: F401
    MemvizError,
    NoActiveFrameError,
    UnrecognizedPayloadError,
)
from .run_types import InterpretMode, ReplayConfig  # noqa: F401
from .step_types import Step  # noqa: F401
