"""Application DTOs."""

from splyt.application.dto.split_dto import (
    CreateSplitInput,
    CreateSplitResult,
    ParticipantInput,
    SplitQueryOptions,
    SplitView,
)

__all__ = [
    "CreateSplitInput",
    "CreateSplitResult",
    "ParticipantInput",
    "SplitQueryOptions",
    "SplitView",
]
