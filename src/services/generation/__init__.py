"""Init file for copy generation services."""

from .models import FailureReason, GenerationResult, ParseFailure, ParseSuccess
from .parser import ResponseRecoveryParser
from .shapes import CopiesWithIndex, FixedArrayOfN


__all__ = [
    "CopiesWithIndex",
    "FailureReason",
    "FixedArrayOfN",
    "GenerationResult",
    "ParseFailure",
    "ParseSuccess",
    "ResponseRecoveryParser",
]
