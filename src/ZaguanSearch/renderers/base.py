"""Base class for batch result writers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence


class ResultWriter(ABC):
    """Abstract sink for the ranked hits of each information need."""

    @abstractmethod
    def write_need_result(self, identifier: str, documents: Sequence[Optional[str]]) -> None:
        """Write the ranked documents of one information need.

        Args:
            identifier: Information-need identifier.
            documents: Document names in rank order; None for a hit without
                a stored path.
        """

    def finalize(self) -> None:
        """Flush buffered output. No-op by default."""
