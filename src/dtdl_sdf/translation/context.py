"""
Batch conversion context.

In multi-document DTDL -> SDF mode the first document is the root; the
Components it declares decide which of the following documents are kept.
That state lives in a ConversionContext owned by the caller and passed
explicitly to every conversion call. A context must not be shared
between threads.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set

from ..sdf.sdf_models import SDFDocument

logger = logging.getLogger(__name__)


class BatchStatus(str, Enum):
    """What happened to one input of a batch."""
    ROOT = "root"
    MERGED = "merged"
    DROPPED = "dropped"


@dataclass
class BatchOutcome:
    """Record of one processed input."""
    identifier: str
    status: BatchStatus
    source: Optional[str] = None

    def __str__(self) -> str:
        where = f" ({self.source})" if self.source else ""
        return f"{self.identifier}{where}: {self.status.value}"


@dataclass
class ConversionContext:
    """
    State threaded through the documents of one batch.

    Attributes:
        required_components: DTMIs named as Component schemas by the root
        root: The translated root document, once the first input is done
        outcomes: One entry per processed input, in order
    """
    required_components: Set[str] = field(default_factory=set)
    root: Optional[SDFDocument] = None
    outcomes: List[BatchOutcome] = field(default_factory=list)

    @property
    def has_root(self) -> bool:
        return self.root is not None

    def require(self, identifier: str) -> None:
        """Record that the root embeds the Interface ``identifier``."""
        self.required_components.add(identifier)

    def is_required(self, identifier: str) -> bool:
        return identifier in self.required_components

    def record(self, identifier: str, status: BatchStatus, source: Optional[str] = None) -> None:
        self.outcomes.append(BatchOutcome(identifier, status, source))
        if status is BatchStatus.DROPPED:
            logger.info(f"Skipping {identifier}: not a component of the root document")
        else:
            logger.debug(f"{identifier}: {status.value}")

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        merged = sum(1 for o in self.outcomes if o.status is BatchStatus.MERGED)
        dropped = [o for o in self.outcomes if o.status is BatchStatus.DROPPED]
        lines = [
            "Batch Summary:",
            f"  Inputs: {len(self.outcomes)}",
            f"  Merged components: {merged}",
            f"  Dropped: {len(dropped)}",
        ]
        for outcome in dropped:
            lines.append(f"    - {outcome}")
        return "\n".join(lines)
