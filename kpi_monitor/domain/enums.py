"""Domain enums for indicator definitions and status."""

from enum import Enum


class AggregationKind(str, Enum):
    """How monthly records collapse into one yearly figure."""

    SUM = "sum"
    AVERAGE = "avg"


class DisplayFormat(str, Enum):
    """Display format of an indicator value."""

    CURRENCY = "currency"
    PERCENTAGE = "percentage"
    COUNT = "number"


class ComplianceStatus(str, Enum):
    """Traffic-light status of an indicator against its target."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    GRAY = "gray"  # No data or no target


class ImportOutcome(str, Enum):
    """Final classification of an import run."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


class CommitPolicy(str, Enum):
    """How batch writes of one import relate to each other.

    INDEPENDENT_CHUNKS: every chunk is written on its own. A failed chunk is
    reported and skipped; chunks already written stay written. There is no
    atomicity across chunks, so a partial import leaves the destination
    table holding a strict subset of the intended rows.
    """

    INDEPENDENT_CHUNKS = "independent_chunks"
