"""DTOs for legacy-collection cleanup runs and verification."""

from dataclasses import dataclass, field

# Firestore rejects commits with more than 500 writes.
MAX_BATCH_SIZE = 500
DEFAULT_BATCH_SIZE = 100


@dataclass(frozen=True)
class CleanupOptions:
    """Configuration of one cleanup run.

    preserve_legacy is recorded and reported but does not block deletion;
    only dry_run prevents deletes.
    """

    tenant_id: str
    batch_size: int = DEFAULT_BATCH_SIZE
    dry_run: bool = False
    preserve_legacy: bool = True

    def __post_init__(self) -> None:
        if not 1 <= self.batch_size <= MAX_BATCH_SIZE:
            raise ValueError(
                f"batch_size must be between 1 and {MAX_BATCH_SIZE}, got {self.batch_size}"
            )


@dataclass
class CleanupSummary:
    """Counts accumulated over a run. Merge and move are not implemented and stay 0."""

    collections_removed: int = 0
    documents_deleted: int = 0
    collections_merged: int = 0
    documents_moved: int = 0


@dataclass
class PhaseResult:
    """Outcome of a single cleanup phase."""

    collections_removed: int = 0
    documents_deleted: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class CleanupResult:
    """Result of a cleanup run.

    success is False only when the run itself failed unexpectedly. Errors
    on individual containers are recorded in errors and leave success True:
    partial success is a normal outcome, so callers must inspect errors.
    """

    success: bool = True
    processed: int = 0
    deleted: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    summary: CleanupSummary = field(default_factory=CleanupSummary)

    def add_phase(self, phase: PhaseResult) -> None:
        self.summary.collections_removed += phase.collections_removed
        self.summary.documents_deleted += phase.documents_deleted
        self.errors.extend(phase.errors)
        self.warnings.extend(phase.warnings)


@dataclass(frozen=True)
class VerificationResult:
    """Legacy containers that still hold documents after a run."""

    remaining_collections: list[str]
    issues: list[str]
