"""Sequential counter ids kept under tenants/{tenant_id}/counters/{counter_id}."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CounterConfig:
    """Counter document id and the display format of the numbers it issues."""

    counter_id: str
    prefix: str
    padding: int
    description: str

    def format(self, value: int) -> str:
        return format_counter_id(self.prefix, value, self.padding)


def format_counter_id(prefix: str, value: int, padding: int = 4) -> str:
    """Format a counter value for display, e.g. ("JO-", 7, 4) -> "JO-0007"."""
    return f"{prefix}{str(value).zfill(padding)}"


JOB_ORDER_NUMBER = CounterConfig("jobOrderNumber", "JO-", 4, "Job Order Number")
APPLICATION_NUMBER = CounterConfig("applicationNumber", "APP-", 4, "Application Number")
ASSIGNMENT_NUMBER = CounterConfig("assignmentNumber", "ASG-", 4, "Assignment Number")
CANDIDATE_NUMBER = CounterConfig("candidateNumber", "CAN-", 4, "Candidate Number")
TASK_NUMBER = CounterConfig("taskNumber", "TASK-", 4, "Task Number")
POST_NUMBER = CounterConfig("postNumber", "POST-", 4, "Job Board Post Number")

COUNTER_CONFIGS: tuple[CounterConfig, ...] = (
    JOB_ORDER_NUMBER,
    APPLICATION_NUMBER,
    ASSIGNMENT_NUMBER,
    CANDIDATE_NUMBER,
    TASK_NUMBER,
    POST_NUMBER,
)
