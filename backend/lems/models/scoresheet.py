from enum import Enum


class ScoresheetStatus(str, Enum):
    empty = "empty"
    in_progress = "in-progress"
    completed = "completed"
    waiting_for_head_ref = "waiting-for-head-ref"
    ready = "ready"


LOCALIZED_SCORESHEET_STATUS = {
    ScoresheetStatus.empty: "Not started",
    ScoresheetStatus.in_progress: "In progress",
    ScoresheetStatus.completed: "Completed",
    ScoresheetStatus.waiting_for_head_ref: "Waiting for head referee",
    ScoresheetStatus.ready: "Ready",
}
