# =============================================================================
# shortcut/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# Read-only snapshots of the Shortcut records the tools care about.  They are
# built fresh from the API response on every tool call and never mutated.
#
# DESIGN PRINCIPLE - "Optional means Optional":
#   Shortcut leaves many fields out (a story with no epic has no epic_id).
#   Those fields are Optional here, and the formatter decides what to print
#   for None ("[None]").  We never rely on falsy coercion: an epic with id 0
#   is still an epic.
#
# Each model has a from_api() classmethod that accepts the raw JSON dict.
# Unknown keys are ignored, so Shortcut adding fields never breaks us.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


# -----------------------------------------------------------------------------
# IterationStatus - the values of Iteration.status we recognise
# -----------------------------------------------------------------------------
class IterationStatus:
    UNSTARTED = "unstarted"
    STARTED = "started"
    COMPLETED = "completed"


# -----------------------------------------------------------------------------
# Member - a workspace member, used to render "@mention" owner tokens
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Member:
    """A Shortcut workspace member."""

    id: str                            # UUID
    name: str                          # Display name: "Jane Smith"
    mention_name: str                  # Handle without the "@": "jane"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Member":
        # GET /member returns the fields flat; GET /members nests them
        # under "profile".
        profile = data.get("profile") or {}
        return cls(
            id=data["id"],
            name=profile.get("name", data.get("name", "")),
            mention_name=profile.get("mention_name", data.get("mention_name", "")),
        )


# -----------------------------------------------------------------------------
# Story - one work item inside an iteration
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Story:
    """A Shortcut story, trimmed to what the story-list line shows."""

    id: int
    name: str
    story_type: str                    # "feature", "bug" or "chore"
    started: bool = False
    completed: bool = False
    group_id: Optional[str] = None     # Team
    epic_id: Optional[int] = None
    iteration_id: Optional[int] = None
    owner_ids: tuple[str, ...] = ()    # Order matters: owners render in this order

    @property
    def workflow_state(self) -> str:
        if self.completed:
            return "Completed"
        if self.started:
            return "In Progress"
        return "Not Started"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Story":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            story_type=data.get("story_type", ""),
            started=bool(data.get("started", False)),
            completed=bool(data.get("completed", False)),
            group_id=data.get("group_id"),
            epic_id=data.get("epic_id"),
            iteration_id=data.get("iteration_id"),
            owner_ids=tuple(data.get("owner_ids") or ()),
        )


# -----------------------------------------------------------------------------
# Iteration - a time-boxed sprint
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Iteration:
    """A Shortcut iteration."""

    id: int                            # Public ID, the one users type
    name: str
    description: str = ""
    start_date: str = ""               # ISO date: "2023-01-01"
    end_date: str = ""
    status: str = IterationStatus.UNSTARTED
    app_url: str = ""
    group_ids: tuple[str, ...] = ()    # Teams the iteration belongs to

    # Completed and Started are each derived from the one status field, so
    # they can never both be true.
    @property
    def is_completed(self) -> bool:
        return self.status == IterationStatus.COMPLETED

    @property
    def is_started(self) -> bool:
        return self.status == IterationStatus.STARTED

    @property
    def team(self) -> Optional[str]:
        if not self.group_ids:
            return None
        return ", ".join(self.group_ids)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Iteration":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description") or "",
            start_date=data.get("start_date", ""),
            end_date=data.get("end_date", ""),
            status=data.get("status", IterationStatus.UNSTARTED),
            app_url=data.get("app_url", ""),
            group_ids=tuple(data.get("group_ids") or ()),
        )


# -----------------------------------------------------------------------------
# IterationSearchResult - one page of search results
# -----------------------------------------------------------------------------
# iterations=None is NOT the same as iterations=[]:
#   - []   → the search ran and matched nothing
#   - None → the response had no result list at all (a failure)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class IterationSearchResult:
    """The iterations on this page plus Shortcut's total match count."""

    iterations: Optional[list[Iteration]]
    total: int = 0
    next: Optional[str] = None         # Cursor for the next page, if any
    # The tools report exactly this one page; they never follow `next`.

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "IterationSearchResult":
        raw = data.get("data")
        return cls(
            iterations=None if raw is None else [Iteration.from_api(item) for item in raw],
            total=data.get("total", 0),
            next=data.get("next"),
        )
