# =============================================================================
# tools/formatting.py  -  Dataclasses → the text the agent reads
# =============================================================================
#
# Every function here is PURE: no I/O, no clocks, no randomness.  The same
# stories and members always render to the same bytes, so calling a tool twice
# against unchanged Shortcut data gives identical output.
#
# THE OWNER PIPELINE (two phases, one network call):
#   1. collect_owner_ids(stories)   → every owner id, deduplicated
#   2. client.get_user_map(ids)     → done by the caller, ONCE
#   3. format_story_list(stories, members) renders "@mention" tokens
#   Keeping phase 1 separate lets tests check the batch without a network.
# =============================================================================

from typing import Iterable, Mapping, Optional

from shortcut.models import Iteration, Member, Story

NONE_LABEL = "[None]"


def _label(value: Optional[object]) -> str:
    return NONE_LABEL if value is None else str(value)


def collect_owner_ids(stories: Iterable[Story]) -> list[str]:
    """Union of all owner ids across stories, first-seen order, no duplicates."""
    seen: dict[str, None] = {}
    for story in stories:
        for owner_id in story.owner_ids:
            seen.setdefault(owner_id, None)
    return list(seen)


def format_member_list(owner_ids: Iterable[str], members: Mapping[str, Member]) -> str:
    """Comma-joined "@mention" tokens for the owners we could resolve."""
    return ", ".join(
        f"@{members[owner_id].mention_name}"
        for owner_id in owner_ids
        if owner_id in members
    )


def format_story(story: Story, members: Mapping[str, Member]) -> str:
    details = [
        f"Type: {story.story_type}",
        f"State: {story.workflow_state}",
        f"Team: {_label(story.group_id)}",
        f"Epic: {_label(story.epic_id)}",
        f"Iteration: {_label(story.iteration_id)}",
    ]
    owners = format_member_list(story.owner_ids, members)
    if owners:
        details.append(f"Owners: {owners}")
    return f"- sc-{story.id}: {story.name} ({', '.join(details)})"


def format_story_list(stories: list[Story], members: Mapping[str, Member]) -> str:
    """Header plus one line per story.  Zero stories is just the header."""
    lines = [f"Result ({len(stories)} stories found):"]
    lines.extend(format_story(story, members) for story in stories)
    return "\n".join(lines)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def format_iteration(iteration: Iteration) -> str:
    return "\n".join([
        f"Iteration: {iteration.id}",
        f"Url: {iteration.app_url}",
        f"Name: {iteration.name}",
        f"Start date: {iteration.start_date}",
        f"End date: {iteration.end_date}",
        f"Completed: {_yes_no(iteration.is_completed)}",
        f"Started: {_yes_no(iteration.is_started)}",
        f"Team: {_label(iteration.team)}",
        "",
        "Description:",
        iteration.description,
    ])


def format_iteration_list(iterations: list[Iteration], total: int) -> str:
    """Search results page.  `total` is Shortcut's count, not len(iterations)."""
    if not iterations:
        return "Result: No iterations found."
    lines = [f"Result (first {len(iterations)} shown of {total} total iterations found):"]
    lines.extend(
        f"- {it.id}: {it.name} (Start date: {it.start_date}, End date: {it.end_date})"
        for it in iterations
    )
    return "\n".join(lines)
