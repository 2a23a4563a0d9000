"""Match outcome resolution from one player's perspective."""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from .config import get_config
from .constants import NEXT_BOX_STATUS_COLORS, UNPLAYED_TEXT
from .models import Match, Outcome, ResolvedOutcome
from .schemas import ColorPair, StandingsConfig


def _resolved(outcome: Outcome, text: str, colors: ColorPair, label: Optional[str] = None) -> ResolvedOutcome:
    return ResolvedOutcome(
        outcome=outcome,
        text=text,
        background=colors.background,
        foreground=colors.foreground,
        label=label,
    )


def format_scheduled(when: datetime, timezone: Optional[str] = None) -> str:
    """
    Format a scheduled time on two lines, DD/MM then HH:MM.

    Aware datetimes are converted to timezone when one is given, otherwise to
    the local time of the host; naive datetimes are shown as-is.
    """
    if when.tzinfo is not None:
        when = when.astimezone(ZoneInfo(timezone)) if timezone else when.astimezone()
    return f'{when:%d/%m}\n{when:%H:%M}'


def resolve_outcome(
    match: Match,
    perspective_id: str,
    config: Optional[StandingsConfig] = None,
) -> ResolvedOutcome:
    """
    Classify a match for one of its participants.

    Priority (fixed):
        1. No-show marker
        2. Retirement marker
        3. Postponement marker
        4. Set score (win / loss)
        5. Scheduled time
        6. Unplayed

    Markers always beat a score, since a stale score may remain on a match
    after a marker was added. Negative or half-missing scores are not a
    usable score and fall through to the scheduled/unplayed cases.

    Args:
        match: Match to classify
        perspective_id: Player the result is seen from
        config: Display settings (default: get_config())

    Returns:
        ResolvedOutcome with outcome, cell text, label and colours

    Raises:
        ValueError: If perspective_id is not one of the two participants
    """
    if not match.involves(perspective_id):
        raise ValueError(
            f'Player {perspective_id} does not play in match {match.match_id}'
        )
    config = config or get_config()

    marker = match.special_marker
    if marker is not None:
        kind, marker_player = marker
        outcome = Outcome.special(kind, marker_player == perspective_id)
        texts = config.special_texts[outcome.value]
        return _resolved(outcome, texts.text, config.neutral, texts.label)

    if match.has_score:
        mine, theirs = match.sets_for(perspective_id)
        if mine > theirs:
            return _resolved(Outcome.NORMAL_WIN, f'{mine}-{theirs}', config.win)
        return _resolved(Outcome.NORMAL_LOSS, f'{mine}-{theirs}', config.loss)

    if match.scheduled_at is not None:
        text = format_scheduled(match.scheduled_at, config.display_timezone)
        return _resolved(Outcome.SCHEDULED_PENDING, text, config.scheduled)

    return _resolved(Outcome.UNPLAYED, UNPLAYED_TEXT, config.unplayed)


def unplayed_outcome(config: Optional[StandingsConfig] = None) -> ResolvedOutcome:
    """Placeholder for a pair with no match on record."""
    config = config or get_config()
    return _resolved(Outcome.UNPLAYED, UNPLAYED_TEXT, config.unplayed)


def is_special_case(match: Match) -> bool:
    """True when the match did not conclude by normal play."""
    return match.is_special_case


def format_match_score(
    match: Match,
    player_id: str,
    config: Optional[StandingsConfig] = None,
) -> str:
    """Long label for special cases, "<mine>-<theirs>" for scored matches, else cell text."""
    resolved = resolve_outcome(match, player_id, config)
    if resolved.outcome.is_special:
        return resolved.label or resolved.text
    return resolved.text


def next_box_status_color(status: Optional[str]) -> Optional[str]:
    """Row accent colour for a next-box status tag, or None if untagged."""
    if not status:
        return None
    return NEXT_BOX_STATUS_COLORS.get(status)
