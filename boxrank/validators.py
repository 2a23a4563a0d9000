"""Sanity checks for player/match snapshots."""

from .models import Match, Player


def validate_match(match: Match) -> list[str]:
    """
    Check a single match record for internal consistency.

    Checks:
    - At most one special marker is set
    - Markers name one of the two participants
    - Set scores are not negative and not half-filled

    Args:
        match: Match to check

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    markers = match.markers
    if len(markers) > 1:
        kinds = ', '.join(sorted(markers))
        warnings.append(f'Match {match.match_id} has several special markers ({kinds})')

    for kind, player_id in markers.items():
        if not match.involves(player_id):
            warnings.append(
                f'Match {match.match_id} {kind} marker names {player_id} who is not playing'
            )

    for side, score in (('a', match.score_a), ('b', match.score_b)):
        if score is not None and score < 0:
            warnings.append(f'Match {match.match_id} has negative score_{side} ({score})')

    if (match.score_a is None) != (match.score_b is None):
        warnings.append(f'Match {match.match_id} has only one side of the score')

    return warnings


def validate_snapshot(
    players: list[Player],
    matches: list[Match],
) -> tuple[list[str], list[str]]:
    """
    Validate a roster and its matches.

    Errors are records the aggregators will skip; warnings are records they
    will accept but interpret in a fixed way (marker priority, unplayed for
    bad scores).

    Args:
        players: Roster
        matches: Matches

    Returns:
        Tuple of (errors, warnings)
    """
    errors: list[str] = []
    warnings: list[str] = []

    player_ids = set()
    for player in players:
        if player.player_id in player_ids:
            errors.append(f'Duplicate player id {player.player_id}')
        player_ids.add(player.player_id)

    match_ids = set()
    for match in matches:
        if match.match_id in match_ids:
            errors.append(f'Duplicate match id {match.match_id}')
        match_ids.add(match.match_id)

        if match.player_a_id == match.player_b_id:
            errors.append(f'Match {match.match_id} pits {match.player_a_id} against themselves')

        unknown = [pid for pid in match.participants if pid not in player_ids]
        if unknown:
            errors.append(
                f'Match {match.match_id} references unknown players: {", ".join(unknown)}'
            )

        warnings.extend(validate_match(match))

    return errors, warnings
