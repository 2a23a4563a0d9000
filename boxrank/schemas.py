"""Pydantic schemas for club API snapshots and configuration."""

from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DIAGONAL_COLORS,
    LOSS_COLORS,
    NEUTRAL_COLORS,
    POINTS_PER_SET,
    SCHEDULED_COLORS,
    SPECIAL_LABELS,
    SPECIAL_TEXTS,
    UNPLAYED_COLORS,
    WIN_COLORS,
)
from .models import SPECIAL_OUTCOMES, Match, Player

HEX_COLOR = r'^#[0-9a-fA-F]{6}$'


class PlayerBoxInfo(BaseModel):
    """Current box membership of a player."""

    box_id: str
    box_name: str | None = None
    box_number: int | None = None
    season_id: str | None = None
    season_name: str | None = None
    next_box_status: str | None = None
    membership_id: int | None = None
    membership_rank: int | None = None

    class Config:
        extra = 'ignore'


class PlayerRecord(BaseModel):
    """Player as returned by the club API."""

    id: str = Field(..., min_length=1)
    first_name: str = ''
    last_name: str = ''
    email: str | None = None
    phone: str | None = None
    picture: str | None = None
    active: bool = True
    current_box: PlayerBoxInfo | None = None
    next_box_status: str | None = None

    class Config:
        extra = 'ignore'

    def to_model(self) -> Player:
        box = self.current_box
        next_status = self.next_box_status
        if next_status is None and box is not None:
            next_status = box.next_box_status
        return Player(
            player_id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            picture_url=self.picture,
            next_box_status=next_status,
            active=self.active,
            box_id=box.box_id if box else None,
            season_id=box.season_id if box else None,
            membership_rank=box.membership_rank if box else None,
        )


class MatchRecord(BaseModel):
    """Match as returned by the club API."""

    id: str = Field(..., min_length=1)
    season_id: str | None = None
    box_id: str | None = None
    week_number: int | None = None
    player_a_id: str = Field(..., min_length=1)
    player_b_id: str = Field(..., min_length=1)
    scheduled_at: datetime | None = None
    status: str | None = None
    score_a: int | None = None
    score_b: int | None = None
    points_a: float | None = None
    points_b: float | None = None
    played_at: datetime | None = None
    delayed_player_id: str | None = None
    retired_player_id: str | None = None
    no_show_player_id: str | None = None

    class Config:
        extra = 'ignore'

    def to_model(self) -> Match:
        return Match(
            match_id=self.id,
            player_a_id=self.player_a_id,
            player_b_id=self.player_b_id,
            score_a=self.score_a,
            score_b=self.score_b,
            points_a=self.points_a,
            points_b=self.points_b,
            scheduled_at=self.scheduled_at,
            played_at=self.played_at,
            box_id=self.box_id,
            season_id=self.season_id,
            week_number=self.week_number,
            no_show_player_id=self.no_show_player_id or None,
            retired_player_id=self.retired_player_id or None,
            delayed_player_id=self.delayed_player_id or None,
        )


class Box(BaseModel):
    """Box metadata."""

    id: str = Field(..., min_length=1)
    season_id: str | None = None
    level: int = 0
    name: str = ''
    players_count: int | None = None

    class Config:
        extra = 'ignore'


class Season(BaseModel):
    """Season metadata."""

    id: str = Field(..., min_length=1)
    competition_id: str | None = None
    name: str = ''
    start_date: str | None = None
    end_date: str | None = None
    weeks_count: int | None = None
    status: str = ''

    class Config:
        extra = 'ignore'


class SnapshotFile(BaseModel):
    """A complete snapshot handed over by the fetch layer."""

    players: list[PlayerRecord] = Field(default_factory=list)
    matches: list[MatchRecord] = Field(default_factory=list)
    boxes: list[Box] = Field(default_factory=list)
    seasons: list[Season] = Field(default_factory=list)

    class Config:
        extra = 'forbid'

    def player_models(self) -> list[Player]:
        return [p.to_model() for p in self.players]

    def match_models(self) -> list[Match]:
        return [m.to_model() for m in self.matches]


class ColorPair(BaseModel):
    """Background / foreground colours for a cell."""

    background: str = Field(..., pattern=HEX_COLOR)
    foreground: str = Field(..., pattern=HEX_COLOR)

    class Config:
        extra = 'forbid'

    @classmethod
    def of(cls, pair: tuple[str, str]) -> 'ColorPair':
        return cls(background=pair[0], foreground=pair[1])


class SpecialCaseText(BaseModel):
    """Short cell text and long label for a special outcome."""

    text: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)

    class Config:
        extra = 'forbid'


def _default_special_texts() -> dict[str, SpecialCaseText]:
    return {
        outcome.value: SpecialCaseText(text=SPECIAL_TEXTS[key], label=SPECIAL_LABELS[key])
        for key, outcome in SPECIAL_OUTCOMES.items()
    }


class StandingsConfig(BaseModel):
    """Scoring and display settings."""

    points_per_set: int = Field(POINTS_PER_SET, ge=0, le=10)
    win: ColorPair = Field(default_factory=lambda: ColorPair.of(WIN_COLORS))
    loss: ColorPair = Field(default_factory=lambda: ColorPair.of(LOSS_COLORS))
    neutral: ColorPair = Field(default_factory=lambda: ColorPair.of(NEUTRAL_COLORS))
    scheduled: ColorPair = Field(default_factory=lambda: ColorPair.of(SCHEDULED_COLORS))
    unplayed: ColorPair = Field(default_factory=lambda: ColorPair.of(UNPLAYED_COLORS))
    diagonal: ColorPair = Field(default_factory=lambda: ColorPair.of(DIAGONAL_COLORS))
    special_texts: dict[str, SpecialCaseText] = Field(default_factory=_default_special_texts)
    display_timezone: str | None = None

    @field_validator('special_texts')
    @classmethod
    def validate_special_texts(cls, v):
        """Ensure keys name special outcomes and fill in missing ones."""
        valid = {outcome.value for outcome in SPECIAL_OUTCOMES.values()}
        for key in v:
            if key not in valid:
                raise ValueError(f'Invalid special outcome: {key}')
        return {**_default_special_texts(), **v}

    @field_validator('display_timezone')
    @classmethod
    def validate_timezone(cls, v):
        """Ensure the timezone name is known."""
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f'Unknown timezone: {v}') from e
        return v

    class Config:
        extra = 'forbid'
