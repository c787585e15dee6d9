"""Pydantic schemas for league documents.

Documents arrive from the store with camelCase keys; every model accepts
either the camelCase alias or the snake_case field name and dumps back
with ``by_alias=True``.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import (
    ABSENCE_RULES,
    DEFAULT_ABSENCE_RULE,
    DEFAULT_HCP_FACTOR,
    DEFAULT_MAX_HCP,
    DEFAULT_PAR,
    DEFAULT_PLAYOFF_WEEKS,
    DEFAULT_POINT_VALUES,
    DEFAULT_ROUNDS_USED,
    DEFAULT_WORST_LOOKBACK,
    DROP_MODES,
    HANDICAP_SYSTEMS,
    HOLES_PER_NINE,
    MATCH_STATUSES,
    STATUS_COMMITTED,
    STATUS_DRAFT,
)

Nine = Literal['front', 'back']


def default_holes(nine: str) -> list['HoleDef']:
    """Placeholder layout for a side with no scorecard: par 4, index 1-9, 350 yards."""
    start = 10 if nine == 'back' else 1
    return [
        HoleDef(hole=start + i, par=4, stroke_index=i + 1, yards=350)
        for i in range(HOLES_PER_NINE)
    ]


def coerce_score_array(value: Any) -> list[int]:
    """Turn a stored score array into ints, treating blanks as 0 (not entered)."""
    if value is None:
        return []
    scores = []
    for s in value:
        try:
            scores.append(int(s) if s else 0)
        except (TypeError, ValueError):
            scores.append(0)
    return scores


class HoleDef(BaseModel):
    """One hole of a nine-hole scorecard."""

    hole: int = Field(..., ge=1, le=18)
    par: int = Field(4, ge=1)
    stroke_index: int = Field(..., alias='strokeIndex', ge=1, le=18)
    yards: int = Field(0, ge=0)

    @model_validator(mode='before')
    @classmethod
    def accept_hdcp_key(cls, data):
        # Older league documents store the difficulty rank as 'hdcp'
        if isinstance(data, dict) and 'hdcp' in data:
            if 'strokeIndex' not in data and 'stroke_index' not in data:
                data = {**data, 'strokeIndex': data['hdcp']}
        return data

    class Config:
        populate_by_name = True
        extra = 'ignore'


class Scorecard(BaseModel):
    """Front and back nine layouts."""

    front: list[HoleDef] = Field(default_factory=lambda: default_holes('front'))
    back: list[HoleDef] = Field(default_factory=lambda: default_holes('back'))

    @field_validator('front', 'back')
    @classmethod
    def validate_nine_holes(cls, v):
        """A side is exactly nine holes."""
        if len(v) != HOLES_PER_NINE:
            raise ValueError(f'Scorecard side must have {HOLES_PER_NINE} holes, got {len(v)}')
        return v

    def side(self, nine: Optional[str]) -> list[HoleDef]:
        return self.back if nine == 'back' else self.front

    class Config:
        extra = 'ignore'


class Course(BaseModel):
    """Course details; slope and rating switch handicaps to WHS differentials."""

    name: str = ''
    slope: Optional[float] = None
    rating: Optional[float] = None
    scorecard: Scorecard = Field(default_factory=Scorecard)

    @property
    def uses_whs(self) -> bool:
        return bool(self.slope and self.slope > 0 and self.rating and self.rating > 0)

    class Config:
        extra = 'ignore'


class PointValues(BaseModel):
    """Points awarded per hole won, low net, team net, birdie and eagle."""

    hole: float = Field(DEFAULT_POINT_VALUES['hole'], ge=0)
    low_net: float = Field(DEFAULT_POINT_VALUES['lowNet'], alias='lowNet', ge=0)
    team_net: float = Field(DEFAULT_POINT_VALUES['teamNet'], alias='teamNet', ge=0)
    birdie: float = Field(DEFAULT_POINT_VALUES['birdie'], ge=0)
    eagle: float = Field(DEFAULT_POINT_VALUES['eagle'], ge=0)

    @model_validator(mode='before')
    @classmethod
    def drop_missing_values(cls, data):
        # A null or blank value means "use the default", not zero
        if isinstance(data, dict):
            data = {k: v for k, v in data.items() if v is not None and v != ''}
        return data

    class Config:
        populate_by_name = True
        extra = 'ignore'


class HandicapPolicy(BaseModel):
    """How handicaps are computed from a player's rounds."""

    system: str = 'custom'
    rounds_used: int = Field(DEFAULT_ROUNDS_USED, alias='roundsUsed', ge=1)
    drop: str = 'none'
    factor: float = Field(DEFAULT_HCP_FACTOR, gt=0, le=1)
    max: float = Field(DEFAULT_MAX_HCP, ge=0)

    @model_validator(mode='before')
    @classmethod
    def accept_legacy_keys(cls, data):
        if not isinstance(data, dict):
            return data
        data = {k: v for k, v in data.items() if v is not None}
        if 'system' not in data and 'type' in data:
            data['system'] = data['type']
        if 'roundsUsed' not in data and 'rounds_used' not in data and 'rounds' in data:
            data['roundsUsed'] = data['rounds']
        return data

    @field_validator('system')
    @classmethod
    def validate_system(cls, v):
        """Unknown systems (including 'custom_rolling') use the league formula."""
        return v if v in HANDICAP_SYSTEMS else 'custom'

    @field_validator('drop')
    @classmethod
    def validate_drop(cls, v):
        return v if v in DROP_MODES else 'none'

    class Config:
        populate_by_name = True
        extra = 'ignore'


class AbsencePolicy(BaseModel):
    """Rule for scoring a player who did not post a round."""

    rule: str = DEFAULT_ABSENCE_RULE
    fixed_score: Optional[int] = Field(None, alias='fixedScore')
    worst_lookback: int = Field(DEFAULT_WORST_LOOKBACK, alias='worstLookback', ge=1)

    @field_validator('rule', mode='before')
    @classmethod
    def validate_rule(cls, v):
        """Unknown rules fall through to blind_avg."""
        return v if v in ABSENCE_RULES else DEFAULT_ABSENCE_RULE

    @field_validator('fixed_score', mode='before')
    @classmethod
    def blank_fixed_score(cls, v):
        return None if v in ('', 0) else v

    @field_validator('worst_lookback', mode='before')
    @classmethod
    def default_lookback(cls, v):
        return DEFAULT_WORST_LOOKBACK if v in (None, '', 0) else v

    class Config:
        populate_by_name = True
        extra = 'ignore'


class Player(BaseModel):
    """League member."""

    id: str = Field(..., min_length=1)
    name: str = ''
    hilo: Optional[Literal['HI', 'LO']] = None
    seed_hcp: Optional[float] = Field(None, alias='seedHcp')

    class Config:
        populate_by_name = True
        extra = 'ignore'


class Team(BaseModel):
    """Team of (usually) two players."""

    id: str = Field(..., min_length=1)
    name: str = ''
    players: list[Player] = Field(default_factory=list)

    def has_player(self, player_id: Optional[str]) -> bool:
        return any(p.id == player_id for p in self.players)

    class Config:
        extra = 'ignore'


class ScheduleWeek(BaseModel):
    """One week of the league schedule."""

    week: int = Field(..., ge=1)
    date: str = ''
    nine: Nine = 'front'
    time: str = ''
    matchups: list[tuple[str, str]] = Field(default_factory=list)
    is_custom: bool = Field(False, alias='isCustom')
    label: str = ''

    class Config:
        populate_by_name = True
        extra = 'ignore'


def merge_legacy_format(data: dict) -> dict:
    """
    Fold the legacy nested ``format`` block into the top-level shape.

    The setup wizard saves ``pointValues``/``absentRule`` at the top level while
    older settings screens save them under ``format.*``. Top-level values win.
    """
    data = dict(data)
    fmt = data.pop('format', None) or {}

    if not data.get('pointValues') and not data.get('point_values'):
        if fmt.get('pointValues'):
            data['pointValues'] = fmt['pointValues']

    if 'absence' not in data:
        def pick(key):
            value = data.pop(key, None)
            return value if value is not None else fmt.get(key)

        data['absence'] = {
            'rule': pick('absentRule'),
            'fixedScore': pick('absentFixedScore'),
            'worstLookback': pick('absentWorstLookback'),
        }

    for key in ('skinsNet', 'skinsBuyIn'):
        if data.get(key) is None and fmt.get(key) is not None:
            data[key] = fmt[key]

    return data


class LeagueConfig(BaseModel):
    """Canonical league configuration consumed by every scoring function."""

    name: str = ''
    course: Course = Field(default_factory=Course)
    point_values: PointValues = Field(default_factory=PointValues, alias='pointValues')
    handicap: HandicapPolicy = Field(default_factory=HandicapPolicy)
    absence: AbsencePolicy = Field(default_factory=AbsencePolicy)
    skins_net: bool = Field(False, alias='skinsNet')
    skins_buy_in: float = Field(0, alias='skinsBuyIn', ge=0)
    teams: list[Team] = Field(default_factory=list)
    schedule: list[ScheduleWeek] = Field(default_factory=list)
    manual_adj: dict[str, float] = Field(default_factory=dict, alias='manualAdj')
    absent_overrides: dict[str, bool] = Field(default_factory=dict, alias='absentOverrides')
    cancelled_weeks: dict[int, bool] = Field(default_factory=dict, alias='cancelledWeeks')
    playoff_week_map: dict[int, bool] = Field(default_factory=dict, alias='playoffWeekMap')
    playoff_weeks: int = Field(DEFAULT_PLAYOFF_WEEKS, alias='playoffWeeks', ge=0)
    hcp_excluded_weeks: list[int] = Field(default_factory=list, alias='hcpExcludedWeeks')

    @model_validator(mode='before')
    @classmethod
    def normalize_legacy_shape(cls, data):
        if isinstance(data, dict):
            data = merge_legacy_format(data)
            for key in ('pointValues', 'handicap', 'course', 'skinsNet', 'skinsBuyIn'):
                if data.get(key) is None:
                    data.pop(key, None)
        return data

    def holes_for(self, nine: Optional[str]) -> list[HoleDef]:
        return self.course.scorecard.side(nine)

    @property
    def reference_par(self) -> int:
        """Total par of the front nine, the league's reference nine."""
        return sum(h.par for h in self.course.scorecard.front) or DEFAULT_PAR

    @property
    def players(self) -> list[Player]:
        return [p for t in self.teams for p in t.players]

    def find_team(self, team_id: Optional[str]) -> Optional[Team]:
        return next((t for t in self.teams if t.id == team_id), None)

    def find_player(self, player_id: Optional[str]) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def team_of_player(self, player_id: Optional[str]) -> Optional[Team]:
        return next((t for t in self.teams if t.has_player(player_id)), None)

    class Config:
        populate_by_name = True
        extra = 'ignore'


class Round(BaseModel):
    """A single gross nine-hole round in a player's history."""

    player_id: str = Field('', alias='playerId')
    date: str = ''
    gross_score: int = Field(0, alias='grossScore')
    nine: Nine = 'front'
    source: Literal['match', 'history', 'seed'] = 'history'
    week: Optional[int] = None
    match_key: Optional[str] = Field(None, alias='matchKey')
    commit_id: Optional[str] = Field(None, alias='commitId')

    @model_validator(mode='before')
    @classmethod
    def accept_score_key(cls, data):
        if isinstance(data, dict) and not data.get('grossScore') and not data.get('gross_score'):
            if data.get('score'):
                data = {**data, 'grossScore': data['score']}
        return data

    class Config:
        populate_by_name = True
        extra = 'ignore'


class DisputeEntry(BaseModel):
    """Note attached to a match when its scores are disputed."""

    note: str = ''
    by: Optional[str] = None
    at: str = ''

    class Config:
        extra = 'ignore'


class MatchResultRecord(BaseModel):
    """Stored outcome of a committed team match."""

    team1_id: str = Field(..., alias='team1Id')
    team2_id: str = Field(..., alias='team2Id')
    pts1: float
    pts2: float

    class Config:
        populate_by_name = True
        extra = 'allow'


class Match(BaseModel):
    """Central mutable record for one team-vs-team pairing in a week."""

    key: str = ''
    week: int = Field(..., ge=1)
    date: str = ''
    nine: Nine = 'front'
    team1_id: str = Field(..., alias='team1Id')
    team2_id: str = Field(..., alias='team2Id')
    status: str = STATUS_DRAFT
    scores: dict[str, list[int]] = Field(default_factory=dict)
    result: Optional[MatchResultRecord] = None
    submitted_by_team: Optional[str] = Field(None, alias='submittedByTeam')
    dispute_history: list[DisputeEntry] = Field(default_factory=list, alias='disputeHistory')
    force_committed: bool = Field(False, alias='forceCommitted')
    commit_count: int = Field(0, alias='commitCount', ge=0)

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if v not in MATCH_STATUSES:
            raise ValueError(f'Invalid match status: {v}')
        return v

    @field_validator('scores', mode='before')
    @classmethod
    def coerce_scores(cls, v):
        """Blank hole entries become 0; arrays longer than nine holes are rejected."""
        v = v or {}
        scores = {}
        for player_id, arr in v.items():
            arr = coerce_score_array(arr)
            if len(arr) > HOLES_PER_NINE:
                raise ValueError(f'Score array for {player_id} has {len(arr)} holes')
            scores[player_id] = arr
        return scores

    @property
    def is_committed(self) -> bool:
        return self.status == STATUS_COMMITTED and self.result is not None

    def involves_team(self, team_id: Optional[str]) -> bool:
        return team_id in (self.team1_id, self.team2_id)

    class Config:
        populate_by_name = True
        extra = 'allow'
