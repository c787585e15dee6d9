"""Result containers produced by the scoring functions."""

from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass
class HoleResult:
    """Outcome of one hole in a two-player sub-match."""
    hole: int
    net1: int
    net2: int
    strokes1: int
    strokes2: int
    pts1: float
    pts2: float
    birdie1: float = 0.0
    birdie2: float = 0.0


@dataclass
class SubMatchResult:
    """Points for one HI-vs-HI or LO-vs-LO match."""
    pts1: float
    pts2: float
    hole_results: list[HoleResult]
    bonus1: float
    bonus2: float
    total_net1: int
    total_net2: int
    max_pts: float
    played: bool = True


@dataclass
class TeamMatchResult:
    """Combined result of a team matchup (HI + LO sub-matches + team net bonus)."""
    team1_id: str
    team2_id: str
    pts1: float
    pts2: float
    hi_pts1: float = 0.0
    hi_pts2: float = 0.0
    lo_pts1: float = 0.0
    lo_pts2: float = 0.0
    team_bonus1: float = 0.0
    team_bonus2: float = 0.0
    absent: list[str] = field(default_factory=list)

    def to_record(self) -> dict:
        """Document shape stored on the match under ``result``."""
        return {
            'team1Id': self.team1_id,
            'team2Id': self.team2_id,
            'pts1': self.pts1,
            'pts2': self.pts2,
            'hiPts1': self.hi_pts1,
            'hiPts2': self.hi_pts2,
            'loPts1': self.lo_pts1,
            'loPts2': self.lo_pts2,
            'teamBonus1': self.team_bonus1,
            'teamBonus2': self.team_bonus2,
            'absent': list(self.absent),
        }


@dataclass
class Standing:
    """A team's season record, derived from committed matches."""
    team_id: str
    team_name: str = ''
    pts: float = 0.0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    played: int = 0


@dataclass
class PlayerStats:
    """Season statistics for one player."""
    player_id: str
    name: str
    team_id: str
    team_name: str = ''
    rounds_played: int = 0
    scoring_avg: float = 0.0
    low_round: int = 0
    eagles: int = 0
    birdies: int = 0
    pars: int = 0
    bogeys: int = 0
    doubles: int = 0
    holes_played: int = 0
    match_wins: int = 0
    match_losses: int = 0
    match_ties: int = 0
    match_pts: float = 0.0
    win_pct: float = 0.0

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class SkinsHole:
    """Skins outcome for a single hole."""
    hole: int
    par: int
    winner: Optional[str] = None
    winner_name: Optional[str] = None
    score: Optional[int] = None
    pot: int = 0
    carryover: bool = False


@dataclass
class WeeklySkins:
    """Skins for one week."""
    week: int
    holes: list[SkinsHole] = field(default_factory=list)
    total_skins: int = 0
    players: dict[str, int] = field(default_factory=dict)
    pot: float = 0.0


@dataclass
class BracketMatch:
    """One slot of the playoff bracket."""
    week: int
    seed1: Optional[int] = None
    seed2: Optional[int] = None
    team1: str = 'TBD'
    team2: str = 'TBD'
    team1_id: Optional[str] = None
    team2_id: Optional[str] = None
    pts1: Optional[float] = None
    pts2: Optional[float] = None

    @property
    def decided(self) -> bool:
        return self.pts1 is not None and self.pts2 is not None


@dataclass
class BracketRound:
    label: str
    matches: list[BracketMatch] = field(default_factory=list)
