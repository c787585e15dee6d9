from .schemas import (
    HoleDef,
    Scorecard,
    Course,
    PointValues,
    HandicapPolicy,
    AbsencePolicy,
    Player,
    Team,
    ScheduleWeek,
    LeagueConfig,
    Round,
    Match,
)
from .models import (
    SubMatchResult,
    TeamMatchResult,
    Standing,
    PlayerStats,
    WeeklySkins,
    BracketMatch,
    BracketRound,
)
from .exceptions import (
    LeagueError,
    TransitionError,
    PermissionDenied,
    PersistenceError,
    InvalidSubmission,
)
from .config import normalize_config, load_league_config
from .context import LeagueContext
from .handicap import calc_hcp, calc_hcp_adj, calc_seed_hcp, assign_hilo, split_hilo
from .strokes import allocate_strokes
from .match_scorer import calc_match, score_team_match
from .absence import get_absent_score, is_absent
from .approval import Actor, MatchApproval
from .standings import calc_standings, calc_player_stats, stat_leaderboard
from .playoffs import build_playoff_bracket
from .skins import calc_weekly_skins, calc_season_skins
from .schedule import (
    generate_schedule,
    match_key,
    create_match_documents,
    is_playoff_week,
    is_cancelled_week,
)
from .store import MemoryDocumentStore, JsonDocumentStore, load_context
from .excel_export import export_scores_workbook

__all__ = [
    # Schemas
    'HoleDef',
    'Scorecard',
    'Course',
    'PointValues',
    'HandicapPolicy',
    'AbsencePolicy',
    'Player',
    'Team',
    'ScheduleWeek',
    'LeagueConfig',
    'Round',
    'Match',
    # Results
    'SubMatchResult',
    'TeamMatchResult',
    'Standing',
    'PlayerStats',
    'WeeklySkins',
    'BracketMatch',
    'BracketRound',
    # Errors
    'LeagueError',
    'TransitionError',
    'PermissionDenied',
    'PersistenceError',
    'InvalidSubmission',
    # Config and snapshot
    'normalize_config',
    'load_league_config',
    'LeagueContext',
    # Handicaps and scoring
    'calc_hcp',
    'calc_hcp_adj',
    'calc_seed_hcp',
    'assign_hilo',
    'split_hilo',
    'allocate_strokes',
    'calc_match',
    'score_team_match',
    'get_absent_score',
    'is_absent',
    # Approval
    'Actor',
    'MatchApproval',
    # Aggregates
    'calc_standings',
    'calc_player_stats',
    'stat_leaderboard',
    'build_playoff_bracket',
    'calc_weekly_skins',
    'calc_season_skins',
    # Schedule
    'generate_schedule',
    'match_key',
    'create_match_documents',
    'is_playoff_week',
    'is_cancelled_week',
    # Persistence
    'MemoryDocumentStore',
    'JsonDocumentStore',
    'load_context',
    'export_scores_workbook',
]
