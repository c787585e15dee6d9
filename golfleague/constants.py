"""Constants and defaults for league scoring."""

HOLES_PER_NINE = 9

# Fallback reference par; also the par assumed for seed handicaps
DEFAULT_PAR = 35

# Point value defaults (hole, low net, team net, birdie, eagle)
DEFAULT_POINT_VALUES = {
    'hole': 1.0,
    'lowNet': 1.0,
    'teamNet': 0.0,
    'birdie': 0.0,
    'eagle': 0.0,
}

# Handicap policy defaults
DEFAULT_ROUNDS_USED = 5
DEFAULT_HCP_FACTOR = 0.9
DEFAULT_MAX_HCP = 18.0

HANDICAP_SYSTEMS = ('custom', 'whs', 'manual', 'scratch')
DROP_MODES = ('none', 'low', 'high', 'both')

# Absent player rules
ABSENCE_RULES = (
    'blind_avg',
    'duplicate_prev',
    'worst_score',
    'fixed_score',
    'last_score',
    'vs_par',
    'forfeit',
    'half_pts',
    'plays_both',
)
DEFAULT_ABSENCE_RULE = 'blind_avg'
DEFAULT_WORST_LOOKBACK = 4

# Offsets from par used when there is no history to draw from
NO_HISTORY_OVER_PAR = 5
NO_HISTORY_WORST_OVER_PAR = 9

# Score used for a hole with no entry when hunting for the skins low score
SKINS_MISSING_SCORE = 99

# WHS standard slope
STANDARD_SLOPE = 113

# Match statuses
STATUS_DRAFT = 'draft'
STATUS_PENDING = 'pending'
STATUS_DISPUTED = 'disputed'
STATUS_ESCALATED = 'escalated'
STATUS_COMMITTED = 'committed'

MATCH_STATUSES = (
    STATUS_DRAFT,
    STATUS_PENDING,
    STATUS_DISPUTED,
    STATUS_ESCALATED,
    STATUS_COMMITTED,
)

# Minimum number of entered hole scores on a submission
MIN_SUBMITTED_HOLES = 9

# Playoffs
DEFAULT_PLAYOFF_WEEKS = 3
MIN_WEEKS_FOR_AUTO_PLAYOFFS = 10
BRACKET_PAIRINGS = {
    8: [(1, 8), (4, 5), (2, 7), (3, 6)],
    4: [(1, 4), (2, 3)],
}
BRACKET_ROUND_LABELS = {
    8: ['Quarterfinals', 'Semifinals', 'Championship'],
    4: ['Semifinals', 'Championship'],
}
TBD = 'TBD'

DAY_NAMES = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']
