"""League snapshot passed explicitly into scoring functions."""

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from .config import normalize_config
from .handicap import calc_hcp_adj
from .schemas import HoleDef, LeagueConfig, Match, Player, Round


def parse_rounds(docs: Mapping[str, object]) -> dict[str, list[Round]]:
    """
    Parse per-player round documents.

    Accepts either ``{playerId: [round, ...]}`` or ``{playerId: {'rounds': [...]}}``.
    Rounds without a playerId inherit the document key.
    """
    rounds: dict[str, list[Round]] = {}
    for player_id, doc in docs.items():
        items = doc.get('rounds', []) if isinstance(doc, dict) else (doc or [])
        parsed = []
        for item in items:
            r = item if isinstance(item, Round) else Round.model_validate(item)
            if not r.player_id:
                r = r.model_copy(update={'player_id': player_id})
            parsed.append(r)
        rounds[player_id] = parsed
    return rounds


def parse_matches(docs: Mapping[str, object]) -> dict[str, Match]:
    """Parse match documents keyed by ``w{week}_m{index}``."""
    matches = {}
    for key, doc in docs.items():
        m = doc if isinstance(doc, Match) else Match.model_validate(doc)
        if m.key != key:
            m = m.model_copy(update={'key': key})
        matches[key] = m
    return matches


@dataclass
class LeagueContext:
    """
    Immutable-by-convention view of a league at one moment.

    Every aggregate (handicaps, standings, skins, stats) is a pure function of
    this snapshot. A new context is built for each store snapshot.
    """
    config: LeagueConfig
    matches: dict[str, Match] = field(default_factory=dict)
    rounds: dict[str, list[Round]] = field(default_factory=dict)

    @classmethod
    def from_documents(
        cls,
        config: dict | LeagueConfig,
        matches: Optional[Mapping[str, object]] = None,
        rounds: Optional[Mapping[str, object]] = None,
    ) -> 'LeagueContext':
        return cls(
            config=normalize_config(config),
            matches=parse_matches(matches or {}),
            rounds=parse_rounds(rounds or {}),
        )

    def rounds_for(self, player_id: Optional[str]) -> list[Round]:
        return self.rounds.get(player_id, []) if player_id else []

    def hcp(self, player: Optional[Player | str]) -> float:
        """Current handicap (manual adjustment included) for a player or player id."""
        if player is None:
            return 0.0
        player_id = player if isinstance(player, str) else player.id
        return calc_hcp_adj(self.rounds_for(player_id), self.config, player_id)

    def holes_for(self, nine: Optional[str]) -> list[HoleDef]:
        return self.config.holes_for(nine)

    def committed_matches(self) -> list[Match]:
        return [m for m in self.matches.values() if m.is_committed]

    def history_before(self, match: Match) -> 'LeagueContext':
        """
        Context whose rounds predate ``match``.

        Drops rounds recorded by the match itself and rounds dated on or after
        the match date, so rescoring a match sees the same handicaps every time.
        """
        def keep(r: Round) -> bool:
            if r.match_key == match.key:
                return False
            return not (match.date and r.date and r.date >= match.date)

        rounds = {pid: [r for r in rs if keep(r)] for pid, rs in self.rounds.items()}
        return replace(self, rounds=rounds)
