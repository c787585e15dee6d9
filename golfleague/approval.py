"""Match approval workflow.

A match moves through draft -> pending -> committed, with side trips through
disputed and escalated when the opposing team objects. Each transition is a
compare-and-set on the match's ``status`` so two captains acting at once can
not both win.

Transitions:

    action          from                who                   to
    enter_scores    draft, disputed     either team, admin    (unchanged)
    submit          draft, disputed     either team, admin    pending
    approve         pending             opposing team, admin  committed
    reject          pending             opposing team, admin  draft
    dispute         pending             opposing team, admin  disputed
    dispute         disputed            opposing team, admin  escalated
    force_approve   pending             admin                 committed
    force_commit    disputed, escalated admin                 committed
    unlock          committed           admin                 draft
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Optional

from .constants import (
    HOLES_PER_NINE,
    STATUS_COMMITTED,
    STATUS_DISPUTED,
    STATUS_DRAFT,
    STATUS_ESCALATED,
    STATUS_PENDING,
)
from .exceptions import InvalidSubmission, PermissionDenied, StaleDocument, TransitionError
from .match_scorer import score_team_match
from .schemas import LeagueConfig, Match, Round, coerce_score_array
from .store import MATCHES, ROUNDS, DocumentStore, load_context
from .validators import validate_submission

logger = logging.getLogger('golfleague.approval')

# action -> {from_status: to_status}
TRANSITIONS = {
    'enter_scores': {STATUS_DRAFT: STATUS_DRAFT, STATUS_DISPUTED: STATUS_DISPUTED},
    'submit': {STATUS_DRAFT: STATUS_PENDING, STATUS_DISPUTED: STATUS_PENDING},
    'approve': {STATUS_PENDING: STATUS_COMMITTED},
    'reject': {STATUS_PENDING: STATUS_DRAFT},
    'dispute': {STATUS_PENDING: STATUS_DISPUTED, STATUS_DISPUTED: STATUS_ESCALATED},
    'force_approve': {STATUS_PENDING: STATUS_COMMITTED},
    'force_commit': {STATUS_DISPUTED: STATUS_COMMITTED, STATUS_ESCALATED: STATUS_COMMITTED},
    'unlock': {STATUS_COMMITTED: STATUS_DRAFT},
}

ADMIN_ONLY = ('force_approve', 'force_commit', 'unlock')
REVIEW_ACTIONS = ('approve', 'reject', 'dispute')


@dataclass
class Actor:
    """Whoever is performing an action: a rostered player, an admin, or both."""
    user_id: Optional[str] = None
    player_id: Optional[str] = None
    is_admin: bool = False

    @property
    def label(self) -> str:
        return self.user_id or self.player_id or ('admin' if self.is_admin else 'anonymous')


def next_status(action: str, status: str) -> str:
    """
    Target status for ``action`` taken from ``status``.

    Raises:
        TransitionError: If the action is unknown or not legal from ``status``
    """
    targets = TRANSITIONS.get(action)
    if targets is None:
        raise TransitionError(action, status, f'Unknown action: {action}')
    if status not in targets:
        raise TransitionError(action, status)
    return targets[status]


def actor_team(actor: Actor, match: Match, config: LeagueConfig) -> Optional[str]:
    """The match team the actor plays for, if any."""
    team = config.team_of_player(actor.player_id) if actor.player_id else None
    if team and match.involves_team(team.id):
        return team.id
    return None


def opposing_team(match: Match, team_id: Optional[str]) -> Optional[str]:
    if team_id == match.team1_id:
        return match.team2_id
    if team_id == match.team2_id:
        return match.team1_id
    return None


def check_permission(action: str, actor: Actor, match: Match, config: LeagueConfig) -> None:
    """
    Raise PermissionDenied unless ``actor`` may take ``action`` on ``match``.

    Admins may do anything. Score entry and submission are open to both teams;
    review actions belong to the team that did not submit.
    """
    if actor.is_admin:
        return
    if action in ADMIN_ONLY:
        raise PermissionDenied(action, 'Only an admin can do this')

    team_id = actor_team(actor, match, config)
    if team_id is None:
        raise PermissionDenied(action, 'You are not on either team in this match')

    if action in REVIEW_ACTIONS:
        reviewer = opposing_team(match, match.submitted_by_team)
        if team_id != reviewer:
            raise PermissionDenied(action, 'Only the opposing team can review submitted scores')


def clean_scores(scores: dict[str, list]) -> dict[str, list[int]]:
    """Coerce raw score arrays; an array longer than nine holes is a contract violation."""
    cleaned = {}
    for player_id, arr in scores.items():
        arr = coerce_score_array(arr)
        if len(arr) > HOLES_PER_NINE:
            raise ValueError(f'Score array for {player_id} has {len(arr)} holes')
        cleaned[player_id] = arr
    return cleaned


def commit_id(match_key: str, commit_count: int) -> str:
    return f'{match_key}#{commit_count}'


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class MatchApproval:
    """
    Runs approval actions against a document store.

    Example:
        approval = MatchApproval(store)
        approval.submit('w3_m0', Actor(player_id='p1'), scores)
        approval.approve('w3_m0', Actor(player_id='p3'))
    """

    def __init__(self, store: DocumentStore, clock: Optional[Callable[[], str]] = None):
        self.store = store
        self.clock = clock or _utc_now

    def _load(self, key: str):
        context = load_context(self.store)
        match = context.matches.get(key)
        if match is None:
            raise KeyError(f'No match document: {key}')
        return context, match

    def _transition(self, action: str, match: Match, patch: dict, actor: Actor) -> Match:
        target = next_status(action, match.status)
        patch = {**patch, 'status': target}
        try:
            doc = self.store.compare_and_set(MATCHES, match.key, 'status', (match.status,), patch)
        except StaleDocument as e:
            raise TransitionError(action, e.actual, 'Match changed while you were acting on it') from e

        if target != match.status:
            logger.info(f'{match.key}: {action} {match.status} -> {target} by {actor.label}')
        else:
            logger.debug(f'{match.key}: {action} by {actor.label}')
        return Match.model_validate({**doc, 'key': match.key})

    def enter_scores(self, key: str, scores: dict[str, list], actor: Actor) -> Match:
        """Save in-progress scores without changing status."""
        context, match = self._load(key)
        next_status('enter_scores', match.status)
        check_permission('enter_scores', actor, match, context.config)
        merged = {**match.scores, **clean_scores(scores)}
        return self._transition('enter_scores', match, {'scores': merged}, actor)

    def submit(
        self,
        key: str,
        actor: Actor,
        scores: Optional[dict[str, list]] = None,
        team_id: Optional[str] = None,
    ) -> Match:
        """
        Submit scores for the opposing team's review.

        Args:
            key: Match key
            actor: Submitter; their team becomes ``submittedByTeam``
            scores: Replaces the stored scores when given
            team_id: Team an admin submits on behalf of (defaults to team 1)

        Raises:
            InvalidSubmission: Fewer than nine hole scores, or scores for
                players outside the two teams
        """
        context, match = self._load(key)
        next_status('submit', match.status)
        check_permission('submit', actor, match, context.config)

        if scores is not None:
            scores = clean_scores(scores)
        else:
            scores = match.scores

        errors = validate_submission(scores, match, context.config)
        if errors:
            raise InvalidSubmission(errors)

        submitted_by = actor_team(actor, match, context.config)
        if submitted_by is None:
            submitted_by = team_id if match.involves_team(team_id) else match.team1_id

        patch = {
            'scores': scores,
            'submittedByTeam': submitted_by,
            'submittedBy': actor.label,
            'submittedAt': self.clock(),
        }
        return self._transition('submit', match, patch, actor)

    def approve(self, key: str, actor: Actor) -> Match:
        """Opposing team accepts the submitted scores; the match is committed."""
        return self._commit('approve', key, actor)

    def force_approve(self, key: str, actor: Actor) -> Match:
        """Admin commits a pending match without waiting for the opposing team."""
        return self._commit('force_approve', key, actor)

    def force_commit(self, key: str, actor: Actor) -> Match:
        """Admin settles a disputed or escalated match."""
        return self._commit('force_commit', key, actor, {'forceCommitted': True})

    def reject(self, key: str, actor: Actor, note: str = '') -> Match:
        """Send a pending submission back to draft."""
        context, match = self._load(key)
        next_status('reject', match.status)
        check_permission('reject', actor, match, context.config)
        patch = {'rejectedBy': actor.label, 'rejectedAt': self.clock(), 'rejectNote': note}
        return self._transition('reject', match, patch, actor)

    def dispute(self, key: str, actor: Actor, note: str = '') -> Match:
        """Dispute submitted scores. A second dispute escalates to an admin."""
        context, match = self._load(key)
        next_status('dispute', match.status)
        check_permission('dispute', actor, match, context.config)
        entry = {'note': note, 'by': actor.label, 'at': self.clock()}
        history = [e.model_dump() for e in match.dispute_history] + [entry]
        return self._transition('dispute', match, {'disputeHistory': history}, actor)

    def unlock(self, key: str, actor: Actor) -> Match:
        """
        Reopen a committed match for editing.

        The stored result stays on the document until the next commit
        replaces it; standings ignore the match while it is not committed.
        """
        context, match = self._load(key)
        next_status('unlock', match.status)
        check_permission('unlock', actor, match, context.config)
        patch = {'unlockedBy': actor.label, 'unlockedAt': self.clock(), 'forceCommitted': False}
        return self._transition('unlock', match, patch, actor)

    def _commit(self, action: str, key: str, actor: Actor, extra: Optional[dict] = None) -> Match:
        context, match = self._load(key)
        next_status(action, match.status)
        check_permission(action, actor, match, context.config)

        result = score_team_match(match, context)
        count = match.commit_count + 1
        patch = {
            'result': result.to_record(),
            'commitCount': count,
            'approvedBy': actor.label,
            'approvedAt': self.clock(),
            'forceCommitted': False,
            **(extra or {}),
        }
        committed = self._transition(action, match, patch, actor)
        logger.info(
            f'{key}: committed {result.team1_id} {result.pts1} - {result.pts2} {result.team2_id}'
        )
        self.append_rounds(committed)
        return committed

    def append_rounds(self, match: Match) -> list[str]:
        """
        Record each player's gross total from a committed match in their history.

        Safe to call again after a failure: a round already tagged with this
        commit's id is not added twice.

        Returns:
            Player ids that received a new round
        """
        cid = commit_id(match.key, match.commit_count)
        played_on = match.date or date.today().isoformat()
        added = []

        for player_id, scores in match.scores.items():
            gross = sum(s for s in scores if s > 0)
            if gross <= 0:
                continue

            new_round = Round(
                player_id=player_id,
                date=played_on,
                gross_score=gross,
                nine=match.nine,
                source='match',
                week=match.week,
                match_key=match.key,
                commit_id=cid,
            ).model_dump(by_alias=True)

            def append(doc, player_id=player_id, new_round=new_round):
                doc = doc or {}
                rounds = list(doc.get('rounds', []))
                if any(r.get('commitId') == cid for r in rounds):
                    return doc
                added.append(player_id)
                return {**doc, 'rounds': rounds + [new_round]}

            self.store.update(ROUNDS, player_id, append)

        if added:
            logger.debug(f'{cid}: appended rounds for {", ".join(added)}')
        return added
