"""Tournament leaderboard ranking."""

from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel

from models.hole_score import HoleScore
from models.tournament import Tournament, TournamentPlayer
from scoring.aggregator import aggregate_round
from scoring.formats import calculate_net_score, higher_is_better


class PlayerScoreRow(BaseModel):
    """One hole result from a tournament-wide score join.

    A player appears once per scored hole, so rows must be collapsed per
    player before ranking.
    """
    player_id: str
    player_name: Optional[str] = None
    round_id: Optional[str] = None
    round_number: int = 1
    hole_number: int
    par: int
    strokes: int
    putts: int = 0
    fairway_hit: bool = False
    green_in_regulation: bool = False

    def to_hole_score(self) -> HoleScore:
        return HoleScore(
            round_id=self.round_id,
            hole_number=self.hole_number,
            par=self.par,
            strokes=self.strokes,
            putts=self.putts,
            fairway_hit=self.fairway_hit,
            green_in_regulation=self.green_in_regulation,
        )


class LeaderboardEntry(BaseModel):
    rank: Optional[int] = None
    player_id: str
    player_name: Optional[str] = None
    gross_total: int = 0
    net_score: Optional[int] = None
    score_to_par: int = 0
    holes_completed: int = 0


class _PlayerCard:
    """Everything known about one player while building the board."""

    def __init__(self, player_id: str, name: Optional[str] = None, handicap=None):
        self.player_id = player_id
        self.name = name
        self.handicap = handicap
        self.rounds: Dict[int, List[HoleScore]] = {}

    def add(self, row: PlayerScoreRow) -> None:
        if self.name is None:
            self.name = row.player_name
        self.rounds.setdefault(row.round_number, []).append(row.to_hole_score())


def _collect_cards(
    roster: Iterable[TournamentPlayer],
    rows: Iterable[PlayerScoreRow],
    tournament: Tournament,
) -> "OrderedDict[str, _PlayerCard]":
    cards: "OrderedDict[str, _PlayerCard]" = OrderedDict()
    for player in roster:
        if player.player_id in cards:
            continue
        cards[player.player_id] = _PlayerCard(
            player.player_id,
            player.name,
            player.effective_handicap(tournament.handicap_allowance),
        )
    for row in rows:
        card = cards.get(row.player_id)
        if card is None:
            card = cards[row.player_id] = _PlayerCard(row.player_id)
        card.add(row)
    return cards


def _score_card(
    card: _PlayerCard,
    tournament: Tournament,
    hole_pars: Optional[List[int]],
    round_number: Optional[int],
) -> LeaderboardEntry:
    fmt = tournament.scoring_format

    if round_number is None and tournament.number_of_rounds == 1:
        round_number = 1

    if round_number is not None:
        scores = card.rounds.get(round_number, [])
        totals = aggregate_round(scores)
        net = None
        if totals.is_complete:
            net = calculate_net_score(totals.total_strokes, card.handicap, fmt, scores, hole_pars)
        return LeaderboardEntry(
            player_id=card.player_id,
            player_name=card.name,
            gross_total=totals.total_strokes,
            net_score=net,
            score_to_par=totals.score_to_par,
            holes_completed=totals.holes_completed,
        )

    gross = 0
    to_par = 0
    holes = 0
    net_total: Optional[int] = 0
    for number in range(1, tournament.number_of_rounds + 1):
        scores = card.rounds.get(number, [])
        totals = aggregate_round(scores)
        gross += totals.total_strokes
        to_par += totals.score_to_par
        holes += totals.holes_completed
        if not totals.is_complete:
            net_total = None
        elif net_total is not None:
            net_total += calculate_net_score(
                totals.total_strokes, card.handicap, fmt, scores, hole_pars
            )

    return LeaderboardEntry(
        player_id=card.player_id,
        player_name=card.name,
        gross_total=gross,
        net_score=net_total,
        score_to_par=to_par,
        holes_completed=holes,
    )


def rank_players(
    tournament: Tournament,
    roster: Iterable[TournamentPlayer],
    rows: Iterable[PlayerScoreRow],
    hole_pars: Optional[Iterable[int]] = None,
    round_number: Optional[int] = None,
) -> List[LeaderboardEntry]:
    """Order every player in a tournament by net score.

    With ``round_number`` only that round counts; otherwise every configured
    round is summed. A player's net stays None until every counted round is
    complete, so a partly played round never outranks a finished one.
    Players without a net score sort last. Equal nets keep their input order
    and share a rank.
    """
    pars = list(hole_pars) if hole_pars is not None else None
    cards = _collect_cards(roster, rows, tournament)
    entries = [_score_card(c, tournament, pars, round_number) for c in cards.values()]

    descending = higher_is_better(tournament.scoring_format)

    def sort_key(entry: LeaderboardEntry):
        if entry.net_score is None:
            return (1, 0)
        return (0, -entry.net_score if descending else entry.net_score)

    ranked = sorted(entries, key=sort_key)

    previous_net: Optional[int] = None
    previous_rank: Optional[int] = None
    for position, entry in enumerate(ranked, start=1):
        if entry.net_score is None:
            continue
        if entry.net_score == previous_net:
            entry.rank = previous_rank
        else:
            entry.rank = position
        previous_net, previous_rank = entry.net_score, entry.rank
    return ranked
