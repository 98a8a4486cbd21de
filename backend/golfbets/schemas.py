from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from .models import (
    GameConfig,
    GameType,
    Hole,
    Player,
    PressSegment,
    SettlementEdge,
)


class GameErrorOut(BaseModel):
    """Returned instead of a result when a game cannot be played as configured."""

    game: GameType
    error: str


class StandingOut(BaseModel):
    user_id: str
    money: float = 0


class MatchTallyOut(BaseModel):
    start_hole: int
    end_hole: int
    winner_id: Optional[str] = None
    loser_id: Optional[str] = None
    margin: int = 0
    p1_up: int = 0
    holes_played: int = 0
    holes_remaining: int = 0
    status: str
    can_press: bool = False
    press_start_hole: Optional[int] = None


class SegmentOut(MatchTallyOut):
    segment: Literal["FRONT", "BACK", "OVERALL"]
    money: float = 0


class PressOut(MatchTallyOut):
    id: str
    parent_press_id: Optional[str] = None
    segment: PressSegment
    bet_multiplier: float = 1
    amount: float = 0
    depth: int = 0
    is_auto: bool = False
    initiated_by: Optional[str] = None
    decided: bool = False
    money_awarded: float = 0
    initiator_result: Optional[Literal["WON", "LOST", "PUSHED"]] = None


class NassauOut(BaseModel):
    game: Literal["NASSAU"] = "NASSAU"
    bet_amount: float
    front: SegmentOut
    back: SegmentOut
    overall: SegmentOut
    presses: List[PressOut] = Field(default_factory=list)
    standings: List[StandingOut] = Field(default_factory=list)
    settlements: List[SettlementEdge] = Field(default_factory=list)


class SkinOut(BaseModel):
    hole: int
    winner_id: Optional[str] = None
    value: float = 0
    carried: float = 0
    skipped: bool = False


class SkinsStandingOut(StandingOut):
    skins: int = 0
    won: float = 0


class SkinsOut(BaseModel):
    game: Literal["SKINS"] = "SKINS"
    bet_amount: float
    skins: List[SkinOut] = Field(default_factory=list)
    total_pot: float = 0
    carryover: float = 0
    holes_compared: int = 0
    standings: List[SkinsStandingOut] = Field(default_factory=list)


class MatchHoleOut(BaseModel):
    hole: int
    p1_net: Optional[int] = None
    p2_net: Optional[int] = None
    winner_id: Optional[str] = None


class MatchPlayerOut(StandingOut):
    status: str


class MatchPlayOut(BaseModel):
    game: Literal["MATCH_PLAY"] = "MATCH_PLAY"
    bet_amount: float
    state: Literal["IN_PROGRESS", "WON", "HALVED"] = "IN_PROGRESS"
    status: str
    result_text: str
    winner_id: Optional[str] = None
    p1_up: int = 0
    holes_played: int = 0
    holes_remaining: int = 18
    can_press: bool = False
    press_start_hole: Optional[int] = None
    holes: List[MatchHoleOut] = Field(default_factory=list)
    presses: List[PressOut] = Field(default_factory=list)
    standings: List[MatchPlayerOut] = Field(default_factory=list)
    settlements: List[SettlementEdge] = Field(default_factory=list)


class WolfHoleOut(BaseModel):
    hole: int
    wolf_user_id: Optional[str] = None
    partner_user_id: Optional[str] = None
    is_lone_wolf: bool = False
    is_blind: bool = False
    wolf_team_score: Optional[int] = None
    other_team_score: Optional[int] = None
    winner: Optional[Literal["wolf", "pack"]] = None
    stake: float = 0


class WolfStandingOut(StandingOut):
    points: float = 0


class WolfOut(BaseModel):
    game: Literal["WOLF"] = "WOLF"
    bet_amount: float
    holes: List[WolfHoleOut] = Field(default_factory=list)
    standings: List[WolfStandingOut] = Field(default_factory=list)


class RankedScoreOut(BaseModel):
    user_id: str
    net_score: Optional[int] = None
    points: float = 0


class NinesHoleOut(BaseModel):
    hole: int
    complete: bool = False
    scores: List[RankedScoreOut] = Field(default_factory=list)


class SplitStandingOut(StandingOut):
    front: float = 0
    back: float = 0
    total: float = 0


class NinesStandingOut(SplitStandingOut):
    front_money: float = 0
    back_money: float = 0


class NinesOut(BaseModel):
    game: Literal["NINES"] = "NINES"
    bet_amount: float
    points_table: List[float] = Field(default_factory=list)
    holes: List[NinesHoleOut] = Field(default_factory=list)
    standings: List[NinesStandingOut] = Field(default_factory=list)


class StablefordScoreOut(BaseModel):
    user_id: str
    gross: Optional[int] = None
    net: Optional[int] = None
    points: int = 0


class StablefordHoleOut(BaseModel):
    hole: int
    par: int
    scores: List[StablefordScoreOut] = Field(default_factory=list)


class StablefordOut(BaseModel):
    game: Literal["STABLEFORD"] = "STABLEFORD"
    bet_amount: float
    holes: List[StablefordHoleOut] = Field(default_factory=list)
    standings: List[SplitStandingOut] = Field(default_factory=list)


class ThreePuttOut(BaseModel):
    hole: int
    user_id: str
    putts: int


class SnakeStandingOut(StandingOut):
    three_putts: int = 0
    holds_snake: bool = False


class SnakeOut(BaseModel):
    game: Literal["SNAKE"] = "SNAKE"
    bet_amount: float
    snake_holder: Optional[str] = None
    three_putt_history: List[ThreePuttOut] = Field(default_factory=list)
    standings: List[SnakeStandingOut] = Field(default_factory=list)


class VegasHoleOut(BaseModel):
    hole: int
    team1_number: Optional[int] = None
    team2_number: Optional[int] = None
    swing: int = 0


class VegasTeamOut(BaseModel):
    team_number: int
    player_ids: List[str]
    total_swing: int = 0
    money: float = 0


class VegasOut(BaseModel):
    game: Literal["VEGAS"] = "VEGAS"
    bet_amount: float
    holes: List[VegasHoleOut] = Field(default_factory=list)
    teams: List[VegasTeamOut] = Field(default_factory=list)
    standings: List[StandingOut] = Field(default_factory=list)


class BankerHoleOut(BaseModel):
    hole: int
    banker_user_id: Optional[str] = None
    banker_won: Optional[bool] = None
    banker_net: Optional[int] = None
    best_other_net: Optional[int] = None


class BankerOut(BaseModel):
    game: Literal["BANKER"] = "BANKER"
    bet_amount: float
    holes: List[BankerHoleOut] = Field(default_factory=list)
    standings: List[StandingOut] = Field(default_factory=list)


class BingoBangoBongoHoleOut(BaseModel):
    hole: int
    bingo_user_id: Optional[str] = None
    bango_user_id: Optional[str] = None
    bongo_user_id: Optional[str] = None


class BingoBangoBongoStandingOut(StandingOut):
    bingo: int = 0
    bango: int = 0
    bongo: int = 0
    total: int = 0


class BingoBangoBongoOut(BaseModel):
    game: Literal["BINGO_BANGO_BONGO"] = "BINGO_BANGO_BONGO"
    bet_amount: float
    holes: List[BingoBangoBongoHoleOut] = Field(default_factory=list)
    standings: List[BingoBangoBongoStandingOut] = Field(default_factory=list)


GameResult = Union[
    NassauOut,
    SkinsOut,
    MatchPlayOut,
    WolfOut,
    NinesOut,
    StablefordOut,
    SnakeOut,
    VegasOut,
    BankerOut,
    BingoBangoBongoOut,
    GameErrorOut,
]


class RoundSettlementOut(BaseModel):
    results: List[GameResult] = Field(default_factory=list)
    raw_settlements: List[SettlementEdge] = Field(default_factory=list)
    payments: List[SettlementEdge] = Field(default_factory=list)
    net_by_player: Dict[str, float] = Field(default_factory=dict)


class CalculateGameRequest(BaseModel):
    players: List[Player]
    holes: List[Hole] = Field(default_factory=list)
    game: GameConfig


class SettleRoundRequest(BaseModel):
    players: List[Player]
    holes: List[Hole] = Field(default_factory=list)
    games: List[GameConfig] = Field(default_factory=list)


class ConsolidateRequest(BaseModel):
    settlements: List[SettlementEdge] = Field(default_factory=list)
