"""Immutable input records handed to the calculation engine.

The caller (persistence/UI layer) builds these snapshots right before a
calculation call. Nothing in the engine mutates them.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

GameType = Literal[
    "NASSAU",
    "SKINS",
    "MATCH_PLAY",
    "WOLF",
    "NINES",
    "STABLEFORD",
    "SNAKE",
    "VEGAS",
    "BANKER",
    "BINGO_BANGO_BONGO",
]

PressSegment = Literal["FRONT", "BACK", "OVERALL", "MATCH"]

HOLE_NUMBERS = range(1, 19)
FRONT_NINE = range(1, 10)


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Hole(_Record):
    hole_number: int = Field(..., ge=1, le=18)
    par: int = Field(default=4, ge=3, le=6)
    handicap_rank: int = Field(..., ge=1, le=18)


class PlayerScore(_Record):
    hole_number: int = Field(..., ge=1, le=18)
    strokes: Optional[int] = Field(default=None, ge=1)
    putts: Optional[int] = Field(default=None, ge=0)


class Player(_Record):
    id: str = Field(..., min_length=1)
    course_handicap: Optional[float] = None
    scores: List[PlayerScore] = Field(default_factory=list)

    @field_validator("scores")
    @classmethod
    def _unique_holes(cls, value: List[PlayerScore]) -> List[PlayerScore]:
        seen = set()
        for score in value:
            if score.hole_number in seen:
                raise ValueError(f"duplicate score for hole {score.hole_number}")
            seen.add(score.hole_number)
        return value

    def score_on(self, hole_number: int) -> Optional[PlayerScore]:
        for score in self.scores:
            if score.hole_number == hole_number:
                return score
        return None

    def strokes_on(self, hole_number: int) -> Optional[int]:
        score = self.score_on(hole_number)
        return score.strokes if score else None

    def putts_on(self, hole_number: int) -> Optional[int]:
        score = self.score_on(hole_number)
        return score.putts if score else None


class WolfDecision(_Record):
    hole_number: int = Field(..., ge=1, le=18)
    wolf_user_id: str
    partner_user_id: Optional[str] = None
    is_lone_wolf: bool = False
    is_blind: bool = False

    @model_validator(mode="after")
    def _partner_matches_lone_flag(self) -> "WolfDecision":
        if (self.partner_user_id is None) != self.is_lone_wolf:
            raise ValueError("partner_user_id must be set unless is_lone_wolf")
        if self.is_blind and not self.is_lone_wolf:
            raise ValueError("a blind wolf always plays alone")
        return self


class Press(_Record):
    id: str = Field(..., min_length=1)
    parent_press_id: Optional[str] = None
    segment: PressSegment
    start_hole: int = Field(..., ge=1, le=18)
    bet_multiplier: float = Field(default=1, gt=0)
    initiated_by: Optional[str] = None


class SettlementEdge(_Record):
    from_user_id: str
    to_user_id: str
    amount: float = Field(..., gt=0)


class VegasTeam(_Record):
    team_number: Literal[1, 2]
    player1_id: str
    player2_id: str


class BankerDecision(_Record):
    hole_number: int = Field(..., ge=1, le=18)
    banker_user_id: str


class BingoBangoBongoAward(_Record):
    hole_number: int = Field(..., ge=1, le=18)
    bingo_user_id: Optional[str] = None
    bango_user_id: Optional[str] = None
    bongo_user_id: Optional[str] = None


class _GameConfigBase(_Record):
    bet_amount: float = Field(default=0, ge=0)
    participant_ids: Optional[List[str]] = None


class NassauConfig(_GameConfigBase):
    type: Literal["NASSAU"] = "NASSAU"
    is_auto_press: bool = False
    presses: List[Press] = Field(default_factory=list)


class MatchPlayConfig(_GameConfigBase):
    type: Literal["MATCH_PLAY"] = "MATCH_PLAY"
    is_auto_press: bool = False
    presses: List[Press] = Field(default_factory=list)


class SkinsConfig(_GameConfigBase):
    type: Literal["SKINS"] = "SKINS"


class WolfConfig(_GameConfigBase):
    type: Literal["WOLF"] = "WOLF"
    decisions: List[WolfDecision] = Field(default_factory=list)
    rotation: Optional[List[str]] = None
    # What a blind lone wolf wins or loses, in bets, against the whole pack.
    blind_multiplier: float = Field(default=4, gt=0)


class NinesConfig(_GameConfigBase):
    type: Literal["NINES"] = "NINES"
    points_table: Optional[List[float]] = None


class StablefordConfig(_GameConfigBase):
    type: Literal["STABLEFORD"] = "STABLEFORD"


class SnakeConfig(_GameConfigBase):
    type: Literal["SNAKE"] = "SNAKE"


class VegasConfig(_GameConfigBase):
    type: Literal["VEGAS"] = "VEGAS"
    teams: List[VegasTeam] = Field(default_factory=list)


class BankerConfig(_GameConfigBase):
    type: Literal["BANKER"] = "BANKER"
    decisions: List[BankerDecision] = Field(default_factory=list)


class BingoBangoBongoConfig(_GameConfigBase):
    type: Literal["BINGO_BANGO_BONGO"] = "BINGO_BANGO_BONGO"
    awards: List[BingoBangoBongoAward] = Field(default_factory=list)


GameConfig = Annotated[
    Union[
        NassauConfig,
        MatchPlayConfig,
        SkinsConfig,
        WolfConfig,
        NinesConfig,
        StablefordConfig,
        SnakeConfig,
        VegasConfig,
        BankerConfig,
        BingoBangoBongoConfig,
    ],
    Field(discriminator="type"),
]
