"""Strategy advice API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_recorder, get_round_config
from api.limiter import RATE_LIMIT, limiter
from api.schemas import AdviseRequest, AdviseResponse, ChartCellResponse, ChartResponse
from bjengine.cards import Card, cards_from_strings
from bjengine.hand import Hand
from bjengine.statistics.recorder import DecisionRecorder
from bjengine.statistics.scenarios import scenario_key
from bjengine.strategy.basic import strategy_for
from bjengine.strategy.chart import DEALER_RANKS, chart_with_stats
from bjengine.strategy.rules import RoundConfig

router = APIRouter()


@router.post("/advise")
@limiter.limit(RATE_LIMIT)
async def advise(
    request: Request,
    body: AdviseRequest,
    round_config: Annotated[RoundConfig, Depends(get_round_config)],
) -> AdviseResponse:
    """Get the basic strategy play for a hand against an upcard."""
    hand = Hand(tuple(cards_from_strings(body.hand)))
    upcard = Card.from_string(body.dealer_upcard) if body.dealer_upcard else None
    rules = body.rules.to_round_config() if body.rules else round_config

    action = strategy_for(rules).optimal_action(hand, upcard, body.to_capabilities())
    key = scenario_key(hand, upcard)

    return AdviseResponse(
        action=action.value,
        player_value=hand.value,
        is_soft=hand.is_soft,
        is_pair=hand.is_pair,
        scenario=key.label if key else None,
    )


@router.get("/chart")
@limiter.limit(RATE_LIMIT)
async def get_chart(
    request: Request,
    recorder: Annotated[DecisionRecorder, Depends(get_recorder)],
    round_config: Annotated[RoundConfig, Depends(get_round_config)],
) -> ChartResponse:
    """Get the reference chart joined with recorded accuracy."""
    cells = chart_with_stats(recorder.store.snapshot(), strategy_for(round_config))
    return ChartResponse(
        dealer_ranks=[rank.value for rank in DEALER_RANKS],
        cells=[
            ChartCellResponse(
                scenario=cell.key.label,
                hand_shape=cell.key.shape.label,
                dealer_rank=cell.key.dealer_rank.value,
                optimal_action=cell.optimal_action.value,
                occurrences=cell.occurrences,
                accuracy=cell.accuracy,
                most_common_action=(
                    cell.most_common_action.value if cell.most_common_action else None
                ),
            )
            for cell in cells
        ],
    )
