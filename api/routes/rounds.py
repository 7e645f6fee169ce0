"""Round settlement API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_round_config
from api.limiter import RATE_LIMIT, limiter
from api.schemas import OutcomeResponse, ResolveRequest, ResolveResponse
from bjengine.cards import CardSequence, cards_from_strings
from bjengine.game.resolution import resolve_round
from bjengine.strategy.rules import RoundConfig

router = APIRouter()


@router.post("/resolve")
@limiter.limit(RATE_LIMIT)
async def resolve(
    request: Request,
    body: ResolveRequest,
    round_config: Annotated[RoundConfig, Depends(get_round_config)],
) -> ResolveResponse:
    """Play the dealer out from the supplied cards and settle every hand."""
    player_hands = [cards_from_strings(hand) for hand in body.player_hands]
    dealer_hand = cards_from_strings(body.dealer_hand)
    supply = CardSequence.from_strings(body.dealer_draws)
    rules = body.rules.to_round_config() if body.rules else round_config

    result = resolve_round(
        player_hands=player_hands,
        dealer_hand=dealer_hand,
        bankroll=body.bankroll,
        bets=body.bets,
        config=rules,
        card_supply=supply,
    )

    return ResolveResponse(
        bankroll=float(result.bankroll),
        outcomes=[
            OutcomeResponse(
                result=o.result.value,
                bet=float(o.bet),
                player_value=o.player_value,
                payout=float(o.payout),
            )
            for o in result.outcomes
        ],
        dealer_hand=[str(card) for card in result.dealer_final_hand],
        dealer_value=result.dealer_value,
        cards_remaining=supply.cards_remaining,
    )
