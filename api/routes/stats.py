"""Decision statistics API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies import get_recorder
from api.limiter import RATE_LIMIT, limiter
from api.schemas import (
    DecisionRequest,
    DecisionResponse,
    ScenarioStatResponse,
    ScenariosResponse,
)
from bjengine.cards import Card, cards_from_strings
from bjengine.statistics.recorder import DecisionRecorder
from bjengine.strategy.basic import Action

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/decisions")
@limiter.limit(RATE_LIMIT)
async def record_decision(
    request: Request,
    body: DecisionRequest,
    recorder: Annotated[DecisionRecorder, Depends(get_recorder)],
) -> DecisionResponse:
    """Grade a decision and add it to the scenario statistics."""
    cards = cards_from_strings(body.hand)
    upcard = Card.from_string(body.dealer_upcard) if body.dealer_upcard else None

    record = recorder.record_decision(
        cards, upcard, Action(body.action), body.to_capabilities()
    )
    if record is None:
        return DecisionResponse(recorded=False, action=body.action)

    return DecisionResponse(
        recorded=True,
        scenario=record.key.label,
        action=body.action,
        optimal_action=record.optimal_action.value,
        is_optimal=record.is_optimal,
        occurrence_count=record.stat.occurrence_count,
        accuracy=record.stat.accuracy,
    )


@router.get("/scenarios")
@limiter.limit(RATE_LIMIT)
async def get_scenarios(
    request: Request,
    recorder: Annotated[DecisionRecorder, Depends(get_recorder)],
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> ScenariosResponse:
    """Get scenario aggregates, most frequent first."""
    entries = recorder.store.most_common(limit)
    return ScenariosResponse(
        total_decisions=sum(stat.occurrence_count for _, stat in recorder.store.most_common()),
        scenarios=[
            ScenarioStatResponse(
                scenario=key.label,
                optimal_action=stat.optimal_action.value,
                occurrence_count=stat.occurrence_count,
                correct_count=stat.correct_count,
                accuracy=stat.accuracy,
                most_common_action=(
                    stat.most_common_action.value if stat.most_common_action else None
                ),
                action_frequency={a.value: n for a, n in stat.action_frequency.items()},
            )
            for key, stat in entries
        ],
    )


@router.delete("/scenarios")
@limiter.limit(RATE_LIMIT)
async def reset_scenarios(
    request: Request,
    recorder: Annotated[DecisionRecorder, Depends(get_recorder)],
) -> dict[str, str]:
    """Clear every scenario aggregate and the decision history."""
    recorder.store.reset()
    recorder.clear_history()
    logger.info("Scenario statistics reset")
    return {"status": "reset"}
