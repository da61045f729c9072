"""Per-user inventory, profile and health risk endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Query, Request, status

from smartbite.api.models import FoodPayload, ProfilePayload

if TYPE_CHECKING:
    from smartbite.containers import AppContainer

router = APIRouter(prefix="/users/{user_id}", tags=["users"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _not_found(entity: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found"
    )


@router.get("/profile")
async def get_profile(user_id: UUID, request: Request) -> dict[str, object]:
    profile = _container(request).profile_service.get_profile(user_id)
    if profile is None:
        raise _not_found("User")
    return {"health_profile": profile.to_dict()}


@router.put("/profile")
async def update_profile(
    user_id: UUID, payload: ProfilePayload, request: Request
) -> dict[str, object]:
    """Replace the user's health profile."""
    user = _container(request).profile_service.update_profile(
        user_id, payload.model_dump()
    )
    if user is None:
        raise _not_found("User")
    return {"health_profile": user.health_profile.to_dict()}


@router.post("/health-risk/analyze")
async def analyze_food(
    user_id: UUID, payload: FoodPayload, request: Request
) -> dict[str, object]:
    """Evaluate an unsaved food against the user's profile."""
    verdict = _container(request).food_service.analyze(user_id, payload.to_row())
    if verdict is None:
        raise _not_found("User")
    return verdict.to_dict()


@router.get("/foods")
async def list_foods(user_id: UUID, request: Request) -> dict[str, object]:
    entries = _container(request).food_service.list_foods(user_id)
    if entries is None:
        raise _not_found("User")
    return {"foods": [entry.to_dict() for entry in entries]}


@router.post("/foods", status_code=status.HTTP_201_CREATED)
async def add_food(
    user_id: UUID, payload: FoodPayload, request: Request
) -> dict[str, object]:
    """Store a food, returning its verdict and any alerts raised."""
    assessment = _container(request).food_service.add_food(user_id, payload.to_row())
    if assessment is None:
        raise _not_found("User")
    return {
        "food": assessment.food.to_dict(),
        "health_risk": assessment.verdict.to_dict(),
        "alerts": [alert.to_dict() for alert in assessment.alerts],
    }


@router.get("/foods/stats")
async def food_stats(user_id: UUID, request: Request) -> dict[str, int]:
    stats = _container(request).food_service.dashboard_stats(user_id)
    if stats is None:
        raise _not_found("User")
    return {
        "total": stats.total,
        "expired": stats.expired,
        "expiring_soon": stats.expiring_soon,
        "expiring_week": stats.expiring_week,
    }


@router.get("/foods/expiring")
async def expiring_foods(
    user_id: UUID, request: Request, days: int = Query(default=3, ge=1, le=30)
) -> dict[str, object]:
    """Active foods expiring within the next ``days`` days."""
    entries = _container(request).food_service.list_expiring(user_id, days)
    if entries is None:
        raise _not_found("User")
    return {"foods": [entry.to_dict() for entry in entries]}


@router.get("/foods/{food_id}")
async def get_food(user_id: UUID, food_id: UUID, request: Request) -> dict[str, object]:
    food = _container(request).food_service.get_food(user_id, food_id)
    if food is None:
        raise _not_found("Food")
    return food.to_dict()


@router.put("/foods/{food_id}")
async def replace_food(
    user_id: UUID, food_id: UUID, payload: FoodPayload, request: Request
) -> dict[str, object]:
    food = _container(request).food_service.update_food(
        user_id, food_id, payload.to_row()
    )
    if food is None:
        raise _not_found("Food")
    return food.to_dict()


@router.delete("/foods/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food(user_id: UUID, food_id: UUID, request: Request) -> None:
    if not _container(request).food_service.delete_food(user_id, food_id):
        raise _not_found("Food")


@router.get("/foods/{food_id}/health-risk")
async def food_health_risk(
    user_id: UUID, food_id: UUID, request: Request
) -> dict[str, object]:
    """Verdict for a stored food with safer alternatives."""
    report = _container(request).food_service.get_health_risk(user_id, food_id)
    if report is None:
        raise _not_found("Food")
    return report.to_dict()


@router.get("/health-insights")
async def health_insights(user_id: UUID, request: Request) -> dict[str, object]:
    report = await _container(request).insights_service.build_report(user_id)
    if report is None:
        raise _not_found("User")
    return report.to_dict()


@router.post("/expiry-check")
async def expiry_check(user_id: UUID, request: Request) -> dict[str, object]:
    """Run the expiry sweep for one user; called by an external scheduler."""
    result = _container(request).food_service.run_expiry_check(user_id)
    if result is None:
        raise _not_found("User")
    return {
        "alerts": [alert.to_dict() for alert in result.alerts],
        "dispatched": result.dispatched,
        "expired_marked": result.expired_marked,
    }
