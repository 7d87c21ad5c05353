from __future__ import annotations

from fastapi import APIRouter, Depends

from portal.api.deps import (
    get_admin_update_user_use_case,
    get_assign_subscription_use_case,
    get_extend_subscription_use_case,
    get_list_plans_use_case,
    get_load_admin_roster_use_case,
    get_remove_subscription_use_case,
    require_admin,
)
from portal.api.errors import to_http_exception
from portal.api.schemas.admin import (
    AdminUpdateUserRequest,
    AssignSubscriptionRequest,
    ExtendSubscriptionRequest,
    PlanSchema,
    PlansResponse,
    RosterResponse,
    RosterUserSchema,
    SubscriptionSchema,
)
from portal.api.schemas.profile import StatusResponse
from portal.application.dto.admin import (
    AdminUpdateUserInput,
    AssignSubscriptionInput,
    ExtendSubscriptionInput,
)
from portal.application.use_cases.admin_update_user import AdminUpdateUserUseCase
from portal.application.use_cases.list_plans import ListPlansUseCase
from portal.application.use_cases.load_admin_roster import LoadAdminRosterUseCase
from portal.application.use_cases.manage_subscriptions import (
    AssignSubscriptionUseCase,
    ExtendSubscriptionUseCase,
    RemoveSubscriptionUseCase,
)
from portal.domain.entities.session import SessionContext
from portal.domain.entities.subscription import UNKNOWN_PLAN_NAME
from portal.domain.exceptions import DomainError
from portal.domain.services.metadata import profile_metadata_to_mapping


router = APIRouter()


@router.get("/v1/admin/users", response_model=RosterResponse)
async def list_users(
    session: SessionContext = Depends(require_admin),
    use_case: LoadAdminRosterUseCase = Depends(get_load_admin_roster_use_case),
):
    try:
        roster = await use_case.execute(session=session)
    except DomainError as exc:
        raise to_http_exception(exc, context="admin_users") from exc

    return RosterResponse(
        users=[
            RosterUserSchema(
                id=entry.user.id,
                name=entry.user.name,
                email=entry.user.email,
                phone_number=entry.user.phone_number,
                profile_picture_url=entry.user.profile_picture_url,
                tenant_id=entry.user.tenant_id,
                metadata=profile_metadata_to_mapping(entry.user.metadata),
                subscriptions=[
                    SubscriptionSchema(
                        id=item.id,
                        plan_id=item.plan_id,
                        plan_name=item.plan_name or UNKNOWN_PLAN_NAME,
                        expiration_date=item.expiration_date,
                    )
                    for item in entry.subscriptions
                ],
            )
            for entry in roster
        ]
    )


@router.put("/v1/admin/users/{user_id}", response_model=StatusResponse)
async def update_user(
    user_id: str,
    req: AdminUpdateUserRequest,
    _session: SessionContext = Depends(require_admin),
    use_case: AdminUpdateUserUseCase = Depends(get_admin_update_user_use_case),
):
    try:
        await use_case.execute(
            AdminUpdateUserInput(
                user_id=user_id,
                tenant_id=req.tenant_id,
                form=req.to_input(),
                existing_metadata=req.existing_metadata,
            )
        )
    except DomainError as exc:
        raise to_http_exception(exc, context="admin_update_user") from exc
    return StatusResponse()


@router.get("/v1/admin/plans", response_model=PlansResponse)
async def list_plans(
    _session: SessionContext = Depends(require_admin),
    use_case: ListPlansUseCase = Depends(get_list_plans_use_case),
):
    try:
        plans = await use_case.execute()
    except DomainError as exc:
        raise to_http_exception(exc, context="admin_plans") from exc
    return PlansResponse(
        plans=[PlanSchema(id=plan.id, name=plan.name, description=plan.description) for plan in plans]
    )


@router.post("/v1/admin/users/{user_id}/subscriptions", response_model=StatusResponse)
async def assign_subscription(
    user_id: str,
    req: AssignSubscriptionRequest,
    _session: SessionContext = Depends(require_admin),
    use_case: AssignSubscriptionUseCase = Depends(get_assign_subscription_use_case),
):
    try:
        await use_case.execute(
            AssignSubscriptionInput(
                user_id=user_id,
                tenant_id=req.tenant_id,
                plan_id=req.plan_id,
                expiration_date=req.expiration_date,
            )
        )
    except DomainError as exc:
        raise to_http_exception(exc, context="assign_subscription") from exc
    return StatusResponse()


@router.patch("/v1/admin/subscriptions/{entitlement_id}", response_model=StatusResponse)
async def extend_subscription(
    entitlement_id: str,
    req: ExtendSubscriptionRequest,
    _session: SessionContext = Depends(require_admin),
    use_case: ExtendSubscriptionUseCase = Depends(get_extend_subscription_use_case),
):
    try:
        await use_case.execute(
            ExtendSubscriptionInput(
                entitlement_id=entitlement_id,
                expiration_date=req.expiration_date,
            )
        )
    except DomainError as exc:
        raise to_http_exception(exc, context="extend_subscription") from exc
    return StatusResponse()


@router.delete("/v1/admin/subscriptions/{entitlement_id}", response_model=StatusResponse)
async def remove_subscription(
    entitlement_id: str,
    _session: SessionContext = Depends(require_admin),
    use_case: RemoveSubscriptionUseCase = Depends(get_remove_subscription_use_case),
):
    try:
        await use_case.execute(entitlement_id=entitlement_id)
    except DomainError as exc:
        raise to_http_exception(exc, context="remove_subscription") from exc
    return StatusResponse()
