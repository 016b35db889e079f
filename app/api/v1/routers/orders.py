# app/api/v1/routers/orders.py
from __future__ import annotations
from typing import Annotated
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.api.deps import notifier_dep, order_repo_dep
from app.api.v1.schemas.orders import ChangeStatusIn, ChangeStatusOut, TransitionsOut
from app.core.versioning import resolve_actor
from app.domain.errors import InvalidTransition, OrderNotFound, OrderStatusConflict
from app.domain.models.order import Order
from app.domain.services.order_status_guard import allowed_transitions, is_terminal
from app.domain.services.order_status_svc import change_order_status, get_order, notify_status_change

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/orders", tags=["orders"])

ActorDep = Annotated[str, Depends(resolve_actor)]

@router.get("/{order_id}", response_model=Order)
async def order_detail(order_id: str, order_repo = Depends(order_repo_dep)):
    try:
        return await get_order(order_repo, order_id)
    except OrderNotFound:
        raise HTTPException(status_code=404, detail="Order not found.")

@router.get("/{order_id}/transitions", response_model=TransitionsOut)
async def order_transitions(order_id: str, order_repo = Depends(order_repo_dep)):
    """Current status and the statuses the admin console may offer next."""
    try:
        order = await get_order(order_repo, order_id)
    except OrderNotFound:
        raise HTTPException(status_code=404, detail="Order not found.")
    status = getattr(order.status, "value", order.status)
    return TransitionsOut(
        order_id=order.order_id,
        status=status,
        allowed_transitions=allowed_transitions(status),
        terminal=is_terminal(status),
    )

@router.patch("/{order_id}/status", response_model=ChangeStatusOut)
async def change_status(
    order_id: str,
    body: ChangeStatusIn,
    actor: ActorDep,
    background_tasks: BackgroundTasks,
    order_repo = Depends(order_repo_dep),
    notifier = Depends(notifier_dep),
):
    logger.info("Request: change_status order_id=%s to=%s actor=%s", order_id, body.status, actor)
    try:
        result = await change_order_status(
            order_repo,
            order_id=order_id,
            status=body.status,
            notes=body.notes,
            tracking_number=body.tracking_number,
            changed_by=actor,
        )
    except OrderNotFound:
        raise HTTPException(status_code=404, detail="Order not found.")
    except InvalidTransition as e:
        logger.info("Rejected: change_status order_id=%s %s -> %s", order_id, e.from_status, e.to_status)
        return JSONResponse(status_code=400, content=e.to_dict())
    except OrderStatusConflict as e:
        raise HTTPException(status_code=409, detail=str(e))

    # sent after the response; never blocks or undoes the status change
    if body.notify_customer:
        background_tasks.add_task(notify_status_change, notifier, result.order, result.previous_status)

    return ChangeStatusOut(
        message=f"Status changed: {result.previous_status} -> {result.entry.status}",
        order=result.order,
    )
