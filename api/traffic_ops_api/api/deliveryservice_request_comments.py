"""Delivery service request comment routes."""
from fastapi import APIRouter, Depends

from traffic_ops_api.core.deps import get_api_info, get_raw_body
from traffic_ops_api.crud.handlers import create_handler, delete_handler, read_handler, update_handler
from traffic_ops_api.crud.interfaces import APIInfo
from traffic_ops_api.services.deliveryservice_request_comment import get_type_singleton

router = APIRouter()

comment_factory = get_type_singleton()


@router.get("/deliveryservice_requests/comments")
def list_comments(inf: APIInfo = Depends(get_api_info)):
    """List comments, filterable by id, authorId, author and deliveryServiceRequestId."""
    return read_handler(comment_factory, inf)


@router.post("/deliveryservice_requests/comments")
def create_comment(raw: bytes = Depends(get_raw_body), inf: APIInfo = Depends(get_api_info)):
    """Comment on a delivery service request as the current user."""
    return create_handler(comment_factory, inf, raw)


@router.put("/deliveryservice_requests/comments")
def update_comment(raw: bytes = Depends(get_raw_body), inf: APIInfo = Depends(get_api_info)):
    """Edit a comment (``?id=``); only its author may."""
    return update_handler(comment_factory, inf, raw)


@router.delete("/deliveryservice_requests/comments")
def delete_comment(inf: APIInfo = Depends(get_api_info)):
    """Remove a comment (``?id=``); only its author may."""
    return delete_handler(comment_factory, inf)
