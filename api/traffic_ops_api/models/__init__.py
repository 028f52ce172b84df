"""Models package."""
from traffic_ops_api.models.user import TmUser
from traffic_ops_api.models.deliveryservice_request import DeliveryServiceRequest
from traffic_ops_api.models.deliveryservice_request_comment import DeliveryServiceRequestComment
from traffic_ops_api.models.change_log import ChangeLog

__all__ = [
    "TmUser",
    "DeliveryServiceRequest",
    "DeliveryServiceRequestComment",
    "ChangeLog",
]
