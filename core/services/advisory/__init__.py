from .gateway import RebalanceAdvisoryGateway, build_advisory_request
from .models import AdvisoryRequest, RosterEntry, WorkloadDigest
from .policy import AdvisorySettings, load_advisory_settings
from .provider import AdviceProvider, NullAdviceProvider, parse_suggestions

__all__ = [
    "RebalanceAdvisoryGateway",
    "build_advisory_request",
    "AdvisoryRequest",
    "RosterEntry",
    "WorkloadDigest",
    "AdvisorySettings",
    "load_advisory_settings",
    "AdviceProvider",
    "NullAdviceProvider",
    "parse_suggestions",
]
