from .forecasting import ResourceForecastService, ResourceForecastResult, SkillMatch, to_payload
from .advisory import AdviceProvider, NullAdviceProvider, RebalanceAdvisoryGateway

__all__ = [
    "ResourceForecastService",
    "ResourceForecastResult",
    "SkillMatch",
    "to_payload",
    "AdviceProvider",
    "NullAdviceProvider",
    "RebalanceAdvisoryGateway",
]
