from .lanes import TradeLaneAggregator
from .regions import RegionalAggregator

__all__ = ["TradeLaneAggregator", "RegionalAggregator"]
