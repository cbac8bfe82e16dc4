from .base import Base
from .user import UserModel
from .report import ReportModel
from .trello_stats import TrelloStatsModel
from .visitor_country import VisitorCountryModel

__all__ = [
    "Base",
    "UserModel",
    "ReportModel",
    "TrelloStatsModel",
    "VisitorCountryModel",
]
