import logging
from datetime import date, timedelta
from typing import List, Optional

from app.models.itinerary import Itinerary
from app.models.trip import TripRequest

logger = logging.getLogger(__name__)


def format_long_date(day: date) -> str:
    """e.g. Monday, October 19, 2026"""
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def trip_dates(duration: int, today: Optional[date] = None) -> List[str]:
    """Long-form dates for each day of a trip starting today"""
    start = today or date.today()
    return [format_long_date(start + timedelta(days=offset)) for offset in range(duration)]


def finalize_itinerary(itinerary: Itinerary, request: TripRequest, today: Optional[date] = None) -> Itinerary:
    """
    Derive the fields the model cannot be trusted with.

    The n-th day (by position) is dated today + n; whatever date text the
    model wrote is discarded since it has no idea what day it is. Days keep
    their order and numbers. A missing dailyBudget is filled from totalCost.
    """
    dates = trip_dates(len(itinerary.days), today)
    days = [
        day.model_copy(update={"date": dates[index]})
        for index, day in enumerate(itinerary.days)
    ]

    update = {"days": days}
    if itinerary.dailyBudget is None:
        update["dailyBudget"] = itinerary.totalCost / request.duration
        logger.info(f"Filled missing dailyBudget: {update['dailyBudget']:.2f}")

    return itinerary.model_copy(update=update)
