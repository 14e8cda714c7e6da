"""Plain-text export and share text for saved itineraries."""

import re
from typing import List, Optional

from app.models.itinerary import Itinerary, format_amount

SLOTS = (("Morning", "morning"), ("Afternoon", "afternoon"), ("Evening", "evening"))


def export_filename(title: str) -> str:
    return f"{re.sub(r'[^a-z0-9]', '_', title, flags=re.IGNORECASE).lower()}_itinerary.txt"


def share_text(itinerary: Itinerary, link: Optional[str] = None) -> str:
    text = f"Check out my travel itinerary: {itinerary.title}\n\n{itinerary.summary}"
    if link:
        text += f"\n\n{link}"
    return text


def _section(title: str, underline: int) -> List[str]:
    return [title, "-" * underline]


def render_itinerary_text(itinerary: Itinerary, destination: str) -> str:
    lines = [
        itinerary.title,
        "=" * len(itinerary.title),
        "",
        itinerary.summary,
        "",
        f"Total Budget: ${format_amount(itinerary.totalCost)}",
        f"Duration: {len(itinerary.days)} days",
        f"Destination: {destination}",
        "",
    ]

    lines += _section("DAILY ITINERARY", 16)
    lines.append("")
    for day in itinerary.days:
        lines.append(f"Day {day.day} - {day.date or ''}".rstrip(" -"))
        lines.append("-" * 20)
        for label, attr in SLOTS:
            slot = getattr(day, attr)
            lines += [
                f"{label} ({slot.time}): {slot.activity}",
                f"Location: {slot.location}",
                f"Cost: ${format_amount(slot.cost)}",
                slot.description,
                "",
            ]
        lines.append("Daily Tips:")
        lines += [f"• {tip}" for tip in day.tips]
        lines.append("")

    lines += _section("RECOMMENDED RESTAURANTS", 24)
    for restaurant in itinerary.restaurants:
        lines += [
            f"{restaurant.name} ({format_amount(restaurant.rating)}★)",
            f"Type: {restaurant.type} | Price: {restaurant.priceRange}",
            f"Specialty: {restaurant.speciality}",
            "",
        ]

    lines += _section("RECOMMENDED ACCOMMODATIONS", 28)
    for hotel in itinerary.accommodations:
        lines += [
            f"{hotel.name} ({format_amount(hotel.rating)}★)",
            f"Type: {hotel.type} | Price: ${format_amount(hotel.pricePerNight)}/night",
            f"Amenities: {', '.join(hotel.amenities)}",
            "",
        ]

    lines += _section("TRAVEL TIPS", 11)
    lines += [f"• {tip}" for tip in itinerary.tips]

    return "\n".join(lines) + "\n"
