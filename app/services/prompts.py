"""
Prompt construction for itinerary generation.

The prompt restates the trip request, tells the model what to produce and ends
with a literal JSON template. ``totalCost`` in the template is filled with the
requested budget so the model is anchored to it.
"""

from app.models.itinerary import format_amount
from app.models.trip import TripRequest


SYSTEM_ROLE = (
    "You are an expert AI travel planner specializing in creating personalized, "
    "detailed travel itineraries. Create a comprehensive travel plan based on the "
    "following user preferences:"
)

GENERATION_INSTRUCTIONS = """**Instructions:**
Create an engaging, friendly, and inspirational travel itinerary that includes:

1. **Trip Title & Summary**: A catchy title and 2-3 sentence summary that captures the essence of the trip
2. **Daily Itinerary**: For each day, provide:
   - Morning activity (9 AM - 12 PM) with specific location, description, and estimated cost
   - Afternoon activity (1 PM - 5 PM) with specific location, description, and estimated cost
   - Evening activity (7 PM - 11 PM) with specific location, description, and estimated cost
   - 3 practical daily tips
3. **Cost Breakdown**: Realistic cost estimates that fit within the total budget
4. **Restaurant Recommendations**: 3-4 highly-rated local restaurants with cuisine type, price range, and specialty
5. **Accommodation Suggestions**: 2-3 hotels/stays matching the accommodation preference with nightly rates and amenities
6. **Local Tips**: 6-8 cultural notes, practical tips, and insider recommendations

**Tone**: Enthusiastic, friendly, and inspiring. Make the traveler excited about their upcoming adventure!"""

# Doubled braces survive str.format(); only {total_cost} is substituted.
ITINERARY_JSON_TEMPLATE = """{{
  "title": "Trip title here",
  "summary": "Trip summary here",
  "totalCost": {total_cost},
  "dailyBudget": calculated_daily_budget,
  "days": [
    {{
      "day": 1,
      "date": "formatted_date",
      "morning": {{
        "time": "9:00 AM - 12:00 PM",
        "activity": "activity_name",
        "location": "specific_location",
        "cost": estimated_cost,
        "description": "detailed_description"
      }},
      "afternoon": {{
        "time": "1:00 PM - 5:00 PM",
        "activity": "activity_name",
        "location": "specific_location",
        "cost": estimated_cost,
        "description": "detailed_description"
      }},
      "evening": {{
        "time": "7:00 PM - 11:00 PM",
        "activity": "activity_name",
        "location": "specific_location",
        "cost": estimated_cost,
        "description": "detailed_description"
      }},
      "tips": ["tip1", "tip2", "tip3"]
    }}
  ],
  "restaurants": [
    {{
      "name": "restaurant_name",
      "type": "cuisine_type",
      "priceRange": "$$ or $$$ format",
      "rating": 4.5,
      "speciality": "signature_dish"
    }}
  ],
  "accommodations": [
    {{
      "name": "hotel_name",
      "type": "hotel_type",
      "pricePerNight": nightly_rate,
      "rating": 4.5,
      "amenities": ["amenity1", "amenity2", "amenity3"]
    }}
  ],
  "tips": ["tip1", "tip2", "tip3", "tip4", "tip5", "tip6"]
}}"""

CLOSING_NOTE = (
    "Ensure all costs are realistic and the total daily costs don't exceed the daily budget. "
    "Make recommendations specific to the destination and season."
)


def describe_trip(request: TripRequest) -> str:
    """Human-readable restatement of every trip request field"""
    interests = ", ".join(request.interests) if request.interests else "no specific interests"
    lines = [
        "**Trip Details:**",
        f"- Destination: {request.destination}",
        f"- Duration: {request.duration} days",
        f"- Budget: ${format_amount(request.budget)} USD total",
        f"- Trip Type: {request.tripType}",
        f"- Season: {request.season}",
        f"- Group Size: {request.groupSize}",
        f"- Travel Pace: {request.pace}",
        f"- Accommodation Preference: {request.accommodation}",
        f"- Transportation Preference: {request.transportation}",
        f"- Interests: {interests}",
    ]
    return "\n".join(lines)


def build_itinerary_prompt(request: TripRequest) -> str:
    """
    Compile the full generation prompt for a trip request.

    Pure function of the request: the same request always yields the same text.
    """
    schema = ITINERARY_JSON_TEMPLATE.format(total_cost=format_amount(request.budget))
    sections = [
        SYSTEM_ROLE,
        describe_trip(request),
        GENERATION_INSTRUCTIONS,
        "**Output Format**: Return ONLY a valid JSON object with this exact structure:\n" + schema,
        CLOSING_NOTE,
    ]
    return "\n\n".join(sections)
