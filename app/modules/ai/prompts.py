from app.modules.ai.models import CUISINE_TYPES


def review_summary_system_prompt(restaurant_name: str) -> str:
    return f"""You are an expert restaurant review analyzer. Analyze the following reviews for "{restaurant_name}" and provide insights in JSON format.

Return your analysis in this exact JSON structure:
{{
  "summary": "A 2-3 sentence summary of overall customer experience",
  "highlights": ["positive aspect 1", "positive aspect 2", "positive aspect 3"],
  "concerns": ["concern 1", "concern 2"] (only if there are legitimate concerns),
  "sentiment": "positive" | "negative" | "mixed" | "neutral",
  "foodQuality": "excellent" | "good" | "average" | "poor",
  "serviceQuality": "excellent" | "good" | "average" | "poor",
  "atmosphere": "excellent" | "good" | "average" | "poor",
  "valueForMoney": "excellent" | "good" | "average" | "poor",
  "recommendedDishes": ["dish 1", "dish 2"] (if mentioned),
  "bestFor": ["occasion type 1", "occasion type 2"] (e.g., "date night", "family dinner", "quick lunch")
}}

Be objective and balanced in your analysis."""


def cuisine_system_prompt() -> str:
    options = "\n".join(f"- {cuisine}" for cuisine in CUISINE_TYPES)
    return f"""You are an expert at identifying restaurant cuisine types. Based on the restaurant name, address, and Google Places types, determine the most accurate single cuisine category.

Return ONLY one of these exact cuisine types (nothing else):
{options}

If you're unsure, choose the most likely option. Be as specific as possible (e.g., prefer "Sushi" over "Japanese" if it's a sushi restaurant, "Pizza" over "Italian" if it's primarily pizza)."""


def cuisine_user_prompt(restaurant_name: str, address: str = None, types=None) -> str:
    return f"""Restaurant Name: {restaurant_name}
Address: {address or 'Not provided'}
Google Places Types: {', '.join(types) if types else 'Not provided'}

What cuisine type is this restaurant?"""


MICHELIN_SYSTEM_PROMPT = (
    "You are an expert on Michelin-starred restaurants worldwide. You have comprehensive knowledge "
    "of which restaurants have earned Michelin stars. Only assign stars to restaurants you are "
    "confident actually have them."
)


def michelin_user_prompt(name, address, city, country, cuisine, notes) -> str:
    return f"""Analyze this restaurant and determine if it has Michelin stars. Be very accurate and only assign stars to restaurants that actually have them.

Restaurant Details:
- Name: {name}
- Address: {address}
- City: {city}
- Country: {country}
- Cuisine: {cuisine}
- Notes: {notes or 'None'}

Instructions:
1. Only assign Michelin stars if you are confident this restaurant actually has them
2. Consider the restaurant's reputation, location, cuisine type, and any notable characteristics
3. Be conservative - it's better to assign 0 stars than to incorrectly assign stars
4. Return only a number: 0, 1, 2, or 3 representing the number of Michelin stars

Respond with ONLY the number of stars (0, 1, 2, or 3) - no explanation needed."""


def search_completion_system_prompt(query: str, location: str) -> str:
    return f"""You are a restaurant search assistant. A user is typing a search query and you need to provide intelligent search completions.

User's partial input: "{query}"
Location context: {location}

Rules:
1. If the input looks like a partial word (like "bur"), complete it intelligently (e.g., "burger", "burrito", "burn")
2. Generate 5 diverse restaurant search suggestions that complete or expand on their input
3. Include location context when relevant
4. Make suggestions specific and actionable
5. Focus on food types, cuisines, or restaurant characteristics

Examples:
- "bur" -> ["burger restaurants", "burrito places", "burmese cuisine", "burger joints with outdoor seating", "best burgers"]
- "pizza" -> ["pizza near me", "best pizza restaurants", "pizza delivery", "wood-fired pizza", "authentic italian pizza"]
- "rom" -> ["romantic restaurants", "roman cuisine", "romantic dinner spots", "romantic italian restaurants", "cozy romantic cafes"]

Return exactly 5 suggestions as a JSON array of strings. Make them natural and varied."""


def atmosphere_photo_prompt(restaurant_name: str, cuisine: str) -> str:
    return (
        f"A beautiful, inviting interior view of {restaurant_name}, a {cuisine} restaurant. "
        f"Show elegant dining room with warm lighting, comfortable seating, and sophisticated decor "
        f"that reflects the {cuisine} cuisine style. High-quality restaurant photography, "
        f"professional lighting, inviting atmosphere."
    )


def food_photo_prompt(restaurant_name: str, cuisine: str) -> str:
    return (
        f"A beautifully plated signature dish from {restaurant_name}, showcasing the best of "
        f"{cuisine} cuisine. Professional food photography, elegant presentation, garnished and "
        f"styled perfectly, high-quality restaurant dish, vibrant colors, appetizing appearance."
    )
