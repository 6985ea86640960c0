import json
import logging
import re
from typing import Dict, List, Optional

from fastapi import HTTPException
from openai import OpenAI

from app.config import settings
from app.modules.ai import prompts
from app.modules.ai.models import CUISINE_TYPES, FALLBACK_CUISINE
from app.modules.ai.schemas import (
    ReviewSummary, CuisineResponse, MichelinRequest, MichelinResponse,
    SearchCompletionResponse, GeneratedPhoto, PhotoGenerationResponse
)
from app.modules.places.google_client import GooglePlacesClient

logger = logging.getLogger(__name__)

MAX_REVIEWS_ANALYZED = 10
SUGGESTION_COUNT = 5
NO_REVIEWS_SUMMARY = "No reviews available for this restaurant yet."

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")
_LIST_PREFIX_RE = re.compile(r"^(\d+\.\s*|[-*]\s*)")


def _strip_fences(text: str) -> str:
    return _FENCE_RE.sub("", text.strip())


def fallback_suggestions(query: str) -> List[str]:
    return [
        f"{query} restaurants",
        f"best {query}",
        f"{query} near me",
        f"{query} delivery",
        f"{query} with good reviews",
    ]


def parse_suggestions(content: str) -> List[str]:
    """JSON array of strings, or one suggestion per line with numbering and bullets removed"""
    try:
        parsed = json.loads(_strip_fences(content))
        if isinstance(parsed, dict):
            parsed = next((v for v in parsed.values() if isinstance(v, list)), [])
        if isinstance(parsed, list):
            return [str(s).strip() for s in parsed if str(s).strip()]
    except ValueError:
        pass
    suggestions = []
    for line in content.splitlines():
        cleaned = _LIST_PREFIX_RE.sub("", line.strip()).replace('"', "").strip()
        if cleaned:
            suggestions.append(cleaned)
    return suggestions[:SUGGESTION_COUNT]


def parse_michelin_stars(content: str) -> int:
    match = re.search(r"-?\d+", content or "")
    if not match:
        return 0
    stars = int(match.group())
    return stars if 0 <= stars <= 3 else 0


def normalize_cuisine(answer: str) -> str:
    """Map a model answer onto the fixed cuisine vocabulary"""
    cleaned = (answer or "").strip().strip(".").strip('"')
    lowered = cleaned.lower()
    for cuisine in CUISINE_TYPES:
        if cuisine.lower() == lowered:
            return cuisine
    # Longest names first so "Middle Eastern" wins over shorter partial matches
    for cuisine in sorted(CUISINE_TYPES, key=len, reverse=True):
        if cuisine.lower() in lowered:
            return cuisine
    return cleaned or FALLBACK_CUISINE


class AIService:
    def __init__(self, openai: OpenAI, google: Optional[GooglePlacesClient] = None):
        self.openai = openai
        self.google = google

    def _complete(self, messages: List[Dict[str, str]], temperature: float, max_tokens: int, **kwargs) -> str:
        response = self.openai.chat.completions.create(
            model=settings.openai_chat_model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )
        return (response.choices[0].message.content or "").strip()

    def summarize_reviews(self, place_id: str, restaurant_name: str) -> ReviewSummary:
        """Summarize the latest Google reviews of a place"""
        data = self.google.get_json("details", {
            "place_id": place_id,
            "fields": "reviews,rating,price_level",
        })
        reviews = (data.get("result") or {}).get("reviews") or []
        if not reviews:
            return ReviewSummary(summary=NO_REVIEWS_SUMMARY, highlights=[], concerns=[], sentiment="neutral")

        review_texts = "\n\n".join(
            f"Rating: {review.get('rating')}/5 - {review.get('text', '')}"
            for review in reviews[:MAX_REVIEWS_ANALYZED]
        )
        try:
            analysis_text = self._complete(
                [
                    {"role": "system", "content": prompts.review_summary_system_prompt(restaurant_name)},
                    {"role": "user", "content": f"Reviews to analyze:\n\n{review_texts}"},
                ],
                temperature=0.3,
                max_tokens=500,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            logger.error(f"Error in AI review summarizer: {e}")
            raise HTTPException(status_code=502, detail="Unable to analyze reviews at this time.")

        try:
            return ReviewSummary(**json.loads(_strip_fences(analysis_text)))
        except (ValueError, TypeError):
            logger.warning(f"Review summary for {place_id} was not valid JSON, returning raw text")
            return ReviewSummary(summary=analysis_text, highlights=[], concerns=[], sentiment="neutral")

    def determine_cuisine(self, restaurant_name: str, address: Optional[str] = None,
                          types: Optional[List[str]] = None) -> CuisineResponse:
        logger.info(f"Determining cuisine for {restaurant_name}")
        try:
            answer = self._complete(
                [
                    {"role": "system", "content": prompts.cuisine_system_prompt()},
                    {"role": "user", "content": prompts.cuisine_user_prompt(restaurant_name, address, types)},
                ],
                temperature=0.1,
                max_tokens=50,
            )
        except Exception as e:
            logger.error(f"Error in determine cuisine: {e}")
            raise HTTPException(status_code=500, detail={
                "error": "Failed to determine cuisine",
                "details": str(e),
                "cuisine": FALLBACK_CUISINE,
            })
        cuisine = normalize_cuisine(answer)
        logger.info(f"Determined cuisine for {restaurant_name}: {cuisine}")
        return CuisineResponse(cuisine=cuisine, restaurantName=restaurant_name)

    def detect_michelin_stars(self, request: MichelinRequest) -> MichelinResponse:
        logger.info(f"Analyzing restaurant for Michelin stars: {request.name}, {request.city}")
        try:
            answer = self._complete(
                [
                    {"role": "system", "content": prompts.MICHELIN_SYSTEM_PROMPT},
                    {"role": "user", "content": prompts.michelin_user_prompt(
                        request.name, request.address, request.city,
                        request.country, request.cuisine, request.notes,
                    )},
                ],
                temperature=0.1,
                max_tokens=10,
            )
        except Exception as e:
            logger.error(f"Error in Michelin detector: {e}")
            raise HTTPException(status_code=500, detail=f"OpenAI API error: {e}")
        return MichelinResponse(michelinStars=parse_michelin_stars(answer))

    def search_completions(self, query: str, location: str = "New York") -> SearchCompletionResponse:
        """Five search suggestions for a partial query; never fails"""
        if not query or not query.strip():
            return SearchCompletionResponse(success=True, suggestions=[])

        try:
            content = self._complete(
                [
                    {"role": "system", "content": prompts.search_completion_system_prompt(query, location)},
                    {"role": "user", "content": f'Generate search completions for: "{query}"'},
                ],
                temperature=0.7,
                max_tokens=200,
            )
        except Exception as e:
            logger.error(f"Error in AI search completion: {e}")
            return SearchCompletionResponse(
                success=True,
                suggestions=fallback_suggestions(query),
                fallback=True,
            )

        suggestions = parse_suggestions(content) or fallback_suggestions(query)
        logger.info(f"Generated {len(suggestions[:SUGGESTION_COUNT])} search completions for '{query}'")
        return SearchCompletionResponse(success=True, suggestions=suggestions[:SUGGESTION_COUNT])

    def _generate_image(self, prompt: str) -> Optional[str]:
        result = self.openai.images.generate(
            model=settings.openai_image_model,
            prompt=prompt,
            n=1,
            size="1024x1024",
            quality="high",
            output_format="webp",
        )
        if not result.data:
            return None
        return f"data:image/webp;base64,{result.data[0].b64_json}"

    def generate_photos(self, restaurant_name: Optional[str], cuisine: Optional[str]) -> PhotoGenerationResponse:
        if not restaurant_name or not cuisine:
            raise HTTPException(status_code=400, detail="Restaurant name and cuisine are required")

        logger.info(f"Generating photos for {restaurant_name} ({cuisine})")
        jobs = [
            ("atmosphere", "Restaurant interior atmosphere",
             prompts.atmosphere_photo_prompt(restaurant_name, cuisine)),
            ("food", "Restaurant signature dish",
             prompts.food_photo_prompt(restaurant_name, cuisine)),
        ]
        images: List[GeneratedPhoto] = []
        for photo_type, description, prompt in jobs:
            try:
                url = self._generate_image(prompt)
            except Exception as e:
                logger.error(f"OpenAI image error for {photo_type}: {e}")
                raise HTTPException(status_code=502, detail=f"OpenAI API error: {e}")
            if url:
                images.append(GeneratedPhoto(url=url, type=photo_type, description=description))

        logger.info(f"Generated {len(images)} photos for {restaurant_name}")
        return PhotoGenerationResponse(success=True, images=images)
