import logging
from typing import Any, Dict, List, Optional

import httpx
from fastapi import HTTPException

from app.modules.reviews.schemas import YelpReviewsRequest, YelpReviewsResponse, YelpDebugInfo, TripAdvisorRequest
from app.modules.reviews.tripadvisor_client import TripAdvisorClient
from app.modules.reviews.yelp_client import YelpClient

logger = logging.getLogger(__name__)

YELP_SEARCH_LIMIT = 5
YELP_SEARCH_RADIUS_METERS = 1000
YELP_REVIEWS_LIMIT = 20

TRIPADVISOR_ACTIONS = ("search", "details", "photos", "reviews", "nearby", "booking")


class YelpService:
    def __init__(self, yelp: YelpClient):
        self.yelp = yelp

    def _optional_call(self, what: str, call, *args, **kwargs) -> Optional[httpx.Response]:
        """Successful response, or None after logging the failure"""
        try:
            response = call(*args, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Yelp {what} request failed: {e}")
            return None
        if not response.is_success:
            logger.error(f"Yelp {what} failed: {response.status_code} {response.text}")
            return None
        return response

    def get_reviews(self, request: YelpReviewsRequest) -> YelpReviewsResponse:
        """Find the best matching Yelp business and return its details and latest reviews"""
        params: Dict[str, Any] = {
            "term": request.restaurant_name,
            "categories": "restaurants",
            "limit": YELP_SEARCH_LIMIT,
        }
        if request.latitude is not None and request.longitude is not None:
            params["latitude"] = request.latitude
            params["longitude"] = request.longitude
            params["radius"] = YELP_SEARCH_RADIUS_METERS
        elif request.address:
            params["location"] = request.address

        try:
            search_response = self.yelp.search(params)
        except httpx.HTTPError as e:
            logger.error(f"Yelp search request failed: {e}")
            raise HTTPException(status_code=502, detail="Yelp API unreachable")
        if not search_response.is_success:
            logger.error(f"Yelp search failed: {search_response.status_code} {search_response.text}")
            raise HTTPException(status_code=search_response.status_code, detail="Failed to search Yelp businesses")

        businesses = search_response.json().get("businesses") or []
        logger.info(f"Yelp search for '{request.restaurant_name}': {len(businesses)} businesses found")
        if not businesses:
            return YelpReviewsResponse(
                business=None,
                reviews=[],
                message="No matching business found on Yelp",
            )

        # Yelp ranks the best match first
        business = businesses[0]
        business_details = business
        reviews: List[Dict[str, Any]] = []

        business_response = self._optional_call("business details", self.yelp.business, business["id"])
        if business_response is not None:
            business_details = business_response.json()

        reviews_response = self._optional_call(
            "reviews", self.yelp.reviews, business["id"], limit=YELP_REVIEWS_LIMIT
        )
        if reviews_response is not None:
            reviews = reviews_response.json().get("reviews") or []

        logger.info(f"Found {len(reviews)} Yelp reviews for {business_details.get('name')}")
        return YelpReviewsResponse(
            business=business_details,
            reviews=reviews,
            debug=YelpDebugInfo(
                searchResults=len(businesses),
                selectedBusiness=business.get("name", ""),
                businessResponseOk=business_response is not None,
                reviewsResponseOk=reviews_response is not None,
            ),
        )


class TripAdvisorService:
    def __init__(self, tripadvisor: TripAdvisorClient):
        self.tripadvisor = tripadvisor

    def _route(self, request: TripAdvisorRequest):
        """Map an action onto (path, params); raises 400 on missing inputs"""
        action = request.action
        if action not in TRIPADVISOR_ACTIONS:
            raise HTTPException(
                status_code=400,
                detail="Invalid action. Use: search, details, photos, reviews, nearby, or booking"
            )

        if action == "search":
            if not request.query:
                raise HTTPException(status_code=400, detail="Query parameter required for search")
            return "location/search", {"searchQuery": request.query, "language": "en"}

        if not request.location_id:
            raise HTTPException(status_code=400, detail=f"Location ID required for {action}")
        base = f"location/{request.location_id}"

        if action == "details":
            return f"{base}/details", {"language": "en", "currency": "USD"}
        if action == "photos":
            return f"{base}/photos", {"language": "en", "limit": request.limit}
        if action == "reviews":
            return f"{base}/reviews", {"language": "en", "limit": request.limit}
        if action == "nearby":
            return f"{base}/nearby_search", {"language": "en", "limit": request.limit}

        if not request.check_in or not request.check_out:
            raise HTTPException(
                status_code=400,
                detail="Check-in and check-out dates are required for booking"
            )
        return f"{base}/offers", {
            "checkin": request.check_in,
            "checkout": request.check_out,
            "adults": request.guests,
            "currency": "USD",
        }

    def call(self, request: TripAdvisorRequest) -> Dict[str, Any]:
        path, params = self._route(request)
        logger.info(f"TripAdvisor {request.action}: {path}")
        try:
            response = self.tripadvisor.get(path, params)
        except httpx.HTTPError as e:
            logger.error(f"TripAdvisor request failed: {e}")
            raise HTTPException(status_code=502, detail="TripAdvisor API unreachable")
        if not response.is_success:
            logger.error(f"TripAdvisor API error: {response.status_code} {response.reason_phrase} {response.text}")
            raise HTTPException(
                status_code=response.status_code,
                detail={
                    "error": f"TripAdvisor API error: {response.status_code} {response.reason_phrase}",
                    "details": response.text,
                },
            )
        return {"data": response.json()}
