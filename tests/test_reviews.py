import httpx

YELP = "api.yelp.com"
TRIPADVISOR = "api.content.tripadvisor.com"


def yelp_handler(business_status=200, reviews_status=200, businesses=None):
    if businesses is None:
        businesses = [{"id": "lucali-brooklyn", "name": "Lucali"}, {"id": "other", "name": "Other"}]

    def handler(request: httpx.Request):
        path = request.url.path
        if path.endswith("/businesses/search"):
            return httpx.Response(200, json={"businesses": businesses})
        if path.endswith("/reviews"):
            return httpx.Response(reviews_status, json={"reviews": [{"id": "r1", "rating": 5}]})
        return httpx.Response(business_status, json={"id": "lucali-brooklyn", "name": "Lucali", "rating": 4.5})

    return handler


def test_yelp_reviews_for_best_match(client, mock_http):
    handlers, requests = mock_http
    handlers[YELP] = yelp_handler()

    r = client.post("/api/v1/reviews/yelp", json={
        "restaurantName": "Lucali", "latitude": 40.68, "longitude": -73.99
    })

    assert r.status_code == 200
    body = r.json()
    assert body["business"]["rating"] == 4.5
    assert body["reviews"] == [{"id": "r1", "rating": 5}]
    assert body["debug"] == {
        "searchResults": 2,
        "selectedBusiness": "Lucali",
        "businessResponseOk": True,
        "reviewsResponseOk": True,
    }
    search = requests[0]
    assert search.headers["authorization"] == "Bearer yelp-test-key"
    assert search.url.params["radius"] == "1000"
    assert "location" not in search.url.params
    assert requests[2].url.params["sort_by"] == "date_desc"


def test_yelp_falls_back_to_address_and_search_result(client, mock_http):
    handlers, requests = mock_http
    handlers[YELP] = yelp_handler(business_status=500, reviews_status=500)

    r = client.post("/api/v1/reviews/yelp", json={"restaurantName": "Lucali", "address": "575 Henry St"})

    assert r.status_code == 200
    body = r.json()
    assert body["business"] == {"id": "lucali-brooklyn", "name": "Lucali"}
    assert body["reviews"] == []
    assert body["debug"]["businessResponseOk"] is False
    assert requests[0].url.params["location"] == "575 Henry St"


def test_yelp_no_match(client, mock_http):
    handlers, _ = mock_http
    handlers[YELP] = yelp_handler(businesses=[])

    r = client.post("/api/v1/reviews/yelp", json={"restaurantName": "Nowhere"})

    assert r.status_code == 200
    assert r.json() == {
        "business": None,
        "reviews": [],
        "message": "No matching business found on Yelp",
        "debug": None,
    }


def test_yelp_search_failure_keeps_upstream_status(client, mock_http):
    handlers, _ = mock_http
    handlers[YELP] = lambda request: httpx.Response(429, json={"error": "rate limited"})

    r = client.post("/api/v1/reviews/yelp", json={"restaurantName": "Lucali"})

    assert r.status_code == 429
    assert r.json()["detail"] == "Failed to search Yelp businesses"


def test_yelp_requires_name(client, mock_http):
    assert client.post("/api/v1/reviews/yelp", json={}).status_code == 422


def test_tripadvisor_search(client, mock_http):
    handlers, requests = mock_http
    handlers[TRIPADVISOR] = lambda request: httpx.Response(200, json={"data": [{"location_id": "123"}]})

    r = client.post("/api/v1/reviews/tripadvisor", json={"action": "search", "query": "Lucali"})

    assert r.status_code == 200
    assert r.json() == {"data": {"data": [{"location_id": "123"}]}}
    request = requests[0]
    assert request.url.path.endswith("/location/search")
    assert request.url.params["searchQuery"] == "Lucali"
    assert request.url.params["key"] == "tripadvisor-test-key"
    assert request.headers["x-tripadvisor-api-key"] == "tripadvisor-test-key"


def test_tripadvisor_booking(client, mock_http):
    handlers, requests = mock_http
    handlers[TRIPADVISOR] = lambda request: httpx.Response(200, json={"offers": []})

    r = client.post("/api/v1/reviews/tripadvisor", json={
        "action": "booking", "locationId": "123", "checkIn": "2026-11-01", "checkOut": "2026-11-03", "guests": 3
    })

    assert r.status_code == 200
    params = requests[0].url.params
    assert requests[0].url.path.endswith("/location/123/offers")
    assert params["checkin"] == "2026-11-01"
    assert params["adults"] == "3"


def test_tripadvisor_validation(client, mock_http):
    cases = [
        ({"action": "teleport"}, "Invalid action. Use: search, details, photos, reviews, nearby, or booking"),
        ({"action": "search"}, "Query parameter required for search"),
        ({"action": "reviews"}, "Location ID required for reviews"),
        ({"action": "booking", "locationId": "123"}, "Check-in and check-out dates are required for booking"),
    ]
    for payload, detail in cases:
        r = client.post("/api/v1/reviews/tripadvisor", json=payload)
        assert r.status_code == 400
        assert r.json()["detail"] == detail
    assert mock_http[1] == []


def test_tripadvisor_upstream_error(client, mock_http):
    handlers, _ = mock_http
    handlers[TRIPADVISOR] = lambda request: httpx.Response(401, text="invalid key")

    r = client.post("/api/v1/reviews/tripadvisor", json={"action": "details", "locationId": "123"})

    assert r.status_code == 401
    assert r.json()["detail"] == {
        "error": "TripAdvisor API error: 401 Unauthorized",
        "details": "invalid key",
    }


def test_yelp_network_errors_on_details_degrade_to_search_hit(client, mock_http):
    handlers, _ = mock_http
    search_only = yelp_handler()

    def handler(request: httpx.Request):
        if request.url.path.endswith("/businesses/search"):
            return search_only(request)
        raise httpx.ConnectError("reset", request=request)

    handlers[YELP] = handler

    r = client.post("/api/v1/reviews/yelp", json={"restaurantName": "Lucali"})

    assert r.status_code == 200
    body = r.json()
    assert body["business"] == {"id": "lucali-brooklyn", "name": "Lucali"}
    assert body["reviews"] == []
    assert body["debug"]["businessResponseOk"] is False
    assert body["debug"]["reviewsResponseOk"] is False


def test_yelp_search_network_error(client, mock_http):
    handlers, _ = mock_http

    def timeout(request):
        raise httpx.ReadTimeout("slow", request=request)

    handlers[YELP] = timeout

    r = client.post("/api/v1/reviews/yelp", json={"restaurantName": "Lucali"})

    assert r.status_code == 502
    assert r.json()["detail"] == "Yelp API unreachable"


def test_tripadvisor_network_error(client, mock_http):
    handlers, _ = mock_http

    def reset(request):
        raise httpx.ConnectError("reset", request=request)

    handlers[TRIPADVISOR] = reset

    r = client.post("/api/v1/reviews/tripadvisor", json={"action": "search", "query": "Lucali"})

    assert r.status_code == 502
    assert r.json()["detail"] == "TripAdvisor API unreachable"
