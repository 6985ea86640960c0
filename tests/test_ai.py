from types import SimpleNamespace

import httpx
import pytest

from app.main import app
from app.modules.ai.openai_client import get_openai
from app.modules.ai.service import normalize_cuisine, parse_michelin_stars, parse_suggestions


class FakeCompletions:
    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if isinstance(self.reply, Exception):
            raise self.reply
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeImages:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def generate(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(data=[SimpleNamespace(b64_json=f"img{len(self.calls)}")])


class FakeOpenAI:
    def __init__(self, reply="", image_error=None):
        self.chat = SimpleNamespace(completions=FakeCompletions(reply))
        self.images = FakeImages(image_error)


@pytest.fixture
def use_openai(client):
    def install(reply="", image_error=None):
        fake = FakeOpenAI(reply, image_error)
        app.dependency_overrides[get_openai] = lambda: fake
        return fake
    return install


def test_review_summary(client, mock_http, use_openai):
    handlers, _ = mock_http
    handlers["maps.googleapis.com"] = lambda request: httpx.Response(200, json={
        "status": "OK",
        "result": {"reviews": [{"rating": 5, "text": "Best pizza in Brooklyn"}]},
    })
    fake = use_openai('{"summary": "Great pizza", "highlights": ["crust"], "sentiment": "positive", "foodQuality": "excellent"}')

    r = client.post("/api/v1/ai/review-summary", json={"placeId": "ChIJ123", "restaurantName": "Lucali"})

    assert r.status_code == 200
    assert r.json() == {
        "summary": "Great pizza",
        "highlights": ["crust"],
        "concerns": [],
        "sentiment": "positive",
        "foodQuality": "excellent",
    }
    call = fake.chat.completions.calls[0]
    assert call["response_format"] == {"type": "json_object"}
    assert "Rating: 5/5 - Best pizza in Brooklyn" in call["messages"][1]["content"]


def test_review_summary_without_reviews_skips_model(client, mock_http, use_openai):
    handlers, _ = mock_http
    handlers["maps.googleapis.com"] = lambda request: httpx.Response(200, json={"status": "OK", "result": {}})
    fake = use_openai()

    r = client.post("/api/v1/ai/review-summary", json={"placeId": "ChIJ123"})

    assert r.json()["summary"] == "No reviews available for this restaurant yet."
    assert fake.chat.completions.calls == []


def test_review_summary_raw_text_when_not_json(client, mock_http, use_openai):
    handlers, _ = mock_http
    handlers["maps.googleapis.com"] = lambda request: httpx.Response(200, json={
        "status": "OK", "result": {"reviews": [{"rating": 3, "text": "ok"}]},
    })
    use_openai("Mostly fine.")

    r = client.post("/api/v1/ai/review-summary", json={"placeId": "ChIJ123"})

    assert r.json() == {"summary": "Mostly fine.", "highlights": [], "concerns": [], "sentiment": "neutral"}


def test_cuisine(client, use_openai):
    use_openai("Sushi.")

    r = client.post("/api/v1/ai/cuisine", json={"restaurantName": "Sushi Nakazawa", "types": ["restaurant"]})

    assert r.status_code == 200
    assert r.json() == {"cuisine": "Sushi", "restaurantName": "Sushi Nakazawa"}


def test_cuisine_failure_reports_fallback(client, use_openai):
    use_openai(Exception("quota exceeded"))

    r = client.post("/api/v1/ai/cuisine", json={"restaurantName": "Lucali"})

    assert r.status_code == 500
    assert r.json()["detail"] == {
        "error": "Failed to determine cuisine",
        "details": "quota exceeded",
        "cuisine": "American",
    }


def test_michelin(client, use_openai):
    fake = use_openai("2")

    r = client.post("/api/v1/ai/michelin", json={"name": "Atomix", "city": "New York", "country": "USA"})

    assert r.json() == {"michelinStars": 2}
    assert "Name: Atomix" in fake.chat.completions.calls[0]["messages"][1]["content"]


def test_search_completions(client, use_openai):
    use_openai('```json\n["burger restaurants", "burrito places"]\n```')

    r = client.post("/api/v1/ai/search-completions", json={"query": "bur"})

    assert r.json() == {"success": True, "suggestions": ["burger restaurants", "burrito places"]}


def test_search_completions_fallback(client, use_openai):
    use_openai(Exception("timeout"))

    r = client.post("/api/v1/ai/search-completions", json={"query": "ramen"})

    assert r.status_code == 200
    body = r.json()
    assert body["fallback"] is True
    assert body["suggestions"][0] == "ramen restaurants"
    assert len(body["suggestions"]) == 5


def test_blank_search_completions(client, use_openai):
    fake = use_openai()

    r = client.post("/api/v1/ai/search-completions", json={"query": "  "})

    assert r.json() == {"success": True, "suggestions": []}
    assert fake.chat.completions.calls == []


def test_generate_photos(client, use_openai):
    fake = use_openai()

    r = client.post("/api/v1/ai/photos", json={"restaurantName": "Lucali", "cuisine": "Pizza"})

    assert r.status_code == 200
    images = r.json()["images"]
    assert [image["type"] for image in images] == ["atmosphere", "food"]
    assert images[0]["url"] == "data:image/webp;base64,img1"
    assert fake.images.calls[0]["output_format"] == "webp"


def test_generate_photos_validation_and_errors(client, use_openai):
    use_openai(image_error=Exception("content policy"))

    assert client.post("/api/v1/ai/photos", json={"cuisine": "Pizza"}).status_code == 400
    r = client.post("/api/v1/ai/photos", json={"restaurantName": "Lucali", "cuisine": "Pizza"})
    assert r.status_code == 502


def test_parsers():
    assert parse_michelin_stars("3 stars") == 3
    assert parse_michelin_stars("5") == 0
    assert parse_michelin_stars("none") == 0
    assert parse_suggestions("1. pizza near me\n2. \"best pizza\"") == ["pizza near me", "best pizza"]
    assert parse_suggestions('{"suggestions": ["a", "b"]}') == ["a", "b"]
    assert normalize_cuisine("middle eastern food") == "Middle Eastern"
    assert normalize_cuisine("") == "American"
