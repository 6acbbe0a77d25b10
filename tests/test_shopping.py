"""
Shopping assistant tests: catalog administration, interactions, preferences
and the recommendation strategies.
"""

import uuid
from types import SimpleNamespace

import pytest

from domain.enums import Confidence, InteractionType, RecommendationStrategy
from services import recommendation_service as rec
from test_constants import CATALOG
from test_fixtures import auth_headers, client, register_admin, register_user

SHOP = "/api/shop"
PRODUCTS = f"{SHOP}/products"


def seed_catalog(admin_headers) -> dict:
    """Create the sample catalog; returns product ids by name"""
    ids = {}
    for item in CATALOG:
        r = client.post(PRODUCTS, json=item, headers=admin_headers)
        assert r.status_code == 201, r.text
        ids[item["name"]] = r.json()["product_id"]
    return ids


def interact(headers, product_id, interaction_type, rating=None):
    payload = {"product_id": product_id, "interaction_type": interaction_type}
    if rating is not None:
        payload["rating"] = rating
    r = client.post(f"{SHOP}/interactions", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def product(name, category, brand, price):
    return SimpleNamespace(
        product_id=uuid.uuid4(), name=name, category=category, brand=brand, price=price
    )


# =============================================================================
# SCORING UNITS
# =============================================================================


def test_confidence_bands():
    assert rec.confidence_for(0.8) == Confidence.HIGH
    assert rec.confidence_for(0.79) == Confidence.MEDIUM
    assert rec.confidence_for(0.5) == Confidence.MEDIUM
    assert rec.confidence_for(0.49) == Confidence.LOW


def test_match_score():
    assert rec.match_score("Shoes", ["shoes"]) == 1.0
    assert rec.match_score("Running Shoes", ["shoes"]) == 0.5
    assert rec.match_score("Shoes", ["Outerwear"]) == 0.0
    assert rec.match_score(None, ["shoes"]) == 0.0


def test_price_score_peaks_mid_range():
    assert rec.price_score(100, 50, 150) == 1.0
    assert rec.price_score(120, 50, 150) == pytest.approx(0.6)
    assert rec.price_score(150, 50, 150) == 0.0
    assert rec.price_score(200, 50, 150) == 0.0
    assert rec.price_score(30, 30, 30) == 1.0


def test_content_score_with_matching_preferences():
    prefs = rec.Preferences(
        categories=["shoes"], brands=["stride"], price_min=50, price_max=150
    )
    candidate = rec.content_score(product("Trail Runner 2", "Shoes", "Stride", 120), prefs)

    assert candidate.score == pytest.approx(0.87)
    assert candidate.algorithm == RecommendationStrategy.CONTENT_BASED
    assert candidate.reason == (
        "Recommended because it matches your Shoes preferences and "
        "from your preferred brand Stride and within your price range"
    )


def test_content_score_without_preferences():
    candidate = rec.content_score(
        product("Wool Beanie", "Accessories", "Knitwell", 25), rec.Preferences()
    )
    assert candidate.score == pytest.approx(0.06)
    assert candidate.reason == "Recommended based on your preferences (6% match)"


def test_similar_users_needs_shared_products_and_weight():
    p1, p2, p3 = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    close, browser, single = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()

    def event(user_id, product_id, itype, rating=None):
        return SimpleNamespace(
            user_id=user_id, product_id=product_id, interaction_type=itype, rating=rating
        )

    others = [
        event(close, p1, InteractionType.LIKE),
        event(close, p2, InteractionType.FAVORITE),
        event(browser, p1, InteractionType.VIEW),
        event(browser, p2, InteractionType.VIEW),
        event(single, p1, InteractionType.LIKE),
    ]
    assert rec.similar_users({p1, p2, p3}, others) == {close: 1.0}


def test_shared_interaction_weight_for_ratings():
    def rating(value):
        return SimpleNamespace(interaction_type=InteractionType.RATING, rating=value)

    assert rec.shared_interaction_weight(rating(5)) == 1.0
    assert rec.shared_interaction_weight(rating(3)) == 0.5
    assert rec.shared_interaction_weight(rating(1)) == 0.1


def test_combine_merges_sources_with_weights():
    jacket = product("Rain Jacket", "Outerwear", "Stride", 150)
    belt = product("Leather Belt", "Accessories", "Urbano", 45)
    results = {
        RecommendationStrategy.COLLABORATIVE: [
            rec.Candidate(jacket, 1.0, RecommendationStrategy.COLLABORATIVE, "collab")
        ],
        RecommendationStrategy.CONTENT_BASED: [
            rec.Candidate(jacket, 0.5, RecommendationStrategy.CONTENT_BASED, "content")
        ],
        RecommendationStrategy.POPULARITY: [
            rec.Candidate(belt, 0.5, RecommendationStrategy.POPULARITY, "Popular among other users")
        ],
    }
    merged = rec.combine(results)

    assert [c.product.name for c in merged] == ["Rain Jacket", "Leather Belt"]
    assert merged[0].score == pytest.approx(0.6)
    assert merged[0].algorithm == RecommendationStrategy.HYBRID
    assert merged[0].reason == (
        "Combined recommendation based on similar users and your preferences"
    )
    assert merged[1].score == pytest.approx(0.1)
    assert merged[1].algorithm == RecommendationStrategy.POPULARITY
    assert merged[1].reason == "Popular among other users"


def test_hybrid_reason_with_three_sources():
    assert rec.hybrid_reason(
        [
            RecommendationStrategy.COLLABORATIVE,
            RecommendationStrategy.CONTENT_BASED,
            RecommendationStrategy.POPULARITY,
        ]
    ) == "Combined recommendation based on similar users, your preferences, and popularity"


# =============================================================================
# CATALOG
# =============================================================================


def test_catalog_writes_require_admin():
    shopper = auth_headers(register_user("emma"))
    assert client.post(PRODUCTS, json=CATALOG[0]).status_code == 401

    r = client.post(PRODUCTS, json=CATALOG[0], headers=shopper)
    assert r.status_code == 403
    assert r.json()["error"]["message"] == "Admin role required."

    admin = auth_headers(register_admin())
    assert client.post(PRODUCTS, json=CATALOG[0], headers=admin).status_code == 201


def test_catalog_browse_filters_and_facets():
    admin = auth_headers(register_admin())
    ids = seed_catalog(admin)
    client.put(f"{PRODUCTS}/{ids['Wool Beanie']}", json={"availability": False}, headers=admin)

    listing = client.get(PRODUCTS, params={"category": "shoes"}).json()
    assert [p["name"] for p in listing["items"]] == ["City Sneaker", "Trail Runner 2"]

    by_brand = client.get(PRODUCTS, params={"search": "stride"}).json()
    assert by_brand["pagination"]["total"] == 2

    cheap = client.get(PRODUCTS, params={"max_price": 50, "available": True}).json()
    assert [p["name"] for p in cheap["items"]] == ["Leather Belt"]

    assert client.get(PRODUCTS, params={"min_price": 100, "max_price": 10}).status_code == 400

    assert client.get(f"{PRODUCTS}/categories").json() == ["Accessories", "Outerwear", "Shoes"]
    assert client.get(f"{PRODUCTS}/brands").json() == ["Knitwell", "Stride", "Urbano"]


def test_catalog_stats():
    seed_catalog(auth_headers(register_admin()))
    stats = client.get(f"{PRODUCTS}/stats").json()
    assert stats == {
        "total_products": 5,
        "available_products": 5,
        "categories": 3,
        "brands": 3,
        "average_price": pytest.approx(84.0),
        "min_price": pytest.approx(25.0),
        "max_price": pytest.approx(150.0),
    }


def test_delete_catalog_product():
    admin = auth_headers(register_admin())
    ids = seed_catalog(admin)
    url = f"{PRODUCTS}/{ids['Leather Belt']}"
    assert client.delete(url, headers=admin).status_code == 204
    assert client.get(url).status_code == 404


# =============================================================================
# INTERACTIONS AND PREFERENCES
# =============================================================================


def test_rating_interactions_validate_rating():
    ids = seed_catalog(auth_headers(register_admin()))
    headers = auth_headers(register_user("emma"))
    belt = ids["Leather Belt"]

    missing = client.post(
        f"{SHOP}/interactions",
        json={"product_id": belt, "interaction_type": "rating"},
        headers=headers,
    )
    assert missing.status_code == 400

    extra = client.post(
        f"{SHOP}/interactions",
        json={"product_id": belt, "interaction_type": "like", "rating": 4},
        headers=headers,
    )
    assert extra.status_code == 400

    out_of_range = client.post(
        f"{SHOP}/interactions",
        json={"product_id": belt, "interaction_type": "rating", "rating": 6},
        headers=headers,
    )
    assert out_of_range.status_code == 400

    assert interact(headers, belt, "rating", 4)["rating"] == 4


def test_interaction_on_unknown_product_returns_404():
    headers = auth_headers(register_user("emma"))
    r = client.post(
        f"{SHOP}/interactions",
        json={"product_id": str(uuid.uuid4()), "interaction_type": "view"},
        headers=headers,
    )
    assert r.status_code == 404


def test_interaction_history_and_stats():
    ids = seed_catalog(auth_headers(register_admin()))
    headers = auth_headers(register_user("emma"))
    interact(headers, ids["Rain Jacket"], "view")
    interact(headers, ids["Rain Jacket"], "like")
    interact(headers, ids["City Sneaker"], "view")

    views = client.get(f"{SHOP}/interactions", params={"type": "view"}, headers=headers).json()
    assert len(views) == 2

    recent = client.get(f"{SHOP}/interactions/recent", params={"limit": 2}, headers=headers).json()
    assert len(recent) == 2

    stats = client.get(f"{SHOP}/interactions/stats", headers=headers).json()
    assert stats["total"] == 3
    assert stats["by_type"]["view"] == 2
    assert stats["by_type"]["like"] == 1
    assert stats["by_type"]["purchase"] == 0
    assert set(stats["by_type"]) == {t.value for t in InteractionType}


def test_preferences_default_then_update():
    headers = auth_headers(register_user("emma"))
    assert client.get(f"{SHOP}/preferences", headers=headers).json() == {
        "categories": [],
        "brands": [],
        "style_preferences": [],
        "price_min": 0.0,
        "price_max": 1000.0,
    }

    r = client.put(
        f"{SHOP}/preferences",
        json={"categories": ["Shoes", " Shoes "], "brands": ["Stride"], "price_min": 50, "price_max": 150},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["categories"] == ["Shoes"]

    stored = client.get(f"{SHOP}/preferences", headers=headers).json()
    assert stored["brands"] == ["Stride"]
    assert stored["price_max"] == 150.0


def test_preferences_reject_inverted_price_range():
    headers = auth_headers(register_user("emma"))
    r = client.put(
        f"{SHOP}/preferences", json={"price_min": 300, "price_max": 100}, headers=headers
    )
    assert r.status_code == 400


# =============================================================================
# RECOMMENDATIONS
# =============================================================================


@pytest.fixture
def shoppers():
    """Sarah and Michael share taste in shoes; Michael also bought a jacket"""
    ids = seed_catalog(auth_headers(register_admin()))
    sarah = auth_headers(register_user("sarah"))
    michael = auth_headers(register_user("michael"))
    for name in ("Trail Runner 2", "City Sneaker"):
        interact(sarah, ids[name], "like")
        interact(michael, ids[name], "like")
    interact(michael, ids["Rain Jacket"], "purchase")
    return {"ids": ids, "sarah": sarah, "michael": michael}


def recommend(headers, strategy, limit=10):
    r = client.get(
        f"{SHOP}/recommendations", params={"strategy": strategy, "limit": limit}, headers=headers
    )
    assert r.status_code == 200, r.text
    return r.json()


def test_content_based_recommendations_follow_preferences():
    ids = seed_catalog(auth_headers(register_admin()))
    headers = auth_headers(register_user("emma"))
    client.put(
        f"{SHOP}/preferences",
        json={"categories": ["Shoes"], "brands": ["Stride"], "price_min": 50, "price_max": 150},
        headers=headers,
    )
    interact(headers, ids["City Sneaker"], "dislike")

    body = recommend(headers, "content-based")
    names = [item["product"]["name"] for item in body["items"]]
    assert names[0] == "Trail Runner 2"
    assert "City Sneaker" not in names
    top = body["items"][0]
    assert top["score"] == pytest.approx(0.87)
    assert top["confidence"] == "high"
    assert top["algorithm"] == "content-based"


def test_collaborative_recommends_what_similar_users_bought(shoppers):
    body = recommend(shoppers["sarah"], "collaborative")
    assert body["strategy"] == "collaborative"
    assert [item["product"]["name"] for item in body["items"]] == ["Rain Jacket"]
    item = body["items"][0]
    assert item["score"] == pytest.approx(1.0)
    assert item["reason"] == "Recommended by users with similar preferences"


def test_collaborative_is_empty_without_history():
    seed_catalog(auth_headers(register_admin()))
    headers = auth_headers(register_user("emma"))
    assert recommend(headers, "collaborative")["items"] == []


def test_popularity_skips_seen_products(shoppers):
    emma = auth_headers(register_user("emma"))
    names = [i["product"]["name"] for i in recommend(emma, "popularity")["items"]]
    assert names == ["City Sneaker", "Trail Runner 2", "Rain Jacket", "Leather Belt", "Wool Beanie"]

    seen_by_sarah = [i["product"]["name"] for i in recommend(shoppers["sarah"], "popularity")["items"]]
    assert "Trail Runner 2" not in seen_by_sarah
    assert seen_by_sarah[0] == "Rain Jacket"


def test_hybrid_ranks_multi_source_products_first(shoppers):
    body = recommend(shoppers["sarah"], "hybrid", limit=3)
    assert len(body["items"]) == 3
    top = body["items"][0]
    assert top["product"]["name"] == "Rain Jacket"
    assert top["algorithm"] == "hybrid"
    assert top["reason"] == (
        "Combined recommendation based on similar users, your preferences, and popularity"
    )
    assert top["score"] == pytest.approx(0.464)


def test_unknown_strategy_rejected():
    headers = auth_headers(register_user("emma"))
    r = client.get(f"{SHOP}/recommendations", params={"strategy": "astrology"}, headers=headers)
    assert r.status_code == 400
