import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.engines.reports import renderer
from app.engines.submissions.store import SubmissionStore
from app.main import create_app


@pytest.fixture
def client():
    app = create_app(settings=Settings(), store=SubmissionStore())
    with TestClient(app) as test_client:
        yield test_client


HONEY = {
    "productName": "Pure Organic Honey",
    "productType": "Food",
    "description": "Raw wildflower honey from local farms.",
    "answers": {"food_organic": "Yes"},
}


def test_health(client):
    body = client.get("/api/health").json()
    assert body["success"] is True
    assert body["message"] == "Server is running"
    assert body["timestamp"]


def test_generate_questions_for_known_type(client):
    response = client.post("/api/generate-questions", json={"productType": "cosmetic"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["productType"] == "cosmetic"
    questions = body["questions"]["questions"]
    assert questions[0]["id"] == "cosmetic_cruelty_free"
    assert questions[0]["choices"] == ["Yes", "No"]
    assert body["questions"]["metadata"]["productType"] == "Cosmetic"
    assert body["questions"]["metadata"]["questionCount"] == len(questions)


def test_generate_questions_falls_back_to_other(client):
    body = client.post("/api/generate-questions", json={"productType": "Furniture"}).json()
    assert body["questions"]["metadata"]["productType"] == "Other"


def test_generate_questions_requires_product_type(client):
    response = client.post("/api/generate-questions", json={"productType": "  "})
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Product type is required"}


def test_follow_up_questions(client):
    body = client.post("/api/follow-up-questions", json={"answers": {"food_preservatives": "Yes"}}).json()
    assert [q["id"] for q in body["questions"]] == ["food_preservative_types"]


def test_product_types(client):
    assert client.get("/api/product-types").json()["data"] == ["Food", "Cosmetic", "Electronics", "Clothing", "Other"]


def test_submit_list_and_report_end_to_end(client):
    response = client.post("/api/products", json=HONEY)
    assert response.status_code == 201
    created = response.json()
    assert created["success"] is True
    assert created["message"] == "Product submitted successfully"
    record = created["data"]
    assert record["id"] == 1
    assert record["submittedAt"]

    listed = client.get("/api/products").json()
    assert listed["count"] == 1
    assert listed["data"] == [record]

    report = client.get("/api/products/1/report")
    assert report.status_code == 200
    assert report.headers["content-type"] == "application/pdf"
    assert 'filename="Pure_Organic_Honey_Report.pdf"' in report.headers["content-disposition"]
    assert b"Food Organic" in report.content
    assert b"(Yes)" in report.content


def test_ids_increase_across_submissions(client):
    first = client.post("/api/products", json=HONEY).json()["data"]
    second = client.post("/api/products", json={**HONEY, "productName": "Clover Honey"}).json()["data"]
    assert second["id"] > first["id"]
    names = [item["productName"] for item in client.get("/api/products").json()["data"]]
    assert names == ["Pure Organic Honey", "Clover Honey"]


@pytest.mark.parametrize("missing", ["productName", "productType"])
def test_submit_requires_name_and_type(client, missing):
    payload = {key: value for key, value in HONEY.items() if key != missing}
    response = client.post("/api/products", json=payload)
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Product name and type are required"}
    assert client.get("/api/products").json()["count"] == 0


def test_store_keeps_answers_outside_category(client):
    payload = {**HONEY, "answers": {"clothing_material": "Cotton"}}
    record = client.post("/api/products", json=payload).json()["data"]
    assert record["answers"] == {"clothing_material": "Cotton"}


def test_malformed_body_is_client_error(client):
    response = client.post(
        "/api/products",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Invalid request body"


def test_unknown_product_is_404(client):
    assert client.get("/api/products/42").status_code == 404
    assert client.get("/api/products/42/report").json() == {"success": False, "message": "Product not found"}


def test_report_failure_is_reported(client, monkeypatch):
    client.post("/api/products", json=HONEY)

    def boom(*_args, **_kwargs):
        raise ValueError("layout exploded")

    monkeypatch.setattr(renderer, "layout_report", boom)
    response = client.get("/api/products/1/report")
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Failed to generate PDF. Please try again."}


def test_submit_accepts_null_answers_and_description(client):
    response = client.post(
        "/api/products",
        json={"productName": "A", "productType": "Food", "description": None, "answers": None},
    )
    assert response.status_code == 201
    record = response.json()["data"]
    assert record["answers"] == {}
    assert record["description"] == ""
