"""API tests with TestClient: homepage, published assets, ads, visits, mailbox, 404."""

import base64
import hashlib
import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from hashsite.main import create_app


def b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def test_homepage_serves_index(client: TestClient, site_root: Path) -> None:
    r = client.get("/")
    assert r.status_code == 200
    assert r.content == (site_root / "html" / "index.html").read_bytes()
    assert r.headers["content-type"].startswith("text/html")


def test_visits_start_at_zero_and_count_homepage(client: TestClient) -> None:
    """Each GET / adds exactly one visit, starting from 0 on a fresh database."""
    assert client.get("/api/getVisits").json() == {"visits": 0}
    for expected in range(1, 4):
        client.get("/")
        r = client.get("/api/getVisits")
        assert r.status_code == 200
        assert r.json() == {"visits": expected}


def test_visits_do_not_count_other_requests(client: TestClient) -> None:
    client.get("/api/getAd")
    client.get("/nope")
    assert client.get("/api/getVisits").json() == {"visits": 0}


def test_visits_persist_across_restart(settings) -> None:
    with TestClient(create_app(settings)) as c:
        c.get("/")
        c.get("/")
    with TestClient(create_app(settings)) as c:
        assert c.get("/api/getVisits").json() == {"visits": 2}


def test_homepage_db_error_still_serves_page(client: TestClient, site_root: Path, monkeypatch) -> None:
    """A failed increment is reported as 500 but the homepage document is still sent."""
    from hashsite.visits import routes

    async def fail(session):
        raise OperationalError("UPDATE", {}, Exception("disk I/O error"))

    monkeypatch.setattr(routes, "increment_visits", fail)
    r = client.get("/")
    assert r.status_code == 500
    assert r.content == (site_root / "html" / "index.html").read_bytes()


def test_get_visits_db_error_reports_zero(client: TestClient, monkeypatch) -> None:
    from hashsite.visits import routes

    async def fail(session):
        raise OperationalError("SELECT", {}, Exception("no such table"))

    monkeypatch.setattr(routes, "read_visits", fail)
    r = client.get("/api/getVisits")
    assert r.status_code == 200
    assert r.json() == {"visits": 0}


def test_published_image_served_by_hash(client: TestClient, site_root: Path) -> None:
    body = (site_root / "images" / "eye.jpg").read_bytes()
    r = client.get(f"/images/{hashlib.sha256(body).hexdigest()}.jpg")
    assert r.status_code == 200
    assert r.content == body
    assert r.headers["content-type"] == "image/jpeg"


def test_published_font_served_with_font_type(client: TestClient, site_root: Path) -> None:
    body = (site_root / "fonts" / "x.woff2").read_bytes()
    r = client.get(f"/fonts/{hashlib.sha256(body).hexdigest()}.woff2")
    assert r.status_code == 200
    assert r.content == body
    assert r.headers["content-type"] == "font/woff2"


def test_published_page_served(client: TestClient, settings, site_root: Path) -> None:
    url = next(iter(settings.pages))
    r = client.get(url)
    assert r.status_code == 200
    assert r.content == (site_root / "html" / "about.html").read_bytes()


def test_unhashed_path_not_served(client: TestClient) -> None:
    r = client.get("/images/eye.jpg")
    assert r.status_code == 404


def test_get_ad_returns_two_distinct(client: TestClient, site_root: Path) -> None:
    r = client.get("/api/getAd")
    assert r.status_code == 200
    ads = r.json()
    assert len(ads) == 2
    assert len({a["imageUrl"] for a in ads}) == 2
    by_title = {a["title"]: a for a in ads}
    assert set(by_title) == {"Soap", "tonic"}
    soap = (site_root / "ads" / "soap.png").read_bytes()
    assert by_title["Soap"] == {
        "imageUrl": f"/ads/{hashlib.sha256(soap).hexdigest()}.png",
        "title": "Soap",
        "description": "Clean",
        "redirectUrl": "https://soap.example",
    }
    assert by_title["tonic"]["description"] == "No description available."
    assert by_title["tonic"]["redirectUrl"] is None
    # Ad images are themselves published
    assert client.get(by_title["Soap"]["imageUrl"]).content == soap


def test_get_ad_empty_when_no_ads_dir(settings, site_root: Path) -> None:
    for f in (site_root / "ads").iterdir():
        f.unlink()
    (site_root / "ads").rmdir()
    with TestClient(create_app(settings)) as c:
        r = c.get("/api/getAd")
    assert r.status_code == 200
    assert r.json() == []


def test_get_ad_with_malformed_sidecar(settings, site_root: Path) -> None:
    (site_root / "ads" / "ads.json").write_text("not json", encoding="utf-8")
    with TestClient(create_app(settings)) as c:
        titles = {a["title"] for a in c.get("/api/getAd").json()}
    assert titles == {"soap", "tonic"}


def test_get_emails_success(client: TestClient, site_root: Path) -> None:
    seeded = json.loads((site_root / "data" / "mail.json").read_text(encoding="utf-8"))
    r = client.post(
        "/api/getEmails",
        json={"username": b64("user@example.com"), "password": b64("pw")},
    )
    assert r.status_code == 200
    assert r.json() == {"success": True, "emails": seeded["User@Example.com"]["emails"]}


def test_get_emails_wrong_password(client: TestClient) -> None:
    r = client.post(
        "/api/getEmails",
        json={"username": b64("user@example.com"), "password": b64("nope")},
    )
    assert r.status_code == 200
    assert r.json() == {"success": False}


def test_get_emails_unparseable_password(client: TestClient) -> None:
    r = client.post(
        "/api/getEmails",
        json={"username": b64("user@example.com"), "password": "***"},
    )
    assert r.status_code == 200
    assert r.json() == {"success": False}


def test_get_emails_non_string_fields(client: TestClient) -> None:
    r = client.post("/api/getEmails", json={"username": 42, "password": ["pw"]})
    assert r.status_code == 200
    assert r.json() == {"success": False, "error": "Invalid body"}


def test_get_emails_invalid_json_is_400(client: TestClient) -> None:
    r = client.post(
        "/api/getEmails",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"success": False}


def test_get_emails_unexpected_error_is_400(client: TestClient, monkeypatch) -> None:
    from hashsite.mail import routes

    def explode(mailboxes, body):
        raise KeyError("boom")

    monkeypatch.setattr(routes, "lookup_mailbox", explode)
    r = client.post("/api/getEmails", json={"username": b64("user@example.com"), "password": b64("pw")})
    assert r.status_code == 400
    assert r.json() == {"success": False}


@pytest.mark.parametrize("method, path", [
    ("GET", "/does/not/exist"),
    ("GET", "/api/unknown"),
    ("POST", "/api/getAd"),
    ("DELETE", "/"),
])
def test_unmatched_route_returns_not_found_page(client: TestClient, site_root: Path, method: str, path: str) -> None:
    r = client.request(method, path)
    assert r.status_code == 404
    assert r.content == (site_root / "html" / "404.html").read_bytes()


def test_unhandled_error_is_generic_500(settings, monkeypatch) -> None:
    """Unexpected errors get a JSON 500 without internals; HTTP errors keep their own handler."""
    from hashsite.ads import routes

    def explode(items, n):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(routes, "sample", explode)
    with TestClient(create_app(settings), raise_server_exceptions=False) as c:
        r = c.get("/api/getAd")
        assert r.status_code == 500
        assert r.json() == {"detail": "Internal server error"}
        assert "secret" not in r.text
        assert c.get("/nope").status_code == 404


def test_not_found_without_document(settings, site_root: Path) -> None:
    (site_root / "html" / "404.html").unlink()
    with TestClient(create_app(settings)) as c:
        r = c.get("/missing")
    assert r.status_code == 404
    assert r.text == "Not Found"


def test_response_headers(client: TestClient, site_root: Path) -> None:
    body = (site_root / "images" / "eye.jpg").read_bytes()
    r = client.get(f"/images/{hashlib.sha256(body).hexdigest()}.jpg")
    assert r.headers.get("X-Content-Type-Options") == "nosniff"
    assert "etag" not in r.headers
