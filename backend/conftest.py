"""Pytest configuration: a throwaway site tree and an app per test."""

import json
import os
import tempfile
from pathlib import Path

import pytest

# Set before hashsite.main is imported so its module-level app never touches the working dir
_tmp = tempfile.mkdtemp(prefix="hashsite_test_")
os.environ.setdefault("HASHSITE_SITE_ROOT", _tmp)
os.environ.setdefault("HASHSITE_LOG_LEVEL", "DEBUG")

INDEX_HTML = b"<html><body>home</body></html>"
NOT_FOUND_HTML = b"<html><body>nothing here</body></html>"
ABOUT_HTML = b"<html><body>about</body></html>"
ABOUT_URL = "/bec5d5040b7df76f319de5e40a82ad1335d9ab3d23f4f6ff1ab6597c72819333"

MAILBOX_EMAILS = [
    {"from": "unveil@example.com", "subject": "hello", "body": "first"},
    {"from": "mirror@example.com", "subject": "again", "body": "second"},
]


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Minimal site: homepage, 404, one page, two ads with a sidecar, one image, one font, a mail file."""
    html = tmp_path / "html"
    html.mkdir()
    (html / "index.html").write_bytes(INDEX_HTML)
    (html / "404.html").write_bytes(NOT_FOUND_HTML)
    (html / "about.html").write_bytes(ABOUT_HTML)

    ads = tmp_path / "ads"
    ads.mkdir()
    (ads / "soap.png").write_bytes(b"\x89PNG soap")
    (ads / "tonic.gif").write_bytes(b"GIF89a tonic")
    (ads / "ads.json").write_text(
        json.dumps([
            {"file": "soap.png", "label": "Soap", "description": "Clean", "redirectUrl": "https://soap.example"},
        ]),
        encoding="utf-8",
    )

    images = tmp_path / "images"
    images.mkdir()
    (images / "eye.jpg").write_bytes(b"\xff\xd8 eye")

    fonts = tmp_path / "fonts"
    fonts.mkdir()
    (fonts / "x.woff2").write_bytes(b"wOF2 font")

    data = tmp_path / "data"
    data.mkdir()
    (data / "mail.json").write_text(
        json.dumps({
            "User@Example.com": {"password": "pw", "emails": MAILBOX_EMAILS},
        }),
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def settings(site_root: Path):
    """Settings pointing at the temporary site, with a single page published."""
    from hashsite.config import Settings

    return Settings(
        site_root=site_root,
        db_path=site_root / "test.sqlite",
        pages={ABOUT_URL: "html/about.html"},
    )


@pytest.fixture
def client(settings):
    """TestClient used as context manager so the lifespan runs (publishing, mail, DB)."""
    from fastapi.testclient import TestClient

    from hashsite.main import create_app

    with TestClient(create_app(settings)) as c:
        yield c
