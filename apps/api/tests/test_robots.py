"""Tests for robots.txt."""

from httpx import AsyncClient

from app.api.routes.robots import build_robots_txt


def test_sitemap_uses_base_url_without_trailing_slash() -> None:
    text = build_robots_txt("https://shop.example.com/")
    assert "Sitemap: https://shop.example.com/sitemap.xml" in text


def test_private_sections_disallowed() -> None:
    lines = build_robots_txt("https://shop.example.com").splitlines()
    for path in ("/api/", "/admin/", "/checkout/", "/my-orders/"):
        assert f"Disallow: {path}" in lines
    assert lines[:2] == ["User-agent: *", "Allow: /"]


async def test_robots_endpoint(plain_client: AsyncClient) -> None:
    response = await plain_client.get("/robots.txt")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "User-agent: Googlebot" in response.text
    assert "Sitemap: https://www.nirvaanaa.com/sitemap.xml" in response.text
