import pytest


@pytest.mark.parametrize("path", ["/", "/login", "/register", "/dashboard"])
async def test_pages_render(client, path):
    response = await client.get(path)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")


async def test_register_form_redirects_to_login(client):
    form = {"username": "alice", "email": "alice@example.com", "passwordHash": "password123"}

    response = await client.post("/register", data=form)
    assert response.status_code == 303
    assert response.headers["location"] == "/login?registered=true"

    response = await client.post("/register", data=form)
    assert response.status_code == 303
    assert response.headers["location"] == "/register?error=Username%20already%20exists"


async def test_register_page_shows_error(client):
    response = await client.get("/register", params={"error": "Username already exists"})

    assert "Username already exists" in response.text
