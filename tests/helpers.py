async def register_and_login(client, username, password="password123"):
    await client.post("/api/auth/register", json={
        "username": username,
        "email": f"{username}@example.com",
        "passwordHash": password,
    })
    response = await client.post("/api/auth/login", json={"username": username, "passwordHash": password})
    return response.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
